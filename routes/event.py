import traceback
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.access_control import (
    Permission,
    get_admin_scope,
    get_event_access,
    has_permission,
)
from core.log import logger
from core.responses import (
    Created,
    Forbidden,
    InternalServerError,
    Ok,
    Unauthorized,
    common_response,
)
from core.security import get_current_admin
from models import get_db_sync
from models.AdminUser import AdminUser
from models.EntryGate import EntryGate
from models.Event import Event
from repository import entry_gate as entryGateRepo
from repository.event import get_event_by_id, get_event_options, update_entry_settings
from repository.ticket import get_tickets_by_event_id
from schemas.common import (
    ForbiddenResponse,
    InternalServerErrorResponse,
    UnauthorizedResponse,
)
from schemas.event import (
    AttendeeItem,
    AttendeeListResponse,
    EntryGateCreateRequest,
    EntryGateListResponse,
    EntryGateResponse,
    EntrySettingsResponse,
    EntrySettingsUpdateRequest,
    EventOptionItem,
    EventOptionListResponse,
    EventOptionsQuery,
)

router = APIRouter(prefix="/events", tags=["Event"])

EVENT_ACCESS_DENIED = "Unauthorized: Event access denied"


def gate_to_response(gate: EntryGate) -> EntryGateResponse:
    return EntryGateResponse(
        id=str(gate.id),
        event_id=str(gate.event_id),
        name=gate.name,
        code=gate.code,
        sort_order=gate.sort_order,
        is_active=bool(gate.is_active),
    )


def event_to_entry_settings(event: Event) -> EntrySettingsResponse:
    return EntrySettingsResponse(
        id=str(event.id),
        enable_entry_gate_flow=bool(event.enable_entry_gate_flow),
        require_social_verification=bool(event.require_social_verification),
        require_email_domain_verification=bool(
            event.require_email_domain_verification
        ),
        allowed_email_domains=event.allowed_email_domains or [],
    )


@router.get(
    "/options",
    responses={
        "200": {"model": EventOptionListResponse},
        "401": {"model": UnauthorizedResponse},
        "500": {"model": InternalServerErrorResponse},
    },
)
def list_event_options(
    query: EventOptionsQuery = Depends(),
    db: Session = Depends(get_db_sync),
    admin: Optional[AdminUser] = Depends(get_current_admin),
):
    """Events the admin can pick before scanning, newest first"""
    if admin is None:
        return common_response(Unauthorized(message="Unauthorized"))

    scope = get_admin_scope(admin)
    if scope.is_empty:
        return common_response(Ok(data=EventOptionListResponse(events=[]).model_dump()))

    try:
        events = get_event_options(
            db=db,
            vendor_id=scope.vendor_id,
            search=query.q.strip() if query.q else None,
            limit=query.limit,
        )
        response = EventOptionListResponse(
            events=[
                EventOptionItem(
                    id=str(event.id),
                    title=event.title,
                    start_at=event.start_at,
                    city=event.city,
                )
                for event in events
            ]
        )
    except Exception as e:
        traceback.print_exc()
        logger.error(f"Error in list_event_options: {e}")
        return common_response(InternalServerError(error=str(e)))
    return common_response(Ok(data=response.model_dump(mode="json")))


@router.get(
    "/{event_id}/gates",
    responses={
        "200": {"model": EntryGateListResponse},
        "401": {"model": UnauthorizedResponse},
        "403": {"model": ForbiddenResponse},
        "500": {"model": InternalServerErrorResponse},
    },
)
def list_event_gates(
    event_id: str,
    db: Session = Depends(get_db_sync),
    admin: Optional[AdminUser] = Depends(get_current_admin),
):
    """All gates of an event in scan order, inactive ones included"""
    if admin is None:
        return common_response(Unauthorized(message="Unauthorized"))
    if not has_permission(admin, Permission.GATE_VIEW):
        return common_response(Forbidden())

    try:
        access = get_event_access(db, admin, event_id)
        if access is None:
            return common_response(Forbidden(message=EVENT_ACCESS_DENIED))

        event = get_event_by_id(db, access.id)
        gates = entryGateRepo.get_event_gates(db, access.id)
        response = EntryGateListResponse(
            event_id=access.id,
            enable_entry_gate_flow=bool(event.enable_entry_gate_flow),
            results=[gate_to_response(gate) for gate in gates],
        )
    except Exception as e:
        traceback.print_exc()
        logger.error(f"Error in list_event_gates: {e}")
        return common_response(InternalServerError(error=str(e)))
    return common_response(Ok(data=response.model_dump(mode="json")))


@router.post(
    "/{event_id}/gates",
    responses={
        "201": {"model": EntryGateResponse},
        "401": {"model": UnauthorizedResponse},
        "403": {"model": ForbiddenResponse},
        "500": {"model": InternalServerErrorResponse},
    },
)
def create_event_gate(
    event_id: str,
    request: EntryGateCreateRequest,
    db: Session = Depends(get_db_sync),
    admin: Optional[AdminUser] = Depends(get_current_admin),
):
    if admin is None:
        return common_response(Unauthorized(message="Unauthorized"))
    if not has_permission(admin, Permission.EVENT_EDIT):
        return common_response(Forbidden())

    try:
        access = get_event_access(db, admin, event_id)
        if access is None:
            return common_response(Forbidden(message=EVENT_ACCESS_DENIED))

        gate = entryGateRepo.insert_gate(
            db=db,
            event_id=access.id,
            name=request.name,
            code=request.code,
            sort_order=request.sort_order,
            is_active=request.is_active,
        )
        logger.info(f"Entry gate created: gate_id={gate.id} event_id={access.id}")
    except Exception as e:
        traceback.print_exc()
        logger.error(f"Error in create_event_gate: {e}")
        return common_response(InternalServerError(error=str(e)))
    return common_response(Created(data=gate_to_response(gate).model_dump(mode="json")))


@router.patch(
    "/{event_id}/entry-settings",
    responses={
        "200": {"model": EntrySettingsResponse},
        "401": {"model": UnauthorizedResponse},
        "403": {"model": ForbiddenResponse},
        "500": {"model": InternalServerErrorResponse},
    },
)
def update_event_entry_settings(
    event_id: str,
    request: EntrySettingsUpdateRequest,
    db: Session = Depends(get_db_sync),
    admin: Optional[AdminUser] = Depends(get_current_admin),
):
    if admin is None:
        return common_response(Unauthorized(message="Unauthorized"))
    if not has_permission(admin, Permission.EVENT_EDIT):
        return common_response(Forbidden())

    try:
        access = get_event_access(db, admin, event_id)
        if access is None:
            return common_response(Forbidden(message=EVENT_ACCESS_DENIED))

        event = update_entry_settings(
            db=db,
            event=get_event_by_id(db, access.id),
            enable_entry_gate_flow=request.enable_entry_gate_flow,
            require_social_verification=request.require_social_verification,
            require_email_domain_verification=request.require_email_domain_verification,
            allowed_email_domains=request.allowed_email_domains,
        )
    except Exception as e:
        traceback.print_exc()
        logger.error(f"Error in update_event_entry_settings: {e}")
        return common_response(InternalServerError(error=str(e)))
    return common_response(Ok(data=event_to_entry_settings(event).model_dump(mode="json")))


@router.get(
    "/{event_id}/attendees",
    responses={
        "200": {"model": AttendeeListResponse},
        "401": {"model": UnauthorizedResponse},
        "403": {"model": ForbiddenResponse},
        "500": {"model": InternalServerErrorResponse},
    },
)
def list_event_attendees(
    event_id: str,
    db: Session = Depends(get_db_sync),
    admin: Optional[AdminUser] = Depends(get_current_admin),
):
    if admin is None:
        return common_response(Unauthorized(message="Unauthorized"))
    if not has_permission(admin, Permission.ATTENDEE_VIEW):
        return common_response(Forbidden())

    try:
        access = get_event_access(db, admin, event_id)
        if access is None:
            return common_response(Forbidden(message=EVENT_ACCESS_DENIED))

        attendees = []
        for ticket in get_tickets_by_event_id(db, access.id):
            order = ticket.order
            attendees.append(
                AttendeeItem(
                    ticket_id=str(ticket.id),
                    attendee_name=ticket.attendee_name,
                    ticket_status=ticket.status,
                    scanned_at=ticket.scanned_at,
                    order_id=str(ticket.order_id),
                    order_status=order.status if order else None,
                    user_id=str(order.user_id) if order and order.user_id else None,
                    email=order.email if order else None,
                    whatsapp_number=order.whatsapp_number if order else None,
                    cab_requested=bool(order.requested_cab) if order else False,
                    social_handle=order.social_handle if order else None,
                    social_verification_status=(
                        order.social_verification_status if order else "not_required"
                    ),
                    email_domain=order.email_domain if order else None,
                    email_domain_status=(
                        order.email_domain_status if order else "not_required"
                    ),
                    created_at=order.created_at if order else None,
                )
            )

        response = AttendeeListResponse(
            attendees=attendees,
            event=event_to_entry_settings(get_event_by_id(db, access.id)),
        )
    except Exception as e:
        traceback.print_exc()
        logger.error(f"Error in list_event_attendees: {e}")
        return common_response(InternalServerError(error=str(e)))
    return common_response(Ok(data=response.model_dump(mode="json")))
