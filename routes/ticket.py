import traceback
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.access_control import Permission, get_event_access, has_permission
from core.eligibility import check_admission
from core.entry_gate import resolve_gate_roster
from core.exceptions import ScanBadRequestError, ScanNotFoundError
from core.helper import get_current_time_in_timezone, parse_uuid
from core.log import logger
from core.responses import (
    BadRequest,
    Forbidden,
    InternalServerError,
    NotFound,
    Ok,
    Unauthorized,
    common_response,
)
from core.scan_state_machine import CurrentGateResult, apply_scan
from core.security import get_current_admin
from core.ticket_lookup import resolve_ticket
from core.ticket_projection import build_ticket_view
from models import get_db_sync
from models.AdminUser import AdminUser
from models.Ticket import TicketStatus
from repository.ticket import get_ticket_by_id, transition_ticket_status
from schemas.common import (
    BadRequestResponse,
    ForbiddenResponse,
    InternalServerErrorResponse,
    NotFoundResponse,
    UnauthorizedResponse,
    ValidationErrorResponse,
)
from schemas.ticket import (
    TicketRejectRequest,
    TicketRejectResponse,
    TicketScanResponse,
    TicketVerifyRequest,
    TicketView,
)

router = APIRouter(prefix="/tickets", tags=["Ticket"])

EVENT_ACCESS_DENIED = "Unauthorized: Event access denied"


def scan_response_body(
    view: TicketView,
    success: bool,
    message: str,
    error: Optional[str] = None,
    current_gate_result: CurrentGateResult = CurrentGateResult.NOT_APPLICABLE,
    lookup_strategy: Optional[str] = None,
) -> dict:
    response = TicketScanResponse(
        **view.model_dump(),
        success=success,
        message=message,
        error=error,
        current_gate_result=str(current_gate_result),
        lookup_strategy=str(lookup_strategy) if lookup_strategy else None,
    )
    return response.model_dump(mode="json", by_alias=True)


@router.post(
    "/verify",
    responses={
        "200": {"model": TicketScanResponse},
        "400": {"model": TicketScanResponse},
        "401": {"model": UnauthorizedResponse},
        "403": {"model": ForbiddenResponse},
        "404": {"model": NotFoundResponse},
        "422": {"model": ValidationErrorResponse},
        "500": {"model": InternalServerErrorResponse},
    },
)
async def verify_ticket(
    payload: TicketVerifyRequest,
    db: Session = Depends(get_db_sync),
    admin: Optional[AdminUser] = Depends(get_current_admin),
):
    """Scan a ticket QR code at the entry

    Resolves the ticket, checks admission prerequisites and records the scan
    (gate scan and/or final use). Every rejection after the ticket is resolved
    still carries the full ticket view.
    """
    if admin is None:
        logger.error("Unauthorized ticket scan attempt")
        return common_response(Unauthorized(message="Unauthorized: Authentication required"))
    if not has_permission(admin, Permission.TICKET_SCAN):
        return common_response(Forbidden())

    logger.info(
        f"Ticket scan received: admin_id={admin.id} event_id={payload.event_id} "
        f"gate_id={payload.gate_id}"
    )
    try:
        if payload.event_id and get_event_access(db, admin, payload.event_id) is None:
            return common_response(Forbidden(message=EVENT_ACCESS_DENIED))

        lookup = resolve_ticket(db, payload.scan_payload)
        ticket = lookup.ticket

        if get_event_access(db, admin, ticket.event_id) is None:
            return common_response(Forbidden(message=EVENT_ACCESS_DENIED))

        view = build_ticket_view(db, ticket.id)
    except ScanBadRequestError as e:
        return common_response(BadRequest(message=e.message, error=e.error))
    except ScanNotFoundError as e:
        return common_response(NotFound(message=e.message, error=e.error))
    except Exception as e:
        traceback.print_exc()
        logger.error(f"Error resolving ticket scan: {e}")
        return common_response(InternalServerError(error=str(e)))

    def reject(error: str, message: str, **extra):
        logger.info(f"Ticket scan rejected: ticket_id={ticket.id} reason={error}")
        return common_response(
            BadRequest(
                message=message,
                error=error,
                data=scan_response_body(
                    view,
                    success=False,
                    message=message,
                    error=error,
                    lookup_strategy=lookup.strategy,
                    **extra,
                ),
            )
        )

    try:
        if payload.event_id and ticket.event_id != parse_uuid(payload.event_id):
            return reject(
                "Wrong event selected", "Ticket does not belong to selected event."
            )

        rejection = check_admission(ticket, ticket.order, ticket.event)
        if rejection is not None:
            return reject(rejection.error, rejection.message)

        roster = resolve_gate_roster(db, ticket.event)
        outcome = apply_scan(
            db=db,
            ticket=ticket,
            roster=roster,
            gate_id=payload.gate_id,
            admin_id=admin.id,
        )

        view = build_ticket_view(db, ticket.id)
        if outcome.rejection is not None:
            return reject(
                outcome.rejection.error,
                outcome.rejection.message,
                current_gate_result=outcome.current_gate_result,
            )
    except ScanBadRequestError as e:
        return reject(e.error, e.message)
    except Exception as e:
        traceback.print_exc()
        logger.error(f"Error applying ticket scan: {e}")
        return common_response(InternalServerError(error=str(e)))

    return common_response(
        Ok(
            data=scan_response_body(
                view,
                success=True,
                message=outcome.message,
                current_gate_result=outcome.current_gate_result,
                lookup_strategy=lookup.strategy,
            )
        )
    )


@router.post(
    "/reject",
    responses={
        "200": {"model": TicketRejectResponse},
        "400": {"model": BadRequestResponse},
        "401": {"model": UnauthorizedResponse},
        "403": {"model": ForbiddenResponse},
        "404": {"model": NotFoundResponse},
        "422": {"model": ValidationErrorResponse},
        "500": {"model": InternalServerErrorResponse},
    },
)
async def reject_ticket(
    payload: TicketRejectRequest,
    db: Session = Depends(get_db_sync),
    admin: Optional[AdminUser] = Depends(get_current_admin),
):
    if admin is None:
        return common_response(Unauthorized(message="Unauthorized: Authentication required"))
    if not has_permission(admin, Permission.TICKET_REJECT):
        return common_response(Forbidden())

    if not payload.ticket_id:
        return common_response(
            BadRequest(message="Ticket ID is required", error="Invalid ticket ID")
        )

    logger.info(f"Ticket reject received: admin_id={admin.id} ticket_id={payload.ticket_id}")
    try:
        ticket_uuid = parse_uuid(payload.ticket_id)
        ticket = get_ticket_by_id(db, ticket_uuid) if ticket_uuid else None
        if ticket is None:
            return common_response(
                NotFound(message="No ticket found with this ID", error="Ticket not found")
            )

        if get_event_access(db, admin, ticket.event_id) is None:
            return common_response(Forbidden(message=EVENT_ACCESS_DENIED))

        if ticket.status == TicketStatus.CANCELLED:
            return common_response(
                BadRequest(
                    message="This ticket has already been cancelled",
                    error="Ticket already cancelled",
                )
            )
        if ticket.status == TicketStatus.USED:
            return common_response(
                BadRequest(
                    message="This ticket has already been scanned and cannot be rejected",
                    error="Ticket already used",
                )
            )

        cancelled = transition_ticket_status(
            db=db,
            ticket_id=ticket.id,
            from_status=TicketStatus.ACTIVE,
            to_status=TicketStatus.CANCELLED,
            now=get_current_time_in_timezone(),
        )
        if not cancelled:
            return common_response(
                BadRequest(
                    message="This ticket was updated by another operator. Please try again.",
                    error="Ticket status changed",
                )
            )

        view = build_ticket_view(db, ticket.id)
    except Exception as e:
        traceback.print_exc()
        logger.error(f"Error in reject_ticket: {e}")
        return common_response(InternalServerError(error=str(e)))

    logger.info(f"Ticket rejected: ticket_id={ticket.id} admin_id={admin.id}")
    response = TicketRejectResponse(
        **view.model_dump(), success=True, message="Ticket rejected successfully"
    )
    return common_response(Ok(data=response.model_dump(mode="json", by_alias=True)))


@router.get(
    "/{ticket_id}",
    responses={
        "200": {"model": TicketView},
        "401": {"model": UnauthorizedResponse},
        "403": {"model": ForbiddenResponse},
        "404": {"model": NotFoundResponse},
        "422": {"model": ValidationErrorResponse},
        "500": {"model": InternalServerErrorResponse},
    },
)
async def get_ticket(
    ticket_id: str,
    db: Session = Depends(get_db_sync),
    admin: Optional[AdminUser] = Depends(get_current_admin),
):
    if admin is None:
        return common_response(Unauthorized(message="Unauthorized: Authentication required"))

    try:
        ticket_uuid = parse_uuid(ticket_id)
        ticket = get_ticket_by_id(db, ticket_uuid) if ticket_uuid else None
        if ticket is None:
            return common_response(
                NotFound(message="No ticket found with this ID", error="Ticket not found")
            )

        if get_event_access(db, admin, ticket.event_id) is None:
            return common_response(Forbidden(message=EVENT_ACCESS_DENIED))

        view = build_ticket_view(db, ticket.id)
    except ScanNotFoundError as e:
        return common_response(NotFound(message=e.message, error=e.error))
    except Exception as e:
        traceback.print_exc()
        logger.error(f"Error in get_ticket: {e}")
        return common_response(InternalServerError(error=str(e)))

    return common_response(Ok(data=view.model_dump(mode="json", by_alias=True)))
