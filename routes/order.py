import traceback
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.access_control import Permission, get_event_access, has_permission
from core.eligibility import evaluate_email_domain, get_email_domain
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
from core.security import get_current_admin
from models import get_db_sync
from models.AdminUser import AdminUser
from models.Order import Order, SocialVerificationStatus
from repository import order as orderRepo
from repository.event import get_event_by_id
from schemas.common import (
    BadRequestResponse,
    ForbiddenResponse,
    InternalServerErrorResponse,
    NotFoundResponse,
    UnauthorizedResponse,
    ValidationErrorResponse,
)
from schemas.order import (
    EmailDomainUpdateRequest,
    OrderVerificationResponse,
    OrderVerificationResponseSchema,
    RefundStatusResponse,
    RefundUpdateRequest,
    RefundUpdateResponse,
    SocialVerificationUpdateRequest,
)

router = APIRouter(prefix="/orders", tags=["Order"])

EVENT_ACCESS_DENIED = "Unauthorized: Event access denied"


def order_to_verification_response(order: Order) -> dict:
    response = OrderVerificationResponseSchema(
        order=OrderVerificationResponse(
            id=str(order.id),
            social_handle=order.social_handle,
            social_verification_status=order.social_verification_status,
            social_verified_at=order.social_verified_at,
            social_verified_by=(
                str(order.social_verified_by) if order.social_verified_by else None
            ),
            email=order.email,
            email_domain=order.email_domain,
            email_domain_status=order.email_domain_status,
        )
    )
    return response.model_dump(mode="json")


def order_queue_fields(order: Order) -> dict:
    """Fields every order queue row carries"""
    return dict(
        id=str(order.id),
        event_id=str(order.event_id),
        event_title=order.event.title if order.event else "Unknown Event",
        email=order.email,
        whatsapp_number=order.whatsapp_number,
        total_amount_cents=order.total_amount_cents,
        currency=order.currency or "INR",
        social_handle=order.social_handle,
        created_at=order.created_at,
    )


def get_accessible_order(db: Session, admin: AdminUser, order_id: str):
    """(order, error response), the order is only returned inside the admin's scope"""
    order_uuid = parse_uuid(order_id)
    order = orderRepo.get_order_by_id(db, order_uuid) if order_uuid else None
    if order is None:
        return None, common_response(NotFound(message="Order not found"))

    if get_event_access(db, admin, order.event_id) is None:
        return None, common_response(Forbidden(message=EVENT_ACCESS_DENIED))
    return order, None


@router.patch(
    "/{order_id}/social-verification",
    responses={
        "200": {"model": OrderVerificationResponseSchema},
        "400": {"model": BadRequestResponse},
        "401": {"model": UnauthorizedResponse},
        "403": {"model": ForbiddenResponse},
        "404": {"model": NotFoundResponse},
        "422": {"model": ValidationErrorResponse},
        "500": {"model": InternalServerErrorResponse},
    },
)
def update_social_verification(
    order_id: str,
    request: SocialVerificationUpdateRequest,
    db: Session = Depends(get_db_sync),
    admin: Optional[AdminUser] = Depends(get_current_admin),
):
    """Record the review of an order's social handle"""
    if admin is None:
        return common_response(Unauthorized(message="Unauthorized"))
    if not has_permission(admin, Permission.ORDER_VERIFY):
        return common_response(Forbidden())

    try:
        order, error_response = get_accessible_order(db, admin, order_id)
        if error_response is not None:
            return error_response

        if request.status == SocialVerificationStatus.APPROVED and not order.social_handle:
            return common_response(
                BadRequest(message="Cannot approve without a social handle")
            )

        order = orderRepo.update_social_verification(
            db=db,
            order=order,
            status=request.status,
            verified_by=admin.id,
            now=get_current_time_in_timezone(),
        )
        logger.info(
            f"Social verification updated: order_id={order.id} status={request.status} admin_id={admin.id}"
        )
    except Exception as e:
        traceback.print_exc()
        logger.error(f"Error in update_social_verification: {e}")
        return common_response(InternalServerError(error=str(e)))
    return common_response(Ok(data=order_to_verification_response(order)))


@router.patch(
    "/{order_id}/email-domain",
    responses={
        "200": {"model": OrderVerificationResponseSchema},
        "401": {"model": UnauthorizedResponse},
        "403": {"model": ForbiddenResponse},
        "404": {"model": NotFoundResponse},
        "422": {"model": ValidationErrorResponse},
        "500": {"model": InternalServerErrorResponse},
    },
)
def update_email_domain(
    order_id: str,
    request: EmailDomainUpdateRequest,
    db: Session = Depends(get_db_sync),
    admin: Optional[AdminUser] = Depends(get_current_admin),
):
    """Approve or reject an order's email domain by hand"""
    if admin is None:
        return common_response(Unauthorized(message="Unauthorized"))
    if not has_permission(admin, Permission.ORDER_VERIFY):
        return common_response(Forbidden())

    try:
        order, error_response = get_accessible_order(db, admin, order_id)
        if error_response is not None:
            return error_response

        order = orderRepo.update_email_domain_status(
            db=db,
            order=order,
            status=request.status,
            email_domain=get_email_domain(order.email),
        )
        logger.info(
            f"Email domain status updated: order_id={order.id} status={request.status} admin_id={admin.id}"
        )
    except Exception as e:
        traceback.print_exc()
        logger.error(f"Error in update_email_domain: {e}")
        return common_response(InternalServerError(error=str(e)))
    return common_response(Ok(data=order_to_verification_response(order)))


@router.post(
    "/{order_id}/email-domain/evaluate",
    responses={
        "200": {"model": OrderVerificationResponseSchema},
        "401": {"model": UnauthorizedResponse},
        "403": {"model": ForbiddenResponse},
        "404": {"model": NotFoundResponse},
        "422": {"model": ValidationErrorResponse},
        "500": {"model": InternalServerErrorResponse},
    },
)
def evaluate_order_email_domain(
    order_id: str,
    db: Session = Depends(get_db_sync),
    admin: Optional[AdminUser] = Depends(get_current_admin),
):
    """Derive the email domain status from the event's allowed domains"""
    if admin is None:
        return common_response(Unauthorized(message="Unauthorized"))
    if not has_permission(admin, Permission.ORDER_VERIFY):
        return common_response(Forbidden())

    try:
        order, error_response = get_accessible_order(db, admin, order_id)
        if error_response is not None:
            return error_response

        event = get_event_by_id(db, order.event_id)
        status = evaluate_email_domain(order.email, event.allowed_email_domains)
        order = orderRepo.update_email_domain_status(
            db=db,
            order=order,
            status=status,
            email_domain=get_email_domain(order.email),
        )
        logger.info(f"Email domain evaluated: order_id={order.id} status={status}")
    except Exception as e:
        traceback.print_exc()
        logger.error(f"Error in evaluate_order_email_domain: {e}")
        return common_response(InternalServerError(error=str(e)))
    return common_response(Ok(data=order_to_verification_response(order)))


@router.patch(
    "/{order_id}/refund",
    responses={
        "200": {"model": RefundUpdateResponse},
        "400": {"model": BadRequestResponse},
        "401": {"model": UnauthorizedResponse},
        "403": {"model": ForbiddenResponse},
        "404": {"model": NotFoundResponse},
        "422": {"model": ValidationErrorResponse},
        "500": {"model": InternalServerErrorResponse},
    },
)
def update_order_refund(
    order_id: str,
    request: RefundUpdateRequest,
    db: Session = Depends(get_db_sync),
    admin: Optional[AdminUser] = Depends(get_current_admin),
):
    """Mark a requested refund as processed, or reopen it"""
    if admin is None:
        return common_response(Unauthorized(message="Unauthorized"))
    if not has_permission(admin, Permission.REFUND_PROCESS):
        return common_response(Forbidden())

    try:
        order, error_response = get_accessible_order(db, admin, order_id)
        if error_response is not None:
            return error_response

        if not order.refund_requested:
            return common_response(
                BadRequest(message="No refund was requested for this order")
            )

        order = orderRepo.update_refund_status(
            db=db,
            order=order,
            processed=request.processed,
            processed_by=admin.id,
            now=get_current_time_in_timezone(),
            notes=request.notes,
        )
        logger.info(
            f"Refund updated: order_id={order.id} processed={request.processed} admin_id={admin.id}"
        )
        response = RefundUpdateResponse(
            order=RefundStatusResponse(
                id=str(order.id),
                refund_processed=bool(order.refund_processed),
                refund_processed_at=order.refund_processed_at,
                refund_notes=order.refund_notes,
            ),
            message=(
                "Refund marked as processed"
                if request.processed
                else "Refund status updated"
            ),
        )
    except Exception as e:
        traceback.print_exc()
        logger.error(f"Error in update_order_refund: {e}")
        return common_response(InternalServerError(error=str(e)))
    return common_response(Ok(data=response.model_dump(mode="json")))
