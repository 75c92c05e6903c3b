import traceback
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.access_control import Permission, get_admin_scope, has_permission
from core.log import logger
from core.responses import (
    Forbidden,
    InternalServerError,
    Ok,
    Unauthorized,
    common_response,
)
from core.security import get_current_admin
from models import get_db_sync
from models.AdminUser import AdminUser
from repository.order import get_social_review_orders
from routes.order import order_queue_fields
from schemas.common import (
    ForbiddenResponse,
    InternalServerErrorResponse,
    UnauthorizedResponse,
)
from schemas.order import (
    SocialReviewItem,
    SocialReviewListResponse,
    SocialReviewQuery,
)

router = APIRouter(prefix="/social-reviews", tags=["Order"])


@router.get(
    "",
    responses={
        "200": {"model": SocialReviewListResponse},
        "401": {"model": UnauthorizedResponse},
        "403": {"model": ForbiddenResponse},
        "500": {"model": InternalServerErrorResponse},
    },
)
def list_social_reviews(
    query: SocialReviewQuery = Depends(),
    db: Session = Depends(get_db_sync),
    admin: Optional[AdminUser] = Depends(get_current_admin),
):
    """Paid orders with a social handle in the admin's events, newest first"""
    if admin is None:
        return common_response(Unauthorized(message="Unauthorized"))
    if not has_permission(admin, Permission.ORDER_VERIFY):
        return common_response(Forbidden())

    scope = get_admin_scope(admin)
    if scope.is_empty:
        return common_response(Ok(data=SocialReviewListResponse(orders=[]).model_dump()))

    try:
        orders = get_social_review_orders(
            db=db, vendor_id=scope.vendor_id, status=query.status
        )
        response = SocialReviewListResponse(
            orders=[
                SocialReviewItem(
                    **order_queue_fields(order),
                    social_verification_status=order.social_verification_status,
                    attendee_names=order.attendee_names or [],
                )
                for order in orders
            ]
        )
    except Exception as e:
        traceback.print_exc()
        logger.error(f"Error in list_social_reviews: {e}")
        return common_response(InternalServerError(error=str(e)))
    return common_response(Ok(data=response.model_dump(mode="json")))
