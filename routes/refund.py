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
from repository.order import get_refund_requested_orders
from routes.order import order_queue_fields
from schemas.common import (
    ForbiddenResponse,
    InternalServerErrorResponse,
    UnauthorizedResponse,
)
from schemas.order import RefundItem, RefundListResponse, RefundQuery

router = APIRouter(prefix="/refunds", tags=["Refund"])


@router.get(
    "",
    responses={
        "200": {"model": RefundListResponse},
        "401": {"model": UnauthorizedResponse},
        "403": {"model": ForbiddenResponse},
        "500": {"model": InternalServerErrorResponse},
    },
)
def list_refunds(
    query: RefundQuery = Depends(),
    db: Session = Depends(get_db_sync),
    admin: Optional[AdminUser] = Depends(get_current_admin),
):
    """Orders with a refund request, latest request first"""
    if admin is None:
        return common_response(Unauthorized(message="Unauthorized"))
    if not has_permission(admin, Permission.REFUND_PROCESS):
        return common_response(Forbidden())

    scope = get_admin_scope(admin)
    if scope.is_empty:
        return common_response(Ok(data=RefundListResponse(orders=[]).model_dump()))

    try:
        orders = get_refund_requested_orders(
            db=db, vendor_id=scope.vendor_id, processed=query.processed
        )
        response = RefundListResponse(
            orders=[
                RefundItem(
                    **order_queue_fields(order),
                    refund_reason=order.refund_reason,
                    refund_requested_at=order.refund_requested_at,
                    refund_processed=bool(order.refund_processed),
                    refund_processed_at=order.refund_processed_at,
                    refund_notes=order.refund_notes,
                )
                for order in orders
            ]
        )
    except Exception as e:
        traceback.print_exc()
        logger.error(f"Error in list_refunds: {e}")
        return common_response(InternalServerError(error=str(e)))
    return common_response(Ok(data=response.model_dump(mode="json")))
