import traceback
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.access_control import Permission, has_permission
from core.helper import parse_uuid
from core.log import logger
from core.responses import (
    BadRequest,
    Created,
    Forbidden,
    InternalServerError,
    NotFound,
    Ok,
    Unauthorized,
    common_response,
)
from core.security import generate_hash_password, get_current_admin
from models import get_db_sync
from models.AdminUser import AdminRole, AdminUser
from repository import admin_user as adminUserRepo
from schemas.admin_user import (
    AdminUserCreateRequest,
    AdminUserItem,
    AdminUserListResponse,
    AdminUserResponse,
    AdminUserUpdateRequest,
    DeleteSuccessResponse,
    VendorItem,
    VendorListResponse,
)
from schemas.common import (
    BadRequestResponse,
    ForbiddenResponse,
    InternalServerErrorResponse,
    NotFoundResponse,
    UnauthorizedResponse,
    ValidationErrorResponse,
)

router = APIRouter(prefix="/admin", tags=["Admin User"])


def admin_to_item(admin: AdminUser) -> AdminUserItem:
    return AdminUserItem(
        id=str(admin.id),
        email=admin.email,
        role=str(admin.role),
        vendor_id=str(admin.vendor_id) if admin.vendor_id else None,
        created_at=admin.created_at,
    )


def check_vendor_account(db: Session, vendor_id) -> Optional[str]:
    """Error message when vendor_id does not point at a vendor account"""
    if vendor_id is None:
        return None
    vendor = adminUserRepo.get_admin_by_id(db, vendor_id)
    if vendor is None or vendor.role != AdminRole.VENDOR:
        return "Vendor not found"
    return None


@router.get(
    "/users",
    responses={
        "200": {"model": AdminUserListResponse},
        "401": {"model": UnauthorizedResponse},
        "403": {"model": ForbiddenResponse},
        "500": {"model": InternalServerErrorResponse},
    },
)
def list_admin_users(
    db: Session = Depends(get_db_sync),
    admin: Optional[AdminUser] = Depends(get_current_admin),
):
    if admin is None:
        return common_response(Unauthorized(message="Unauthorized"))
    if not has_permission(admin, Permission.USER_MANAGE):
        return common_response(Forbidden())

    try:
        users = adminUserRepo.get_admin_users(db)
        response = AdminUserListResponse(users=[admin_to_item(user) for user in users])
    except Exception as e:
        traceback.print_exc()
        logger.error(f"Error in list_admin_users: {e}")
        return common_response(InternalServerError(error=str(e)))
    return common_response(Ok(data=response.model_dump(mode="json")))


@router.post(
    "/users",
    responses={
        "201": {"model": AdminUserResponse},
        "400": {"model": BadRequestResponse},
        "401": {"model": UnauthorizedResponse},
        "403": {"model": ForbiddenResponse},
        "422": {"model": ValidationErrorResponse},
        "500": {"model": InternalServerErrorResponse},
    },
)
def create_admin_user(
    request: AdminUserCreateRequest,
    db: Session = Depends(get_db_sync),
    admin: Optional[AdminUser] = Depends(get_current_admin),
):
    """Create an admin account.

    vendor_id is kept for vendor moderators only and must name a vendor
    account.
    """
    if admin is None:
        return common_response(Unauthorized(message="Unauthorized"))
    if not has_permission(admin, Permission.USER_MANAGE):
        return common_response(Forbidden())

    try:
        if adminUserRepo.get_admin_by_email(db, request.email) is not None:
            return common_response(BadRequest(message="Email already exists"))

        vendor_id = adminUserRepo.resolve_vendor_id(request.role, request.vendor_id)
        vendor_error = check_vendor_account(db, vendor_id)
        if vendor_error:
            return common_response(BadRequest(message=vendor_error))

        user = adminUserRepo.create_admin_user(
            db=db,
            email=request.email,
            password=generate_hash_password(request.password),
            role=request.role,
            vendor_id=vendor_id,
        )
        logger.info(
            f"Admin user created: admin_user_id={user.id} role={user.role} by={admin.id}"
        )
    except Exception as e:
        traceback.print_exc()
        logger.error(f"Error in create_admin_user: {e}")
        return common_response(InternalServerError(error=str(e)))
    return common_response(
        Created(data=AdminUserResponse(user=admin_to_item(user)).model_dump(mode="json"))
    )


@router.patch(
    "/users/{admin_user_id}",
    responses={
        "200": {"model": AdminUserResponse},
        "400": {"model": BadRequestResponse},
        "401": {"model": UnauthorizedResponse},
        "403": {"model": ForbiddenResponse},
        "404": {"model": NotFoundResponse},
        "422": {"model": ValidationErrorResponse},
        "500": {"model": InternalServerErrorResponse},
    },
)
def update_admin_user(
    admin_user_id: str,
    request: AdminUserUpdateRequest,
    db: Session = Depends(get_db_sync),
    admin: Optional[AdminUser] = Depends(get_current_admin),
):
    if admin is None:
        return common_response(Unauthorized(message="Unauthorized"))
    if not has_permission(admin, Permission.USER_MANAGE):
        return common_response(Forbidden())
    if not request.has_updates():
        return common_response(BadRequest(message="No updates provided"))

    try:
        user_uuid = parse_uuid(admin_user_id)
        user = adminUserRepo.get_admin_by_id(db, user_uuid) if user_uuid else None
        if user is None:
            return common_response(NotFound(message="User not found"))

        if request.email is not None:
            existing = adminUserRepo.get_admin_by_email(db, request.email)
            if existing is not None and existing.id != user.id:
                return common_response(BadRequest(message="Email already exists"))

        role = request.role or AdminRole(user.role)
        vendor_error = check_vendor_account(
            db, adminUserRepo.resolve_vendor_id(role, request.vendor_id)
        )
        if vendor_error:
            return common_response(BadRequest(message=vendor_error))

        user = adminUserRepo.update_admin_user(
            db=db,
            admin=user,
            email=request.email,
            password=(
                generate_hash_password(request.password) if request.password else None
            ),
            role=request.role,
            vendor_id=request.vendor_id,
        )
        logger.info(f"Admin user updated: admin_user_id={user.id} by={admin.id}")
    except Exception as e:
        traceback.print_exc()
        logger.error(f"Error in update_admin_user: {e}")
        return common_response(InternalServerError(error=str(e)))
    return common_response(
        Ok(data=AdminUserResponse(user=admin_to_item(user)).model_dump(mode="json"))
    )


@router.delete(
    "/users/{admin_user_id}",
    responses={
        "200": {"model": DeleteSuccessResponse},
        "400": {"model": BadRequestResponse},
        "401": {"model": UnauthorizedResponse},
        "403": {"model": ForbiddenResponse},
        "404": {"model": NotFoundResponse},
        "500": {"model": InternalServerErrorResponse},
    },
)
def delete_admin_user(
    admin_user_id: str,
    db: Session = Depends(get_db_sync),
    admin: Optional[AdminUser] = Depends(get_current_admin),
):
    if admin is None:
        return common_response(Unauthorized(message="Unauthorized"))
    if not has_permission(admin, Permission.USER_MANAGE):
        return common_response(Forbidden())

    user_uuid = parse_uuid(admin_user_id)
    if user_uuid is not None and str(user_uuid) == str(admin.id):
        return common_response(BadRequest(message="Cannot delete your own account"))

    try:
        user = adminUserRepo.get_admin_by_id(db, user_uuid) if user_uuid else None
        if user is None:
            return common_response(NotFound(message="User not found"))

        adminUserRepo.delete_admin_user(db=db, admin=user)
        logger.info(f"Admin user deleted: admin_user_id={user_uuid} by={admin.id}")
    except Exception as e:
        traceback.print_exc()
        logger.error(f"Error in delete_admin_user: {e}")
        return common_response(InternalServerError(error=str(e)))
    return common_response(Ok(data=DeleteSuccessResponse().model_dump()))


@router.get(
    "/vendors",
    responses={
        "200": {"model": VendorListResponse},
        "401": {"model": UnauthorizedResponse},
        "403": {"model": ForbiddenResponse},
        "500": {"model": InternalServerErrorResponse},
    },
)
def list_vendors(
    db: Session = Depends(get_db_sync),
    admin: Optional[AdminUser] = Depends(get_current_admin),
):
    """Vendor accounts a vendor moderator can be delegated under"""
    if admin is None:
        return common_response(Unauthorized(message="Unauthorized"))
    if not has_permission(admin, Permission.USER_MANAGE):
        return common_response(Forbidden())

    try:
        vendors = adminUserRepo.get_vendors(db)
        response = VendorListResponse(
            vendors=[VendorItem(id=str(vendor.id), email=vendor.email) for vendor in vendors]
        )
    except Exception as e:
        traceback.print_exc()
        logger.error(f"Error in list_vendors: {e}")
        return common_response(InternalServerError(error=str(e)))
    return common_response(Ok(data=response.model_dump(mode="json")))
