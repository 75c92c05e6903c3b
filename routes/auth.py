from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from core.log import logger
from core.responses import (
    BadRequest,
    Ok,
    Unauthorized,
    common_response,
)
from core.security import (
    generate_token_from_admin,
    get_admin_from_token,
    get_request_token,
    invalidate_token,
    oauth2_scheme,
    validated_password,
)
from models import get_db_sync
from models.AdminUser import AdminUser
from repository import admin_user as adminUserRepo
from schemas.auth import (
    AdminInfo,
    LoginRequest,
    LoginSuccessResponse,
    LogoutSuccessResponse,
    MeResponse,
)
from schemas.common import (
    BadRequestResponse,
    InternalServerErrorResponse,
    UnauthorizedResponse,
)
from settings import ACCESS_TOKEN_EXPIRE_MINUTES, ADMIN_COOKIE_NAME, ADMIN_COOKIE_SECURE

router = APIRouter(prefix="/auth", tags=["Auth"])


def authenticate(db: Session, email: str, password: str) -> Optional[AdminUser]:
    admin = adminUserRepo.get_admin_by_email(db=db, email=email)
    if admin is None:
        return None
    if not validated_password(admin.password, password):
        return None
    return admin


@router.post("/token/")
async def swagger_form_token(
    form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db_sync)
):
    admin = authenticate(db, form_data.username, form_data.password)
    if admin is None:
        return common_response(BadRequest(message="Invalid Credentials"))

    token = generate_token_from_admin(db=db, admin=admin)
    return {"access_token": token, "token_type": "bearer"}


@router.post(
    "/login",
    responses={
        "200": {"model": LoginSuccessResponse},
        "400": {"model": BadRequestResponse},
        "401": {"model": UnauthorizedResponse},
        "500": {"model": InternalServerErrorResponse},
    },
)
async def login(request: LoginRequest, db: Session = Depends(get_db_sync)):
    admin = authenticate(db, request.email, request.password)
    if admin is None:
        logger.warning(f"Failed login attempt for {request.email}")
        return common_response(Unauthorized(message="Invalid credentials"))

    token = generate_token_from_admin(db=db, admin=admin)
    response = common_response(
        Ok(data=LoginSuccessResponse(token=token).model_dump(mode="json"))
    )
    response.set_cookie(
        key=ADMIN_COOKIE_NAME,
        value=token,
        httponly=True,
        samesite="strict",
        secure=ADMIN_COOKIE_SECURE,
        path="/",
        max_age=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )
    return response


@router.get(
    "/me/",
    responses={
        "200": {"model": MeResponse},
        "401": {"model": UnauthorizedResponse},
        "500": {"model": InternalServerErrorResponse},
    },
)
async def me(
    request: Request,
    db: Session = Depends(get_db_sync),
    token: Optional[str] = Depends(oauth2_scheme),
):
    admin = get_admin_from_token(db=db, token=get_request_token(request, token))
    if admin is None:
        return common_response(Unauthorized(message="Unauthorized"))

    response = MeResponse(
        admin=AdminInfo(
            id=str(admin.id),
            email=admin.email,
            role=admin.role,
            vendor_id=str(admin.vendor_id) if admin.vendor_id else None,
        )
    )
    return common_response(Ok(data=response.model_dump(mode="json")))


@router.post(
    "/logout/",
    responses={
        "200": {"model": LogoutSuccessResponse},
        "401": {"model": UnauthorizedResponse},
        "500": {"model": InternalServerErrorResponse},
    },
)
async def logout(
    request: Request,
    db: Session = Depends(get_db_sync),
    token: Optional[str] = Depends(oauth2_scheme),
):
    token = get_request_token(request, token)
    admin = get_admin_from_token(db=db, token=token)
    if admin is None:
        return common_response(Unauthorized(message="Invalid Credentials"))

    invalidate_token(db=db, token=token)
    response = common_response(Ok(data={"message": "logout successfully"}))
    response.delete_cookie(key=ADMIN_COOKIE_NAME, path="/")
    return response
