from datetime import datetime, timedelta
from typing import Optional

import bcrypt
import jwt
import pytz
from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from pytz import timezone
from sqlalchemy import delete, or_, select
from sqlalchemy.orm import Session

from models import get_db_sync
from models.AdminUser import AdminUser
from models.Token import Token
from settings import (
    ACCESS_TOKEN_EXPIRE_MINUTES,
    ADMIN_COOKIE_NAME,
    ALGORITHM,
    SECRET_KEY,
    TZ,
)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token/", auto_error=False)


def generate_hash_password(password: str) -> str:
    hash = bcrypt.hashpw(str.encode(password), bcrypt.gensalt())
    return hash.decode()


def validated_password(hash: str, password: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode(), hash.encode())
    except (ValueError, TypeError):
        return False


def generate_token_from_admin(db: Session, admin: AdminUser) -> str:
    expire = datetime.now(timezone(TZ)) + timedelta(
        minutes=float(ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    """
    {
        "sub": "aaaa-bbbb-cccc-dddd",
        "role": "vendor",
        "exp": 1641455971,
    }
    """
    payload = {
        "sub": str(admin.id),
        "role": admin.role,
        "exp": expire,
    }
    token = jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM)
    db.add(Token(admin_user=admin, token=token, expired_at=expire))
    db.commit()
    return token


def get_admin_from_token(db: Session, token: Optional[str]) -> Optional[AdminUser]:
    if not token:
        return None

    now = datetime.now().astimezone(pytz.timezone(TZ))
    try:
        payload = jwt.decode(jwt=token, key=SECRET_KEY, algorithms=[ALGORITHM])
        admin_id = payload.get("sub")
    except jwt.PyJWTError:
        invalidate_token(db=db, token=token)
        return None

    stmt = select(Token).where(Token.token == token, Token.admin_user_id == admin_id)
    session = db.execute(stmt).scalar()
    if session is None:
        return None
    if session.expired_at <= now:
        invalidate_token(db=db, token=token)
        return None

    return session.admin_user


def get_request_token(request: Request, token: Optional[str]) -> Optional[str]:
    """Bearer token from the Authorization header, else the login cookie."""
    if token:
        return token
    return request.cookies.get(ADMIN_COOKIE_NAME)


def get_current_admin(
    request: Request,
    db: Session = Depends(get_db_sync),
    token: Optional[str] = Depends(oauth2_scheme),
) -> Optional[AdminUser]:
    return get_admin_from_token(db, get_request_token(request, token))


def invalidate_token(db: Session, token: str):
    # clear all expired token and selected_token
    now = datetime.now().astimezone(pytz.timezone(TZ))
    stmt = delete(Token).where(or_(Token.expired_at <= now, Token.token == token))
    db.execute(stmt)
    db.commit()
