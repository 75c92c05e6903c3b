from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from core.helper import get_current_time_in_timezone
from models.AdminUser import AdminRole, AdminUser


def get_admin_by_email(db: Session, email: str) -> Optional[AdminUser]:
    stmt = select(AdminUser).where(AdminUser.email == email.strip().lower())
    return db.execute(stmt).scalar()


def get_admin_by_id(db: Session, admin_id: str) -> Optional[AdminUser]:
    stmt = select(AdminUser).where(AdminUser.id == admin_id)
    return db.execute(stmt).scalar_one_or_none()


def get_admin_users(db: Session) -> List[AdminUser]:
    stmt = select(AdminUser).order_by(
        AdminUser.created_at.desc().nulls_last(), AdminUser.email.asc()
    )
    return list(db.execute(stmt).scalars().all())


def get_vendors(db: Session) -> List[AdminUser]:
    stmt = (
        select(AdminUser)
        .where(AdminUser.role == AdminRole.VENDOR.value)
        .order_by(AdminUser.email.asc())
    )
    return list(db.execute(stmt).scalars().all())


def resolve_vendor_id(role: AdminRole, vendor_id: Optional[str]) -> Optional[str]:
    """Only a vendor_moderator is delegated under a vendor account"""
    if AdminRole(role) == AdminRole.VENDOR_MODERATOR:
        return vendor_id
    return None


def create_admin_user(
    db: Session,
    email: str,
    password: str,
    role: AdminRole = AdminRole.MODERATOR,
    vendor_id: Optional[str] = None,
    is_commit: bool = True,
) -> AdminUser:
    """Create an admin user, password must already be hashed"""
    admin = AdminUser(
        email=email.strip().lower(),
        password=password,
        role=role.value,
        vendor_id=resolve_vendor_id(role, vendor_id),
        created_at=get_current_time_in_timezone(),
    )
    db.add(admin)
    db.flush()
    if is_commit:
        db.commit()
        db.refresh(admin)
    return admin


def update_admin_user(
    db: Session,
    admin: AdminUser,
    email: Optional[str] = None,
    password: Optional[str] = None,
    role: Optional[AdminRole] = None,
    vendor_id: Optional[str] = None,
    is_commit: bool = True,
) -> AdminUser:
    """Apply the given changes, password must already be hashed

    The vendor link is recomputed from the resulting role, so moving a user
    away from vendor_moderator drops it.
    """
    if email is not None:
        admin.email = email.strip().lower()
    if password is not None:
        admin.password = password
    if role is not None:
        admin.role = role.value

    admin.vendor_id = resolve_vendor_id(
        admin.role, vendor_id if vendor_id is not None else admin.vendor_id
    )

    if is_commit:
        db.commit()
        db.refresh(admin)
    return admin


def delete_admin_user(db: Session, admin: AdminUser, is_commit: bool = True) -> None:
    """Delete an admin user together with its login tokens"""
    for token in list(admin.tokens):
        db.delete(token)
    db.delete(admin)
    db.flush()
    if is_commit:
        db.commit()
