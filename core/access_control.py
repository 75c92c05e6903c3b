from enum import StrEnum
from typing import Optional

from pydantic import BaseModel, ConfigDict
from sqlalchemy import select
from sqlalchemy.orm import Session

from core.helper import parse_uuid
from models.AdminUser import AdminRole, AdminUser
from models.Event import Event


class Permission(StrEnum):
    TICKET_SCAN = "ticket_scan"
    TICKET_REJECT = "ticket_reject"
    ORDER_VERIFY = "order_verify"
    ATTENDEE_VIEW = "attendee_view"
    GATE_VIEW = "gate_view"
    EVENT_EDIT = "event_edit"
    REFUND_PROCESS = "refund_process"
    USER_MANAGE = "user_manage"


_STAFF_PERMISSIONS = frozenset(
    {
        Permission.TICKET_SCAN,
        Permission.TICKET_REJECT,
        Permission.ORDER_VERIFY,
        Permission.ATTENDEE_VIEW,
        Permission.GATE_VIEW,
        Permission.REFUND_PROCESS,
    }
)

ROLE_PERMISSIONS: dict[AdminRole, frozenset[Permission]] = {
    AdminRole.ADMIN: _STAFF_PERMISSIONS | {Permission.EVENT_EDIT, Permission.USER_MANAGE},
    AdminRole.MODERATOR: _STAFF_PERMISSIONS | {Permission.EVENT_EDIT},
    AdminRole.VENDOR: _STAFF_PERMISSIONS | {Permission.EVENT_EDIT},
    AdminRole.VENDOR_MODERATOR: _STAFF_PERMISSIONS,
}


class EventScope(BaseModel):
    """Which events a principal may act on.

    unrestricted: every event
    vendor_id: only events owned by this vendor account
    neither: no event at all
    """

    model_config = ConfigDict(frozen=True)

    unrestricted: bool = False
    vendor_id: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.unrestricted and self.vendor_id is None

    def allows(self, event_vendor_id: Optional[str]) -> bool:
        if self.unrestricted:
            return True
        if self.vendor_id is None:
            return False
        return event_vendor_id is not None and str(event_vendor_id) == self.vendor_id


class EventAccess(BaseModel):
    id: str
    vendor_id: Optional[str] = None


def resolve_event_scope(role: AdminRole, admin_id: str, vendor_id: Optional[str]) -> EventScope:
    """Resolve the event scope for a role.

    Args:
        role (AdminRole): role of the principal
        admin_id (str): id of the principal
        vendor_id (Optional[str]): vendor account a vendor_moderator is delegated under

    Returns:
        EventScope: scope the principal may act in
    """
    match AdminRole(role):
        case AdminRole.ADMIN | AdminRole.MODERATOR:
            return EventScope(unrestricted=True)
        case AdminRole.VENDOR:
            return EventScope(vendor_id=str(admin_id))
        case AdminRole.VENDOR_MODERATOR:
            return EventScope(vendor_id=str(vendor_id) if vendor_id else None)


def get_admin_scope(admin: AdminUser) -> EventScope:
    return resolve_event_scope(
        role=admin.role, admin_id=str(admin.id), vendor_id=admin.vendor_id
    )


def has_permission(admin: AdminUser, permission: Permission) -> bool:
    return permission in ROLE_PERMISSIONS[AdminRole(admin.role)]


def get_event_access(
    db: Session, admin: AdminUser, event_id: str
) -> Optional[EventAccess]:
    """Event ownership record when the admin's scope covers the event.

    Args:
        db (Session): Database session
        admin (AdminUser): acting principal
        event_id (str): Event ID

    Returns:
        EventAccess | None: None when the event does not exist or is out of scope
    """
    event_uuid = parse_uuid(event_id)
    if event_uuid is None:
        return None

    query = select(Event.id, Event.vendor_id).where(Event.id == event_uuid)
    row = db.execute(query).first()
    if row is None:
        return None

    event_id, event_vendor_id = row
    if not get_admin_scope(admin).allows(event_vendor_id):
        return None

    return EventAccess(
        id=str(event_id),
        vendor_id=str(event_vendor_id) if event_vendor_id else None,
    )
