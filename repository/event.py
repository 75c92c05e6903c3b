from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from models.Event import Event


def get_event_by_id(db: Session, event_id: str) -> Optional[Event]:
    stmt = select(Event).where(Event.id == event_id)
    return db.execute(stmt).scalar_one_or_none()


def update_entry_settings(
    db: Session,
    event: Event,
    enable_entry_gate_flow: Optional[bool] = None,
    require_social_verification: Optional[bool] = None,
    require_email_domain_verification: Optional[bool] = None,
    allowed_email_domains: Optional[List[str]] = None,
    is_commit: bool = True,
) -> Event:
    if enable_entry_gate_flow is not None:
        event.enable_entry_gate_flow = enable_entry_gate_flow
    if require_social_verification is not None:
        event.require_social_verification = require_social_verification
    if require_email_domain_verification is not None:
        event.require_email_domain_verification = require_email_domain_verification
    if allowed_email_domains is not None:
        event.allowed_email_domains = allowed_email_domains

    if is_commit:
        db.commit()
        db.refresh(event)
    return event


def get_event_options(
    db: Session,
    vendor_id: Optional[str] = None,
    search: Optional[str] = None,
    limit: int = 50,
) -> List[Event]:
    """Newest events first for the event picker

    Args:
        db (Session): Database session
        vendor_id (str | None): only events of this vendor, None for every event
        search (str | None): case insensitive match on the title
        limit (int): maximum number of events

    Returns:
        List[Event]: matching events
    """
    query = select(Event)
    if vendor_id is not None:
        query = query.where(Event.vendor_id == vendor_id)
    if search:
        query = query.where(Event.title.ilike(f"%{search}%"))

    query = query.order_by(Event.created_at.desc(), Event.id.asc()).limit(limit)
    return list(db.execute(query).scalars().all())
