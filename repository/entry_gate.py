from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from models.EntryGate import EntryGate


def get_event_gates(db: Session, event_id: str) -> List[EntryGate]:
    query = (
        select(EntryGate)
        .where(EntryGate.event_id == event_id)
        .order_by(EntryGate.sort_order.asc(), EntryGate.name.asc())
    )
    return list(db.execute(query).scalars().all())


def get_active_gates(db: Session, event_id: str) -> List[EntryGate]:
    """Active gates of an event, ordered by sort_order

    Args:
        db (Session): Database session
        event_id (str): Event ID

    Returns:
        List[EntryGate]: gates with is_active = true
    """
    query = (
        select(EntryGate)
        .where(EntryGate.event_id == event_id, EntryGate.is_active.is_(True))
        .order_by(EntryGate.sort_order.asc(), EntryGate.name.asc())
    )
    return list(db.execute(query).scalars().all())


def get_gate_by_id(db: Session, gate_id: str) -> Optional[EntryGate]:
    query = select(EntryGate).where(EntryGate.id == gate_id)
    return db.execute(query).scalar_one_or_none()


def insert_gate(
    db: Session,
    event_id: str,
    name: str,
    code: Optional[str] = None,
    sort_order: int = 0,
    is_active: bool = True,
    is_commit: bool = True,
) -> EntryGate:
    gate = EntryGate(
        event_id=event_id,
        name=name,
        code=code,
        sort_order=sort_order,
        is_active=is_active,
    )
    db.add(gate)
    db.flush()
    if is_commit:
        db.commit()
        db.refresh(gate)
    return gate


def update_gate(
    db: Session,
    gate: EntryGate,
    name: Optional[str] = None,
    code: Optional[str] = None,
    sort_order: Optional[int] = None,
    is_active: Optional[bool] = None,
    is_commit: bool = True,
) -> EntryGate:
    if name is not None:
        gate.name = name
    if code is not None:
        gate.code = code
    if sort_order is not None:
        gate.sort_order = sort_order
    if is_active is not None:
        gate.is_active = is_active

    if is_commit:
        db.commit()
        db.refresh(gate)
    return gate
