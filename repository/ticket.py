from datetime import datetime
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.orm import Session, joinedload

from models.Ticket import Ticket, TicketStatus


def get_ticket_by_id(db: Session, ticket_id: str) -> Optional[Ticket]:
    query = (
        select(Ticket).options(joinedload(Ticket.tier)).where(Ticket.id == ticket_id)
    )
    return db.execute(query).scalar_one_or_none()


def get_ticket_by_qr_code_data(db: Session, qr_code_data: str) -> Optional[Ticket]:
    """Find ticket by exact match of its stored QR payload

    Args:
        db (Session): Database session
        qr_code_data (str): Scanned payload, compared byte for byte

    Returns:
        Ticket | None: Ticket or None if nothing matches
    """
    query = (
        select(Ticket)
        .where(Ticket.qr_code_data == qr_code_data)
        .order_by(Ticket.created_at.asc())
    )
    return db.execute(query).scalars().first()


def get_tickets_by_order_id(db: Session, order_id: str) -> List[Ticket]:
    query = (
        select(Ticket)
        .options(joinedload(Ticket.tier))
        .where(Ticket.order_id == order_id)
        .order_by(Ticket.created_at.asc())
    )
    return list(db.execute(query).scalars().all())


def get_tickets_by_event_id(db: Session, event_id: str) -> List[Ticket]:
    query = (
        select(Ticket)
        .options(joinedload(Ticket.order))
        .where(Ticket.event_id == event_id)
        .order_by(Ticket.created_at.asc())
    )
    return list(db.execute(query).scalars().all())


def transition_ticket_status(
    db: Session,
    ticket_id: str,
    from_status: TicketStatus,
    to_status: TicketStatus,
    now: datetime,
    stamp_scanned_at: bool = False,
    is_commit: bool = True,
) -> bool:
    """Compare-and-swap the ticket status

    The update only applies while the stored status still equals from_status,
    so two racing requests cannot both perform the same transition.

    Args:
        db (Session): Database session
        ticket_id (str): Ticket ID
        from_status (TicketStatus): Status the ticket must currently have
        to_status (TicketStatus): Status to move to
        now (datetime): Timestamp for updated_at (and scanned_at)
        stamp_scanned_at (bool): Also set scanned_at
        is_commit (bool): Commit right away

    Returns:
        bool: True if this call performed the transition
    """
    values = {"status": to_status.value, "updated_at": now}
    if stamp_scanned_at:
        values["scanned_at"] = now

    stmt = (
        update(Ticket)
        .where(Ticket.id == ticket_id, Ticket.status == from_status.value)
        .values(**values)
        .execution_options(synchronize_session="fetch")
    )
    result = db.execute(stmt)
    if is_commit:
        db.commit()
    return result.rowcount == 1


def lock_ticket_for_update(db: Session, ticket_id: str) -> Optional[Ticket]:
    """Take the row lock on a ticket until the current transaction ends

    Concurrent scans of the same ticket queue up behind this lock, so each
    one reads the gate scans the previous one committed.
    """
    stmt = select(Ticket).where(Ticket.id == ticket_id).with_for_update()
    return db.execute(stmt).scalar()
