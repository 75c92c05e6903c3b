from datetime import datetime
from typing import List, Optional, Set

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.orm import Session

from models.AdminUser import AdminUser
from models.EntryGate import EntryGate
from models.TicketGateScan import TicketGateScan


def insert_gate_scan_if_absent(
    db: Session,
    ticket_id: str,
    event_id: str,
    gate_id: str,
    scanned_by_admin_id: Optional[str],
    scanned_at: datetime,
    scan_source: str,
    is_commit: bool = True,
) -> bool:
    """Record a gate scan unless one already exists for (ticket, gate)

    Relies on the (ticket_id, gate_id) unique constraint, so a concurrent
    duplicate is dropped by the database instead of double counted.

    Returns:
        bool: True if a new scan was recorded, False if the gate was already scanned
    """
    stmt = (
        insert(TicketGateScan)
        .values(
            ticket_id=ticket_id,
            event_id=event_id,
            gate_id=gate_id,
            scanned_by_admin_id=scanned_by_admin_id,
            scanned_at=scanned_at,
            scan_source=scan_source,
        )
        .on_conflict_do_nothing(index_elements=["ticket_id", "gate_id"])
        .returning(TicketGateScan.id)
    )
    inserted_id = db.execute(stmt).scalar_one_or_none()
    if is_commit:
        db.commit()
    return inserted_id is not None


def get_scanned_gate_ids(db: Session, ticket_id: str) -> Set[str]:
    query = select(TicketGateScan.gate_id).where(TicketGateScan.ticket_id == ticket_id)
    return {str(gate_id) for gate_id in db.execute(query).scalars().all()}


def get_ticket_gate_scans(
    db: Session, ticket_id: str
) -> List[tuple[TicketGateScan, Optional[str], Optional[str]]]:
    """Gate scans of a ticket with the gate name and scanning admin email

    Returns:
        List[tuple[TicketGateScan, str | None, str | None]]: (scan, gate name, admin email)
        ordered by scan time
    """
    query = (
        select(TicketGateScan, EntryGate.name, AdminUser.email)
        .outerjoin(EntryGate, EntryGate.id == TicketGateScan.gate_id)
        .outerjoin(AdminUser, AdminUser.id == TicketGateScan.scanned_by_admin_id)
        .where(TicketGateScan.ticket_id == ticket_id)
        .order_by(TicketGateScan.scanned_at.asc())
    )
    return [tuple(row) for row in db.execute(query).all()]

