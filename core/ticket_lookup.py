import json
from enum import StrEnum
from typing import Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from sqlalchemy.orm import Session

from core.exceptions import ScanBadRequestError, ScanNotFoundError
from core.helper import parse_uuid
from core.log import logger
from models.Ticket import Ticket
from repository.ticket import get_ticket_by_qr_code_data, get_tickets_by_order_id


class LookupStrategy(StrEnum):
    EXACT = "exact"
    POSITIONAL = "positional"


class ScanPayload(BaseModel):
    """Fields embedded in a ticket QR code at issuance"""

    model_config = ConfigDict(extra="ignore")

    order_id: str
    ticket_index: int
    event_id: str
    tier_id: Optional[str] = None
    attendee_name: Optional[str] = None
    timestamp: Optional[int | float | str] = None

    @field_validator("order_id", "event_id")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("must not be empty")
        return value


class TicketLookupResult(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    ticket: Ticket
    strategy: LookupStrategy
    payload: ScanPayload


def parse_scan_payload(scan_payload: Optional[str]) -> ScanPayload:
    """Parse the scanned QR string

    Raises:
        ScanBadRequestError: empty input, not JSON, or required fields missing
    """
    if not scan_payload or not isinstance(scan_payload, str):
        raise ScanBadRequestError("Invalid QR code data", "QR code data is required")

    try:
        raw = json.loads(scan_payload)
    except json.JSONDecodeError:
        raise ScanBadRequestError(
            "Invalid QR code format", "QR code is not valid JSON"
        )

    if not isinstance(raw, dict):
        raise ScanBadRequestError(
            "Invalid QR code structure", "Missing required fields in QR code"
        )

    try:
        return ScanPayload.model_validate(raw)
    except ValidationError:
        raise ScanBadRequestError(
            "Invalid QR code structure", "Missing required fields in QR code"
        )


def encode_scan_payload(payload: ScanPayload) -> str:
    """Serialized form stored in ticket.qr_code_data at issuance"""
    return json.dumps(payload.model_dump())


def pick_by_position(tickets: list, index: int):
    """tickets[index], or the first ticket when index is out of range"""
    if not tickets:
        return None
    if 0 <= index < len(tickets):
        return tickets[index]
    return tickets[0]


def resolve_ticket(db: Session, scan_payload: Optional[str]) -> TicketLookupResult:
    """Resolve a scanned payload to exactly one ticket.

    Exact match on the stored payload first. If nothing matches, fall back to
    the ticket at the embedded position within the embedded order (first ticket
    when the position is out of range). The fallback can pick the wrong ticket
    when creation order does not follow issuance order, so it is logged apart
    from exact hits.

    Args:
        db (Session): Database session
        scan_payload (str): Raw scanned string

    Raises:
        ScanBadRequestError: payload cannot be parsed
        ScanNotFoundError: no ticket by either strategy

    Returns:
        TicketLookupResult: ticket with the strategy that found it
    """
    payload = parse_scan_payload(scan_payload)

    ticket = get_ticket_by_qr_code_data(db, scan_payload)
    if ticket is not None:
        return TicketLookupResult(
            ticket=ticket, strategy=LookupStrategy.EXACT, payload=payload
        )

    order_uuid = parse_uuid(payload.order_id)
    tickets = get_tickets_by_order_id(db, order_uuid) if order_uuid else []
    ticket = pick_by_position(tickets, payload.ticket_index)
    if ticket is None:
        raise ScanNotFoundError(
            "Ticket not found", "No ticket found matching this QR code"
        )

    logger.warning(
        f"Ticket lookup fell back to position: order_id={payload.order_id} "
        f"ticket_index={payload.ticket_index} resolved_ticket_id={ticket.id} "
        f"order_ticket_count={len(tickets)}"
    )
    return TicketLookupResult(
        ticket=ticket, strategy=LookupStrategy.POSITIONAL, payload=payload
    )
