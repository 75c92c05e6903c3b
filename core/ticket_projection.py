from typing import Optional

from sqlalchemy.orm import Session

from core.entry_gate import resolve_gate_roster
from core.exceptions import ScanNotFoundError
from models.Event import Event
from models.Order import Order
from models.Ticket import Ticket
from models.TicketTier import TicketTier
from repository.event import get_event_by_id
from repository.order import get_order_by_id
from repository.ticket import get_ticket_by_id, get_tickets_by_order_id
from repository.ticket_gate_scan import get_ticket_gate_scans
from schemas.ticket import (
    EventInfo,
    GateScanItem,
    OrderInfo,
    SiblingTicket,
    TicketInfo,
    TicketView,
    TierInfo,
)


def _str_or_none(value) -> Optional[str]:
    return str(value) if value is not None else None


def tier_to_info(tier: Optional[TicketTier]) -> Optional[TierInfo]:
    if tier is None:
        return None
    return TierInfo(id=str(tier.id), name=tier.name, price_cents=tier.price_cents)


def ticket_to_info(ticket: Ticket) -> TicketInfo:
    return TicketInfo(
        id=str(ticket.id),
        order_id=str(ticket.order_id),
        event_id=str(ticket.event_id),
        tier_id=_str_or_none(ticket.tier_id),
        attendee_name=ticket.attendee_name,
        status=ticket.status,
        qr_code_data=ticket.qr_code_data,
        scanned_at=ticket.scanned_at,
        created_at=ticket.created_at,
        updated_at=ticket.updated_at,
        tier=tier_to_info(ticket.tier),
    )


def order_to_info(order: Order) -> OrderInfo:
    """Whitelisted order fields, payment provider data is limited to its ids"""
    return OrderInfo(
        id=str(order.id),
        user_id=_str_or_none(order.user_id),
        status=order.status,
        total_amount_cents=order.total_amount_cents or 0,
        currency=order.currency,
        email=order.email,
        whatsapp_number=order.whatsapp_number,
        attendee_names=order.attendee_names,
        notes=order.notes,
        created_at=order.created_at,
        payment_provider_order_id=order.payment_provider_order_id,
        payment_provider_payment_id=order.payment_provider_payment_id,
        requested_cab=bool(order.requested_cab),
        social_handle=order.social_handle,
        social_verification_status=order.social_verification_status
        or "not_required",
        email_domain=order.email_domain,
        email_domain_status=order.email_domain_status or "not_required",
    )


def event_to_info(event: Event) -> EventInfo:
    return EventInfo(
        id=str(event.id),
        title=event.title,
        description=event.description,
        start_at=event.start_at,
        end_at=event.end_at,
        venue_name=event.venue_name,
        address_line=event.address_line,
        city=event.city,
        hero_image_url=event.hero_image_url,
        enable_entry_gate_flow=bool(event.enable_entry_gate_flow),
    )


def build_ticket_view(db: Session, ticket_id: str) -> TicketView:
    """Assemble the operator view of a ticket

    Reads the current state, so called after a scan it reflects that scan.

    Args:
        db (Session): Database session
        ticket_id (str): Ticket ID

    Raises:
        ScanNotFoundError: ticket, order or event is missing

    Returns:
        TicketView: ticket, order, event, sibling tickets and gate progress
    """
    ticket = get_ticket_by_id(db, ticket_id)
    if ticket is None:
        raise ScanNotFoundError("Ticket not found", "No ticket found with this ID")

    order = get_order_by_id(db, ticket.order_id)
    if order is None:
        raise ScanNotFoundError("Order not found", "Associated order not found")

    event = get_event_by_id(db, ticket.event_id)
    if event is None:
        raise ScanNotFoundError("Event not found", "Associated event not found")

    siblings = [
        SiblingTicket(
            id=str(sibling.id),
            attendee_name=sibling.attendee_name,
            status=sibling.status,
            created_at=sibling.created_at,
            scanned_at=sibling.scanned_at,
            tier=tier_to_info(sibling.tier),
        )
        for sibling in get_tickets_by_order_id(db, ticket.order_id)
    ]

    roster = resolve_gate_roster(db, event)

    gate_scans = [
        GateScanItem(
            gate_id=str(scan.gate_id),
            gate_name=gate_name or "Gate",
            scanned_at=scan.scanned_at,
            scanned_by=admin_email,
        )
        for scan, gate_name, admin_email in get_ticket_gate_scans(db, ticket.id)
    ]

    return TicketView(
        ticket=ticket_to_info(ticket),
        order=order_to_info(order),
        event=event_to_info(event),
        sibling_tickets=siblings,
        entry_gate_flow_enabled=roster.flow_enabled,
        gates=roster.gates,
        gate_scan_progress=roster.progress(scan.gate_id for scan in gate_scans),
        gate_scans=gate_scans,
    )
