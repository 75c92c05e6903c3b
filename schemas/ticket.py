from typing import List, Optional
from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from core.entry_gate import GateInfo, GateScanProgress


class TierInfo(BaseModel):
    id: str
    name: str
    price_cents: int


class TicketInfo(BaseModel):
    id: str
    order_id: str
    event_id: str
    tier_id: Optional[str] = None
    attendee_name: Optional[str] = None
    status: str
    qr_code_data: Optional[str] = None
    scanned_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    tier: Optional[TierInfo] = None


class SiblingTicket(BaseModel):
    id: str
    attendee_name: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None
    scanned_at: Optional[datetime] = None
    tier: Optional[TierInfo] = None


class OrderInfo(BaseModel):
    id: str
    user_id: Optional[str] = None
    status: str
    total_amount_cents: int
    currency: str
    email: Optional[str] = None
    whatsapp_number: Optional[str] = None
    attendee_names: Optional[List[str]] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    payment_provider_order_id: Optional[str] = None
    payment_provider_payment_id: Optional[str] = None
    requested_cab: bool = False
    social_handle: Optional[str] = None
    social_verification_status: str = "not_required"
    email_domain: Optional[str] = None
    email_domain_status: str = "not_required"


class EventInfo(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    start_at: Optional[datetime] = None
    end_at: Optional[datetime] = None
    venue_name: Optional[str] = None
    address_line: Optional[str] = None
    city: Optional[str] = None
    hero_image_url: Optional[str] = None
    enable_entry_gate_flow: bool = False


class GateScanItem(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    gate_id: str
    gate_name: str
    scanned_at: datetime
    scanned_by: Optional[str] = None


class TicketView(BaseModel):
    """Everything an operator needs to act on a ticket, success or not"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    ticket: TicketInfo
    order: OrderInfo
    event: EventInfo
    sibling_tickets: List[SiblingTicket] = []
    entry_gate_flow_enabled: bool = False
    gates: List[GateInfo] = []
    gate_scan_progress: GateScanProgress = GateScanProgress()
    gate_scans: List[GateScanItem] = []


class TicketScanResponse(TicketView):
    success: bool
    message: str
    error: Optional[str] = None
    current_gate_result: str = "not_applicable"
    lookup_strategy: Optional[str] = None


class TicketVerifyRequest(BaseModel):
    scan_payload: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("scanPayload", "scan_payload", "qrData"),
        description="Raw string read from the ticket QR code",
    )
    event_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("eventId", "event_id"),
        description="Event the scanner is working for",
    )
    gate_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("gateId", "gate_id"),
        description="Gate the scanner is standing at, required when the event uses entry gates",
    )


class TicketRejectRequest(BaseModel):
    ticket_id: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("ticketId", "ticket_id")
    )


class TicketRejectResponse(TicketView):
    success: bool
    message: str
