from enum import StrEnum
import uuid
from sqlalchemy import UUID, DateTime, String, ForeignKey
from sqlalchemy.orm import mapped_column, Mapped, relationship
from models import Base


class TicketStatus(StrEnum):
    ACTIVE = "active"
    USED = "used"
    CANCELLED = "cancelled"


class Ticket(Base):
    __tablename__ = "ticket"

    id: Mapped[str] = mapped_column(
        "id", UUID(as_uuid=True), primary_key=True, index=True, default=uuid.uuid4
    )
    order_id: Mapped[str] = mapped_column(
        "order_id",
        UUID(as_uuid=True),
        ForeignKey("order.id"),
        nullable=False,
        index=True,
    )
    event_id: Mapped[str] = mapped_column(
        "event_id",
        UUID(as_uuid=True),
        ForeignKey("event.id"),
        nullable=False,
        index=True,
    )
    tier_id: Mapped[str] = mapped_column(
        "tier_id", UUID(as_uuid=True), ForeignKey("ticket_tier.id"), nullable=True
    )
    attendee_name: Mapped[str] = mapped_column("attendee_name", String, nullable=True)
    status: Mapped[str] = mapped_column(
        "status", String, nullable=False, default=TicketStatus.ACTIVE
    )
    qr_code_data: Mapped[str] = mapped_column(
        "qr_code_data", String, nullable=True, index=True
    )
    scanned_at = mapped_column("scanned_at", DateTime(timezone=True), nullable=True)
    created_at = mapped_column("created_at", DateTime(timezone=True), nullable=False)
    updated_at = mapped_column("updated_at", DateTime(timezone=True), nullable=True)

    # Many to One
    order = relationship("Order", back_populates="tickets")
    tier = relationship("TicketTier")
    event = relationship("Event")
