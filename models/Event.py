import uuid
from models import Base
from sqlalchemy import UUID, DateTime, String, Boolean, ForeignKey
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import mapped_column, Mapped, relationship


class Event(Base):
    __tablename__ = "event"

    id: Mapped[str] = mapped_column(
        "id", UUID(as_uuid=True), primary_key=True, index=True, default=uuid.uuid4
    )
    vendor_id: Mapped[str] = mapped_column(
        "vendor_id",
        UUID(as_uuid=True),
        ForeignKey("admin_user.id"),
        nullable=True,
        index=True,
    )
    title: Mapped[str] = mapped_column("title", String, nullable=False)
    description: Mapped[str] = mapped_column("description", String, nullable=True)
    start_at = mapped_column("start_at", DateTime(timezone=True), nullable=False)
    end_at = mapped_column("end_at", DateTime(timezone=True), nullable=True)
    venue_name: Mapped[str] = mapped_column("venue_name", String, nullable=True)
    address_line: Mapped[str] = mapped_column("address_line", String, nullable=True)
    city: Mapped[str] = mapped_column("city", String, nullable=True)
    hero_image_url: Mapped[str] = mapped_column(
        "hero_image_url", String, nullable=True
    )
    enable_entry_gate_flow: Mapped[bool] = mapped_column(
        "enable_entry_gate_flow", Boolean, nullable=False, default=False
    )
    require_social_verification: Mapped[bool] = mapped_column(
        "require_social_verification", Boolean, nullable=False, default=False
    )
    require_email_domain_verification: Mapped[bool] = mapped_column(
        "require_email_domain_verification", Boolean, nullable=False, default=False
    )
    allowed_email_domains: Mapped[list] = mapped_column(
        "allowed_email_domains", JSONB, nullable=True
    )
    created_at = mapped_column("created_at", DateTime(timezone=True), nullable=True)

    # One to Many
    tiers = relationship("TicketTier", back_populates="event")
    entry_gates = relationship(
        "EntryGate", back_populates="event", order_by="EntryGate.sort_order"
    )
