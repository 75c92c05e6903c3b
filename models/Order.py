from enum import StrEnum
import uuid
from models import Base
from sqlalchemy import UUID, Boolean, DateTime, Integer, String, ForeignKey
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import mapped_column, Mapped, relationship


class OrderStatus(StrEnum):
    CREATED = "created"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"
    CANCELLED = "cancelled"


class SocialVerificationStatus(StrEnum):
    NOT_REQUIRED = "not_required"
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class EmailDomainStatus(StrEnum):
    NOT_REQUIRED = "not_required"
    APPROVED = "approved"
    REJECTED = "rejected"


class Order(Base):
    __tablename__ = "order"

    id: Mapped[str] = mapped_column(
        "id", UUID(as_uuid=True), primary_key=True, index=True, default=uuid.uuid4
    )
    event_id: Mapped[str] = mapped_column(
        "event_id",
        UUID(as_uuid=True),
        ForeignKey("event.id"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[str] = mapped_column(
        "user_id", UUID(as_uuid=True), nullable=True, index=True
    )
    email: Mapped[str] = mapped_column("email", String, nullable=True)
    whatsapp_number: Mapped[str] = mapped_column(
        "whatsapp_number", String, nullable=True
    )
    attendee_names: Mapped[list] = mapped_column(
        "attendee_names", JSONB, nullable=True
    )
    notes: Mapped[str] = mapped_column("notes", String, nullable=True)
    requested_cab: Mapped[bool] = mapped_column(
        "requested_cab", Boolean, nullable=False, default=False
    )
    status: Mapped[str] = mapped_column(
        "status", String, nullable=False, default=OrderStatus.CREATED
    )
    total_amount_cents: Mapped[int] = mapped_column(
        "total_amount_cents", Integer, nullable=False, default=0
    )
    currency: Mapped[str] = mapped_column(
        "currency", String(3), nullable=False, default="INR"
    )
    payment_provider_order_id: Mapped[str] = mapped_column(
        "payment_provider_order_id", String, nullable=True, index=True
    )
    payment_provider_payment_id: Mapped[str] = mapped_column(
        "payment_provider_payment_id", String, nullable=True, index=True
    )
    social_handle: Mapped[str] = mapped_column("social_handle", String, nullable=True)
    social_verification_status: Mapped[str] = mapped_column(
        "social_verification_status",
        String,
        nullable=False,
        default=SocialVerificationStatus.NOT_REQUIRED,
    )
    social_verified_at = mapped_column(
        "social_verified_at", DateTime(timezone=True), nullable=True
    )
    social_verified_by: Mapped[str] = mapped_column(
        "social_verified_by",
        UUID(as_uuid=True),
        ForeignKey("admin_user.id"),
        nullable=True,
    )
    email_domain: Mapped[str] = mapped_column("email_domain", String, nullable=True)
    email_domain_status: Mapped[str] = mapped_column(
        "email_domain_status",
        String,
        nullable=False,
        default=EmailDomainStatus.NOT_REQUIRED,
    )
    refund_requested: Mapped[bool] = mapped_column(
        "refund_requested", Boolean, nullable=False, default=False
    )
    refund_reason: Mapped[str] = mapped_column("refund_reason", String, nullable=True)
    refund_requested_at = mapped_column(
        "refund_requested_at", DateTime(timezone=True), nullable=True
    )
    refund_processed: Mapped[bool] = mapped_column(
        "refund_processed", Boolean, nullable=False, default=False
    )
    refund_processed_at = mapped_column(
        "refund_processed_at", DateTime(timezone=True), nullable=True
    )
    refund_processed_by: Mapped[str] = mapped_column(
        "refund_processed_by",
        UUID(as_uuid=True),
        ForeignKey("admin_user.id"),
        nullable=True,
    )
    refund_notes: Mapped[str] = mapped_column("refund_notes", String, nullable=True)
    created_at = mapped_column("created_at", DateTime(timezone=True), nullable=False)

    # Relationship
    event = relationship("Event", backref="orders")
    tickets = relationship(
        "Ticket", back_populates="order", order_by="Ticket.created_at"
    )
