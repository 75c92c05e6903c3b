import uuid
from models import Base
from sqlalchemy import UUID, DateTime, String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import mapped_column, Mapped, relationship


class TicketGateScan(Base):
    __tablename__ = "ticket_gate_scan"
    # at most one scan per (ticket, gate); concurrent duplicates collide here
    __table_args__ = (
        UniqueConstraint(
            "ticket_id", "gate_id", name="uq_ticket_gate_scan_ticket_id_gate_id"
        ),
    )

    id: Mapped[str] = mapped_column(
        "id", UUID(as_uuid=True), primary_key=True, index=True, default=uuid.uuid4
    )
    ticket_id: Mapped[str] = mapped_column(
        "ticket_id",
        UUID(as_uuid=True),
        ForeignKey("ticket.id"),
        nullable=False,
        index=True,
    )
    event_id: Mapped[str] = mapped_column(
        "event_id", UUID(as_uuid=True), ForeignKey("event.id"), nullable=False
    )
    gate_id: Mapped[str] = mapped_column(
        "gate_id", UUID(as_uuid=True), ForeignKey("entry_gate.id"), nullable=False
    )
    scanned_at = mapped_column("scanned_at", DateTime(timezone=True), nullable=False)
    scanned_by_admin_id: Mapped[str] = mapped_column(
        "scanned_by_admin_id",
        UUID(as_uuid=True),
        ForeignKey("admin_user.id"),
        nullable=True,
    )
    scan_source: Mapped[str] = mapped_column("scan_source", String, nullable=True)

    # Many to One
    gate = relationship("EntryGate")
    scanned_by = relationship("AdminUser")
