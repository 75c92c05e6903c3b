import uuid
from sqlalchemy import UUID, String, Integer, ForeignKey
from sqlalchemy.orm import mapped_column, Mapped, relationship
from models import Base


class TicketTier(Base):
    __tablename__ = "ticket_tier"

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
    name: Mapped[str] = mapped_column("name", String, nullable=False)
    price_cents: Mapped[int] = mapped_column("price_cents", Integer, nullable=False)
    currency: Mapped[str] = mapped_column(
        "currency", String(3), nullable=False, default="INR"
    )

    # Many to One
    event = relationship("Event", back_populates="tiers")
