import uuid
from sqlalchemy import UUID, String, Integer, Boolean, ForeignKey
from sqlalchemy.orm import mapped_column, Mapped, relationship
from models import Base


class EntryGate(Base):
    __tablename__ = "entry_gate"

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
    code: Mapped[str] = mapped_column("code", String, nullable=True)
    sort_order: Mapped[int] = mapped_column(
        "sort_order", Integer, nullable=False, default=0
    )
    is_active: Mapped[bool] = mapped_column("is_active", Boolean, default=True)

    # Many to One
    event = relationship("Event", back_populates="entry_gates")
