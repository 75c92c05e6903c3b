from enum import StrEnum
import uuid
from models import Base
from sqlalchemy import UUID, DateTime, String, ForeignKey
from sqlalchemy.orm import mapped_column, Mapped, relationship


class AdminRole(StrEnum):
    ADMIN = "admin"
    MODERATOR = "moderator"
    VENDOR = "vendor"
    VENDOR_MODERATOR = "vendor_moderator"


class AdminUser(Base):
    __tablename__ = "admin_user"

    id: Mapped[str] = mapped_column(
        "id", UUID(as_uuid=True), primary_key=True, index=True, default=uuid.uuid4
    )
    email: Mapped[str] = mapped_column(
        "email", String, unique=True, nullable=False, index=True
    )
    password: Mapped[str] = mapped_column("password", String, nullable=False)
    role: Mapped[str] = mapped_column(
        "role", String, nullable=False, default=AdminRole.MODERATOR
    )
    # vendor account a vendor_moderator acts on behalf of
    vendor_id: Mapped[str] = mapped_column(
        "vendor_id",
        UUID(as_uuid=True),
        ForeignKey("admin_user.id"),
        nullable=True,
        index=True,
    )
    created_at = mapped_column("created_at", DateTime(timezone=True), nullable=True)

    # One to Many
    tokens = relationship("Token", back_populates="admin_user")
