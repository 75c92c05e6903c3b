"""create entry console tables

Revision ID: 3c1f2a9d7e10
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "3c1f2a9d7e10"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "admin_user",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("password", sa.String(), nullable=False),
        sa.Column("role", sa.String(), nullable=False),
        sa.Column("vendor_id", sa.UUID(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["vendor_id"], ["public.admin_user.id"]),
        sa.PrimaryKeyConstraint("id"),
        schema="public",
    )
    op.create_index(
        op.f("ix_public_admin_user_id"), "admin_user", ["id"], unique=False, schema="public"
    )
    op.create_index(
        op.f("ix_public_admin_user_email"),
        "admin_user",
        ["email"],
        unique=True,
        schema="public",
    )
    op.create_index(
        op.f("ix_public_admin_user_vendor_id"),
        "admin_user",
        ["vendor_id"],
        unique=False,
        schema="public",
    )

    op.create_table(
        "token",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("admin_user_id", sa.UUID(), nullable=False),
        sa.Column("token", sa.String(), nullable=False),
        sa.Column("expired_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["admin_user_id"], ["public.admin_user.id"]),
        sa.PrimaryKeyConstraint("id"),
        schema="public",
    )
    op.create_index(op.f("ix_public_token_id"), "token", ["id"], unique=False, schema="public")
    op.create_index(
        op.f("ix_public_token_admin_user_id"),
        "token",
        ["admin_user_id"],
        unique=False,
        schema="public",
    )

    op.create_table(
        "event",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("vendor_id", sa.UUID(), nullable=True),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("start_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("venue_name", sa.String(), nullable=True),
        sa.Column("address_line", sa.String(), nullable=True),
        sa.Column("city", sa.String(), nullable=True),
        sa.Column("hero_image_url", sa.String(), nullable=True),
        sa.Column(
            "enable_entry_gate_flow",
            sa.Boolean(),
            server_default=sa.text("false"),
            nullable=False,
        ),
        sa.Column(
            "require_social_verification",
            sa.Boolean(),
            server_default=sa.text("false"),
            nullable=False,
        ),
        sa.Column(
            "require_email_domain_verification",
            sa.Boolean(),
            server_default=sa.text("false"),
            nullable=False,
        ),
        sa.Column(
            "allowed_email_domains",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=True,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["vendor_id"], ["public.admin_user.id"]),
        sa.PrimaryKeyConstraint("id"),
        schema="public",
    )
    op.create_index(op.f("ix_public_event_id"), "event", ["id"], unique=False, schema="public")
    op.create_index(
        op.f("ix_public_event_vendor_id"), "event", ["vendor_id"], unique=False, schema="public"
    )

    op.create_table(
        "ticket_tier",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("event_id", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("price_cents", sa.Integer(), nullable=False),
        sa.Column("currency", sa.String(length=3), nullable=False),
        sa.ForeignKeyConstraint(["event_id"], ["public.event.id"]),
        sa.PrimaryKeyConstraint("id"),
        schema="public",
    )
    op.create_index(
        op.f("ix_public_ticket_tier_id"), "ticket_tier", ["id"], unique=False, schema="public"
    )
    op.create_index(
        op.f("ix_public_ticket_tier_event_id"),
        "ticket_tier",
        ["event_id"],
        unique=False,
        schema="public",
    )

    op.create_table(
        "order",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("event_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=True),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("whatsapp_number", sa.String(), nullable=True),
        sa.Column(
            "attendee_names", postgresql.JSONB(astext_type=sa.Text()), nullable=True
        ),
        sa.Column("notes", sa.String(), nullable=True),
        sa.Column(
            "requested_cab", sa.Boolean(), server_default=sa.text("false"), nullable=False
        ),
        sa.Column("status", sa.String(), nullable=False),
        sa.Column("total_amount_cents", sa.Integer(), nullable=False),
        sa.Column("currency", sa.String(length=3), nullable=False),
        sa.Column("payment_provider_order_id", sa.String(), nullable=True),
        sa.Column("payment_provider_payment_id", sa.String(), nullable=True),
        sa.Column("social_handle", sa.String(), nullable=True),
        sa.Column(
            "social_verification_status",
            sa.String(),
            server_default="not_required",
            nullable=False,
        ),
        sa.Column("social_verified_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("social_verified_by", sa.UUID(), nullable=True),
        sa.Column("email_domain", sa.String(), nullable=True),
        sa.Column(
            "email_domain_status",
            sa.String(),
            server_default="not_required",
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["event_id"], ["public.event.id"]),
        sa.ForeignKeyConstraint(["social_verified_by"], ["public.admin_user.id"]),
        sa.PrimaryKeyConstraint("id"),
        schema="public",
    )
    op.create_index(op.f("ix_public_order_id"), "order", ["id"], unique=False, schema="public")
    op.create_index(
        op.f("ix_public_order_event_id"), "order", ["event_id"], unique=False, schema="public"
    )
    op.create_index(
        op.f("ix_public_order_user_id"), "order", ["user_id"], unique=False, schema="public"
    )
    op.create_index(
        op.f("ix_public_order_payment_provider_order_id"),
        "order",
        ["payment_provider_order_id"],
        unique=False,
        schema="public",
    )
    op.create_index(
        op.f("ix_public_order_payment_provider_payment_id"),
        "order",
        ["payment_provider_payment_id"],
        unique=False,
        schema="public",
    )

    op.create_table(
        "ticket",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("order_id", sa.UUID(), nullable=False),
        sa.Column("event_id", sa.UUID(), nullable=False),
        sa.Column("tier_id", sa.UUID(), nullable=True),
        sa.Column("attendee_name", sa.String(), nullable=True),
        sa.Column("status", sa.String(), nullable=False),
        sa.Column("qr_code_data", sa.String(), nullable=True),
        sa.Column("scanned_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["order_id"], ["public.order.id"]),
        sa.ForeignKeyConstraint(["event_id"], ["public.event.id"]),
        sa.ForeignKeyConstraint(["tier_id"], ["public.ticket_tier.id"]),
        sa.PrimaryKeyConstraint("id"),
        schema="public",
    )
    op.create_index(op.f("ix_public_ticket_id"), "ticket", ["id"], unique=False, schema="public")
    op.create_index(
        op.f("ix_public_ticket_order_id"), "ticket", ["order_id"], unique=False, schema="public"
    )
    op.create_index(
        op.f("ix_public_ticket_event_id"), "ticket", ["event_id"], unique=False, schema="public"
    )
    op.create_index(
        op.f("ix_public_ticket_qr_code_data"),
        "ticket",
        ["qr_code_data"],
        unique=False,
        schema="public",
    )

    op.create_table(
        "entry_gate",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("event_id", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("code", sa.String(), nullable=True),
        sa.Column("sort_order", sa.Integer(), server_default="0", nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default=sa.text("true"), nullable=True),
        sa.ForeignKeyConstraint(["event_id"], ["public.event.id"]),
        sa.PrimaryKeyConstraint("id"),
        schema="public",
    )
    op.create_index(
        op.f("ix_public_entry_gate_id"), "entry_gate", ["id"], unique=False, schema="public"
    )
    op.create_index(
        op.f("ix_public_entry_gate_event_id"),
        "entry_gate",
        ["event_id"],
        unique=False,
        schema="public",
    )

    op.create_table(
        "ticket_gate_scan",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("ticket_id", sa.UUID(), nullable=False),
        sa.Column("event_id", sa.UUID(), nullable=False),
        sa.Column("gate_id", sa.UUID(), nullable=False),
        sa.Column("scanned_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("scanned_by_admin_id", sa.UUID(), nullable=True),
        sa.Column("scan_source", sa.String(), nullable=True),
        sa.ForeignKeyConstraint(["ticket_id"], ["public.ticket.id"]),
        sa.ForeignKeyConstraint(["event_id"], ["public.event.id"]),
        sa.ForeignKeyConstraint(["gate_id"], ["public.entry_gate.id"]),
        sa.ForeignKeyConstraint(["scanned_by_admin_id"], ["public.admin_user.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "ticket_id", "gate_id", name="uq_ticket_gate_scan_ticket_id_gate_id"
        ),
        schema="public",
    )
    op.create_index(
        op.f("ix_public_ticket_gate_scan_id"),
        "ticket_gate_scan",
        ["id"],
        unique=False,
        schema="public",
    )
    op.create_index(
        op.f("ix_public_ticket_gate_scan_ticket_id"),
        "ticket_gate_scan",
        ["ticket_id"],
        unique=False,
        schema="public",
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("ticket_gate_scan", schema="public")
    op.drop_table("entry_gate", schema="public")
    op.drop_table("ticket", schema="public")
    op.drop_table("order", schema="public")
    op.drop_table("ticket_tier", schema="public")
    op.drop_table("event", schema="public")
    op.drop_table("token", schema="public")
    op.drop_table("admin_user", schema="public")
