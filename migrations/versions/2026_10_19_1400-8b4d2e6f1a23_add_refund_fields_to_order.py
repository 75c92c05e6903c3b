"""add refund fields to order

Revision ID: 8b4d2e6f1a23
Revises: 3c1f2a9d7e10
Create Date: 2026-10-19 14:00:00.000000

"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "8b4d2e6f1a23"
down_revision = "3c1f2a9d7e10"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.add_column(
        "order",
        sa.Column(
            "refund_requested",
            sa.Boolean(),
            server_default=sa.text("false"),
            nullable=False,
        ),
        schema="public",
    )
    op.add_column(
        "order", sa.Column("refund_reason", sa.String(), nullable=True), schema="public"
    )
    op.add_column(
        "order",
        sa.Column("refund_requested_at", sa.DateTime(timezone=True), nullable=True),
        schema="public",
    )
    op.add_column(
        "order",
        sa.Column(
            "refund_processed",
            sa.Boolean(),
            server_default=sa.text("false"),
            nullable=False,
        ),
        schema="public",
    )
    op.add_column(
        "order",
        sa.Column("refund_processed_at", sa.DateTime(timezone=True), nullable=True),
        schema="public",
    )
    op.add_column(
        "order",
        sa.Column("refund_processed_by", sa.UUID(), nullable=True),
        schema="public",
    )
    op.create_foreign_key(
        "order_refund_processed_by_fkey",
        "order",
        "admin_user",
        ["refund_processed_by"],
        ["id"],
        source_schema="public",
        referent_schema="public",
    )
    op.add_column(
        "order", sa.Column("refund_notes", sa.String(), nullable=True), schema="public"
    )


def downgrade() -> None:
    op.drop_constraint(
        "order_refund_processed_by_fkey", "order", schema="public", type_="foreignkey"
    )
    op.drop_column("order", "refund_notes", schema="public")
    op.drop_column("order", "refund_processed_by", schema="public")
    op.drop_column("order", "refund_processed_at", schema="public")
    op.drop_column("order", "refund_processed", schema="public")
    op.drop_column("order", "refund_requested_at", schema="public")
    op.drop_column("order", "refund_reason", schema="public")
    op.drop_column("order", "refund_requested", schema="public")
