"""Create bitcoin_records table.

Revision ID: 0001
Revises:
Create Date: 2026-01-31 00:21:39.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "bitcoin_records",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.Column("price_btc_eur", sa.Numeric(18, 2), nullable=False),
        sa.Column("rate_eur_czk", sa.Numeric(18, 4), nullable=False),
        sa.Column("price_btc_czk", sa.Numeric(18, 2), nullable=False),
        sa.Column("note", sa.String(length=500), nullable=False, server_default=""),
    )
    op.create_index(
        "ix_bitcoin_records_timestamp",
        "bitcoin_records",
        ["timestamp"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_bitcoin_records_timestamp", table_name="bitcoin_records")
    op.drop_table("bitcoin_records")
