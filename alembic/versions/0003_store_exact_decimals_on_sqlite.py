"""Store bitcoin_records decimals as text on SQLite.

Revision ID: 0003
Revises: 0002
Create Date: 2026-10-19 09:12:44.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "0003"
down_revision = "0002"
branch_labels = None
depends_on = None

DECIMAL_COLUMNS = (
    ("price_btc_eur", 2),
    ("rate_eur_czk", 4),
    ("price_btc_czk", 2),
)


def _is_sqlite() -> bool:
    return op.get_context().dialect.name == "sqlite"


def upgrade() -> None:
    # other backends keep NUMERIC, which is already exact
    if not _is_sqlite():
        return
    with op.batch_alter_table("bitcoin_records", recreate="auto") as batch_op:
        for name, scale in DECIMAL_COLUMNS:
            batch_op.alter_column(
                name,
                existing_type=sa.Numeric(18, scale),
                type_=sa.String(length=40),
                existing_nullable=False,
            )


def downgrade() -> None:
    if not _is_sqlite():
        return
    with op.batch_alter_table("bitcoin_records", recreate="auto") as batch_op:
        for name, scale in DECIMAL_COLUMNS:
            batch_op.alter_column(
                name,
                existing_type=sa.String(length=40),
                type_=sa.Numeric(18, scale),
                existing_nullable=False,
            )
