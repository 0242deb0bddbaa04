"""Add unique constraint on bitcoin_records.note.

Revision ID: 0002
Revises: 0001
Create Date: 2026-02-04 21:30:06.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "0002"
down_revision = "0001"
branch_labels = None
depends_on = None


def upgrade() -> None:
    with op.batch_alter_table("bitcoin_records", recreate="auto") as batch_op:
        batch_op.alter_column(
            "note",
            existing_type=sa.String(length=500),
            existing_nullable=False,
            server_default=None,
        )
        batch_op.create_unique_constraint("uq_bitcoin_records_note", ["note"])


def downgrade() -> None:
    with op.batch_alter_table("bitcoin_records", recreate="auto") as batch_op:
        batch_op.drop_constraint("uq_bitcoin_records_note", type_="unique")
        batch_op.alter_column(
            "note",
            existing_type=sa.String(length=500),
            existing_nullable=False,
            server_default="",
        )
