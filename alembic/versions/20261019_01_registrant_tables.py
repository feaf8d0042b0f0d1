"""Ticket and per-role registrant tables.

Revision ID: 20261019_01
Revises: 
Create Date: 2026-10-19
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "20261019_01"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        server_default=sa.func.now(),
        nullable=False,
    )


def upgrade() -> None:
    op.create_table(
        "tickets",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("ticket_code", sa.String(length=64), nullable=False),
        sa.Column("code", sa.String(length=64), nullable=True),
        sa.Column("entity_type", sa.String(length=32), nullable=True),
        sa.Column("entity_id", sa.String(length=64), nullable=True),
        sa.Column("name", sa.String(), nullable=True),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("company", sa.String(), nullable=True),
        sa.Column("category", sa.String(), nullable=True),
        sa.Column("payment_status", sa.String(length=32), nullable=True),
        sa.Column("transaction_id", sa.String(), nullable=True),
        sa.Column("used", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("printed_at", sa.DateTime(timezone=True), nullable=True),
        _created_at(),
    )
    op.create_index("ix_tickets_ticket_code", "tickets", ["ticket_code"], unique=True)
    op.create_index("ix_tickets_code", "tickets", ["code"])

    op.create_table(
        "speakers",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("full_name", sa.String(), nullable=True),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("mobile", sa.String(), nullable=True),
        sa.Column("organization", sa.String(), nullable=True),
        sa.Column("ticket_code", sa.String(length=64), nullable=True),
        sa.Column("ticket_category", sa.String(), nullable=True),
        sa.Column("payment_status", sa.String(length=32), nullable=True),
        sa.Column("txId", sa.String(), nullable=True),
        _created_at(),
    )
    op.create_index("ix_speakers_ticket_code", "speakers", ["ticket_code"])

    op.create_table(
        "visitors",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(), nullable=True),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("mobile", sa.String(), nullable=True),
        sa.Column("company", sa.String(), nullable=True),
        sa.Column("ticket_code", sa.String(length=64), nullable=True),
        sa.Column("ticket_category", sa.String(), nullable=True),
        sa.Column("payment_status", sa.String(length=32), nullable=True),
        sa.Column("tx_id", sa.String(), nullable=True),
        sa.Column("slots", sa.JSON(), nullable=True),
        _created_at(),
    )
    op.create_index("ix_visitors_ticket_code", "visitors", ["ticket_code"])

    op.create_table(
        "partners",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(), nullable=True),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("org", sa.String(), nullable=True),
        sa.Column("code", sa.String(length=64), nullable=True),
        sa.Column("category", sa.String(), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=True),
        _created_at(),
    )
    op.create_index("ix_partners_code", "partners", ["code"])


def downgrade() -> None:
    op.drop_index("ix_partners_code", table_name="partners")
    op.drop_table("partners")
    op.drop_index("ix_visitors_ticket_code", table_name="visitors")
    op.drop_table("visitors")
    op.drop_index("ix_speakers_ticket_code", table_name="speakers")
    op.drop_table("speakers")
    op.drop_index("ix_tickets_code", table_name="tickets")
    op.drop_index("ix_tickets_ticket_code", table_name="tickets")
    op.drop_table("tickets")
