"""create tokens and address_token_balances

Revision ID: 3f9c1a2b7d41
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""

from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f9c1a2b7d41"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create token and balance snapshot tables."""
    op.create_table(
        "tokens",
        sa.Column("contract_address_hash", sa.String(length=42), nullable=False),
        sa.Column("name", sa.Text(), nullable=True),
        sa.Column("symbol", sa.Text(), nullable=True),
        sa.Column("type", sa.String(length=16), nullable=False),
        sa.Column("decimals", sa.Integer(), nullable=True),
        sa.Column("total_supply", sa.Numeric(precision=100, scale=0), nullable=True),
        sa.Column("holder_count", sa.Integer(), nullable=True),
        sa.Column("circulating_market_cap", sa.Numeric(), nullable=True),
        sa.Column(
            "inserted_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
            comment="Timestamp of record insertion",
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
            comment="Timestamp of last update",
        ),
        sa.PrimaryKeyConstraint("contract_address_hash", name=op.f("pk_tokens")),
    )

    op.create_table(
        "address_token_balances",
        sa.Column(
            "id",
            sa.Integer(),
            autoincrement=True,
            nullable=False,
            comment="Auto-incrementing integer primary key",
        ),
        sa.Column("address_hash", sa.String(length=42), nullable=False),
        sa.Column("token_contract_address_hash", sa.String(length=42), nullable=False),
        sa.Column("block_number", sa.BigInteger(), nullable=False),
        sa.Column("value", sa.Numeric(precision=100, scale=0), nullable=True),
        sa.Column("value_fetched_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "inserted_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
            comment="Timestamp of record insertion",
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
            comment="Timestamp of last update",
        ),
        sa.ForeignKeyConstraint(
            ["token_contract_address_hash"],
            ["tokens.contract_address_hash"],
            name=op.f("fk_address_token_balances_token_contract_address_hash_tokens"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_address_token_balances")),
        sa.UniqueConstraint(
            "address_hash",
            "token_contract_address_hash",
            "block_number",
            name="uq_address_token_balances_address_token_block",
        ),
    )
    op.create_index(
        "ix_address_token_balances_address_token_block",
        "address_token_balances",
        ["address_hash", "token_contract_address_hash", "block_number"],
        unique=False,
    )


def downgrade() -> None:
    """Drop token and balance snapshot tables."""
    op.drop_index(
        "ix_address_token_balances_address_token_block",
        table_name="address_token_balances",
    )
    op.drop_table("address_token_balances")
    op.drop_table("tokens")
