"""SQLAlchemy models for tokens and per-address balance snapshots."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import StrEnum

from sqlalchemy import BigInteger, DateTime, Enum, ForeignKey, Index, Integer, Numeric, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from holdings_service.core.database import AddressHash, Base, IntegerPKMixin, TimestampMixin


class TokenType(StrEnum):
    """Token standard, stored as its display value.

    Listings order by the stored string, so ``ERC-721`` sorts above
    ``ERC-20`` in a descending sort.
    """

    ERC_20 = "ERC-20"
    ERC_404 = "ERC-404"
    ERC_721 = "ERC-721"
    ERC_1155 = "ERC-1155"


TokenTypeColumn = Enum(
    TokenType,
    name="token_type",
    native_enum=False,
    length=16,
    values_callable=lambda members: [member.value for member in members],
    validate_strings=True,
)


class Token(Base, TimestampMixin):
    """One token contract."""

    __tablename__ = "tokens"

    contract_address_hash: Mapped[str] = mapped_column(AddressHash(), primary_key=True)
    name: Mapped[str | None] = mapped_column(Text(), nullable=True)
    symbol: Mapped[str | None] = mapped_column(Text(), nullable=True)
    type: Mapped[TokenType] = mapped_column(TokenTypeColumn, nullable=False)
    decimals: Mapped[int | None] = mapped_column(Integer(), nullable=True)
    total_supply: Mapped[Decimal | None] = mapped_column(Numeric(100, 0), nullable=True)
    holder_count: Mapped[int | None] = mapped_column(Integer(), nullable=True)
    circulating_market_cap: Mapped[Decimal | None] = mapped_column(Numeric(), nullable=True)

    def __repr__(self) -> str:
        return f"<Token(contract_address_hash={self.contract_address_hash!r}, type={self.type!r}, name={self.name!r})>"


class TokenBalance(Base, IntegerPKMixin, TimestampMixin):
    """Balance of one token held by one address, as of one block.

    Many snapshots exist per (address, token); the one at the highest
    ``block_number`` is current. Block numbers are unique within a group.
    """

    __tablename__ = "address_token_balances"
    __table_args__ = (
        UniqueConstraint(
            "address_hash",
            "token_contract_address_hash",
            "block_number",
            name="uq_address_token_balances_address_token_block",
        ),
        Index(
            "ix_address_token_balances_address_token_block",
            "address_hash",
            "token_contract_address_hash",
            "block_number",
        ),
    )

    address_hash: Mapped[str] = mapped_column(AddressHash(), nullable=False)
    token_contract_address_hash: Mapped[str] = mapped_column(
        AddressHash(),
        ForeignKey("tokens.contract_address_hash", ondelete="CASCADE"),
        nullable=False,
    )
    block_number: Mapped[int] = mapped_column(BigInteger(), nullable=False)
    value: Mapped[Decimal | None] = mapped_column(Numeric(100, 0), nullable=True)
    value_fetched_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    def __repr__(self) -> str:
        return (
            f"<TokenBalance(address_hash={self.address_hash!r}, "
            f"token={self.token_contract_address_hash!r}, block_number={self.block_number})>"
        )


__all__ = ["Token", "TokenBalance", "TokenType", "TokenTypeColumn"]
