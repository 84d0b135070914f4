"""Pydantic schemas for token holdings and token listings."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from holdings_service.core.validators import normalize_address_hash
from holdings_service.features.tokens.models import Token, TokenBalance, TokenType


class BalanceSnapshot(BaseModel):
    """One historical balance record joined with its token's display fields.

    ``inserted_at`` and the display fields come from the token row, as in
    the storage-side holdings query, so both resolvers order ties alike.
    """

    owner: str
    contract_address_hash: str
    value: Decimal | None
    block_number: int = Field(ge=0)
    inserted_at: datetime = Field(description="When the token was first recorded")
    name: str | None = None
    symbol: str | None = None
    type: TokenType
    decimals: int | None = None
    circulating_market_cap: Decimal | None = None
    holder_count: int | None = None

    model_config = ConfigDict(from_attributes=True, frozen=True)

    @field_validator("owner", "contract_address_hash")
    @classmethod
    def _normalize_address(cls, v: str) -> str:
        return normalize_address_hash(v)

    @classmethod
    def from_balance(cls, balance: TokenBalance, token: Token) -> BalanceSnapshot:
        """Join a balance row with its token row."""
        return cls(
            owner=balance.address_hash,
            contract_address_hash=balance.token_contract_address_hash,
            value=balance.value,
            block_number=balance.block_number,
            inserted_at=token.inserted_at,
            name=token.name,
            symbol=token.symbol,
            type=token.type,
            decimals=token.decimals,
            circulating_market_cap=token.circulating_market_cap,
            holder_count=token.holder_count,
        )


class TokenHolding(BaseModel):
    """A token held by an owner, as of the owner's latest snapshot for it.

    Exactly one holding exists per (owner, contract_address_hash) and its
    balance is always positive.
    """

    contract_address_hash: str = Field(description="Token contract address")
    name: str | None = Field(default=None, description="Token name")
    symbol: str | None = Field(default=None, description="Token symbol")
    type: TokenType = Field(description="Token standard")
    decimals: int | None = Field(default=None, description="Token decimals")
    balance: Decimal = Field(gt=0, description="Latest balance held by the owner")
    inserted_at: datetime = Field(description="When the token was first recorded")
    circulating_market_cap: Decimal | None = Field(default=None, description="Token market cap")
    holder_count: int | None = Field(default=None, description="Number of token holders")

    model_config = ConfigDict(from_attributes=True, frozen=True)


class TokenListItem(BaseModel):
    """A token in the global listing, ranked by market data."""

    contract_address_hash: str = Field(description="Token contract address")
    name: str | None = Field(default=None, description="Token name")
    symbol: str | None = Field(default=None, description="Token symbol")
    type: TokenType = Field(description="Token standard")
    decimals: int | None = Field(default=None, description="Token decimals")
    total_supply: Decimal | None = Field(default=None, description="Total supply")
    circulating_market_cap: Decimal | None = Field(default=None, description="Token market cap")
    holder_count: int | None = Field(default=None, description="Number of token holders")

    model_config = ConfigDict(from_attributes=True, frozen=True)


__all__ = ["BalanceSnapshot", "TokenHolding", "TokenListItem"]
