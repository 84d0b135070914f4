"""Test data builders shared across test modules."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from holdings_service.features.tokens.models import Token, TokenBalance, TokenType
from holdings_service.features.tokens.schemas import BalanceSnapshot, TokenHolding

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sqlalchemy.ext.asyncio import AsyncSession

# Naive UTC so values compare equal after a round trip through SQLite
BASE_TIME = datetime(2026, 1, 15, 10, 30, 0)

OWNER = "0x" + "aa" * 20
OTHER_OWNER = "0x" + "bb" * 20


def address(n: int) -> str:
    """Deterministic lowercase address hash for ``n``."""
    return f"0x{n:040x}"


def at(minutes: int) -> datetime:
    return BASE_TIME + timedelta(minutes=minutes)


def holding(
    type: TokenType,  # noqa: A002
    name: str | None,
    *,
    n: int,
    minutes: int = 0,
    balance: int = 1,
    **fields: Any,
) -> TokenHolding:
    return TokenHolding(
        contract_address_hash=address(n),
        name=name,
        symbol=fields.pop("symbol", None),
        type=type,
        decimals=fields.pop("decimals", 18),
        balance=Decimal(balance),
        inserted_at=at(minutes),
        **fields,
    )


def snapshot(
    token: str,
    block: int,
    value: int | None,
    *,
    owner: str = OWNER,
    type: TokenType = TokenType.ERC_20,  # noqa: A002
    name: str | None = None,
    minutes: int = 0,
) -> BalanceSnapshot:
    return BalanceSnapshot(
        owner=owner,
        contract_address_hash=token,
        value=None if value is None else Decimal(value),
        block_number=block,
        inserted_at=at(minutes),
        name=name,
        type=type,
    )


def token(
    n: int,
    type: TokenType = TokenType.ERC_20,  # noqa: A002
    name: str | None = None,
    *,
    minutes: int = 0,
    **fields: Any,
) -> Token:
    return Token(
        contract_address_hash=address(n),
        name=name,
        type=type,
        inserted_at=at(minutes),
        **fields,
    )


def balance(
    token_n: int,
    block: int,
    value: int | None,
    *,
    owner: str = OWNER,
) -> TokenBalance:
    return TokenBalance(
        address_hash=owner,
        token_contract_address_hash=address(token_n),
        block_number=block,
        value=None if value is None else Decimal(value),
    )


async def seed(
    session: AsyncSession,
    tokens: Iterable[Token],
    balances: Iterable[TokenBalance] = (),
) -> None:
    """Insert tokens, then balances, and flush."""
    session.add_all(list(tokens))
    await session.flush()
    session.add_all(list(balances))
    await session.flush()
