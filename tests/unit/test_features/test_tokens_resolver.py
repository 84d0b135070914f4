"""Unit tests for in-memory latest-snapshot resolution."""

from __future__ import annotations

from decimal import Decimal

import pytest

from holdings_service.core.exceptions import IntegrityViolationException, InvalidArgumentException
from holdings_service.features.tokens.resolver import resolve_latest_holdings
from tests.utils import OTHER_OWNER, OWNER, address, snapshot

TOKEN_X = address(1)
TOKEN_Y = address(2)


def test_latest_zero_balance_drops_the_token() -> None:
    snapshots = [
        snapshot(TOKEN_X, 10, 5),
        snapshot(TOKEN_X, 12, 0),
        snapshot(TOKEN_Y, 7, 3),
    ]

    holdings = resolve_latest_holdings(OWNER, snapshots)

    assert [(h.contract_address_hash, h.balance) for h in holdings] == [(TOKEN_Y, Decimal(3))]


def test_highest_block_wins_regardless_of_input_order() -> None:
    snapshots = [
        snapshot(TOKEN_X, 30, 9),
        snapshot(TOKEN_X, 10, 1),
        snapshot(TOKEN_X, 20, 4),
    ]

    holdings = resolve_latest_holdings(OWNER, snapshots)

    assert [h.balance for h in holdings] == [Decimal(9)]


def test_older_positive_balance_does_not_resurface() -> None:
    snapshots = [snapshot(TOKEN_X, 1, 100), snapshot(TOKEN_X, 2, None)]

    assert resolve_latest_holdings(OWNER, snapshots) == []


def test_other_owners_are_ignored() -> None:
    snapshots = [
        snapshot(TOKEN_X, 1, 5, owner=OTHER_OWNER),
        snapshot(TOKEN_Y, 1, 2),
    ]

    holdings = resolve_latest_holdings(OWNER, snapshots)

    assert [h.contract_address_hash for h in holdings] == [TOKEN_Y]


def test_owner_is_matched_case_insensitively() -> None:
    holdings = resolve_latest_holdings(OWNER.upper().replace("0X", "0x"), [snapshot(TOKEN_X, 1, 5)])

    assert len(holdings) == 1


def test_one_holding_per_token_and_all_positive() -> None:
    snapshots = [
        snapshot(address(n), block, (n + block) % 3)
        for n in range(1, 8)
        for block in range(1, 5)
    ]

    holdings = resolve_latest_holdings(OWNER, snapshots)

    tokens = [h.contract_address_hash for h in holdings]
    assert len(tokens) == len(set(tokens))
    assert all(h.balance > 0 for h in holdings)
    assert {h.contract_address_hash: h.balance for h in holdings} == {
        address(n): Decimal((n + 4) % 3) for n in (1, 3, 4, 6, 7)
    }


def test_result_is_deterministic() -> None:
    snapshots = [snapshot(address(n), n, n) for n in range(1, 6)]

    assert resolve_latest_holdings(OWNER, snapshots) == resolve_latest_holdings(OWNER, reversed(snapshots))


def test_tie_at_latest_block_raises() -> None:
    snapshots = [snapshot(TOKEN_X, 20, 5), snapshot(TOKEN_X, 20, 7), snapshot(TOKEN_X, 10, 1)]

    with pytest.raises(IntegrityViolationException) as exc_info:
        resolve_latest_holdings(OWNER, snapshots)

    assert exc_info.value.extra == {"contract_address_hash": TOKEN_X, "block_number": 20}


def test_tie_below_latest_block_is_fine() -> None:
    snapshots = [snapshot(TOKEN_X, 10, 5), snapshot(TOKEN_X, 10, 7), snapshot(TOKEN_X, 20, 1)]

    assert [h.balance for h in resolve_latest_holdings(OWNER, snapshots)] == [Decimal(1)]


def test_malformed_owner_is_rejected() -> None:
    with pytest.raises(InvalidArgumentException):
        resolve_latest_holdings("not-an-address", [])
