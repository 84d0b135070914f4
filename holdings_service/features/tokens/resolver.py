"""Latest-snapshot resolution over materialized balance snapshots.

The storage-side equivalent lives in ``TokenRepository.latest_balances``;
both pick, per (owner, token), the snapshot at the highest block number
and drop non-positive balances.
"""

from __future__ import annotations

import logging
from itertools import groupby
from operator import attrgetter
from typing import TYPE_CHECKING

from holdings_service.core.exceptions import IntegrityViolationException
from holdings_service.core.validators import parse_address_hash
from holdings_service.features.tokens.schemas import TokenHolding
from holdings_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from collections.abc import Iterable

    from holdings_service.features.tokens.schemas import BalanceSnapshot

logger = logging.getLogger(__name__)
_lazy = get_lazy_logger(__name__)

_group_key = attrgetter("contract_address_hash")


def latest_snapshot(group: list[BalanceSnapshot]) -> BalanceSnapshot:
    """Return the single snapshot at the group's highest block number.

    Raises:
        IntegrityViolationException: If more than one snapshot shares the
            highest block number.
    """
    top = max(snapshot.block_number for snapshot in group)
    latest = [snapshot for snapshot in group if snapshot.block_number == top]
    if len(latest) > 1:
        head = latest[0]
        logger.error(
            "Balance snapshots tie at the latest block",
            extra={
                "owner": head.owner,
                "contract_address_hash": head.contract_address_hash,
                "block_number": top,
                "count": len(latest),
            },
        )
        raise IntegrityViolationException(
            detail=f"{len(latest)} balance snapshots share block {top}",
            extra={"contract_address_hash": head.contract_address_hash, "block_number": top},
        )
    return latest[0]


def resolve_latest_holdings(owner: str, snapshots: Iterable[BalanceSnapshot]) -> list[TokenHolding]:
    """Resolve an owner's current holdings from their balance history.

    Args:
        owner: Owner address hash.
        snapshots: Snapshots for any owners; only ``owner``'s are used.

    Returns:
        One holding per token whose latest balance is positive, ordered by
        contract address.

    Raises:
        InvalidArgumentException: If ``owner`` is not a valid address hash.
        IntegrityViolationException: If two snapshots for one token tie at
            the latest block.

    Example:
        resolve_latest_holdings(owner, [
            snap(token=X, block=10, value=5),
            snap(token=X, block=12, value=0),
            snap(token=Y, block=7, value=3),
        ])
        # -> [holding(Y, balance=3)]; X's latest balance is 0
    """
    owner = parse_address_hash(owner)
    owned = sorted(
        (snapshot for snapshot in snapshots if snapshot.owner == owner),
        key=_group_key,
    )

    holdings: list[TokenHolding] = []
    for _, group in groupby(owned, key=_group_key):
        latest = latest_snapshot(list(group))
        if latest.value is None or latest.value <= 0:
            continue
        holdings.append(
            TokenHolding(
                contract_address_hash=latest.contract_address_hash,
                name=latest.name,
                symbol=latest.symbol,
                type=latest.type,
                decimals=latest.decimals,
                balance=latest.value,
                inserted_at=latest.inserted_at,
                circulating_market_cap=latest.circulating_market_cap,
                holder_count=latest.holder_count,
            )
        )

    _lazy.debug(
        lambda: f"resolve_latest_holdings({owner}): {len(owned)} snapshots -> {len(holdings)} holdings"
    )
    return holdings


__all__ = ["latest_snapshot", "resolve_latest_holdings"]
