"""Token holdings feature.

Resolves an address's current token balances from its balance history and
serves them, and the global token listing, with keyset pagination.
"""

from holdings_service.features.tokens.models import Token, TokenBalance, TokenType
from holdings_service.features.tokens.ordering import (
    MARKET_RANK_ORDER,
    TYPE_NAME_ORDER,
    MarketRankCursor,
    TypeNameCursor,
)
from holdings_service.features.tokens.resolver import resolve_latest_holdings
from holdings_service.features.tokens.schemas import BalanceSnapshot, TokenHolding, TokenListItem
from holdings_service.features.tokens.service import HoldingsService, paginate_holdings

__all__ = [
    "MARKET_RANK_ORDER",
    "TYPE_NAME_ORDER",
    "BalanceSnapshot",
    "HoldingsService",
    "MarketRankCursor",
    "Token",
    "TokenBalance",
    "TokenHolding",
    "TokenListItem",
    "TokenType",
    "TypeNameCursor",
    "paginate_holdings",
    "resolve_latest_holdings",
]
