"""API router for token holdings and token listings."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from holdings_service.core.dependencies import CursorPagination, get_db_session
from holdings_service.core.pagination import CursorPage
from holdings_service.core.schemas import ProblemDetails
from holdings_service.features.tokens.schemas import TokenHolding, TokenListItem
from holdings_service.features.tokens.service import HoldingsService
from holdings_service.infra.logging import get_lazy_logger

router = APIRouter(tags=["tokens"])

# Standard logger for INFO/WARNING/ERROR
logger = logging.getLogger(__name__)
# Lazy logger for DEBUG (zero overhead when DEBUG disabled)
lazy_logger = get_lazy_logger(__name__)

_ERROR_RESPONSES = {
    400: {"model": ProblemDetails, "description": "Invalid address, page size or cursor"},
    500: {"model": ProblemDetails, "description": "Balance data integrity violation"},
    503: {"model": ProblemDetails, "description": "Storage unavailable"},
}


def get_holdings_service(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> HoldingsService:
    """Build a HoldingsService bound to the request's session."""
    return HoldingsService(session)


HoldingsServiceDep = Annotated[HoldingsService, Depends(get_holdings_service)]


@router.get(
    "/addresses/{address_hash}/tokens",
    response_model=CursorPage[TokenHolding],
    summary="List an address's token holdings",
    description="Tokens with a positive latest balance, by type (descending) then name.",
    responses=_ERROR_RESPONSES,
)
async def list_address_tokens(
    address_hash: Annotated[str, Path(description="Owner address (0x + 40 hex digits)")],
    pagination: CursorPagination,
    service: HoldingsServiceDep,
) -> CursorPage[TokenHolding]:
    """List the holdings of ``address_hash``, one page at a time."""
    page = await service.list_holdings(
        address_hash,
        cursor=pagination.cursor,
        page_size=pagination.page_size,
    )
    lazy_logger.debug(
        lambda: f"GET /addresses/{address_hash}/tokens -> {len(page.items)} items, has_more={page.has_more}"
    )
    return page


@router.get(
    "/tokens",
    response_model=CursorPage[TokenListItem],
    summary="List tokens by market rank",
    description="All tokens by circulating market cap, then holder count, then name.",
    responses=_ERROR_RESPONSES,
)
async def list_tokens(
    pagination: CursorPagination,
    service: HoldingsServiceDep,
) -> CursorPage[TokenListItem]:
    """List all tokens, one page at a time."""
    page = await service.list_tokens(cursor=pagination.cursor, page_size=pagination.page_size)
    lazy_logger.debug(lambda: f"GET /tokens -> {len(page.items)} items, has_more={page.has_more}")
    return page


__all__ = ["get_holdings_service", "router"]
