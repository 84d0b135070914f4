"""HTTP tests for the token holdings and token listing endpoints."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

import pytest
from sqlalchemy.exc import OperationalError

from holdings_service.features.tokens.models import TokenType
from tests.utils import OWNER, address, balance, seed, token

if TYPE_CHECKING:
    from httpx import AsyncClient
    from sqlalchemy.ext.asyncio import AsyncSession

HOLDINGS_URL = f"/api/v1/addresses/{OWNER}/tokens"


@pytest.fixture
async def seeded(db_session: AsyncSession) -> None:
    await seed(
        db_session,
        [
            token(1, TokenType.ERC_721, "AAA", holder_count=3),
            token(2, TokenType.ERC_721, None),
            token(3, TokenType.ERC_20, "ZZZ", circulating_market_cap=Decimal("99.5")),
        ],
        [balance(1, 1, 7), balance(2, 1, 1), balance(3, 1, 2), balance(3, 2, 5)],
    )


class TestAddressTokens:
    @pytest.mark.asyncio
    async def test_pages_follow_next_cursor(self, client: AsyncClient, seeded: None) -> None:
        first = await client.get(HOLDINGS_URL, params={"page_size": 2})

        assert first.status_code == 200
        body = first.json()
        assert [item["contract_address_hash"] for item in body["items"]] == [address(1), address(2)]
        assert body["has_more"] is True
        assert Decimal(body["items"][0]["balance"]) == 7

        second = await client.get(HOLDINGS_URL, params={"page_size": 2, "cursor": body["next_cursor"]})

        body = second.json()
        assert [item["contract_address_hash"] for item in body["items"]] == [address(3)]
        assert Decimal(body["items"][0]["balance"]) == 5
        assert body["has_more"] is False
        assert body["next_cursor"] is None

    @pytest.mark.asyncio
    async def test_uppercase_owner_is_accepted(self, client: AsyncClient, seeded: None) -> None:
        response = await client.get(f"/api/v1/addresses/0x{'AA' * 20}/tokens")

        assert response.status_code == 200
        assert len(response.json()["items"]) == 3

    @pytest.mark.asyncio
    async def test_malformed_owner_is_problem_details(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/addresses/0xnothex/tokens")

        assert response.status_code == 400
        assert response.headers["content-type"].startswith("application/problem+json")
        problem = response.json()
        assert problem["type"] == "invalid-address-hash"
        assert problem["title"] == "Invalid Argument"
        assert problem["status"] == 400
        assert problem["instance"] == "/api/v1/addresses/0xnothex/tokens"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("page_size", [0, -5, 251])
    async def test_out_of_range_page_size(self, client: AsyncClient, page_size: int) -> None:
        response = await client.get(HOLDINGS_URL, params={"page_size": page_size})

        assert response.status_code == 400
        assert response.json()["type"] == "invalid-page-size"

    @pytest.mark.asyncio
    async def test_non_integer_page_size_is_validation_error(self, client: AsyncClient) -> None:
        response = await client.get(HOLDINGS_URL, params={"page_size": "many"})

        assert response.status_code == 422
        assert response.json()["type"] == "validation-error"

    @pytest.mark.asyncio
    async def test_garbage_cursor(self, client: AsyncClient) -> None:
        response = await client.get(HOLDINGS_URL, params={"cursor": "garbage"})

        assert response.status_code == 400
        assert response.json()["type"] == "invalid-cursor"

    @pytest.mark.asyncio
    async def test_storage_failure_is_503(
        self, client: AsyncClient, db_session: AsyncSession, monkeypatch
    ) -> None:
        async def broken_execute(*args, **kwargs):
            raise OperationalError("SELECT 1", {}, Exception("connection refused"))

        monkeypatch.setattr(db_session, "execute", broken_execute)

        response = await client.get(HOLDINGS_URL)

        assert response.status_code == 503
        assert response.json()["type"] == "storage-unavailable"


class TestTokens:
    @pytest.mark.asyncio
    async def test_tokens_ranked_by_market_cap(self, client: AsyncClient, seeded: None) -> None:
        response = await client.get("/api/v1/tokens")

        assert response.status_code == 200
        body = response.json()
        # cap first, then holder count, then unranked by name with NULL last
        assert [item["contract_address_hash"] for item in body["items"]] == [
            address(3),
            address(1),
            address(2),
        ]
        assert body["has_more"] is False

    @pytest.mark.asyncio
    async def test_holdings_cursor_is_rejected(self, client: AsyncClient, seeded: None) -> None:
        holdings = (await client.get(HOLDINGS_URL, params={"page_size": 1})).json()

        response = await client.get("/api/v1/tokens", params={"cursor": holdings["next_cursor"]})

        assert response.status_code == 400
        assert response.json()["detail"] == "Cursor was issued for a different listing"
