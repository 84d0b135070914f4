"""Unit tests for cursor encoding and decoding."""

from __future__ import annotations

import base64
import json
from datetime import datetime
from decimal import Decimal

import pytest
from pydantic import TypeAdapter

from holdings_service.core.exceptions import InvalidArgumentException
from holdings_service.core.pagination import CursorCodec
from holdings_service.features.tokens.models import TokenType
from holdings_service.features.tokens.ordering import (
    MarketRankCursor,
    TypeNameCursor,
    decode_cursor,
)


def _raw(payload: object) -> str:
    return base64.urlsafe_b64encode(json.dumps(payload).encode()).decode()


class TestCursorCodec:
    def test_encode_uses_short_keys(self):
        cursor = TypeNameCursor(name="Tether", type=TokenType.ERC_20, inserted_at=datetime(2026, 1, 15, 10, 30))

        decoded = json.loads(base64.urlsafe_b64decode(CursorCodec.encode(cursor)))

        assert decoded == {
            "m": "type_name",
            "v": {"inserted_at": "2026-01-15T10:30:00", "name": "Tether", "type": "ERC-20"},
        }

    def test_type_name_cursor_round_trips(self):
        cursor = TypeNameCursor(name=None, type=TokenType.ERC_721, inserted_at=datetime(2026, 3, 1, 8, 0, 0, 123456))

        decoded = CursorCodec.decode(CursorCodec.encode(cursor), TypeAdapter(TypeNameCursor))

        assert decoded == cursor
        assert decoded.values() == (TokenType.ERC_721, None, datetime(2026, 3, 1, 8, 0, 0, 123456))

    def test_market_rank_cursor_round_trips_decimals_exactly(self):
        cursor = MarketRankCursor(
            circulating_market_cap=Decimal("123456789.000000000123"),
            holder_count=None,
            name="Dai",
            contract_address_hash="0x" + "0a" * 20,
        )

        decoded = decode_cursor(cursor.encode(), MarketRankCursor)

        assert decoded == cursor
        assert decoded.circulating_market_cap == Decimal("123456789.000000000123")

    def test_cursor_is_url_safe(self):
        cursor = TypeNameCursor(name="???>>>", type=TokenType.ERC_20, inserted_at=datetime(2026, 1, 1))

        assert set(cursor.encode()) <= set("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_=")

    @pytest.mark.parametrize(
        "token",
        [
            "not base64!",
            base64.urlsafe_b64encode(b"not json").decode(),
            _raw(["m", "v"]),
            _raw({"m": "type_name"}),
            _raw({"m": 1, "v": {}}),
            _raw({"m": "type_name", "v": {"name": "x"}}),
            _raw({"m": "unknown", "v": {}}),
        ],
    )
    def test_malformed_cursor_is_invalid_argument(self, token):
        with pytest.raises(InvalidArgumentException) as exc_info:
            decode_cursor(token, TypeNameCursor)

        assert exc_info.value.type == "invalid-cursor"
        assert exc_info.value.status_code == 400

    def test_cursor_from_another_listing_is_rejected(self):
        token = MarketRankCursor(
            circulating_market_cap=None,
            holder_count=None,
            name=None,
            contract_address_hash="0x" + "01" * 20,
        ).encode()

        with pytest.raises(InvalidArgumentException) as exc_info:
            decode_cursor(token, TypeNameCursor)

        assert exc_info.value.extra == {"mode": "market_rank"}

    def test_cursor_carrying_foreign_fields_is_rejected(self):
        token = _raw(
            {
                "m": "type_name",
                "v": {
                    "name": "Tether",
                    "type": "ERC-20",
                    "inserted_at": "2026-01-15T10:30:00",
                    "holder_count": 12,
                },
            }
        )

        with pytest.raises(InvalidArgumentException) as exc_info:
            decode_cursor(token, TypeNameCursor)

        assert exc_info.value.type == "invalid-cursor"
