"""Cursor encoding and decoding for keyset pagination.

Cursors are opaque strings that encode the sort-key values of the last
item on a page, tagged with the sort mode that produced them so a cursor
issued by one listing is rejected by another.

The cursor format is:
1. JSON object ``{"m": <mode>, "v": {<field>: <value>, ...}}``
2. Base64 URL-safe encoded for use in URLs

Cursor models are pydantic models with a ``mode`` literal field; a
listing decodes against the union of the modes it accepts (usually one).

Example payload:
    {"m": "type_name", "v": {"name": "Tether", "type": "ERC-20", "inserted_at": "2026-01-15T10:30:00Z"}}
"""

from __future__ import annotations

import base64
import binascii
import json
from typing import Any

from pydantic import BaseModel, TypeAdapter, ValidationError

from holdings_service.core.exceptions import InvalidArgumentException


class CursorCodec:
    """Encode and decode pagination cursors.

    Usage:
        token = CursorCodec.encode(TypeNameCursor(name="A", type=..., inserted_at=...))
        cursor = CursorCodec.decode(token, TypeAdapter(TypeNameCursor))
    """

    @staticmethod
    def encode(cursor: BaseModel) -> str:
        """Encode a cursor model to an opaque string.

        Args:
            cursor: Cursor model carrying a ``mode`` field.

        Returns:
            URL-safe base64 encoded string.
        """
        values = cursor.model_dump(mode="json", exclude={"mode"})
        payload = {"m": getattr(cursor, "mode"), "v": values}
        json_str = json.dumps(payload, separators=(",", ":"), sort_keys=True)
        return base64.urlsafe_b64encode(json_str.encode()).decode()

    @staticmethod
    def decode[C](cursor: str, adapter: TypeAdapter[C]) -> C:
        """Decode a cursor string into the cursor model it encodes.

        Args:
            cursor: URL-safe base64 encoded cursor string.
            adapter: Type adapter for the accepted cursor model(s).

        Returns:
            The validated cursor model.

        Raises:
            InvalidArgumentException: If the cursor is corrupt, or was issued
                for a sort mode the adapter does not accept.
        """
        payload = CursorCodec._load(cursor)
        try:
            return adapter.validate_python({"mode": payload["m"], **payload["v"]})
        except ValidationError as e:
            raise InvalidArgumentException(
                detail="Cursor does not match this listing",
                type="invalid-cursor",
                extra={"mode": payload["m"], "errors": e.error_count()},
            ) from e

    @staticmethod
    def _load(cursor: str) -> dict[str, Any]:
        try:
            json_str = base64.urlsafe_b64decode(cursor.encode()).decode()
            payload = json.loads(json_str)
        except (binascii.Error, UnicodeDecodeError, ValueError) as e:
            raise InvalidArgumentException(
                detail="Cursor is not a valid pagination token",
                type="invalid-cursor",
            ) from e

        if (
            not isinstance(payload, dict)
            or not isinstance(payload.get("m"), str)
            or not isinstance(payload.get("v"), dict)
        ):
            raise InvalidArgumentException(
                detail="Cursor is not a valid pagination token",
                type="invalid-cursor",
            )
        return payload


__all__ = ["CursorCodec"]
