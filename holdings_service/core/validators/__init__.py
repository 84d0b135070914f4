"""Reusable validators for caller input and schema fields.

Usage:
    from holdings_service.core.validators import parse_address_hash

    owner = parse_address_hash(raw_owner)  # raises InvalidArgumentException
"""

from __future__ import annotations

from holdings_service.core.validators.address import (
    is_address_hash,
    normalize_address_hash,
    parse_address_hash,
)

__all__ = [
    "is_address_hash",
    "normalize_address_hash",
    "parse_address_hash",
]
