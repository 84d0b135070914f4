"""Address hash validators.

Addresses are 20-byte values written as ``0x`` followed by 40 hex digits.
They are normalized to lowercase so equality in storage is exact.
"""

from __future__ import annotations

import re

from holdings_service.core.exceptions import InvalidArgumentException

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


def is_address_hash(value: object) -> bool:
    """Whether ``value`` is a well-formed address hash string."""
    return isinstance(value, str) and _ADDRESS_RE.match(value) is not None


def normalize_address_hash(value: str) -> str:
    """Validate an address hash and return its lowercase form.

    Suitable as a pydantic field validator body.

    Raises:
        ValueError: If ``value`` is not ``0x`` plus 40 hex digits.
    """
    if not is_address_hash(value):
        raise ValueError("Address hash must be 0x followed by 40 hex digits")
    return value.lower()


def parse_address_hash(value: object) -> str:
    """Parse a caller-supplied owner or contract address.

    Args:
        value: Raw value from the caller.

    Returns:
        The lowercase address hash.

    Raises:
        InvalidArgumentException: If the value is not a well-formed address.
    """
    if not is_address_hash(value):
        raise InvalidArgumentException(
            detail="Address hash must be 0x followed by 40 hex digits",
            type="invalid-address-hash",
            extra={"value": value if isinstance(value, str) else repr(value)},
        )
    return value.lower()  # type: ignore[union-attr]


__all__ = [
    "is_address_hash",
    "normalize_address_hash",
    "parse_address_hash",
]
