"""Core database package: declarative base, mixins and repository.

Base Classes and Mixins:
    - Base: Declarative base with constraint naming convention
    - IntegerPKMixin: Auto-increment integer primary key
    - TimestampMixin: inserted_at, updated_at tracking
    - AddressHash: Column type for 0x-prefixed 20-byte addresses

Repository:
    - BaseRepository[T]: Read helpers and keyset pagination with explicit
      session passing; driver failures surface as StorageUnavailableException
"""

from holdings_service.core.database.base import (
    ADDRESS_HASH_LENGTH,
    NAMING_CONVENTION,
    AddressHash,
    Base,
    IntegerPKMixin,
    TimestampMixin,
)
from holdings_service.core.database.repository import BaseRepository

__all__ = [
    "ADDRESS_HASH_LENGTH",
    "NAMING_CONVENTION",
    "AddressHash",
    "Base",
    "BaseRepository",
    "IntegerPKMixin",
    "TimestampMixin",
]
