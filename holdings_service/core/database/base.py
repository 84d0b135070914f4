"""Declarative base and column mixins shared by the storage models.

Models mix in only what they need:

    class Token(Base, TimestampMixin):
        __tablename__ = "tokens"
        contract_address_hash: Mapped[str] = mapped_column(AddressHash, primary_key=True)

    class TokenBalance(Base, IntegerPKMixin, TimestampMixin):
        __tablename__ = "address_token_balances"
"""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import DateTime, MetaData, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql import func

# Consistent naming convention for database constraints
# Ensures predictable names for migrations and schema management
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# 20-byte addresses as lowercase 0x-prefixed hex
ADDRESS_HASH_LENGTH = 42


def AddressHash() -> String:  # noqa: N802
    """Column type for a lowercase ``0x``-prefixed 20-byte address."""
    return String(ADDRESS_HASH_LENGTH)


class Base(DeclarativeBase):
    """Declarative base with consistent constraint naming.

    Every model sets ``__tablename__`` explicitly.
    """

    metadata = MetaData(naming_convention=NAMING_CONVENTION)


class IntegerPKMixin:
    """Integer auto-increment primary key.

    Provides:
        id: Auto-incrementing integer primary key
    """

    __allow_unmapped__ = True

    id: Mapped[int] = mapped_column(
        primary_key=True,
        autoincrement=True,
        comment="Auto-incrementing integer primary key",
    )


class TimestampMixin:
    """Timestamp tracking for insert and update operations.

    Uses both Python-side defaults (for test environments) and database
    server defaults (for direct SQL inserts).

    Provides:
        inserted_at: Timestamp of record insertion (immutable)
        updated_at: Timestamp of last modification (auto-updates)
    """

    __allow_unmapped__ = True

    inserted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        server_default=func.now(),
        nullable=False,
        comment="Timestamp of record insertion",
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        server_default=func.now(),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
        comment="Timestamp of last update",
    )


__all__ = [
    "ADDRESS_HASH_LENGTH",
    "NAMING_CONVENTION",
    "AddressHash",
    "Base",
    "IntegerPKMixin",
    "TimestampMixin",
]
