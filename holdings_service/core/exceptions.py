"""Custom exception classes for the holdings service.

The taxonomy is deliberately small:

- InvalidArgumentException: bad owner hash, bad page size, malformed or
  wrong-mode cursor. Surfaced directly to the caller.
- StorageUnavailableException: the storage read failed. Propagated as-is,
  no retries happen at this layer.
- IntegrityViolationException: two balance snapshots tie at the maximum
  block number for one (owner, token) group.
"""

from __future__ import annotations

from typing import Any


class AppException(Exception):
    """Base application exception.

    All custom exceptions should inherit from this class.
    Follows RFC 7807 Problem Details for HTTP APIs.

    Attributes:
        status_code: HTTP status code for the error.
        detail: Human-readable error message.
        type: Error type identifier (used in RFC 7807 problem details).
        title: Short, human-readable summary of the problem type.
        instance: URI reference that identifies the specific occurrence of the problem.
        extra: Additional context-specific information about the error.

    Example:
            raise AppException(
            status_code=400,
            detail="Cursor does not belong to this listing",
            type="invalid-cursor",
            title="Bad Request",
            extra={"expected_mode": "type_name"},
        )
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        type: str = "about:blank",
        title: str | None = None,
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        """Initialize application exception.

        Args:
            status_code: HTTP status code.
            detail: Human-readable error message.
            type: Error type identifier.
            title: Short summary of the problem type.
            instance: URI reference identifying this specific occurrence.
            extra: Additional context about the error.
        """
        self.status_code = status_code
        self.detail = detail
        self.type = type
        self.title = title or self._default_title(status_code)
        self.instance = instance
        self.extra = extra or {}
        super().__init__(detail)

    @staticmethod
    def _default_title(status_code: int) -> str:
        """Get default title for HTTP status code.

        Args:
            status_code: HTTP status code.

        Returns:
            Human-readable title for the status code.
        """
        titles = {
            400: "Bad Request",
            404: "Not Found",
            422: "Unprocessable Entity",
            500: "Internal Server Error",
            503: "Service Unavailable",
        }
        return titles.get(status_code, "Error")


class InvalidArgumentException(AppException):
    """Raised when a caller-supplied argument is unusable.

    Covers owner hashes that do not parse, non-positive or oversized page
    sizes, and cursors that are corrupt or were issued by another listing.

    Example:
            raise InvalidArgumentException(
            detail="page_size must be a positive integer",
            type="invalid-page-size",
            extra={"page_size": 0},
        )
    """

    def __init__(
        self,
        detail: str,
        type: str = "invalid-argument",
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        """Initialize invalid argument exception.

        Args:
            detail: Human-readable error message.
            type: Error type identifier.
            instance: URI reference identifying this specific occurrence.
            extra: Additional context about the error.
        """
        super().__init__(
            status_code=400,
            detail=detail,
            type=type,
            title="Invalid Argument",
            instance=instance,
            extra=extra,
        )


class StorageUnavailableException(AppException):
    """Raised when the storage collaborator cannot serve a read."""

    def __init__(
        self,
        detail: str = "Storage is temporarily unavailable",
        type: str = "storage-unavailable",
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        """Initialize storage unavailable exception.

        Args:
            detail: Human-readable error message.
            type: Error type identifier.
            instance: URI reference identifying this specific occurrence.
            extra: Additional context about the error.
        """
        super().__init__(
            status_code=503,
            detail=detail,
            type=type,
            title="Storage Unavailable",
            instance=instance,
            extra=extra,
        )


class IntegrityViolationException(AppException):
    """Raised when balance snapshots break the one-row-per-block invariant.

    Two snapshots for the same (owner, token) group sharing the maximum
    block number mean upstream data is corrupt; no snapshot is picked.

    Example:
            raise IntegrityViolationException(
            detail="2 snapshots share block 20",
            extra={"contract_address_hash": "0xab...", "block_number": 20},
        )
    """

    def __init__(
        self,
        detail: str,
        type: str = "integrity-violation",
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        """Initialize integrity violation exception.

        Args:
            detail: Human-readable error message.
            type: Error type identifier.
            instance: URI reference identifying this specific occurrence.
            extra: Additional context about the error.
        """
        super().__init__(
            status_code=500,
            detail=detail,
            type=type,
            title="Integrity Violation",
            instance=instance,
            extra=extra,
        )


__all__ = [
    "AppException",
    "IntegrityViolationException",
    "InvalidArgumentException",
    "StorageUnavailableException",
]
