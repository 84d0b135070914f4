"""Service layer base classes."""

from holdings_service.core.services.base import BaseService

__all__ = ["BaseService"]
