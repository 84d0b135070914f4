"""Logging infrastructure.

Basic usage:
    import logging

    from holdings_service.infra.logging import get_lazy_logger

    logger = logging.getLogger(__name__)
    lazy_logger = get_lazy_logger(__name__)

    logger.info("Holdings page served", extra={"owner": owner})
    lazy_logger.debug(lambda: f"Expensive: {describe(page)}")  # Only runs if DEBUG enabled
"""

from holdings_service.infra.logging.config import (
    build_logging_config,
    configure_logging,
    setup_logging,
)
from holdings_service.infra.logging.formatters import JSONFormatter
from holdings_service.infra.logging.lazy import LazyLoggerAdapter, get_lazy_logger

__all__ = [
    "JSONFormatter",
    "LazyLoggerAdapter",
    "build_logging_config",
    "configure_logging",
    "get_lazy_logger",
    "setup_logging",
]
