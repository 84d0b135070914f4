"""Application lifespan management.

Startup configures logging; shutdown disposes of the database engine.
The engine itself is created lazily on the first request.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from holdings_service.core.settings import get_app_settings
from holdings_service.infra.database import close_database
from holdings_service.infra.logging import setup_logging

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Set up logging on startup and release connections on shutdown."""
    setup_logging()
    app_settings = get_app_settings()
    logger.info(
        "Application starting",
        extra={
            "service": app_settings.service_name,
            "version": app_settings.version,
            "environment": app_settings.environment,
        },
    )
    try:
        yield
    finally:
        await close_database()
        logger.info("Application stopped", extra={"service": app_settings.service_name})
