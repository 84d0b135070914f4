"""Router registration."""

from __future__ import annotations

from typing import TYPE_CHECKING

from holdings_service.features.tokens.router import router as tokens_router

if TYPE_CHECKING:
    from fastapi import FastAPI

    from holdings_service.core.settings import AppSettings


def setup_routers(app: FastAPI, app_settings: AppSettings) -> None:
    """Mount feature routers under the API prefix."""
    app.include_router(tokens_router, prefix=app_settings.api_prefix)
