"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI

from holdings_service.app.exception_handlers import configure_exception_handlers
from holdings_service.app.lifespan import lifespan
from holdings_service.app.router import setup_routers
from holdings_service.core.settings import get_app_settings


def create_app() -> FastAPI:
    """Build the application from the cached AppSettings.

    Exception handlers are registered before routers so that every route
    answers errors with problem details.
    """
    app_settings = get_app_settings()

    app = FastAPI(
        title=app_settings.title,
        version=app_settings.version,
        debug=app_settings.debug,
        lifespan=lifespan,
        docs_url="/docs" if app_settings.docs_enabled else None,
        redoc_url=None,
        openapi_url="/openapi.json" if app_settings.docs_enabled else None,
    )

    configure_exception_handlers(app)
    setup_routers(app, app_settings)

    return app


# Module-level instance for uvicorn
app = create_app()
