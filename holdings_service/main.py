"""Run the HTTP service with uvicorn."""

from __future__ import annotations

import uvicorn

from holdings_service.core.settings import get_app_settings, get_logging_settings


def main() -> None:
    """Start uvicorn with host, port and log level from settings."""
    app_settings = get_app_settings()
    uvicorn.run(
        "holdings_service.app.main:app",
        host=app_settings.host,
        port=app_settings.port,
        log_level=get_logging_settings().level.lower(),
        # Logging is configured by the application lifespan
        log_config=None,
    )


if __name__ == "__main__":
    main()
