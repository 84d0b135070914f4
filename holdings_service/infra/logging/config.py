"""Logging configuration setup.

Builds a ``logging.config.dictConfig`` dictionary from LoggingSettings:
- console handler on stderr, JSONL or plain text
- optional rotating file handler (always JSONL)
- all handlers on the root logger, application loggers propagate
"""

from __future__ import annotations

import logging
import logging.config
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from holdings_service.core.settings.logs import LoggingSettings

logger = logging.getLogger(__name__)
_LOGGING_INITIALIZED = False

_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def build_logging_config(log_settings: LoggingSettings) -> dict[str, Any]:
    """Build the dictConfig dictionary for the given settings.

    Args:
        log_settings: Logging settings instance.

    Returns:
        Configuration dict accepted by ``logging.config.dictConfig``.
    """
    formatters: dict[str, Any] = {
        "json": {
            "()": "holdings_service.infra.logging.formatters.JSONFormatter",
            "static": {"service": log_settings.service_name},
        },
        "text": {"format": _TEXT_FORMAT},
    }

    handlers: dict[str, Any] = {
        "console": {
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stderr",
            "formatter": "json" if log_settings.json_logs else "text",
        },
    }

    if log_settings.file_logging_active:
        assert log_settings.file_path is not None
        log_settings.file_path.parent.mkdir(parents=True, exist_ok=True)
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": str(log_settings.file_path),
            "maxBytes": log_settings.file_max_bytes,
            "backupCount": log_settings.file_backup_count,
            "encoding": "utf-8",
            "formatter": "json",
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "handlers": handlers,
        "loggers": {
            "sqlalchemy.engine": {"level": log_settings.sqlalchemy_level},
        },
        "root": {
            "level": log_settings.level,
            "handlers": list(handlers),
        },
    }


def configure_logging(log_settings: LoggingSettings) -> None:
    """Apply logging configuration.

    Args:
        log_settings: Logging settings instance.
    """
    logging.config.dictConfig(build_logging_config(log_settings))
    logging.captureWarnings(True)
    logger.debug(
        "Logging configured",
        extra={"level": log_settings.level, "json": log_settings.json_logs},
    )


def setup_logging(
    log_settings: LoggingSettings | None = None,
    *,
    force: bool = False,
) -> None:
    """Ensure logging is configured once across entrypoints.

    Args:
        log_settings: Optional logging settings instance. If omitted, settings
            are loaded via get_logging_settings().
        force: Reconfigure logging even if it was already initialized.
    """
    global _LOGGING_INITIALIZED

    if _LOGGING_INITIALIZED and not force:
        return

    if log_settings is None:
        from holdings_service.core.settings import get_logging_settings

        log_settings = get_logging_settings()

    configure_logging(log_settings)
    _LOGGING_INITIALIZED = True
