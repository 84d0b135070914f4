"""Cached settings loaders.

Each settings group is read from the environment and validated on first
use, then shared for the life of the process. Tests call
``clear_all_caches`` so environment overrides take effect.
"""

from __future__ import annotations

from functools import lru_cache

from .app import AppSettings
from .database import DatabaseSettings
from .logs import LoggingSettings
from .pagination import PaginationSettings


@lru_cache(maxsize=1)
def get_app_settings() -> AppSettings:
    return AppSettings()


@lru_cache(maxsize=1)
def get_db_settings() -> DatabaseSettings:
    return DatabaseSettings()


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    return LoggingSettings()


@lru_cache(maxsize=1)
def get_pagination_settings() -> PaginationSettings:
    """Page size default and ceiling for both listings."""
    return PaginationSettings()


_LOADERS = (get_app_settings, get_db_settings, get_logging_settings, get_pagination_settings)


def clear_all_caches() -> None:
    """Forget every cached settings instance."""
    for loader in _LOADERS:
        loader.cache_clear()
