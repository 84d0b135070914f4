"""Tests for settings models and cached loaders."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from holdings_service.core.settings import (
    AppSettings,
    DatabaseSettings,
    LoggingSettings,
    PaginationSettings,
    get_pagination_settings,
)


def test_pagination_defaults() -> None:
    settings = PaginationSettings()
    assert settings.default_page_size == 50
    assert settings.max_page_size == 250


def test_pagination_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PAGINATION_DEFAULT_PAGE_SIZE", "10")
    monkeypatch.setenv("PAGINATION_MAX_PAGE_SIZE", "20")

    settings = get_pagination_settings()

    assert settings.default_page_size == 10
    assert settings.max_page_size == 20
    assert get_pagination_settings() is settings


def test_pagination_default_cannot_exceed_max() -> None:
    with pytest.raises(ValidationError):
        PaginationSettings(default_page_size=300, max_page_size=250)


def test_settings_are_frozen() -> None:
    settings = PaginationSettings()
    with pytest.raises(ValidationError):
        settings.max_page_size = 10  # type: ignore[misc]


def test_sqlite_engine_kwargs_skip_pool_options() -> None:
    settings = DatabaseSettings(database_url="sqlite+aiosqlite:///:memory:")
    assert settings.is_sqlite
    assert settings.sqlalchemy_engine_kwargs() == {"echo": False}


def test_postgres_engine_kwargs_include_pool_options() -> None:
    settings = DatabaseSettings(database_url="postgresql+psycopg://u:p@localhost/holdings", pool_size=5)
    kwargs = settings.sqlalchemy_engine_kwargs()
    assert not settings.is_sqlite
    assert kwargs["pool_size"] == 5
    assert kwargs["pool_pre_ping"] is True


def test_log_json_toggle_reads_prefixed_variable(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_JSON", "false")
    assert LoggingSettings().json_logs is False


def test_log_file_inactive_by_default() -> None:
    assert LoggingSettings().file_logging_active is False


@pytest.mark.parametrize("prefix", ["api/v1", "/api/v1/", "/api v1"])
def test_api_prefix_must_be_rooted_without_trailing_slash(prefix: str) -> None:
    with pytest.raises(ValidationError):
        AppSettings(api_prefix=prefix)


def test_app_reads_prefixed_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_API_PREFIX", "/api/v2")
    monkeypatch.setenv("APP_DOCS_ENABLED", "false")

    settings = AppSettings()

    assert settings.api_prefix == "/api/v2"
    assert settings.docs_enabled is False
