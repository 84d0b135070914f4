"""Tests for logging formatter and dictConfig builder."""

from __future__ import annotations

import json
import logging
import sys

from holdings_service.core.settings import LoggingSettings
from holdings_service.infra.logging import JSONFormatter, build_logging_config, get_lazy_logger


def _record(msg: str, *args: object, **extra: object) -> logging.LogRecord:
    record = logging.LogRecord("holdings.test", logging.INFO, __file__, 1, msg, args, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_emits_single_line_with_extras() -> None:
    formatter = JSONFormatter(static={"service": "holdings-service"})

    line = formatter.format(_record("served %d items", 3, owner="0xabc"))

    payload = json.loads(line)
    assert "\n" not in line
    assert payload["message"] == "served 3 items"
    assert payload["level"] == "INFO"
    assert payload["service"] == "holdings-service"
    assert payload["owner"] == "0xabc"
    assert payload["timestamp"].endswith("Z")
    assert "trace_id" not in payload


def test_json_formatter_keeps_exception_on_one_line() -> None:
    formatter = JSONFormatter()
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = logging.LogRecord("x", logging.ERROR, __file__, 1, "failed", (), None)
        record.exc_info = sys.exc_info()

    payload = json.loads(formatter.format(record))

    assert "RuntimeError: boom" in payload["exception"]


def test_build_logging_config_text_console_without_file() -> None:
    config = build_logging_config(LoggingSettings(json_logs=False, level="DEBUG"))

    assert config["handlers"]["console"]["formatter"] == "text"
    assert "file" not in config["handlers"]
    assert config["root"] == {"level": "DEBUG", "handlers": ["console"]}


def test_build_logging_config_adds_rotating_file(tmp_path) -> None:
    path = tmp_path / "logs" / "service.jsonl"

    config = build_logging_config(LoggingSettings(file_enabled=True, file_path=path))

    assert config["handlers"]["file"]["class"] == "logging.handlers.RotatingFileHandler"
    assert config["handlers"]["file"]["filename"] == str(path)
    assert path.parent.is_dir()


def test_lazy_logger_skips_callable_when_disabled(caplog) -> None:
    calls = []
    lazy = get_lazy_logger("holdings.lazy-test")

    with caplog.at_level(logging.INFO, logger="holdings.lazy-test"):
        lazy.debug(lambda: calls.append("evaluated") or "message")

    assert calls == []


def test_lazy_logger_evaluates_message_and_args_when_enabled(caplog) -> None:
    lazy = get_lazy_logger("holdings.lazy-test")

    with caplog.at_level(logging.DEBUG, logger="holdings.lazy-test"):
        lazy.debug("page of %s items", lambda: 3)
        lazy.info(lambda: "resolved")

    assert [r.getMessage() for r in caplog.records] == ["page of 3 items", "resolved"]


def test_lazy_logger_merges_bound_context_with_call_extra(caplog) -> None:
    lazy = get_lazy_logger("holdings.lazy-test", component="resolver")

    with caplog.at_level(logging.INFO, logger="holdings.lazy-test"):
        lazy.info("resolved", extra={"owner": "0xabc"})

    record = caplog.records[0]
    assert record.component == "resolver"
    assert record.owner == "0xabc"
