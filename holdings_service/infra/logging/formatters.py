"""JSON Lines formatter with trace correlation."""
from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import Any

from opentelemetry import trace

# Attributes every LogRecord carries; anything else arrived through ``extra``
_RECORD_ATTRIBUTES = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {
    "message",
    "asctime",
}


class JSONFormatter(logging.Formatter):
    """Render each record as one JSON object per line.

    The payload holds ``level``, ``logger``, ``message`` and a UTC
    ``timestamp`` with millisecond precision, then the formatter's static
    fields, then whatever the call site passed in ``extra`` (owner,
    operation, block_number and so on). ``trace_id`` and ``span_id`` are
    added while an OpenTelemetry span is recording.

    Example output:
        {"level": "ERROR", "logger": "repository.Token", "message": "Storage read failed",
         "timestamp": "2026-01-15T10:30:00.123Z", "service": "holdings-service",
         "operation": "db.page_holdings"}
    """

    def __init__(
        self,
        fmt_keys: dict[str, str] | None = None,
        static: dict[str, Any] | None = None,
    ) -> None:
        """Initialize JSON formatter.

        Args:
            fmt_keys: Output key to LogRecord attribute mapping.
            static: Fields added to every line, e.g. ``{"service": "holdings-service"}``.
        """
        super().__init__()
        self.fmt_keys = fmt_keys or {"level": "levelname", "logger": "name", "message": "message"}
        self.static = static or {}

    def format(self, record: logging.LogRecord) -> str:
        record.message = record.getMessage()
        data: dict[str, Any] = {key: getattr(record, attr, None) for key, attr in self.fmt_keys.items()}
        data["timestamp"] = (
            datetime.fromtimestamp(record.created, tz=UTC)
            .isoformat(timespec="milliseconds")
            .replace("+00:00", "Z")
        )

        context = trace.get_current_span().get_span_context()
        if context.is_valid:
            data["trace_id"] = format(context.trace_id, "032x")
            data["span_id"] = format(context.span_id, "016x")

        # Tracebacks stay on the record's single line
        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info).replace("\n", "\\n")
        if record.stack_info:
            data["stack_trace"] = record.stack_info.replace("\n", "\\n")

        data.update(self.static)
        for key, value in vars(record).items():
            if key not in _RECORD_ATTRIBUTES and key not in data:
                data[key] = value

        return json.dumps(data, ensure_ascii=False, default=str)
