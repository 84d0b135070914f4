"""Deferred log messages.

Debug lines in the repository and service describe whole pages; building
them is skipped unless DEBUG is enabled for the logger. A message, or any
of its ``%`` arguments, may be a zero-argument callable that is invoked
only once the level check passes.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, MutableMapping
from typing import Any


def _resolve(value: Any) -> Any:
    return value() if callable(value) else value


class LazyLoggerAdapter(logging.LoggerAdapter):
    """LoggerAdapter that evaluates callable messages on demand.

    The bound context is merged under any ``extra`` given per call, so a
    call site can add fields without losing the adapter's own.

    Example:
        ```python
        lazy = LazyLoggerAdapter(logging.getLogger(__name__), {"component": "resolver"})
        lazy.debug(lambda: f"resolved {describe(groups)}")
        lazy.info("page of %s", lambda: len(page.items), extra={"owner": owner})
        ```
    """

    def log(self, level: int, msg: str | Callable[[], str], *args: Any, **kwargs: Any) -> None:
        if not self.isEnabledFor(level):
            return
        super().log(level, _resolve(msg), *map(_resolve, args), **kwargs)

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        if self.extra:
            kwargs["extra"] = {**self.extra, **(kwargs.get("extra") or {})}
        return msg, kwargs


def get_lazy_logger(name: str, **context: Any) -> LazyLoggerAdapter:
    """Return a LazyLoggerAdapter for ``name`` bound to ``context``."""
    return LazyLoggerAdapter(logging.getLogger(name), context)
