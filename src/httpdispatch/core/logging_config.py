"""Central logging configuration utilities.

Provides a single composition-root driven `configure_logging` that wires
separate stdout/stderr sinks and injects a dispatch id into all log records.
Adapters and core code never mutate global logging; they only emit via
`LoggingPort` or standard module loggers.

The dispatch id is a context variable set by the Dispatcher for the lifetime
of one dispatch. Concurrent dispatches run in their own asyncio contexts, so
log lines of interleaved requests can be told apart.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional
import contextvars

# Dispatch id context variable (populated per dispatch by the Dispatcher)
dispatch_id_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "dispatch_id", default="-"
)

DEFAULT_FORMAT = (
    "[%(asctime)s] %(levelname)s %(name)s %(dispatch_id)s: %(message)s"
)


def coerce_level(level: int | str | None) -> int:
    if level is None:
        return logging.INFO
    if isinstance(level, int):
        return level
    key = str(level).upper().strip()
    # Python 3.11 mapping helper
    mapping_getter = getattr(logging, "getLevelNamesMapping", None)
    if callable(mapping_getter):
        mapping = mapping_getter()
        if isinstance(mapping, dict) and key in mapping:
            return mapping[key]
    return logging._nameToLevel.get(key, logging.INFO)


class _DispatchIdFilter(logging.Filter):
    """Inject dispatch id from contextvar into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:  # pragma: no cover - simple
        try:
            record.dispatch_id = dispatch_id_var.get()
        except LookupError:
            record.dispatch_id = "-"
        return True


class _MaxLevelFilter(logging.Filter):
    def __init__(self, max_level: int):
        super().__init__()
        self.max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:  # pragma: no cover
        return record.levelno <= self.max_level


class _MinLevelFilter(logging.Filter):
    def __init__(self, min_level: int):
        super().__init__()
        self.min_level = min_level

    def filter(self, record: logging.LogRecord) -> bool:  # pragma: no cover
        return record.levelno >= self.min_level


def configure_logging(
    level: int | str | None = None,
    fmt: Optional[str] = None,
) -> None:
    """Configure root logger with separate stdout/stderr sinks & dispatch id.

    Calling it again replaces the handlers installed by the previous call.
    """
    numeric_level = coerce_level(level)
    fmt = fmt or DEFAULT_FORMAT

    root = logging.getLogger()
    root.setLevel(numeric_level)

    # Clear existing handlers to avoid duplication on reconfigure
    for h in list(root.handlers):
        root.removeHandler(h)

    formatter = logging.Formatter(fmt)
    did_filter = _DispatchIdFilter()

    # stdout handler for DEBUG/INFO
    stdout_handler = logging.StreamHandler(stream=sys.stdout)
    stdout_handler.setLevel(logging.DEBUG)
    stdout_handler.addFilter(_MaxLevelFilter(logging.INFO))
    stdout_handler.addFilter(did_filter)
    stdout_handler.setFormatter(formatter)

    # stderr handler for WARNING+
    stderr_handler = logging.StreamHandler(stream=sys.stderr)
    stderr_handler.setLevel(logging.WARNING)
    stderr_handler.addFilter(_MinLevelFilter(logging.WARNING))
    stderr_handler.addFilter(did_filter)
    stderr_handler.setFormatter(formatter)

    root.addHandler(stdout_handler)
    root.addHandler(stderr_handler)

    logging.getLogger("httpdispatch").debug(
        "Logging configured level=%s", numeric_level
    )
