"""Structured logging helpers shared by every backend module."""

from __future__ import annotations

import logging
import sys
from typing import Any

__all__ = ["configure_logging", "get_logger", "KeyValueFormatter"]

DEFAULT_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Attributes present on every LogRecord; anything else arrived through `extra=`.
_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__.keys()
) | {"message", "asctime", "taskName"}

_configured = False


class KeyValueFormatter(logging.Formatter):
    """Formatter that appends `extra=` fields as sorted key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        extras = _extract_extras(record)
        if not extras:
            return base
        rendered = " ".join(f"{key}={extras[key]!r}" for key in sorted(extras))
        return f"{base} | {rendered}"


def _extract_extras(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _RESERVED_ATTRS and not key.startswith("_")
    }


def configure_logging(
    level: str | int = "INFO",
    fmt: str = DEFAULT_LOG_FORMAT,
    *,
    force: bool = False,
) -> None:
    """Install the stdout handler on the root logger (idempotent unless forced)."""

    global _configured
    if _configured and not force:
        return
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_budget_ledger_handler", False):
            root.removeHandler(handler)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(KeyValueFormatter(fmt, DEFAULT_DATE_FORMAT))
    handler._budget_ledger_handler = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    root.setLevel(level.upper() if isinstance(level, str) else level)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a named logger; call sites pass ``__name__``."""

    return logging.getLogger(name)
