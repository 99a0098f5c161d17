"""
Internal diagnostics for the sink.

Components report what they are doing through `debug()` and `warn()`:

    diagnostics.debug("writer", "batch flushed", batch_key="logs:", size=3)

Each call builds a structured event and passes it to the active writer. The
default writer forwards the event to the stdlib logger
``ddlogs_sink.diagnostics`` at the matching level, rendered as one compact
JSON document, so the host application's logging configuration decides
whether diagnostics are visible. Diagnostics never raise.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable

import orjson

_logger = logging.getLogger("ddlogs_sink.diagnostics")

_LEVELS = {"DEBUG": logging.DEBUG, "WARN": logging.WARNING}


def _default_writer(event: dict[str, Any]) -> None:
    level = _LEVELS.get(event.get("level", "DEBUG"), logging.DEBUG)
    if not _logger.isEnabledFor(level):
        return
    line = orjson.dumps(event, default=str).decode("utf-8")
    _logger.log(level, line)


_writer: Callable[[dict[str, Any]], None] = _default_writer


def _emit(level: str, component: str, message: str, fields: dict[str, Any]) -> None:
    event: dict[str, Any] = {
        "ts": time.time(),
        "level": level,
        "component": component,
        "message": message,
    }
    event.update(fields)
    try:
        _writer(event)
    except Exception:
        # Diagnostics must never break the delivery path
        pass


def debug(component: str, message: str, **fields: Any) -> None:
    _emit("DEBUG", component, message, fields)


def warn(component: str, message: str, **fields: Any) -> None:
    _emit("WARN", component, message, fields)


def set_writer_for_tests(writer: Callable[[dict[str, Any]], None]) -> None:
    """Replace the active writer (tests only)."""
    global _writer
    _writer = writer


def _reset_for_tests() -> None:
    global _writer
    _writer = _default_writer


__all__ = ["debug", "warn", "set_writer_for_tests"]
