"""JSON log lines for discovery operations.

Every record carries the current trace and span ids plus the discovery
operation it was emitted under, so one search or related lookup can be
followed across the search, store and service loggers.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
import logging
from pathlib import Path
import sys
from typing import IO, Any

import orjson

from content_discovery.observability.context import get_trace_context


SERVICE_NAME = "content-discovery"
MAX_MESSAGE_LENGTH = 2000
MAX_EXTRA_LENGTH = 500
SENSITIVE_KEYS = frozenset({"password", "token", "api_key", "secret", "authorization"})
PLAIN_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Attributes every LogRecord has; anything else arrived through ``extra=``
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__.keys() | {"message", "asctime"}
)


def _clip(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[:limit] + "..."


def _scrub(key: str, value: Any) -> Any:
    if key.lower() in SENSITIVE_KEYS:
        return "[REDACTED]"
    if isinstance(value, str):
        return _clip(value, MAX_EXTRA_LENGTH)
    return value


def _fallback(value: Any) -> Any:
    """Make values orjson does not know how to encode serializable."""
    if isinstance(value, (set, frozenset)):
        try:
            return sorted(value)
        except TypeError:
            return list(value)
    if isinstance(value, (bytes, bytearray)):
        return value.decode("utf-8", errors="replace")
    if isinstance(value, (Path, Exception)):
        return str(value)
    return repr(value)


class JsonFormatter(logging.Formatter):
    """Render records as single-line JSON objects."""

    def __init__(self, static_fields: Mapping[str, Any] | None = None) -> None:
        super().__init__()
        self.static_fields = dict(static_fields or {"service": SERVICE_NAME})

    def format(self, record: logging.LogRecord) -> str:
        ctx = get_trace_context()
        entry: dict[str, Any] = {
            **self.static_fields,
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "component": record.name.rsplit(".", 1)[-1],
            "message": _clip(record.getMessage(), MAX_MESSAGE_LENGTH),
            "trace_id": ctx.get("trace_id", ""),
            "span_id": ctx.get("span_id", ""),
        }
        if ctx.get("operation"):
            entry["operation"] = ctx["operation"]
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        entry.update(
            (key, _scrub(key, value))
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRS and not key.startswith("_")
        )
        return orjson.dumps(entry, default=_fallback).decode("utf-8")


def configure_logging(
    level: str = "INFO",
    json_output: bool = True,
    *,
    stream: IO[str] | None = None,
    logger_levels: Mapping[str, str] | None = None,
) -> logging.Handler:
    """Route all logging through one handler on the root logger.

    Args:
        level: Root level name, case-insensitive; unknown names fall back to INFO
        json_output: JSON lines when True, plain text otherwise
        stream: Destination, stderr by default so stdout stays clean for CLI output
        logger_levels: Per-logger level overrides, e.g. ``{"content_discovery.search": "debug"}``

    Returns:
        The installed handler
    """
    root = logging.getLogger()
    root.setLevel(logging.getLevelNamesMapping().get(level.upper(), logging.INFO))
    for existing in list(root.handlers):
        root.removeHandler(existing)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(JsonFormatter() if json_output else logging.Formatter(PLAIN_FORMAT))
    root.addHandler(handler)

    for name, name_level in (logger_levels or {}).items():
        logging.getLogger(name).setLevel(name_level.upper())
    return handler
