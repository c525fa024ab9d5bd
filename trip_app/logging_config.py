"""JSON logging for the trip capsule engine.

Every record carries the active correlation id so one planner request can be
followed across the builder, the weather provider and the API layer. Free
text and wardrobe details are scrubbed before they are written.
"""

from __future__ import annotations

import contextlib
import contextvars
import json
import logging
import os
import re
import uuid
from typing import Any, Dict, Iterator, Optional

CORRELATION_ID: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar("correlation_id", default=None)

# Attributes every LogRecord has; anything else arrived through ``extra``.
_RECORD_ATTRIBUTES = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}
_SENSITIVE_KEYS = frozenset(
    {
        "email",
        "image_url",
        "imageUrl",
        "location_label",
        "locationLabel",
        "prompt",
        "user_id",
        "wardrobe",
    }
)
_EMAIL = re.compile(r"[\w.\-]+@[\w.\-]+")


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        message = super().format(record)
        payload: Dict[str, Any] = {
            "timestamp": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "logger": record.name,
            "message": message,
            "event": getattr(record, "event", message),
            "correlation_id": getattr(record, "correlation_id", None) or CORRELATION_ID.get(),
        }
        extras = {
            key: value
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRIBUTES and key not in payload
        }
        payload.update(redact_for_log(extras))
        return json.dumps(payload, default=str)


def configure_logging(level: int | str | None = None) -> None:
    """Send JSON records to stderr at ``level`` (``LOG_LEVEL`` env, default INFO)."""

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    logging.basicConfig(level=level or os.getenv("LOG_LEVEL", "INFO"), handlers=[handler], force=True)


def redact_for_log(payload: Any) -> Any:
    """Scrub sensitive keys, e-mail addresses and URLs from a log payload."""

    if isinstance(payload, dict):
        return {
            key: "[redacted]" if key in _SENSITIVE_KEYS else redact_for_log(value)
            for key, value in payload.items()
        }
    if isinstance(payload, (list, tuple, set, frozenset)):
        return [redact_for_log(value) for value in payload]
    if isinstance(payload, str):
        if _EMAIL.search(payload):
            return _EMAIL.sub("[redacted-email]", payload)
        return "[redacted-url]" if payload.lower().startswith("http") else payload
    if payload is None or isinstance(payload, (bool, int, float)):
        return payload
    return str(payload)


def get_logger(name: str) -> logging.Logger:
    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name)


def ensure_correlation_id(correlation_id: str | None = None) -> str:
    """Adopt ``correlation_id``, or keep the active one, or start a new one."""

    resolved = correlation_id or CORRELATION_ID.get() or uuid.uuid4().hex
    if resolved != CORRELATION_ID.get():
        CORRELATION_ID.set(resolved)
    return resolved


def log_event(logger: logging.Logger, level: int, event: str, **fields: Any) -> None:
    """Log ``event`` with redacted structured fields and the correlation id."""

    if not logger.isEnabledFor(level):
        return
    correlation_id = ensure_correlation_id(fields.pop("correlation_id", None))
    exc_info = fields.pop("exc_info", None)
    logger.log(
        level,
        event,
        exc_info=exc_info,
        extra={"event": event, "correlation_id": correlation_id, **redact_for_log(fields)},
    )


@contextlib.contextmanager
def operation_context(name: str, **attributes: Any) -> Iterator[str]:
    """Scope a correlation id around ``name`` and log its start and finish at DEBUG.

    The previous correlation id is restored on exit.
    """

    logger = logging.getLogger(__name__)
    scoped_id = attributes.pop("correlation_id", None) or CORRELATION_ID.get() or uuid.uuid4().hex
    token = CORRELATION_ID.set(scoped_id)
    try:
        log_event(logger, logging.DEBUG, "operation_started", operation=name, correlation_id=scoped_id, **attributes)
        yield scoped_id
        log_event(logger, logging.DEBUG, "operation_finished", operation=name, correlation_id=scoped_id)
    finally:
        CORRELATION_ID.reset(token)


__all__ = [
    "configure_logging",
    "ensure_correlation_id",
    "get_logger",
    "log_event",
    "operation_context",
    "redact_for_log",
]
