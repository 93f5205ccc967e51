"""Structured logging for wardrobe, suggestion and outfit events."""

from __future__ import annotations

import contextlib
import contextvars
import json
import logging
import os
import re
import uuid
from typing import Any, Dict, Iterator, Mapping

CORRELATION_ID: contextvars.ContextVar[str | None] = contextvars.ContextVar("correlation_id", default=None)

# Attributes every LogRecord carries; anything else arrived through ``extra``.
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime", "taskName"}

# Owner and photo fields never reach the log stream.
_REDACTED_KEYS = frozenset({"user_id", "email", "image_url"})
# Role -> item id maps are logged as their role layout only.
_ROLE_MAP_KEYS = frozenset({"items_by_role"})
# Item id collections are logged as a count.
_ID_COLLECTION_KEYS = frozenset({"item_ids", "recent_item_ids"})

_EMAIL_PATTERN = re.compile(r"[\w.\-]+@[\w.\-]+")


class JsonFormatter(logging.Formatter):
    """Render a record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        message = super().format(record)
        payload: Dict[str, Any] = {
            "timestamp": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "logger": record.name,
            "event": getattr(record, "event", message),
            "message": message,
            "correlation_id": getattr(record, "correlation_id", None) or CORRELATION_ID.get(),
        }
        operation = getattr(record, "operation", None)
        if operation:
            payload["operation"] = operation
        extras = {key: value for key, value in vars(record).items() if key not in _RECORD_ATTRS}
        for key, value in redact_for_log(extras).items():
            payload.setdefault(key, value)
        return json.dumps(payload, default=str)


def configure_logging(level: int | str | None = None) -> None:
    """Install a single JSON stream handler on the root logger."""

    desired_level = level or os.getenv("LOG_LEVEL", "INFO")
    logging.root.handlers.clear()
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    logging.basicConfig(level=desired_level, handlers=[handler])


def get_logger(name: str) -> logging.Logger:
    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name)


def _scrub_text(value: str) -> str:
    if value.lower().startswith(("http://", "https://")):
        return "[redacted-url]"
    return _EMAIL_PATTERN.sub("[redacted-email]", value)


def summarise_items_by_role(items_by_role: Mapping[str, Any]) -> Dict[str, Any]:
    """Describe an outfit layout without the item ids behind it."""

    roles = sorted(role for role, item_id in items_by_role.items() if item_id)
    return {"roles": roles, "item_count": len(roles)}


def redact_for_log(payload: Any) -> Any:
    """Make a payload safe for the log stream.

    Owner ids, emails and photo URLs are masked, outfit layouts keep their roles
    but drop item ids, and item id collections collapse to a count. Anything that
    is not a plain JSON value is rendered with ``str``.
    """

    if payload is None or isinstance(payload, (bool, int, float)):
        return payload
    if isinstance(payload, str):
        return _scrub_text(payload)
    if isinstance(payload, Mapping):
        scrubbed: Dict[str, Any] = {}
        for key, value in payload.items():
            if key in _REDACTED_KEYS:
                scrubbed[key] = "[redacted]"
            elif key in _ROLE_MAP_KEYS and isinstance(value, Mapping):
                scrubbed[key] = summarise_items_by_role(value)
            elif key in _ID_COLLECTION_KEYS and isinstance(value, (list, tuple, set, frozenset)):
                scrubbed[key] = {"count": len(value)}
            else:
                scrubbed[key] = redact_for_log(value)
        return scrubbed
    if isinstance(payload, (set, frozenset)):
        return sorted(redact_for_log(item) for item in payload)
    if isinstance(payload, (list, tuple)):
        return [redact_for_log(item) for item in payload]
    return str(payload)


def current_correlation_id(correlation_id: str | None = None) -> str:
    """Return the explicit id, the one in scope, or a fresh one.

    This never writes to ``CORRELATION_ID``; use ``correlation_context`` to scope an id.
    """

    return correlation_id or CORRELATION_ID.get() or uuid.uuid4().hex


@contextlib.contextmanager
def correlation_context(correlation_id: str | None = None) -> Iterator[str]:
    """Bind a correlation id for the block, minting one when none is given."""

    token = CORRELATION_ID.set(correlation_id or uuid.uuid4().hex)
    try:
        yield CORRELATION_ID.get()
    finally:
        CORRELATION_ID.reset(token)


def log_event(logger: logging.Logger, level: int, event: str, **fields: Any) -> None:
    correlation_id = current_correlation_id(fields.pop("correlation_id", None))
    exc_info = fields.pop("exc_info", None)
    logger.log(
        level,
        event,
        exc_info=exc_info,
        extra={"event": event, "correlation_id": correlation_id, **redact_for_log(fields)},
    )


@contextlib.contextmanager
def operation_context(name: str, **attributes: Any) -> Iterator[str]:
    """Run a named pipeline step under its own correlation id.

    Each operation gets a fresh id unless one is passed as ``correlation_id``; the
    previous id is restored on exit.
    """

    logger = logging.getLogger("closet_app.operations")
    with correlation_context(attributes.pop("correlation_id", None)) as scoped_id:
        extra = {"operation": name, "correlation_id": scoped_id, **redact_for_log(attributes)}
        logger.debug("operation %s started", name, extra=extra)
        try:
            yield scoped_id
        finally:
            logger.debug("operation %s finished", name, extra=extra)


__all__ = [
    "CORRELATION_ID",
    "JsonFormatter",
    "configure_logging",
    "correlation_context",
    "current_correlation_id",
    "get_logger",
    "log_event",
    "operation_context",
    "redact_for_log",
    "summarise_items_by_role",
]
