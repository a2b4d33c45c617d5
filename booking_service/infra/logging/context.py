"""Contextvars-based log context.

Fields set here (``request_id``, ``method``, ``path``...) are copied onto
every log record by ``ContextInjectingFilter``. Each asyncio task works on
its own copy of the context, so concurrent requests never see each other's
fields.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Any

_log_context: ContextVar[dict[str, Any]] = ContextVar("log_context", default={})


def set_log_context(**kwargs: Any) -> None:
    """Add fields to the log context of the current task.

    Example:
        set_log_context(request_id="abc-123", path="/api/v1/bookings")
        logger.info("Processing request")  # carries request_id and path
    """
    current = _log_context.get().copy()
    current.update(kwargs)
    _log_context.set(current)


def get_log_context() -> dict[str, Any]:
    """Return a copy of the current log context."""
    return _log_context.get().copy()


def clear_log_context() -> None:
    """Drop every field from the current log context."""
    _log_context.set({})


class ContextInjectingFilter(logging.Filter):
    """Copy the current log context onto each LogRecord.

    Attached to the root logger by ``configure_logging``; existing record
    attributes are never overwritten.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in _log_context.get().items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True
