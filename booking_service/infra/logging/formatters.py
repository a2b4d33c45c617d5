"""JSON Lines formatter with OpenTelemetry trace correlation."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import Any

from opentelemetry import trace

# LogRecord attributes that are never copied into the JSON document
_RESERVED_ATTRS = frozenset(
    {
        "args",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "message",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
    }
)


class JSONFormatter(logging.Formatter):
    """Format records as single-line JSON objects with UTC timestamps.

    Every document carries ``timestamp``, ``level``, ``logger`` and
    ``message``, the ``static`` fields, any extras (request context,
    ``entity``/``operation`` from repository calls) and, when a span is
    active, ``trace_id``/``span_id``.

    Example output:
        {"level": "INFO", "logger": "repository.Booking", "message": "Created Booking",
         "timestamp": "2025-01-01T00:00:00.123Z", "service": "booking-service",
         "request_id": "abc-123", "entity": "Booking", "operation": "db.create_one"}
    """

    def __init__(self, static: dict[str, Any] | None = None) -> None:
        super().__init__()
        self.static = static or {}

    def format(self, record: logging.LogRecord) -> str:
        data: dict[str, Any] = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC)
            .isoformat(timespec="milliseconds")
            .replace("+00:00", "Z"),
        }

        span_context = trace.get_current_span().get_span_context()
        if span_context.is_valid:
            data["trace_id"] = format(span_context.trace_id, "032x")
            data["span_id"] = format(span_context.span_id, "016x")

        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            data["stack_trace"] = record.stack_info

        data.update(self.static)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and key not in data:
                data[key] = value

        # json.dumps escapes embedded newlines, so one record stays one line
        return json.dumps(data, ensure_ascii=False, default=str)
