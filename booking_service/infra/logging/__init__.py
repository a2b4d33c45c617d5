"""Logging infrastructure: dictConfig + queue setup, context and lazy loggers.

Usage:
    from booking_service.infra.logging import get_lazy_logger, set_log_context

    logger = logging.getLogger(__name__)
    _lazy = get_lazy_logger(__name__)
"""

from __future__ import annotations

from .config import complete, configure_logging, setup_logging, shutdown
from .context import (
    ContextInjectingFilter,
    clear_log_context,
    get_log_context,
    set_log_context,
)
from .formatters import JSONFormatter
from .lazy import LazyLoggerAdapter, get_lazy_logger

__all__ = [
    "ContextInjectingFilter",
    "JSONFormatter",
    "LazyLoggerAdapter",
    "clear_log_context",
    "complete",
    "configure_logging",
    "get_lazy_logger",
    "get_log_context",
    "set_log_context",
    "setup_logging",
    "shutdown",
]
