"""Lazy evaluation support for logging.

Debug messages are often built from query plans, row dumps or cursor
payloads. Passing a callable instead of a string defers that work until the
level is known to be enabled.
"""

from __future__ import annotations

import logging
from typing import Any


class LazyLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that evaluates callable messages and arguments lazily.

    Example:
        logger = get_lazy_logger(__name__)
        logger.debug(lambda: f"Compiled statement: {stmt}")
        logger.debug("Cursor values: %s", lambda: decode(cursor))
    """

    def log(self, level: int, msg: Any, *args: Any, **kwargs: Any) -> None:
        if not self.isEnabledFor(level):
            return

        if callable(msg):
            msg = msg()
        if args:
            args = tuple(arg() if callable(arg) else arg for arg in args)

        super().log(level, msg, *args, **kwargs)

    def debug(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self.log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self.log(logging.INFO, msg, *args, **kwargs)

    def warning(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self.log(logging.WARNING, msg, *args, **kwargs)

    def error(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self.log(logging.ERROR, msg, *args, **kwargs)


def get_lazy_logger(name: str, **context: Any) -> LazyLoggerAdapter:
    """Get a logger adapter with lazy evaluation and optional bound context.

    Args:
        name: Logger name (usually __name__).
        **context: Extra fields added to every record from this adapter.
    """
    return LazyLoggerAdapter(logging.getLogger(name), context or {})
