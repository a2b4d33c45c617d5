"""Async retry loop with an abortable backoff sleep."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import TYPE_CHECKING, Any

from booking_service.utils.retry.exceptions import AbortError, RetryError, RetryStatistics
from booking_service.utils.retry.strategies import RetryStrategy

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)


async def _wait_or_abort(delay: float, abort: asyncio.Event | None) -> bool:
    """Sleep for ``delay`` seconds; return True if ``abort`` fired first."""
    if abort is None:
        await asyncio.sleep(delay)
        return False
    with contextlib.suppress(TimeoutError):
        await asyncio.wait_for(abort.wait(), timeout=delay)
    return abort.is_set()


async def retry_async[R](
    func: Callable[..., Awaitable[R]],
    *args: Any,
    strategy: RetryStrategy | None = None,
    abort: asyncio.Event | None = None,
    operation: str | None = None,
    on_retry: Callable[[Exception, int], None] | None = None,
    **kwargs: Any,
) -> R:
    """Await ``func(*args, **kwargs)`` until it succeeds or attempts run out.

    Args:
        func: Coroutine function to call.
        strategy: Backoff policy; defaults to ``RetryStrategy()``.
        abort: Event that interrupts the loop. It is checked before every
            attempt and wakes up a pending backoff sleep.
        operation: Name used in logs and errors (defaults to ``func.__name__``).
        on_retry: Called with the failure and attempt number before each
            backoff sleep.

    Raises:
        AbortError: ``abort`` was set before the call succeeded.
        RetryError: Every attempt failed with a retryable exception.
    """
    strategy = strategy or RetryStrategy()
    name = operation or getattr(func, "__name__", "operation")
    statistics = RetryStatistics()

    for attempt in range(1, strategy.max_attempts + 1):
        if abort is not None and abort.is_set():
            raise AbortError(name, attempt - 1)

        try:
            return await func(*args, **kwargs)
        except Exception as e:
            if not strategy.is_retryable(e):
                logger.warning(
                    "Non-retryable exception in %s: %s",
                    name,
                    e,
                    extra={"operation": name, "exception": str(e)},
                )
                raise
            statistics.record_failure(e)

            if attempt == strategy.max_attempts:
                statistics.finish()
                logger.error(
                    "All retry attempts exhausted for %s",
                    name,
                    extra={
                        "operation": name,
                        "attempts": statistics.attempts,
                        "last_exception": str(e),
                        "total_delay": statistics.total_delay,
                        "duration": statistics.duration,
                    },
                )
                raise RetryError(name, e, statistics) from e

            delay = strategy.delay_for(attempt - 1)
            statistics.record_delay(delay)
            logger.warning(
                "Retrying %s after %.2fs (attempt %d/%d)",
                name,
                delay,
                attempt,
                strategy.max_attempts,
                extra={
                    "operation": name,
                    "attempt": attempt,
                    "max_attempts": strategy.max_attempts,
                    "delay": delay,
                    "exception": str(e),
                },
            )
            if on_retry is not None:
                on_retry(e, attempt)

            if await _wait_or_abort(delay, abort):
                raise AbortError(name, attempt) from e

    # unreachable: the last attempt either returns or raises
    msg = "retry loop ended without a result"
    raise RuntimeError(msg)
