"""Backoff policy for the startup connection loop."""

from __future__ import annotations

import random
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RetryStrategy:
    """Exponential backoff, capped, with optional jitter.

    Attempt ``n`` (zero based) waits ``initial_delay * multiplier**n``
    seconds, never more than ``max_delay``. Jitter scales the delay by a
    random factor in ``[0.5, 1.5)`` so restarting replicas do not reconnect
    in lockstep.

    Example:
        RetryStrategy(max_attempts=5, initial_delay=1.0, max_delay=30.0)
        # waits ~1, 2, 4, 8 seconds between the five attempts
    """

    max_attempts: int = 3
    initial_delay: float = 1.0
    max_delay: float = 30.0
    multiplier: float = 2.0
    jitter: bool = True
    retry_on: tuple[type[Exception], ...] = (Exception,)

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            msg = f"max_attempts must be at least 1, got {self.max_attempts}"
            raise ValueError(msg)
        if self.initial_delay < 0 or self.max_delay < 0:
            msg = "delays must not be negative"
            raise ValueError(msg)

    def is_retryable(self, error: Exception) -> bool:
        return isinstance(error, self.retry_on)

    def delay_for(self, attempt: int) -> float:
        delay = min(self.initial_delay * self.multiplier**attempt, self.max_delay)
        if self.jitter:
            delay *= 0.5 + random.random()
        return delay
