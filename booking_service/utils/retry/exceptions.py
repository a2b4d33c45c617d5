"""Retry outcomes: what was tried, how long it took, and why it stopped."""

from __future__ import annotations

import time
from dataclasses import dataclass, field


@dataclass
class RetryStatistics:
    """Per-call record kept by ``retry_async``.

    ``failures`` holds the exception class name of every failed attempt,
    in order.
    """

    started_at: float = field(default_factory=time.monotonic)
    finished_at: float | None = None
    failures: list[str] = field(default_factory=list)
    total_delay: float = 0.0

    @property
    def attempts(self) -> int:
        return len(self.failures)

    @property
    def duration(self) -> float:
        end = self.finished_at if self.finished_at is not None else time.monotonic()
        return end - self.started_at

    def record_failure(self, error: Exception) -> None:
        self.failures.append(type(error).__name__)

    def record_delay(self, delay: float) -> None:
        self.total_delay += delay

    def finish(self) -> RetryStatistics:
        self.finished_at = time.monotonic()
        return self


class RetryError(Exception):
    """Every attempt of ``operation`` failed.

    Example:
        try:
            await database.connect(max_retries=5)
        except RetryError as e:
            print(e.operation, e.attempts, e.last_exception)
    """

    def __init__(
        self,
        operation: str,
        last_exception: Exception,
        statistics: RetryStatistics,
    ) -> None:
        self.operation = operation
        self.last_exception = last_exception
        self.statistics = statistics
        super().__init__(
            f"{operation} failed after {statistics.attempts} attempts: {last_exception}"
        )

    @property
    def attempts(self) -> int:
        return self.statistics.attempts


class AbortError(Exception):
    """The abort event fired before ``operation`` succeeded."""

    def __init__(self, operation: str, attempts: int) -> None:
        self.operation = operation
        self.attempts = attempts
        super().__init__(f"{operation} aborted after {attempts} attempts")
