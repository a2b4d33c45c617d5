"""Unit tests for the async retry executor."""

from __future__ import annotations

import asyncio

import pytest

from booking_service.utils.retry import (
    AbortError,
    RetryError,
    RetryStatistics,
    RetryStrategy,
    retry_async,
)

FAST = RetryStrategy(max_attempts=3, initial_delay=0.001, max_delay=0.01, jitter=False)


class Flaky:
    def __init__(self, failures: int) -> None:
        self.failures = failures
        self.calls = 0

    async def __call__(self) -> str:
        self.calls += 1
        if self.calls <= self.failures:
            msg = f"failure {self.calls}"
            raise ConnectionError(msg)
        return "ok"


async def test_succeeds_after_transient_failures():
    func = Flaky(failures=2)

    assert await retry_async(func, strategy=FAST) == "ok"
    assert func.calls == 3


async def test_raises_retry_error_when_exhausted():
    func = Flaky(failures=10)

    with pytest.raises(RetryError) as exc_info:
        await retry_async(func, strategy=FAST, operation="db.connect")

    error = exc_info.value
    assert func.calls == 3
    assert error.operation == "db.connect"
    assert error.attempts == 3
    assert isinstance(error.last_exception, ConnectionError)
    assert error.statistics.failures == ["ConnectionError"] * 3
    assert error.statistics.finished_at is not None
    assert "db.connect failed after 3 attempts" in str(error)


async def test_non_retryable_exception_propagates():
    strategy = RetryStrategy(max_attempts=3, initial_delay=0.001, retry_on=(ConnectionError,))
    calls = 0

    async def broken() -> None:
        nonlocal calls
        calls += 1
        msg = "bad input"
        raise ValueError(msg)

    with pytest.raises(ValueError, match="bad input"):
        await retry_async(broken, strategy=strategy)
    assert calls == 1


async def test_abort_before_first_attempt():
    abort = asyncio.Event()
    abort.set()
    func = Flaky(failures=0)

    with pytest.raises(AbortError) as exc_info:
        await retry_async(func, strategy=FAST, abort=abort)

    assert func.calls == 0
    assert exc_info.value.attempts == 0


async def test_abort_interrupts_backoff_sleep():
    abort = asyncio.Event()
    func = Flaky(failures=10)
    slow = RetryStrategy(max_attempts=5, initial_delay=30.0, jitter=False)

    task = asyncio.create_task(retry_async(func, strategy=slow, abort=abort))
    await asyncio.sleep(0.01)
    abort.set()

    with pytest.raises(AbortError) as exc_info:
        await asyncio.wait_for(task, timeout=1.0)
    assert func.calls == 1
    assert exc_info.value.attempts == 1


async def test_on_retry_callback():
    seen: list[int] = []

    await retry_async(Flaky(failures=2), strategy=FAST, on_retry=lambda e, n: seen.append(n))

    assert seen == [1, 2]


@pytest.mark.parametrize(
    "kwargs",
    [{"max_attempts": 0}, {"initial_delay": -1.0}, {"max_delay": -1.0}],
)
def test_strategy_rejects_invalid_values(kwargs):
    with pytest.raises(ValueError):
        RetryStrategy(**kwargs)


def test_delay_grows_and_is_capped():
    strategy = RetryStrategy(initial_delay=1.0, max_delay=5.0, jitter=False)

    assert [strategy.delay_for(n) for n in (0, 1, 2, 10)] == [1.0, 2.0, 4.0, 5.0]


def test_jitter_stays_within_half_to_one_and_a_half():
    strategy = RetryStrategy(initial_delay=2.0, max_delay=10.0, jitter=True)

    delays = [strategy.delay_for(0) for _ in range(50)]

    assert all(1.0 <= delay < 3.0 for delay in delays)


def test_statistics_track_failures_and_delay():
    statistics = RetryStatistics()
    statistics.record_failure(ConnectionError())
    statistics.record_delay(0.5)
    statistics.record_failure(TimeoutError())

    assert statistics.attempts == 2
    assert statistics.failures == ["ConnectionError", "TimeoutError"]
    assert statistics.total_delay == 0.5
    assert statistics.finish().duration >= 0
