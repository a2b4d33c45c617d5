"""Lifecycle tests for Application with fake database and HTTP server."""

from __future__ import annotations

import asyncio
import signal
from typing import Any

import pytest

from booking_service.app.application import Application, AppState, LifecycleError
from booking_service.core.settings import AppSettings, PostgresSettings
from booking_service.utils.retry import AbortError, RetryError, RetryStatistics


class FakeDatabase:
    """Records calls; optionally fails or blocks until aborted."""

    def __init__(
        self,
        events: list[str],
        *,
        connect_error: Exception | None = None,
        wait_for_abort: bool = False,
        disconnect_error: Exception | None = None,
    ) -> None:
        self.events = events
        self.connect_error = connect_error
        self.wait_for_abort = wait_for_abort
        self.disconnect_error = disconnect_error
        self.connect_kwargs: dict[str, Any] = {}

    async def connect(self, **kwargs: Any) -> None:
        self.connect_kwargs = kwargs
        self.events.append("db.connect")
        if self.wait_for_abort:
            await kwargs["abort"].wait()
            raise AbortError("db.connect", 1)
        if self.connect_error is not None:
            raise self.connect_error

    async def disconnect(self) -> None:
        self.events.append("db.disconnect")
        if self.disconnect_error is not None:
            raise self.disconnect_error


class FakeServer:
    def __init__(
        self,
        events: list[str],
        *,
        start_error: Exception | None = None,
        stop_delay: float = 0.0,
    ) -> None:
        self.events = events
        self.start_error = start_error
        self.stop_delay = stop_delay

    async def start(self) -> None:
        self.events.append("http.start")
        if self.start_error is not None:
            raise self.start_error

    async def stop(self) -> None:
        self.events.append("http.stop")
        if self.stop_delay:
            await asyncio.sleep(self.stop_delay)


@pytest.fixture
def events() -> list[str]:
    return []


def build(
    events: list[str],
    *,
    database: FakeDatabase | None = None,
    server: FakeServer | None = None,
    shutdown_timeout: float = 1.0,
) -> Application:
    return Application(
        database=database or FakeDatabase(events),
        server=server or FakeServer(events),
        app_settings=AppSettings(shutdown_timeout=shutdown_timeout),
        db_settings=PostgresSettings(
            enabled=False,
            startup_retry_attempts=2,
            startup_retry_delay=0.01,
            startup_retry_max_delay=0.02,
        ),
    )


async def test_start_then_stop(events):
    database = FakeDatabase(events)
    application = build(events, database=database)

    await application.start()

    assert application.state is AppState.RUNNING
    assert application.is_running
    assert database.connect_kwargs["max_retries"] == 2
    assert database.connect_kwargs["abort"] is application.abort_event

    assert await application.stop() == 0
    assert application.state is AppState.STOPPED
    assert events == ["db.connect", "http.start", "http.stop", "db.disconnect"]


async def test_create_returns_running_application(events):
    application = await Application.create(
        database=FakeDatabase(events),
        server=FakeServer(events),
        app_settings=AppSettings(),
        db_settings=PostgresSettings(enabled=False),
    )

    assert application.is_running
    await application.stop()


async def test_stop_is_idempotent(events):
    application = build(events)
    await application.start()

    codes = await asyncio.gather(application.stop("a"), application.stop("b"))
    again = await application.stop("c")

    assert codes == [0, 0]
    assert again == 0
    assert events.count("http.stop") == 1
    assert events.count("db.disconnect") == 1


async def test_start_twice_is_rejected(events):
    application = build(events)
    await application.start()

    with pytest.raises(LifecycleError, match="running"):
        await application.start()

    await application.stop()


async def test_stop_before_start(events):
    application = build(events)

    assert await application.stop() == 0
    assert application.state is AppState.STOPPED
    assert events == []


async def test_database_failure_fails_startup(events):
    statistics = RetryStatistics()
    statistics.record_failure(ConnectionError("refused"))
    error = RetryError("db.connect", ConnectionError("refused"), statistics.finish())
    application = build(events, database=FakeDatabase(events, connect_error=error))

    with pytest.raises(RetryError):
        await application.start()

    assert application.state is AppState.STOPPED
    assert application.exit_code == 1
    assert "http.start" not in events


async def test_server_failure_disconnects_database(events):
    server = FakeServer(events, start_error=RuntimeError("port in use"))
    application = build(events, server=server)

    assert await application.run() == 1
    assert application.state is AppState.STOPPED
    assert events == ["db.connect", "http.start", "db.disconnect"]


async def test_stop_during_startup_aborts_database_retry(events):
    application = build(events, database=FakeDatabase(events, wait_for_abort=True))

    run = asyncio.create_task(application.run())
    while application.state is not AppState.STARTING:
        await asyncio.sleep(0)

    assert await application.stop("test") == 0
    assert await run == 0
    assert application.abort_event.is_set()
    assert application.state is AppState.STOPPED
    assert "http.start" not in events


async def test_shutdown_timeout_forces_exit_code(events):
    server = FakeServer(events, stop_delay=5.0)
    application = build(events, server=server, shutdown_timeout=0.1)
    await application.start()

    assert await application.stop() == 1
    assert application.state is AppState.STOPPED


async def test_teardown_error_sets_exit_code(events):
    database = FakeDatabase(events, disconnect_error=RuntimeError("pool closed"))
    application = build(events, database=database)
    await application.start()

    assert await application.stop() == 1
    assert events[-2:] == ["http.stop", "db.disconnect"]


async def test_loop_exception_triggers_crash_stop(events):
    application = build(events)
    await application.start()

    asyncio.get_running_loop().call_exception_handler(
        {"message": "Task exception was never retrieved", "exception": RuntimeError("boom")}
    )

    assert await asyncio.wait_for(application.wait(), timeout=1.0) == 1
    assert application.state is AppState.STOPPED


async def test_signal_triggers_graceful_stop(events):
    application = build(events)
    await application.start()

    application._handle_signal(signal.SIGTERM)

    assert await asyncio.wait_for(application.wait(), timeout=1.0) == 0
    assert events[-1] == "db.disconnect"


async def test_exception_handler_is_restored(events):
    loop = asyncio.get_running_loop()
    previous = loop.get_exception_handler()
    application = build(events)

    await application.start()
    assert loop.get_exception_handler() is not previous
    await application.stop()

    assert loop.get_exception_handler() is previous
