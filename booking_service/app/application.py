"""Process lifecycle: start, serve, and shut down on signals or crashes.

States move strictly forward::

    idle -> starting -> running -> stopping -> stopped

``start()`` connects the database (exponential backoff, interruptible through
the abort event) and then starts the HTTP server. ``stop()`` tears both down
in reverse order against a deadline and yields the process exit code.

Usage:
    exit_code = asyncio.run(Application().run())
    sys.exit(exit_code)
"""

from __future__ import annotations

import asyncio
import logging
import signal
from enum import Enum
from typing import TYPE_CHECKING, Any, Self

from booking_service.core.settings import get_app_settings, get_db_settings
from booking_service.infra.database import get_database
from booking_service.infra.logging import get_lazy_logger
from booking_service.utils.retry import AbortError

if TYPE_CHECKING:
    from booking_service.app.server import HttpServer
    from booking_service.core.settings import AppSettings, PostgresSettings
    from booking_service.infra.database import Database

logger = logging.getLogger(__name__)
lazy_logger = get_lazy_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


class AppState(str, Enum):
    IDLE = "idle"
    STARTING = "starting"
    RUNNING = "running"
    STOPPING = "stopping"
    STOPPED = "stopped"


class LifecycleError(Exception):
    """Lifecycle operation called in a state that does not allow it."""


class Application:
    """Owns the database connection and the HTTP server for one process.

    Args:
        database: Database to connect; defaults to ``get_database()``.
        server: HTTP server; defaults to uvicorn serving ``create_app()``.
        app_settings: Host, port and shutdown timeout.
        db_settings: Startup retry policy for the database.

    Shutdown:
        - SIGTERM, SIGINT and SIGHUP (where available) call ``stop()``.
        - An exception reported to the event loop's exception handler calls
          ``stop("crash")`` and forces exit code 1.
        - A stop request while starting sets the abort event, which
          interrupts the database retry loop.
    """

    SHUTDOWN_SIGNALS = ("SIGTERM", "SIGINT", "SIGHUP")

    def __init__(
        self,
        *,
        database: Database | None = None,
        server: HttpServer | None = None,
        app_settings: AppSettings | None = None,
        db_settings: PostgresSettings | None = None,
    ) -> None:
        self._app_settings = app_settings or get_app_settings()
        self._db_settings = db_settings or get_db_settings()
        self._database = database or get_database()
        self._server = server

        self._state = AppState.IDLE
        self._abort = asyncio.Event()
        self._start_settled = asyncio.Event()
        self._stopped = asyncio.Event()
        self._stop_task: asyncio.Task[int] | None = None
        self._background: set[asyncio.Task[Any]] = set()

        self._exit_code = EXIT_OK
        self._crashed = False
        self._database_connected = False
        self._server_started = False
        self._installed_signals: list[signal.Signals] = []
        self._previous_exception_handler: Any = None
        self._loop: asyncio.AbstractEventLoop | None = None

    # ──────────────────────────────────────────────────────────────
    # State
    # ──────────────────────────────────────────────────────────────

    @property
    def state(self) -> AppState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state is AppState.RUNNING

    @property
    def exit_code(self) -> int:
        return self._exit_code

    @property
    def abort_event(self) -> asyncio.Event:
        return self._abort

    def _transition(self, new_state: AppState) -> None:
        previous, self._state = self._state, new_state
        lazy_logger.debug(lambda: f"lifecycle: {previous.value} -> {new_state.value}")
        if new_state is AppState.STOPPED:
            self._stopped.set()

    # ──────────────────────────────────────────────────────────────
    # Start
    # ──────────────────────────────────────────────────────────────

    @classmethod
    async def create(cls, **kwargs: Any) -> Self:
        """Build an application and start it."""
        application = cls(**kwargs)
        await application.start()
        return application

    async def start(self) -> None:
        """Connect the database, then start the HTTP server.

        Raises:
            LifecycleError: The application is not idle.
            AbortError: A stop request interrupted startup.
            RetryError: The database stayed unreachable.
        """
        if self._state is not AppState.IDLE:
            msg = f"Cannot start application in {self._state.value} state"
            raise LifecycleError(msg)

        self._transition(AppState.STARTING)
        self._loop = asyncio.get_running_loop()
        self._install_signal_handlers()
        self._install_exception_handler()
        logger.info(
            "Starting application",
            extra={
                "service": self._app_settings.service_name,
                "environment": self._app_settings.environment,
            },
        )

        try:
            await self._database.connect(
                max_retries=self._db_settings.startup_retry_attempts,
                initial_delay=self._db_settings.startup_retry_delay,
                max_delay=self._db_settings.startup_retry_max_delay,
                abort=self._abort,
            )
            self._database_connected = True
            if self._abort.is_set():
                raise AbortError("app.start", 1)

            if self._server is None:
                self._server = self._default_server()
            await self._server.start()
            self._server_started = True
        except BaseException as e:
            await self._fail_startup(e)
            raise
        else:
            self._transition(AppState.RUNNING)
            logger.info(
                "Application running",
                extra={"host": self._app_settings.host, "port": self._app_settings.port},
            )
        finally:
            self._start_settled.set()

    async def _fail_startup(self, error: BaseException) -> None:
        aborted = isinstance(error, AbortError)
        if aborted:
            logger.info("Application startup aborted", extra={"reason": str(error)})
        else:
            logger.critical("Failed to start application", exc_info=error)
            self._exit_code = EXIT_FAILURE

        errors = await self._teardown()
        if errors:
            self._exit_code = EXIT_FAILURE
        self._restore_handlers()
        self._transition(AppState.STOPPED)

    def _default_server(self) -> HttpServer:
        from booking_service.app.main import create_app
        from booking_service.app.server import UvicornServer

        return UvicornServer(create_app(), self._app_settings.host, self._app_settings.port)

    # ──────────────────────────────────────────────────────────────
    # Stop
    # ──────────────────────────────────────────────────────────────

    async def stop(self, reason: str = "shutdown") -> int:
        """Shut down once and return the exit code.

        Repeated and concurrent calls await the first call's outcome.
        """
        if self._stop_task is None:
            self._stop_task = asyncio.ensure_future(self._shutdown(reason))
        return await asyncio.shield(self._stop_task)

    async def wait(self) -> int:
        """Block until the application reaches ``stopped``."""
        await self._stopped.wait()
        return self._exit_code

    async def run(self) -> int:
        """Start, serve until stopped, and return the exit code."""
        try:
            await self.start()
        except AbortError:
            return await self.stop("aborted")
        except Exception:
            # already logged and torn down by start()
            return self._exit_code
        return await self.wait()

    async def _shutdown(self, reason: str) -> int:
        if self._crashed:
            self._exit_code = EXIT_FAILURE

        if self._state is AppState.IDLE:
            self._transition(AppState.STOPPED)
            return self._exit_code

        if self._state is AppState.STARTING:
            logger.info("Stop requested during startup, aborting", extra={"reason": reason})
            self._abort.set()
            await self._start_settled.wait()

        if self._state is AppState.STOPPED:
            return self._exit_code

        self._transition(AppState.STOPPING)
        timeout = self._app_settings.shutdown_timeout
        logger.info(
            "Initiating graceful shutdown",
            extra={"reason": reason, "shutdown_timeout": timeout},
        )

        try:
            errors = await asyncio.wait_for(self._teardown(), timeout=timeout)
        except TimeoutError:
            logger.error(
                "Shutdown timeout exceeded, forcing exit",
                extra={"reason": reason, "shutdown_timeout": timeout},
            )
            self._exit_code = EXIT_FAILURE
        else:
            if errors:
                self._exit_code = EXIT_FAILURE
                logger.error(
                    f"Failed to stop {len(errors)} component(s): {', '.join(errors)}",
                    extra={"reason": reason, "components": errors},
                )
            else:
                logger.info("Shutdown completed successfully", extra={"reason": reason})

        self._restore_handlers()
        self._transition(AppState.STOPPED)
        return self._exit_code

    async def _teardown(self) -> list[str]:
        """Stop the HTTP server, then the database; return failed component names."""
        errors: list[str] = []

        if self._server is not None and self._server_started:
            try:
                await self._server.stop()
                self._server_started = False
            except Exception:
                errors.append("http")
                logger.exception("Failed to stop HTTP server")

        if self._database_connected:
            try:
                await self._database.disconnect()
                self._database_connected = False
            except Exception:
                errors.append("database")
                logger.exception("Failed to disconnect database")

        return errors

    # ──────────────────────────────────────────────────────────────
    # Signals and crashes
    # ──────────────────────────────────────────────────────────────

    def _spawn(self, coro: Any) -> None:
        task = asyncio.ensure_future(coro)
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    def _handle_signal(self, sig: signal.Signals) -> None:
        logger.info("Received shutdown signal", extra={"signal": sig.name})
        self._spawn(self.stop(f"signal:{sig.name}"))

    def _install_signal_handlers(self) -> None:
        assert self._loop is not None
        for name in self.SHUTDOWN_SIGNALS:
            sig = getattr(signal, name, None)
            if sig is None:
                continue
            try:
                self._loop.add_signal_handler(sig, self._handle_signal, sig)
            except (NotImplementedError, RuntimeError, ValueError):
                # not supported on this platform or not the main thread
                lazy_logger.debug(lambda name=name: f"lifecycle: cannot handle {name}")
                continue
            self._installed_signals.append(sig)

    def _install_exception_handler(self) -> None:
        assert self._loop is not None
        self._previous_exception_handler = self._loop.get_exception_handler()
        self._loop.set_exception_handler(self._handle_loop_exception)

    def _handle_loop_exception(
        self, loop: asyncio.AbstractEventLoop, context: dict[str, Any]
    ) -> None:
        exception = context.get("exception")
        if exception is None:
            loop.default_exception_handler(context)
            return

        logger.critical(
            "Unhandled exception in event loop",
            extra={"context_message": context.get("message")},
            exc_info=exception,
        )
        self._crashed = True
        self._exit_code = EXIT_FAILURE
        self._spawn(self.stop("crash"))

    def _restore_handlers(self) -> None:
        if self._loop is None:
            return
        for sig in self._installed_signals:
            self._loop.remove_signal_handler(sig)
        self._installed_signals.clear()
        self._loop.set_exception_handler(self._previous_exception_handler)


__all__ = ["AppState", "Application", "LifecycleError"]
