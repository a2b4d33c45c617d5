"""uvicorn server driven by ``Application`` instead of owning the process.

uvicorn normally blocks in ``run()`` and installs its own signal handlers.
``UvicornServer`` starts ``Server.serve()`` as a task, waits until the
socket is bound and the lifespan has completed, and leaves signal handling to
the application lifecycle.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Protocol

import uvicorn

if TYPE_CHECKING:
    from collections.abc import Iterator

    from fastapi import FastAPI

logger = logging.getLogger(__name__)


class HttpServer(Protocol):
    """What the lifecycle needs from an HTTP server."""

    async def start(self) -> None: ...

    async def stop(self) -> None: ...


class _ManagedServer(uvicorn.Server):
    """``uvicorn.Server`` that never touches process signal handlers."""

    def install_signal_handlers(self) -> None:
        return None

    @contextmanager
    def capture_signals(self) -> Iterator[None]:
        yield


class UvicornServer:
    """Run a FastAPI app on ``host:port`` inside the current event loop.

    Args:
        app: ASGI application.
        host: Bind address.
        port: Bind port.
        startup_poll_interval: How often ``start()`` checks whether uvicorn
            finished binding and running the lifespan.
    """

    def __init__(
        self,
        app: FastAPI,
        host: str,
        port: int,
        *,
        startup_poll_interval: float = 0.05,
    ) -> None:
        config = uvicorn.Config(
            app,
            host=host,
            port=port,
            lifespan="on",
            # logging is configured by setup_logging
            log_config=None,
            access_log=True,
        )
        self._server = _ManagedServer(config)
        self._poll = startup_poll_interval
        self._task: asyncio.Task[None] | None = None
        self.host = host
        self.port = port

    @property
    def started(self) -> bool:
        return self._server.started

    async def start(self) -> None:
        """Start serving; returns once uvicorn reports it is started.

        Raises:
            RuntimeError: uvicorn exited during startup (bind failure or a
                failing lifespan hook).
        """
        self._task = asyncio.create_task(self._server.serve(), name="uvicorn-server")
        while not self._server.started:
            if self._task.done():
                error = self._task.exception()
                msg = f"HTTP server exited during startup on {self.host}:{self.port}"
                raise RuntimeError(msg) from error
            await asyncio.sleep(self._poll)
        logger.info("HTTP server listening", extra={"host": self.host, "port": self.port})

    async def stop(self) -> None:
        """Ask uvicorn to exit and wait for in-flight requests and the lifespan."""
        if self._task is None:
            return
        self._server.should_exit = True
        await self._task
        self._task = None
        logger.info("HTTP server stopped", extra={"host": self.host, "port": self.port})


__all__ = ["HttpServer", "UvicornServer"]
