"""Server commands."""

import asyncio
import sys

import click

from booking_service.cli.utils import info, warning
from booking_service.core.settings import get_app_settings


@click.command()
def serve() -> None:
    """Run the service under the application lifecycle.

    Connects the database with retry, serves HTTP until SIGTERM/SIGINT, then
    shuts down within APP_SHUTDOWN_TIMEOUT. Exits 0 on a graceful stop and 1
    on startup failure, shutdown timeout or crash.
    """
    from booking_service.app.application import Application

    settings = get_app_settings()
    info(f"Starting {settings.service_name} on http://{settings.host}:{settings.port}")
    sys.exit(asyncio.run(Application().run()))


@click.command()
@click.option("--host", default=None, help="Host to bind (default: APP_HOST)")
@click.option("--port", default=None, type=int, help="Port to bind (default: APP_PORT)")
@click.option("--reload/--no-reload", default=True, help="Enable auto-reload on code changes")
def dev(host: str | None, port: int | None, reload: bool) -> None:
    """Run the development server with uvicorn auto-reload.

    Database connection and schema creation happen in the FastAPI lifespan.
    """
    import uvicorn

    settings = get_app_settings()
    host = host or settings.host
    port = port or settings.port

    if settings.environment == "production":
        warning("dev server is not meant for production, use `serve`")

    info(f"Server will run at: http://{host}:{port}{settings.docs_url or ''}")
    uvicorn.run(
        "booking_service.app.main:app",
        host=host,
        port=port,
        reload=reload,
        log_config=None,
    )
