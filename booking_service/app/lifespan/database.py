"""Database lifespan hook.

When the process is driven by ``Application`` the database is already
connected before the HTTP server starts, and the hook leaves the connection
alone. Under a bare ``uvicorn booking_service.app.main:app`` the hook owns
the connection: it connects with the configured retry policy on startup and
disposes the pool on shutdown.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from booking_service.infra.database import get_database

from .registry import lifespan_registry

if TYPE_CHECKING:
    from booking_service.core.settings import PostgresSettings

logger = logging.getLogger(__name__)

_owns_connection = False


@lifespan_registry.register(name="database", startup_order=10, requires=["core"])
async def startup_database(db_settings: PostgresSettings, **kwargs: object) -> None:
    global _owns_connection

    database = get_database()
    if not database.is_connected:
        await database.connect(
            max_retries=db_settings.startup_retry_attempts,
            initial_delay=db_settings.startup_retry_delay,
            max_delay=db_settings.startup_retry_max_delay,
        )
        _owns_connection = True

    if db_settings.is_sqlite:
        # local runs have no migrations
        await database.create_schema()
        logger.info("SQLite schema ensured", extra={"url": database.safe_url})


@lifespan_registry.register(name="database")
async def shutdown_database(**kwargs: object) -> None:
    global _owns_connection

    if _owns_connection:
        await get_database().disconnect()
        _owns_connection = False
