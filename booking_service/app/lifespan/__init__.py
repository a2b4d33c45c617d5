"""Application lifespan management.

Startup order:
1. Core (logging)
2. Database (connect with retry unless already connected)

Shutdown runs in reverse.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

# Import lifespan modules to register their hooks
from booking_service.app.lifespan import core, database
from booking_service.app.lifespan.registry import lifespan_registry
from booking_service.core.settings import (
    get_app_settings,
    get_db_settings,
    get_logging_settings,
)

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI

_ = (core, database)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run registered startup hooks, serve, then run shutdown hooks."""
    app_settings = get_app_settings()
    settings = {
        "app_settings": app_settings,
        "db_settings": get_db_settings(),
        "log_settings": get_logging_settings(),
    }

    await lifespan_registry.startup(**settings)
    logger.info(
        "Application startup complete",
        extra={
            "service": app_settings.service_name,
            "environment": app_settings.environment,
            "api_prefix": app_settings.api_prefix,
        },
    )

    yield

    logger.info("Application shutting down", extra={"service": app_settings.service_name})
    await lifespan_registry.shutdown(**settings)
    logger.info("Application shutdown complete")


__all__ = ["lifespan", "lifespan_registry"]
