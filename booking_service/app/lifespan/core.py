"""Core lifespan hook: logging.

Runs first and has no dependencies.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from booking_service.infra.logging import setup_logging

from .registry import lifespan_registry

if TYPE_CHECKING:
    from booking_service.core.settings import AppSettings, LoggingSettings

logger = logging.getLogger(__name__)


@lifespan_registry.register(name="core", startup_order=1)
async def startup_core(
    app_settings: AppSettings,
    log_settings: LoggingSettings,
    **kwargs: object,
) -> None:
    # no-op when the CLI already configured logging
    setup_logging(log_settings=log_settings)
    logger.info(
        "Application starting",
        extra={
            "service": app_settings.service_name,
            "environment": app_settings.environment,
            "version": app_settings.version,
        },
    )


@lifespan_registry.register(name="core")
async def shutdown_core(**kwargs: object) -> None:
    logger.debug("Core services shutdown (no cleanup needed)")
