"""Router registry and setup."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from booking_service.core.settings import get_app_settings
from booking_service.features.audits.router import router as audits_router
from booking_service.features.bookings.router import router as bookings_router
from booking_service.features.health.router import router as health_router
from booking_service.features.payments.router import router as payments_router
from booking_service.features.providers.router import router as providers_router
from booking_service.features.reviews.router import router as reviews_router
from booking_service.features.services.router import router as services_router
from booking_service.features.users.router import router as users_router

if TYPE_CHECKING:
    from fastapi import FastAPI

    from booking_service.core.settings import AppSettings

logger = logging.getLogger(__name__)


def setup_routers(app: FastAPI, app_settings: AppSettings | None = None) -> None:
    """Register all feature routers under the API prefix."""
    app_settings = app_settings or get_app_settings()
    api_prefix = app_settings.api_prefix

    app.include_router(health_router, prefix=api_prefix, tags=["health"])
    app.include_router(users_router, prefix=api_prefix, tags=["users"])
    app.include_router(providers_router, prefix=api_prefix, tags=["providers"])
    app.include_router(services_router, prefix=api_prefix, tags=["services"])
    app.include_router(bookings_router, prefix=api_prefix, tags=["bookings"])
    app.include_router(payments_router, prefix=api_prefix, tags=["payments"])
    app.include_router(reviews_router, prefix=api_prefix, tags=["reviews"])
    app.include_router(audits_router, prefix=api_prefix, tags=["audits"])

    logger.debug("Routers registered", extra={"api_prefix": api_prefix})
