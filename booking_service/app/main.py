"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI

from booking_service.app.exception_handlers import configure_exception_handlers
from booking_service.app.lifespan import lifespan
from booking_service.app.middleware import configure_middleware
from booking_service.app.router import setup_routers
from booking_service.core.settings import get_app_settings


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Settings are loaded once and cached, so building several apps in tests
    reuses the same configuration unless the cache is cleared.
    """
    app_settings = get_app_settings()

    app = FastAPI(
        title=app_settings.title,
        version=app_settings.version,
        debug=app_settings.debug,
        docs_url=app_settings.docs_url,
        redoc_url=None,
        openapi_url="/openapi.json" if app_settings.docs_url else None,
        lifespan=lifespan,
    )

    configure_exception_handlers(app)
    configure_middleware(app)
    setup_routers(app, app_settings)

    return app


# Application instance for uvicorn
app = create_app()
