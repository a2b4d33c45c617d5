"""Middleware configuration for FastAPI application."""

from __future__ import annotations

import asyncio
import logging
import time
import uuid
from typing import TYPE_CHECKING

from fastapi import Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from booking_service.app.exception_handlers import problem_response
from booking_service.core.exceptions import GatewayTimeoutException
from booking_service.core.settings import get_app_settings
from booking_service.infra.logging import clear_log_context, set_log_context

if TYPE_CHECKING:
    from fastapi import FastAPI
    from starlette.middleware.base import RequestResponseEndpoint
    from starlette.responses import Response
    from starlette.types import ASGIApp

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tag each request with an ID and put it in the logging context.

    The ID comes from the ``X-Request-ID`` header when the client sends
    one, otherwise a new UUID is generated. It is echoed in the response.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        set_log_context(request_id=request_id)
        try:
            response = await call_next(request)
        finally:
            clear_log_context()
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class RequestTimeoutMiddleware(BaseHTTPMiddleware):
    """Cancel handlers that run longer than ``timeout`` seconds.

    The client gets a 504 problem document; the cancelled handler's unit of
    work rolls back.
    """

    def __init__(self, app: ASGIApp, timeout: float) -> None:
        super().__init__(app)
        self.timeout = timeout

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        try:
            return await asyncio.wait_for(call_next(request), timeout=self.timeout)
        except TimeoutError:
            elapsed = time.perf_counter() - started
            logger.warning(
                "Request timed out",
                extra={
                    "path": request.url.path,
                    "method": request.method,
                    "timeout": self.timeout,
                    "elapsed": round(elapsed, 3),
                },
            )
            return problem_response(
                request,
                GatewayTimeoutException(
                    detail=f"Request did not complete within {self.timeout:g} seconds",
                    extra={"timeout": self.timeout},
                ),
            )


def configure_middleware(app: FastAPI) -> None:
    """Configure middleware for the application.

    Order (outermost first): CORS, request ID, request timeout. The request
    ID wraps the timeout so 504 responses still carry it.
    """
    app_settings = get_app_settings()

    # added last runs first
    app.add_middleware(RequestTimeoutMiddleware, timeout=app_settings.request_timeout)
    app.add_middleware(RequestIDMiddleware)

    cors_origins = app_settings.cors_origins or ["*"]
    logger.debug("Configuring CORS", extra={"origins": cors_origins})
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials="*" not in cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
        max_age=3600,
    )


__all__ = ["RequestIDMiddleware", "RequestTimeoutMiddleware", "configure_middleware"]
