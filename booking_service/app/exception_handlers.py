"""Global exception handlers for FastAPI application."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError

from booking_service.core.database.exceptions import NotFoundError
from booking_service.core.exceptions import AppException, ServiceUnavailableException
from booking_service.core.schemas.problem_details import (
    ProblemDetails,
    ValidationErrorItem,
    ValidationProblemDetails,
)

logger = logging.getLogger(__name__)


def _get_request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


def _create_problem_detail(
    status_code: int,
    detail: str,
    type_: str = "about:blank",
    title: str | None = None,
    instance: str | None = None,
    extra: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Create RFC 7807 Problem Details response body.

    Args:
        status_code: HTTP status code.
        detail: Human-readable error description.
        type_: Error type identifier.
        title: Short human-readable summary.
        instance: URI identifying this occurrence.
        extra: Additional members merged into the document.
    """
    problem = ProblemDetails(
        type=type_,
        title=title or AppException._default_title(status_code),
        status=status_code,
        detail=detail,
        instance=instance,
    )
    response_data = problem.model_dump(exclude_none=True)
    if extra:
        response_data.update(extra)
    return response_data


def problem_response(request: Request, exc: AppException) -> JSONResponse:
    """Render an ``AppException`` as a problem details response.

    Also used by middleware that must answer before the handlers run.
    """
    problem_data = _create_problem_detail(
        status_code=exc.status_code,
        detail=exc.detail,
        type_=exc.type,
        title=exc.title,
        instance=exc.instance or request.url.path,
        extra=exc.extra,
    )
    request_id = _get_request_id(request)
    if request_id:
        problem_data["request_id"] = request_id
    return JSONResponse(
        status_code=exc.status_code,
        content=problem_data,
        media_type="application/problem+json",
    )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Convert ``AppException`` instances into RFC 7807 responses.

    4xx are logged at WARNING, anything else at ERROR.
    """
    level = logging.WARNING if exc.status_code < 500 else logging.ERROR
    logger.log(
        level,
        "Application exception occurred",
        extra={
            "request_id": _get_request_id(request),
            "path": request.url.path,
            "method": request.method,
            "exception_type": exc.type,
            "status_code": exc.status_code,
            "detail": exc.detail,
        },
    )
    return problem_response(request, exc)


async def not_found_exception_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    """Map repository ``NotFoundError`` to a 404 problem document."""
    logger.warning(
        "Entity not found",
        extra={
            "request_id": _get_request_id(request),
            "path": request.url.path,
            "method": request.method,
            "entity": exc.model_name,
        },
    )
    return problem_response(
        request,
        AppException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=exc.message,
            type="not-found",
            extra={key: str(value) for key, value in exc.identifier.items()},
        ),
    )


async def database_unavailable_handler(request: Request, exc: OperationalError) -> JSONResponse:
    """Answer 503 when the database cannot be reached mid-request."""
    logger.error(
        "Database unavailable",
        extra={
            "request_id": _get_request_id(request),
            "path": request.url.path,
            "method": request.method,
            "error": str(exc.orig),
        },
    )
    return problem_response(
        request,
        ServiceUnavailableException("Database is unavailable", type="database-unavailable"),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Convert request validation errors into field-level problem details."""
    request_id = _get_request_id(request)

    validation_errors = [
        ValidationErrorItem(
            field=".".join(str(loc) for loc in error["loc"]),
            message=error["msg"],
            type=error["type"],
            value=error.get("input"),
        )
        for error in exc.errors()
    ]

    logger.warning(
        "Request validation failed",
        extra={
            "request_id": request_id,
            "path": request.url.path,
            "method": request.method,
            "error_count": len(validation_errors),
        },
    )

    problem = ValidationProblemDetails(
        type="validation-error",
        title="Validation Error",
        status=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail=f"Request validation failed for {len(validation_errors)} field(s)",
        instance=request.url.path,
        errors=validation_errors,
    )
    response_data = problem.model_dump(mode="json", exclude_none=True)
    if request_id:
        response_data["request_id"] = request_id

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=response_data,
        media_type="application/problem+json",
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all: log the traceback and answer with a generic 500."""
    request_id = _get_request_id(request)

    logger.error(
        "Unexpected exception occurred",
        extra={
            "request_id": request_id,
            "path": request.url.path,
            "method": request.method,
            "exception_type": type(exc).__name__,
            "exception_message": str(exc),
        },
        exc_info=exc,
    )

    # Don't expose internal details
    problem_data = _create_problem_detail(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="An unexpected error occurred while processing your request",
        type_="internal-error",
        title="Internal Server Error",
        instance=request.url.path,
    )
    if request_id:
        problem_data["request_id"] = request_id

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=problem_data,
        media_type="application/problem+json",
    )


def configure_exception_handlers(app: FastAPI) -> None:
    """Register the handlers that turn exceptions into problem details.

    Example:
        app = FastAPI()
        configure_exception_handlers(app)
    """
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(NotFoundError, not_found_exception_handler)
    app.add_exception_handler(OperationalError, database_unavailable_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    logger.debug("Exception handlers configured")


__all__ = ["configure_exception_handlers", "problem_response"]
