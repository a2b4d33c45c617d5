"""Tests for application exception handlers."""

from __future__ import annotations

import json

import pytest
from sqlalchemy.exc import OperationalError
from starlette.requests import Request

from booking_service.app.exception_handlers import (
    app_exception_handler,
    database_unavailable_handler,
    generic_exception_handler,
    not_found_exception_handler,
)
from booking_service.core.database import NotFoundError
from booking_service.core.exceptions import (
    AppException,
    BadRequestException,
    GatewayTimeoutException,
    NotFoundException,
    ValidationException,
)


def _build_request(path: str = "/test") -> Request:
    """Create a minimal ASGI request for handler tests."""
    scope = {
        "type": "http",
        "method": "GET",
        "path": path,
        "headers": [],
        "query_string": b"",
        "client": ("test", 1234),
        "server": ("test", 80),
    }
    return Request(scope)


@pytest.mark.parametrize(
    ("exc", "status", "type_"),
    [
        (BadRequestException("bad"), 400, "bad-request"),
        (NotFoundException("missing"), 404, "not-found"),
        (GatewayTimeoutException("slow"), 504, "request-timeout"),
        (ValidationException("ends before it starts"), 422, "validation-error"),
        (AppException(status_code=418, detail="teapot"), 418, "about:blank"),
    ],
)
async def test_app_exception_handler(exc, status, type_):
    response = await app_exception_handler(_build_request("/bookings"), exc)

    body = json.loads(response.body)
    assert response.status_code == status
    assert response.media_type == "application/problem+json"
    assert body["type"] == type_
    assert body["status"] == status
    assert body["instance"] == "/bookings"


async def test_default_title_for_unknown_status():
    exc = AppException(status_code=418, detail="teapot")

    assert exc.title == "Error"


async def test_request_id_is_included_when_present():
    request = _build_request()
    request.state.request_id = "req-1"

    response = await app_exception_handler(request, NotFoundException("missing"))

    assert json.loads(response.body)["request_id"] == "req-1"


async def test_repository_not_found_maps_to_404():
    error = NotFoundError("Booking", {"id": "42"})

    response = await not_found_exception_handler(_build_request(), error)

    body = json.loads(response.body)
    assert response.status_code == 404
    assert body["type"] == "not-found"
    assert body["id"] == "42"


async def test_generic_handler_hides_details():
    response = await generic_exception_handler(_build_request(), RuntimeError("db password=x"))

    body = json.loads(response.body)
    assert response.status_code == 500
    assert body["type"] == "internal-error"
    assert "password" not in body["detail"]


async def test_database_unavailable_handler():
    exc = OperationalError("SELECT 1", {}, ConnectionRefusedError("connection refused"))

    response = await database_unavailable_handler(_build_request("/providers"), exc)

    body = json.loads(response.body)
    assert response.status_code == 503
    assert body["type"] == "database-unavailable"
    assert "connection refused" not in body["detail"]
