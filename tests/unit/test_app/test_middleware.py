"""Tests for request ID and request timeout middleware."""

from __future__ import annotations

import asyncio

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from booking_service.app.exception_handlers import configure_exception_handlers
from booking_service.app.middleware import (
    REQUEST_ID_HEADER,
    RequestIDMiddleware,
    RequestTimeoutMiddleware,
)
from booking_service.core.exceptions import ConflictException


@pytest.fixture
def app() -> FastAPI:
    application = FastAPI()
    configure_exception_handlers(application)
    application.add_middleware(RequestTimeoutMiddleware, timeout=0.1)
    application.add_middleware(RequestIDMiddleware)

    @application.get("/fast")
    async def fast():
        return {"ok": True}

    @application.get("/slow")
    async def slow():
        await asyncio.sleep(0.5)
        return {"ok": True}

    @application.get("/conflict")
    async def conflict():
        raise ConflictException("Slot taken", extra={"slot": "09:00"})

    return application


@pytest.fixture
async def client(app: FastAPI):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


async def test_request_id_is_generated(client):
    response = await client.get("/fast")

    assert response.status_code == 200
    assert response.headers[REQUEST_ID_HEADER]


async def test_request_id_is_propagated(client):
    response = await client.get("/fast", headers={REQUEST_ID_HEADER: "req-123"})

    assert response.headers[REQUEST_ID_HEADER] == "req-123"


async def test_slow_handler_gets_gateway_timeout(client):
    response = await client.get("/slow", headers={REQUEST_ID_HEADER: "req-slow"})

    assert response.status_code == 504
    assert response.headers["content-type"].startswith("application/problem+json")
    body = response.json()
    assert body["type"] == "request-timeout"
    assert body["status"] == 504
    assert body["instance"] == "/slow"
    assert body["request_id"] == "req-slow"
    assert response.headers[REQUEST_ID_HEADER] == "req-slow"


async def test_app_exception_renders_problem_details(client):
    response = await client.get("/conflict", headers={REQUEST_ID_HEADER: "req-409"})

    assert response.status_code == 409
    body = response.json()
    assert body["title"] == "Conflict"
    assert body["detail"] == "Slot taken"
    assert body["slot"] == "09:00"
    assert body["request_id"] == "req-409"
