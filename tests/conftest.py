"""Pytest configuration and shared fixtures.

Organization:
    - Database Fixtures: in-memory SQLite engine and a ``Database`` bound to it
    - Application Fixtures: FastAPI app with the database overridden, HTTP client
    - Data Fixtures: a user, a provider and an active service
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator
from typing import TYPE_CHECKING, Any

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

if TYPE_CHECKING:
    from fastapi import FastAPI
    from sqlalchemy.ext.asyncio import AsyncEngine

    from booking_service.infra.database import Database

# Ensure tests run without external infrastructure
os.environ.setdefault("APP_ENVIRONMENT", "test")
os.environ.setdefault("DB_ENABLED", "false")


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine]:
    """Async engine over one shared in-memory SQLite connection.

    ``StaticPool`` hands every session the same connection, so all sessions
    of a test see the same database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
async def database(db_engine: AsyncEngine) -> Database:
    """``Database`` with every feature table created."""
    from booking_service.infra.database import Database

    db = Database(engine=db_engine)
    await db.create_schema()
    return db


# ============================================================================
# Application Fixtures
# ============================================================================


@pytest.fixture
def app(database: Database) -> FastAPI:
    """FastAPI application whose routes use the test database.

    ``ASGITransport`` does not run the lifespan; the ``database`` fixture
    creates the schema instead.
    """
    from booking_service.app.main import create_app
    from booking_service.infra.database import get_database

    application = create_app()
    application.dependency_overrides[get_database] = lambda: database
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """HTTPX client talking to the app in-process.

    Example:
        async def test_liveness(client):
            response = await client.get("/api/v1/health/live")
            assert response.status_code == 200
    """
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


# ============================================================================
# Data Fixtures
# ============================================================================


@pytest.fixture
async def user(database: Database) -> dict[str, Any]:
    from tests.utils import create_user

    return await create_user(database)


@pytest.fixture
async def provider(database: Database, user: dict[str, Any]) -> dict[str, Any]:
    from tests.utils import create_provider

    return await create_provider(database, user["id"])


@pytest.fixture
async def active_service(database: Database, provider: dict[str, Any]) -> dict[str, Any]:
    from tests.utils import create_service

    return await create_service(database, provider["id"])
