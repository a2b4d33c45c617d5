"""Row factories for tests.

Each factory inserts through the feature repository and returns the row dict
the repository hands back.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from itertools import count
from typing import TYPE_CHECKING, Any

from booking_service.features.bookings.models import BookingStatus
from booking_service.features.bookings.repository import BookingRepository
from booking_service.features.providers.repository import ProviderRepository
from booking_service.features.services.models import ServiceStatus
from booking_service.features.services.repository import ServiceRepository
from booking_service.features.users.models import UserRole
from booking_service.features.users.repository import UserRepository

if TYPE_CHECKING:
    from uuid import UUID

    from booking_service.infra.database import Database

_sequence = count(1)

BASE_TIME = datetime(2025, 3, 1, 9, 0, tzinfo=UTC)


async def create_user(database: Database, **overrides: Any) -> dict[str, Any]:
    n = next(_sequence)
    values = {
        "email": f"user{n}@example.com",
        "first_name": f"First{n}",
        "last_name": f"Last{n}",
        "password": "hashed-password",
        "role": UserRole.USER,
        **overrides,
    }
    return await UserRepository(database).create_one(values)


async def create_users(database: Database, total: int, **overrides: Any) -> list[dict[str, Any]]:
    """Insert ``total`` users, one minute apart, oldest first."""
    rows = []
    for i in range(total):
        n = next(_sequence)
        rows.append(
            {
                "email": f"bulk{n}@example.com",
                "first_name": f"First{n}",
                "last_name": f"Last{n}",
                "password": "hashed-password",
                "role": UserRole.USER,
                "created_at": BASE_TIME + timedelta(minutes=i),
                **overrides,
            }
        )
    return await UserRepository(database).create_many(rows)


async def create_provider(database: Database, user_id: UUID, **overrides: Any) -> dict[str, Any]:
    n = next(_sequence)
    values = {"user_id": user_id, "name": f"Provider {n}", **overrides}
    return await ProviderRepository(database).create_one(values)


async def create_service(
    database: Database,
    provider_id: UUID,
    *,
    status: ServiceStatus = ServiceStatus.ACTIVE,
    **overrides: Any,
) -> dict[str, Any]:
    n = next(_sequence)
    values = {
        "provider_id": provider_id,
        "name": f"Service {n}",
        "price": 5000,
        "duration": 60,
        "status": status,
        **overrides,
    }
    return await ServiceRepository(database).create_one(values)


async def create_bookings(
    database: Database,
    service: dict[str, Any],
    user_id: UUID,
    total: int,
    *,
    status: BookingStatus = BookingStatus.PENDING,
) -> list[dict[str, Any]]:
    """Insert ``total`` bookings one hour apart starting at ``BASE_TIME``."""
    rows = [
        {
            "service_id": service["id"],
            "user_id": user_id,
            "start_at": BASE_TIME + timedelta(hours=i),
            "end_at": BASE_TIME + timedelta(hours=i, minutes=service["duration"]),
            "status": status,
            "total_price": service["price"],
        }
        for i in range(total)
    ]
    return await BookingRepository(database).create_many(rows)
