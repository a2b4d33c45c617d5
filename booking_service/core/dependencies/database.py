"""Database dependencies for FastAPI route handlers.

Handlers never receive a session. They receive the process-wide ``Database``
and hand it to repositories, paginators and units of work, which resolve the
session themselves (ambient unit-of-work session or a short-lived one).

Usage:
    from booking_service.core.dependencies import DatabaseDep

    @router.get("/providers/{provider_id}")
    async def get_provider(provider_id: UUID, database: DatabaseDep):
        return await ProviderRepository(database).find_one_by_id(provider_id)

Tests override ``get_database`` through ``app.dependency_overrides``.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from booking_service.core.database import UnitOfWork
from booking_service.infra.database import Database, get_database

DatabaseDep = Annotated[Database, Depends(get_database)]


def get_unit_of_work(database: DatabaseDep) -> UnitOfWork:
    return UnitOfWork(database)


UnitOfWorkDep = Annotated[UnitOfWork, Depends(get_unit_of_work)]

__all__ = ["DatabaseDep", "UnitOfWorkDep", "get_database", "get_unit_of_work"]
