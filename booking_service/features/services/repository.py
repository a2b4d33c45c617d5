"""Repository for the services feature."""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated

from fastapi import Depends

from booking_service.core.database import BaseRepository
from booking_service.core.dependencies import DatabaseDep  # noqa: TC001
from booking_service.features.services.models import Service

if TYPE_CHECKING:
    from booking_service.core.database import SessionProvider


class ServiceRepository(BaseRepository[Service]):
    def __init__(self, database: SessionProvider) -> None:
        super().__init__(
            Service,
            database,
            exclude_columns=["deleted_at"],
            soft_delete_column="deleted_at",
        )


def get_service_repository(database: DatabaseDep) -> ServiceRepository:
    return ServiceRepository(database)


ServiceRepositoryDep = Annotated[ServiceRepository, Depends(get_service_repository)]
