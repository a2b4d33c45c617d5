"""Repository for the providers feature."""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated, Any

from fastapi import Depends
from sqlalchemy import update

from booking_service.core.database import BaseRepository, session_scope
from booking_service.core.dependencies import DatabaseDep  # noqa: TC001
from booking_service.features.providers.models import Provider

if TYPE_CHECKING:
    from decimal import Decimal
    from uuid import UUID

    from booking_service.core.database import SessionProvider


class ProviderRepository(BaseRepository[Provider]):
    def __init__(self, database: SessionProvider) -> None:
        super().__init__(
            Provider,
            database,
            exclude_columns=["deleted_at"],
            soft_delete_column="deleted_at",
        )

    async def update_rating(
        self, provider_id: UUID, rating: Decimal, reviews_count: int
    ) -> dict[str, Any] | None:
        """Store the denormalized review aggregate; ``None`` for an unknown provider."""
        stmt = (
            update(Provider)
            .where(Provider.id == provider_id, Provider.deleted_at.is_(None))
            .values(rating=rating, reviews_count=reviews_count)
            .returning(Provider.id, Provider.rating, Provider.reviews_count)
        )
        async with session_scope(self._database) as session:
            row = (await session.execute(stmt)).one_or_none()

        self._lazy.debug(
            lambda: f"db.update_rating: Provider({provider_id}) -> {rating} over {reviews_count}"
        )
        return dict(row._mapping) if row is not None else None


def get_provider_repository(database: DatabaseDep) -> ProviderRepository:
    return ProviderRepository(database)


ProviderRepositoryDep = Annotated[ProviderRepository, Depends(get_provider_repository)]
