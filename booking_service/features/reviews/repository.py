"""Repository for the reviews feature."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, Annotated

from fastapi import Depends
from sqlalchemy import func, select

from booking_service.core.database import BaseRepository, session_scope
from booking_service.core.dependencies import DatabaseDep  # noqa: TC001
from booking_service.features.reviews.models import Review
from booking_service.features.services.models import Service

if TYPE_CHECKING:
    from uuid import UUID

    from booking_service.core.database import SessionProvider


class ReviewRepository(BaseRepository[Review]):
    def __init__(self, database: SessionProvider) -> None:
        super().__init__(Review, database)

    async def provider_stats(self, provider_id: UUID) -> tuple[Decimal, int]:
        """Average rating (one decimal) and review count across a provider's services."""
        stmt = (
            select(func.avg(Review.rating), func.count(Review.id))
            .join(Service, Service.id == Review.service_id)
            .where(Service.provider_id == provider_id)
        )
        async with session_scope(self._database) as session:
            average, count = (await session.execute(stmt)).one()

        if not count:
            return Decimal("0.0"), 0
        rating = Decimal(str(average)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
        return rating, count


def get_review_repository(database: DatabaseDep) -> ReviewRepository:
    return ReviewRepository(database)


ReviewRepositoryDep = Annotated[ReviewRepository, Depends(get_review_repository)]
