"""Repository for the users feature."""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated

from fastapi import Depends

from booking_service.core.database import BaseRepository
from booking_service.core.dependencies import DatabaseDep  # noqa: TC001
from booking_service.features.users.models import User

if TYPE_CHECKING:
    from booking_service.core.database import SessionProvider


class UserRepository(BaseRepository[User]):
    """Users without their password hash; soft-deleted users are invisible."""

    def __init__(self, database: SessionProvider) -> None:
        super().__init__(
            User,
            database,
            exclude_columns=["password"],
            soft_delete_column="deleted_at",
        )


def get_user_repository(database: DatabaseDep) -> UserRepository:
    return UserRepository(database)


UserRepositoryDep = Annotated[UserRepository, Depends(get_user_repository)]
