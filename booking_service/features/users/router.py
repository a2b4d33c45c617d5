"""API router for the users feature.

Endpoints:
    GET    /users             - Paginated list (offset)
    GET    /users/{user_id}   - Single user
    DELETE /users/{user_id}   - Soft delete
"""

from __future__ import annotations

import logging
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, status

from booking_service.core.dependencies import (  # noqa: TC001
    PaginationParamsDep,
    PaginationServiceDep,
)
from booking_service.core.exceptions import NotFoundException
from booking_service.core.pagination import OffsetPage, PaginationOptions
from booking_service.features.users.models import User
from booking_service.features.users.pagination import USERS_PAGINATION
from booking_service.features.users.repository import UserRepositoryDep  # noqa: TC001
from booking_service.features.users.schemas import UserListItem, UserResponse

router = APIRouter(prefix="/users", tags=["users"])
logger = logging.getLogger(__name__)

_NOT_DELETED = PaginationOptions(where=(User.deleted_at.is_(None),))


@router.get(
    "",
    response_model=OffsetPage[UserListItem],
    response_model_exclude_unset=True,
    summary="List users",
)
async def list_users(params: PaginationParamsDep, pagination: PaginationServiceDep):
    return await pagination.paginate(USERS_PAGINATION, params, _NOT_DELETED)


@router.get("/{user_id}", response_model=UserResponse, summary="Get a user")
async def get_user(user_id: UUID, users: UserRepositoryDep):
    user = await users.find_one_by_id(user_id)
    if user is None:
        raise NotFoundException(f"User {user_id} not found", extra={"user_id": str(user_id)})
    return user


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Soft delete a user",
)
async def delete_user(user_id: UUID, users: UserRepositoryDep) -> None:
    deleted = await users.soft_delete_one_by_id(user_id)
    if deleted is None:
        raise NotFoundException(f"User {user_id} not found", extra={"user_id": str(user_id)})
    logger.info("User soft-deleted", extra={"user_id": str(user_id)})
