"""API router for the providers feature.

Endpoints:
    GET    /providers                 - Paginated list (offset)
    GET    /providers/{provider_id}   - Single provider
    POST   /providers                 - Create a provider for an existing user
    DELETE /providers/{provider_id}   - Soft delete
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
from booking_service.features.providers.models import Provider
from booking_service.features.providers.pagination import PROVIDERS_PAGINATION
from booking_service.features.providers.repository import ProviderRepositoryDep  # noqa: TC001
from booking_service.features.providers.schemas import (
    ProviderCreate,
    ProviderListItem,
    ProviderResponse,
)
from booking_service.features.users.repository import UserRepositoryDep  # noqa: TC001

router = APIRouter(prefix="/providers", tags=["providers"])
logger = logging.getLogger(__name__)

_NOT_DELETED = PaginationOptions(where=(Provider.deleted_at.is_(None),))


def _not_found(provider_id: UUID) -> NotFoundException:
    return NotFoundException(
        f"Provider {provider_id} not found", extra={"provider_id": str(provider_id)}
    )


@router.get(
    "",
    response_model=OffsetPage[ProviderListItem],
    response_model_exclude_unset=True,
    summary="List providers",
)
async def list_providers(params: PaginationParamsDep, pagination: PaginationServiceDep):
    return await pagination.paginate(PROVIDERS_PAGINATION, params, _NOT_DELETED)


@router.get("/{provider_id}", response_model=ProviderResponse, summary="Get a provider")
async def get_provider(provider_id: UUID, providers: ProviderRepositoryDep):
    provider = await providers.find_one_by_id(provider_id)
    if provider is None:
        raise _not_found(provider_id)
    return provider


@router.post(
    "",
    response_model=ProviderResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a provider",
)
async def create_provider(
    payload: ProviderCreate,
    providers: ProviderRepositoryDep,
    users: UserRepositoryDep,
):
    if not await users.exists(payload.user_id):
        raise NotFoundException(
            f"User {payload.user_id} not found", extra={"user_id": str(payload.user_id)}
        )
    return await providers.create_one(payload.model_dump())


@router.delete(
    "/{provider_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Soft delete a provider",
)
async def delete_provider(provider_id: UUID, providers: ProviderRepositoryDep) -> None:
    if await providers.soft_delete_one_by_id(provider_id) is None:
        raise _not_found(provider_id)
    logger.info("Provider soft-deleted", extra={"provider_id": str(provider_id)})
