"""API router for the services feature.

Endpoints:
    GET    /services                - Paginated list (offset)
    GET    /services/{service_id}   - Single service
    POST   /services                - Create a service for an existing provider
    DELETE /services/{service_id}   - Soft delete
"""

from __future__ import annotations

from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, status

from booking_service.core.dependencies import (  # noqa: TC001
    PaginationParamsDep,
    PaginationServiceDep,
)
from booking_service.core.exceptions import NotFoundException
from booking_service.core.pagination import OffsetPage, PaginationOptions
from booking_service.features.providers.repository import ProviderRepositoryDep  # noqa: TC001
from booking_service.features.services.models import Service
from booking_service.features.services.pagination import SERVICES_PAGINATION
from booking_service.features.services.repository import ServiceRepositoryDep  # noqa: TC001
from booking_service.features.services.schemas import (
    ServiceCreate,
    ServiceListItem,
    ServiceResponse,
)

router = APIRouter(prefix="/services", tags=["services"])

_NOT_DELETED = PaginationOptions(where=(Service.deleted_at.is_(None),))


def _not_found(service_id: UUID) -> NotFoundException:
    return NotFoundException(
        f"Service {service_id} not found", extra={"service_id": str(service_id)}
    )


@router.get(
    "",
    response_model=OffsetPage[ServiceListItem],
    response_model_exclude_unset=True,
    summary="List services",
)
async def list_services(params: PaginationParamsDep, pagination: PaginationServiceDep):
    return await pagination.paginate(SERVICES_PAGINATION, params, _NOT_DELETED)


@router.get("/{service_id}", response_model=ServiceResponse, summary="Get a service")
async def get_service(service_id: UUID, services: ServiceRepositoryDep):
    service = await services.find_one_by_id(service_id)
    if service is None:
        raise _not_found(service_id)
    return service


@router.post(
    "",
    response_model=ServiceResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a service",
)
async def create_service(
    payload: ServiceCreate,
    services: ServiceRepositoryDep,
    providers: ProviderRepositoryDep,
):
    if not await providers.exists(payload.provider_id):
        raise NotFoundException(
            f"Provider {payload.provider_id} not found",
            extra={"provider_id": str(payload.provider_id)},
        )
    return await services.create_one(payload.model_dump())


@router.delete(
    "/{service_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Soft delete a service",
)
async def delete_service(service_id: UUID, services: ServiceRepositoryDep) -> None:
    if await services.soft_delete_one_by_id(service_id) is None:
        raise _not_found(service_id)
