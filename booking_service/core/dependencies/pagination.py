"""Pagination dependencies for FastAPI routes.

Usage:
    @router.get("", response_model=OffsetPage[ProviderListItem], response_model_exclude_unset=True)
    async def list_providers(params: PaginationParamsDep, pagination: PaginationServiceDep):
        return await pagination.paginate(PROVIDERS_PAGINATION, params)
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from booking_service.core.dependencies.database import DatabaseDep
from booking_service.core.pagination import (
    PaginationParams,
    PaginationService,
    get_pagination_params,
)


def get_pagination_service(database: DatabaseDep) -> PaginationService:
    return PaginationService(database)


PaginationServiceDep = Annotated[PaginationService, Depends(get_pagination_service)]
PaginationParamsDep = Annotated[PaginationParams, Depends(get_pagination_params)]

__all__ = ["PaginationParamsDep", "PaginationServiceDep", "get_pagination_service"]
