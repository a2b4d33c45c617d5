"""FastAPI dependencies for route handlers.

Features import their dependencies from here rather than from ``infra``:

    from booking_service.core.dependencies import (
        DatabaseDep,
        PaginationParamsDep,
        PaginationServiceDep,
        UnitOfWorkDep,
    )
"""

from booking_service.core.dependencies.database import (
    DatabaseDep,
    UnitOfWorkDep,
    get_database,
    get_unit_of_work,
)
from booking_service.core.dependencies.pagination import (
    PaginationParamsDep,
    PaginationServiceDep,
    get_pagination_service,
)

__all__ = [
    "DatabaseDep",
    "PaginationParamsDep",
    "PaginationServiceDep",
    "UnitOfWorkDep",
    "get_database",
    "get_pagination_service",
    "get_unit_of_work",
]
