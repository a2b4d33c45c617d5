"""Offset and cursor pagination driven by per-entity configs.

Declare a ``PaginationConfig`` per feature, parse the request with the
``get_pagination_params`` dependency and hand both to ``PaginationService``:

    @router.get("", response_model=OffsetPage[UserListItem], response_model_exclude_unset=True)
    async def list_users(
        params: Annotated[PaginationParams, Depends(get_pagination_params)],
        pagination: PaginationServiceDep,
    ):
        return await pagination.paginate(USERS_PAGINATION, params)

Cursor pages use keyset seeks with opaque base64 cursors that clients pass
back unchanged in ``after``/``before``.
"""

from booking_service.core.pagination.config import PaginationConfig
from booking_service.core.pagination.contracts import (
    ALL_OPERATORS,
    DEFAULT_CURSOR_COLUMN,
    DEFAULT_LIMIT,
    DEFAULT_MAX_LIMIT,
    FilterOperator,
    PaginationStrategy,
    SortDirection,
)
from booking_service.core.pagination.cursor import CursorCodec
from booking_service.core.pagination.exceptions import (
    PaginationConfigError,
    PaginationValidationError,
)
from booking_service.core.pagination.keyset import CursorPaginator
from booking_service.core.pagination.offset import OffsetPaginator
from booking_service.core.pagination.params import (
    PageQuery,
    PaginationOptions,
    PaginationParams,
    get_pagination_params,
    parse_pagination_query,
)
from booking_service.core.pagination.query_builder import QueryBuilder
from booking_service.core.pagination.schemas import (
    CursorPage,
    CursorPageMeta,
    OffsetPage,
    OffsetPageMeta,
)
from booking_service.core.pagination.service import PaginationService

__all__ = [
    "ALL_OPERATORS",
    "DEFAULT_CURSOR_COLUMN",
    "DEFAULT_LIMIT",
    "DEFAULT_MAX_LIMIT",
    "CursorCodec",
    "CursorPage",
    "CursorPageMeta",
    "CursorPaginator",
    "FilterOperator",
    "OffsetPage",
    "OffsetPageMeta",
    "OffsetPaginator",
    "PageQuery",
    "PaginationConfig",
    "PaginationConfigError",
    "PaginationOptions",
    "PaginationParams",
    "PaginationService",
    "PaginationStrategy",
    "PaginationValidationError",
    "QueryBuilder",
    "SortDirection",
    "get_pagination_params",
    "parse_pagination_query",
]
