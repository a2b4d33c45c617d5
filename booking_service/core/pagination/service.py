"""Strategy dispatcher for paginated endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from booking_service.core.pagination.contracts import PaginationStrategy
from booking_service.core.pagination.exceptions import PaginationConfigError
from booking_service.core.pagination.keyset import CursorPaginator
from booking_service.core.pagination.offset import OffsetPaginator

if TYPE_CHECKING:
    from booking_service.core.database.transaction import SessionProvider
    from booking_service.core.pagination.config import PaginationConfig
    from booking_service.core.pagination.params import PaginationOptions, PaginationParams
    from booking_service.core.pagination.schemas import CursorPage, OffsetPage


class PaginationService:
    """Route a config and request to the paginator for ``config.strategy``.

    Example:
        page = await pagination.paginate(USERS_PAGINATION, params)
    """

    __slots__ = ("_paginators",)

    def __init__(self, database: SessionProvider) -> None:
        self._paginators: dict[PaginationStrategy, OffsetPaginator | CursorPaginator] = {
            PaginationStrategy.OFFSET: OffsetPaginator(database),
            PaginationStrategy.CURSOR: CursorPaginator(database),
        }

    async def paginate(
        self,
        config: PaginationConfig[Any],
        params: PaginationParams,
        options: PaginationOptions | None = None,
    ) -> OffsetPage[dict[str, Any]] | CursorPage[dict[str, Any]]:
        """Raises:
        PaginationConfigError: ``config.strategy`` has no paginator.
        """
        paginator = self._paginators.get(config.strategy)
        if paginator is None:
            msg = f"Unsupported pagination strategy {config.strategy!r} for {config.model.__name__}"
            raise PaginationConfigError(msg)
        return await paginator.paginate(config, params, options)


__all__ = ["PaginationService"]
