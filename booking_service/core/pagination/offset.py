"""Offset (page number) pagination."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Any

from sqlalchemy import func, select

from booking_service.core.database.transaction import session_scope
from booking_service.core.pagination.contracts import SQL_INT_MAX
from booking_service.core.pagination.exceptions import PaginationValidationError
from booking_service.core.pagination.params import PaginationOptions
from booking_service.core.pagination.query_builder import QueryBuilder
from booking_service.core.pagination.schemas import OffsetPage, OffsetPageMeta
from booking_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from booking_service.core.database.transaction import SessionProvider
    from booking_service.core.pagination.config import PaginationConfig
    from booking_service.core.pagination.params import PaginationParams

logger = logging.getLogger(__name__)
lazy_logger = get_lazy_logger(__name__)


def resolve_limit(config: PaginationConfig[Any], requested: int | None) -> int:
    """Requested size or the config default, clamped to ``1..max_limit``."""
    limit = requested or config.default_limit
    return max(1, min(limit, config.max_limit))


def resolve_offset(page: int, limit: int) -> int:
    """Row offset of ``page``.

    Raises:
        PaginationValidationError: The offset does not fit a 64-bit integer.
    """
    offset = (page - 1) * limit
    if offset > SQL_INT_MAX:
        raise PaginationValidationError(
            f"Page {page} is out of range",
            extra={"page": str(page), "max_page": SQL_INT_MAX // limit + 1},
        )
    return offset


def build_offset_meta(page: int, limit: int, item_count: int) -> OffsetPageMeta:
    page_count = math.ceil(item_count / limit) if item_count else 0
    return OffsetPageMeta(
        page=page,
        limit=limit,
        item_count=item_count,
        page_count=page_count,
        has_previous_page=page > 1,
        has_next_page=page < page_count,
    )


class OffsetPaginator:
    """``LIMIT/OFFSET`` pages with a total count.

    Runs two statements over the same predicate: ``COUNT(*)`` over the
    filtered statement and the ordered row query.
    """

    __slots__ = ("_database",)

    def __init__(self, database: SessionProvider) -> None:
        self._database = database

    async def paginate(
        self,
        config: PaginationConfig[Any],
        params: PaginationParams,
        options: PaginationOptions | None = None,
    ) -> OffsetPage[dict[str, Any]]:
        options = options or PaginationOptions()
        builder = QueryBuilder(config)

        limit = resolve_limit(config, params.query.limit)
        page = max(params.query.page or 1, 1)
        offset = resolve_offset(page, limit)

        projection = builder.resolve_projection(params.select, options.columns)
        # primary key as last tie-break keeps LIMIT/OFFSET windows stable
        sort = builder.with_tiebreak(builder.resolve_sort(params.sort_by), config.cursor_column)

        statement = (
            select(*builder.labeled(projection))
            .select_from(config.model.__table__)
            .where(*builder.where_clauses(params, options))
        )
        if options.statement_hook is not None:
            statement = options.statement_hook(statement)

        count_statement = select(func.count()).select_from(statement.subquery())
        rows_statement = statement.order_by(*builder.order_by(sort)).limit(limit).offset(offset)

        async with session_scope(self._database) as session:
            item_count = (await session.execute(count_statement)).scalar_one()
            rows = (await session.execute(rows_statement)).all()

        meta = build_offset_meta(page, limit, item_count)
        lazy_logger.debug(
            lambda: f"pagination.offset: {config.model.__name__}(page={page}, limit={limit}) "
            f"-> {len(rows)}/{item_count} items"
        )
        return OffsetPage(data=[dict(row._mapping) for row in rows], meta=meta)


__all__ = ["OffsetPaginator", "build_offset_meta", "resolve_limit", "resolve_offset"]
