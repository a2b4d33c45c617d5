"""Cursor (keyset) pagination.

Instead of OFFSET, each page seeks past the boundary row with a compound
WHERE clause over the sort key, so pages stay stable under concurrent inserts
and deep pages cost the same as the first one.

How it works:
    For ORDER BY start_at DESC, id ASC with an ``after`` cursor at (t1, id1):
    WHERE (start_at < t1) OR (start_at = t1 AND id > id1)

    A ``before`` cursor flips every comparison and the ordering, and the
    fetched rows are reversed back into natural order.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy import func, select

from booking_service.core.database.transaction import session_scope
from booking_service.core.pagination.cursor import CursorCodec, convert_cursor_values
from booking_service.core.pagination.offset import resolve_limit
from booking_service.core.pagination.params import PaginationOptions
from booking_service.core.pagination.query_builder import QueryBuilder
from booking_service.core.pagination.schemas import CursorPage, CursorPageMeta
from booking_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from booking_service.core.database.transaction import SessionProvider
    from booking_service.core.pagination.config import PaginationConfig
    from booking_service.core.pagination.params import PaginationParams
    from booking_service.core.pagination.query_builder import SortKey

logger = logging.getLogger(__name__)
lazy_logger = get_lazy_logger(__name__)


class CursorPaginator:
    """Keyset pages with opaque ``after``/``before`` cursors.

    The key is the effective sort followed by ``cursor_column`` (ascending)
    when the sort does not already include it. Key columns are always
    fetched so cursors can be built, and dropped from rows the projection
    does not include.

    A cursor that cannot be decoded is treated as absent and logged at
    WARNING. When both cursors are given ``after`` wins.
    """

    __slots__ = ("_database",)

    def __init__(self, database: SessionProvider) -> None:
        self._database = database

    async def paginate(
        self,
        config: PaginationConfig[Any],
        params: PaginationParams,
        options: PaginationOptions | None = None,
    ) -> CursorPage[dict[str, Any]]:
        options = options or PaginationOptions()
        builder = QueryBuilder(config)
        limit = resolve_limit(config, params.query.limit)

        key = builder.with_tiebreak(builder.resolve_sort(params.sort_by), config.cursor_column)
        key_names = [name for name, _ in key]
        projection = builder.resolve_projection(params.select, options.columns)
        fetched = [*projection, *(name for name in key_names if name not in projection)]

        query = params.query
        if query.after and query.before:
            lazy_logger.debug(lambda: "pagination.cursor: both after and before given, using after")
        raw_cursor = query.after or query.before
        backward = not query.after and bool(query.before)
        boundary = self._decode_boundary(config, key, raw_cursor)

        clauses = builder.where_clauses(params, options)
        statement = select(*builder.labeled(fetched)).select_from(config.model.__table__)
        statement = statement.where(*clauses)
        if options.statement_hook is not None:
            statement = options.statement_hook(statement)

        count_statement = select(func.count()).select_from(statement.subquery())

        if boundary is not None:
            statement = statement.where(builder.keyset_predicate(key, boundary, backward=backward))
        rows_statement = statement.order_by(*builder.order_by(key, invert=backward)).limit(
            limit + 1
        )

        async with session_scope(self._database) as session:
            item_count = (await session.execute(count_statement)).scalar_one()
            rows = [dict(row._mapping) for row in (await session.execute(rows_statement)).all()]

        has_more = len(rows) > limit
        rows = rows[:limit]
        if backward:
            rows.reverse()

        applied = boundary is not None
        meta = CursorPageMeta(
            limit=limit,
            item_count=item_count,
            start_cursor=CursorCodec.create_cursor(rows[0], key_names) if rows else None,
            end_cursor=CursorCodec.create_cursor(rows[-1], key_names) if rows else None,
            has_previous_page=has_more if backward else applied,
            has_next_page=applied if backward else has_more,
        )

        extra = set(fetched) - set(projection)
        data = [{k: v for k, v in row.items() if k not in extra} for row in rows] if extra else rows

        lazy_logger.debug(
            lambda: f"pagination.cursor: {config.model.__name__}(limit={limit}, "
            f"{'before' if backward else 'after'}={raw_cursor!r}) -> {len(data)} items, "
            f"has_next={meta.has_next_page}, has_prev={meta.has_previous_page}"
        )
        return CursorPage(data=data, meta=meta)

    @staticmethod
    def _decode_boundary(
        config: PaginationConfig[Any], key: SortKey, raw_cursor: str | None
    ) -> list[Any] | None:
        if not raw_cursor:
            return None
        try:
            values = CursorCodec.decode(raw_cursor)
            return convert_cursor_values(values, [config.columns[name] for name, _ in key])
        except ValueError as e:
            logger.warning(
                "Ignoring malformed pagination cursor",
                extra={"entity": config.model.__name__, "cursor": raw_cursor, "error": str(e)},
            )
            return None


__all__ = ["CursorPaginator"]
