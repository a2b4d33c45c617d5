"""Generic repository over a single table.

Operations work on plain dictionaries keyed by attribute name and use Core
``INSERT/UPDATE ... RETURNING`` statements, so every mutation hands back the
affected rows restricted to the repository's projection (``password`` and
similar columns never leave the repository unless selected explicitly).

The session is never passed in. Each call uses the session of the active
unit of work when there is one, otherwise it opens a short-lived session
whose transaction commits when the call returns.

Example:
    class ProviderRepository(BaseRepository[Provider]):
        def __init__(self, database: Database) -> None:
            super().__init__(Provider, database, soft_delete_column="deleted_at")

    repo = ProviderRepository(database)
    provider = await repo.create_one({"name": "Acme Spa", "user_id": user_id})
    await repo.soft_delete_one_by_id(provider["id"])
    assert await repo.find_one_by_id(provider["id"]) is None
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import and_, delete, insert, select, update

from booking_service.core.database.exceptions import RepositoryConfigurationError
from booking_service.core.database.inspection import (
    get_column_map,
    get_primary_key,
    unknown_columns,
)
from booking_service.core.database.transaction import session_scope
from booking_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from sqlalchemy import Column, ColumnElement

    from booking_service.core.database.transaction import SessionProvider


class BaseRepository[T]:
    """CRUD operations for one mapped model.

    Provides:
        - create_one(values) -> dict
        - create_many(values_list) -> list[dict]
        - find_one_by_id(id, where=None) -> dict | None
        - find_many_by_ids(ids, where=None) -> list[dict]
        - find_one(where) -> dict | None
        - exists(id) -> bool
        - soft_delete_one_by_id(id) -> dict | None
        - soft_delete_many_by_ids(ids) -> list[dict]
        - delete_one_by_id(id) -> None
        - delete_many_by_ids(ids) -> None

    Args:
        model: SQLAlchemy mapped class.
        database: Session provider used when no unit of work is active.
        select_columns: Attribute names returned by every operation.
            Defaults to all columns minus ``exclude_columns``.
        exclude_columns: Attribute names hidden from the default projection.
        soft_delete_column: Nullable timestamp attribute marking deleted rows.
            Reads skip rows where it is set.

    Raises:
        RepositoryConfigurationError: A configured column does not exist.
    """

    __slots__ = (
        "model",
        "_database",
        "_columns",
        "_projection",
        "_pk_name",
        "_pk",
        "_soft_delete",
        "_logger",
        "_lazy",
    )

    def __init__(
        self,
        model: type[T],
        database: SessionProvider,
        *,
        select_columns: Sequence[str] | None = None,
        exclude_columns: Sequence[str] = (),
        soft_delete_column: str | None = None,
    ) -> None:
        self.model = model
        self._database = database
        self._columns = get_column_map(model)
        self._pk_name, self._pk = get_primary_key(model)

        configured = [*(select_columns or ()), *exclude_columns]
        if soft_delete_column is not None:
            configured.append(soft_delete_column)
        unknown = unknown_columns(model, configured)
        if unknown:
            raise RepositoryConfigurationError(
                model.__name__,
                f"Unknown columns for {model.__name__}: {', '.join(unknown)}",
            )

        if select_columns is not None:
            names = list(select_columns)
        else:
            names = [name for name in self._columns if name not in set(exclude_columns)]
        self._projection = [self._columns[name].label(name) for name in names]

        self._soft_delete: Column[Any] | None = (
            self._columns[soft_delete_column] if soft_delete_column else None
        )

        # Standard logger for INFO/WARNING/ERROR
        self._logger = logging.getLogger(f"repository.{model.__name__}")
        # Lazy logger for DEBUG (zero overhead when DEBUG disabled)
        self._lazy = get_lazy_logger(f"repository.{model.__name__}")

    # ──────────────────────────────────────────────────────────────
    # Create
    # ──────────────────────────────────────────────────────────────

    async def create_one(self, values: Mapping[str, Any]) -> dict[str, Any]:
        """Insert one row and return it."""
        stmt = (
            insert(self.model.__table__)
            .values(self._to_column_values(values))
            .returning(*self._projection)
        )
        async with session_scope(self._database) as session:
            row = (await session.execute(stmt)).one()

        created = dict(row._mapping)
        self._logger.info(
            f"Created {self.model.__name__}",
            extra={
                "entity": self.model.__name__,
                "id": str(created.get(self._pk_name)),
                "operation": "db.create_one",
            },
        )
        return created

    async def create_many(self, values_list: Sequence[Mapping[str, Any]]) -> list[dict[str, Any]]:
        """Insert several rows with one multi-VALUES statement.

        An empty input returns ``[]`` without touching the database.
        """
        if not values_list:
            return []

        stmt = (
            insert(self.model.__table__)
            .values([self._to_column_values(values) for values in values_list])
            .returning(*self._projection)
        )
        async with session_scope(self._database) as session:
            rows = (await session.execute(stmt)).all()

        self._logger.info(
            f"Created {len(rows)} {self.model.__name__} records",
            extra={
                "entity": self.model.__name__,
                "count": len(rows),
                "operation": "db.create_many",
            },
        )
        return [dict(row._mapping) for row in rows]

    # ──────────────────────────────────────────────────────────────
    # Read
    # ──────────────────────────────────────────────────────────────

    async def find_one_by_id(
        self,
        id: Any,  # noqa: A002
        where: ColumnElement[bool] | Iterable[ColumnElement[bool]] | None = None,
    ) -> dict[str, Any] | None:
        """Return the row with primary key ``id``, or ``None``.

        ``where`` adds caller predicates; soft-deleted rows never match.
        """
        stmt = select(*self._projection).where(self._read_predicate(self._pk == id, where))
        async with session_scope(self._database) as session:
            row = (await session.execute(stmt)).one_or_none()

        self._lazy.debug(
            lambda: f"db.find_one_by_id: {self.model.__name__}({id}) -> {'found' if row else 'not found'}"
        )
        return dict(row._mapping) if row is not None else None

    async def find_many_by_ids(
        self,
        ids: Sequence[Any],
        where: ColumnElement[bool] | Iterable[ColumnElement[bool]] | None = None,
    ) -> list[dict[str, Any]]:
        """Return the rows whose primary key is in ``ids`` (``[]`` for no ids)."""
        if not ids:
            return []

        stmt = select(*self._projection).where(
            self._read_predicate(self._pk.in_(list(ids)), where)
        )
        async with session_scope(self._database) as session:
            rows = (await session.execute(stmt)).all()

        self._lazy.debug(
            lambda: f"db.find_many_by_ids: {self.model.__name__}({len(ids)} ids) -> {len(rows)} items"
        )
        return [dict(row._mapping) for row in rows]

    async def find_one(
        self, where: ColumnElement[bool] | Iterable[ColumnElement[bool]]
    ) -> dict[str, Any] | None:
        """Return the first row matching ``where``, or ``None``."""
        clauses = [where] if not isinstance(where, (list, tuple)) else list(where)
        stmt = select(*self._projection).where(self._read_predicate(and_(*clauses), None)).limit(1)
        async with session_scope(self._database) as session:
            row = (await session.execute(stmt)).first()
        return dict(row._mapping) if row is not None else None

    async def exists(self, id: Any) -> bool:  # noqa: A002
        """Check whether a non-deleted row with primary key ``id`` exists."""
        stmt = select(self._pk).where(self._read_predicate(self._pk == id, None)).limit(1)
        async with session_scope(self._database) as session:
            found = (await session.execute(stmt)).first() is not None

        self._lazy.debug(lambda: f"db.exists: {self.model.__name__}({id}) -> {found}")
        return found

    # ──────────────────────────────────────────────────────────────
    # Soft delete
    # ──────────────────────────────────────────────────────────────

    async def soft_delete_one_by_id(self, id: Any) -> dict[str, Any] | None:  # noqa: A002
        """Mark one row deleted and return it; ``None`` if absent or already deleted."""
        rows = await self._soft_delete_where(self._pk == id, operation="db.soft_delete_one_by_id")
        return rows[0] if rows else None

    async def soft_delete_many_by_ids(self, ids: Sequence[Any]) -> list[dict[str, Any]]:
        """Mark rows deleted and return those that changed (``[]`` for no ids)."""
        self._require_soft_delete()
        if not ids:
            return []
        return await self._soft_delete_where(
            self._pk.in_(list(ids)), operation="db.soft_delete_many_by_ids"
        )

    async def _soft_delete_where(
        self, predicate: ColumnElement[bool], *, operation: str
    ) -> list[dict[str, Any]]:
        column = self._require_soft_delete()
        stmt = (
            update(self.model.__table__)
            .where(predicate, column.is_(None))
            .values({column.key: datetime.now(UTC)})
            .returning(*self._projection)
        )
        async with session_scope(self._database) as session:
            rows = (await session.execute(stmt)).all()

        self._logger.info(
            f"Soft-deleted {len(rows)} {self.model.__name__} records",
            extra={
                "entity": self.model.__name__,
                "count": len(rows),
                "operation": operation,
            },
        )
        return [dict(row._mapping) for row in rows]

    def _require_soft_delete(self) -> Column[Any]:
        if self._soft_delete is None:
            raise RepositoryConfigurationError(
                self.model.__name__,
                f"{self.model.__name__} repository has no soft_delete_column configured",
            )
        return self._soft_delete

    # ──────────────────────────────────────────────────────────────
    # Hard delete
    # ──────────────────────────────────────────────────────────────

    async def delete_one_by_id(self, id: Any) -> None:  # noqa: A002
        """Physically delete one row."""
        stmt = delete(self.model.__table__).where(self._pk == id)
        async with session_scope(self._database) as session:
            await session.execute(stmt)

        self._logger.info(
            f"Deleted {self.model.__name__}",
            extra={"entity": self.model.__name__, "id": str(id), "operation": "db.delete_one_by_id"},
        )

    async def delete_many_by_ids(self, ids: Sequence[Any]) -> None:
        """Physically delete rows by primary key; no-op for an empty list."""
        if not ids:
            return

        stmt = delete(self.model.__table__).where(self._pk.in_(list(ids)))
        async with session_scope(self._database) as session:
            result = await session.execute(stmt)

        self._logger.info(
            f"Deleted {result.rowcount} {self.model.__name__} records",
            extra={
                "entity": self.model.__name__,
                "count": result.rowcount,
                "operation": "db.delete_many_by_ids",
            },
        )

    # ──────────────────────────────────────────────────────────────
    # Helpers
    # ──────────────────────────────────────────────────────────────

    def _read_predicate(
        self,
        base: ColumnElement[bool],
        where: ColumnElement[bool] | Iterable[ColumnElement[bool]] | None,
    ) -> ColumnElement[bool]:
        clauses = [base]
        if where is not None:
            if isinstance(where, (list, tuple)):
                clauses.extend(where)
            else:
                clauses.append(where)  # type: ignore[arg-type]
        if self._soft_delete is not None:
            clauses.append(self._soft_delete.is_(None))
        return and_(*clauses)

    def _to_column_values(self, values: Mapping[str, Any]) -> dict[str, Any]:
        """Translate attribute names to table column keys."""
        unknown = [key for key in values if key not in self._columns]
        if unknown:
            raise RepositoryConfigurationError(
                self.model.__name__,
                f"Unknown columns for {self.model.__name__}: {', '.join(unknown)}",
            )
        return {self._columns[key].key: value for key, value in values.items()}


__all__ = ["BaseRepository"]
