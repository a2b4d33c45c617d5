"""Unit of work: run a closure inside one database transaction.

Repositories resolve their session through the transaction context, so any
repository call made inside ``run()`` joins the same transaction without the
session being passed around.

Example:
    uow = UnitOfWork(database)

    async def book() -> dict:
        booking = await bookings.create_one(values)
        await audits.create_one({"action": "create", "entity_id": booking["id"], ...})
        return booking

    booking = await uow.run(book)  # both rows or neither
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from booking_service.core.database.transaction import (
    get_transaction_session,
    reset_transaction_session,
    set_transaction_session,
)
from booking_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from booking_service.core.database.transaction import SessionProvider

logger = logging.getLogger(__name__)
lazy_logger = get_lazy_logger(__name__)


class UnitOfWork:
    """Run closures atomically against a session provider.

    Commit on normal return and rollback on exception are delegated to
    ``session.begin()``. A ``run()`` nested inside another ``run()`` of the
    same task reuses the outer transaction: it neither opens a session nor
    touches the context, and an exception it raises rolls back the whole
    outer transaction once it propagates.
    """

    __slots__ = ("_database",)

    def __init__(self, database: SessionProvider) -> None:
        self._database = database

    async def run[R](self, fn: Callable[[], Awaitable[R]]) -> R:
        if get_transaction_session() is not None:
            lazy_logger.debug(lambda: f"uow.run: joining active transaction ({fn!r})")
            return await fn()

        async with self._database.session() as session:
            async with session.begin():
                token = set_transaction_session(session)
                try:
                    lazy_logger.debug(lambda: f"uow.run: transaction opened ({fn!r})")
                    return await fn()
                except Exception:
                    logger.info(
                        "Unit of work rolled back",
                        extra={"operation": "db.uow.rollback"},
                    )
                    raise
                finally:
                    reset_transaction_session(token)


__all__ = ["UnitOfWork"]
