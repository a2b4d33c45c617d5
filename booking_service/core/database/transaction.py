"""Ambient transaction context.

A single ``ContextVar`` slot holds the session of the unit of work running
in the current asyncio task, or ``None``. Tasks copy the context when they
are created, so concurrently handled requests never share a transaction.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from contextvars import ContextVar, Token
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from sqlalchemy.ext.asyncio import AsyncSession


class SessionProvider(Protocol):
    """Anything that can open a new ``AsyncSession`` (see ``Database``)."""

    def session(self) -> AsyncSession: ...


_current_session: ContextVar[AsyncSession | None] = ContextVar(
    "transaction_session", default=None
)


def get_transaction_session() -> AsyncSession | None:
    """Return the session of the active unit of work, if any."""
    return _current_session.get()


def in_transaction() -> bool:
    return _current_session.get() is not None


def set_transaction_session(session: AsyncSession) -> Token[AsyncSession | None]:
    """Publish ``session`` for the current task; keep the token to reset it."""
    return _current_session.set(session)


def reset_transaction_session(token: Token[AsyncSession | None]) -> None:
    _current_session.reset(token)


@asynccontextmanager
async def session_scope(provider: SessionProvider) -> AsyncIterator[AsyncSession]:
    """Yield the unit-of-work session, or a fresh one that commits on exit.

    Statements run outside a unit of work therefore each get their own
    short transaction on a pooled connection.
    """
    session = _current_session.get()
    if session is not None:
        yield session
        return

    async with provider.session() as session, session.begin():
        yield session


__all__ = [
    "SessionProvider",
    "get_transaction_session",
    "in_transaction",
    "reset_transaction_session",
    "session_scope",
    "set_transaction_session",
]
