"""Integration tests for the unit of work and the ambient transaction."""

from __future__ import annotations

import asyncio

import pytest

from booking_service.core.database import UnitOfWork, get_transaction_session, in_transaction
from booking_service.features.users.repository import UserRepository


def _user(email: str) -> dict:
    return {"email": email, "first_name": "A", "last_name": "B", "password": "x"}


@pytest.fixture
def users(database) -> UserRepository:
    return UserRepository(database)


@pytest.fixture
def uow(database) -> UnitOfWork:
    return UnitOfWork(database)


async def test_commit_on_success(uow, users):
    async def work():
        a = await users.create_one(_user("a@example.com"))
        b = await users.create_one(_user("b@example.com"))
        return a, b

    a, b = await uow.run(work)

    assert await users.exists(a["id"])
    assert await users.exists(b["id"])


async def test_rollback_on_error(uow, users):
    created = {}

    async def work():
        created["user"] = await users.create_one(_user("a@example.com"))
        msg = "payment declined"
        raise RuntimeError(msg)

    with pytest.raises(RuntimeError, match="payment declined"):
        await uow.run(work)

    assert not await users.exists(created["user"]["id"])


async def test_repository_calls_share_the_session(uow):
    sessions = []

    async def work():
        sessions.append(get_transaction_session())
        await asyncio.sleep(0)
        sessions.append(get_transaction_session())

    assert not in_transaction()
    await uow.run(work)

    assert sessions[0] is not None
    assert sessions[0] is sessions[1]
    assert not in_transaction()


async def test_nested_run_joins_outer_transaction(uow, users):
    sessions = []
    created = {}

    async def inner():
        sessions.append(get_transaction_session())
        created["user"] = await users.create_one(_user("inner@example.com"))

    async def outer():
        sessions.append(get_transaction_session())
        await uow.run(inner)
        msg = "outer failed"
        raise RuntimeError(msg)

    with pytest.raises(RuntimeError, match="outer failed"):
        await uow.run(outer)

    assert sessions[0] is sessions[1]
    # the inner write belonged to the outer transaction
    assert not await users.exists(created["user"]["id"])


async def test_inner_failure_rolls_back_everything(uow, users):
    created = {}

    async def inner():
        msg = "inner failed"
        raise ValueError(msg)

    async def outer():
        created["user"] = await users.create_one(_user("outer@example.com"))
        await uow.run(inner)

    with pytest.raises(ValueError, match="inner failed"):
        await uow.run(outer)

    assert not await users.exists(created["user"]["id"])


async def test_context_is_reset_after_error(uow):
    async def work():
        msg = "boom"
        raise RuntimeError(msg)

    with pytest.raises(RuntimeError):
        await uow.run(work)

    assert get_transaction_session() is None
