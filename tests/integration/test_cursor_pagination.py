"""Integration tests for cursor (keyset) pagination against SQLite."""

from __future__ import annotations

import logging

import pytest

from booking_service.core.pagination import CursorCodec, CursorPaginator, parse_pagination_query
from booking_service.features.bookings.pagination import BOOKINGS_PAGINATION
from tests.utils import create_bookings


@pytest.fixture
async def bookings(database, active_service, user):
    rows = await create_bookings(database, active_service, user["id"], 25)
    # newest first, the default order
    return sorted(rows, key=lambda b: b["start_at"], reverse=True)


@pytest.fixture
def paginator(database) -> CursorPaginator:
    return CursorPaginator(database)


async def fetch(paginator, *pairs):
    return await paginator.paginate(BOOKINGS_PAGINATION, parse_pagination_query(pairs))


def ids(page) -> list:
    return [row["id"] for row in page.data]


async def test_forward_pages(paginator, bookings):
    first = await fetch(paginator, ("limit", "10"))
    second = await fetch(paginator, ("limit", "10"), ("after", first.meta.end_cursor))
    third = await fetch(paginator, ("limit", "10"), ("after", second.meta.end_cursor))

    expected = [b["id"] for b in bookings]
    assert ids(first) == expected[:10]
    assert ids(second) == expected[10:20]
    assert ids(third) == expected[20:]

    assert (first.meta.has_previous_page, first.meta.has_next_page) == (False, True)
    assert (second.meta.has_previous_page, second.meta.has_next_page) == (True, True)
    assert (third.meta.has_previous_page, third.meta.has_next_page) == (True, False)
    assert {page.meta.item_count for page in (first, second, third)} == {25}


async def test_backward_page_matches_forward_page(paginator, bookings):
    first = await fetch(paginator, ("limit", "10"))
    second = await fetch(paginator, ("limit", "10"), ("after", first.meta.end_cursor))
    third = await fetch(paginator, ("limit", "10"), ("after", second.meta.end_cursor))

    back_to_second = await fetch(paginator, ("limit", "10"), ("before", third.meta.start_cursor))
    back_to_first = await fetch(
        paginator, ("limit", "10"), ("before", back_to_second.meta.start_cursor)
    )

    assert ids(back_to_second) == ids(second)
    assert back_to_second.meta.has_previous_page
    assert back_to_second.meta.has_next_page
    assert ids(back_to_first) == ids(first)
    assert not back_to_first.meta.has_previous_page
    assert back_to_first.meta.has_next_page


async def test_cursors_point_at_first_and_last_rows(paginator, bookings):
    page = await fetch(paginator, ("limit", "3"))

    start = CursorCodec.decode(page.meta.start_cursor)
    end = CursorCodec.decode(page.meta.end_cursor)
    assert start[1] == str(page.data[0]["id"])
    assert end[1] == str(page.data[-1]["id"])


async def test_no_duplicates_with_non_unique_sort(paginator, bookings):
    seen = []
    cursor = None
    while True:
        pairs = [("limit", "7"), ("sortBy", "total_price:ASC")]
        if cursor:
            pairs.append(("after", cursor))
        page = await fetch(paginator, *pairs)
        seen.extend(ids(page))
        if not page.meta.has_next_page:
            break
        cursor = page.meta.end_cursor

    assert len(seen) == 25
    assert len(set(seen)) == 25


async def test_projection_without_key_columns(paginator, bookings):
    first = await fetch(paginator, ("limit", "10"), ("select", "status"))
    second = await fetch(
        paginator, ("limit", "10"), ("select", "status"), ("after", first.meta.end_cursor)
    )

    assert all(set(row) == {"status"} for row in first.data + second.data)
    assert len(second.data) == 10
    assert second.meta.has_next_page


async def test_malformed_cursor_starts_from_the_beginning(paginator, bookings, caplog):
    with caplog.at_level(logging.WARNING):
        page = await fetch(paginator, ("limit", "10"), ("after", "not-a-cursor"))

    assert ids(page) == [b["id"] for b in bookings[:10]]
    assert not page.meta.has_previous_page
    assert "malformed pagination cursor" in caplog.text


async def test_cursor_with_wrong_arity_is_ignored(paginator, bookings):
    page = await fetch(paginator, ("limit", "10"), ("after", CursorCodec.encode(["x"])))

    assert ids(page) == [b["id"] for b in bookings[:10]]


async def test_after_wins_over_before(paginator, bookings):
    first = await fetch(paginator, ("limit", "10"))

    page = await fetch(
        paginator,
        ("limit", "10"),
        ("after", first.meta.end_cursor),
        ("before", first.meta.start_cursor),
    )

    assert ids(page) == [b["id"] for b in bookings[10:20]]


async def test_filters_apply_to_count_and_rows(paginator, bookings):
    page = await fetch(paginator, ("filter.status", "$eq:confirmed"))

    assert page.data == []
    assert page.meta.item_count == 0
    assert page.meta.start_cursor is None
    assert page.meta.end_cursor is None
    assert not page.meta.has_next_page
    assert not page.meta.has_previous_page
