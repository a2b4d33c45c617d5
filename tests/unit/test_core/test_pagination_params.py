"""Unit tests for query-string parsing of pagination parameters."""

from __future__ import annotations

import pytest

from booking_service.core.pagination import parse_pagination_query


def test_empty_query_gives_defaults():
    params = parse_pagination_query([])

    assert params.query.page is None
    assert params.query.limit is None
    assert params.filters == {}
    assert params.select is None
    assert params.sort_by == []
    assert params.search is None


def test_page_limit_and_cursors():
    params = parse_pagination_query(
        [("page", "2"), ("limit", "20"), ("after", "abc"), ("before", " ")]
    )

    assert params.query.page == 2
    assert params.query.limit == 20
    assert params.query.after == "abc"
    assert params.query.before is None


@pytest.mark.parametrize("raw", ["0", "-3", "ten", "1.5"])
def test_invalid_numbers_fall_back_to_defaults(raw):
    params = parse_pagination_query([("page", raw), ("limit", raw)])

    assert params.query.page is None
    assert params.query.limit is None


def test_sort_by_is_repeatable_and_comma_separated():
    params = parse_pagination_query(
        [("sortBy", "created_at:DESC,email:ASC"), ("sortBy", "id:ASC")]
    )

    assert params.sort_by == ["created_at:DESC", "email:ASC", "id:ASC"]


def test_select_merges_repeated_and_csv_values():
    params = parse_pagination_query([("select", "id, email"), ("select", "role")])

    assert params.select == ["id", "email", "role"]


def test_filters_accept_dot_and_bracket_keys():
    params = parse_pagination_query(
        [
            ("filter.role", "$in:admin,user"),
            ("filter[email]", "$ilike:example"),
            ("filter[email]", "$eq:a@b.co"),
        ]
    )

    assert params.filters == {"role": "$in:admin,user", "email": ["$ilike:example", "$eq:a@b.co"]}


def test_unrelated_parameters_are_ignored():
    params = parse_pagination_query([("utm_source", "mail"), ("search", "  smith ")])

    assert params.filters == {}
    assert params.search == "smith"
