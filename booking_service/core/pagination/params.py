"""Per-request pagination input and its query-string parser.

Query-string convention::

    ?page=2&limit=20
    ?limit=20&after=<cursor>          (or before=<cursor>)
    ?sortBy=created_at:DESC&sortBy=id:ASC
    ?select=id,email&select=role
    ?search=smith
    ?filter.role=$in:admin,user       (or filter[role]=$in:admin,user)
    ?filter.email=$ilike:example.com&filter.email=$eq:a@b.co   (ORed)
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Annotated, Any

from fastapi import Query, Request
from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement, Select

_FILTER_PARAM = re.compile(r"^filter(?:\.([^.\[\]]+)|\[([^\[\]]+)\])$")


class PageQuery(BaseModel):
    """Position and size of the requested page."""

    page: int | None = Field(default=None, description="1-based page number (offset strategy)")
    limit: int | None = Field(default=None, description="Requested page size")
    after: str | None = Field(default=None, description="Return rows after this cursor")
    before: str | None = Field(default=None, description="Return rows before this cursor")


class PaginationParams(BaseModel):
    """Everything a client may ask of a paginated endpoint.

    All fields are optional; absent fields fall back to the entity's
    ``PaginationConfig``.
    """

    query: PageQuery = Field(default_factory=PageQuery)
    filters: dict[str, str | list[str]] = Field(
        default_factory=dict,
        description='Column -> "$op:value" (a list ORs its conditions)',
    )
    search: str | None = Field(default=None, description="Free-text search")
    select: list[str] | None = Field(default=None, description="Columns to return")
    sort_by: list[str] = Field(
        default_factory=list,
        description='Ordering as "column:ASC|DESC" entries',
    )


@dataclass(frozen=True)
class PaginationOptions:
    """Caller-side adjustments applied on top of the request.

    Attributes:
        where: Extra predicates ANDed with filters and search (e.g. scoping
            reviews to one service).
        columns: Fixed projection; overrides ``select``.
        statement_hook: Receives the filtered row statement before counting
            and ordering, for joins or predicates that need the statement.
    """

    where: Sequence[ColumnElement[bool]] = ()
    columns: Sequence[str] | None = None
    statement_hook: Callable[[Select[Any]], Select[Any]] | None = None


def _positive_int(raw: str | None) -> int | None:
    if raw is None:
        return None
    try:
        value = int(raw)
    except ValueError:
        return None
    return value if value >= 1 else None


def _blank_to_none(raw: str | None) -> str | None:
    if raw is None:
        return None
    raw = raw.strip()
    return raw or None


def _split_csv(values: Iterable[str]) -> list[str]:
    return [item.strip() for value in values for item in value.split(",") if item.strip()]


def parse_pagination_query(items: Iterable[tuple[str, str]]) -> PaginationParams:
    """Build ``PaginationParams`` from raw query-string pairs.

    Non-numeric or non-positive ``page``/``limit`` values are dropped so the
    config defaults apply. Unrelated parameters are ignored.
    """
    single: dict[str, str] = {}
    sort_by: list[str] = []
    select: list[str] = []
    filters: dict[str, list[str]] = {}

    for key, value in items:
        if key == "sortBy":
            sort_by.extend(_split_csv([value]))
        elif key == "select":
            select.append(value)
        elif match := _FILTER_PARAM.match(key):
            column = match.group(1) or match.group(2)
            filters.setdefault(column, []).append(value)
        else:
            single[key] = value

    selected = _split_csv(select)
    return PaginationParams(
        query=PageQuery(
            page=_positive_int(single.get("page")),
            limit=_positive_int(single.get("limit")),
            after=_blank_to_none(single.get("after")),
            before=_blank_to_none(single.get("before")),
        ),
        filters={col: vals[0] if len(vals) == 1 else vals for col, vals in filters.items()},
        search=_blank_to_none(single.get("search")),
        select=selected or None,
        sort_by=sort_by,
    )


def get_pagination_params(
    request: Request,
    page: Annotated[str | None, Query(description="1-based page number")] = None,
    limit: Annotated[str | None, Query(description="Page size")] = None,
    after: Annotated[str | None, Query(description="Cursor: rows after this one")] = None,
    before: Annotated[str | None, Query(description="Cursor: rows before this one")] = None,
    search: Annotated[str | None, Query(description="Free-text search")] = None,
    sort_by: Annotated[
        list[str] | None,
        Query(alias="sortBy", description='Repeatable "column:ASC|DESC"'),
    ] = None,
    select: Annotated[
        list[str] | None,
        Query(description="Comma separated and/or repeated column names"),
    ] = None,
) -> PaginationParams:
    """FastAPI dependency that parses the pagination query string.

    The declared parameters only document the convention in OpenAPI; parsing
    reads ``request.query_params`` so ``filter.<column>`` and
    ``filter[<column>]`` keys, which cannot be declared up front, are seen too.
    """
    return parse_pagination_query(request.query_params.multi_items())


__all__ = [
    "PageQuery",
    "PaginationOptions",
    "PaginationParams",
    "get_pagination_params",
    "parse_pagination_query",
]
