"""Page response schemas.

Both page shapes serialize their metadata in camelCase:

    {"data": [...], "meta": {"page": 2, "limit": 10, "itemCount": 25,
                             "pageCount": 3, "hasPreviousPage": true,
                             "hasNextPage": true}}

    {"data": [...], "meta": {"limit": 10, "itemCount": 42,
                             "startCursor": "...", "endCursor": "...",
                             "hasPreviousPage": false, "hasNextPage": true}}
"""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class OffsetPageMeta(_CamelModel):
    """Offset page metadata.

    ``page_count = ceil(item_count / limit)``; ``has_next_page`` is
    ``page < page_count`` and ``has_previous_page`` is ``page > 1``.
    """

    page: int = Field(description="Current page (1-based)")
    limit: int = Field(description="Page size actually applied")
    item_count: int = Field(description="Rows matching filters and search")
    page_count: int = Field(description="Number of pages")
    has_previous_page: bool = Field(description="Whether a previous page exists")
    has_next_page: bool = Field(description="Whether a next page exists")


class CursorPageMeta(_CamelModel):
    """Cursor page metadata.

    Cursors come from the first and last rows of ``data`` and are ``None``
    for an empty page.
    """

    limit: int = Field(description="Page size actually applied")
    item_count: int = Field(description="Rows matching filters and search, ignoring the cursor")
    start_cursor: str | None = Field(default=None, description="Cursor of the first row")
    end_cursor: str | None = Field(default=None, description="Cursor of the last row")
    has_previous_page: bool = Field(description="Whether rows exist before start_cursor")
    has_next_page: bool = Field(description="Whether rows exist after end_cursor")


class OffsetPage(_CamelModel, Generic[T]):
    """One page of an offset-paginated collection.

    Usage:
        @router.get("", response_model=OffsetPage[UserListItem], response_model_exclude_unset=True)
    """

    data: list[T] = Field(default_factory=list, description="Rows of this page")
    meta: OffsetPageMeta


class CursorPage(_CamelModel, Generic[T]):
    data: list[T] = Field(default_factory=list, description="Rows of this page")
    meta: CursorPageMeta


__all__ = ["CursorPage", "CursorPageMeta", "OffsetPage", "OffsetPageMeta"]
