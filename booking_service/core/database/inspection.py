"""Mapper inspection helpers shared by the repository and the paginators.

Both layers work with plain column dictionaries rather than ORM instances,
so they need the mapping from attribute name to table column (attribute
names can differ from column names, e.g. ``meta`` stored as ``metadata``).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import inspect as sa_inspect

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sqlalchemy import Column


def get_column_map(model: type[Any]) -> dict[str, Column[Any]]:
    """Return ``{attribute name: Column}`` for every column-mapped attribute.

    Ordering follows the mapper, i.e. declaration order with mixin columns
    placed where the mixins are declared.
    """
    mapper = sa_inspect(model)
    return {prop.key: prop.columns[0] for prop in mapper.column_attrs}


def get_primary_key(model: type[Any]) -> tuple[str, Column[Any]]:
    """Return the attribute name and column of a single-column primary key.

    Raises:
        ValueError: The model has a composite primary key.
    """
    mapper = sa_inspect(model)
    pk_cols = mapper.primary_key
    if len(pk_cols) != 1:
        msg = f"{model.__name__} must have exactly one primary key column"
        raise ValueError(msg)
    prop = mapper.get_property_by_column(pk_cols[0])
    return prop.key, pk_cols[0]


def unknown_columns(model: type[Any], names: Iterable[str]) -> list[str]:
    """Return the names that are not column attributes of ``model``."""
    known = get_column_map(model)
    return [name for name in names if name not in known]


__all__ = ["get_column_map", "get_primary_key", "unknown_columns"]
