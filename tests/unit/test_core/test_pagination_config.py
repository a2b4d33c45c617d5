"""Unit tests for PaginationConfig validation."""

from __future__ import annotations

import pytest

from booking_service.core.pagination import (
    ALL_OPERATORS,
    FilterOperator,
    PaginationConfig,
    PaginationConfigError,
    PaginationStrategy,
    SortDirection,
)
from booking_service.features.users.models import User


class TestPaginationConfig:
    def test_defaults_come_from_settings(self):
        config = PaginationConfig(model=User)

        assert config.strategy is PaginationStrategy.OFFSET
        assert config.default_limit == 10
        assert config.max_limit == 100
        assert config.cursor_column == "id"

    def test_string_values_are_normalized(self):
        config = PaginationConfig(
            model=User,
            strategy="cursor",
            default_sort_by=[("created_at", "DESC")],
            filterable_columns={"role": ["$eq", "$in"]},
        )

        assert config.strategy is PaginationStrategy.CURSOR
        assert config.default_sort_by == (("created_at", SortDirection.DESC),)
        assert config.operators["role"] == frozenset({FilterOperator.EQ, FilterOperator.IN})

    def test_filterable_list_allows_every_operator(self):
        config = PaginationConfig(model=User, filterable_columns=["email"])

        assert config.operators == {"email": ALL_OPERATORS}

    def test_selectable_drops_excluded_columns(self):
        config = PaginationConfig(model=User, exclude_columns=["password", "deleted_at"])

        assert "password" not in config.selectable
        assert "deleted_at" not in config.selectable
        assert {"id", "email", "role"} <= set(config.selectable)

    def test_explicit_selectable_columns_win(self):
        config = PaginationConfig(
            model=User, selectable_columns=["id", "email"], exclude_columns=["email"]
        )

        assert config.selectable == ["id", "email"]

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"sortable_columns": ["nope"]},
            {"default_sort_by": [("nope", SortDirection.ASC)]},
            {"filterable_columns": {"nope": [FilterOperator.EQ]}},
            {"searchable_columns": ["nope"]},
            {"selectable_columns": ["id", "nope"]},
            {"exclude_columns": ["nope"]},
            {"cursor_column": "nope"},
        ],
    )
    def test_unknown_columns_are_rejected(self, kwargs):
        with pytest.raises(PaginationConfigError, match="nope"):
            PaginationConfig(model=User, **kwargs)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"strategy": "page"},
            {"default_sort_by": [("email", "UP")]},
            {"filterable_columns": {"email": ["$like"]}},
        ],
    )
    def test_invalid_enum_values_are_rejected(self, kwargs):
        with pytest.raises(PaginationConfigError):
            PaginationConfig(model=User, **kwargs)

    @pytest.mark.parametrize(
        ("default_limit", "max_limit"),
        [(0, 10), (20, 10), (5, 0)],
    )
    def test_limits_must_be_consistent(self, default_limit, max_limit):
        with pytest.raises(PaginationConfigError, match="default_limit"):
            PaginationConfig(model=User, default_limit=default_limit, max_limit=max_limit)

    def test_default_limit_is_capped_by_small_max_limit(self):
        config = PaginationConfig(model=User, max_limit=5)

        assert config.default_limit == 5

    def test_unmapped_class_is_rejected(self):
        class NotAModel:
            pass

        with pytest.raises(PaginationConfigError, match="not a mapped class"):
            PaginationConfig(model=NotAModel)
