"""Pagination defaults applied to every paginated endpoint.

Environment variables use PAGINATION_ prefix.
Example: PAGINATION_DEFAULT_LIMIT=20, PAGINATION_MAX_LIMIT=100
"""

from __future__ import annotations

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PaginationSettings(BaseSettings):
    """Process-wide pagination defaults.

    Individual ``PaginationConfig`` objects fall back to these values when
    they do not set their own limits.

    Attributes:
        default_limit: Page size used when the request does not ask for one.
        max_limit: Hard upper bound on the page size.
    """

    default_limit: int = Field(
        default=10,
        ge=1,
        le=1000,
        description="Default page size when limit not specified",
    )
    max_limit: int = Field(
        default=100,
        ge=1,
        le=10000,
        description="Maximum allowed page size (hard limit)",
    )

    model_config = SettingsConfigDict(
        env_prefix="PAGINATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )

    @model_validator(mode="after")
    def _check_bounds(self) -> PaginationSettings:
        if self.default_limit > self.max_limit:
            msg = "default_limit must not exceed max_limit"
            raise ValueError(msg)
        return self
