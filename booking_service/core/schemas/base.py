"""Base schema classes for API payloads and responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CustomBase(BaseModel):
    """Base model with the configuration shared by all feature schemas.

    Example:
        class ProviderResponse(CustomBase):
            id: UUID
            name: str
    """

    model_config = ConfigDict(
        # Allow creation from ORM instances and repository row dicts
        from_attributes=True,
        use_enum_values=True,
        populate_by_name=True,
        # Ignore extra fields (silently drop unexpected data)
        extra="ignore",
        str_strip_whitespace=True,
    )


class CreatedAtMixin(BaseModel):
    """Creation timestamp carried by every persisted resource."""

    created_at: datetime = Field(description="Creation timestamp")


class TimestampedResponse(CustomBase, CreatedAtMixin):
    """Response base for resources tracking both creation and update time."""

    updated_at: datetime = Field(description="Last update timestamp")
