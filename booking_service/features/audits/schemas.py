"""Pydantic schemas for the audit log."""

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from booking_service.core.schemas import CustomBase
from booking_service.features.audits.models import AuditAction


class AuditLogListItem(CustomBase):
    """Row of an audit page; only the selected columns are present."""

    id: UUID | None = None
    user_id: UUID | None = None
    action: AuditAction | None = None
    entity_type: str | None = None
    entity_id: UUID | None = None
    meta: dict[str, Any] | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    created_at: datetime | None = None
