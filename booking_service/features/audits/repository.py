"""Repository for the audit log."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from booking_service.core.database import BaseRepository
from booking_service.features.audits.models import AuditAction, AuditLog, EntityType

if TYPE_CHECKING:
    from uuid import UUID

    from booking_service.core.database import SessionProvider


class AuditLogRepository(BaseRepository[AuditLog]):
    """Append-only; there is no soft delete on audit entries."""

    def __init__(self, database: SessionProvider) -> None:
        super().__init__(AuditLog, database)

    async def record(
        self,
        action: AuditAction,
        entity_type: EntityType,
        entity_id: UUID | None = None,
        *,
        user_id: UUID | None = None,
        meta: dict[str, Any] | None = None,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> dict[str, Any]:
        """Insert one audit entry.

        Inside a unit of work the entry commits or rolls back with the
        change it describes.
        """
        return await self.create_one(
            {
                "action": action,
                "entity_type": entity_type.value,
                "entity_id": entity_id,
                "user_id": user_id,
                "meta": meta,
                "ip_address": ip_address,
                "user_agent": user_agent,
            }
        )
