"""API router for the audit log.

Endpoints:
    GET /audits - Paginated list (cursor), newest first
"""

from __future__ import annotations

from fastapi import APIRouter

from booking_service.core.dependencies import (  # noqa: TC001
    PaginationParamsDep,
    PaginationServiceDep,
)
from booking_service.core.pagination import CursorPage
from booking_service.features.audits.pagination import AUDITS_PAGINATION
from booking_service.features.audits.schemas import AuditLogListItem

router = APIRouter(prefix="/audits", tags=["audits"])


@router.get(
    "",
    response_model=CursorPage[AuditLogListItem],
    response_model_exclude_unset=True,
    summary="List audit log entries",
)
async def list_audits(params: PaginationParamsDep, pagination: PaginationServiceDep):
    return await pagination.paginate(AUDITS_PAGINATION, params)
