"""Health check API endpoints.

- Liveness: /health/live - is the process alive?
- Readiness: /health/ready - can the service reach its database?
"""

from __future__ import annotations

from datetime import UTC, datetime

from fastapi import APIRouter, Response, status

# Runtime import so FastAPI resolves the Annotated[..., Depends(...)] metadata
from booking_service.core.dependencies import DatabaseDep  # noqa: TC001
from booking_service.core.settings import get_app_settings
from booking_service.features.health.schemas import LivenessResponse, ReadinessResponse

router = APIRouter(prefix="/health", tags=["health"])


@router.get(
    "/live",
    response_model=LivenessResponse,
    summary="Liveness probe",
    description="Returns 200 if the service process is alive and responsive",
)
async def liveness_check() -> LivenessResponse:
    return LivenessResponse(
        alive=True,
        timestamp=datetime.now(UTC),
        service=get_app_settings().service_name,
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Service not ready to accept traffic"}},
    summary="Readiness probe",
    description="Returns 200 if the database answers, 503 otherwise",
)
async def readiness_check(response: Response, database: DatabaseDep) -> ReadinessResponse:
    """Ping the database with ``SELECT 1``.

    Failures are logged by ``Database.ping`` and reported as ``false``.
    """
    database_ok = await database.ping()
    if not database_ok:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return ReadinessResponse(
        ready=database_ok,
        checks={"database": database_ok},
        timestamp=datetime.now(UTC),
    )
