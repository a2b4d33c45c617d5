"""Health check response schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class LivenessResponse(BaseModel):
    """Liveness probe response: the process is up and the loop responsive."""

    alive: bool = Field(description="Liveness status")
    timestamp: datetime = Field(description="Check timestamp")
    service: str = Field(min_length=1, max_length=100, description="Service name")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "alive": True,
                "timestamp": "2025-01-01T00:00:00Z",
                "service": "booking-service",
            }
        }
    )


class ReadinessResponse(BaseModel):
    """Readiness probe response. Served with 503 when a check fails."""

    ready: bool = Field(description="Overall readiness status")
    checks: dict[str, bool] = Field(
        default_factory=dict, description="Individual dependency checks"
    )
    timestamp: datetime = Field(description="Check timestamp")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "ready": True,
                "checks": {"database": True},
                "timestamp": "2025-01-01T00:00:00Z",
            }
        }
    )
