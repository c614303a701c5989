"""Health check API endpoint.

``GET /health`` reports that the process is alive. It never touches the
database, so it stays cheap enough for load balancer health checks.
"""

from __future__ import annotations

from datetime import UTC, datetime

from fastapi import APIRouter

from capability_service.core.settings import get_app_settings
from capability_service.features.health.schemas import HealthResponse

router = APIRouter(prefix="/health", tags=["health"])


@router.get(
    "",
    response_model=HealthResponse,
    summary="Liveness check",
    description="Returns ok with the server time and environment",
)
async def health_check() -> HealthResponse:
    return HealthResponse(
        timestamp=datetime.now(UTC),
        environment=get_app_settings().environment,
    )


__all__ = ["router"]
