"""Health check response schemas."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003
from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness response; the process is up and serving requests."""

    status: Literal["ok"] = Field(default="ok", description="Always 'ok' while the process serves requests")
    timestamp: datetime = Field(description="Server time (UTC) the check ran")
    environment: str = Field(description="Deployment environment")

    model_config = {
        "json_schema_extra": {
            "example": {
                "status": "ok",
                "timestamp": "2024-01-01T00:00:00Z",
                "environment": "production",
            }
        }
    }
