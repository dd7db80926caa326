"""Health check endpoints.

Provides liveness and readiness checks for load balancers.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import ORJSONResponse
from pydantic import BaseModel, Field

from foodies.api.dependencies import get_app_settings
from foodies.core.config import Settings  # noqa: TC001
from foodies.database.connection import check_database_health


router = APIRouter(tags=["Health"])


class HealthResponse(BaseModel):
    """Liveness response."""

    status: str = Field(..., examples=["ok"])
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))


class ReadinessResponse(HealthResponse):
    """Readiness response with dependency status."""

    version: str
    environment: str
    dependencies: dict[str, str] = Field(default_factory=dict)


@router.get("/health", response_model=HealthResponse, summary="Liveness check")
async def health_check() -> HealthResponse:
    """The process is up; no dependencies are checked."""
    return HealthResponse(status="ok")


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness check",
    responses={503: {"description": "Database unavailable"}},
)
async def readiness_check(
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> ReadinessResponse | ORJSONResponse:
    """Ready only when the database answers."""
    dependencies = await check_database_health()
    ready = all(state == "healthy" for state in dependencies.values())
    body = ReadinessResponse(
        status="ready" if ready else "degraded",
        version=settings.app.version,
        environment=settings.APP_ENV,
        dependencies=dependencies,
    )
    if ready:
        return body
    return ORJSONResponse(status_code=503, content=body.model_dump(mode="json"))
