"""Unit tests for the health endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, patch

import orjson
import pytest
from fastapi.responses import ORJSONResponse

from foodies.api.v1.endpoints.health import (
    ReadinessResponse,
    health_check,
    readiness_check,
)


if TYPE_CHECKING:
    from foodies.core.config import Settings

pytestmark = pytest.mark.unit


class TestHealthEndpoints:
    """Tests for /health and /ready."""

    @pytest.mark.asyncio
    async def test_liveness(self) -> None:
        result = await health_check()

        assert result.status == "ok"
        assert result.timestamp is not None

    @pytest.mark.asyncio
    async def test_ready(self, test_settings: Settings) -> None:
        with patch(
            "foodies.api.v1.endpoints.health.check_database_health",
            AsyncMock(return_value={"database": "healthy"}),
        ):
            result = await readiness_check(settings=test_settings)

        assert isinstance(result, ReadinessResponse)
        assert result.status == "ready"
        assert result.environment == "test"
        assert result.version == test_settings.app.version

    @pytest.mark.asyncio
    async def test_degraded(self, test_settings: Settings) -> None:
        with patch(
            "foodies.api.v1.endpoints.health.check_database_health",
            AsyncMock(return_value={"database": "unhealthy"}),
        ):
            result = await readiness_check(settings=test_settings)

        assert isinstance(result, ORJSONResponse)
        assert result.status_code == 503
        body = orjson.loads(result.body)
        assert body["status"] == "degraded"
        assert body["dependencies"] == {"database": "unhealthy"}
