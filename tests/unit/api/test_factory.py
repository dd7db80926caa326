"""Unit tests for the application factory, lifespan and service dependencies.

Tests cover:
- Route layout and docs exposure per environment
- Service lookup from app.state (503 when missing)
- Lifespan wiring with the database pool patched out
- Error bodies and auth through the full middleware stack
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from foodies.core.config import Settings
from foodies.core.exceptions import UnauthorizedException
from foodies.factory import create_app
from foodies.schemas.reference import CategoryResponse
from foodies.services.auth.service import AuthService
from foodies.services.catalog.service import CatalogService
from foodies.services.recipes.service import RecipeService
from foodies.services.users.service import UserService


if TYPE_CHECKING:
    from collections.abc import Callable

    from foodies.database.repositories.users import UserData

pytestmark = pytest.mark.unit


class TestCreateApp:
    """Tests for create_app."""

    def test_routes_are_mounted(self, test_settings: Settings) -> None:
        app = create_app(test_settings)
        paths = {route.path for route in app.routes}

        assert {
            "/api/auth/register",
            "/api/auth/login",
            "/api/auth/logout",
            "/api/auth/current",
            "/api/users/current",
            "/api/users/{user_id}/follow",
            "/api/recipes",
            "/api/recipes/popular",
            "/api/recipes/{recipe_id}/favorite",
            "/api/categories",
            "/api/areas",
            "/api/ingredients",
            "/api/testimonials",
            "/health",
            "/ready",
        } <= paths
        assert app.state.settings is test_settings

    def test_docs_outside_production(self, test_settings: Settings) -> None:
        client = TestClient(create_app(test_settings))

        assert client.get("/api-docs").status_code == 200
        assert client.get("/openapi.json").status_code == 200

    def test_no_docs_in_production(self) -> None:
        settings = Settings(APP_ENV="production", JWT_SECRET_KEY="prod-secret")
        client = TestClient(create_app(settings))

        assert client.get("/api-docs").status_code == 404
        assert client.get("/openapi.json").status_code == 404

    def test_health_has_request_id(self, test_settings: Settings) -> None:
        client = TestClient(create_app(test_settings))

        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"
        assert response.headers["X-Request-ID"]


class TestServiceDependencies:
    """Tests for service lookup through app.state."""

    def test_missing_service_is_503(self, test_settings: Settings) -> None:
        client = TestClient(create_app(test_settings))

        response = client.get("/api/categories")

        assert response.status_code == 503
        assert response.json() == {"message": "Catalog service not available"}

    def test_service_from_state(self, test_settings: Settings) -> None:
        app = create_app(test_settings)
        catalog = AsyncMock()
        category_id = uuid4()
        catalog.list_categories.return_value = [
            CategoryResponse(id=category_id, name="Beef")
        ]
        app.state.catalog_service = catalog

        response = TestClient(app).get("/api/categories")

        assert response.status_code == 200
        assert response.json() == [
            {"id": str(category_id), "name": "Beef", "thumb": None}
        ]


class TestAuthenticatedRoutes:
    """Tests for bearer authentication through the app."""

    def test_missing_token(self, test_settings: Settings) -> None:
        app = create_app(test_settings)
        app.state.auth_service = AsyncMock()

        response = TestClient(app).get("/api/auth/current")

        assert response.status_code == 401
        assert response.json() == {"message": "Not authorized"}
        app.state.auth_service.authenticate.assert_not_awaited()

    def test_rejected_token(self, test_settings: Settings) -> None:
        app = create_app(test_settings)
        app.state.auth_service = AsyncMock()
        app.state.auth_service.authenticate.side_effect = UnauthorizedException

        response = TestClient(app).get(
            "/api/auth/current", headers={"Authorization": "Bearer stale"}
        )

        assert response.status_code == 401
        app.state.auth_service.authenticate.assert_awaited_once_with("stale")

    def test_valid_token(
        self, test_settings: Settings, make_user: Callable[..., UserData]
    ) -> None:
        app = create_app(test_settings)
        user = make_user(token="good")
        app.state.auth_service = AsyncMock()
        app.state.auth_service.authenticate.return_value = user

        response = TestClient(app).get(
            "/api/auth/current", headers={"Authorization": "Bearer good"}
        )

        assert response.status_code == 200
        assert response.json() == {
            "id": str(user.id),
            "name": user.name,
            "avatar": None,
            "email": user.email,
        }

    def test_invalid_path_uuid(self, test_settings: Settings) -> None:
        app = create_app(test_settings)
        app.state.recipe_service = AsyncMock()

        response = TestClient(app).get("/api/recipes/not-a-uuid")

        assert response.status_code == 400
        assert response.json()["message"].startswith("recipe_id:")


class TestLifespan:
    """Tests for startup and shutdown wiring."""

    def test_startup_builds_services(self, test_settings: Settings) -> None:
        pool = MagicMock()
        app = create_app(test_settings)

        with (
            patch(
                "foodies.core.events.lifespan.init_database_pool",
                AsyncMock(return_value=pool),
            ),
            patch(
                "foodies.core.events.lifespan.close_database_pool", AsyncMock()
            ) as close_pool,
        ):
            with TestClient(app):
                assert app.state.db_pool is pool
                assert isinstance(app.state.auth_service, AuthService)
                assert isinstance(app.state.recipe_service, RecipeService)
                assert isinstance(app.state.user_service, UserService)
                assert isinstance(app.state.catalog_service, CatalogService)
                assert app.state.media_client is not None

            close_pool.assert_awaited_once()

        assert app.state.db_pool is None
        assert app.state.media_client is None

    def test_startup_fails_without_database(self, test_settings: Settings) -> None:
        app = create_app(test_settings)

        with (
            patch(
                "foodies.core.events.lifespan.init_database_pool",
                AsyncMock(side_effect=OSError("connection refused")),
            ),
            pytest.raises(OSError, match="connection refused"),
            TestClient(app),
        ):
            pass
