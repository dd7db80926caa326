"""FastAPI dependencies for service access.

Services are built during application startup and stored in app.state;
these helpers hand them to route handlers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi import HTTPException, Request, status


if TYPE_CHECKING:
    from foodies.core.config import Settings
    from foodies.services.auth.service import AuthService
    from foodies.services.catalog.service import CatalogService
    from foodies.services.recipes.service import RecipeService
    from foodies.services.users.service import UserService


def _from_state(request: Request, name: str, label: str) -> Any:
    service = getattr(request.app.state, name, None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"{label} not available",
        )
    return service


async def get_auth_service(request: Request) -> AuthService:
    return _from_state(request, "auth_service", "Authentication service")


async def get_recipe_service(request: Request) -> RecipeService:
    return _from_state(request, "recipe_service", "Recipe service")


async def get_user_service(request: Request) -> UserService:
    return _from_state(request, "user_service", "User service")


async def get_catalog_service(request: Request) -> CatalogService:
    return _from_state(request, "catalog_service", "Catalog service")


async def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    return request.app.state.settings
