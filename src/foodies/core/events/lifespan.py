"""Application lifespan event handlers.

This module defines the lifespan context manager that handles:
- Application startup: open the database pool, build services
- Application shutdown: close the media client and the pool
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from foodies.core.config import Settings, get_settings
from foodies.database.connection import close_database_pool, init_database_pool
from foodies.database.repositories import (
    FavoriteRepository,
    FollowerRepository,
    RecipeRepository,
    ReferenceRepository,
    TestimonialRepository,
    UserRepository,
)
from foodies.observability.logging import get_logger, setup_logging
from foodies.services.auth.service import AuthService
from foodies.services.catalog.service import CatalogService
from foodies.services.media.cloudinary import CloudinaryClient
from foodies.services.recipes.service import RecipeService
from foodies.services.users.service import UserService


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from asyncpg import Pool
    from fastapi import FastAPI

logger = get_logger(__name__)


async def _startup(app: FastAPI, settings: Settings) -> None:
    """Initialize all application services during startup.

    Args:
        app: The FastAPI application instance.
        settings: Application settings.
    """
    setup_logging(
        log_level=settings.logging.level,
        log_format=settings.logging.format,
        is_development=settings.is_development,
    )

    logger.info(
        "Starting application",
        app_name=settings.app.name,
        environment=settings.APP_ENV,
        debug=settings.app.debug,
    )

    # Database is critical - failure aborts startup
    pool = await init_database_pool(settings)
    app.state.db_pool = pool

    # Media client (non-critical - uploads fail until configured)
    media_client = CloudinaryClient(settings=settings)
    await media_client.initialize()
    app.state.media_client = media_client

    _init_services(app, settings, pool, media_client)

    logger.info("Application startup complete")


def _init_services(
    app: FastAPI,
    settings: Settings,
    pool: Pool,
    media_client: CloudinaryClient,
) -> None:
    """Wire repositories into services and publish them on app.state."""
    users = UserRepository(pool)
    recipes = RecipeRepository(pool)
    favorites = FavoriteRepository(pool)
    followers = FollowerRepository(pool)

    app.state.auth_service = AuthService(users=users, settings=settings)
    app.state.recipe_service = RecipeService(
        recipes=recipes,
        favorites=favorites,
        media=media_client,
        settings=settings,
    )
    app.state.user_service = UserService(
        users=users,
        recipes=recipes,
        favorites=favorites,
        followers=followers,
        media=media_client,
        settings=settings,
    )
    app.state.catalog_service = CatalogService(
        reference=ReferenceRepository(pool),
        testimonials=TestimonialRepository(pool),
    )


async def _shutdown(app: FastAPI) -> None:
    """Shutdown all application services.

    Args:
        app: The FastAPI application instance.
    """
    logger.info("Shutting down application")

    media_client = getattr(app.state, "media_client", None)
    if media_client is not None:
        await media_client.shutdown()
        app.state.media_client = None

    await close_database_pool()
    app.state.db_pool = None

    logger.info("Application shutdown complete")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan events.

    Uses the settings the app was created with, falling back to
    ``get_settings()``.

    Yields:
        None - control returns to the application to handle requests.
    """
    settings = getattr(app.state, "settings", None) or get_settings()
    await _startup(app, settings)
    try:
        yield
    finally:
        await _shutdown(app)
