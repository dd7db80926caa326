"""Application factory for creating FastAPI instances.

This module provides the create_app factory function that:
- Configures the FastAPI application with appropriate settings
- Sets up the middleware stack in the correct order
- Registers exception handlers
- Mounts the API router and the root health checks
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse

from foodies.api.v1.endpoints import health
from foodies.api.v1.router import router as v1_router
from foodies.core.config import Settings, get_settings
from foodies.core.events import lifespan
from foodies.core.exceptions import setup_exception_handlers
from foodies.core.middleware.logging import LoggingMiddleware
from foodies.core.middleware.request_id import RequestIDMiddleware


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure a FastAPI application instance.

    Args:
        settings: Optional settings override. If not provided, uses get_settings().

    Returns:
        Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title=settings.app.name,
        version=settings.app.version,
        description="Foodies - recipe sharing API",
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        docs_url="/api-docs" if not settings.is_production else None,
        redoc_url=None,
        openapi_url="/openapi.json" if not settings.is_production else None,
        debug=settings.app.debug,
    )

    # Store settings in app state for access in routes and lifespan
    app.state.settings = settings

    setup_exception_handlers(app)

    # Middleware order matters - first added = last executed
    _setup_middleware(app, settings)

    _setup_routers(app, settings)

    return app


def _setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Configure middleware stack.

    Order from request perspective:
    1. RequestIDMiddleware (adds request ID for tracing)
    2. LoggingMiddleware (logs requests/responses)
    3. GZipMiddleware (compresses responses)
    4. CORSMiddleware (handles CORS)
    """
    origins = settings.api.cors_origins or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=origins != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    app.add_middleware(GZipMiddleware, minimum_size=1000)

    app.add_middleware(
        LoggingMiddleware,
        exclude_paths={"/health", "/ready", "/favicon.ico"},
    )

    app.add_middleware(RequestIDMiddleware)


def _setup_routers(app: FastAPI, settings: Settings) -> None:
    """Mount API routers.

    Args:
        app: FastAPI application instance.
        settings: Application settings.
    """
    app.include_router(v1_router, prefix=settings.api.prefix)

    # Root health checks (no prefix, for load balancers)
    app.include_router(health.router)
