"""PostgreSQL connection pool management.

The pool is created once during application startup, handed to the
repositories that need it and closed on shutdown.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import asyncpg

from foodies.core.config import Settings, get_settings
from foodies.observability.logging import get_logger


if TYPE_CHECKING:
    from asyncpg import Pool

logger = get_logger(__name__)

_pool: Pool | None = None


async def init_database_pool(settings: Settings | None = None) -> Pool:
    """Create the asyncpg pool and verify it with ``SELECT 1``.

    Returns:
        The initialised pool, also retrievable via ``get_database_pool()``.
    """
    global _pool  # noqa: PLW0603

    settings = settings or get_settings()
    db = settings.database

    logger.info(
        "Initializing database connection pool",
        host=db.host,
        port=db.port,
        database=db.name,
    )

    pool = await asyncpg.create_pool(
        host=db.host,
        port=db.port,
        database=db.name,
        user=db.user,
        password=settings.DATABASE_PASSWORD or None,
        min_size=db.min_pool_size,
        max_size=db.max_pool_size,
        command_timeout=db.command_timeout,
        ssl=True if db.ssl else None,
    )

    try:
        async with pool.acquire() as conn:
            await conn.fetchval("SELECT 1")
    except asyncpg.PostgresError:
        logger.exception("Failed to connect to database")
        await pool.close()
        raise

    _pool = pool
    logger.info("Database connection established successfully")
    return pool


async def close_database_pool() -> None:
    """Close the pool if one was created."""
    global _pool  # noqa: PLW0603

    if _pool is not None:
        await _pool.close()
        _pool = None
        logger.info("Database connection pool closed")


def get_database_pool() -> Pool:
    """Return the initialised pool.

    Raises:
        RuntimeError: If ``init_database_pool()`` has not run.
    """
    if _pool is None:
        msg = "Database pool not initialized. Call init_database_pool() first."
        raise RuntimeError(msg)
    return _pool


async def check_database_health() -> dict[str, str]:
    """Report ``healthy``, ``unhealthy`` or ``not_initialized``."""
    if _pool is None:
        return {"database": "not_initialized"}

    try:
        async with _pool.acquire() as conn:
            await conn.fetchval("SELECT 1")
    except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, TimeoutError):
        logger.warning("Database health check failed")
        return {"database": "unhealthy"}
    return {"database": "healthy"}
