"""Create the database schema.

Usage:
    python -m foodies.database
"""

from __future__ import annotations

import asyncio

from foodies.core.config import get_settings
from foodies.database.connection import close_database_pool, init_database_pool
from foodies.database.schema import create_schema
from foodies.observability.logging import setup_logging


async def _run() -> None:
    pool = await init_database_pool()
    try:
        await create_schema(pool)
    finally:
        await close_database_pool()


def main() -> None:
    settings = get_settings()
    setup_logging(
        log_level=settings.logging.level,
        log_format=settings.logging.format,
        is_development=settings.is_development,
    )
    asyncio.run(_run())


if __name__ == "__main__":
    main()
