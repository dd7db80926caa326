"""Relational schema for the Foodies store.

``create_schema`` is idempotent: every statement uses ``IF NOT EXISTS`` so
it can run at each deploy or before seeding.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from foodies.observability.logging import get_logger


if TYPE_CHECKING:
    from asyncpg import Pool

logger = get_logger(__name__)


TABLES: tuple[tuple[str, str], ...] = (
    (
        "users",
        """
        CREATE TABLE IF NOT EXISTS users (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            name VARCHAR(100) NOT NULL,
            email VARCHAR(255) NOT NULL UNIQUE,
            password VARCHAR(255) NOT NULL,
            avatar VARCHAR(500),
            token TEXT,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
        """,
    ),
    (
        "categories",
        """
        CREATE TABLE IF NOT EXISTS categories (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            name VARCHAR(100) NOT NULL UNIQUE,
            thumb VARCHAR(500),
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
        """,
    ),
    (
        "areas",
        """
        CREATE TABLE IF NOT EXISTS areas (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            name VARCHAR(100) NOT NULL UNIQUE,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
        """,
    ),
    (
        "ingredients",
        """
        CREATE TABLE IF NOT EXISTS ingredients (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            name VARCHAR(255) NOT NULL UNIQUE,
            description TEXT,
            img VARCHAR(500),
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
        """,
    ),
    (
        "recipes",
        """
        CREATE TABLE IF NOT EXISTS recipes (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            title VARCHAR(200) NOT NULL,
            instructions TEXT NOT NULL,
            thumb VARCHAR(500),
            time VARCHAR(50),
            owner_id UUID NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            category_id UUID NOT NULL REFERENCES categories(id),
            area_id UUID NOT NULL REFERENCES areas(id),
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
        """,
    ),
    (
        "recipe_ingredients",
        """
        CREATE TABLE IF NOT EXISTS recipe_ingredients (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            recipe_id UUID NOT NULL REFERENCES recipes(id) ON DELETE CASCADE,
            ingredient_id UUID NOT NULL REFERENCES ingredients(id),
            measure VARCHAR(100) NOT NULL,
            position SERIAL,
            UNIQUE (recipe_id, ingredient_id)
        )
        """,
    ),
    (
        "favorites",
        """
        CREATE TABLE IF NOT EXISTS favorites (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            user_id UUID NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            recipe_id UUID NOT NULL REFERENCES recipes(id) ON DELETE CASCADE,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            UNIQUE (user_id, recipe_id)
        )
        """,
    ),
    (
        "followers",
        """
        CREATE TABLE IF NOT EXISTS followers (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            user_id UUID NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            follower_id UUID NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            UNIQUE (user_id, follower_id),
            CHECK (user_id <> follower_id)
        )
        """,
    ),
    (
        "testimonials",
        """
        CREATE TABLE IF NOT EXISTS testimonials (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            testimonial TEXT NOT NULL,
            user_id UUID NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
        """,
    ),
)

INDEXES: tuple[str, ...] = (
    "CREATE INDEX IF NOT EXISTS idx_recipes_owner ON recipes (owner_id)",
    "CREATE INDEX IF NOT EXISTS idx_recipes_category ON recipes (category_id)",
    "CREATE INDEX IF NOT EXISTS idx_recipes_area ON recipes (area_id)",
    "CREATE INDEX IF NOT EXISTS idx_recipes_created ON recipes (created_at DESC)",
    "CREATE INDEX IF NOT EXISTS idx_recipe_ingredients_ingredient "
    "ON recipe_ingredients (ingredient_id)",
    "CREATE INDEX IF NOT EXISTS idx_favorites_recipe ON favorites (recipe_id)",
    "CREATE INDEX IF NOT EXISTS idx_followers_follower ON followers (follower_id)",
)


async def create_schema(pool: Pool) -> None:
    """Create all tables and indexes in one transaction."""
    async with pool.acquire() as conn, conn.transaction():
        for name, ddl in TABLES:
            await conn.execute(ddl)
            logger.debug("Ensured table", table=name)
        for ddl in INDEXES:
            await conn.execute(ddl)
    logger.info("Database schema ready", tables=len(TABLES))
