"""Reference data repository: categories, areas and ingredients.

These tables are read-mostly. Writes only happen while seeding, and every
insert is keyed by a precomputed id so re-running a seed is a no-op.
"""

from __future__ import annotations

from uuid import UUID  # noqa: TC003

from pydantic import BaseModel

from foodies.database.repositories.base import BaseRepository


class CategoryData(BaseModel):
    """Recipe category."""

    id: UUID
    name: str
    thumb: str | None = None


class AreaData(BaseModel):
    """Cuisine area."""

    id: UUID
    name: str


class IngredientData(BaseModel):
    """Ingredient catalogue entry."""

    id: UUID
    name: str
    description: str | None = None
    img: str | None = None


class ReferenceRepository(BaseRepository):
    """Repository for the ``categories``, ``areas`` and ``ingredients`` tables."""

    async def list_categories(self) -> list[CategoryData]:
        async with self.pool.acquire() as conn:
            rows = await conn.fetch("SELECT id, name, thumb FROM categories ORDER BY name ASC")
        return [CategoryData(id=r["id"], name=r["name"], thumb=r["thumb"]) for r in rows]

    async def list_areas(self) -> list[AreaData]:
        async with self.pool.acquire() as conn:
            rows = await conn.fetch("SELECT id, name FROM areas ORDER BY name ASC")
        return [AreaData(id=r["id"], name=r["name"]) for r in rows]

    async def list_ingredients(self) -> list[IngredientData]:
        async with self.pool.acquire() as conn:
            rows = await conn.fetch(
                "SELECT id, name, description, img FROM ingredients ORDER BY name ASC"
            )
        return [
            IngredientData(
                id=r["id"],
                name=r["name"],
                description=r["description"],
                img=r["img"],
            )
            for r in rows
        ]

    # -------------------------------------------------------------------------
    # Seeding writes
    # -------------------------------------------------------------------------

    async def get_category(self, category_id: UUID) -> CategoryData | None:
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT id, name, thumb FROM categories WHERE id = $1", category_id
            )
        if row is None:
            return None
        return CategoryData(id=row["id"], name=row["name"], thumb=row["thumb"])

    async def insert_category(self, category: CategoryData) -> None:
        async with self.pool.acquire() as conn:
            await conn.execute(
                """
                INSERT INTO categories (id, name, thumb) VALUES ($1, $2, $3)
                ON CONFLICT (id) DO NOTHING
                """,
                category.id,
                category.name,
                category.thumb,
            )

    async def set_category_thumb(self, category_id: UUID, thumb: str) -> None:
        async with self.pool.acquire() as conn:
            await conn.execute(
                "UPDATE categories SET thumb = $2, updated_at = now() WHERE id = $1",
                category_id,
                thumb,
            )

    async def insert_area(self, area: AreaData) -> bool:
        """Insert an area unless its id exists. Returns True if inserted."""
        async with self.pool.acquire() as conn:
            inserted = await conn.fetchval(
                """
                INSERT INTO areas (id, name) VALUES ($1, $2)
                ON CONFLICT (id) DO NOTHING
                RETURNING id
                """,
                area.id,
                area.name,
            )
        return inserted is not None

    async def insert_ingredient(self, ingredient: IngredientData) -> bool:
        """Insert an ingredient unless its id exists. Returns True if inserted."""
        async with self.pool.acquire() as conn:
            inserted = await conn.fetchval(
                """
                INSERT INTO ingredients (id, name, description, img)
                VALUES ($1, $2, $3, $4)
                ON CONFLICT (id) DO NOTHING
                RETURNING id
                """,
                ingredient.id,
                ingredient.name,
                ingredient.description,
                ingredient.img,
            )
        return inserted is not None
