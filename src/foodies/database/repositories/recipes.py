"""Recipe repository.

Two read shapes are served:
- list view: recipe row joined with its category, area and owner summary
- detail view: list view plus the ordered ingredient lines

Each method issues explicit joins; nothing is lazily loaded.
"""

from __future__ import annotations

from datetime import datetime  # noqa: TC003
from typing import TYPE_CHECKING, Any
from uuid import UUID  # noqa: TC003

from pydantic import BaseModel

from foodies.database.repositories.base import BaseRepository
from foodies.database.repositories.reference import AreaData, CategoryData, IngredientData
from foodies.database.repositories.users import UserSummary
from foodies.observability.logging import get_logger


if TYPE_CHECKING:
    from collections.abc import Sequence

    from asyncpg import Record

logger = get_logger(__name__)


# =============================================================================
# Data Transfer Objects
# =============================================================================


class RecipeData(BaseModel):
    """List view of a recipe."""

    id: UUID
    title: str
    instructions: str
    thumb: str | None = None
    time: str | None = None
    owner_id: UUID
    category_id: UUID
    area_id: UUID
    created_at: datetime
    updated_at: datetime
    owner: UserSummary
    category: CategoryData
    area: AreaData
    favorites_count: int | None = None


class RecipeIngredientData(BaseModel):
    """One ingredient line of a recipe."""

    id: UUID
    ingredient_id: UUID
    measure: str
    ingredient: IngredientData


class RecipeDetailData(RecipeData):
    """Detail view: list view plus ingredient lines in insertion order."""

    ingredients: list[RecipeIngredientData] = []


class NewRecipe(BaseModel):
    """Values needed to insert a recipe with its ingredient lines."""

    title: str
    instructions: str
    owner_id: UUID
    category_id: UUID
    area_id: UUID
    thumb: str | None = None
    time: str | None = None
    ingredients: list[tuple[UUID, str]] = []
    id: UUID | None = None


# =============================================================================
# Queries
# =============================================================================

# recipes r -> categories c, areas a, users u (all inner joins on FK columns)
_LIST_SELECT = """
    SELECT
        r.id, r.title, r.instructions, r.thumb, r.time,
        r.owner_id, r.category_id, r.area_id, r.created_at, r.updated_at,
        c.name AS category_name, c.thumb AS category_thumb,
        a.name AS area_name,
        u.name AS owner_name, u.avatar AS owner_avatar
    FROM recipes r
    JOIN categories c ON c.id = r.category_id
    JOIN areas a ON a.id = r.area_id
    JOIN users u ON u.id = r.owner_id
"""


def _build_filters(
    *,
    category_id: UUID | None = None,
    area_id: UUID | None = None,
    owner_id: UUID | None = None,
    recipe_ids: Sequence[UUID] | None = None,
) -> tuple[str, list[Any]]:
    """Build a ``WHERE`` clause over ``recipes r`` and its positional args."""
    clauses: list[str] = []
    args: list[Any] = []

    for column, value in (
        ("r.category_id", category_id),
        ("r.area_id", area_id),
        ("r.owner_id", owner_id),
    ):
        if value is not None:
            args.append(value)
            clauses.append(f"{column} = ${len(args)}")

    if recipe_ids is not None:
        args.append(list(recipe_ids))
        clauses.append(f"r.id = ANY(${len(args)}::uuid[])")

    where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
    return where, args


class RecipeRepository(BaseRepository):
    """Repository for ``recipes`` and ``recipe_ingredients``."""

    async def search(
        self,
        *,
        limit: int,
        offset: int,
        category_id: UUID | None = None,
        area_id: UUID | None = None,
        owner_id: UUID | None = None,
        recipe_ids: Sequence[UUID] | None = None,
    ) -> tuple[list[RecipeData], int]:
        """Return one page of list views, newest first, and the filtered total.

        The total is computed over the same filters, ignoring the window.
        """
        where, args = _build_filters(
            category_id=category_id,
            area_id=area_id,
            owner_id=owner_id,
            recipe_ids=recipe_ids,
        )
        count_query = f"SELECT count(*) FROM recipes r {where}"  # noqa: S608
        page_query = (
            f"{_LIST_SELECT} {where} "  # noqa: S608
            f"ORDER BY r.created_at DESC, r.id ASC "
            f"LIMIT ${len(args) + 1} OFFSET ${len(args) + 2}"
        )

        # One snapshot for both statements so total matches the page.
        async with (
            self.pool.acquire() as conn,
            conn.transaction(isolation="repeatable_read", readonly=True),
        ):
            total = await conn.fetchval(count_query, *args)
            rows = await conn.fetch(page_query, *args, limit, offset)

        return [self._row_to_recipe(row) for row in rows], int(total or 0)

    async def find_ids_by_ingredient(self, ingredient_id: UUID) -> list[UUID]:
        """Ids of all recipes that use ``ingredient_id``."""
        async with self.pool.acquire() as conn:
            rows = await conn.fetch(
                "SELECT recipe_id FROM recipe_ingredients WHERE ingredient_id = $1",
                ingredient_id,
            )
        return [row["recipe_id"] for row in rows]

    async def get_popular(self, limit: int) -> list[RecipeData]:
        """Top recipes by favorite count, ties broken by ascending id."""
        query = f"""
            SELECT rv.*, COALESCE(fc.favorites_count, 0) AS favorites_count
            FROM ({_LIST_SELECT}) AS rv
            LEFT JOIN (
                SELECT recipe_id, count(*) AS favorites_count
                FROM favorites
                GROUP BY recipe_id
            ) fc ON fc.recipe_id = rv.id
            ORDER BY favorites_count DESC, rv.id ASC
            LIMIT $1
        """  # noqa: S608
        async with self.pool.acquire() as conn:
            rows = await conn.fetch(query, limit)
        return [self._row_to_recipe(row) for row in rows]

    async def get_by_ids(self, recipe_ids: Sequence[UUID]) -> list[RecipeData]:
        """Bulk fetch list views; order is unspecified."""
        if not recipe_ids:
            return []
        query = f"{_LIST_SELECT} WHERE r.id = ANY($1::uuid[])"
        async with self.pool.acquire() as conn:
            rows = await conn.fetch(query, list(recipe_ids))
        return [self._row_to_recipe(row) for row in rows]

    async def get_by_id(self, recipe_id: UUID) -> RecipeData | None:
        query = f"{_LIST_SELECT} WHERE r.id = $1"
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(query, recipe_id)
        return self._row_to_recipe(row) if row else None

    async def get_detail(self, recipe_id: UUID) -> RecipeDetailData | None:
        """Detail view; ingredient lines come from
        recipe_ingredients ri -> ingredients i, ordered by insertion."""
        ingredients_query = """
            SELECT
                ri.id, ri.ingredient_id, ri.measure,
                i.name, i.description, i.img
            FROM recipe_ingredients ri
            JOIN ingredients i ON i.id = ri.ingredient_id
            WHERE ri.recipe_id = $1
            ORDER BY ri.position
        """
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(f"{_LIST_SELECT} WHERE r.id = $1", recipe_id)
            if row is None:
                return None
            ingredient_rows = await conn.fetch(ingredients_query, recipe_id)

        recipe = self._row_to_recipe(row)
        return RecipeDetailData(
            **recipe.model_dump(exclude={"owner", "category", "area"}),
            owner=recipe.owner,
            category=recipe.category,
            area=recipe.area,
            ingredients=[
                RecipeIngredientData(
                    id=ing["id"],
                    ingredient_id=ing["ingredient_id"],
                    measure=ing["measure"],
                    ingredient=IngredientData(
                        id=ing["ingredient_id"],
                        name=ing["name"],
                        description=ing["description"],
                        img=ing["img"],
                    ),
                )
                for ing in ingredient_rows
            ],
        )

    async def exists(self, recipe_id: UUID) -> bool:
        async with self.pool.acquire() as conn:
            found = await conn.fetchval("SELECT 1 FROM recipes WHERE id = $1", recipe_id)
        return found is not None

    async def create(self, recipe: NewRecipe) -> UUID:
        """Insert the recipe row and all its ingredient lines atomically.

        Any failure (including a foreign key violation on an ingredient
        line) rolls back the whole insert.

        Returns:
            Id of the new recipe.
        """
        recipe_query = """
            INSERT INTO recipes
                (id, title, instructions, thumb, time, owner_id, category_id, area_id)
            VALUES (COALESCE($1, gen_random_uuid()), $2, $3, $4, $5, $6, $7, $8)
            RETURNING id
        """
        ingredient_query = """
            INSERT INTO recipe_ingredients (recipe_id, ingredient_id, measure)
            VALUES ($1, $2, $3)
        """

        async with self.pool.acquire() as conn, conn.transaction():
            recipe_id: UUID = await conn.fetchval(
                recipe_query,
                recipe.id,
                recipe.title,
                recipe.instructions,
                recipe.thumb,
                recipe.time,
                recipe.owner_id,
                recipe.category_id,
                recipe.area_id,
            )
            if recipe.ingredients:
                await conn.executemany(
                    ingredient_query,
                    [
                        (recipe_id, ingredient_id, measure)
                        for ingredient_id, measure in recipe.ingredients
                    ],
                )

        logger.debug(
            "Recipe inserted",
            recipe_id=str(recipe_id),
            ingredients=len(recipe.ingredients),
        )
        return recipe_id

    async def delete(self, recipe_id: UUID) -> bool:
        """Delete a recipe; ingredient lines and favorites cascade."""
        async with self.pool.acquire() as conn:
            deleted = await conn.fetchval(
                "DELETE FROM recipes WHERE id = $1 RETURNING id", recipe_id
            )
        return deleted is not None

    async def count_by_owner(self, owner_id: UUID) -> int:
        async with self.pool.acquire() as conn:
            total = await conn.fetchval(
                "SELECT count(*) FROM recipes WHERE owner_id = $1", owner_id
            )
        return int(total or 0)

    @staticmethod
    def _row_to_recipe(row: Record) -> RecipeData:
        keys = row.keys()
        return RecipeData(
            id=row["id"],
            title=row["title"],
            instructions=row["instructions"],
            thumb=row["thumb"],
            time=row["time"],
            owner_id=row["owner_id"],
            category_id=row["category_id"],
            area_id=row["area_id"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
            owner=UserSummary(
                id=row["owner_id"],
                name=row["owner_name"],
                avatar=row["owner_avatar"],
            ),
            category=CategoryData(
                id=row["category_id"],
                name=row["category_name"],
                thumb=row["category_thumb"],
            ),
            area=AreaData(id=row["area_id"], name=row["area_name"]),
            favorites_count=(
                int(row["favorites_count"]) if "favorites_count" in keys else None
            ),
        )
