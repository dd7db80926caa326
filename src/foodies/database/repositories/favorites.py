"""Favorites repository (user bookmarks of recipes)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from foodies.database.repositories.base import BaseRepository


if TYPE_CHECKING:
    from uuid import UUID


class FavoriteRepository(BaseRepository):
    """Repository for the ``favorites`` table."""

    async def exists(self, user_id: UUID, recipe_id: UUID) -> bool:
        async with self.pool.acquire() as conn:
            found = await conn.fetchval(
                "SELECT 1 FROM favorites WHERE user_id = $1 AND recipe_id = $2",
                user_id,
                recipe_id,
            )
        return found is not None

    async def add(self, user_id: UUID, recipe_id: UUID) -> None:
        """Insert a favorite.

        Raises:
            asyncpg.UniqueViolationError: If the pair already exists.
        """
        async with self.pool.acquire() as conn:
            await conn.execute(
                "INSERT INTO favorites (user_id, recipe_id) VALUES ($1, $2)",
                user_id,
                recipe_id,
            )

    async def remove(self, user_id: UUID, recipe_id: UUID) -> bool:
        """Delete a favorite; returns False when there was nothing to delete."""
        async with self.pool.acquire() as conn:
            deleted = await conn.fetchval(
                """
                DELETE FROM favorites WHERE user_id = $1 AND recipe_id = $2
                RETURNING id
                """,
                user_id,
                recipe_id,
            )
        return deleted is not None

    async def page_recipe_ids(
        self,
        user_id: UUID,
        *,
        limit: int,
        offset: int,
    ) -> tuple[list[UUID], int]:
        """Recipe ids favorited by ``user_id``, most recently added first.

        Returns:
            The ordered slice of recipe ids and the user's total favorite count.
        """
        async with (
            self.pool.acquire() as conn,
            conn.transaction(isolation="repeatable_read", readonly=True),
        ):
            total = await conn.fetchval(
                "SELECT count(*) FROM favorites WHERE user_id = $1", user_id
            )
            rows = await conn.fetch(
                """
                SELECT recipe_id FROM favorites
                WHERE user_id = $1
                ORDER BY created_at DESC, id ASC
                LIMIT $2 OFFSET $3
                """,
                user_id,
                limit,
                offset,
            )
        return [row["recipe_id"] for row in rows], int(total or 0)

    async def count_by_user(self, user_id: UUID) -> int:
        async with self.pool.acquire() as conn:
            total = await conn.fetchval(
                "SELECT count(*) FROM favorites WHERE user_id = $1", user_id
            )
        return int(total or 0)
