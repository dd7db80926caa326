"""Follower repository.

``followers`` is a self-referential edge table over ``users``: a row
``(user_id=B, follower_id=A)`` means A follows B.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from foodies.database.repositories.base import BaseRepository
from foodies.database.repositories.users import UserSummary


if TYPE_CHECKING:
    from uuid import UUID


class FollowerRepository(BaseRepository):
    """Repository for the ``followers`` table."""

    async def exists(self, user_id: UUID, follower_id: UUID) -> bool:
        async with self.pool.acquire() as conn:
            found = await conn.fetchval(
                "SELECT 1 FROM followers WHERE user_id = $1 AND follower_id = $2",
                user_id,
                follower_id,
            )
        return found is not None

    async def add(self, user_id: UUID, follower_id: UUID) -> None:
        """Record that ``follower_id`` follows ``user_id``.

        Raises:
            asyncpg.UniqueViolationError: If the edge already exists.
        """
        async with self.pool.acquire() as conn:
            await conn.execute(
                "INSERT INTO followers (user_id, follower_id) VALUES ($1, $2)",
                user_id,
                follower_id,
            )

    async def remove(self, user_id: UUID, follower_id: UUID) -> bool:
        async with self.pool.acquire() as conn:
            deleted = await conn.fetchval(
                """
                DELETE FROM followers WHERE user_id = $1 AND follower_id = $2
                RETURNING id
                """,
                user_id,
                follower_id,
            )
        return deleted is not None

    async def list_followers(self, user_id: UUID) -> list[UserSummary]:
        """Users following ``user_id``, newest edge first."""
        async with self.pool.acquire() as conn:
            rows = await conn.fetch(
                """
                SELECT u.id, u.name, u.avatar
                FROM followers f
                JOIN users u ON u.id = f.follower_id
                WHERE f.user_id = $1
                ORDER BY f.created_at DESC, u.id ASC
                """,
                user_id,
            )
        return [UserSummary(id=r["id"], name=r["name"], avatar=r["avatar"]) for r in rows]

    async def list_following(self, follower_id: UUID) -> list[UserSummary]:
        """Users that ``follower_id`` follows, newest edge first."""
        async with self.pool.acquire() as conn:
            rows = await conn.fetch(
                """
                SELECT u.id, u.name, u.avatar
                FROM followers f
                JOIN users u ON u.id = f.user_id
                WHERE f.follower_id = $1
                ORDER BY f.created_at DESC, u.id ASC
                """,
                follower_id,
            )
        return [UserSummary(id=r["id"], name=r["name"], avatar=r["avatar"]) for r in rows]

    async def count_followers(self, user_id: UUID) -> int:
        async with self.pool.acquire() as conn:
            total = await conn.fetchval(
                "SELECT count(*) FROM followers WHERE user_id = $1", user_id
            )
        return int(total or 0)

    async def count_following(self, follower_id: UUID) -> int:
        async with self.pool.acquire() as conn:
            total = await conn.fetchval(
                "SELECT count(*) FROM followers WHERE follower_id = $1", follower_id
            )
        return int(total or 0)
