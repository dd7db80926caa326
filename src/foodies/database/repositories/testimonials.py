"""Testimonial repository."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003
from uuid import UUID  # noqa: TC003

from pydantic import BaseModel

from foodies.database.repositories.base import BaseRepository
from foodies.database.repositories.users import UserSummary


class TestimonialData(BaseModel):
    """Testimonial with its author's public identity."""

    id: UUID
    testimonial: str
    user_id: UUID
    created_at: datetime
    user: UserSummary


class TestimonialRepository(BaseRepository):
    """Repository for the ``testimonials`` table."""

    async def list_all(self) -> list[TestimonialData]:
        """All testimonials, newest first (testimonials t -> users u)."""
        async with self.pool.acquire() as conn:
            rows = await conn.fetch(
                """
                SELECT
                    t.id, t.testimonial, t.user_id, t.created_at,
                    u.name AS user_name, u.avatar AS user_avatar
                FROM testimonials t
                JOIN users u ON u.id = t.user_id
                ORDER BY t.created_at DESC, t.id ASC
                """
            )
        return [
            TestimonialData(
                id=r["id"],
                testimonial=r["testimonial"],
                user_id=r["user_id"],
                created_at=r["created_at"],
                user=UserSummary(id=r["user_id"], name=r["user_name"], avatar=r["user_avatar"]),
            )
            for r in rows
        ]

    async def insert(self, testimonial_id: UUID, testimonial: str, user_id: UUID) -> bool:
        """Insert keyed by id; returns False if the row already existed."""
        async with self.pool.acquire() as conn:
            inserted = await conn.fetchval(
                """
                INSERT INTO testimonials (id, testimonial, user_id) VALUES ($1, $2, $3)
                ON CONFLICT (id) DO NOTHING
                RETURNING id
                """,
                testimonial_id,
                testimonial,
                user_id,
            )
        return inserted is not None
