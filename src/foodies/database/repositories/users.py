"""User account repository."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from pydantic import BaseModel

from foodies.database.repositories.base import BaseRepository
from foodies.observability.logging import get_logger


if TYPE_CHECKING:
    from asyncpg import Record

logger = get_logger(__name__)


class UserSummary(BaseModel):
    """Public identity of a user (recipe owners, followers, testimonials)."""

    id: UUID
    name: str
    avatar: str | None = None


class UserData(BaseModel):
    """Full user row, including credentials."""

    id: UUID
    name: str
    email: str
    password: str
    avatar: str | None = None
    token: str | None = None
    created_at: datetime
    updated_at: datetime


_USER_COLUMNS = "id, name, email, password, avatar, token, created_at, updated_at"


class UserRepository(BaseRepository):
    """Repository for the ``users`` table."""

    async def get_by_id(self, user_id: UUID) -> UserData | None:
        query = f"SELECT {_USER_COLUMNS} FROM users WHERE id = $1"  # noqa: S608
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(query, user_id)
        return self._row_to_user(row) if row else None

    async def get_by_email(self, email: str) -> UserData | None:
        query = f"SELECT {_USER_COLUMNS} FROM users WHERE email = $1"  # noqa: S608
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(query, email)
        return self._row_to_user(row) if row else None

    async def exists(self, user_id: UUID) -> bool:
        async with self.pool.acquire() as conn:
            found = await conn.fetchval("SELECT 1 FROM users WHERE id = $1", user_id)
        return found is not None

    async def create(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        avatar: str | None = None,
        user_id: UUID | None = None,
    ) -> UserData:
        """Insert a user.

        Raises:
            asyncpg.UniqueViolationError: If the email is already registered.
        """
        query = f"""
            INSERT INTO users (id, name, email, password, avatar)
            VALUES (COALESCE($1, gen_random_uuid()), $2, $3, $4, $5)
            RETURNING {_USER_COLUMNS}
        """  # noqa: S608
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(query, user_id, name, email, password_hash, avatar)
        logger.debug("User created", user_id=str(row["id"]))
        return self._row_to_user(row)

    async def set_token(self, user_id: UUID, token: str | None) -> None:
        """Store (or clear, with ``None``) the user's session token."""
        async with self.pool.acquire() as conn:
            await conn.execute(
                "UPDATE users SET token = $2, updated_at = now() WHERE id = $1",
                user_id,
                token,
            )

    async def update_avatar(self, user_id: UUID, avatar: str) -> UserData | None:
        query = f"""
            UPDATE users SET avatar = $2, updated_at = now()
            WHERE id = $1
            RETURNING {_USER_COLUMNS}
        """  # noqa: S608
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(query, user_id, avatar)
        return self._row_to_user(row) if row else None

    @staticmethod
    def _row_to_user(row: Record) -> UserData:
        return UserData(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            password=row["password"],
            avatar=row["avatar"],
            token=row["token"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
