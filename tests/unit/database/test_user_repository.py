"""Unit tests for UserRepository, ReferenceRepository and TestimonialRepository."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from uuid import uuid4

import pytest

import foodies.database.connection as db_module
from foodies.database.repositories.reference import (
    AreaData,
    CategoryData,
    ReferenceRepository,
)
from foodies.database.repositories import testimonials
from foodies.database.repositories.users import UserRepository


if TYPE_CHECKING:
    from unittest.mock import AsyncMock, MagicMock

pytestmark = pytest.mark.unit


def _user_row(**overrides: Any) -> dict[str, Any]:
    row: dict[str, Any] = {
        "id": uuid4(),
        "name": "Sam",
        "email": "sam@example.com",
        "password": "$2b$04$hash",
        "avatar": None,
        "token": None,
        "created_at": "2024-05-01T12:00:00+00:00",
        "updated_at": "2024-05-01T12:00:00+00:00",
    }
    row.update(overrides)
    return row


class TestBaseRepository:
    """Tests for pool resolution."""

    def test_falls_back_to_global_pool(self, mock_pool: MagicMock) -> None:
        db_module._pool = mock_pool

        assert UserRepository().pool is mock_pool

    def test_injected_pool_wins(self, mock_pool: MagicMock) -> None:
        assert UserRepository(mock_pool).pool is mock_pool


class TestUserRepository:
    """Tests for UserRepository."""

    @pytest.mark.asyncio
    async def test_get_by_email(self, mock_pool: MagicMock, mock_conn: AsyncMock) -> None:
        row = _user_row(token="tok")
        mock_conn.fetchrow.return_value = row

        user = await UserRepository(mock_pool).get_by_email("sam@example.com")

        assert user is not None
        assert user.id == row["id"]
        assert user.token == "tok"
        assert mock_conn.fetchrow.call_args.args[1] == "sam@example.com"

    @pytest.mark.asyncio
    async def test_get_by_id_missing(self, mock_pool: MagicMock) -> None:
        assert await UserRepository(mock_pool).get_by_id(uuid4()) is None

    @pytest.mark.asyncio
    async def test_create_with_explicit_id(
        self, mock_pool: MagicMock, mock_conn: AsyncMock
    ) -> None:
        user_id = uuid4()
        mock_conn.fetchrow.return_value = _user_row(id=user_id)

        user = await UserRepository(mock_pool).create(
            user_id=user_id,
            name="Sam",
            email="sam@example.com",
            password_hash="$2b$04$hash",
        )

        assert user.id == user_id
        args = mock_conn.fetchrow.call_args.args
        assert "COALESCE($1, gen_random_uuid())" in args[0]
        assert args[1:] == (user_id, "Sam", "sam@example.com", "$2b$04$hash", None)

    @pytest.mark.asyncio
    async def test_set_token_clears_with_none(
        self, mock_pool: MagicMock, mock_conn: AsyncMock
    ) -> None:
        user_id = uuid4()

        await UserRepository(mock_pool).set_token(user_id, None)

        assert mock_conn.execute.call_args.args[1:] == (user_id, None)

    @pytest.mark.asyncio
    async def test_update_avatar(self, mock_pool: MagicMock, mock_conn: AsyncMock) -> None:
        url = "https://res.cloudinary.com/demo/image/upload/v1/avatars/a.webp"
        mock_conn.fetchrow.return_value = _user_row(avatar=url)

        user = await UserRepository(mock_pool).update_avatar(uuid4(), url)

        assert user is not None
        assert user.avatar == url


class TestReferenceRepository:
    """Tests for ReferenceRepository."""

    @pytest.mark.asyncio
    async def test_lists_are_ordered_by_name(
        self, mock_pool: MagicMock, mock_conn: AsyncMock
    ) -> None:
        repo = ReferenceRepository(mock_pool)
        mock_conn.fetch.return_value = [{"id": uuid4(), "name": "Beef", "thumb": None}]

        categories = await repo.list_categories()

        assert categories[0].name == "Beef"
        assert "ORDER BY name ASC" in mock_conn.fetch.call_args.args[0]

        mock_conn.fetch.return_value = []
        assert await repo.list_areas() == []
        assert "ORDER BY name ASC" in mock_conn.fetch.call_args.args[0]

    @pytest.mark.asyncio
    async def test_insert_category_is_idempotent(
        self, mock_pool: MagicMock, mock_conn: AsyncMock
    ) -> None:
        await ReferenceRepository(mock_pool).insert_category(
            CategoryData(id=uuid4(), name="Beef")
        )

        assert "ON CONFLICT (id) DO NOTHING" in mock_conn.execute.call_args.args[0]

    @pytest.mark.asyncio
    async def test_insert_area_reports_insert(
        self, mock_pool: MagicMock, mock_conn: AsyncMock
    ) -> None:
        area = AreaData(id=uuid4(), name="Greek")
        repo = ReferenceRepository(mock_pool)

        mock_conn.fetchval.return_value = area.id
        assert await repo.insert_area(area) is True

        mock_conn.fetchval.return_value = None
        assert await repo.insert_area(area) is False


class TestTestimonialRepository:
    """Tests for TestimonialRepository."""

    @pytest.mark.asyncio
    async def test_list_all_attaches_user(
        self, mock_pool: MagicMock, mock_conn: AsyncMock
    ) -> None:
        user_id = uuid4()
        mock_conn.fetch.return_value = [
            {
                "id": uuid4(),
                "testimonial": "Great recipes!",
                "user_id": user_id,
                "created_at": "2024-05-01T12:00:00+00:00",
                "user_name": "Sam",
                "user_avatar": None,
            }
        ]

        rows = await testimonials.TestimonialRepository(mock_pool).list_all()

        assert rows[0].user.id == user_id
        assert rows[0].user.name == "Sam"
        assert "ORDER BY t.created_at DESC" in mock_conn.fetch.call_args.args[0]

    @pytest.mark.asyncio
    async def test_insert_skips_existing(self, mock_pool: MagicMock) -> None:
        inserted = await testimonials.TestimonialRepository(mock_pool).insert(
            uuid4(), "Lovely", uuid4()
        )

        assert inserted is False
