"""Database unit test fixtures."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

import foodies.database.connection as db_module


if TYPE_CHECKING:
    from collections.abc import Callable, Generator

pytestmark = pytest.mark.unit

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


@pytest.fixture(autouse=True)
def reset_database_globals() -> Generator[None]:
    """Reset database global state before and after each test."""
    db_module._pool = None
    yield
    db_module._pool = None


@pytest.fixture
def mock_conn() -> AsyncMock:
    """Mock asyncpg connection with a working ``transaction()`` context."""
    conn = AsyncMock()
    conn.fetchval = AsyncMock(return_value=None)
    conn.fetchrow = AsyncMock(return_value=None)
    conn.fetch = AsyncMock(return_value=[])
    conn.execute = AsyncMock(return_value="OK")
    conn.executemany = AsyncMock(return_value=None)

    transaction = MagicMock()
    transaction.__aenter__ = AsyncMock(return_value=None)
    transaction.__aexit__ = AsyncMock(return_value=None)
    conn.transaction = MagicMock(return_value=transaction)
    return conn


@pytest.fixture
def mock_pool(mock_conn: AsyncMock) -> MagicMock:
    """Create a mock asyncpg pool handing out ``mock_conn``."""
    pool = MagicMock()
    pool.close = AsyncMock()

    pool.acquire = MagicMock(return_value=AsyncMock())
    pool.acquire.return_value.__aenter__ = AsyncMock(return_value=mock_conn)
    pool.acquire.return_value.__aexit__ = AsyncMock(return_value=None)

    return pool


@pytest.fixture
def recipe_row() -> Callable[..., dict[str, Any]]:
    """Build a row shaped like the recipe list query output."""

    def _make(**overrides: Any) -> dict[str, Any]:
        row: dict[str, Any] = {
            "id": uuid4(),
            "title": "Shakshuka",
            "instructions": "Simmer the tomatoes, crack in the eggs.",
            "thumb": None,
            "time": "25 min",
            "owner_id": uuid4(),
            "category_id": uuid4(),
            "area_id": uuid4(),
            "created_at": NOW,
            "updated_at": NOW,
            "category_name": "Breakfast",
            "category_thumb": None,
            "area_name": "Tunisian",
            "owner_name": "Sam",
            "owner_avatar": None,
        }
        row.update(overrides)
        return row

    return _make
