"""Integration test fixtures.

Provides a real PostgreSQL via testcontainers, the applied schema and a
small reference catalog to build recipes on.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from uuid import uuid4

import pytest
import pytest_asyncio
from testcontainers.postgres import PostgresContainer

import foodies.database.connection as db_module
from foodies.core.config import Settings
from foodies.database.connection import close_database_pool, init_database_pool
from foodies.database.repositories.reference import (
    AreaData,
    CategoryData,
    IngredientData,
    ReferenceRepository,
)
from foodies.database.repositories.users import UserRepository
from foodies.database.schema import TABLES, create_schema


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Awaitable, Callable, Generator

    from asyncpg import Pool


@pytest.fixture(scope="session")
def postgres_container() -> Generator[PostgresContainer]:
    """Start a PostgreSQL container for the test session."""
    with PostgresContainer("postgres:16-alpine") as postgres:
        yield postgres


@pytest.fixture(scope="session")
def database_settings(postgres_container: PostgresContainer) -> Settings:
    """Settings pointing at the container."""
    return Settings(
        APP_ENV="test",
        JWT_SECRET_KEY="integration-secret-key",
        DATABASE_PASSWORD=postgres_container.password,
        database={
            "host": postgres_container.get_container_host_ip(),
            "port": int(postgres_container.get_exposed_port(5432)),
            "name": postgres_container.dbname,
            "user": postgres_container.username,
            "min_pool_size": 1,
            "max_pool_size": 5,
            "ssl": False,
        },
        auth={"bcrypt_rounds": 4},
    )


@pytest_asyncio.fixture
async def pool(database_settings: Settings) -> AsyncGenerator[Pool]:
    """Pool with the schema applied; every table is emptied afterwards."""
    db_module._pool = None
    pool = await init_database_pool(database_settings)
    await create_schema(pool)
    try:
        yield pool
    finally:
        tables = ", ".join(name for name, _ in TABLES)
        async with pool.acquire() as conn:
            await conn.execute(f"TRUNCATE {tables} CASCADE")
        await close_database_pool()


@pytest_asyncio.fixture
async def catalog(pool: Pool) -> dict[str, Any]:
    """Two users, a category, an area and three ingredients."""
    users = UserRepository(pool)
    reference = ReferenceRepository(pool)

    owner = await users.create(
        name="Owner Cook", email="owner@example.com", password_hash="$2b$04$x"
    )
    other = await users.create(
        name="Other Cook", email="other@example.com", password_hash="$2b$04$x"
    )
    category = CategoryData(id=uuid4(), name="Dessert", thumb=None)
    area = AreaData(id=uuid4(), name="Italian")
    await reference.insert_category(category)
    await reference.insert_area(area)

    ingredients = [
        IngredientData(id=uuid4(), name=name, description=None, img=None)
        for name in ("Flour", "Sugar", "Butter")
    ]
    for ingredient in ingredients:
        await reference.insert_ingredient(ingredient)

    return {
        "owner": owner,
        "other": other,
        "category": category,
        "area": area,
        "ingredients": ingredients,
    }


@pytest.fixture
def count_rows(pool: Pool) -> Callable[[str], Awaitable[int]]:
    """Row count of a table."""

    async def _count(table: str) -> int:
        async with pool.acquire() as conn:
            return await conn.fetchval(f"SELECT count(*) FROM {table}")  # noqa: S608

    return _count
