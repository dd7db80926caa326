"""Shared test fixtures for the Foodies API tests."""

from __future__ import annotations

import os
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any
from uuid import UUID, uuid4

import pytest

from foodies.core.config import Settings, get_settings
from foodies.database.repositories.recipes import (
    RecipeData,
    RecipeDetailData,
    RecipeIngredientData,
)
from foodies.database.repositories.reference import (
    AreaData,
    CategoryData,
    IngredientData,
)
from foodies.database.repositories.users import UserData, UserSummary


if TYPE_CHECKING:
    from collections.abc import Callable, Generator


os.environ.setdefault("APP_ENV", "test")

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None]:
    """Each test sees freshly loaded settings."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def test_settings() -> Settings:
    """Settings with secrets and media credentials filled in."""
    return Settings(
        APP_ENV="test",
        JWT_SECRET_KEY="test-secret-key-for-unit-tests",
        CLOUDINARY_API_SECRET="cloud-secret",
        media={"cloud_name": "demo", "api_key": "123456"},
        auth={"bcrypt_rounds": 4},
    )


@pytest.fixture
def make_user() -> Callable[..., UserData]:
    def _make(**overrides: Any) -> UserData:
        data: dict[str, Any] = {
            "id": uuid4(),
            "name": "Jane Cook",
            "email": "jane@example.com",
            "password": "$2b$04$hash",
            "avatar": None,
            "token": None,
            "created_at": NOW,
            "updated_at": NOW,
        }
        data.update(overrides)
        return UserData(**data)

    return _make


@pytest.fixture
def make_recipe() -> Callable[..., RecipeData]:
    def _make(**overrides: Any) -> RecipeData:
        owner_id: UUID = overrides.pop("owner_id", uuid4())
        category = CategoryData(id=uuid4(), name="Dessert", thumb=None)
        area = AreaData(id=uuid4(), name="Italian")
        data: dict[str, Any] = {
            "id": uuid4(),
            "title": "Tiramisu",
            "instructions": "Layer the biscuits and cream, then chill.",
            "thumb": None,
            "time": "30 min",
            "owner_id": owner_id,
            "category_id": category.id,
            "area_id": area.id,
            "created_at": NOW,
            "updated_at": NOW,
            "owner": UserSummary(id=owner_id, name="Jane Cook", avatar=None),
            "category": category,
            "area": area,
        }
        data.update(overrides)
        return RecipeData(**data)

    return _make


@pytest.fixture
def make_recipe_detail(
    make_recipe: Callable[..., RecipeData],
) -> Callable[..., RecipeDetailData]:
    def _make(**overrides: Any) -> RecipeDetailData:
        ingredients = overrides.pop("ingredients", None)
        recipe = make_recipe(**overrides)
        if ingredients is None:
            ingredient = IngredientData(id=uuid4(), name="Mascarpone")
            ingredients = [
                RecipeIngredientData(
                    id=uuid4(),
                    ingredient_id=ingredient.id,
                    measure="250g",
                    ingredient=ingredient,
                )
            ]
        return RecipeDetailData(
            **recipe.model_dump(exclude={"owner", "category", "area"}),
            owner=recipe.owner,
            category=recipe.category,
            area=recipe.area,
            ingredients=ingredients,
        )

    return _make
