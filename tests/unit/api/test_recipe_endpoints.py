"""Unit tests for the recipe endpoints.

Tests cover:
- Query parameters handed to the service
- Multipart form parsing and validation messages
- Favorite acknowledgement bodies
"""

from __future__ import annotations

from io import BytesIO
from typing import TYPE_CHECKING
from unittest.mock import AsyncMock
from uuid import uuid4

import orjson
import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from foodies.api.v1.endpoints import recipes
from foodies.api.v1.endpoints.recipes import parse_create_recipe_form
from foodies.core.exceptions import BadRequestException


if TYPE_CHECKING:
    from collections.abc import Callable

    from foodies.core.config import Settings
    from foodies.database.repositories.users import UserData

pytestmark = pytest.mark.unit


def _form(**overrides: str | None) -> dict[str, str | None]:
    fields: dict[str, str | None] = {
        "title": "Pancakes",
        "category_id": str(uuid4()),
        "area_id": str(uuid4()),
        "instructions": "Whisk, rest the batter, then fry.",
        "time": "20 min",
        "ingredients": orjson.dumps(
            [{"ingredientId": str(uuid4()), "measure": "2 cups"}]
        ).decode(),
    }
    fields.update(overrides)
    return fields


class TestParseCreateRecipeForm:
    """Tests for parse_create_recipe_form."""

    def test_valid_form(self) -> None:
        fields = _form()

        request = parse_create_recipe_form(**fields)

        assert request.title == "Pancakes"
        assert str(request.category_id) == fields["category_id"]
        assert request.ingredients[0].measure == "2 cups"

    def test_blank_time_is_omitted(self) -> None:
        assert parse_create_recipe_form(**_form(time="")).time is None

    def test_ingredients_not_json(self) -> None:
        with pytest.raises(BadRequestException) as exc_info:
            parse_create_recipe_form(**_form(ingredients="[not json"))

        assert exc_info.value.message == "ingredients: must be a JSON array"

    def test_missing_fields_are_listed(self) -> None:
        with pytest.raises(BadRequestException) as exc_info:
            parse_create_recipe_form(**_form(title=None, ingredients=None))

        assert "title: Field required" in exc_info.value.message
        assert "ingredients: Field required" in exc_info.value.message

    def test_empty_ingredients(self) -> None:
        with pytest.raises(BadRequestException, match="ingredients"):
            parse_create_recipe_form(**_form(ingredients="[]"))

    def test_duplicate_ingredients(self) -> None:
        ingredient_id = str(uuid4())
        lines = [
            {"ingredientId": ingredient_id, "measure": "1"},
            {"ingredientId": ingredient_id, "measure": "2"},
        ]

        with pytest.raises(BadRequestException, match="Duplicate ingredient"):
            parse_create_recipe_form(**_form(ingredients=orjson.dumps(lines).decode()))

    def test_bad_category_id(self) -> None:
        with pytest.raises(BadRequestException, match="UUID"):
            parse_create_recipe_form(**_form(category_id="abc"))


class TestRecipeEndpoints:
    """Tests for the recipe route handlers called directly."""

    @pytest.mark.asyncio
    async def test_search_passes_filters(self) -> None:
        service = AsyncMock()
        category = uuid4()

        await recipes.search_recipes(
            recipe_service=service, category=category, page="2", limit="5"
        )

        service.search_recipes.assert_awaited_once_with(
            category_id=category, area_id=None, ingredient_id=None, page="2", limit="5"
        )

    @pytest.mark.asyncio
    async def test_own_recipes_use_caller(
        self, make_user: Callable[..., UserData]
    ) -> None:
        service = AsyncMock()
        user = make_user()

        await recipes.get_own_recipes(user=user, recipe_service=service)

        service.get_own_recipes.assert_awaited_once_with(user.id, page=None, limit=None)

    @pytest.mark.asyncio
    async def test_create_reads_thumb(
        self, make_user: Callable[..., UserData], test_settings: Settings
    ) -> None:
        service = AsyncMock()
        user = make_user()
        thumb = UploadFile(
            file=BytesIO(b"\x89PNG"),
            filename="pancakes.png",
            headers=Headers({"content-type": "image/png"}),
        )

        await recipes.create_recipe(
            user=user,
            recipe_service=service,
            settings=test_settings,
            thumb=thumb,
            **_form(),
        )

        owner_id, request, image = service.create_recipe.call_args.args
        assert owner_id == user.id
        assert request.title == "Pancakes"
        assert image.content == b"\x89PNG"
        assert image.content_type == "image/png"

    @pytest.mark.asyncio
    async def test_create_invalid_form_skips_service(
        self, make_user: Callable[..., UserData], test_settings: Settings
    ) -> None:
        service = AsyncMock()

        with pytest.raises(BadRequestException):
            await recipes.create_recipe(
                user=make_user(),
                recipe_service=service,
                settings=test_settings,
                **_form(title="ab"),
            )

        service.create_recipe.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_add_favorite_message(
        self, make_user: Callable[..., UserData]
    ) -> None:
        service = AsyncMock()
        recipe_id = uuid4()
        user = make_user()

        result = await recipes.add_favorite(
            recipe_id=recipe_id, user=user, recipe_service=service
        )

        assert result.message == "Recipe added to favorites"
        service.add_favorite.assert_awaited_once_with(user.id, recipe_id)
