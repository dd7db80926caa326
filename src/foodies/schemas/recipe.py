"""Recipe request/response schemas."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003
from uuid import UUID

from pydantic import Field, field_validator

from foodies.schemas.base import APIRequest, APIResponse
from foodies.schemas.reference import (  # noqa: TC001
    AreaResponse,
    CategoryResponse,
    IngredientResponse,
)
from foodies.schemas.user import UserSummaryResponse  # noqa: TC001


# =============================================================================
# Requests
# =============================================================================


class RecipeIngredientInput(APIRequest):
    """One ingredient line of a new recipe."""

    ingredient_id: UUID
    measure: str = Field(..., min_length=1, max_length=100)


class CreateRecipeRequest(APIRequest):
    """Fields of a new recipe (the thumbnail arrives as a separate file part)."""

    title: str = Field(..., min_length=3, max_length=100)
    category_id: UUID
    area_id: UUID
    instructions: str = Field(..., min_length=10)
    time: str | None = Field(default=None, max_length=50)
    ingredients: list[RecipeIngredientInput] = Field(..., min_length=1)

    @field_validator("ingredients")
    @classmethod
    def _unique_ingredients(
        cls, value: list[RecipeIngredientInput]
    ) -> list[RecipeIngredientInput]:
        seen: set[UUID] = set()
        for line in value:
            if line.ingredient_id in seen:
                msg = f"Duplicate ingredient {line.ingredient_id}"
                raise ValueError(msg)
            seen.add(line.ingredient_id)
        return value


# =============================================================================
# Responses
# =============================================================================


class RecipeListItem(APIResponse):
    """Recipe with owner, category and area."""

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
    owner: UserSummaryResponse
    category: CategoryResponse
    area: AreaResponse


class PopularRecipeItem(RecipeListItem):
    """List item ranked by favorites."""

    favorites_count: int


class RecipeIngredientResponse(APIResponse):
    id: UUID
    ingredient_id: UUID
    measure: str
    ingredient: IngredientResponse


class RecipeDetail(RecipeListItem):
    """Recipe with its ingredient lines."""

    ingredients: list[RecipeIngredientResponse]


class PaginatedRecipes(APIResponse):
    """A page of recipes plus paging metadata."""

    recipes: list[RecipeListItem]
    total: int = Field(..., description="Matches across all pages")
    page: int
    limit: int
    total_pages: int
