"""Recipe endpoints.

Provides:
- GET /recipes for filtered, paginated search
- GET /recipes/popular for the most favorited recipes
- GET /recipes/own and /recipes/favorites for the caller's listings
- GET /recipes/{recipe_id} for the detail view
- POST /recipes (multipart) and DELETE /recipes/{recipe_id}
- POST/DELETE /recipes/{recipe_id}/favorite
"""

from __future__ import annotations

from typing import Annotated, Any
from uuid import UUID  # noqa: TC003

import orjson
from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from pydantic import ValidationError

from foodies.api.dependencies import get_app_settings, get_recipe_service
from foodies.api.uploads import read_image
from foodies.auth.dependencies import CurrentUser
from foodies.core.config import Settings  # noqa: TC001
from foodies.core.exceptions import BadRequestException, format_validation_errors
from foodies.schemas.base import MessageResponse
from foodies.schemas.recipe import (
    CreateRecipeRequest,
    PaginatedRecipes,
    PopularRecipeItem,
    RecipeDetail,
)
from foodies.services.recipes.service import RecipeService  # noqa: TC001


router = APIRouter(prefix="/recipes", tags=["Recipes"])

RecipeServiceDep = Annotated[RecipeService, Depends(get_recipe_service)]
PageParam = Annotated[str | None, Query(description="Page number, starting at 1")]
LimitParam = Annotated[str | None, Query(description="Items per page (max 100)")]


@router.get(
    "",
    response_model=PaginatedRecipes,
    summary="Search recipes",
    description=(
        "Filter by category, area and/or ingredient id. Results are newest "
        "first. Invalid page/limit values fall back to their defaults."
    ),
)
async def search_recipes(
    recipe_service: RecipeServiceDep,
    category: Annotated[UUID | None, Query(description="Category id")] = None,
    area: Annotated[UUID | None, Query(description="Area id")] = None,
    ingredient: Annotated[UUID | None, Query(description="Ingredient id")] = None,
    page: PageParam = None,
    limit: LimitParam = None,
) -> PaginatedRecipes:
    return await recipe_service.search_recipes(
        category_id=category,
        area_id=area,
        ingredient_id=ingredient,
        page=page,
        limit=limit,
    )


@router.get(
    "/popular",
    response_model=list[PopularRecipeItem],
    summary="Most favorited recipes",
)
async def get_popular_recipes(
    recipe_service: RecipeServiceDep,
) -> list[PopularRecipeItem]:
    return await recipe_service.get_popular_recipes()


@router.get(
    "/own",
    response_model=PaginatedRecipes,
    summary="Recipes created by the current user",
)
async def get_own_recipes(
    user: CurrentUser,
    recipe_service: RecipeServiceDep,
    page: PageParam = None,
    limit: LimitParam = None,
) -> PaginatedRecipes:
    return await recipe_service.get_own_recipes(user.id, page=page, limit=limit)


@router.get(
    "/favorites",
    response_model=PaginatedRecipes,
    summary="Favorite recipes of the current user",
    description="Most recently favorited first.",
)
async def get_favorites(
    user: CurrentUser,
    recipe_service: RecipeServiceDep,
    page: PageParam = None,
    limit: LimitParam = None,
) -> PaginatedRecipes:
    return await recipe_service.get_favorites(user.id, page=page, limit=limit)


@router.get(
    "/{recipe_id}",
    response_model=RecipeDetail,
    summary="Get a recipe with its ingredients",
    responses={404: {"description": "Recipe not found"}},
)
async def get_recipe(
    recipe_id: UUID,
    recipe_service: RecipeServiceDep,
) -> RecipeDetail:
    return await recipe_service.get_recipe(recipe_id)


def parse_create_recipe_form(
    *,
    title: str | None,
    category_id: str | None,
    area_id: str | None,
    instructions: str | None,
    time: str | None,
    ingredients: str | None,
) -> CreateRecipeRequest:
    """Validate the multipart fields of a new recipe.

    ``ingredients`` is a JSON array of ``{"ingredientId", "measure"}``.

    Raises:
        BadRequestException: With every validation message joined.
    """
    raw: dict[str, Any] = {
        "title": title,
        "categoryId": category_id,
        "areaId": area_id,
        "instructions": instructions,
        "time": time or None,
    }
    if ingredients is not None:
        try:
            raw["ingredients"] = orjson.loads(ingredients)
        except orjson.JSONDecodeError as e:
            msg = "ingredients: must be a JSON array"
            raise BadRequestException(msg) from e

    try:
        return CreateRecipeRequest.model_validate(
            {k: v for k, v in raw.items() if v is not None}
        )
    except ValidationError as e:
        raise BadRequestException(format_validation_errors(e.errors())) from e


@router.post(
    "",
    response_model=RecipeDetail,
    status_code=status.HTTP_201_CREATED,
    summary="Create a recipe",
    description=(
        "Multipart form. ``ingredients`` is a JSON array of "
        "``{ingredientId, measure}``; ``thumb`` is an optional image file."
    ),
    responses={400: {"description": "Validation error or invalid image"}},
)
async def create_recipe(
    user: CurrentUser,
    recipe_service: RecipeServiceDep,
    settings: Annotated[Settings, Depends(get_app_settings)],
    title: Annotated[str | None, Form()] = None,
    category_id: Annotated[str | None, Form(alias="categoryId")] = None,
    area_id: Annotated[str | None, Form(alias="areaId")] = None,
    instructions: Annotated[str | None, Form()] = None,
    time: Annotated[str | None, Form()] = None,
    ingredients: Annotated[str | None, Form()] = None,
    thumb: Annotated[UploadFile | None, File()] = None,
) -> RecipeDetail:
    request = parse_create_recipe_form(
        title=title,
        category_id=category_id,
        area_id=area_id,
        instructions=instructions,
        time=time,
        ingredients=ingredients,
    )
    image = await read_image(thumb, settings.media.max_file_size)
    return await recipe_service.create_recipe(user.id, request, image)


@router.delete(
    "/{recipe_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an own recipe",
    responses={
        403: {"description": "Not the owner"},
        404: {"description": "Recipe not found"},
    },
)
async def delete_recipe(
    recipe_id: UUID,
    user: CurrentUser,
    recipe_service: RecipeServiceDep,
) -> None:
    await recipe_service.delete_recipe(user.id, recipe_id)


@router.post(
    "/{recipe_id}/favorite",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a recipe to favorites",
    responses={
        404: {"description": "Recipe not found"},
        409: {"description": "Recipe already in favorites"},
    },
)
async def add_favorite(
    recipe_id: UUID,
    user: CurrentUser,
    recipe_service: RecipeServiceDep,
) -> MessageResponse:
    await recipe_service.add_favorite(user.id, recipe_id)
    return MessageResponse(message="Recipe added to favorites")


@router.delete(
    "/{recipe_id}/favorite",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove a recipe from favorites",
    responses={404: {"description": "Recipe not in favorites"}},
)
async def remove_favorite(
    recipe_id: UUID,
    user: CurrentUser,
    recipe_service: RecipeServiceDep,
) -> None:
    await recipe_service.remove_favorite(user.id, recipe_id)
