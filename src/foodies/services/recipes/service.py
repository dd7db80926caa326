"""Recipe service.

Provides:
- Filtered, paginated recipe search and the owner's own recipes
- Popularity ranking by favorite count
- Recipe detail, creation (image upload + atomic insert) and deletion
- Favorites: add, remove and the favorites listing ordered by recency
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import asyncpg

from foodies.core.config import Settings, get_settings
from foodies.core.exceptions import (
    BadRequestException,
    ConflictException,
    ForbiddenException,
    NotFoundException,
)
from foodies.database.repositories.favorites import FavoriteRepository
from foodies.database.repositories.recipes import NewRecipe, RecipeRepository
from foodies.observability.logging import get_logger
from foodies.schemas.recipe import (
    PaginatedRecipes,
    PopularRecipeItem,
    RecipeDetail,
    RecipeListItem,
)
from foodies.services.media.validation import validate_image
from foodies.services.recipes.pagination import Pagination, resolve_pagination


if TYPE_CHECKING:
    from uuid import UUID

    from foodies.database.repositories.recipes import RecipeData
    from foodies.schemas.recipe import CreateRecipeRequest
    from foodies.services.media.protocol import ImageFile, MediaStorage

logger = get_logger(__name__)

RECIPES_FOLDER = "recipes"


class RecipeService:
    """Recipe queries and mutations.

    Example:
        ```python
        service = RecipeService(recipes=RecipeRepository(pool), ...)
        page = await service.search_recipes(category_id=cid, page="2")
        ```
    """

    def __init__(
        self,
        recipes: RecipeRepository | None = None,
        favorites: FavoriteRepository | None = None,
        media: MediaStorage | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._recipes = recipes or RecipeRepository()
        self._favorites = favorites or FavoriteRepository()
        self._media = media
        self._settings = settings or get_settings()

    def _paginate(self, page: str | int | None, limit: str | int | None) -> Pagination:
        return resolve_pagination(
            page,
            limit,
            default_limit=self._settings.pagination.default_limit,
            max_limit=self._settings.pagination.max_limit,
        )

    @staticmethod
    def _page_response(
        recipes: list[RecipeData], total: int, window: Pagination
    ) -> PaginatedRecipes:
        return PaginatedRecipes(
            recipes=[RecipeListItem.model_validate(r) for r in recipes],
            total=total,
            page=window.page,
            limit=window.limit,
            total_pages=window.total_pages(total),
        )

    # =========================================================================
    # Queries
    # =========================================================================

    async def search_recipes(
        self,
        *,
        category_id: UUID | None = None,
        area_id: UUID | None = None,
        ingredient_id: UUID | None = None,
        page: str | int | None = None,
        limit: str | int | None = None,
    ) -> PaginatedRecipes:
        """Search recipes, newest first.

        The ingredient filter is resolved first to the set of recipe ids using
        that ingredient, then intersected with the category/area filters.
        """
        window = self._paginate(page, limit)

        recipe_ids: list[UUID] | None = None
        if ingredient_id is not None:
            recipe_ids = await self._recipes.find_ids_by_ingredient(ingredient_id)
            if not recipe_ids:
                return self._page_response([], 0, window)

        recipes, total = await self._recipes.search(
            limit=window.limit,
            offset=window.offset,
            category_id=category_id,
            area_id=area_id,
            recipe_ids=recipe_ids,
        )
        return self._page_response(recipes, total, window)

    async def get_own_recipes(
        self,
        owner_id: UUID,
        *,
        page: str | int | None = None,
        limit: str | int | None = None,
    ) -> PaginatedRecipes:
        window = self._paginate(page, limit)
        recipes, total = await self._recipes.search(
            limit=window.limit,
            offset=window.offset,
            owner_id=owner_id,
        )
        return self._page_response(recipes, total, window)

    async def get_popular_recipes(self) -> list[PopularRecipeItem]:
        """Most favorited recipes; recomputed on every call."""
        recipes = await self._recipes.get_popular(self._settings.pagination.popular_limit)
        return [PopularRecipeItem.model_validate(r) for r in recipes]

    async def get_recipe(self, recipe_id: UUID) -> RecipeDetail:
        recipe = await self._recipes.get_detail(recipe_id)
        if recipe is None:
            raise NotFoundException("Recipe not found")
        return RecipeDetail.model_validate(recipe)

    # =========================================================================
    # Mutations
    # =========================================================================

    async def create_recipe(
        self,
        owner_id: UUID,
        request: CreateRecipeRequest,
        image: ImageFile | None = None,
    ) -> RecipeDetail:
        """Create a recipe owned by ``owner_id``.

        The thumbnail is uploaded before anything is written; if the upload
        fails nothing is persisted. The recipe and its ingredient lines are
        then inserted in a single transaction.

        Raises:
            BadRequestException: Invalid image, or unknown category, area or
                ingredient.
            MediaStorageError: If the thumbnail upload fails.
        """
        thumb: str | None = None
        if image is not None:
            validate_image(image, self._settings.media)
            thumb = await self._require_media().upload(image, RECIPES_FOLDER)

        try:
            recipe_id = await self._recipes.create(
                NewRecipe(
                    title=request.title,
                    instructions=request.instructions,
                    time=request.time,
                    thumb=thumb,
                    owner_id=owner_id,
                    category_id=request.category_id,
                    area_id=request.area_id,
                    ingredients=[
                        (line.ingredient_id, line.measure) for line in request.ingredients
                    ],
                )
            )
        except asyncpg.ForeignKeyViolationError as e:
            logger.info("Recipe references unknown rows", detail=str(e))
            if thumb:
                await self._release_media(thumb)
            msg = "Invalid category, area or ingredient reference"
            raise BadRequestException(msg) from e

        logger.info("Recipe created", recipe_id=str(recipe_id), owner_id=str(owner_id))
        return await self.get_recipe(recipe_id)

    async def delete_recipe(self, requester_id: UUID, recipe_id: UUID) -> None:
        """Delete a recipe owned by ``requester_id``.

        Ingredient lines and favorites go with it. The thumbnail is released
        best-effort.

        Raises:
            NotFoundException: Recipe does not exist.
            ForbiddenException: Requester is not the owner.
        """
        recipe = await self._recipes.get_by_id(recipe_id)
        if recipe is None:
            raise NotFoundException("Recipe not found")
        if recipe.owner_id != requester_id:
            raise ForbiddenException("You can only delete your own recipes")

        if recipe.thumb:
            await self._release_media(recipe.thumb)

        await self._recipes.delete(recipe_id)
        logger.info("Recipe deleted", recipe_id=str(recipe_id))

    # =========================================================================
    # Favorites
    # =========================================================================

    async def get_favorites(
        self,
        user_id: UUID,
        *,
        page: str | int | None = None,
        limit: str | int | None = None,
    ) -> PaginatedRecipes:
        """The user's favorites, most recently added first.

        Paging runs over the favorites themselves; the recipes for the page
        are then bulk loaded and put back into favorite order. Ids whose
        recipe no longer exists are dropped from the page.
        """
        window = self._paginate(page, limit)
        recipe_ids, total = await self._favorites.page_recipe_ids(
            user_id, limit=window.limit, offset=window.offset
        )

        by_id = {r.id: r for r in await self._recipes.get_by_ids(recipe_ids)}
        ordered = [by_id[rid] for rid in recipe_ids if rid in by_id]
        return self._page_response(ordered, total, window)

    async def add_favorite(self, user_id: UUID, recipe_id: UUID) -> None:
        """Raises NotFoundException or ConflictException."""
        if not await self._recipes.exists(recipe_id):
            raise NotFoundException("Recipe not found")
        if await self._favorites.exists(user_id, recipe_id):
            raise ConflictException("Recipe already in favorites")

        try:
            await self._favorites.add(user_id, recipe_id)
        except asyncpg.UniqueViolationError as e:
            raise ConflictException("Recipe already in favorites") from e
        except asyncpg.ForeignKeyViolationError as e:
            # Recipe deleted between the existence check and the insert.
            raise NotFoundException("Recipe not found") from e

        logger.info("Favorite added", user_id=str(user_id), recipe_id=str(recipe_id))

    async def remove_favorite(self, user_id: UUID, recipe_id: UUID) -> None:
        if not await self._favorites.remove(user_id, recipe_id):
            raise NotFoundException("Recipe not in favorites")
        logger.info("Favorite removed", user_id=str(user_id), recipe_id=str(recipe_id))

    # =========================================================================
    # Helpers
    # =========================================================================

    def _require_media(self) -> MediaStorage:
        if self._media is None:
            msg = "Media storage not available"
            raise RuntimeError(msg)
        return self._media

    async def _release_media(self, url: str) -> None:
        if self._media is None:
            return
        try:
            await self._media.delete(url)
        except Exception:
            logger.exception("Failed to release media", url=url)
