"""Idempotent database seeding from legacy JSON exports.

Seed files (``users.json``, ``categories.json``, ``areas.json``,
``ingredients.json``, ``recipes.json``, ``testimonials.json``) are read
from a data directory. Every row keeps the UUID derived from its legacy
id, so re-running the seeder skips rows that already exist.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import TYPE_CHECKING, Any

import orjson
from pydantic import BaseModel

from foodies.auth.passwords import hash_password
from foodies.database.repositories import (
    RecipeRepository,
    ReferenceRepository,
    TestimonialRepository,
    UserRepository,
)
from foodies.database.repositories.recipes import NewRecipe
from foodies.database.repositories.reference import (
    AreaData,
    CategoryData,
    IngredientData,
)
from foodies.observability.logging import get_logger
from foodies.seeding.identity import legacy_id, mongo_id_to_uuid
from foodies.services.media.exceptions import MediaStorageError
from foodies.services.media.protocol import ImageFile


if TYPE_CHECKING:
    from uuid import UUID

    from foodies.core.config import Settings
    from foodies.services.media.protocol import MediaStorage


logger = get_logger(__name__)

CATEGORIES_FOLDER = "categories"

# Category name -> image file name (the dessert image is plural).
CATEGORY_IMAGE_MAP: dict[str, str] = {
    "Seafood": "Seafood.jpg",
    "Lamb": "Lamb.jpg",
    "Starter": "Starter.jpg",
    "Chicken": "Chicken.jpg",
    "Beef": "Beef.jpg",
    "Dessert": "Desserts.jpg",
    "Vegan": "Vegan.jpg",
    "Pork": "Pork.jpg",
    "Vegetarian": "Vegetarian.jpg",
    "Miscellaneous": "Miscellaneous.jpg",
    "Pasta": "Pasta.jpg",
    "Breakfast": "Breakfast.jpg",
    "Side": "Side.jpg",
    "Goat": "Goat.jpg",
    "Soup": "Soup.jpg",
}


class SeedReport(BaseModel):
    """Rows created per table during one run."""

    users: int = 0
    categories: int = 0
    category_thumbs: int = 0
    areas: int = 0
    ingredients: int = 0
    recipes: int = 0
    recipes_skipped: int = 0
    testimonials: int = 0


def load_seed_file(data_dir: Path, name: str) -> list[dict[str, Any]]:
    """Read ``<data_dir>/<name>.json``; a missing file yields no records."""
    path = data_dir / f"{name}.json"
    if not path.exists():
        logger.warning("Seed file not found", path=str(path))
        return []
    records = orjson.loads(path.read_bytes())
    if not isinstance(records, list):
        msg = f"{path} must contain a JSON array"
        raise ValueError(msg)
    return records


class Seeder:
    """Populates the store from seed files in dependency order.

    Example:
        ```python
        seeder = Seeder(users=UserRepository(pool), ..., media=media_client)
        report = await seeder.run(Path("seed"), images_dir=Path("images"))
        ```
    """

    def __init__(
        self,
        *,
        users: UserRepository | None = None,
        reference: ReferenceRepository | None = None,
        recipes: RecipeRepository | None = None,
        testimonials: TestimonialRepository | None = None,
        media: MediaStorage | None = None,
        settings: Settings,
    ) -> None:
        self._users = users or UserRepository()
        self._reference = reference or ReferenceRepository()
        self._recipes = recipes or RecipeRepository()
        self._testimonials = testimonials or TestimonialRepository()
        self._media = media
        self._settings = settings

        self._user_ids: dict[str, UUID] = {}
        self._category_ids: dict[str, UUID] = {}
        self._area_ids: dict[str, UUID] = {}
        self._ingredient_ids: dict[str, UUID] = {}

    async def run(self, data_dir: Path, images_dir: Path | None = None) -> SeedReport:
        report = SeedReport()
        logger.info("Starting database seed", data_dir=str(data_dir))

        await self.seed_users(load_seed_file(data_dir, "users"), report)
        await self.seed_categories(
            load_seed_file(data_dir, "categories"), report, images_dir
        )
        await self.seed_areas(load_seed_file(data_dir, "areas"), report)
        await self.seed_ingredients(load_seed_file(data_dir, "ingredients"), report)
        await self.seed_recipes(load_seed_file(data_dir, "recipes"), report)
        await self.seed_testimonials(load_seed_file(data_dir, "testimonials"), report)

        logger.info("Database seed complete", **report.model_dump())
        return report

    # =========================================================================
    # Steps
    # =========================================================================

    async def seed_users(self, records: list[dict[str, Any]], report: SeedReport) -> None:
        password_hash: str | None = None
        for record in records:
            key = legacy_id(record["_id"])
            user_id = mongo_id_to_uuid(key)
            self._user_ids[key] = user_id

            if await self._users.exists(user_id):
                continue
            if password_hash is None:
                password_hash = await asyncio.to_thread(
                    hash_password,
                    self._settings.seed.default_password,
                    rounds=self._settings.auth.bcrypt_rounds,
                )
            await self._users.create(
                user_id=user_id,
                name=record["name"],
                email=record["email"],
                password_hash=password_hash,
                avatar=record.get("avatar") or None,
            )
            report.users += 1
        logger.info("Users processed", total=len(records), created=report.users)

    async def seed_categories(
        self,
        records: list[dict[str, Any]],
        report: SeedReport,
        images_dir: Path | None = None,
    ) -> None:
        for record in records:
            name = record["name"]
            category_id = mongo_id_to_uuid(record["_id"])
            self._category_ids[name] = category_id

            existing = await self._reference.get_category(category_id)
            if existing is None:
                thumb = await self._upload_category_image(name, images_dir)
                await self._reference.insert_category(
                    CategoryData(id=category_id, name=name, thumb=thumb)
                )
                report.categories += 1
            elif not existing.thumb:
                thumb = await self._upload_category_image(name, images_dir)
                if thumb:
                    await self._reference.set_category_thumb(category_id, thumb)
                    report.category_thumbs += 1
                    logger.info("Category image backfilled", category=name)
        logger.info(
            "Categories processed", total=len(records), created=report.categories
        )

    async def seed_areas(self, records: list[dict[str, Any]], report: SeedReport) -> None:
        for record in records:
            area_id = mongo_id_to_uuid(record["_id"])
            self._area_ids[record["name"]] = area_id
            if await self._reference.insert_area(AreaData(id=area_id, name=record["name"])):
                report.areas += 1
        logger.info("Areas processed", total=len(records), created=report.areas)

    async def seed_ingredients(
        self, records: list[dict[str, Any]], report: SeedReport
    ) -> None:
        for record in records:
            key = legacy_id(record["_id"])
            ingredient_id = mongo_id_to_uuid(key)
            self._ingredient_ids[key] = ingredient_id
            ingredient = IngredientData(
                id=ingredient_id,
                name=record["name"],
                description=record.get("desc") or None,
                img=record.get("img") or None,
            )
            if await self._reference.insert_ingredient(ingredient):
                report.ingredients += 1
        logger.info(
            "Ingredients processed", total=len(records), created=report.ingredients
        )

    async def seed_recipes(self, records: list[dict[str, Any]], report: SeedReport) -> None:
        for record in records:
            recipe_id = mongo_id_to_uuid(record["_id"])
            if await self._recipes.exists(recipe_id):
                continue

            owner_id = self._user_ids.get(legacy_id(record["owner"]))
            category_id = self._category_ids.get(record.get("category", ""))
            area_id = self._area_ids.get(record.get("area", ""))
            if owner_id is None or category_id is None or area_id is None:
                logger.warning(
                    "Skipping recipe with missing reference", title=record.get("title")
                )
                report.recipes_skipped += 1
                continue

            await self._recipes.create(
                NewRecipe(
                    id=recipe_id,
                    title=record["title"],
                    instructions=record["instructions"],
                    owner_id=owner_id,
                    category_id=category_id,
                    area_id=area_id,
                    thumb=record.get("thumb") or None,
                    time=f"{record['time']} min" if record.get("time") else None,
                    ingredients=self._resolve_ingredients(record.get("ingredients", [])),
                )
            )
            report.recipes += 1
        logger.info(
            "Recipes processed",
            total=len(records),
            created=report.recipes,
            skipped=report.recipes_skipped,
        )

    async def seed_testimonials(
        self, records: list[dict[str, Any]], report: SeedReport
    ) -> None:
        for record in records:
            user_id = self._user_ids.get(legacy_id(record["owner"]))
            if user_id is None:
                logger.warning("Skipping testimonial with missing user reference")
                continue
            created = await self._testimonials.insert(
                mongo_id_to_uuid(record["_id"]), record["testimonial"], user_id
            )
            if created:
                report.testimonials += 1
        logger.info(
            "Testimonials processed", total=len(records), created=report.testimonials
        )

    # =========================================================================
    # Helpers
    # =========================================================================

    def _resolve_ingredients(self, lines: list[dict[str, Any]]) -> list[tuple[UUID, str]]:
        """Map legacy ingredient lines, dropping unknown and repeated ids."""
        resolved: dict[UUID, str] = {}
        for line in lines:
            ingredient_id = self._ingredient_ids.get(str(line.get("id", "")))
            if ingredient_id is None or ingredient_id in resolved:
                continue
            resolved[ingredient_id] = str(line.get("measure", ""))[:100]
        return list(resolved.items())

    async def _upload_category_image(
        self, name: str, images_dir: Path | None
    ) -> str | None:
        file_name = CATEGORY_IMAGE_MAP.get(name)
        if self._media is None or images_dir is None or file_name is None:
            return None
        path = images_dir / file_name
        if not path.is_file():
            return None

        image = ImageFile(
            content=path.read_bytes(), content_type="image/jpeg", filename=file_name
        )
        try:
            url = await self._media.upload(image, CATEGORIES_FOLDER)
        except MediaStorageError:
            logger.opt(exception=True).warning(
                "Failed to upload category image", category=name
            )
            return None
        logger.info("Category image uploaded", category=name)
        return url
