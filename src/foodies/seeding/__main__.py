"""Seed the database from legacy JSON exports.

Usage:
    python -m foodies.seeding --data-dir seed/ [--images-dir seed/category_images]
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from foodies.core.config import Settings, get_settings
from foodies.database.connection import close_database_pool, init_database_pool
from foodies.database.repositories import (
    RecipeRepository,
    ReferenceRepository,
    TestimonialRepository,
    UserRepository,
)
from foodies.database.schema import create_schema
from foodies.observability.logging import get_logger, setup_logging
from foodies.seeding.seeder import Seeder, SeedReport
from foodies.services.media.cloudinary import CloudinaryClient


logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="foodies-seed",
        description="Create the schema and import seed data.",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        required=True,
        help="Directory holding users.json, categories.json, ... files",
    )
    parser.add_argument(
        "--images-dir",
        type=Path,
        default=None,
        help="Directory of category images (defaults to seed.category_images_dir)",
    )
    return parser


async def seed(
    data_dir: Path, images_dir: Path | None, settings: Settings
) -> SeedReport:
    pool = await init_database_pool(settings)
    media = CloudinaryClient(settings=settings)
    await media.initialize()
    try:
        await create_schema(pool)
        seeder = Seeder(
            users=UserRepository(pool),
            reference=ReferenceRepository(pool),
            recipes=RecipeRepository(pool),
            testimonials=TestimonialRepository(pool),
            media=media if media.configured else None,
            settings=settings,
        )
        return await seeder.run(data_dir, images_dir)
    finally:
        await media.shutdown()
        await close_database_pool()


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(
        log_level=settings.logging.level,
        log_format=settings.logging.format,
        is_development=settings.is_development,
    )

    images_dir = args.images_dir
    if images_dir is None and settings.seed.category_images_dir:
        images_dir = Path(settings.seed.category_images_dir)

    try:
        asyncio.run(seed(args.data_dir, images_dir, settings))
    except Exception:
        logger.exception("Error seeding database")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
