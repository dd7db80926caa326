"""Reference data service: categories, areas, ingredients and testimonials."""

from __future__ import annotations

from foodies.database.repositories.reference import ReferenceRepository
from foodies.database.repositories.testimonials import TestimonialRepository
from foodies.schemas.reference import (
    AreaResponse,
    CategoryResponse,
    IngredientResponse,
    TestimonialResponse,
)


class CatalogService:
    """Read-only listings backing the filter dropdowns and landing page."""

    def __init__(
        self,
        reference: ReferenceRepository | None = None,
        testimonials: TestimonialRepository | None = None,
    ) -> None:
        self._reference = reference or ReferenceRepository()
        self._testimonials = testimonials or TestimonialRepository()

    async def list_categories(self) -> list[CategoryResponse]:
        return [CategoryResponse.model_validate(c) for c in await self._reference.list_categories()]

    async def list_areas(self) -> list[AreaResponse]:
        return [AreaResponse.model_validate(a) for a in await self._reference.list_areas()]

    async def list_ingredients(self) -> list[IngredientResponse]:
        return [
            IngredientResponse.model_validate(i)
            for i in await self._reference.list_ingredients()
        ]

    async def list_testimonials(self) -> list[TestimonialResponse]:
        """Newest first, each with its author's public identity."""
        return [
            TestimonialResponse.model_validate(t)
            for t in await self._testimonials.list_all()
        ]
