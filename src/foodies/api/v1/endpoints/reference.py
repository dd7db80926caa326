"""Reference data endpoints (no authentication required).

Provides:
- GET /categories, /areas and /ingredients, each ordered by name
- GET /testimonials, newest first
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from foodies.api.dependencies import get_catalog_service
from foodies.schemas.reference import (
    AreaResponse,
    CategoryResponse,
    IngredientResponse,
    TestimonialResponse,
)
from foodies.services.catalog.service import CatalogService  # noqa: TC001


router = APIRouter(tags=["Reference"])

CatalogServiceDep = Annotated[CatalogService, Depends(get_catalog_service)]


@router.get("/categories", response_model=list[CategoryResponse], summary="List categories")
async def list_categories(catalog: CatalogServiceDep) -> list[CategoryResponse]:
    return await catalog.list_categories()


@router.get("/areas", response_model=list[AreaResponse], summary="List cuisine areas")
async def list_areas(catalog: CatalogServiceDep) -> list[AreaResponse]:
    return await catalog.list_areas()


@router.get(
    "/ingredients",
    response_model=list[IngredientResponse],
    summary="List ingredients",
)
async def list_ingredients(catalog: CatalogServiceDep) -> list[IngredientResponse]:
    return await catalog.list_ingredients()


@router.get(
    "/testimonials",
    response_model=list[TestimonialResponse],
    summary="List testimonials",
)
async def list_testimonials(catalog: CatalogServiceDep) -> list[TestimonialResponse]:
    return await catalog.list_testimonials()
