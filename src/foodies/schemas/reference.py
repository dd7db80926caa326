"""Reference data response schemas."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003
from uuid import UUID  # noqa: TC003

from foodies.schemas.base import APIResponse
from foodies.schemas.user import UserSummaryResponse  # noqa: TC001


class CategoryResponse(APIResponse):
    id: UUID
    name: str
    thumb: str | None = None


class AreaResponse(APIResponse):
    id: UUID
    name: str


class IngredientResponse(APIResponse):
    id: UUID
    name: str
    description: str | None = None
    img: str | None = None


class TestimonialResponse(APIResponse):
    """Testimonial with its author."""

    id: UUID
    testimonial: str
    user_id: UUID
    created_at: datetime
    user: UserSummaryResponse
