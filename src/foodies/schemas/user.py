"""User and social graph response schemas."""

from __future__ import annotations

from uuid import UUID  # noqa: TC003

from pydantic import Field

from foodies.schemas.base import APIResponse


class UserSummaryResponse(APIResponse):
    """Public identity of a user."""

    id: UUID
    name: str
    avatar: str | None = None


class UserResponse(UserSummaryResponse):
    """User as returned by the auth endpoints."""

    email: str


class UserProfileResponse(UserResponse):
    """Another user's profile with public stats."""

    recipes_count: int = Field(..., description="Recipes owned by the user")
    followers_count: int = Field(..., description="Users following this user")


class CurrentUserResponse(UserProfileResponse):
    """The caller's own profile with private stats."""

    favorites_count: int = Field(..., description="Recipes the user has favorited")
    following_count: int = Field(..., description="Users this user follows")


class FollowersResponse(APIResponse):
    """Followers of a user."""

    followers: list[UserSummaryResponse]
    total: int


class FollowingResponse(APIResponse):
    """Users followed by the caller."""

    following: list[UserSummaryResponse]
    total: int
