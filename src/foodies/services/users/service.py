"""User profile and social graph service.

Provides:
- Current user profile with recipe/favorite/follower/following counts
- Public profiles of other users
- Avatar upload
- Follow, unfollow and follower/following listings
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import asyncpg

from foodies.core.config import Settings, get_settings
from foodies.core.exceptions import (
    BadRequestException,
    ConflictException,
    NotFoundException,
)
from foodies.database.repositories.favorites import FavoriteRepository
from foodies.database.repositories.followers import FollowerRepository
from foodies.database.repositories.recipes import RecipeRepository
from foodies.database.repositories.users import UserRepository
from foodies.observability.logging import get_logger
from foodies.schemas.user import (
    CurrentUserResponse,
    FollowersResponse,
    FollowingResponse,
    UserProfileResponse,
    UserResponse,
    UserSummaryResponse,
)
from foodies.services.media.validation import validate_image


if TYPE_CHECKING:
    from uuid import UUID

    from foodies.services.media.protocol import ImageFile, MediaStorage

logger = get_logger(__name__)

AVATARS_FOLDER = "avatars"


class UserService:
    """Profiles, avatars and follow relations."""

    def __init__(
        self,
        users: UserRepository | None = None,
        recipes: RecipeRepository | None = None,
        favorites: FavoriteRepository | None = None,
        followers: FollowerRepository | None = None,
        media: MediaStorage | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._users = users or UserRepository()
        self._recipes = recipes or RecipeRepository()
        self._favorites = favorites or FavoriteRepository()
        self._followers = followers or FollowerRepository()
        self._media = media
        self._settings = settings or get_settings()

    # =========================================================================
    # Profiles
    # =========================================================================

    async def get_current_user(self, user_id: UUID) -> CurrentUserResponse:
        """The caller's profile; the four counts are fetched concurrently."""
        user = await self._users.get_by_id(user_id)
        if user is None:
            raise NotFoundException("User not found")

        recipes_count, favorites_count, followers_count, following_count = (
            await asyncio.gather(
                self._recipes.count_by_owner(user_id),
                self._favorites.count_by_user(user_id),
                self._followers.count_followers(user_id),
                self._followers.count_following(user_id),
            )
        )
        return CurrentUserResponse(
            id=user.id,
            name=user.name,
            email=user.email,
            avatar=user.avatar,
            recipes_count=recipes_count,
            favorites_count=favorites_count,
            followers_count=followers_count,
            following_count=following_count,
        )

    async def get_user_profile(self, user_id: UUID) -> UserProfileResponse:
        user = await self._users.get_by_id(user_id)
        if user is None:
            raise NotFoundException("User not found")

        recipes_count, followers_count = await asyncio.gather(
            self._recipes.count_by_owner(user_id),
            self._followers.count_followers(user_id),
        )
        return UserProfileResponse(
            id=user.id,
            name=user.name,
            email=user.email,
            avatar=user.avatar,
            recipes_count=recipes_count,
            followers_count=followers_count,
        )

    async def update_avatar(self, user_id: UUID, image: ImageFile | None) -> UserResponse:
        """Upload a new avatar and store its URL on the user.

        Raises:
            BadRequestException: No file, or an invalid one.
            NotFoundException: User vanished in the meantime.
        """
        if image is None or not image.content:
            raise BadRequestException("No file uploaded")
        validate_image(image, self._settings.media)

        if self._media is None:
            msg = "Media storage not available"
            raise RuntimeError(msg)
        url = await self._media.upload(image, AVATARS_FOLDER)

        user = await self._users.update_avatar(user_id, url)
        if user is None:
            raise NotFoundException("User not found")

        logger.info("Avatar updated", user_id=str(user_id))
        return UserResponse.model_validate(user)

    # =========================================================================
    # Social graph
    # =========================================================================

    async def get_followers(self, user_id: UUID) -> FollowersResponse:
        if not await self._users.exists(user_id):
            raise NotFoundException("User not found")
        followers = await self._followers.list_followers(user_id)
        return FollowersResponse(
            followers=[UserSummaryResponse.model_validate(u) for u in followers],
            total=len(followers),
        )

    async def get_following(self, user_id: UUID) -> FollowingResponse:
        following = await self._followers.list_following(user_id)
        return FollowingResponse(
            following=[UserSummaryResponse.model_validate(u) for u in following],
            total=len(following),
        )

    async def follow_user(self, current_user_id: UUID, target_user_id: UUID) -> None:
        """Make the caller follow ``target_user_id``.

        Raises:
            BadRequestException: Following yourself.
            NotFoundException: Target does not exist.
            ConflictException: Already following.
        """
        if current_user_id == target_user_id:
            raise BadRequestException("Cannot follow yourself")
        if not await self._users.exists(target_user_id):
            raise NotFoundException("User not found")
        if await self._followers.exists(target_user_id, current_user_id):
            raise ConflictException("Already following this user")

        try:
            await self._followers.add(target_user_id, current_user_id)
        except asyncpg.UniqueViolationError as e:
            raise ConflictException("Already following this user") from e

        logger.info(
            "User followed",
            follower_id=str(current_user_id),
            user_id=str(target_user_id),
        )

    async def unfollow_user(self, current_user_id: UUID, target_user_id: UUID) -> None:
        if not await self._followers.remove(target_user_id, current_user_id):
            raise NotFoundException("Not following this user")
        logger.info(
            "User unfollowed",
            follower_id=str(current_user_id),
            user_id=str(target_user_id),
        )
