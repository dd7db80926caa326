"""User endpoints.

All routes require authentication. Fixed paths (``/current``,
``/following``, ``/avatar``) are declared before ``/{user_id}``.
"""

from __future__ import annotations

from typing import Annotated
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, File, UploadFile, status

from foodies.api.dependencies import get_app_settings, get_user_service
from foodies.api.uploads import read_image
from foodies.auth.dependencies import CurrentUser
from foodies.core.config import Settings  # noqa: TC001
from foodies.schemas.base import MessageResponse
from foodies.schemas.user import (
    CurrentUserResponse,
    FollowersResponse,
    FollowingResponse,
    UserProfileResponse,
    UserResponse,
)
from foodies.services.users.service import UserService  # noqa: TC001


router = APIRouter(prefix="/users", tags=["Users"])

UserServiceDep = Annotated[UserService, Depends(get_user_service)]


@router.get(
    "/current",
    response_model=CurrentUserResponse,
    summary="Get the current user with stats",
)
async def get_current_user_profile(
    user: CurrentUser,
    user_service: UserServiceDep,
) -> CurrentUserResponse:
    return await user_service.get_current_user(user.id)


@router.get(
    "/following",
    response_model=FollowingResponse,
    summary="Users the current user follows",
)
async def get_following(
    user: CurrentUser,
    user_service: UserServiceDep,
) -> FollowingResponse:
    return await user_service.get_following(user.id)


@router.patch(
    "/avatar",
    response_model=UserResponse,
    summary="Upload a new avatar",
    description="Multipart upload; JPEG, PNG, GIF or WebP up to 5MB.",
)
async def update_avatar(
    user: CurrentUser,
    user_service: UserServiceDep,
    settings: Annotated[Settings, Depends(get_app_settings)],
    avatar: Annotated[UploadFile | None, File()] = None,
) -> UserResponse:
    image = await read_image(avatar, settings.media.max_file_size)
    return await user_service.update_avatar(user.id, image)


@router.get(
    "/{user_id}",
    response_model=UserProfileResponse,
    summary="Get a user profile",
    responses={404: {"description": "User not found"}},
)
async def get_user(
    user_id: UUID,
    _user: CurrentUser,
    user_service: UserServiceDep,
) -> UserProfileResponse:
    return await user_service.get_user_profile(user_id)


@router.get(
    "/{user_id}/followers",
    response_model=FollowersResponse,
    summary="Followers of a user",
    responses={404: {"description": "User not found"}},
)
async def get_followers(
    user_id: UUID,
    _user: CurrentUser,
    user_service: UserServiceDep,
) -> FollowersResponse:
    return await user_service.get_followers(user_id)


@router.post(
    "/{user_id}/follow",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Follow a user",
    responses={
        400: {"description": "Cannot follow yourself"},
        404: {"description": "User not found"},
        409: {"description": "Already following this user"},
    },
)
async def follow_user(
    user_id: UUID,
    user: CurrentUser,
    user_service: UserServiceDep,
) -> MessageResponse:
    await user_service.follow_user(user.id, user_id)
    return MessageResponse(message="Successfully followed user")


@router.delete(
    "/{user_id}/follow",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Unfollow a user",
    responses={404: {"description": "Not following this user"}},
)
async def unfollow_user(
    user_id: UUID,
    user: CurrentUser,
    user_service: UserServiceDep,
) -> None:
    await user_service.unfollow_user(user.id, user_id)
