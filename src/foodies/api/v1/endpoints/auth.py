"""Authentication endpoints.

Provides:
- POST /auth/register for creating an account
- POST /auth/login for exchanging credentials for a session token
- POST /auth/logout for revoking the current session
- GET /auth/current for the authenticated user
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status

from foodies.api.dependencies import get_auth_service
from foodies.auth.dependencies import CurrentUser
from foodies.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from foodies.schemas.user import UserResponse
from foodies.services.auth.service import AuthService  # noqa: TC001


router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    responses={
        400: {"description": "Validation error"},
        409: {"description": "Email already in use"},
    },
)
async def register(
    body: RegisterRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthResponse:
    return await auth_service.register(body)


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Log in with email and password",
    responses={401: {"description": "Email or password is wrong"}},
)
async def login(
    body: LoginRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthResponse:
    return await auth_service.login(body)


@router.post(
    "/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Log out",
    description="Clears the stored session token; the bearer token stops working.",
)
async def logout(
    user: CurrentUser,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> None:
    await auth_service.logout(user.id)


@router.get(
    "/current",
    response_model=UserResponse,
    summary="Get the authenticated user",
)
async def current(user: CurrentUser) -> UserResponse:
    return UserResponse.model_validate(user)
