"""Authentication request/response schemas."""

from __future__ import annotations

from pydantic import EmailStr, Field

from foodies.schemas.base import APIRequest, APIResponse
from foodies.schemas.user import UserResponse  # noqa: TC001


class RegisterRequest(APIRequest):
    """Account registration."""

    name: str = Field(..., min_length=2, max_length=50, description="Display name")
    email: EmailStr = Field(..., description="Login email, unique per account")
    password: str = Field(..., min_length=6, description="Password (min 6 characters)")


class LoginRequest(APIRequest):
    """Email and password login."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class AuthResponse(APIResponse):
    """User plus the freshly issued session token."""

    user: UserResponse
    token: str
