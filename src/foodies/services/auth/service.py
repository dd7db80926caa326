"""Authentication service.

Each user holds at most one session token. Login and register replace it,
logout clears it, and a bearer token is accepted only while it matches the
stored one.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING
from uuid import UUID

import asyncpg

from foodies.auth.jwt import TokenError, create_access_token, decode_token
from foodies.auth.passwords import hash_password, verify_password
from foodies.core.config import Settings, get_settings
from foodies.core.exceptions import ConflictException, UnauthorizedException
from foodies.database.repositories.users import UserRepository
from foodies.observability.logging import get_logger
from foodies.schemas.auth import AuthResponse
from foodies.schemas.user import UserResponse


if TYPE_CHECKING:
    from foodies.database.repositories.users import UserData
    from foodies.schemas.auth import LoginRequest, RegisterRequest

logger = get_logger(__name__)


class AuthService:
    """Registration, login, logout and token verification."""

    def __init__(
        self,
        users: UserRepository | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._users = users or UserRepository()
        self._settings = settings or get_settings()

    async def register(self, request: RegisterRequest) -> AuthResponse:
        """Create an account and sign the user in.

        Raises:
            ConflictException: Email already registered.
        """
        if await self._users.get_by_email(request.email) is not None:
            raise ConflictException("Email already in use")

        password_hash = await asyncio.to_thread(
            hash_password, request.password, rounds=self._settings.auth.bcrypt_rounds
        )
        try:
            user = await self._users.create(
                name=request.name,
                email=request.email,
                password_hash=password_hash,
            )
        except asyncpg.UniqueViolationError as e:
            raise ConflictException("Email already in use") from e

        logger.info("User registered", user_id=str(user.id))
        return await self._start_session(user)

    async def login(self, request: LoginRequest) -> AuthResponse:
        """Verify credentials and issue a new session token.

        Raises:
            UnauthorizedException: Unknown email or wrong password.
        """
        user = await self._users.get_by_email(request.email)
        if user is None:
            raise UnauthorizedException("Email or password is wrong")

        valid = await asyncio.to_thread(verify_password, request.password, user.password)
        if not valid:
            raise UnauthorizedException("Email or password is wrong")

        logger.info("User logged in", user_id=str(user.id))
        return await self._start_session(user)

    async def logout(self, user_id: UUID) -> None:
        await self._users.set_token(user_id, None)
        logger.info("User logged out", user_id=str(user_id))

    async def authenticate(self, token: str) -> UserData:
        """Resolve a bearer token to its user.

        The token must verify, name an existing user, and equal that user's
        stored session token.

        Raises:
            UnauthorizedException: On any of the above failing.
        """
        try:
            payload = decode_token(token, settings=self._settings)
            user_id = UUID(payload.sub)
        except (TokenError, ValueError) as e:
            raise UnauthorizedException from e

        user = await self._users.get_by_id(user_id)
        if user is None or user.token is None or user.token != token:
            raise UnauthorizedException
        return user

    async def _start_session(self, user: UserData) -> AuthResponse:
        token = create_access_token(str(user.id), settings=self._settings)
        await self._users.set_token(user.id, token)
        return AuthResponse(user=UserResponse.model_validate(user), token=token)
