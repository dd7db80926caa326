"""FastAPI security dependencies.

``get_current_user`` guards every authenticated route: it extracts the
bearer token and resolves it to the stored user through ``AuthService``.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from foodies.api.dependencies import get_auth_service
from foodies.core.exceptions import UnauthorizedException
from foodies.database.repositories.users import UserData
from foodies.observability.logging import bind_context
from foodies.services.auth.service import AuthService  # noqa: TC001


bearer_scheme = HTTPBearer(
    scheme_name="bearerAuth",
    description="Session token returned by /auth/login or /auth/register",
    auto_error=False,
)


async def get_current_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> str:
    """Return the raw bearer token or reject the request."""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedException
    return credentials.credentials


async def get_current_user(
    token: Annotated[str, Depends(get_current_token)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> UserData:
    """Resolve the bearer token to its user.

    Raises:
        UnauthorizedException: 401 "Not authorized" on any failure.
    """
    user = await auth_service.authenticate(token)
    bind_context(user_id=str(user.id))
    return user


CurrentUser = Annotated[UserData, Depends(get_current_user)]
