"""JWT session tokens.

Tokens are HS256-signed with ``JWT_SECRET_KEY`` and carry the user id in
``sub``. A valid signature is not enough to authenticate: the token must
also equal the one stored on the user row (see ``foodies.auth.dependencies``).
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from uuid import uuid4

from jose import jwt
from jose.exceptions import ExpiredSignatureError, JWTError
from pydantic import BaseModel, ValidationError

from foodies.core.config import Settings, get_settings
from foodies.observability.logging import get_logger


logger = get_logger(__name__)


class TokenPayload(BaseModel):
    """Decoded JWT claims."""

    sub: str
    exp: datetime
    iat: datetime
    jti: str | None = None


class TokenError(Exception):
    """Base exception for token-related errors."""


class TokenExpiredError(TokenError):
    """Raised when a token has expired."""


class TokenInvalidError(TokenError):
    """Raised when a token is malformed or its signature does not verify."""


def create_access_token(
    subject: str,
    *,
    expires_delta: timedelta | None = None,
    settings: Settings | None = None,
) -> str:
    """Sign a session token for ``subject`` (a user id).

    Each token carries a random ``jti`` so two logins in the same second
    still produce distinct tokens.
    """
    settings = settings or get_settings()
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.auth.jwt.access_token_expire_minutes)

    now = datetime.now(UTC)
    payload = {
        "sub": subject,
        "iat": now,
        "exp": now + expires_delta,
        "jti": uuid4().hex,
    }
    return jwt.encode(
        payload,
        settings.JWT_SECRET_KEY,
        algorithm=settings.auth.jwt.algorithm,
    )


def decode_token(token: str, *, settings: Settings | None = None) -> TokenPayload:
    """Verify signature and expiry and return the claims.

    Raises:
        TokenExpiredError: If the token has expired.
        TokenInvalidError: If the token is invalid.
    """
    settings = settings or get_settings()
    try:
        claims = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.auth.jwt.algorithm],
        )
        return TokenPayload(**claims)
    except ExpiredSignatureError as e:
        logger.debug("Token expired")
        msg = "Token has expired"
        raise TokenExpiredError(msg) from e
    except (JWTError, ValidationError) as e:
        logger.debug("Invalid token", error=str(e))
        msg = "Invalid token"
        raise TokenInvalidError(msg) from e
