"""Password hashing with bcrypt.

bcrypt only looks at the first 72 bytes of a password; longer input is cut
to that length before hashing and checking.
"""

from __future__ import annotations

import bcrypt


BCRYPT_MAX_BYTES = 72


def _encode(plain: str) -> bytes:
    return plain.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(plain: str, *, rounds: int = 10) -> str:
    """Return the bcrypt hash of ``plain`` as text."""
    return bcrypt.hashpw(_encode(plain), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Check ``plain`` against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(_encode(plain), hashed.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash.
        return False
