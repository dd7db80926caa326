"""Authentication: JWT session tokens, password hashing and FastAPI guards."""

from foodies.auth.jwt import create_access_token, decode_token
from foodies.auth.passwords import hash_password, verify_password


__all__ = [
    "create_access_token",
    "decode_token",
    "hash_password",
    "verify_password",
]
