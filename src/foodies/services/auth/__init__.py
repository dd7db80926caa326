"""Account registration, login and session verification."""

from foodies.services.auth.service import AuthService


__all__ = ["AuthService"]
