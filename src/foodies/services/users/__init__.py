"""User profiles and follow relations."""

from foodies.services.users.service import UserService


__all__ = ["UserService"]
