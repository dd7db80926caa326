"""Repository classes for PostgreSQL data access."""

from foodies.database.repositories.favorites import FavoriteRepository
from foodies.database.repositories.followers import FollowerRepository
from foodies.database.repositories.recipes import RecipeRepository
from foodies.database.repositories.reference import ReferenceRepository
from foodies.database.repositories.testimonials import TestimonialRepository
from foodies.database.repositories.users import UserRepository


__all__ = [
    "FavoriteRepository",
    "FollowerRepository",
    "RecipeRepository",
    "ReferenceRepository",
    "TestimonialRepository",
    "UserRepository",
]
