"""Recipe queries, mutations and favorites."""

from foodies.services.recipes.pagination import Pagination, resolve_pagination
from foodies.services.recipes.service import RecipeService


__all__ = [
    "Pagination",
    "RecipeService",
    "resolve_pagination",
]
