"""API request and response schemas."""

from foodies.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from foodies.schemas.base import APIRequest, APIResponse, MessageResponse
from foodies.schemas.recipe import (
    CreateRecipeRequest,
    PaginatedRecipes,
    PopularRecipeItem,
    RecipeDetail,
    RecipeIngredientInput,
    RecipeListItem,
)
from foodies.schemas.reference import (
    AreaResponse,
    CategoryResponse,
    IngredientResponse,
    TestimonialResponse,
)
from foodies.schemas.user import (
    CurrentUserResponse,
    FollowersResponse,
    FollowingResponse,
    UserProfileResponse,
    UserResponse,
    UserSummaryResponse,
)


__all__ = [
    "APIRequest",
    "APIResponse",
    "AreaResponse",
    "AuthResponse",
    "CategoryResponse",
    "CreateRecipeRequest",
    "CurrentUserResponse",
    "FollowersResponse",
    "FollowingResponse",
    "IngredientResponse",
    "LoginRequest",
    "MessageResponse",
    "PaginatedRecipes",
    "PopularRecipeItem",
    "RecipeDetail",
    "RecipeIngredientInput",
    "RecipeListItem",
    "RegisterRequest",
    "TestimonialResponse",
    "UserProfileResponse",
    "UserResponse",
    "UserSummaryResponse",
]
