"""API v1 router aggregating all endpoint routers.

Mounted under the configured API prefix (``/api`` by default).
"""

from __future__ import annotations

from fastapi import APIRouter

from foodies.api.v1.endpoints import auth, recipes, reference, users


router = APIRouter()

router.include_router(auth.router)
router.include_router(users.router)
router.include_router(recipes.router)
router.include_router(reference.router)
