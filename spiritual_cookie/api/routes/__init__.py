"""
API routes package.

Contains the JSON endpoints mounted under /api: prayer submission and
the sign-in/sign-out flow.
"""

from fastapi import APIRouter

from spiritual_cookie.api.routes.auth import router as auth_router
from spiritual_cookie.api.routes.prayer import router as prayer_router

router = APIRouter()
router.include_router(prayer_router)
router.include_router(auth_router, prefix="/auth")

__all__ = ["router"]
