"""API router configuration."""

from fastapi import APIRouter

from api.routes.auth import router as auth_router
from api.routes.seller_profiles import router as seller_profiles_router

router = APIRouter()
router.include_router(auth_router)
router.include_router(seller_profiles_router)
