"""API v1 router configuration."""

from fastapi import APIRouter

from api.v1.routes.payment_methods import router as payment_methods_router
from api.v1.routes.profile import router as profile_router
from api.v1.routes.public import router as public_router

router = APIRouter()
router.include_router(profile_router)
router.include_router(payment_methods_router)
router.include_router(public_router)
