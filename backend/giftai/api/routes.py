from fastapi import APIRouter

from giftai.api.auth import router as auth_router
from giftai.api.currency import router as currency_router
from giftai.api.gifts import router as gifts_router
from giftai.api.health import router as health_router
from giftai.api.refine import router as refine_router
from giftai.api.searches import router as searches_router

router = APIRouter(prefix="/api")
router.include_router(health_router)
router.include_router(currency_router)
router.include_router(gifts_router)
router.include_router(refine_router)
router.include_router(searches_router)
router.include_router(auth_router)
