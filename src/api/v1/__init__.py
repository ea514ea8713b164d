"""API v1 router configuration."""

from fastapi import APIRouter

from api.v1.routes.creators import router as creators_router
from api.v1.routes.drafts import router as drafts_router
from api.v1.routes.themes import router as themes_router

router = APIRouter()
router.include_router(creators_router)
router.include_router(drafts_router)
router.include_router(themes_router)
