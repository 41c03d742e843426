from fastapi import APIRouter

from assethub.api.v1.assets import router as assets_router
from assethub.api.v1.jobs import router as jobs_router

router = APIRouter()
router.include_router(assets_router)
router.include_router(jobs_router)
