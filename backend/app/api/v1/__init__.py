"""API v1 router aggregation."""

from fastapi import APIRouter

from app.api.v1.auth import router as auth_router
from app.api.v1.users import router as users_router
from app.api.v1.jobs import router as jobs_router
from app.api.v1.bids import router as bids_router
from app.api.v1.ratings import router as ratings_router
from app.api.v1.notifications import router as notifications_router

router = APIRouter(prefix="/api/v1")

router.include_router(auth_router)
router.include_router(users_router)
router.include_router(jobs_router)
router.include_router(bids_router)
router.include_router(ratings_router)
router.include_router(notifications_router)
