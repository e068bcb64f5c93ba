"""Rating API endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.dependencies.auth import require_user_api
from app.models.base import get_db
from app.models.user import User
from app.schemas.common import Envelope
from app.schemas.rating import RatingCreate, RatingRead
from app.services import rating_service

router = APIRouter(prefix="/jobs/{job_id}/rating", tags=["ratings"])


@router.get("", response_model=Envelope[RatingRead])
async def get_job_rating(
    job_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    rating = await rating_service.get_job_rating(db, job_id)
    return Envelope(data=RatingRead.model_validate(rating))


@router.post("", response_model=Envelope[RatingRead], status_code=201)
async def create_rating(
    job_id: UUID,
    payload: RatingCreate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_user_api),
):
    """Rate the freelancer of a completed job. Ratings cannot be edited."""
    rating = await rating_service.create_rating(db, job_id, user, payload)
    return Envelope(data=RatingRead.model_validate(rating), message="Rating submitted successfully")
