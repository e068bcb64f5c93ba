"""Public user profile endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.dependencies.pagination import PageParams, page_params
from app.models.base import get_db
from app.schemas.common import Envelope, Pagination
from app.schemas.rating import RatingList, RatingRead
from app.schemas.user import UserRead
from app.services import auth_service, rating_service

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/{user_id}", response_model=Envelope[UserRead])
async def get_user(
    user_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    user = await auth_service.get_user(db, user_id)
    return Envelope(data=UserRead.model_validate(user))


@router.get("/{user_id}/ratings", response_model=Envelope[RatingList])
async def list_user_ratings(
    user_id: UUID,
    db: AsyncSession = Depends(get_db),
    paging: PageParams = Depends(page_params),
):
    """Ratings a freelancer has received, newest first."""
    await auth_service.get_user(db, user_id)
    ratings, total = await rating_service.list_freelancer_ratings(
        db, user_id, page=paging.page, limit=paging.limit
    )
    return Envelope(
        data=RatingList(
            ratings=[RatingRead.model_validate(r) for r in ratings],
            pagination=Pagination.build(paging.page, paging.limit, total),
        )
    )
