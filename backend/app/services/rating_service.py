"""Rating service: one review per completed job, aggregated per freelancer."""

import logging
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import (
    DuplicateRatingError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
)
from app.models.job import STATUS_COMPLETED
from app.models.rating import Rating
from app.models.user import User
from app.schemas.rating import RatingCreate
from app.services.job_service import get_job
from app.services.notification_service import notify

logger = logging.getLogger(__name__)


async def recalculate_freelancer_rating(db: AsyncSession, freelancer_id: UUID) -> tuple[float, int]:
    """Recompute average and count over all of the freelancer's ratings.

    Full recomputation, not incremental. No ratings resets both to zero.
    """
    row = (
        await db.execute(
            select(func.avg(Rating.rating), func.count(Rating.id)).where(
                Rating.freelancer_id == freelancer_id
            )
        )
    ).one()
    count = row[1] or 0
    average = float(row[0]) if count else 0.0

    freelancer = await db.get(User, freelancer_id)
    if not freelancer:
        logger.warning("Rated freelancer %s no longer exists", freelancer_id)
        return average, count

    freelancer.rating_average = average
    freelancer.rating_count = count
    await db.flush()
    return average, count


async def create_rating(db: AsyncSession, job_id: UUID, user: User, data: RatingCreate) -> Rating:
    job = await get_job(db, job_id)
    if job.client_id != user.id:
        raise ForbiddenError("Only the job owner can rate this job")
    if job.status != STATUS_COMPLETED or job.freelancer_id is None:
        raise InvalidStateError("Only completed jobs can be rated")

    freelancer_id = job.freelancer_id
    rating = Rating(
        job_id=job.id,
        client_id=user.id,
        freelancer_id=freelancer_id,
        **data.model_dump(),
    )
    db.add(rating)

    try:
        await db.flush()
    except IntegrityError:
        await db.rollback()
        raise DuplicateRatingError()

    await db.refresh(rating)
    average, count = await recalculate_freelancer_rating(db, freelancer_id)
    logger.info(
        "Job %s rated %s; freelancer %s now %.2f over %d ratings",
        job.id, rating.rating, freelancer_id, average, count,
    )

    await notify(
        db,
        user_id=freelancer_id,
        type="new_rating",
        title="New Rating",
        message=f"You received a {rating.rating:g}-star rating for: {job.title}",
        related_job_id=job.id,
    )
    return rating


async def get_job_rating(db: AsyncSession, job_id: UUID) -> Rating:
    result = await db.execute(select(Rating).where(Rating.job_id == job_id))
    rating = result.scalar_one_or_none()
    if not rating:
        raise NotFoundError("Rating not found")
    return rating


async def list_freelancer_ratings(
    db: AsyncSession,
    freelancer_id: UUID,
    page: int,
    limit: int,
) -> tuple[list[Rating], int]:
    total = (
        await db.execute(select(func.count(Rating.id)).where(Rating.freelancer_id == freelancer_id))
    ).scalar() or 0
    result = await db.execute(
        select(Rating)
        .where(Rating.freelancer_id == freelancer_id)
        .order_by(Rating.created_at.desc(), Rating.id)
        .offset((page - 1) * limit)
        .limit(limit)
    )
    return list(result.scalars().all()), total
