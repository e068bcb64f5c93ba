"""Job lifecycle service: posting, editing, claiming and finishing jobs.

Every status change is a single conditional UPDATE keyed on the status the
caller observed, so two requests racing on the same job cannot both win.
Claim and bid acceptance share ``assign_freelancer`` for the open ->
in_progress move.
"""

import logging
from uuid import UUID

from sqlalchemy import Text, cast, delete, func, literal_column, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.exceptions import (
    AlreadyClaimedError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
)
from app.models.bid import Bid
from app.models.job import (
    Job,
    STATUS_CANCELLED,
    STATUS_COMPLETED,
    STATUS_IN_PROGRESS,
    STATUS_OPEN,
    can_transition,
)
from app.models.user import User
from app.schemas.job import JobCreate, JobUpdate
from app.services.notification_service import notify

logger = logging.getLogger(__name__)


def _escape_like(value: str) -> str:
    """Escape LIKE wildcards in user-supplied search text."""
    return value.replace("\\", "\\\\").replace("%", r"\%").replace("_", r"\_")


def _search_clause(db: AsyncSession, term: str):
    """Full-text match on PostgreSQL, substring match elsewhere."""
    skills_text = cast(Job.skills_required, Text)
    if db.get_bind().dialect.name == "postgresql":
        # Rendered inline so it matches the idx_job_text_search expression (migration 002)
        english = literal_column("'english'")
        space = literal_column("' '")
        document = func.to_tsvector(
            english, Job.title.concat(space).concat(Job.description).concat(space).concat(skills_text)
        )
        return document.op("@@")(func.plainto_tsquery(english, term))

    pattern = f"%{_escape_like(term)}%"
    return or_(
        Job.title.ilike(pattern, escape="\\"),
        Job.description.ilike(pattern, escape="\\"),
        skills_text.ilike(pattern, escape="\\"),
    )


async def get_job(db: AsyncSession, job_id: UUID) -> Job:
    job = await db.get(Job, job_id)
    if not job:
        raise NotFoundError("Job not found")
    return job


async def get_job_detail(db: AsyncSession, job_id: UUID) -> Job:
    """Load a job with client, freelancer and bids (each with its freelancer)."""
    query = (
        select(Job)
        .options(
            selectinload(Job.client),
            selectinload(Job.freelancer),
            selectinload(Job.bids).selectinload(Bid.freelancer),
        )
        .where(Job.id == job_id)
        .execution_options(populate_existing=True)
    )
    result = await db.execute(query)
    job = result.scalar_one_or_none()
    if not job:
        raise NotFoundError("Job not found")
    return job


async def list_jobs(
    db: AsyncSession,
    page: int,
    limit: int,
    category: str | None = None,
    status: str | None = None,
    min_budget: float | None = None,
    max_budget: float | None = None,
    search: str | None = None,
) -> tuple[list[Job], int]:
    """Filtered, paginated job listing, newest first.

    Budget bounds apply to the job's maximum budget, inclusive.
    """
    filters = []
    if category:
        filters.append(Job.category == category)
    if status:
        filters.append(Job.status == status)
    if min_budget is not None:
        filters.append(Job.budget_max >= min_budget)
    if max_budget is not None:
        filters.append(Job.budget_max <= max_budget)
    if search:
        filters.append(_search_clause(db, search))

    total = (await db.execute(select(func.count(Job.id)).where(*filters))).scalar() or 0

    query = (
        select(Job)
        .options(selectinload(Job.client), selectinload(Job.bids))
        .where(*filters)
        .order_by(Job.created_at.desc(), Job.id)
        .offset((page - 1) * limit)
        .limit(limit)
    )
    result = await db.execute(query)
    return list(result.scalars().all()), total


async def list_user_jobs(
    db: AsyncSession,
    user: User,
    page: int,
    limit: int,
    status: str | None = None,
) -> tuple[list[Job], int]:
    """Jobs the user posted or is working on."""
    filters = [or_(Job.client_id == user.id, Job.freelancer_id == user.id)]
    if status:
        filters.append(Job.status == status)

    total = (await db.execute(select(func.count(Job.id)).where(*filters))).scalar() or 0
    query = (
        select(Job)
        .options(selectinload(Job.client), selectinload(Job.bids))
        .where(*filters)
        .order_by(Job.created_at.desc(), Job.id)
        .offset((page - 1) * limit)
        .limit(limit)
    )
    result = await db.execute(query)
    return list(result.scalars().all()), total


async def create_job(db: AsyncSession, user: User, data: JobCreate) -> Job:
    budget = data.budget
    job = Job(
        title=data.title,
        description=data.description,
        category=data.category,
        budget_min=budget.min if budget else None,
        budget_max=budget.max if budget else None,
        duration=data.duration,
        client_id=user.id,
        freelancer_id=None,
        status=STATUS_OPEN,
        skills_required=data.skills_required,
        attachments=[a.model_dump(mode="json") for a in data.attachments],
    )
    db.add(job)
    await db.flush()
    await db.refresh(job)
    logger.info("Job %s created by client %s", job.id, user.id)
    return job


def _require_owner(job: Job, user: User, action: str) -> None:
    if job.client_id != user.id:
        raise ForbiddenError(f"Not authorized to {action} this job")


async def update_job(db: AsyncSession, job_id: UUID, user: User, data: JobUpdate) -> Job:
    job = await get_job(db, job_id)
    _require_owner(job, user, "update")
    if job.status != STATUS_OPEN:
        raise InvalidStateError("Cannot update job that is not open")

    values = data.model_dump(exclude_unset=True, exclude={"budget"})
    if "budget" in data.model_fields_set:
        values["budget_min"] = data.budget.min if data.budget else None
        values["budget_max"] = data.budget.max if data.budget else None

    result = await db.execute(
        update(Job)
        .where(Job.id == job.id, Job.status == STATUS_OPEN)
        .values(**values)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        raise InvalidStateError("Cannot update job that is not open")

    await db.refresh(job)
    logger.info("Job %s updated (%s)", job.id, ", ".join(sorted(values)))
    return job


async def delete_job(db: AsyncSession, job_id: UUID, user: User) -> None:
    job = await get_job(db, job_id)
    _require_owner(job, user, "delete")

    bid_count = (
        await db.execute(select(func.count(Bid.id)).where(Bid.job_id == job.id))
    ).scalar() or 0
    if bid_count > 0 or job.status != STATUS_OPEN:
        raise InvalidStateError("Cannot delete job with bids or in progress")

    has_bids = select(Bid.id).where(Bid.job_id == job.id).exists()
    result = await db.execute(
        delete(Job)
        .where(Job.id == job.id, Job.status == STATUS_OPEN, ~has_bids)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        raise InvalidStateError("Cannot delete job with bids or in progress")

    db.expunge(job)
    logger.info("Job %s deleted by client %s", job_id, user.id)


async def assign_freelancer(db: AsyncSession, job: Job, freelancer_id: UUID) -> Job:
    """Move an open, unassigned job to in_progress with the given freelancer.

    Single conditional UPDATE; losing a race raises AlreadyClaimedError (or
    InvalidStateError when the job left ``open`` without being assigned).
    """
    result = await db.execute(
        update(Job)
        .where(
            Job.id == job.id,
            Job.status == STATUS_OPEN,
            Job.freelancer_id.is_(None),
        )
        .values(freelancer_id=freelancer_id, status=STATUS_IN_PROGRESS)
        .execution_options(synchronize_session=False)
    )
    await db.refresh(job)

    if result.rowcount != 1:
        if job.freelancer_id is None:
            raise InvalidStateError("Job is not available for claiming")
        raise AlreadyClaimedError()

    logger.info("Job %s assigned to freelancer %s", job.id, freelancer_id)
    return job


async def claim_job(db: AsyncSession, job_id: UUID, user: User) -> Job:
    """Direct assignment of the requesting freelancer, bypassing bids."""
    job = await get_job(db, job_id)
    if user.role != "freelancer":
        raise ForbiddenError("Only freelancers can claim jobs")
    if job.status != STATUS_OPEN:
        raise InvalidStateError("Job is not available for claiming")
    if job.freelancer_id is not None:
        raise AlreadyClaimedError()

    await assign_freelancer(db, job, user.id)

    await notify(
        db,
        user_id=job.client_id,
        type="job_completed",
        title="Job Claimed",
        message=f"{user.name} has claimed your job: {job.title}",
        related_job_id=job.id,
    )
    return job


async def _transition(db: AsyncSession, job: Job, target: str) -> Job:
    current = job.status
    if not can_transition(current, target):
        raise InvalidStateError(f"Cannot move job from {current} to {target}")

    result = await db.execute(
        update(Job)
        .where(Job.id == job.id, Job.status == current)
        .values(status=target)
        .execution_options(synchronize_session=False)
    )
    await db.refresh(job)
    if result.rowcount != 1:
        raise InvalidStateError(f"Cannot move job from {job.status} to {target}")

    logger.info("Job %s moved %s -> %s", job.id, current, target)
    return job


async def complete_job(db: AsyncSession, job_id: UUID, user: User) -> Job:
    job = await get_job(db, job_id)
    _require_owner(job, user, "complete")
    await _transition(db, job, STATUS_COMPLETED)

    if job.freelancer_id:
        await notify(
            db,
            user_id=job.freelancer_id,
            type="job_completed",
            title="Job Completed",
            message=f"The client marked the job as completed: {job.title}",
            related_job_id=job.id,
        )
    return job


async def cancel_job(db: AsyncSession, job_id: UUID, user: User) -> Job:
    job = await get_job(db, job_id)
    _require_owner(job, user, "cancel")
    return await _transition(db, job, STATUS_CANCELLED)
