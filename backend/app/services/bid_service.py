"""Bid service: placing bids and the owner's accept/reject decision."""

import logging
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.exceptions import (
    DuplicateBidError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
)
from app.models.bid import Bid, BID_ACCEPTED, BID_PENDING
from app.models.job import STATUS_OPEN
from app.models.user import User
from app.schemas.bid import BidCreate
from app.services.job_service import assign_freelancer, get_job
from app.services.notification_service import notify

logger = logging.getLogger(__name__)


async def create_bid(db: AsyncSession, job_id: UUID, user: User, data: BidCreate) -> Bid:
    """Place a bid on an open job.

    One bid per (job, freelancer) is enforced by the uq_bids_job_freelancer
    constraint; the violation surfaces as DuplicateBidError.
    """
    job = await get_job(db, job_id)
    if user.role != "freelancer":
        raise ForbiddenError("Only freelancers can place bids")
    if job.status != STATUS_OPEN:
        raise InvalidStateError("Bids can only be placed on open jobs")

    bid = Bid(
        job_id=job.id,
        freelancer_id=user.id,
        amount=data.amount,
        duration=data.duration,
        message=data.message,
        status=BID_PENDING,
    )
    db.add(bid)

    try:
        await db.flush()
    except IntegrityError:
        await db.rollback()
        raise DuplicateBidError()

    await db.refresh(bid)
    logger.info("Bid %s placed on job %s by freelancer %s", bid.id, job.id, user.id)

    await notify(
        db,
        user_id=job.client_id,
        type="bid_received",
        title="New Bid Received",
        message=f"{user.name} placed a bid of {data.amount:g} on your job: {job.title}",
        related_job_id=job.id,
        related_bid_id=bid.id,
    )
    return bid


async def get_bid(db: AsyncSession, bid_id: UUID) -> Bid:
    bid = await db.get(Bid, bid_id)
    if not bid:
        raise NotFoundError("Bid not found")
    return bid


async def list_job_bids(db: AsyncSession, job_id: UUID) -> list[Bid]:
    await get_job(db, job_id)
    result = await db.execute(
        select(Bid)
        .options(selectinload(Bid.freelancer))
        .where(Bid.job_id == job_id)
        .order_by(Bid.created_at.desc(), Bid.id)
    )
    return list(result.scalars().all())


async def list_freelancer_bids(
    db: AsyncSession,
    user: User,
    page: int,
    limit: int,
    status: str | None = None,
) -> tuple[list[Bid], int]:
    filters = [Bid.freelancer_id == user.id]
    if status:
        filters.append(Bid.status == status)

    total = (await db.execute(select(func.count(Bid.id)).where(*filters))).scalar() or 0
    result = await db.execute(
        select(Bid)
        .where(*filters)
        .order_by(Bid.created_at.desc(), Bid.id)
        .offset((page - 1) * limit)
        .limit(limit)
    )
    return list(result.scalars().all()), total


async def update_bid_status(db: AsyncSession, bid_id: UUID, user: User, status: str) -> Bid:
    """Accept or reject a pending bid. Only the job owner may decide.

    Accepting assigns the bidder through the same guard as a direct claim.
    Other bids on the job keep their status.
    """
    bid = await get_bid(db, bid_id)
    job = await get_job(db, bid.job_id)
    if job.client_id != user.id:
        raise ForbiddenError("Not authorized to update this bid")
    if bid.status != BID_PENDING:
        raise InvalidStateError(f"Bid has already been {bid.status}")

    if status == BID_ACCEPTED:
        if job.status != STATUS_OPEN:
            raise InvalidStateError("Job is no longer open")
        await assign_freelancer(db, job, bid.freelancer_id)

    result = await db.execute(
        update(Bid)
        .where(Bid.id == bid.id, Bid.status == BID_PENDING)
        .values(status=status)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        raise InvalidStateError("Bid is no longer pending")

    await db.refresh(bid)
    logger.info("Bid %s on job %s %s", bid.id, job.id, status)

    if status == BID_ACCEPTED:
        await notify(
            db,
            user_id=bid.freelancer_id,
            type="bid_accepted",
            title="Bid Accepted",
            message=f"Your bid on {job.title} was accepted",
            related_job_id=job.id,
            related_bid_id=bid.id,
        )
    return bid
