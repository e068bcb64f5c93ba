"""Bid API endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.dependencies.auth import require_freelancer, require_user_api
from app.dependencies.pagination import PageParams, page_params
from app.models.base import get_db
from app.models.user import User
from app.schemas.bid import BidCreate, BidList, BidRead, BidStatus, BidStatusUpdate, BidWithFreelancer
from app.schemas.common import Envelope, Pagination
from app.services import bid_service

router = APIRouter(tags=["bids"])


@router.get("/jobs/{job_id}/bids", response_model=Envelope[list[BidWithFreelancer]])
async def list_job_bids(
    job_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    bids = await bid_service.list_job_bids(db, job_id)
    return Envelope(data=[BidWithFreelancer.model_validate(bid) for bid in bids])


@router.post("/jobs/{job_id}/bids", response_model=Envelope[BidRead], status_code=201)
async def create_bid(
    job_id: UUID,
    payload: BidCreate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_user_api),
):
    """Place a bid on an open job. One bid per freelancer per job."""
    bid = await bid_service.create_bid(db, job_id, user, payload)
    return Envelope(data=BidRead.model_validate(bid), message="Bid submitted successfully")


@router.get("/bids/mine", response_model=Envelope[BidList])
async def list_my_bids(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_freelancer),
    paging: PageParams = Depends(page_params),
    status: BidStatus | None = Query(None, description="Filter by bid status"),
):
    bids, total = await bid_service.list_freelancer_bids(
        db, user, page=paging.page, limit=paging.limit, status=status
    )
    return Envelope(
        data=BidList(
            bids=[BidRead.model_validate(bid) for bid in bids],
            pagination=Pagination.build(paging.page, paging.limit, total),
        )
    )


@router.put("/bids/{bid_id}", response_model=Envelope[BidRead])
async def update_bid_status(
    bid_id: UUID,
    payload: BidStatusUpdate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_user_api),
):
    """Accept or reject a pending bid (job owner only)."""
    bid = await bid_service.update_bid_status(db, bid_id, user, payload.status)
    return Envelope(data=BidRead.model_validate(bid), message=f"Bid {bid.status}")
