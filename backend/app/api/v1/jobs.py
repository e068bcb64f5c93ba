"""Job API endpoints: listing, posting and lifecycle actions."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.dependencies.auth import require_client, require_user_api
from app.dependencies.pagination import PageParams, page_params
from app.models.base import get_db
from app.models.user import User
from app.schemas.common import Envelope, Pagination
from app.schemas.job import (
    JobCategory,
    JobCreate,
    JobDetail,
    JobList,
    JobRead,
    JobStatus,
    JobSummary,
    JobUpdate,
)
from app.services import job_service

router = APIRouter(prefix="/jobs", tags=["jobs"])


def _job_list(jobs, paging: PageParams, total: int) -> JobList:
    return JobList(
        jobs=[JobSummary.model_validate(job) for job in jobs],
        pagination=Pagination.build(paging.page, paging.limit, total),
    )


@router.get("", response_model=Envelope[JobList])
async def list_jobs(
    db: AsyncSession = Depends(get_db),
    paging: PageParams = Depends(page_params),
    category: JobCategory | None = Query(None, description="Filter by category"),
    status: JobStatus | None = Query(None, description="Filter by status"),
    min_budget: float | None = Query(None, ge=0, description="Lower bound on the job's maximum budget"),
    max_budget: float | None = Query(None, ge=0, description="Upper bound on the job's maximum budget"),
    search: str | None = Query(None, min_length=1, description="Search title, description and skills"),
):
    """List jobs with filters, newest first."""
    jobs, total = await job_service.list_jobs(
        db,
        page=paging.page,
        limit=paging.limit,
        category=category,
        status=status,
        min_budget=min_budget,
        max_budget=max_budget,
        search=search,
    )
    return Envelope(data=_job_list(jobs, paging, total))


@router.get("/mine", response_model=Envelope[JobList])
async def list_my_jobs(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_user_api),
    paging: PageParams = Depends(page_params),
    status: JobStatus | None = Query(None, description="Filter by status"),
):
    """Jobs the requester posted (client) or is assigned to (freelancer)."""
    jobs, total = await job_service.list_user_jobs(
        db, user, page=paging.page, limit=paging.limit, status=status
    )
    return Envelope(data=_job_list(jobs, paging, total))


@router.get("/{job_id}", response_model=Envelope[JobDetail])
async def get_job(
    job_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Get a single job with its client, freelancer and bids."""
    job = await job_service.get_job_detail(db, job_id)
    return Envelope(data=JobDetail.model_validate(job))


@router.post("", response_model=Envelope[JobRead], status_code=201)
async def create_job(
    payload: JobCreate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_client),
):
    job = await job_service.create_job(db, user, payload)
    return Envelope(data=JobRead.model_validate(job), message="Job created successfully")


@router.put("/{job_id}", response_model=Envelope[JobRead])
async def update_job(
    job_id: UUID,
    payload: JobUpdate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_user_api),
):
    job = await job_service.update_job(db, job_id, user, payload)
    return Envelope(data=JobRead.model_validate(job), message="Job updated successfully")


@router.delete("/{job_id}", response_model=Envelope[None])
async def delete_job(
    job_id: UUID,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_user_api),
):
    await job_service.delete_job(db, job_id, user)
    return Envelope(message="Job deleted successfully")


@router.post("/{job_id}/claim", response_model=Envelope[JobRead])
async def claim_job(
    job_id: UUID,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_user_api),
):
    """Assign the requesting freelancer directly, bypassing bids."""
    job = await job_service.claim_job(db, job_id, user)
    return Envelope(data=JobRead.model_validate(job), message="Job claimed successfully")


@router.post("/{job_id}/complete", response_model=Envelope[JobRead])
async def complete_job(
    job_id: UUID,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_user_api),
):
    job = await job_service.complete_job(db, job_id, user)
    return Envelope(data=JobRead.model_validate(job), message="Job marked as completed")


@router.post("/{job_id}/cancel", response_model=Envelope[JobRead])
async def cancel_job(
    job_id: UUID,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_user_api),
):
    job = await job_service.cancel_job(db, job_id, user)
    return Envelope(data=JobRead.model_validate(job), message="Job cancelled")
