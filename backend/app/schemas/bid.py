"""Pydantic schemas for Bid."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.common import Pagination
from app.schemas.job import JobDuration
from app.schemas.user import UserSummary

BidStatus = Literal["pending", "accepted", "rejected"]


class BidCreate(BaseModel):
    amount: float = Field(..., ge=0)
    duration: JobDuration
    message: str | None = Field(None, max_length=500)


class BidStatusUpdate(BaseModel):
    status: Literal["accepted", "rejected"]


class BidRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    job_id: UUID
    freelancer_id: UUID
    amount: float
    duration: JobDuration
    message: str | None = None
    status: BidStatus
    created_at: datetime
    updated_at: datetime


class BidWithFreelancer(BidRead):
    freelancer: UserSummary | None = None


class BidList(BaseModel):
    bids: list[BidRead]
    pagination: Pagination
