"""Pydantic schemas for Job listings and lifecycle actions."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator, model_validator

from app.schemas.common import Pagination
from app.schemas.user import UserSummary

if TYPE_CHECKING:
    from app.schemas.bid import BidWithFreelancer

JobCategory = Literal["design", "writing", "development", "marketing", "data", "other"]
JobDuration = Literal["less than 1 week", "1-2 weeks", "2-4 weeks", "1-3 months", "3+ months"]
JobStatus = Literal["open", "in_progress", "completed", "cancelled"]


class Budget(BaseModel):
    min: float | None = Field(None, ge=0)
    max: float | None = Field(None, ge=0)


class Attachment(BaseModel):
    filename: str = Field(..., min_length=1)
    url: HttpUrl


def _strip_text(v):
    return v.strip() if isinstance(v, str) else v


def _normalize_skills(v: list[str] | None) -> list[str] | None:
    if v is None:
        return v
    return [s.strip() for s in v if s.strip()]


class JobCreate(BaseModel):
    """Request to post a job."""

    title: str = Field(..., min_length=5, max_length=100)
    description: str = Field(..., min_length=20, max_length=2000)
    category: JobCategory
    budget: Budget | None = None
    duration: JobDuration | None = None
    skills_required: list[str] = Field(default_factory=list)
    attachments: list[Attachment] = Field(default_factory=list)

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v):
        # Before the length checks, so padding cannot satisfy min_length
        return _strip_text(v)

    @field_validator("skills_required")
    @classmethod
    def validate_skills(cls, v: list[str]) -> list[str]:
        return _normalize_skills(v)


class JobUpdate(BaseModel):
    """Partial update of an open job; at least one field is required."""

    title: str | None = Field(None, min_length=5, max_length=100)
    description: str | None = Field(None, min_length=20, max_length=2000)
    category: JobCategory | None = None
    budget: Budget | None = None
    duration: JobDuration | None = None
    skills_required: list[str] | None = None

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v):
        return _strip_text(v)

    @field_validator("skills_required")
    @classmethod
    def validate_skills(cls, v: list[str] | None) -> list[str] | None:
        return _normalize_skills(v)

    @model_validator(mode="after")
    def check_fields(self) -> "JobUpdate":
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided")
        for name in ("title", "description", "category", "skills_required"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


class JobRead(BaseModel):
    """Full job output."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    description: str
    category: JobCategory
    budget: Budget
    duration: JobDuration | None = None
    client_id: UUID
    freelancer_id: UUID | None = None
    status: JobStatus
    skills_required: list[str] = []
    attachments: list[Attachment] = []
    created_at: datetime
    updated_at: datetime


class JobSummary(JobRead):
    """Job in list views, with its client and bid count."""

    client: UserSummary | None = None
    bid_count: int = 0


class JobDetail(JobRead):
    """Job with populated client, freelancer and bids."""

    client: UserSummary | None = None
    freelancer: UserSummary | None = None
    bids: list["BidWithFreelancer"] = []
    bid_count: int = 0


class JobList(BaseModel):
    jobs: list[JobSummary]
    pagination: Pagination
