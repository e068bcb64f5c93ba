"""Pydantic schemas for Rating."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.common import Pagination


class RatingCreate(BaseModel):
    rating: float = Field(..., ge=1, le=5)
    feedback: str | None = Field(None, max_length=1000)
    quality: float | None = Field(None, ge=1, le=5)
    communication: float | None = Field(None, ge=1, le=5)
    professionalism: float | None = Field(None, ge=1, le=5)


class RatingRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    job_id: UUID
    client_id: UUID
    freelancer_id: UUID
    rating: float
    feedback: str | None = None
    quality: float | None = None
    communication: float | None = None
    professionalism: float | None = None
    created_at: datetime


class RatingList(BaseModel):
    ratings: list[RatingRead]
    pagination: Pagination
