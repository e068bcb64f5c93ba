"""Pydantic schemas for User accounts and profiles."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, HttpUrl, field_validator

UserRole = Literal["client", "freelancer"]


class RatingStats(BaseModel):
    average: float = 0.0
    count: int = 0


class UserProfileIn(BaseModel):
    """Optional profile fields accepted on register and update."""

    bio: str | None = Field(None, max_length=500)
    skills: list[str] | None = None
    portfolio_url: HttpUrl | None = None
    avatar_url: HttpUrl | None = None

    @field_validator("skills")
    @classmethod
    def strip_skills(cls, v: list[str] | None) -> list[str] | None:
        if v is None:
            return v
        return [s.strip() for s in v if s.strip()]


class UserRegister(BaseModel):
    name: str = Field(..., min_length=2, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=72)
    role: UserRole
    profile: UserProfileIn | None = None


class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserUpdate(BaseModel):
    name: str | None = Field(None, min_length=2, max_length=50)
    profile: UserProfileIn | None = None


class PasswordChange(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6, max_length=72)


class UserSummary(BaseModel):
    """Minimal user info for nested responses."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    rating: RatingStats


class UserRead(UserSummary):
    """Public profile."""

    role: UserRole
    bio: str | None = None
    skills: list[str] = []
    portfolio_url: str | None = None
    avatar_url: str | None = None
    created_at: datetime


class UserPrivate(UserRead):
    """The requester's own account."""

    email: str
    is_active: bool
    last_login_at: datetime | None = None
