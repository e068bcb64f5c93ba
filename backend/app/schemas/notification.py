"""Pydantic schemas for Notification."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from app.schemas.common import Pagination

NotificationType = Literal["job_posted", "bid_received", "bid_accepted", "job_completed", "new_rating"]


class NotificationRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    type: NotificationType
    title: str
    message: str
    related_job_id: UUID | None = None
    related_bid_id: UUID | None = None
    is_read: bool
    created_at: datetime


class NotificationList(BaseModel):
    notifications: list[NotificationRead]
    pagination: Pagination
    unread_count: int


class UnreadCount(BaseModel):
    count: int


class MarkedRead(BaseModel):
    updated: int
