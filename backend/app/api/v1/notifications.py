"""Notification API endpoints: the requester's own feed."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.dependencies.auth import require_user_api
from app.dependencies.pagination import PageParams, page_params
from app.models.base import get_db
from app.models.user import User
from app.schemas.common import Envelope, Pagination
from app.schemas.notification import MarkedRead, NotificationList, NotificationRead, UnreadCount
from app.services import notification_service

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=Envelope[NotificationList])
async def list_notifications(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_user_api),
    paging: PageParams = Depends(page_params),
    unread_only: bool = Query(False, description="Only return unread notifications"),
):
    notifications, total = await notification_service.list_notifications(
        db, user.id, page=paging.page, limit=paging.limit, unread_only=unread_only
    )
    unread = await notification_service.unread_count(db, user.id)
    return Envelope(
        data=NotificationList(
            notifications=[NotificationRead.model_validate(n) for n in notifications],
            pagination=Pagination.build(paging.page, paging.limit, total),
            unread_count=unread,
        )
    )


@router.get("/unread-count", response_model=Envelope[UnreadCount])
async def get_unread_count(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_user_api),
):
    count = await notification_service.unread_count(db, user.id)
    return Envelope(data=UnreadCount(count=count))


@router.put("/read-all", response_model=Envelope[MarkedRead])
async def mark_all_read(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_user_api),
):
    updated = await notification_service.mark_all_read(db, user.id)
    return Envelope(data=MarkedRead(updated=updated), message="All notifications marked as read")


@router.put("/{notification_id}/read", response_model=Envelope[NotificationRead])
async def mark_read(
    notification_id: UUID,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_user_api),
):
    notification = await notification_service.mark_read(db, notification_id, user.id)
    return Envelope(data=NotificationRead.model_validate(notification))


@router.delete("/{notification_id}", response_model=Envelope[None])
async def delete_notification(
    notification_id: UUID,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_user_api),
):
    await notification_service.delete_notification(db, notification_id, user.id)
    return Envelope(message="Notification deleted")
