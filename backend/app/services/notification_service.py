"""Notification service: best-effort emission and the per-user feed."""

import logging
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import NotFoundError
from app.models.notification import Notification

logger = logging.getLogger(__name__)


async def notify(
    db: AsyncSession,
    user_id: UUID,
    type: str,
    title: str,
    message: str,
    related_job_id: UUID | None = None,
    related_bid_id: UUID | None = None,
) -> Notification | None:
    """Record a notification inside a SAVEPOINT.

    Failure rolls back the savepoint only and is logged; the caller's
    transaction keeps its changes. Returns None when nothing was written.
    """
    try:
        async with db.begin_nested():
            notification = Notification(
                user_id=user_id,
                type=type,
                title=title[:100],
                message=message[:500],
                related_job_id=related_job_id,
                related_bid_id=related_bid_id,
                is_read=False,
            )
            db.add(notification)
            await db.flush()
    except Exception:
        logger.exception("Failed to create %s notification for user %s", type, user_id)
        return None
    return notification


async def list_notifications(
    db: AsyncSession,
    user_id: UUID,
    page: int,
    limit: int,
    unread_only: bool = False,
) -> tuple[list[Notification], int]:
    query = select(Notification).where(Notification.user_id == user_id)
    count_query = select(func.count(Notification.id)).where(Notification.user_id == user_id)
    if unread_only:
        query = query.where(Notification.is_read == False)  # noqa: E712
        count_query = count_query.where(Notification.is_read == False)  # noqa: E712

    total = (await db.execute(count_query)).scalar() or 0
    query = query.order_by(Notification.created_at.desc()).offset((page - 1) * limit).limit(limit)
    result = await db.execute(query)
    return list(result.scalars().all()), total


async def unread_count(db: AsyncSession, user_id: UUID) -> int:
    result = await db.execute(
        select(func.count(Notification.id)).where(
            Notification.user_id == user_id,
            Notification.is_read == False,  # noqa: E712
        )
    )
    return result.scalar() or 0


async def _get_own(db: AsyncSession, notification_id: UUID, user_id: UUID) -> Notification:
    notification = await db.get(Notification, notification_id)
    # Another user's notification is reported as missing
    if not notification or notification.user_id != user_id:
        raise NotFoundError("Notification not found")
    return notification


async def mark_read(db: AsyncSession, notification_id: UUID, user_id: UUID) -> Notification:
    notification = await _get_own(db, notification_id, user_id)
    notification.is_read = True
    await db.flush()
    await db.refresh(notification)
    return notification


async def mark_all_read(db: AsyncSession, user_id: UUID) -> int:
    result = await db.execute(
        update(Notification)
        .where(Notification.user_id == user_id, Notification.is_read == False)  # noqa: E712
        .values(is_read=True)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount


async def delete_notification(db: AsyncSession, notification_id: UUID, user_id: UUID) -> None:
    notification = await _get_own(db, notification_id, user_id)
    await db.delete(notification)
    await db.flush()
