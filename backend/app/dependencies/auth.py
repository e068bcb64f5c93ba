"""Authentication dependencies for FastAPI routes.

The requester is resolved from the signed session cookie set at login.
"""

from typing import Callable
from uuid import UUID

from fastapi import Depends, HTTPException, Request
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.base import get_db
from app.models.user import User


async def get_current_user(request: Request, db: AsyncSession = Depends(get_db)) -> User | None:
    """Return the logged-in user or None."""
    raw_id = request.session.get("user_id")
    if not raw_id:
        return None
    try:
        user_id = UUID(raw_id)
    except ValueError:
        return None
    result = await db.execute(
        select(User).where(User.id == user_id, User.is_active == True)  # noqa: E712
    )
    return result.scalar_one_or_none()


async def require_user_api(user: User | None = Depends(get_current_user)) -> User:
    """Return the logged-in user or raise 401."""
    if not user:
        raise HTTPException(status_code=401, detail="Login required")
    return user


def require_role(role: str) -> Callable:
    """Dependency factory: the logged-in user must have ``role`` (403 otherwise)."""

    async def _require_role(user: User = Depends(require_user_api)) -> User:
        if user.role != role:
            raise HTTPException(status_code=403, detail=f"Only {role}s can perform this action")
        return user

    return _require_role


require_client = require_role("client")
require_freelancer = require_role("freelancer")
