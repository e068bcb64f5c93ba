"""Account service: password hashing, registration and profile edits."""

import logging
from datetime import datetime, timezone
from uuid import UUID

import bcrypt
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import ConflictError, NotFoundError
from app.models.user import User
from app.schemas.user import UserProfileIn, UserRegister, UserUpdate

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    """Hash a plaintext password using bcrypt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """Check a plaintext password against a bcrypt hash."""
    return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))


def _apply_profile(user: User, profile: UserProfileIn) -> None:
    fields = profile.model_dump(mode="json", exclude_unset=True)
    for key, value in fields.items():
        if key == "skills" and value is None:
            value = []
        setattr(user, key, value)


async def register_user(db: AsyncSession, data: UserRegister) -> User:
    """Create an account; raises ConflictError when the email is taken."""
    user = User(
        email=data.email.strip().lower(),
        name=data.name.strip(),
        role=data.role,
        hashed_password=hash_password(data.password),
        skills=[],
        last_login_at=datetime.now(timezone.utc),
    )
    if data.profile:
        _apply_profile(user, data.profile)
    db.add(user)

    try:
        await db.flush()
    except IntegrityError:
        await db.rollback()
        raise ConflictError("Email already registered")

    await db.refresh(user)
    logger.info("Registered %s account %s", user.role, user.id)
    return user


async def authenticate_user(db: AsyncSession, email: str, password: str) -> User | None:
    """Return the user when the credentials match, else None."""
    result = await db.execute(select(User).where(User.email == email.strip().lower()))
    user = result.scalar_one_or_none()
    if not user or not verify_password(password, user.hashed_password):
        return None
    return user


async def record_login(db: AsyncSession, user: User) -> None:
    user.last_login_at = datetime.now(timezone.utc)
    await db.flush()
    await db.refresh(user)


async def get_user(db: AsyncSession, user_id: UUID) -> User:
    user = await db.get(User, user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


async def update_profile(db: AsyncSession, user: User, data: UserUpdate) -> User:
    if data.name is not None:
        user.name = data.name.strip()
    if data.profile is not None:
        _apply_profile(user, data.profile)
    await db.flush()
    await db.refresh(user)
    return user


async def change_password(db: AsyncSession, user: User, current_password: str, new_password: str) -> bool:
    """Swap the password hash; returns False when the current password is wrong."""
    if not verify_password(current_password, user.hashed_password):
        return False
    user.hashed_password = hash_password(new_password)
    await db.flush()
    logger.info("Password changed for user %s", user.id)
    return True
