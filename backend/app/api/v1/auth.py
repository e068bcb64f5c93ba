"""Authentication endpoints: register, login, logout, account management."""

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.dependencies.auth import require_user_api
from app.models.base import get_db
from app.models.user import User
from app.schemas.common import Envelope
from app.schemas.user import PasswordChange, UserLogin, UserPrivate, UserRegister, UserUpdate
from app.services import auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=Envelope[UserPrivate], status_code=201)
async def register(
    request: Request,
    payload: UserRegister,
    db: AsyncSession = Depends(get_db),
):
    user = await auth_service.register_user(db, payload)
    request.session["user_id"] = str(user.id)
    return Envelope(data=UserPrivate.model_validate(user), message="Account created successfully")


@router.post("/login", response_model=Envelope[UserPrivate])
async def login(
    request: Request,
    payload: UserLogin,
    db: AsyncSession = Depends(get_db),
):
    user = await auth_service.authenticate_user(db, payload.email, payload.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid email or password")
    if not user.is_active:
        raise HTTPException(status_code=403, detail="This account has been deactivated")

    await auth_service.record_login(db, user)
    request.session["user_id"] = str(user.id)
    return Envelope(data=UserPrivate.model_validate(user), message="Logged in")


@router.post("/logout", response_model=Envelope[None])
async def logout(request: Request):
    request.session.clear()
    return Envelope(message="Logged out")


@router.get("/me", response_model=Envelope[UserPrivate])
async def me(user: User = Depends(require_user_api)):
    return Envelope(data=UserPrivate.model_validate(user))


@router.put("/me", response_model=Envelope[UserPrivate])
async def update_me(
    payload: UserUpdate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_user_api),
):
    user = await auth_service.update_profile(db, user, payload)
    return Envelope(data=UserPrivate.model_validate(user), message="Profile updated successfully")


@router.put("/password", response_model=Envelope[None])
async def change_password(
    payload: PasswordChange,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_user_api),
):
    changed = await auth_service.change_password(db, user, payload.current_password, payload.new_password)
    if not changed:
        raise HTTPException(status_code=400, detail="Current password is incorrect")
    return Envelope(message="Password updated successfully")
