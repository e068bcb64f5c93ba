"""Pydantic schemas package."""

from app.schemas.common import Envelope, ErrorResponse, FieldError, Pagination
from app.schemas.user import (
    PasswordChange,
    RatingStats,
    UserLogin,
    UserPrivate,
    UserProfileIn,
    UserRead,
    UserRegister,
    UserSummary,
    UserUpdate,
)
from app.schemas.job import (
    Attachment,
    Budget,
    JobCreate,
    JobDetail,
    JobList,
    JobRead,
    JobSummary,
    JobUpdate,
)
from app.schemas.bid import BidCreate, BidList, BidRead, BidStatusUpdate, BidWithFreelancer
from app.schemas.rating import RatingCreate, RatingList, RatingRead
from app.schemas.notification import MarkedRead, NotificationList, NotificationRead, UnreadCount

# Rebuild models to resolve forward references
JobDetail.model_rebuild()

__all__ = [
    # Common
    "Envelope",
    "ErrorResponse",
    "FieldError",
    "Pagination",
    # User
    "PasswordChange",
    "RatingStats",
    "UserLogin",
    "UserPrivate",
    "UserProfileIn",
    "UserRead",
    "UserRegister",
    "UserSummary",
    "UserUpdate",
    # Job
    "Attachment",
    "Budget",
    "JobCreate",
    "JobDetail",
    "JobList",
    "JobRead",
    "JobSummary",
    "JobUpdate",
    # Bid
    "BidCreate",
    "BidList",
    "BidRead",
    "BidStatusUpdate",
    "BidWithFreelancer",
    # Rating
    "RatingCreate",
    "RatingList",
    "RatingRead",
    # Notification
    "MarkedRead",
    "NotificationList",
    "NotificationRead",
    "UnreadCount",
]
