"""ORM models; importing this package registers every mapper."""

from app.models.base import Base
from app.models.user import User
from app.models.job import Job
from app.models.bid import Bid
from app.models.rating import Rating
from app.models.notification import Notification

__all__ = ["Base", "User", "Job", "Bid", "Rating", "Notification"]
