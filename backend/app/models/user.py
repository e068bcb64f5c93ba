"""User model: clients and freelancers."""

from sqlalchemy import Column, String, Boolean, DateTime, Float, Integer, Text, JSON, CheckConstraint
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship

from app.models.base import Base, TimestampMixin, UUIDMixin

USER_ROLES = ("client", "freelancer")


class User(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "users"

    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(50), nullable=False)
    hashed_password = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, index=True)  # client, freelancer
    is_active = Column(Boolean, default=True, nullable=False)
    last_login_at = Column(DateTime(timezone=True))

    # Profile
    bio = Column(Text)
    skills = Column(JSON().with_variant(JSONB(), "postgresql"), default=list, nullable=False)
    portfolio_url = Column(String(500))
    avatar_url = Column(String(500))

    # Derived, written only by the rating aggregator
    rating_average = Column(Float, default=0.0, nullable=False)
    rating_count = Column(Integer, default=0, nullable=False)

    # Relationships
    posted_jobs = relationship("Job", back_populates="client", foreign_keys="Job.client_id")
    notifications = relationship("Notification", back_populates="user", cascade="all, delete-orphan")

    __table_args__ = (
        CheckConstraint("role IN ('client', 'freelancer')", name="ck_users_role"),
    )

    @property
    def rating(self) -> dict:
        return {"average": self.rating_average or 0.0, "count": self.rating_count or 0}
