"""Rating model: one client review per completed job."""

from sqlalchemy import Column, Float, Text, ForeignKey, Index, CheckConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from app.models.base import Base, TimestampMixin, UUIDMixin


class Rating(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "ratings"

    job_id = Column(UUID(as_uuid=True), ForeignKey("jobs.id", ondelete="CASCADE"), unique=True, nullable=False)
    client_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    freelancer_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    rating = Column(Float, nullable=False)
    feedback = Column(Text)

    # Detailed scores (optional, 1-5)
    quality = Column(Float)
    communication = Column(Float)
    professionalism = Column(Float)

    # Relationships
    job = relationship("Job")
    client = relationship("User", foreign_keys=[client_id])
    freelancer = relationship("User", foreign_keys=[freelancer_id])

    __table_args__ = (
        Index("idx_rating_freelancer_created", "freelancer_id", "created_at"),
        Index("idx_rating_client_created", "client_id", "created_at"),
        Index("idx_rating_value", "rating"),
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_ratings_rating"),
    )
