"""Bid model: a freelancer's priced offer against a job."""

from sqlalchemy import Column, String, Float, ForeignKey, UniqueConstraint, Index, CheckConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from app.models.base import Base, TimestampMixin, UUIDMixin

BID_PENDING = "pending"
BID_ACCEPTED = "accepted"
BID_REJECTED = "rejected"
BID_STATUSES = (BID_PENDING, BID_ACCEPTED, BID_REJECTED)


class Bid(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "bids"

    job_id = Column(UUID(as_uuid=True), ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True)
    freelancer_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    amount = Column(Float, nullable=False)
    duration = Column(String(20), nullable=False)
    message = Column(String(500))
    status = Column(String(20), default=BID_PENDING, nullable=False, index=True)

    # Relationships
    job = relationship("Job", back_populates="bids")
    freelancer = relationship("User")

    __table_args__ = (
        UniqueConstraint("job_id", "freelancer_id", name="uq_bids_job_freelancer"),
        Index("idx_bid_job_created", "job_id", "created_at"),
        Index("idx_bid_freelancer_status", "freelancer_id", "status"),
        Index("idx_bid_job_amount", "job_id", "amount"),
        CheckConstraint("amount >= 0", name="ck_bids_amount"),
        CheckConstraint("status IN ('pending', 'accepted', 'rejected')", name="ck_bids_status"),
    )
