"""Job model: posted work requests and their lifecycle."""

from sqlalchemy import Column, String, Float, Text, ForeignKey, Index, JSON, CheckConstraint
from sqlalchemy.dialects.postgresql import UUID, JSONB
from sqlalchemy.orm import relationship

from app.models.base import Base, TimestampMixin, UUIDMixin

JOB_CATEGORIES = ("design", "writing", "development", "marketing", "data", "other")
DURATIONS = ("less than 1 week", "1-2 weeks", "2-4 weeks", "1-3 months", "3+ months")

STATUS_OPEN = "open"
STATUS_IN_PROGRESS = "in_progress"
STATUS_COMPLETED = "completed"
STATUS_CANCELLED = "cancelled"
JOB_STATUSES = (STATUS_OPEN, STATUS_IN_PROGRESS, STATUS_COMPLETED, STATUS_CANCELLED)

# Allowed lifecycle moves; completed and cancelled are terminal
JOB_TRANSITIONS = {
    STATUS_OPEN: {STATUS_IN_PROGRESS},
    STATUS_IN_PROGRESS: {STATUS_COMPLETED, STATUS_CANCELLED},
    STATUS_COMPLETED: set(),
    STATUS_CANCELLED: set(),
}


def can_transition(current: str, target: str) -> bool:
    return target in JOB_TRANSITIONS.get(current, set())


class Job(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "jobs"

    title = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    category = Column(String(20), nullable=False, index=True)
    budget_min = Column(Float)
    budget_max = Column(Float)
    duration = Column(String(20))

    client_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    freelancer_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"))
    status = Column(String(20), default=STATUS_OPEN, nullable=False, index=True)

    skills_required = Column(JSON().with_variant(JSONB(), "postgresql"), default=list, nullable=False)
    attachments = Column(JSON().with_variant(JSONB(), "postgresql"), default=list, nullable=False)  # [{filename, url}]

    # Relationships
    client = relationship("User", back_populates="posted_jobs", foreign_keys=[client_id])
    freelancer = relationship("User", foreign_keys=[freelancer_id])
    bids = relationship("Bid", back_populates="job", order_by="Bid.created_at.desc()")

    __table_args__ = (
        Index("idx_job_status_created", "status", "created_at"),
        Index("idx_job_category_status", "category", "status"),
        Index("idx_job_client_status", "client_id", "status"),
        Index("idx_job_budget_max", "budget_max"),
        CheckConstraint(
            "status IN ('open', 'in_progress', 'completed', 'cancelled')", name="ck_jobs_status"
        ),
        CheckConstraint("budget_min IS NULL OR budget_min >= 0", name="ck_jobs_budget_min"),
        CheckConstraint("budget_max IS NULL OR budget_max >= 0", name="ck_jobs_budget_max"),
    )

    @property
    def budget(self) -> dict:
        return {"min": self.budget_min, "max": self.budget_max}

    @property
    def bid_count(self) -> int:
        return len(self.bids)
