"""Initial schema: users, jobs, bids, ratings, notifications.

Revision ID: 001
Revises:
Create Date: 2026-10-05
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    # Users
    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column("is_active", sa.Boolean, server_default=sa.text("true"), nullable=False),
        sa.Column("last_login_at", sa.DateTime(timezone=True)),
        sa.Column("bio", sa.Text),
        sa.Column("skills", postgresql.JSONB, server_default=sa.text("'[]'::jsonb"), nullable=False),
        sa.Column("portfolio_url", sa.String(500)),
        sa.Column("avatar_url", sa.String(500)),
        sa.Column("rating_average", sa.Float, server_default=sa.text("0"), nullable=False),
        sa.Column("rating_count", sa.Integer, server_default=sa.text("0"), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("role IN ('client', 'freelancer')", name="ck_users_role"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_role", "users", ["role"])

    # Jobs
    op.create_table(
        "jobs",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("title", sa.String(100), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("category", sa.String(20), nullable=False),
        sa.Column("budget_min", sa.Float),
        sa.Column("budget_max", sa.Float),
        sa.Column("duration", sa.String(20)),
        sa.Column("client_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("freelancer_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="SET NULL")),
        sa.Column("status", sa.String(20), server_default="open", nullable=False),
        sa.Column("skills_required", postgresql.JSONB, server_default=sa.text("'[]'::jsonb"), nullable=False),
        sa.Column("attachments", postgresql.JSONB, server_default=sa.text("'[]'::jsonb"), nullable=False),
        *_timestamps(),
        sa.CheckConstraint(
            "status IN ('open', 'in_progress', 'completed', 'cancelled')", name="ck_jobs_status"
        ),
        sa.CheckConstraint("budget_min IS NULL OR budget_min >= 0", name="ck_jobs_budget_min"),
        sa.CheckConstraint("budget_max IS NULL OR budget_max >= 0", name="ck_jobs_budget_max"),
    )
    op.create_index("ix_jobs_category", "jobs", ["category"])
    op.create_index("ix_jobs_client_id", "jobs", ["client_id"])
    op.create_index("ix_jobs_status", "jobs", ["status"])
    op.create_index("idx_job_status_created", "jobs", ["status", "created_at"])
    op.create_index("idx_job_category_status", "jobs", ["category", "status"])
    op.create_index("idx_job_client_status", "jobs", ["client_id", "status"])
    op.create_index("idx_job_budget_max", "jobs", ["budget_max"])

    # Bids
    op.create_table(
        "bids",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("job_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False),
        sa.Column("freelancer_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("amount", sa.Float, nullable=False),
        sa.Column("duration", sa.String(20), nullable=False),
        sa.Column("message", sa.String(500)),
        sa.Column("status", sa.String(20), server_default="pending", nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("job_id", "freelancer_id", name="uq_bids_job_freelancer"),
        sa.CheckConstraint("amount >= 0", name="ck_bids_amount"),
        sa.CheckConstraint("status IN ('pending', 'accepted', 'rejected')", name="ck_bids_status"),
    )
    op.create_index("ix_bids_job_id", "bids", ["job_id"])
    op.create_index("ix_bids_freelancer_id", "bids", ["freelancer_id"])
    op.create_index("ix_bids_status", "bids", ["status"])
    op.create_index("idx_bid_job_created", "bids", ["job_id", "created_at"])
    op.create_index("idx_bid_freelancer_status", "bids", ["freelancer_id", "status"])
    op.create_index("idx_bid_job_amount", "bids", ["job_id", "amount"])

    # Ratings
    op.create_table(
        "ratings",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("job_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False),
        sa.Column("client_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("freelancer_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("rating", sa.Float, nullable=False),
        sa.Column("feedback", sa.Text),
        sa.Column("quality", sa.Float),
        sa.Column("communication", sa.Float),
        sa.Column("professionalism", sa.Float),
        *_timestamps(),
        sa.UniqueConstraint("job_id", name="uq_ratings_job_id"),
        sa.CheckConstraint("rating BETWEEN 1 AND 5", name="ck_ratings_rating"),
    )
    op.create_index("ix_ratings_client_id", "ratings", ["client_id"])
    op.create_index("ix_ratings_freelancer_id", "ratings", ["freelancer_id"])
    op.create_index("idx_rating_freelancer_created", "ratings", ["freelancer_id", "created_at"])
    op.create_index("idx_rating_client_created", "ratings", ["client_id", "created_at"])
    op.create_index("idx_rating_value", "ratings", ["rating"])

    # Notifications
    op.create_table(
        "notifications",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("type", sa.String(20), nullable=False),
        sa.Column("title", sa.String(100), nullable=False),
        sa.Column("message", sa.String(500), nullable=False),
        sa.Column("related_job_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("jobs.id", ondelete="SET NULL")),
        sa.Column("related_bid_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("bids.id", ondelete="SET NULL")),
        sa.Column("is_read", sa.Boolean, server_default=sa.text("false"), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_notifications_user_id", "notifications", ["user_id"])
    op.create_index("ix_notifications_is_read", "notifications", ["is_read"])
    op.create_index("idx_notification_user_created", "notifications", ["user_id", "created_at"])
    op.create_index("idx_notification_user_read", "notifications", ["user_id", "is_read"])


def downgrade() -> None:
    op.drop_table("notifications")
    op.drop_table("ratings")
    op.drop_table("bids")
    op.drop_table("jobs")
    op.drop_table("users")
