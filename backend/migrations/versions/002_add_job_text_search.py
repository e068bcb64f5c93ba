"""Add full-text search index on jobs.

The expression must stay identical to the one built in
app.services.job_service._search_clause or the planner will not use it.

Revision ID: 002
Revises: 001
Create Date: 2026-10-09
"""
from typing import Sequence, Union

from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute(
        "CREATE INDEX idx_job_text_search ON jobs USING gin ("
        "to_tsvector('english', title || ' ' || description || ' ' || CAST(skills_required AS TEXT))"
        ")"
    )


def downgrade() -> None:
    op.drop_index("idx_job_text_search", table_name="jobs")
