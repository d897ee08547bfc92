"""Initial schema — vendors and request/vendor matches.

Revision ID: 001
Revises:
Create Date: 2026-10-19
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "vendors",
        sa.Column("vendor_id", UUID(as_uuid=True), primary_key=True),
        sa.Column("business_name", sa.String(255), nullable=False),
        sa.Column("contact_name", sa.String(255), server_default=""),
        sa.Column("email", sa.String(320), nullable=False, index=True),
        sa.Column(
            "status", sa.String(50), nullable=False,
            server_default="pending_review", index=True,
        ),
        sa.Column("licensed", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("insured", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("years_in_business", sa.Integer, nullable=True),
        sa.Column("vetting_score", sa.Integer, nullable=True),
        sa.Column("vetting_admin_adjustment", sa.Integer, nullable=False, server_default="0"),
        sa.Column("performance_score", sa.Integer, nullable=False, server_default="50"),
        sa.Column("total_reviews", sa.Integer, nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "performance_score BETWEEN 0 AND 100", name="ck_vendors_performance_score",
        ),
    )

    op.create_table(
        "request_vendor_matches",
        sa.Column("match_id", UUID(as_uuid=True), primary_key=True),
        sa.Column("request_id", UUID(as_uuid=True), nullable=False, index=True),
        sa.Column(
            "vendor_id", UUID(as_uuid=True),
            sa.ForeignKey("vendors.vendor_id"), nullable=False, index=True,
        ),
        sa.Column("vendor_accepted", sa.Boolean, nullable=True),
        sa.Column("job_completed", sa.Boolean, nullable=True),
        sa.Column("review_rating", sa.Integer, nullable=True),
        sa.Column("review_quality", sa.Integer, nullable=True),
        sa.Column("review_price", sa.Integer, nullable=True),
        sa.Column("review_timeline", sa.Integer, nullable=True),
        sa.Column("review_treatment", sa.Integer, nullable=True),
        sa.Column("review_text", sa.Text, nullable=True),
        sa.Column("review_submitted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "review_rating IS NULL OR review_rating BETWEEN 1 AND 5",
            name="ck_matches_review_rating",
        ),
    )


def downgrade() -> None:
    op.drop_table("request_vendor_matches")
    op.drop_table("vendors")
