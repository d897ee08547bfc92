"""SQLAlchemy ORM table models for Real Landlording.

Only the columns the scoring engine reads or writes are modelled here.

Categories:
- OPERATIONAL: Vendor (vetting fields and cached scores are updated in place)
- APPEND-MOSTLY: RequestVendorMatch (review fields are written once)
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from landlording.db.session import Base
from landlording.models.common import VendorStatus


# ---------------------------------------------------------------------------
# Vendors
# ---------------------------------------------------------------------------


class VendorRow(Base):
    """Service provider with vetting credentials and cached performance score."""

    __tablename__ = "vendors"

    vendor_id: Mapped[UUID] = mapped_column(primary_key=True)
    business_name: Mapped[str] = mapped_column(String(255), nullable=False)
    contact_name: Mapped[str] = mapped_column(String(255), default="")
    email: Mapped[str] = mapped_column(String(320), nullable=False, index=True)
    status: Mapped[str] = mapped_column(
        String(50), nullable=False, default=VendorStatus.PENDING_REVIEW.value, index=True,
    )
    licensed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    insured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    years_in_business: Mapped[int | None] = mapped_column(Integer, nullable=True)
    vetting_score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    vetting_admin_adjustment: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    performance_score: Mapped[int] = mapped_column(Integer, nullable=False, default=50)
    total_reviews: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


# ---------------------------------------------------------------------------
# Matches (one optional review per match)
# ---------------------------------------------------------------------------


class MatchRow(Base):
    """Assignment of a vendor to a landlord's service request."""

    __tablename__ = "request_vendor_matches"

    match_id: Mapped[UUID] = mapped_column(primary_key=True)
    request_id: Mapped[UUID] = mapped_column(nullable=False, index=True)
    vendor_id: Mapped[UUID] = mapped_column(
        ForeignKey("vendors.vendor_id"), nullable=False, index=True,
    )
    vendor_accepted: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    job_completed: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    review_rating: Mapped[int | None] = mapped_column(Integer, nullable=True)
    review_quality: Mapped[int | None] = mapped_column(Integer, nullable=True)
    review_price: Mapped[int | None] = mapped_column(Integer, nullable=True)
    review_timeline: Mapped[int | None] = mapped_column(Integer, nullable=True)
    review_treatment: Mapped[int | None] = mapped_column(Integer, nullable=True)
    review_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    review_submitted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
