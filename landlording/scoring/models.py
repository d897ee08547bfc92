"""Scoring enums, input dataclasses, and result models.

Inputs (vetting credentials, reviews, per-vendor metrics) are plain
frozen dataclasses built by the store. Results are Pydantic models so
the API layer can serialise them directly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID

from pydantic import Field

from landlording.models.common import LandlordingBase, UTCTimestamp, utc_now


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class ScoreTier(StrEnum):
    """Display bucket for a performance score."""

    EXCELLENT = "excellent"
    GOOD = "good"
    AVERAGE = "average"
    BELOW_AVERAGE = "below_average"
    POOR = "poor"
    NEW = "new"


class VettingTier(StrEnum):
    """Display bucket for a vetting sub-score."""

    STRONG = "strong"
    GOOD = "good"
    ACCEPTABLE = "acceptable"
    CONDITIONAL = "conditional"
    DECLINED = "declined"


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class VettingInput:
    """Credentials that feed the vetting sub-score."""

    licensed: bool
    insured: bool
    years_in_business: float | None = None
    admin_adjustment: int = 0


@dataclass(frozen=True)
class Review:
    """One landlord review of a completed match.

    ``rating`` is the overall 1-5 rating; the four dimensional ratings
    are optional and, when present, replace it (see ``effective_rating``).
    """

    rating: float | None
    created_at: datetime
    quality: float | None = None
    price: float | None = None
    timeline: float | None = None
    treatment: float | None = None


@dataclass(frozen=True)
class VendorMetrics:
    """Everything needed to score one vendor."""

    vendor_id: UUID
    vetting: VettingInput
    reviews: list[Review] = field(default_factory=list)
    total_matches: int = 0
    accepted_jobs: int = 0
    completed_jobs: int = 0
    no_shows: int = 0
    last_activity_at: datetime | None = None


# ---------------------------------------------------------------------------
# Intermediate values
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class VettingScoreBreakdown:
    """Point contributions to the vetting sub-score (0-45)."""

    licensed_points: int
    insured_points: int
    years_points: int
    admin_adjustment: int
    total_score: int


@dataclass(frozen=True)
class ReviewAggregate:
    """Recency-weighted review sub-score (0-100) and the reviews it used."""

    score: float
    count: int
    recency_adjustment: float = 0.0
    one_star_count: int = 0


@dataclass(frozen=True)
class EngagementScores:
    """Job-history components (0-100 each) and the points they add.

    Completion and acceptance sit at the default score until there is
    enough history, so they contribute nothing for new vendors.
    """

    completion_score: float
    acceptance_score: float
    volume_bonus: float
    activity_bonus: float
    adjustment: float


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


class ScoreBreakdown(LandlordingBase):
    """Every intermediate value behind a vendor's final score."""

    vetting_points: int = Field(..., ge=0)
    vetting_score: float = Field(..., ge=0.0, le=100.0)
    review_score: float = Field(..., ge=0.0, le=100.0)
    review_count: int = Field(..., ge=0)
    review_weight: float = Field(..., ge=0.0, le=1.0)
    recency_adjustment: float = 0.0
    completion_score: float = Field(default=50.0, ge=0.0, le=100.0)
    acceptance_score: float = Field(default=50.0, ge=0.0, le=100.0)
    volume_bonus: float = Field(default=0.0, ge=0.0, le=100.0)
    activity_bonus: float = Field(default=0.0, ge=0.0, le=100.0)
    engagement_adjustment: float = 0.0
    penalties: float = Field(default=0.0, ge=0.0)
    raw_score: float
    final_score: int = Field(..., ge=0, le=100)


class ScoreResult(LandlordingBase):
    """Freshly computed score for one vendor. Not persisted as a whole."""

    vendor_id: UUID
    score: int = Field(..., ge=0, le=100)
    breakdown: ScoreBreakdown
    calculated_at: UTCTimestamp = Field(default_factory=utc_now)


class BatchUpdateResult(LandlordingBase):
    """Outcome of recalculating every active vendor."""

    updated: int = 0
    failed: int = 0
    results: list[ScoreResult] = Field(default_factory=list)
