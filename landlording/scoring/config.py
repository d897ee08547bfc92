"""Vendor scoring configuration.

Every weight, threshold and decay constant used by the scoring engine.
Defaults give a fully credentialed vendor (licensed, insured, five or
more years) the full vetting sub-score, and hand most of the composite
to reviews once a vendor has ten of them.
"""

from __future__ import annotations

from pydantic import Field, model_validator

from landlording.models.common import LandlordingBase
from landlording.scoring.models import ScoreTier, VettingTier


class ScoringConfig(LandlordingBase):
    """Configuration for the vendor performance scoring engine."""

    # --- Score bounds ---
    min_score: int = 0
    max_score: int = 100
    default_score: int = 50

    # --- Vetting (points) ---
    licensed_points: int = Field(default=20, ge=0)
    insured_points: int = Field(default=15, ge=0)
    years_in_business_max_points: int = Field(default=10, ge=0)
    years_for_max_points: float = Field(default=5.0, gt=0)
    admin_adjustment_range: int = Field(default=10, ge=0)
    max_total_vetting_score: int = Field(default=45, gt=0)

    # --- Reviews ---
    recency_decay_days: int = Field(default=180, gt=0)
    recency_min_weight: float = Field(default=0.3, gt=0.0, le=1.0)

    # --- Vetting / review blend ---
    min_review_weight: float = Field(default=0.2, ge=0.0, le=1.0)
    max_review_weight: float = Field(default=0.9, ge=0.0, le=1.0)
    reviews_for_full_weight: int = Field(default=10, ge=1)

    # --- Penalties ---
    no_show_penalty: float = Field(default=10.0, ge=0.0)
    max_no_show_penalty: float = Field(default=30.0, ge=0.0)
    one_star_penalty: float = Field(default=5.0, ge=0.0)
    one_star_threshold: float = 1.5

    # --- Engagement (weighted component points added to the blend) ---
    completion_weight: float = Field(default=0.20, ge=0.0)
    acceptance_weight: float = Field(default=0.15, ge=0.0)
    volume_weight: float = Field(default=0.10, ge=0.0)
    activity_weight: float = Field(default=0.05, ge=0.0)
    min_jobs_for_completion_rate: int = Field(default=3, ge=1)
    min_matches_for_acceptance_rate: int = Field(default=3, ge=1)
    target_acceptance_rate: float = Field(default=0.7, gt=0.0, le=1.0)
    jobs_for_max_volume_bonus: int = Field(default=20, ge=1)
    activity_full_bonus_days: int = Field(default=30, ge=0)
    activity_zero_bonus_days: int = Field(default=180, gt=0)

    # --- Tiers (descending minimums) ---
    tier_thresholds: list[tuple[ScoreTier, int]] = Field(
        default_factory=lambda: [
            (ScoreTier.EXCELLENT, 85),
            (ScoreTier.GOOD, 70),
            (ScoreTier.AVERAGE, 50),
            (ScoreTier.BELOW_AVERAGE, 30),
            (ScoreTier.POOR, 0),
        ],
    )

    vetting_tier_thresholds: list[tuple[VettingTier, int]] = Field(
        default_factory=lambda: [
            (VettingTier.STRONG, 35),
            (VettingTier.GOOD, 30),
            (VettingTier.ACCEPTABLE, 25),
            (VettingTier.CONDITIONAL, 15),
        ],
    )

    @model_validator(mode="after")
    def _check_bounds(self) -> ScoringConfig:
        if self.min_review_weight > self.max_review_weight:
            raise ValueError("min_review_weight must not exceed max_review_weight")
        if self.min_score > self.default_score or self.default_score > self.max_score:
            raise ValueError("default_score must lie within [min_score, max_score]")
        if self.activity_full_bonus_days >= self.activity_zero_bonus_days:
            raise ValueError("activity_full_bonus_days must be below activity_zero_bonus_days")
        return self
