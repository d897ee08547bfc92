"""Composite vendor performance score.

Blends the normalised vetting sub-score with the review sub-score. The
review share grows with review volume, from ``min_review_weight`` with
no reviews to ``max_review_weight`` at ``reviews_for_full_weight``, so a
couple of reviews cannot dominate a vendor's reputation. Job history
(completion, acceptance, volume, recent activity) then adds weighted
points, and penalties for no-shows and 1-star reviews are subtracted
before rounding and clamping.
"""

from __future__ import annotations

from datetime import datetime

from landlording.models.common import ensure_utc, round_half_up, utc_now
from landlording.scoring.config import ScoringConfig
from landlording.scoring.models import (
    EngagementScores,
    ReviewAggregate,
    ScoreBreakdown,
    ScoreResult,
    ScoreTier,
    VendorMetrics,
)
from landlording.scoring.reviews import aggregate_reviews
from landlording.scoring.vetting import calculate_vetting_score, normalize_vetting_score


def review_weight(review_count: int, config: ScoringConfig | None = None) -> float:
    """Share of the composite carried by the review sub-score."""
    cfg = config or ScoringConfig()
    confidence = min(1.0, max(0, review_count) / cfg.reviews_for_full_weight)
    return cfg.min_review_weight + (cfg.max_review_weight - cfg.min_review_weight) * confidence


def clamp_score(value: float, config: ScoringConfig | None = None) -> int:
    """Round (halves up), then clamp to [min_score, max_score]."""
    cfg = config or ScoringConfig()
    return max(cfg.min_score, min(cfg.max_score, round_half_up(value)))


def _blend(
    vetting_score: float,
    review_score: float,
    review_count: int,
    cfg: ScoringConfig,
) -> tuple[float, float]:
    weight = review_weight(review_count, cfg)
    return vetting_score * (1.0 - weight) + review_score * weight, weight


def combine(
    vetting_score: float,
    review_score: float,
    review_count: int,
    config: ScoringConfig | None = None,
) -> int:
    """Blend a 0-100 vetting sub-score and review sub-score into 0-100."""
    cfg = config or ScoringConfig()
    blended, _ = _blend(vetting_score, review_score, review_count, cfg)
    return clamp_score(blended, cfg)


# ---------------------------------------------------------------------------
# Job history
# ---------------------------------------------------------------------------


def completion_score(metrics: VendorMetrics, config: ScoringConfig | None = None) -> float:
    """Completed / accepted jobs as 0-100; default score below the minimum."""
    cfg = config or ScoringConfig()
    if metrics.accepted_jobs < cfg.min_jobs_for_completion_rate:
        return float(cfg.default_score)
    return min(1.0, max(0, metrics.completed_jobs) / metrics.accepted_jobs) * 100.0


def acceptance_score(metrics: VendorMetrics, config: ScoringConfig | None = None) -> float:
    """Accepted / offered matches as 0-100, full marks at the target rate."""
    cfg = config or ScoringConfig()
    if metrics.total_matches < cfg.min_matches_for_acceptance_rate:
        return float(cfg.default_score)
    rate = max(0, metrics.accepted_jobs) / metrics.total_matches
    return min(1.0, rate / cfg.target_acceptance_rate) * 100.0


def volume_bonus(metrics: VendorMetrics, config: ScoringConfig | None = None) -> float:
    cfg = config or ScoringConfig()
    jobs = min(max(0, metrics.completed_jobs), cfg.jobs_for_max_volume_bonus)
    return jobs / cfg.jobs_for_max_volume_bonus * 100.0


def activity_bonus(
    last_activity_at: datetime | None,
    *,
    now: datetime | None = None,
    config: ScoringConfig | None = None,
) -> float:
    """100 within the full-bonus window, linear down to 0, 0 with no activity."""
    cfg = config or ScoringConfig()
    if last_activity_at is None:
        return 0.0
    now = ensure_utc(now or utc_now())
    days = max(0, (now - ensure_utc(last_activity_at)).days)
    if days <= cfg.activity_full_bonus_days:
        return 100.0
    if days >= cfg.activity_zero_bonus_days:
        return 0.0
    span = cfg.activity_zero_bonus_days - cfg.activity_full_bonus_days
    return 100.0 - (days - cfg.activity_full_bonus_days) / span * 100.0


def calculate_engagement(
    metrics: VendorMetrics,
    *,
    now: datetime | None = None,
    config: ScoringConfig | None = None,
) -> EngagementScores:
    """Score job history; the adjustment is zero for a vendor with no matches.

    Completion and acceptance move the score either way around the default;
    volume and activity only add.
    """
    cfg = config or ScoringConfig()
    completion = completion_score(metrics, cfg)
    acceptance = acceptance_score(metrics, cfg)
    volume = volume_bonus(metrics, cfg)
    activity = activity_bonus(metrics.last_activity_at, now=now, config=cfg)

    adjustment = (
        cfg.completion_weight * (completion - cfg.default_score)
        + cfg.acceptance_weight * (acceptance - cfg.default_score)
        + cfg.volume_weight * volume
        + cfg.activity_weight * activity
    )
    return EngagementScores(
        completion_score=completion,
        acceptance_score=acceptance,
        volume_bonus=volume,
        activity_bonus=activity,
        adjustment=adjustment,
    )


def calculate_penalties(
    metrics: VendorMetrics,
    reviews: ReviewAggregate,
    config: ScoringConfig | None = None,
) -> float:
    cfg = config or ScoringConfig()
    no_show_penalty = min(max(0, metrics.no_shows) * cfg.no_show_penalty, cfg.max_no_show_penalty)
    return no_show_penalty + reviews.one_star_count * cfg.one_star_penalty


# ---------------------------------------------------------------------------
# Composite
# ---------------------------------------------------------------------------


def calculate_vendor_score(
    metrics: VendorMetrics,
    *,
    now: datetime | None = None,
    config: ScoringConfig | None = None,
) -> ScoreResult:
    """Calculate a vendor's performance score with full breakdown."""
    cfg = config or ScoringConfig()
    now = ensure_utc(now or utc_now())

    vetting = calculate_vetting_score(metrics.vetting, cfg)
    vetting_score = normalize_vetting_score(vetting.total_score, cfg)
    reviews = aggregate_reviews(metrics.reviews, now=now, config=cfg)

    blended, weight = _blend(vetting_score, reviews.score, reviews.count, cfg)
    engagement = calculate_engagement(metrics, now=now, config=cfg)
    penalties = calculate_penalties(metrics, reviews, cfg)
    raw_score = blended + engagement.adjustment - penalties
    final_score = clamp_score(raw_score, cfg)

    return ScoreResult(
        vendor_id=metrics.vendor_id,
        score=final_score,
        breakdown=ScoreBreakdown(
            vetting_points=vetting.total_score,
            vetting_score=vetting_score,
            review_score=reviews.score,
            review_count=reviews.count,
            review_weight=weight,
            recency_adjustment=reviews.recency_adjustment,
            completion_score=engagement.completion_score,
            acceptance_score=engagement.acceptance_score,
            volume_bonus=engagement.volume_bonus,
            activity_bonus=engagement.activity_bonus,
            engagement_adjustment=engagement.adjustment,
            penalties=penalties,
            raw_score=raw_score,
            final_score=final_score,
        ),
    )


def get_score_tier(
    score: float,
    has_reviews: bool,
    config: ScoringConfig | None = None,
) -> ScoreTier:
    """Display tier for a score. Vendors without reviews are always ``new``."""
    if not has_reviews:
        return ScoreTier.NEW
    cfg = config or ScoringConfig()
    for tier, minimum in cfg.tier_thresholds:
        if score >= minimum:
            return tier
    return ScoreTier.POOR
