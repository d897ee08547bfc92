"""Vendor vetting score calculator.

Point distribution (defaults from ScoringConfig):
- Licensed: 20 points
- Insured: 15 points
- Years in business: 2 points per year, max 10 (reached at 5 years)
- Admin adjustment: +/-10 points

Total clamped to 0-45. Never raises: missing or negative tenure scores 0.
"""

from __future__ import annotations

from landlording.models.common import round_half_up
from landlording.scoring.config import ScoringConfig
from landlording.scoring.models import VettingInput, VettingScoreBreakdown, VettingTier


def calculate_vetting_score(
    vetting: VettingInput,
    config: ScoringConfig | None = None,
) -> VettingScoreBreakdown:
    """Calculate the vetting sub-score from vendor credentials."""
    cfg = config or ScoringConfig()

    licensed_points = cfg.licensed_points if vetting.licensed else 0
    insured_points = cfg.insured_points if vetting.insured else 0

    years_points = 0
    years = vetting.years_in_business
    if years is not None and years > 0:
        years_ratio = min(years / cfg.years_for_max_points, 1.0)
        years_points = round_half_up(years_ratio * cfg.years_in_business_max_points)

    admin_adjustment = max(
        -cfg.admin_adjustment_range,
        min(cfg.admin_adjustment_range, vetting.admin_adjustment or 0),
    )

    raw_total = licensed_points + insured_points + years_points + admin_adjustment
    total_score = max(0, min(cfg.max_total_vetting_score, raw_total))

    return VettingScoreBreakdown(
        licensed_points=licensed_points,
        insured_points=insured_points,
        years_points=years_points,
        admin_adjustment=admin_adjustment,
        total_score=total_score,
    )


def normalize_vetting_score(points: int | None, config: ScoringConfig | None = None) -> float:
    """Scale vetting points (0-45) to the 0-100 range used by the composite.

    Vendors without a vetting score sit at the neutral default.
    """
    cfg = config or ScoringConfig()
    if points is None:
        return float(cfg.default_score)
    return max(0.0, min(100.0, points / cfg.max_total_vetting_score * 100.0))


def get_vetting_tier(score: int, config: ScoringConfig | None = None) -> VettingTier:
    cfg = config or ScoringConfig()
    for tier, minimum in cfg.vetting_tier_thresholds:
        if score >= minimum:
            return tier
    return VettingTier.DECLINED


def describe_vetting_score(breakdown: VettingScoreBreakdown) -> str:
    """Human-readable summary, e.g. ``"Licensed: +20, Insured: +15"``."""
    parts: list[str] = []
    if breakdown.licensed_points > 0:
        parts.append(f"Licensed: +{breakdown.licensed_points}")
    if breakdown.insured_points > 0:
        parts.append(f"Insured: +{breakdown.insured_points}")
    if breakdown.years_points > 0:
        parts.append(f"Experience: +{breakdown.years_points}")
    if breakdown.admin_adjustment != 0:
        parts.append(f"Admin: {breakdown.admin_adjustment:+d}")
    return ", ".join(parts) or "No factors"
