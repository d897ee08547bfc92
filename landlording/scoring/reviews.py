"""Recency-weighted review aggregation.

Each valid review is converted to a 0-100 score (1 star = 0, 3 stars = 50,
5 stars = 100) and weighted by age: full weight today, decaying linearly
to ``recency_min_weight`` at ``recency_decay_days`` and flat after that.
A vendor with no usable reviews sits at the default score.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from datetime import datetime

import numpy as np

from landlording.models.common import ensure_utc, utc_now
from landlording.scoring.config import ScoringConfig
from landlording.scoring.models import Review, ReviewAggregate


def _is_valid_rating(value: float | None) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and 1 <= value <= 5


def effective_rating(review: Review) -> float | None:
    """Average of the dimensional ratings if any, else the overall rating.

    Returns None when nothing usable is present.
    """
    dimensions = [
        d for d in (review.quality, review.price, review.timeline, review.treatment)
        if _is_valid_rating(d)
    ]
    if dimensions:
        return sum(dimensions) / len(dimensions)
    if _is_valid_rating(review.rating):
        return float(review.rating)  # type: ignore[arg-type]
    return None


def rating_to_score(rating: float) -> float:
    return max(0.0, min(100.0, (rating - 1.0) * 25.0))


def recency_weight(days_since_review: int, config: ScoringConfig | None = None) -> float:
    """Weight of a review submitted ``days_since_review`` days ago."""
    cfg = config or ScoringConfig()
    if days_since_review <= 0:
        return 1.0
    if days_since_review >= cfg.recency_decay_days:
        return cfg.recency_min_weight
    decay = days_since_review / cfg.recency_decay_days
    return 1.0 - decay * (1.0 - cfg.recency_min_weight)


def aggregate_reviews(
    reviews: Iterable[Review],
    *,
    now: datetime | None = None,
    config: ScoringConfig | None = None,
) -> ReviewAggregate:
    """Reduce a vendor's reviews to a single recency-weighted sub-score."""
    cfg = config or ScoringConfig()
    now = ensure_utc(now or utc_now())

    scores: list[float] = []
    weights: list[float] = []
    one_star_count = 0

    for review in reviews:
        rating = effective_rating(review)
        if rating is None:
            continue
        # Whole days, so repeated runs on the same day agree.
        days = max(0, (now - ensure_utc(review.created_at)).days)
        scores.append(rating_to_score(rating))
        weights.append(recency_weight(days, cfg))
        if rating <= cfg.one_star_threshold:
            one_star_count += 1

    if not scores:
        return ReviewAggregate(score=float(cfg.default_score), count=0)

    weighted = float(np.average(scores, weights=weights))
    unweighted = float(np.mean(scores))

    return ReviewAggregate(
        score=weighted,
        count=len(scores),
        recency_adjustment=weighted - unweighted,
        one_star_count=one_star_count,
    )
