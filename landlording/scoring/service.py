"""Scoring service: the capability handed to authorised callers.

Wraps a ``ScoringBackend`` and exposes only scoring operations
(recalculation, scoreboard, vetting updates). HTTP handlers receive a
``ScoringService`` from their authorisation dependency and never touch
a database session directly.
"""

from __future__ import annotations

import dataclasses
import time
from collections import Counter
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from pydantic import Field

from landlording.models.common import LandlordingBase, round_half_up
from landlording.scoring.calculate import get_score_tier
from landlording.scoring.config import ScoringConfig
from landlording.scoring.models import ScoreResult, ScoreTier, VettingInput, VettingTier
from landlording.scoring.updater import ScoreStore, update_all_vendor_scores, update_vendor_score
from landlording.scoring.vetting import (
    calculate_vetting_score,
    describe_vetting_score,
    get_vetting_tier,
)

# Fields an admin may change through ``update_vetting``.
VETTING_FIELDS: frozenset[str] = frozenset(
    {"licensed", "insured", "years_in_business", "admin_adjustment"}
)


@dataclass(frozen=True)
class VendorScoreSnapshot:
    """Persisted score columns for one vendor."""

    vendor_id: UUID
    business_name: str
    contact_name: str
    status: str
    performance_score: int | None
    total_reviews: int | None


class ScoringBackend(ScoreStore, Protocol):
    """Store operations the service needs beyond the updater's."""

    async def list_active_vendors(self) -> list[VendorScoreSnapshot]:
        ...

    async def load_vetting_input(self, vendor_id: UUID) -> VettingInput | None:
        ...

    async def save_vetting(
        self, vendor_id: UUID, vetting: VettingInput, vetting_score: int,
    ) -> None:
        ...


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------


class RecalculationSummary(LandlordingBase):
    updated: int
    failed: int
    duration_ms: int
    tier_distribution: dict[str, int] = Field(default_factory=dict)
    average_score: int
    results: list[ScoreResult] = Field(default_factory=list)


class ScoreboardEntry(LandlordingBase):
    vendor_id: UUID
    business_name: str
    contact_name: str
    status: str
    performance_score: int
    total_reviews: int
    tier: ScoreTier


class ScoreboardSummary(LandlordingBase):
    total: int
    with_reviews: int
    average_score: int


class Scoreboard(LandlordingBase):
    vendors: list[ScoreboardEntry]
    summary: ScoreboardSummary


class VettingUpdateResult(LandlordingBase):
    vendor_id: UUID
    licensed: bool
    insured: bool
    years_in_business: float | None
    admin_adjustment: int
    vetting_score: int
    vetting_tier: VettingTier
    description: str
    performance_score: int | None = None


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class ScoringService:
    """Scoped scoring operations over a ``ScoringBackend``."""

    def __init__(self, backend: ScoringBackend, config: ScoringConfig | None = None) -> None:
        self._backend = backend
        self._config = config or ScoringConfig()

    async def recalculate_vendor(self, vendor_id: UUID) -> ScoreResult | None:
        return await update_vendor_score(self._backend, vendor_id, config=self._config)

    async def recalculate_all(self) -> RecalculationSummary:
        """Recalculate every active vendor and summarise by tier."""
        started = time.perf_counter()
        batch = await update_all_vendor_scores(self._backend, config=self._config)
        duration_ms = int((time.perf_counter() - started) * 1000)

        tiers = Counter(
            self.tier_for(r.score, r.breakdown.review_count).value for r in batch.results
        )
        average = (
            round_half_up(sum(r.score for r in batch.results) / len(batch.results))
            if batch.results else 0
        )

        return RecalculationSummary(
            updated=batch.updated,
            failed=batch.failed,
            duration_ms=duration_ms,
            tier_distribution=dict(tiers),
            average_score=average,
            results=batch.results,
        )

    async def scoreboard(self) -> Scoreboard:
        """Active vendors ordered by score, with tiers and a summary."""
        default = self._config.default_score
        snapshots = await self._backend.list_active_vendors()

        entries = [
            ScoreboardEntry(
                vendor_id=s.vendor_id,
                business_name=s.business_name,
                contact_name=s.contact_name,
                status=s.status,
                performance_score=s.performance_score if s.performance_score is not None else default,
                total_reviews=s.total_reviews or 0,
                tier=self.tier_for(
                    s.performance_score if s.performance_score is not None else default,
                    s.total_reviews or 0,
                ),
            )
            for s in snapshots
        ]
        entries.sort(key=lambda e: e.performance_score, reverse=True)

        average = (
            round_half_up(sum(e.performance_score for e in entries) / len(entries))
            if entries else default
        )
        return Scoreboard(
            vendors=entries,
            summary=ScoreboardSummary(
                total=len(entries),
                with_reviews=sum(1 for e in entries if e.total_reviews > 0),
                average_score=average,
            ),
        )

    async def update_vetting(
        self, vendor_id: UUID, changes: dict[str, object],
    ) -> VettingUpdateResult | None:
        """Apply credential changes, persist the new vetting score, rescore.

        Returns None for an unknown vendor.
        """
        unknown = set(changes) - VETTING_FIELDS
        if unknown:
            raise ValueError(f"Not vetting fields: {', '.join(sorted(unknown))}")

        current = await self._backend.load_vetting_input(vendor_id)
        if current is None:
            return None

        updated = dataclasses.replace(current, **changes)
        breakdown = calculate_vetting_score(updated, self._config)
        # Store the clamped adjustment, not whatever was submitted.
        updated = dataclasses.replace(updated, admin_adjustment=breakdown.admin_adjustment)
        await self._backend.save_vetting(vendor_id, updated, breakdown.total_score)

        rescored = await self.recalculate_vendor(vendor_id)

        return VettingUpdateResult(
            vendor_id=vendor_id,
            licensed=updated.licensed,
            insured=updated.insured,
            years_in_business=updated.years_in_business,
            admin_adjustment=breakdown.admin_adjustment,
            vetting_score=breakdown.total_score,
            vetting_tier=get_vetting_tier(breakdown.total_score, self._config),
            description=describe_vetting_score(breakdown),
            performance_score=rescored.score if rescored is not None else None,
        )

    def tier_for(self, score: float, review_count: int) -> ScoreTier:
        return get_score_tier(score, review_count > 0, self._config)
