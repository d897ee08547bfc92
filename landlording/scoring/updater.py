"""Batch score updater.

Recomputes and persists vendor performance scores through a ``ScoreStore``.
Each vendor's read-compute-write cycle is independent: a failure for one
vendor is logged and counted, never raised, and never stops the batch.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Protocol
from uuid import UUID

from landlording.scoring.calculate import calculate_vendor_score
from landlording.scoring.config import ScoringConfig
from landlording.scoring.models import BatchUpdateResult, ScoreResult, VendorMetrics

logger = logging.getLogger(__name__)


class ScoreStore(Protocol):
    """Storage collaborator required by the updater."""

    async def list_active_vendor_ids(self) -> list[UUID]:
        ...

    async def load_vendor_metrics(self, vendor_id: UUID) -> VendorMetrics | None:
        ...

    async def save_vendor_score(
        self, vendor_id: UUID, *, performance_score: int, total_reviews: int,
    ) -> None:
        ...


async def update_vendor_score(
    store: ScoreStore,
    vendor_id: UUID,
    *,
    now: datetime | None = None,
    config: ScoringConfig | None = None,
) -> ScoreResult | None:
    """Calculate and persist one vendor's score.

    Returns None if the vendor cannot be loaded or the store fails.
    """
    try:
        metrics = await store.load_vendor_metrics(vendor_id)
        if metrics is None:
            logger.warning("Vendor %s not found; score not updated", vendor_id)
            return None

        result = calculate_vendor_score(metrics, now=now, config=config)

        await store.save_vendor_score(
            vendor_id,
            performance_score=result.score,
            total_reviews=result.breakdown.review_count,
        )
    except Exception:
        logger.exception("Failed to update score for vendor %s", vendor_id)
        return None

    return result


async def update_all_vendor_scores(
    store: ScoreStore,
    *,
    now: datetime | None = None,
    config: ScoringConfig | None = None,
) -> BatchUpdateResult:
    """Calculate and persist scores for every active vendor, sequentially."""
    try:
        vendor_ids = await store.list_active_vendor_ids()
    except Exception:
        logger.exception("Failed to list active vendors")
        return BatchUpdateResult()

    batch = BatchUpdateResult()
    for vendor_id in vendor_ids:
        result = await update_vendor_score(store, vendor_id, now=now, config=config)
        if result is None:
            batch.failed += 1
        else:
            batch.updated += 1
            batch.results.append(result)

    logger.info(
        "Updated %d vendor scores (%d failed)", batch.updated, batch.failed,
    )
    return batch
