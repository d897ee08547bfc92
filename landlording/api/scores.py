"""FastAPI admin score endpoints.

GET  /v1/admin/scores   — scoreboard of active vendors with tiers
POST /v1/admin/scores   — recalculate one vendor ({"vendor_id": ...}) or all

Admin bearer token required. Recalculation is rate limited per client.
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from landlording.api.dependencies import require_admin
from landlording.api.rate_limit import limit_admin_recalculation
from landlording.scoring.models import ScoreResult, ScoreTier
from landlording.scoring.service import Scoreboard, ScoringService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/admin/scores", tags=["scores"])


# ---------------------------------------------------------------------------
# Request / Response schemas
# ---------------------------------------------------------------------------


class RecalculateRequest(BaseModel):
    vendor_id: UUID | None = None


class VendorRecalculatedResponse(BaseModel):
    message: str
    result: ScoreResult


class RecalculatedVendor(BaseModel):
    vendor_id: UUID
    score: int
    review_count: int
    tier: ScoreTier


class AllRecalculatedResponse(BaseModel):
    message: str
    updated: int
    failed: int
    results: list[RecalculatedVendor]


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.get("", response_model=Scoreboard)
async def get_scoreboard(
    service: ScoringService = Depends(require_admin),
) -> Scoreboard:
    return await service.scoreboard()


@router.post("", response_model=VendorRecalculatedResponse | AllRecalculatedResponse)
async def recalculate_scores(
    body: RecalculateRequest | None = None,
    service: ScoringService = Depends(limit_admin_recalculation),
) -> VendorRecalculatedResponse | AllRecalculatedResponse:
    """Recalculate a single vendor when ``vendor_id`` is given, else all."""
    if body is not None and body.vendor_id is not None:
        result = await service.recalculate_vendor(body.vendor_id)
        if result is None:
            raise HTTPException(status_code=500, detail="Failed to update vendor score")
        return VendorRecalculatedResponse(message="Vendor score updated", result=result)

    summary = await service.recalculate_all()
    message = f"Updated {summary.updated} vendor scores"
    if summary.failed > 0:
        message += f", {summary.failed} failed"
    logger.info(message)

    return AllRecalculatedResponse(
        message=message,
        updated=summary.updated,
        failed=summary.failed,
        results=[
            RecalculatedVendor(
                vendor_id=r.vendor_id,
                score=r.score,
                review_count=r.breakdown.review_count,
                tier=service.tier_for(r.score, r.breakdown.review_count),
            )
            for r in summary.results
        ],
    )
