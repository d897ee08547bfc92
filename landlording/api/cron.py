"""FastAPI scheduled-job endpoints.

POST /v1/cron/update-scores — recalculate every active vendor (daily)
GET  /v1/cron/update-scores — describe the endpoint (no auth)

POST requires ``Authorization: Bearer <CRON_SECRET>``.
"""

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from landlording.api.dependencies import require_cron
from landlording.scoring.service import ScoringService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/cron", tags=["cron"])


class CronStats(BaseModel):
    updated: int
    failed: int
    duration_ms: int
    tier_distribution: dict[str, int] = Field(default_factory=dict)
    average_score: int


class CronUpdateResponse(BaseModel):
    success: bool
    message: str
    stats: CronStats


@router.post("/update-scores", response_model=CronUpdateResponse)
async def run_score_update(
    service: ScoringService = Depends(require_cron),
) -> CronUpdateResponse:
    summary = await service.recalculate_all()

    logger.info(
        "[cron] Updated %d vendor scores in %dms (%d failed)",
        summary.updated, summary.duration_ms, summary.failed,
    )

    return CronUpdateResponse(
        success=True,
        message=f"Updated {summary.updated} vendor scores",
        stats=CronStats(
            updated=summary.updated,
            failed=summary.failed,
            duration_ms=summary.duration_ms,
            tier_distribution=summary.tier_distribution,
            average_score=summary.average_score,
        ),
    )


@router.get("/update-scores")
async def describe_score_update() -> dict[str, str]:
    return {
        "endpoint": "/v1/cron/update-scores",
        "method": "POST",
        "description": "Recalculates all vendor performance scores",
        "authentication": "Bearer token (CRON_SECRET)",
        "schedule": "Daily recommended",
    }
