"""FastAPI admin vendor vetting endpoint.

PATCH /v1/admin/vendors/{vendor_id}/vetting — change credentials,
recompute and persist the vetting score, then rescore the vendor.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from landlording.api.dependencies import require_admin
from landlording.scoring.service import ScoringService, VettingUpdateResult

router = APIRouter(prefix="/v1/admin/vendors", tags=["vendors"])


class VettingUpdateRequest(BaseModel):
    """Only the fields present in the request body are changed."""

    licensed: bool | None = None
    insured: bool | None = None
    years_in_business: int | None = None
    vetting_admin_adjustment: int | None = None


def _to_changes(body: VettingUpdateRequest) -> dict[str, object]:
    submitted = body.model_dump(exclude_unset=True)
    changes: dict[str, object] = {}
    for name in ("licensed", "insured"):
        if submitted.get(name) is not None:
            changes[name] = submitted[name]
    if "years_in_business" in submitted:
        changes["years_in_business"] = submitted["years_in_business"]
    if "vetting_admin_adjustment" in submitted:
        changes["admin_adjustment"] = submitted["vetting_admin_adjustment"] or 0
    return changes


@router.patch("/{vendor_id}/vetting", response_model=VettingUpdateResult)
async def update_vendor_vetting(
    vendor_id: UUID,
    body: VettingUpdateRequest,
    service: ScoringService = Depends(require_admin),
) -> VettingUpdateResult:
    changes = _to_changes(body)
    if not changes:
        raise HTTPException(status_code=400, detail="No vetting fields provided")

    result = await service.update_vetting(vendor_id, changes)
    if result is None:
        raise HTTPException(status_code=404, detail="Vendor not found")
    return result
