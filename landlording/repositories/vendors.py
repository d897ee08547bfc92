"""Vendor and match repositories.

Repositories call add()/flush() only — never commit().
The caller owns the transaction.
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from landlording.db.tables import MatchRow, VendorRow
from landlording.models.common import VendorStatus, utc_now


class VendorRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, *, vendor_id: UUID, business_name: str, email: str,
                     contact_name: str = "",
                     status: VendorStatus = VendorStatus.PENDING_REVIEW,
                     licensed: bool = False, insured: bool = False,
                     years_in_business: int | None = None,
                     vetting_score: int | None = None,
                     vetting_admin_adjustment: int = 0,
                     performance_score: int = 50) -> VendorRow:
        now = utc_now()
        row = VendorRow(
            vendor_id=vendor_id, business_name=business_name,
            contact_name=contact_name, email=email, status=status.value,
            licensed=licensed, insured=insured,
            years_in_business=years_in_business,
            vetting_score=vetting_score,
            vetting_admin_adjustment=vetting_admin_adjustment,
            performance_score=performance_score, total_reviews=0,
            created_at=now, updated_at=now,
        )
        self._session.add(row)
        await self._session.flush()
        return row

    async def get(self, vendor_id: UUID) -> VendorRow | None:
        return await self._session.get(VendorRow, vendor_id)

    async def get_by_email(self, email: str) -> VendorRow | None:
        result = await self._session.execute(
            select(VendorRow).where(VendorRow.email == email)
        )
        return result.scalars().first()

    async def list_active(self) -> list[VendorRow]:
        result = await self._session.execute(
            select(VendorRow)
            .where(VendorRow.status == VendorStatus.ACTIVE.value)
            .order_by(VendorRow.performance_score.desc())
        )
        return list(result.scalars().all())

    async def list_active_ids(self) -> list[UUID]:
        result = await self._session.execute(
            select(VendorRow.vendor_id)
            .where(VendorRow.status == VendorStatus.ACTIVE.value)
            .order_by(VendorRow.created_at)
        )
        return list(result.scalars().all())

    async def update_score(self, vendor_id: UUID, *, performance_score: int,
                           total_reviews: int) -> VendorRow | None:
        row = await self.get(vendor_id)
        if row is not None:
            row.performance_score = performance_score
            row.total_reviews = total_reviews
            row.updated_at = utc_now()
            await self._session.flush()
        return row

    async def update_vetting(self, vendor_id: UUID, *, licensed: bool, insured: bool,
                             years_in_business: int | None,
                             vetting_admin_adjustment: int,
                             vetting_score: int) -> VendorRow | None:
        row = await self.get(vendor_id)
        if row is not None:
            row.licensed = licensed
            row.insured = insured
            row.years_in_business = years_in_business
            row.vetting_admin_adjustment = vetting_admin_adjustment
            row.vetting_score = vetting_score
            row.updated_at = utc_now()
            await self._session.flush()
        return row

    async def update_status(self, vendor_id: UUID, status: VendorStatus) -> VendorRow | None:
        row = await self.get(vendor_id)
        if row is not None:
            row.status = status.value
            row.updated_at = utc_now()
            await self._session.flush()
        return row


class MatchRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, *, match_id: UUID, request_id: UUID, vendor_id: UUID,
                     vendor_accepted: bool | None = None,
                     job_completed: bool | None = None) -> MatchRow:
        row = MatchRow(
            match_id=match_id, request_id=request_id, vendor_id=vendor_id,
            vendor_accepted=vendor_accepted, job_completed=job_completed,
            created_at=utc_now(),
        )
        self._session.add(row)
        await self._session.flush()
        return row

    async def get(self, match_id: UUID) -> MatchRow | None:
        return await self._session.get(MatchRow, match_id)

    async def list_for_vendor(self, vendor_id: UUID) -> list[MatchRow]:
        result = await self._session.execute(
            select(MatchRow)
            .where(MatchRow.vendor_id == vendor_id)
            .order_by(MatchRow.created_at)
        )
        return list(result.scalars().all())

    async def record_review(self, match_id: UUID, *, rating: int,
                            quality: int | None = None, price: int | None = None,
                            timeline: int | None = None, treatment: int | None = None,
                            text: str | None = None) -> MatchRow | None:
        """Attach a landlord review; marks the job completed."""
        row = await self.get(match_id)
        if row is not None:
            row.review_rating = rating
            row.review_quality = quality
            row.review_price = price
            row.review_timeline = timeline
            row.review_treatment = treatment
            row.review_text = text
            row.review_submitted_at = utc_now()
            row.job_completed = True
            await self._session.flush()
        return row
