"""SQL-backed score store.

Implements the scoring engine's storage collaborator on top of the
vendor and match repositories. Every call opens its own short-lived
session, so each vendor's write commits (or fails) on its own.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from landlording.db.tables import MatchRow, VendorRow
from landlording.models.common import ensure_utc
from landlording.repositories.vendors import MatchRepository, VendorRepository
from landlording.scoring.models import Review, VendorMetrics, VettingInput
from landlording.scoring.service import VendorScoreSnapshot


def vetting_input_from_row(vendor: VendorRow) -> VettingInput:
    return VettingInput(
        licensed=bool(vendor.licensed),
        insured=bool(vendor.insured),
        years_in_business=vendor.years_in_business,
        admin_adjustment=vendor.vetting_admin_adjustment or 0,
    )


def build_vendor_metrics(vendor: VendorRow, matches: list[MatchRow]) -> VendorMetrics:
    """Fold a vendor's matches into review and job counters.

    A match counts as a review only once both a rating and a submission
    time are present. Accepted jobs explicitly marked not completed are
    no-shows.
    """
    reviews: list[Review] = []
    accepted = completed = no_shows = 0
    last_activity = None

    for match in matches:
        if match.vendor_accepted is True:
            accepted += 1
            if match.job_completed is True:
                completed += 1
            elif match.job_completed is False:
                no_shows += 1

        if match.review_rating is not None and match.review_submitted_at is not None:
            reviews.append(Review(
                rating=match.review_rating,
                quality=match.review_quality,
                price=match.review_price,
                timeline=match.review_timeline,
                treatment=match.review_treatment,
                created_at=ensure_utc(match.review_submitted_at),
            ))

        created = ensure_utc(match.created_at)
        if last_activity is None or created > last_activity:
            last_activity = created

    return VendorMetrics(
        vendor_id=vendor.vendor_id,
        vetting=vetting_input_from_row(vendor),
        reviews=reviews,
        total_matches=len(matches),
        accepted_jobs=accepted,
        completed_jobs=completed,
        no_shows=no_shows,
        last_activity_at=last_activity,
    )


class SqlScoreStore:
    """ScoringBackend over the ``vendors`` and ``request_vendor_matches`` tables."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def list_active_vendor_ids(self) -> list[UUID]:
        async with self._session_factory() as session:
            return await VendorRepository(session).list_active_ids()

    async def list_active_vendors(self) -> list[VendorScoreSnapshot]:
        async with self._session_factory() as session:
            rows = await VendorRepository(session).list_active()
        return [
            VendorScoreSnapshot(
                vendor_id=row.vendor_id,
                business_name=row.business_name,
                contact_name=row.contact_name or "",
                status=row.status,
                performance_score=row.performance_score,
                total_reviews=row.total_reviews,
            )
            for row in rows
        ]

    async def load_vendor_metrics(self, vendor_id: UUID) -> VendorMetrics | None:
        async with self._session_factory() as session:
            vendor = await VendorRepository(session).get(vendor_id)
            if vendor is None:
                return None
            matches = await MatchRepository(session).list_for_vendor(vendor_id)
        return build_vendor_metrics(vendor, matches)

    async def save_vendor_score(self, vendor_id: UUID, *, performance_score: int,
                                total_reviews: int) -> None:
        async with self._session_factory() as session, session.begin():
            row = await VendorRepository(session).update_score(
                vendor_id,
                performance_score=performance_score,
                total_reviews=total_reviews,
            )
            if row is None:
                raise LookupError(f"Vendor {vendor_id} not found")

    async def load_vetting_input(self, vendor_id: UUID) -> VettingInput | None:
        async with self._session_factory() as session:
            vendor = await VendorRepository(session).get(vendor_id)
        return vetting_input_from_row(vendor) if vendor is not None else None

    async def save_vetting(self, vendor_id: UUID, vetting: VettingInput,
                           vetting_score: int) -> None:
        years = vetting.years_in_business
        async with self._session_factory() as session, session.begin():
            row = await VendorRepository(session).update_vetting(
                vendor_id,
                licensed=vetting.licensed,
                insured=vetting.insured,
                years_in_business=int(years) if years is not None else None,
                vetting_admin_adjustment=vetting.admin_adjustment,
                vetting_score=vetting_score,
            )
            if row is None:
                raise LookupError(f"Vendor {vendor_id} not found")
