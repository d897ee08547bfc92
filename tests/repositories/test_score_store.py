"""Tests for the SQL-backed score store and metric folding."""

from datetime import timedelta
from uuid import UUID

import pytest
from uuid_extensions import uuid7

from landlording.db.tables import MatchRow, VendorRow
from landlording.models.common import VendorStatus, utc_now
from landlording.repositories.scoring import SqlScoreStore, build_vendor_metrics
from landlording.repositories.vendors import VendorRepository
from landlording.scoring.models import VettingInput
from landlording.scoring.updater import update_all_vendor_scores


def _match(vendor_id: UUID, **kwargs) -> MatchRow:
    values = dict(
        match_id=uuid7(), request_id=uuid7(), vendor_id=vendor_id, created_at=utc_now(),
    )
    values.update(kwargs)
    return MatchRow(**values)


class TestBuildVendorMetrics:

    def test_folds_matches_into_counters(self) -> None:
        now = utc_now()
        vendor = VendorRow(
            vendor_id=uuid7(), licensed=True, insured=False, years_in_business=3,
            vetting_admin_adjustment=None,
        )
        matches = [
            _match(vendor.vendor_id, vendor_accepted=True, job_completed=True,
                   review_rating=5, review_submitted_at=now - timedelta(days=2)),
            _match(vendor.vendor_id, vendor_accepted=True, job_completed=False),
            _match(vendor.vendor_id, vendor_accepted=True, job_completed=None),
            _match(vendor.vendor_id, vendor_accepted=False),
            # rating without a submission time is not yet a review
            _match(vendor.vendor_id, vendor_accepted=True, job_completed=True, review_rating=2),
        ]

        metrics = build_vendor_metrics(vendor, matches)

        assert metrics.vetting == VettingInput(
            licensed=True, insured=False, years_in_business=3, admin_adjustment=0,
        )
        assert metrics.total_matches == 5
        assert metrics.accepted_jobs == 4
        assert metrics.completed_jobs == 2
        assert metrics.no_shows == 1
        assert len(metrics.reviews) == 1
        assert metrics.reviews[0].rating == 5
        assert metrics.last_activity_at == max(m.created_at for m in matches)

    def test_dimensional_ratings_carried(self) -> None:
        vendor = VendorRow(vendor_id=uuid7(), licensed=False, insured=False)
        match = _match(
            vendor.vendor_id, review_rating=3, review_quality=4, review_price=2,
            review_timeline=5, review_treatment=1, review_submitted_at=utc_now(),
        )

        review = build_vendor_metrics(vendor, [match]).reviews[0]

        assert (review.quality, review.price, review.timeline, review.treatment) == (4, 2, 5, 1)

    def test_no_matches(self) -> None:
        vendor = VendorRow(vendor_id=uuid7(), licensed=False, insured=False)
        metrics = build_vendor_metrics(vendor, [])
        assert metrics.reviews == []
        assert metrics.last_activity_at is None


class TestSqlScoreStore:

    @pytest.mark.anyio
    async def test_lists_only_active_vendors(self, session_factory, make_vendor) -> None:
        active = await make_vendor()
        await make_vendor(status=VendorStatus.PENDING_REVIEW.value)

        store = SqlScoreStore(session_factory)

        assert await store.list_active_vendor_ids() == [active.vendor_id]
        snapshots = await store.list_active_vendors()
        assert [s.vendor_id for s in snapshots] == [active.vendor_id]
        assert snapshots[0].business_name == "Test Vendor"

    @pytest.mark.anyio
    async def test_load_vendor_metrics(self, session_factory, make_vendor, make_match) -> None:
        vendor = await make_vendor(licensed=True, insured=True, years_in_business=6)
        await make_match(vendor.vendor_id, vendor_accepted=True, job_completed=True,
                         review_rating=4, review_submitted_at=utc_now())
        await make_match(vendor.vendor_id, vendor_accepted=True, job_completed=False)

        metrics = await SqlScoreStore(session_factory).load_vendor_metrics(vendor.vendor_id)

        assert metrics is not None
        assert metrics.vetting.licensed is True
        assert len(metrics.reviews) == 1
        assert metrics.reviews[0].created_at.tzinfo is not None
        assert metrics.no_shows == 1

    @pytest.mark.anyio
    async def test_load_missing_vendor(self, session_factory) -> None:
        assert await SqlScoreStore(session_factory).load_vendor_metrics(uuid7()) is None

    @pytest.mark.anyio
    async def test_save_vendor_score_commits(self, session_factory, make_vendor) -> None:
        vendor = await make_vendor()

        await SqlScoreStore(session_factory).save_vendor_score(
            vendor.vendor_id, performance_score=83, total_reviews=9,
        )

        async with session_factory() as session:
            row = await VendorRepository(session).get(vendor.vendor_id)
        assert row is not None
        assert (row.performance_score, row.total_reviews) == (83, 9)

    @pytest.mark.anyio
    async def test_save_score_for_missing_vendor_raises(self, session_factory) -> None:
        with pytest.raises(LookupError):
            await SqlScoreStore(session_factory).save_vendor_score(
                uuid7(), performance_score=10, total_reviews=0,
            )

    @pytest.mark.anyio
    async def test_vetting_round_trip(self, session_factory, make_vendor) -> None:
        vendor = await make_vendor()
        store = SqlScoreStore(session_factory)

        await store.save_vetting(
            vendor.vendor_id,
            VettingInput(licensed=True, insured=False, years_in_business=2.0, admin_adjustment=5),
            29,
        )

        loaded = await store.load_vetting_input(vendor.vendor_id)
        assert loaded == VettingInput(
            licensed=True, insured=False, years_in_business=2, admin_adjustment=5,
        )
        async with session_factory() as session:
            row = await VendorRepository(session).get(vendor.vendor_id)
        assert row is not None
        assert row.vetting_score == 29

    @pytest.mark.anyio
    async def test_load_vetting_missing_vendor(self, session_factory) -> None:
        assert await SqlScoreStore(session_factory).load_vetting_input(uuid7()) is None


class _FlakyStore(SqlScoreStore):
    """Fails reads for one vendor."""

    def __init__(self, session_factory, broken: UUID) -> None:
        super().__init__(session_factory)
        self._broken = broken

    async def load_vendor_metrics(self, vendor_id):
        if vendor_id == self._broken:
            raise ConnectionError("simulated read failure")
        return await super().load_vendor_metrics(vendor_id)


class TestBatchAgainstDatabase:

    @pytest.mark.anyio
    async def test_failure_does_not_roll_back_other_vendors(
        self, session_factory, make_vendor, make_match,
    ) -> None:
        vendors = [await make_vendor(licensed=True, insured=True, years_in_business=10)
                   for _ in range(5)]
        for v in vendors:
            await make_match(v.vendor_id, vendor_accepted=True, job_completed=True,
                             review_rating=5, review_submitted_at=utc_now())

        store = _FlakyStore(session_factory, broken=vendors[2].vendor_id)
        batch = await update_all_vendor_scores(store)

        assert (batch.updated, batch.failed) == (4, 1)
        async with session_factory() as session:
            repo = VendorRepository(session)
            for i, v in enumerate(vendors):
                row = await repo.get(v.vendor_id)
                assert row is not None
                if i == 2:
                    assert row.total_reviews == 0
                else:
                    assert row.total_reviews == 1
                    assert row.performance_score == 100
