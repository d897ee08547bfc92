"""Seed script — load demo vendors and reviewed matches into the database.

Creates:
1. Five active vendors spanning the vetting range (fully credentialed to
   unlicensed newcomer) plus one vendor still pending review
2. One completed match per landlord review plus one declined match per vendor,
   with reviews spread over the past year

Idempotent: safe to run multiple times — skips if the demo vendors exist.
After seeding, ``python -m scripts.seed`` recalculates every active score.

Usage:
    python -m scripts.seed          # against DATABASE_URL from .env
"""

import asyncio
import sys
from datetime import timedelta
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession
from uuid_extensions import uuid7

from landlording.db.tables import VendorRow
from landlording.models.common import VendorStatus, utc_now
from landlording.repositories.vendors import MatchRepository, VendorRepository
from landlording.scoring.models import VettingInput
from landlording.scoring.vetting import calculate_vetting_score

DEMO_EMAIL_DOMAIN = "demo.reallandlording.test"

# (business, contact, licensed, insured, years, status, reviews as (rating, days_ago))
DEMO_VENDORS: list[tuple[str, str, bool, bool, int | None, VendorStatus, list[tuple[int, int]]]] = [
    ("Keystone Plumbing", "Dana Ruiz", True, True, 12, VendorStatus.ACTIVE,
     [(5, 3), (5, 10), (4, 25), (5, 40), (5, 60), (4, 90), (5, 120), (5, 200)]),
    ("Liberty Electric", "Sam Okafor", True, True, 4, VendorStatus.ACTIVE,
     [(4, 5), (4, 30), (3, 75), (4, 150)]),
    ("Schuylkill Roofing", "Pat Nguyen", True, False, 2, VendorStatus.ACTIVE,
     [(3, 14), (2, 45), (3, 100)]),
    ("Fishtown Handyman", "Alex Byrne", False, False, 1, VendorStatus.ACTIVE,
     [(1, 7), (2, 20)]),
    ("Brewerytown HVAC", "Jordan Lee", True, True, None, VendorStatus.ACTIVE, []),
    ("Germantown Painters", "Riley Chen", False, True, 3, VendorStatus.PENDING_REVIEW, []),
]


def _demo_email(business_name: str) -> str:
    slug = business_name.lower().replace(" ", "-")
    return f"{slug}@{DEMO_EMAIL_DOMAIN}"


async def seed_vendor(
    session: AsyncSession,
    business_name: str,
    contact_name: str,
    licensed: bool,
    insured: bool,
    years_in_business: int | None,
    status: VendorStatus,
    reviews: list[tuple[int, int]],
) -> VendorRow:
    """Create one vendor with its vetting score and one match per review."""
    vetting = calculate_vetting_score(
        VettingInput(licensed=licensed, insured=insured, years_in_business=years_in_business),
    )
    vendor_repo = VendorRepository(session)
    match_repo = MatchRepository(session)

    vendor = await vendor_repo.create(
        vendor_id=uuid7(),
        business_name=business_name,
        contact_name=contact_name,
        email=_demo_email(business_name),
        status=status,
        licensed=licensed,
        insured=insured,
        years_in_business=years_in_business,
        vetting_score=vetting.total_score,
    )

    now = utc_now()
    for rating, days_ago in reviews:
        match = await match_repo.create(
            match_id=uuid7(),
            request_id=uuid7(),
            vendor_id=vendor.vendor_id,
            vendor_accepted=True,
            job_completed=True,
        )
        await match_repo.record_review(match.match_id, rating=rating)
        # Backdate so recency weighting has something to work with.
        match.review_submitted_at = now - timedelta(days=days_ago)
        match.created_at = now - timedelta(days=days_ago + 2)

    # One declined match so acceptance counters are not all-or-nothing.
    await match_repo.create(
        match_id=uuid7(),
        request_id=uuid7(),
        vendor_id=vendor.vendor_id,
        vendor_accepted=False,
    )
    await session.flush()
    return vendor


async def seed_demo(session: AsyncSession) -> dict:
    """Idempotent demo seed.

    Returns dict with keys: created (bool), vendor_ids, review_count.
    """
    repo = VendorRepository(session)
    first_email = _demo_email(DEMO_VENDORS[0][0])
    existing = await repo.get_by_email(first_email)
    if existing is not None:
        return {"created": False, "vendor_ids": [existing.vendor_id], "review_count": 0}

    vendor_ids: list[UUID] = []
    review_count = 0
    for business, contact, licensed, insured, years, status, reviews in DEMO_VENDORS:
        vendor = await seed_vendor(
            session, business, contact, licensed, insured, years, status, reviews,
        )
        vendor_ids.append(vendor.vendor_id)
        review_count += len(reviews)

    return {"created": True, "vendor_ids": vendor_ids, "review_count": review_count}


# ---------------------------------------------------------------------------
# CLI entry point: python -m scripts.seed
# ---------------------------------------------------------------------------


async def _run_seed() -> None:
    """Run the seed against the real database, then score every vendor."""
    from landlording.db.session import async_session_factory
    from landlording.repositories.scoring import SqlScoreStore
    from landlording.scoring.service import ScoringService

    async with async_session_factory() as session:
        result = await seed_demo(session)
        if not result["created"]:
            print("Demo vendors already seeded. Skipping.")
            return
        await session.commit()

    summary = await ScoringService(SqlScoreStore(async_session_factory)).recalculate_all()

    print("Seed complete.")
    print(f"  Vendors:  {len(result['vendor_ids'])}")
    print(f"  Reviews:  {result['review_count']}")
    print(f"  Scored:   {summary.updated} ({summary.failed} failed)")
    print(f"  Average:  {summary.average_score}")
    for tier, count in sorted(summary.tier_distribution.items()):
        print(f"    {tier:<14} {count:>3}")


if __name__ == "__main__":
    asyncio.run(_run_seed())


def __getattr__(name: str):  # type: ignore[misc]
    """Allow `python -m scripts.seed` to work."""
    if name == "__main__":
        asyncio.run(_run_seed())
        sys.exit(0)
    raise AttributeError(name)
