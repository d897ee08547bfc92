"""Shared pytest fixtures for the Real Landlording test suite.

Provides:
- db_engine: in-memory SQLite async engine with all tables
- session_factory: session maker bound to the test engine
- db_session: plain async session for repository tests
- make_vendor / make_match: committed seed-data factories
- client: AsyncClient with settings and storage overridden
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from uuid_extensions import uuid7

from landlording.config.settings import Settings, get_settings
from landlording.db.session import Base, get_session_factory
from landlording.db.tables import MatchRow, VendorRow
from landlording.models.common import VendorStatus, utc_now

ADMIN_TOKEN = "admin-test-token"
CRON_SECRET = "cron-test-secret"


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
async def db_engine():
    """Create an in-memory SQLite async engine with all tables."""
    eng = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(db_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def make_vendor(session_factory):
    """Factory committing one vendor row; keyword overrides any column."""

    async def _make(**overrides) -> VendorRow:
        vendor_id = overrides.pop("vendor_id", None) or uuid7()
        now = utc_now()
        values = dict(
            vendor_id=vendor_id,
            business_name="Test Vendor",
            contact_name="Test Contact",
            email=f"{vendor_id}@vendors.test",
            status=VendorStatus.ACTIVE.value,
            licensed=False,
            insured=False,
            years_in_business=None,
            vetting_score=None,
            vetting_admin_adjustment=0,
            performance_score=50,
            total_reviews=0,
            created_at=now,
            updated_at=now,
        )
        values.update(overrides)
        row = VendorRow(**values)
        async with session_factory() as session, session.begin():
            session.add(row)
        return row

    return _make


@pytest.fixture
def make_match(session_factory):
    """Factory committing one match row, optionally carrying a review."""

    async def _make(vendor_id, **overrides) -> MatchRow:
        values = dict(
            match_id=uuid7(),
            request_id=uuid7(),
            vendor_id=vendor_id,
            vendor_accepted=None,
            job_completed=None,
            created_at=utc_now(),
        )
        values.update(overrides)
        row = MatchRow(**values)
        async with session_factory() as session, session.begin():
            session.add(row)
        return row

    return _make


@pytest.fixture
def settings() -> Settings:
    return Settings(
        DATABASE_URL="sqlite+aiosqlite:///:memory:",
        ADMIN_API_TOKEN=ADMIN_TOKEN,
        CRON_SECRET=CRON_SECRET,
        RATE_LIMIT_MAX_REQUESTS=3,
        RATE_LIMIT_WINDOW_SECONDS=60,
    )


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}


@pytest.fixture
def cron_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {CRON_SECRET}"}


@pytest.fixture
async def client(session_factory, settings):
    """AsyncClient with storage and settings overridden for the test engine."""
    from landlording.api.main import app
    from landlording.api.rate_limit import RateLimiter

    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_settings] = lambda: settings
    app.state.rate_limiter = RateLimiter.from_settings(settings)

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
