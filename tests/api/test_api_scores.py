"""Tests for FastAPI admin score endpoints.

Covers: bearer authentication, GET scoreboard, POST recalculation of one
vendor or all vendors, and per-client rate limiting.
"""

import pytest
from httpx import AsyncClient
from uuid_extensions import uuid7

from landlording.config.settings import Settings, get_settings
from landlording.models.common import VendorStatus, utc_now

SCORES_URL = "/v1/admin/scores"


# ===================================================================
# Authentication
# ===================================================================


class TestAdminAuth:

    @pytest.mark.anyio
    async def test_missing_token_401(self, client: AsyncClient) -> None:
        response = await client.get(SCORES_URL)
        assert response.status_code == 401

    @pytest.mark.anyio
    async def test_wrong_token_403(self, client: AsyncClient) -> None:
        response = await client.get(SCORES_URL, headers={"Authorization": "Bearer nope"})
        assert response.status_code == 403

    @pytest.mark.anyio
    async def test_cron_secret_is_not_admin(self, client: AsyncClient, cron_headers) -> None:
        response = await client.get(SCORES_URL, headers=cron_headers)
        assert response.status_code == 403

    @pytest.mark.anyio
    async def test_unconfigured_token_401(self, client: AsyncClient, admin_headers) -> None:
        from landlording.api.main import app

        app.dependency_overrides[get_settings] = lambda: Settings(ADMIN_API_TOKEN="")
        response = await client.get(SCORES_URL, headers=admin_headers)
        assert response.status_code == 401


# ===================================================================
# GET /v1/admin/scores
# ===================================================================


class TestScoreboardEndpoint:

    @pytest.mark.anyio
    async def test_empty_scoreboard(self, client: AsyncClient, admin_headers) -> None:
        response = await client.get(SCORES_URL, headers=admin_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["vendors"] == []
        assert data["summary"] == {"total": 0, "with_reviews": 0, "average_score": 50}

    @pytest.mark.anyio
    async def test_lists_active_vendors_by_score(
        self, client: AsyncClient, admin_headers, make_vendor,
    ) -> None:
        await make_vendor(business_name="Mid", performance_score=72, total_reviews=5)
        await make_vendor(business_name="Top", performance_score=88, total_reviews=14)
        await make_vendor(business_name="Pending", status=VendorStatus.PENDING_REVIEW.value)

        data = (await client.get(SCORES_URL, headers=admin_headers)).json()

        assert [v["business_name"] for v in data["vendors"]] == ["Top", "Mid"]
        assert [v["tier"] for v in data["vendors"]] == ["excellent", "good"]
        assert data["summary"] == {"total": 2, "with_reviews": 2, "average_score": 80}


# ===================================================================
# POST /v1/admin/scores
# ===================================================================


class TestRecalculateEndpoint:

    @pytest.mark.anyio
    async def test_recalculates_all(
        self, client: AsyncClient, admin_headers, make_vendor, make_match,
    ) -> None:
        vetted = await make_vendor(licensed=True, insured=True, years_in_business=10)
        reviewed = await make_vendor()
        for _ in range(10):
            await make_match(reviewed.vendor_id, vendor_accepted=True, job_completed=True,
                             review_rating=5, review_submitted_at=utc_now())

        response = await client.post(SCORES_URL, headers=admin_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Updated 2 vendor scores"
        assert (data["updated"], data["failed"]) == (2, 0)
        by_id = {r["vendor_id"]: r for r in data["results"]}
        assert by_id[str(vetted.vendor_id)] == {
            "vendor_id": str(vetted.vendor_id), "score": 90, "review_count": 0, "tier": "new",
        }
        # 90 from reviews alone, lifted to the cap by ten completed jobs.
        assert by_id[str(reviewed.vendor_id)]["score"] == 100
        assert by_id[str(reviewed.vendor_id)]["tier"] == "excellent"

        board = (await client.get(SCORES_URL, headers=admin_headers)).json()
        assert [v["performance_score"] for v in board["vendors"]] == [100, 90]

    @pytest.mark.anyio
    async def test_recalculates_single_vendor(
        self, client: AsyncClient, admin_headers, make_vendor,
    ) -> None:
        vendor = await make_vendor(licensed=True, insured=True, years_in_business=10)

        response = await client.post(
            SCORES_URL, headers=admin_headers, json={"vendor_id": str(vendor.vendor_id)},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Vendor score updated"
        assert data["result"]["vendor_id"] == str(vendor.vendor_id)
        assert data["result"]["score"] == 90
        assert data["result"]["breakdown"]["vetting_points"] == 45
        assert data["result"]["breakdown"]["review_score"] == 50.0

    @pytest.mark.anyio
    async def test_unknown_vendor_500(self, client: AsyncClient, admin_headers) -> None:
        response = await client.post(
            SCORES_URL, headers=admin_headers, json={"vendor_id": str(uuid7())},
        )
        assert response.status_code == 500
        assert response.json()["detail"] == "Failed to update vendor score"

    @pytest.mark.anyio
    async def test_invalid_vendor_id_422(self, client: AsyncClient, admin_headers) -> None:
        response = await client.post(
            SCORES_URL, headers=admin_headers, json={"vendor_id": "not-a-uuid"},
        )
        assert response.status_code == 422

    @pytest.mark.anyio
    async def test_requires_admin(self, client: AsyncClient) -> None:
        response = await client.post(SCORES_URL)
        assert response.status_code == 401


# ===================================================================
# Rate limiting
# ===================================================================


class TestRecalculateRateLimit:
    """Test settings allow three recalculations per window."""

    @pytest.mark.anyio
    async def test_fourth_request_429(self, client: AsyncClient, admin_headers) -> None:
        for _ in range(3):
            response = await client.post(SCORES_URL, headers=admin_headers)
            assert response.status_code == 200

        response = await client.post(SCORES_URL, headers=admin_headers)
        assert response.status_code == 429
        assert response.json()["detail"] == "Too many requests"

    @pytest.mark.anyio
    async def test_reset_clears_window(self, client: AsyncClient, admin_headers) -> None:
        from landlording.api.main import app

        for _ in range(4):
            await client.post(SCORES_URL, headers=admin_headers)
        app.state.rate_limiter.reset()

        response = await client.post(SCORES_URL, headers=admin_headers)
        assert response.status_code == 200

    @pytest.mark.anyio
    async def test_scoreboard_not_limited(self, client: AsyncClient, admin_headers) -> None:
        for _ in range(5):
            response = await client.get(SCORES_URL, headers=admin_headers)
            assert response.status_code == 200

    @pytest.mark.anyio
    async def test_rejected_requests_do_not_use_quota(
        self, client: AsyncClient, admin_headers,
    ) -> None:
        for _ in range(5):
            response = await client.post(SCORES_URL)
            assert response.status_code == 401
        for _ in range(5):
            response = await client.post(SCORES_URL, headers={"Authorization": "Bearer nope"})
            assert response.status_code == 403

        for _ in range(3):
            response = await client.post(SCORES_URL, headers=admin_headers)
            assert response.status_code == 200
