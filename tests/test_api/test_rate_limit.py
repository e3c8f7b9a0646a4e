"""Tests for rate limiting on the validation endpoints."""

import pytest
from httpx import AsyncClient

from mailvet.config import Settings

pytestmark = pytest.mark.asyncio


@pytest.fixture
def low_limits(monkeypatch):
    """Tighten limits to 3/minute for single and 2/minute for bulk."""
    settings = Settings(rate_limit_single="3/minute", rate_limit_bulk="2/minute")
    monkeypatch.setattr("mailvet.core.rate_limit.get_settings", lambda: settings)
    return settings


class TestRateLimiting:
    """Tests for rate limiting on /api/validate and /api/validate-bulk."""

    async def test_rate_limit_allows_normal_usage(self, client: AsyncClient, low_limits):
        """Should allow requests within rate limit."""
        for i in range(3):
            response = await client.post("/api/validate", json={"email": f"user{i}@gmail.com"})
            assert response.status_code == 200

    async def test_rate_limit_blocks_excessive_requests(self, client: AsyncClient, low_limits):
        """Should block requests exceeding rate limit."""
        responses = []
        for i in range(4):
            response = await client.post("/api/validate", json={"email": f"user{i}@gmail.com"})
            responses.append(response.status_code)

        assert responses[:3] == [200, 200, 200]
        assert responses[3] == 429

    async def test_rate_limit_error_message(self, client: AsyncClient, low_limits):
        """Should return appropriate error message when rate limited."""
        for i in range(3):
            await client.get("/api/validate", params={"email": f"user{i}@gmail.com"})

        response = await client.get("/api/validate", params={"email": "user9@gmail.com"})

        assert response.status_code == 429
        assert response.json()["detail"] == "Too many requests. Please try again later."

    async def test_bulk_has_its_own_limit(self, client: AsyncClient, low_limits):
        statuses = []
        for _ in range(3):
            response = await client.post(
                "/api/validate-bulk", json={"emails": ["user@gmail.com"]}
            )
            statuses.append(response.status_code)

        assert statuses == [200, 200, 429]

    async def test_health_is_not_limited(self, client: AsyncClient, low_limits):
        for _ in range(5):
            response = await client.get("/health")
            assert response.status_code == 200
