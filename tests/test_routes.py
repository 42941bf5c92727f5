"""Integration tests for API routes."""

import asyncio
import base64
import inspect

import pytest

from nulid.core.identifier import Nulid
from nulid.ui.routes import api

T0 = 1_704_067_200_000_000_000


def _auth_header(username="admin", password="admin123"):
    """Create basic auth header."""
    credentials = base64.b64encode(f"{username}:{password}".encode()).decode()
    return {"Authorization": f"Basic {credentials}"}


class TestHealthRoutes:
    """Tests for health endpoints."""

    @pytest.mark.asyncio
    async def test_health_endpoint(self, client):
        """GET /health returns health status."""
        response = await client.get("/api/v1/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "timestamp" in data
        assert {check["name"] for check in data["checks"]} == {"loop", "generator"}

    @pytest.mark.asyncio
    async def test_health_degraded_on_regression(self, client, clock):
        """A clock behind the last emitted value degrades health."""
        await client.get("/api/v1/generate")
        clock.regress(1_000)
        response = await client.get("/api/v1/health")
        assert response.status_code == 200
        assert response.json()["status"] == "degraded"

    @pytest.mark.asyncio
    async def test_health_fails_when_poisoned(self, client, generator):
        """A poisoned generator reports unhealthy."""
        generator._poisoned = True
        response = await client.get("/api/v1/health")
        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"

    @pytest.mark.asyncio
    async def test_heartbeat_endpoint(self, client):
        """GET /heartbeat returns generator state."""
        response = await client.get("/api/v1/heartbeat")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["last"] is None
        assert "timestamp" in data


class TestGenerateRoutes:
    """Tests for identifier generation."""

    @pytest.mark.asyncio
    async def test_generate_one(self, client):
        """Default count is one."""
        response = await client.get("/api/v1/generate")
        assert response.status_code == 200
        assert response.json()["ids"] == [str(Nulid.from_parts(T0, 0))]

    @pytest.mark.asyncio
    async def test_generate_many_sorted(self, client):
        """Batches come back strictly increasing."""
        response = await client.get("/api/v1/generate", params={"count": 5})
        ids = response.json()["ids"]
        assert len(ids) == 5
        assert ids == sorted(ids)
        assert len(set(ids)) == 5

    @pytest.mark.asyncio
    @pytest.mark.parametrize("count", [0, 1001])
    async def test_generate_count_bounds(self, client, count):
        """Counts outside 1..1000 are rejected."""
        response = await client.get("/api/v1/generate", params={"count": count})
        assert response.status_code == 422

    def test_generate_runs_off_event_loop(self):
        """The generate handler is sync so FastAPI runs it in the threadpool."""
        assert not inspect.iscoroutinefunction(api.generate)

    @pytest.mark.asyncio
    async def test_concurrent_batches(self, client):
        """Parallel requests never share an identifier and are all counted."""
        responses = await asyncio.gather(
            *(client.get("/api/v1/generate", params={"count": 50}) for _ in range(8))
        )
        ids = [nulid for response in responses for nulid in response.json()["ids"]]
        assert len(set(ids)) == 400
        stats = await client.get("/api/v1/stats", headers=_auth_header())
        assert stats.json()["generator"]["issued"] == 400

    @pytest.mark.asyncio
    async def test_generate_overflow(self, client, generator):
        """Exhaustion is reported as 503, not as a wrapped value."""
        generator._last = Nulid.MAX
        response = await client.get("/api/v1/generate")
        assert response.status_code == 503


class TestInspectRoutes:
    """Tests for identifier inspection."""

    @pytest.mark.asyncio
    async def test_inspect(self, client):
        """Parts are decoded."""
        nulid = Nulid.from_parts(T0 + 123_456_789, 42)
        response = await client.get(f"/api/v1/inspect/{str(nulid).lower()}")
        assert response.status_code == 200
        data = response.json()
        assert data["id"] == str(nulid)
        assert data["timestamp_nanos"] == T0 + 123_456_789
        assert data["seconds"] == T0 // 1_000_000_000
        assert data["subsec_nanos"] == 123_456_789
        assert data["tail"] == 42
        assert data["datetime"] == "2024-01-01T00:00:00.123456789Z"
        assert data["bytes"] == nulid.to_bytes().hex()

    @pytest.mark.asyncio
    async def test_inspect_max(self, client):
        """Timestamps beyond datetime range still inspect."""
        response = await client.get(f"/api/v1/inspect/{Nulid.MAX}")
        assert response.status_code == 200
        assert response.json()["datetime"] is None

    @pytest.mark.asyncio
    async def test_inspect_bad_length(self, client):
        """Length errors are a 400 with the reason."""
        response = await client.get("/api/v1/inspect/" + "0" * 25)
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid length: expected 26 characters, found 25"

    @pytest.mark.asyncio
    async def test_inspect_bad_char(self, client):
        """Character errors cite the position."""
        response = await client.get("/api/v1/inspect/" + "0" * 25 + "U")
        assert response.status_code == 400
        assert "position 25" in response.json()["detail"]


class TestStatsRoutes:
    """Tests for stats endpoint (requires basic auth)."""

    @pytest.mark.asyncio
    async def test_stats_requires_auth(self, client):
        """GET /stats requires authentication."""
        response = await client.get("/api/v1/stats")
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_stats_wrong_password(self, client):
        """Wrong credentials are refused."""
        response = await client.get("/api/v1/stats", headers=_auth_header(password="nope"))
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_stats_counts_issued(self, client):
        """Issued count and last value are reported."""
        await client.get("/api/v1/generate", params={"count": 3})
        response = await client.get("/api/v1/stats", headers=_auth_header())
        assert response.status_code == 200
        data = response.json()["generator"]
        assert data["issued"] == 3
        assert data["last"] == str(Nulid.from_parts(T0, 2))
        assert data["poisoned"] is False
