"""
Pet Adoption API — App-Level Endpoint Tests
============================================

What we test:
    ✅ GET / banner and GET /health (200 healthy, 503 unhealthy)
    ✅ unmatched routes → 404 {"status": "not found", "message": "Not Found - <path>"}
    ✅ store failures → 500 error envelope
    ✅ `stack` only present when ENVIRONMENT=development
    ✅ X-Request-ID generated, echoed, or replaced when unsafe
"""

from unittest.mock import patch
from uuid import uuid4

import pytest

from adoption_api import __version__
from adoption_api.exceptions import StoreError
from adoption_api.repositories.pets import PetRepository
from adoption_api.store import RecordStore


class TestRootAndHealth:

    @pytest.mark.asyncio
    async def test_root_banner(self, test_client):
        response = await test_client.get("/")

        assert response.status_code == 200
        assert response.json() == {"message": "Pet Adoption API", "version": __version__}

    @pytest.mark.asyncio
    async def test_health_ok(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert body["version"] == __version__

    @pytest.mark.asyncio
    async def test_health_store_down_is_503(self, test_client):
        async def unreachable(self):
            raise StoreError(message="Record store unreachable: refused", detail="refused")

        with patch.object(RecordStore, "ping", unreachable):
            response = await test_client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"
        assert response.json()["database"] == "disconnected"


class TestErrorEnvelopes:

    @pytest.mark.asyncio
    async def test_unmatched_route_is_404(self, test_client):
        response = await test_client.get("/api/unknown")

        assert response.status_code == 404
        assert response.json() == {"status": "not found", "message": "Not Found - /api/unknown"}

    @pytest.mark.asyncio
    async def test_store_failure_is_500(self, test_client):
        async def broken_list(self):
            raise StoreError(message="Failed to fetch pets: connection refused", detail="connection refused")

        with patch.object(PetRepository, "list", broken_list):
            response = await test_client.get("/api/pets")

        assert response.status_code == 500
        assert response.json() == {
            "status": "error",
            "message": "Failed to fetch pets: connection refused",
        }

    @pytest.mark.asyncio
    async def test_stack_only_in_development(self, test_client, dev_client):
        path = f"/api/pets/{uuid4()}"

        production_body = (await test_client.get(path)).json()
        development_body = (await dev_client.get(path)).json()

        assert "stack" not in production_body
        assert development_body["message"] == "Pet not found"
        assert "NotFoundError" in development_body["stack"]


class TestRequestId:

    @pytest.mark.asyncio
    async def test_request_id_generated(self, test_client):
        response = await test_client.get("/")

        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, test_client):
        response = await test_client.get("/", headers={"X-Request-ID": "trace-123"})

        assert response.headers["X-Request-ID"] == "trace-123"

    @pytest.mark.asyncio
    async def test_unsafe_request_id_replaced(self, test_client):
        response = await test_client.get("/", headers={"X-Request-ID": "bad id with spaces"})

        assert response.headers["X-Request-ID"] != "bad id with spaces"
        assert len(response.headers["X-Request-ID"]) == 8
