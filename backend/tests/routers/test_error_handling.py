# tests/routers/test_error_handling.py
"""
Integration tests for error handling across the API.

These tests verify:
- Consistent error response format (ErrorDetail schema)
- Validation error details
- Health endpoints
"""

from datetime import date

from fastapi.testclient import TestClient

from tests.conftest import seed_trading_days


class TestErrorResponseStructure:

    def test_not_found_has_required_fields(self, client: TestClient, admin_headers):
        data = client.get("/participants/999", headers=admin_headers).json()

        assert set(data) == {"error", "message", "details"}
        assert data["error"] == "ParticipantNotFoundError"
        assert "999" in data["message"]

    def test_unauthorized_format(self, client: TestClient):
        data = client.get("/ledger/me").json()

        assert data == {"error": "UnauthorizedError", "message": "Not authenticated", "details": None}

    def test_forbidden_format(self, client: TestClient, alice_headers):
        data = client.get("/ledger/fund", headers=alice_headers).json()

        assert data["error"] == "PermissionDeniedError"
        assert data["details"] == {"action": "this endpoint"}


class TestValidationErrors:

    def test_validation_error_format(self, client: TestClient, admin_headers):
        response = client.post("/fund-returns/", json={"date": "2025-11-03"}, headers=admin_headers)

        assert response.status_code == 422
        data = response.json()
        assert data["error"] == "ValidationError"
        assert data["message"] == "Request validation failed"
        fields = {detail["field"] for detail in data["details"]}
        assert fields == {"body.dollar_change", "body.total_fund_value"}

    def test_type_mismatch(self, client: TestClient, admin_headers):
        response = client.get("/participants/not-a-number", headers=admin_headers)

        assert response.status_code == 422
        assert response.json()["details"][0]["field"] == "path.participant_id"

    def test_invalid_query_parameter(self, client: TestClient, admin_headers):
        response = client.get("/fund-returns/?month=0", headers=admin_headers)

        assert response.status_code == 422


class TestHealthCheck:

    def test_root_endpoint(self, client: TestClient):
        data = client.get("/").json()

        assert data["docs"] == "/docs"
        assert "Welcome" in data["message"]

    def test_empty_calendar_is_degraded(self, client: TestClient):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "degraded"
        assert data["checks"]["database"]["status"] == "healthy"
        assert data["checks"]["trading_calendar"]["status"] == "degraded"

    def test_seeded_calendar_is_healthy(self, client: TestClient, storage):
        seed_trading_days(storage, date(2025, 11, 3))

        data = client.get("/health").json()

        assert data["status"] == "healthy"
        assert data["checks"]["trading_calendar"]["total_days"] == 1

    def test_liveness_and_readiness(self, client: TestClient):
        assert client.get("/health/live").json() == {"status": "alive"}
        assert client.get("/health/ready").json() == {"status": "ready"}
