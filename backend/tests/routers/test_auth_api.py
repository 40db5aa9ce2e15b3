# tests/routers/test_auth_api.py
"""
API layer tests for authentication endpoints.

Tests:
- POST /auth/login
- GET /auth/me
- Bearer token handling (missing, expired, invalid)
"""

from datetime import timedelta

from fastapi.testclient import TestClient

from fundtracker.services.auth.jwt_handler import JWTHandler
from tests.conftest import TEST_PASSWORD


# =============================================================================
# TEST: LOGIN
# =============================================================================


class TestLogin:
    """Tests for POST /auth/login."""

    def test_login_success(self, client: TestClient, alice):
        response = client.post("/auth/login", json={"username": "alice", "password": TEST_PASSWORD})

        assert response.status_code == 200
        data = response.json()
        assert data["token_type"] == "bearer"
        assert data["expires_in"] > 0
        assert data["participant"]["username"] == "alice"
        assert "hashed_password" not in data["participant"]
        assert JWTHandler.validate_access_token(data["access_token"])["sub"] == str(alice.id)

    def test_wrong_password(self, client: TestClient, alice):
        response = client.post("/auth/login", json={"username": "alice", "password": "wrong-password"})

        assert response.status_code == 401
        assert response.json()["error"] == "InvalidCredentialsError"
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_unknown_username(self, client: TestClient):
        response = client.post("/auth/login", json={"username": "nobody", "password": TEST_PASSWORD})

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid username or password"

    def test_missing_password(self, client: TestClient):
        response = client.post("/auth/login", json={"username": "alice"})

        assert response.status_code == 422


# =============================================================================
# TEST: CURRENT PARTICIPANT
# =============================================================================


class TestMe:
    """Tests for GET /auth/me."""

    def test_returns_profile(self, client: TestClient, alice, alice_headers):
        response = client.get("/auth/me", headers=alice_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == alice.id
        assert data["is_admin"] is False

    def test_requires_token(self, client: TestClient):
        response = client.get("/auth/me")

        assert response.status_code == 401
        assert response.json()["error"] == "UnauthorizedError"
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_expired_token(self, client: TestClient, alice):
        token = JWTHandler.create_access_token(
            participant_id=alice.id, username="alice", expires_delta=timedelta(seconds=-1),
        )

        response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["message"] == "Token has expired"

    def test_invalid_token(self, client: TestClient):
        response = client.get("/auth/me", headers={"Authorization": "Bearer not-a-token"})

        assert response.status_code == 401

    def test_token_of_deleted_participant(self, client: TestClient, storage, alice, alice_headers):
        storage.delete_participant(alice)
        storage.commit()

        response = client.get("/auth/me", headers=alice_headers)

        assert response.status_code == 401
