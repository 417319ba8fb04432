"""Tests for the login/logout/user routes and the session cookie.

Runs the full app against a mock identity provider via FastAPI TestClient.
"""

from __future__ import annotations

from typing import Callable

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from resorter_admin.constants import DEFAULT_SESSION_COOKIE_NAME
from resorter_admin.utils.logging.logging_helpers import hash_sensitive_id
from tests.conftest import FakeClock, failing_provider, hanging_provider

COOKIE = DEFAULT_SESSION_COOKIE_NAME


def _login(client: TestClient, username: str = "admin", password: str = "admin123") -> httpx.Response:
    return client.get("/api/login", params={"username": username, "password": password})


# =============================================================================
# Login
# =============================================================================


class TestLogin:
    """Tests for GET and POST /api/login."""

    def test_valid_credentials_return_identity_and_cookie(self, client: TestClient) -> None:
        response = _login(client)

        assert response.status_code == 200
        body = response.json()
        assert body["username"] == "admin"
        assert body["id"]
        assert set(body) == {"id", "username"}
        assert client.cookies.get(COOKIE)

    def test_cookie_is_http_only_and_scoped_to_root(self, client: TestClient) -> None:
        response = _login(client)

        set_cookie = response.headers["set-cookie"].lower()
        assert "httponly" in set_cookie
        assert "path=/" in set_cookie
        assert "max-age=86400" in set_cookie
        assert "samesite=lax" in set_cookie

    def test_token_never_in_body(self, client: TestClient) -> None:
        response = _login(client)

        assert client.cookies.get(COOKIE) not in response.text

    def test_post_json_body(self, client: TestClient) -> None:
        response = client.post("/api/login", json={"username": "editor", "password": "s3cret"})

        assert response.status_code == 200
        assert response.json()["username"] == "editor"

    def test_post_form_body(self, client: TestClient) -> None:
        response = client.post("/api/login", data={"username": "admin", "password": "admin123"})

        assert response.status_code == 200
        assert client.cookies.get(COOKIE)

    @pytest.mark.parametrize(
        "body",
        [{"username": "admin"}, {"password": "admin123"}, {}],
    )
    def test_post_missing_field_is_422(self, client: TestClient, body: dict[str, str]) -> None:
        response = client.post("/api/login", json=body)

        assert response.status_code == 422
        assert response.json()["detail"]["code"] == "VALIDATION_ERROR"

    def test_get_missing_query_param_is_422(self, client: TestClient) -> None:
        response = client.get("/api/login", params={"username": "admin"})

        assert response.status_code == 422

    def test_invalid_credentials_is_401_without_cookie(self, client: TestClient) -> None:
        response = _login(client, password="wrong")

        assert response.status_code == 401
        detail = response.json()["detail"]
        assert detail["code"] == "AUTH_INVALID_CREDENTIALS"
        assert detail["message"] == "Invalid credentials"
        assert "set-cookie" not in response.headers
        assert client.cookies.get(COOKIE) is None

    def test_same_user_twice_same_identity(self, client: TestClient) -> None:
        first = _login(client).json()
        second = _login(client).json()

        assert first == second


class TestProviderUnavailable:
    """Provider failures are 503, never 401."""

    @pytest.mark.parametrize("status_code", [500, 502, 404])
    def test_provider_error_status_is_503(self, make_app: Callable[..., FastAPI], status_code: int) -> None:
        client = TestClient(make_app(provider=failing_provider(status_code)))

        response = _login(client)

        assert response.status_code == 503
        detail = response.json()["detail"]
        assert detail["code"] == "AUTH_PROVIDER_UNAVAILABLE"
        assert detail["message"] == "Authentication service unavailable"
        assert "set-cookie" not in response.headers

    def test_hanging_provider_times_out_to_503(self, make_app: Callable[..., FastAPI]) -> None:
        """A timed-out check leaves no identity and no session behind."""
        app = make_app(provider=hanging_provider)
        client = TestClient(app)

        response = _login(client)

        assert response.status_code == 503
        assert client.cookies.get(COOKIE) is None
        assert len(app.state.session_manager.identities) == 0
        assert app.state.session_manager.sessions.active_session_count == 0

    def test_unreachable_provider_is_503(self, make_app: Callable[..., FastAPI]) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = TestClient(make_app(provider=refuse))

        assert _login(client).status_code == 503

    def test_malformed_provider_body_is_503(self, make_app: Callable[..., FastAPI]) -> None:
        client = TestClient(make_app(provider=lambda request: httpx.Response(200, text="yes")))

        assert _login(client).status_code == 503


# =============================================================================
# Current user and logout
# =============================================================================


class TestCurrentUser:
    """Tests for GET /api/user."""

    def test_without_session_is_401(self, client: TestClient) -> None:
        response = client.get("/api/user")

        assert response.status_code == 401
        assert response.json()["detail"] == {"code": "AUTH_REQUIRED", "message": "Authentication required"}

    def test_with_session_returns_identity(self, client: TestClient) -> None:
        identity = _login(client).json()

        response = client.get("/api/user")

        assert response.status_code == 200
        assert response.json() == identity

    def test_forged_cookie_is_401(self, client: TestClient) -> None:
        client.cookies.set(COOKIE, "forged-token")

        assert client.get("/api/user").status_code == 401

    def test_expired_session_same_as_missing(self, logged_in_client: TestClient, clock: FakeClock) -> None:
        """Expired session answers exactly like no session."""
        clock.advance(hours=24, seconds=1)

        expired = logged_in_client.get("/api/user")
        again = logged_in_client.get("/api/user")

        assert expired.status_code == 401
        assert expired.json() == again.json()

    def test_session_valid_right_up_to_ttl(self, logged_in_client: TestClient, clock: FakeClock) -> None:
        clock.advance(hours=24)

        assert logged_in_client.get("/api/user").status_code == 200


class TestLogout:
    """Tests for GET /api/logout."""

    def test_logout_ends_session(self, logged_in_client: TestClient) -> None:
        token = logged_in_client.cookies.get(COOKIE)

        response = logged_in_client.get("/api/logout")

        assert response.status_code == 200
        assert response.json() == {"status": "logged_out", "message": "Session ended"}
        # Replaying the old token does not work either
        logged_in_client.cookies.set(COOKIE, token)
        assert logged_in_client.get("/api/user").status_code == 401

    def test_logout_twice_succeeds(self, logged_in_client: TestClient) -> None:
        logged_in_client.get("/api/logout")

        response = logged_in_client.get("/api/logout")

        assert response.status_code == 200
        assert response.json()["message"] == "No active session"

    def test_logout_after_expiry_reports_no_active_session(
        self, logged_in_client: TestClient, clock: FakeClock
    ) -> None:
        clock.advance(hours=24, seconds=1)

        response = logged_in_client.get("/api/logout")

        assert response.status_code == 200
        assert response.json()["message"] == "No active session"

    def test_logout_without_session(self, client: TestClient) -> None:
        response = client.get("/api/logout")

        assert response.status_code == 200

    def test_logout_leaves_other_sessions(self, make_app: Callable[..., FastAPI]) -> None:
        app = make_app()
        first = TestClient(app)
        second = TestClient(app)
        _login(first)
        _login(second)

        first.get("/api/logout")

        assert first.get("/api/user").status_code == 401
        assert second.get("/api/user").status_code == 200


# =============================================================================
# Auth sessions
# =============================================================================


class TestAuthSessions:
    """Tests for GET /api/auth-sessions."""

    def test_requires_session(self, client: TestClient) -> None:
        assert client.get("/api/auth-sessions").status_code == 401

    def test_lists_sessions_with_hashed_ids(self, logged_in_client: TestClient) -> None:
        token = logged_in_client.cookies.get(COOKIE)

        response = logged_in_client.get("/api/auth-sessions")

        assert response.status_code == 200
        sessions = response.json()
        assert len(sessions) == 1
        entry = sessions[0]
        assert entry["session_id"] == hash_sensitive_id(token)
        assert entry["username"] == "admin"
        assert entry["is_admin"] is True
        assert token not in response.text
