"""Tests for SessionManager: login outcomes, logout and the authorization gate."""

from __future__ import annotations

import asyncio
from unittest.mock import MagicMock

import pytest

from resorter_admin.auth.identity import IdentityStore
from resorter_admin.auth.manager import RequestContext, SessionManager
from resorter_admin.auth.session import SessionStore
from resorter_admin.exceptions import (
    InvalidCredentialsError,
    ServiceUnavailableError,
    SessionExpiredError,
    UnauthenticatedError,
)
from tests.conftest import VALID_USERS, FakeClock


class FakeVerifier:
    """CredentialVerifier double with a scripted verdict."""

    def __init__(self, *, unavailable: bool = False, delay: float = 0.0) -> None:
        self.unavailable = unavailable
        self.delay = delay
        self.calls: list[tuple[str, str]] = []

    async def verify(self, username: str, password: str) -> bool:
        self.calls.append((username, password))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.unavailable:
            raise ServiceUnavailableError("provider down", reason="network")
        return VALID_USERS.get(username) == password


@pytest.fixture
def auth_logger() -> MagicMock:
    return MagicMock()


@pytest.fixture
def sessions(clock: FakeClock) -> SessionStore:
    return SessionStore(clock=clock)


@pytest.fixture
def manager(sessions: SessionStore, auth_logger: MagicMock) -> SessionManager:
    return SessionManager(FakeVerifier(), IdentityStore(), sessions, auth_logger=auth_logger)


# =============================================================================
# Login
# =============================================================================


class TestLogin:
    """Tests for SessionManager.login."""

    @pytest.mark.asyncio
    async def test_successful_login_creates_identity_and_session(self, manager: SessionManager) -> None:
        result = await manager.login("admin", "admin123")

        assert result.ok is True
        assert result.outcome == "authenticated"
        assert result.identity is not None
        assert result.identity.username == "admin"
        assert result.session is not None
        assert result.session.identity_id == result.identity.id
        assert len(manager.identities) == 1
        assert manager.sessions.active_session_count == 1

    @pytest.mark.asyncio
    async def test_second_login_reuses_identity_with_new_session(self, manager: SessionManager) -> None:
        """Earlier sessions stay valid; the identity is not duplicated."""
        first = await manager.login("admin", "admin123")
        second = await manager.login("admin", "admin123")

        assert first.identity == second.identity
        assert first.session is not None and second.session is not None
        assert first.session.token != second.session.token
        assert manager.current_identity(first.session.token) == first.identity
        assert manager.current_identity(second.session.token) == first.identity

    @pytest.mark.asyncio
    async def test_invalid_credentials_touch_nothing(self, manager: SessionManager) -> None:
        result = await manager.login("admin", "wrong")

        assert result.outcome == "invalid_credentials"
        assert result.identity is None
        assert result.session is None
        assert len(manager.identities) == 0
        assert manager.sessions.active_session_count == 0

    @pytest.mark.asyncio
    async def test_unknown_user_is_invalid_credentials(self, manager: SessionManager) -> None:
        result = await manager.login("nobody", "admin123")

        assert result.outcome == "invalid_credentials"
        assert len(manager.identities) == 0

    @pytest.mark.asyncio
    async def test_provider_unavailable_is_distinct_outcome(
        self, sessions: SessionStore, auth_logger: MagicMock
    ) -> None:
        """Provider failure is not folded into invalid_credentials."""
        manager = SessionManager(FakeVerifier(unavailable=True), IdentityStore(), sessions, auth_logger)

        result = await manager.login("admin", "admin123")

        assert result.outcome == "service_unavailable"
        assert result.error is not None
        assert result.error.reason == "network"
        assert len(manager.identities) == 0
        assert manager.sessions.active_session_count == 0

    @pytest.mark.asyncio
    async def test_empty_strings_are_passed_to_provider(self, sessions: SessionStore) -> None:
        """Username/password are not validated locally."""
        verifier = FakeVerifier()
        manager = SessionManager(verifier, IdentityStore(), sessions)

        result = await manager.login("", "")

        assert verifier.calls == [("", "")]
        assert result.outcome == "invalid_credentials"

    @pytest.mark.asyncio
    async def test_concurrent_first_logins_share_one_identity(self, sessions: SessionStore) -> None:
        """N concurrent logins for one user: one identity, N sessions."""
        manager = SessionManager(FakeVerifier(delay=0.01), IdentityStore(), sessions)

        results = await asyncio.gather(*(manager.login("admin", "admin123") for _ in range(10)))

        assert all(r.ok for r in results)
        assert len({r.identity.id for r in results if r.identity}) == 1
        assert len({r.session.token for r in results if r.session}) == 10
        assert len(manager.identities) == 1
        assert manager.sessions.active_session_count == 10


class TestLoginResultUnwrap:
    """LoginResult.unwrap raises the exception matching the outcome."""

    @pytest.mark.asyncio
    async def test_authenticated(self, manager: SessionManager) -> None:
        result = await manager.login("admin", "admin123")

        identity, session = result.unwrap()

        assert identity == result.identity
        assert session == result.session

    @pytest.mark.asyncio
    async def test_invalid_credentials(self, manager: SessionManager) -> None:
        result = await manager.login("admin", "wrong")

        with pytest.raises(InvalidCredentialsError):
            result.unwrap()

    @pytest.mark.asyncio
    async def test_service_unavailable_reraises_provider_error(self, sessions: SessionStore) -> None:
        manager = SessionManager(FakeVerifier(unavailable=True), IdentityStore(), sessions)
        result = await manager.login("admin", "admin123")

        with pytest.raises(ServiceUnavailableError) as exc_info:
            result.unwrap()

        assert exc_info.value is result.error


# =============================================================================
# Logout
# =============================================================================


class TestLogout:
    """Tests for SessionManager.logout."""

    @pytest.mark.asyncio
    async def test_logout_invalidates_session(self, manager: SessionManager) -> None:
        result = await manager.login("admin", "admin123")
        assert result.session is not None
        token = result.session.token

        assert manager.logout(token) is True
        assert manager.current_identity(token) is None

    @pytest.mark.asyncio
    async def test_logout_is_idempotent(self, manager: SessionManager) -> None:
        result = await manager.login("admin", "admin123")
        assert result.session is not None

        manager.logout(result.session.token)

        assert manager.logout(result.session.token) is False
        assert manager.logout(None) is False
        assert manager.logout("never-issued") is False

    @pytest.mark.asyncio
    async def test_logout_keeps_other_sessions(self, manager: SessionManager) -> None:
        first = await manager.login("admin", "admin123")
        second = await manager.login("admin", "admin123")
        assert first.session is not None and second.session is not None

        manager.logout(first.session.token)

        assert manager.current_identity(second.session.token) is not None

    @pytest.mark.asyncio
    async def test_logout_of_expired_session_records_expiry(
        self, manager: SessionManager, auth_logger: MagicMock, clock: FakeClock
    ) -> None:
        """An elapsed session is purged as expired and logout reports nothing ended."""
        result = await manager.login("admin", "admin123")
        assert result.session is not None
        clock.advance(hours=24, seconds=1)

        assert manager.logout(result.session.token) is False

        reasons = [c.kwargs["end_reason"] for c in auth_logger.log_session_ended.call_args_list]
        assert reasons == ["expired"]
        assert manager.sessions.active_session_count == 0

    @pytest.mark.asyncio
    async def test_identity_survives_logout(self, manager: SessionManager) -> None:
        """Identities are never deleted; re-login returns the same one."""
        first = await manager.login("admin", "admin123")
        assert first.session is not None
        manager.logout(first.session.token)

        second = await manager.login("admin", "admin123")

        assert second.identity == first.identity


# =============================================================================
# Gate
# =============================================================================


class TestGate:
    """Tests for resolve, current_identity and require_identity."""

    @pytest.mark.asyncio
    async def test_require_identity_with_valid_session(self, manager: SessionManager) -> None:
        result = await manager.login("admin", "admin123")
        assert result.session is not None

        identity = manager.require_identity(RequestContext(session_token=result.session.token))

        assert identity == result.identity

    @pytest.mark.parametrize("token", [None, "", "forged-token"])
    def test_require_identity_without_session(self, manager: SessionManager, token: str | None) -> None:
        with pytest.raises(UnauthenticatedError) as exc_info:
            manager.require_identity(RequestContext(session_token=token))

        assert not isinstance(exc_info.value, SessionExpiredError)

    @pytest.mark.asyncio
    async def test_expired_session_raises_then_is_unknown(self, manager: SessionManager, clock: FakeClock) -> None:
        """Expiry is reported once, after which the token is just unknown."""
        result = await manager.login("admin", "admin123")
        assert result.session is not None
        context = RequestContext(session_token=result.session.token)
        clock.advance(hours=24, seconds=1)

        with pytest.raises(SessionExpiredError):
            manager.require_identity(context)

        assert manager.resolve(context).status == "missing"

    @pytest.mark.asyncio
    async def test_expired_session_still_an_unauthenticated_error(
        self, manager: SessionManager, clock: FakeClock
    ) -> None:
        """Callers catching UnauthenticatedError handle expiry too."""
        result = await manager.login("admin", "admin123")
        assert result.session is not None
        clock.advance(days=3)

        with pytest.raises(UnauthenticatedError):
            manager.require_identity(RequestContext(session_token=result.session.token))

    @pytest.mark.asyncio
    async def test_active_sessions_oldest_first(self, manager: SessionManager, clock: FakeClock) -> None:
        first = await manager.login("admin", "admin123")
        clock.advance(minutes=5)
        second = await manager.login("editor", "s3cret")

        pairs = manager.active_sessions()

        assert [session.token for session, _ in pairs] == [
            first.session.token if first.session else None,
            second.session.token if second.session else None,
        ]
        assert [identity.username for _, identity in pairs] == ["admin", "editor"]


# =============================================================================
# Audit
# =============================================================================


class TestAuditEvents:
    """SessionManager records auth transitions on the audit logger."""

    @pytest.mark.asyncio
    async def test_login_success_events(self, manager: SessionManager, auth_logger: MagicMock) -> None:
        result = await manager.login("admin", "admin123", RequestContext(client_host="10.0.0.1"))
        assert result.identity is not None and result.session is not None

        auth_logger.log_login_succeeded.assert_called_once_with(
            username="admin",
            identity_id=result.identity.id,
            client_host="10.0.0.1",
        )
        auth_logger.log_session_started.assert_called_once_with(
            session_id=result.session.token,
            identity_id=result.identity.id,
        )
        auth_logger.log_login_failed.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_credentials_event(self, manager: SessionManager, auth_logger: MagicMock) -> None:
        await manager.login("admin", "wrong")

        auth_logger.log_login_failed.assert_called_once()
        kwargs = auth_logger.log_login_failed.call_args.kwargs
        assert kwargs["failure_reason"] == "invalid_credentials"
        assert "password" not in kwargs
        auth_logger.log_session_started.assert_not_called()

    @pytest.mark.asyncio
    async def test_unavailable_event(self, sessions: SessionStore, auth_logger: MagicMock) -> None:
        manager = SessionManager(FakeVerifier(unavailable=True), IdentityStore(), sessions, auth_logger)

        await manager.login("admin", "admin123")

        kwargs = auth_logger.log_login_failed.call_args.kwargs
        assert kwargs["failure_reason"] == "service_unavailable"
        assert kwargs["error_type"] == "network"

    @pytest.mark.asyncio
    async def test_logout_and_expiry_events(
        self, manager: SessionManager, auth_logger: MagicMock, clock: FakeClock
    ) -> None:
        first = await manager.login("admin", "admin123")
        second = await manager.login("admin", "admin123")
        assert first.session is not None and second.session is not None

        manager.logout(first.session.token)
        clock.advance(days=2)
        manager.resolve(RequestContext(session_token=second.session.token))

        reasons = [c.kwargs["end_reason"] for c in auth_logger.log_session_ended.call_args_list]
        assert reasons == ["logout", "expired"]

    def test_denied_event(self, manager: SessionManager, auth_logger: MagicMock) -> None:
        with pytest.raises(UnauthenticatedError):
            manager.require_identity(RequestContext(path="/api/user", client_host="10.0.0.2"))

        auth_logger.log_access_denied.assert_called_once_with(
            denial_reason="missing",
            path="/api/user",
            client_host="10.0.0.2",
        )
