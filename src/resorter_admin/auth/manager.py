"""Login, logout and the request authorization gate.

SessionManager is the single entry point the HTTP layer talks to. It ties
together the credential delegate, the identity store and the session store,
and records every auth-relevant transition in the auth audit log.

Login outcomes are returned as a LoginResult value rather than raised, so the
caller must handle all three cases explicitly:
    - authenticated: identity resolved, fresh session issued
    - invalid_credentials: provider said no; nothing was created
    - service_unavailable: provider could not answer; nothing was created
"""

from __future__ import annotations

__all__ = [
    "GateResult",
    "LoginOutcome",
    "LoginResult",
    "RequestContext",
    "SessionManager",
]

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from resorter_admin.auth.identity import Identity, IdentityStore
from resorter_admin.auth.session import Session, SessionStore
from resorter_admin.exceptions import (
    InvalidCredentialsError,
    ServiceUnavailableError,
    SessionExpiredError,
    UnauthenticatedError,
)
from resorter_admin.telemetry.audit.auth_logger import create_auth_logger
from resorter_admin.telemetry.system.system_logger import get_system_logger

if TYPE_CHECKING:
    from resorter_admin.auth.credentials import CredentialVerifier
    from resorter_admin.telemetry.audit.auth_logger import AuthLogger


LoginOutcome = Literal["authenticated", "invalid_credentials", "service_unavailable"]


@dataclass(frozen=True)
class RequestContext:
    """What the gate knows about an incoming request.

    Attributes:
        session_token: Token from the session cookie, None if absent.
        client_host: Remote address, for audit records.
        path: Request path, for audit records.
    """

    session_token: str | None = None
    client_host: str | None = None
    path: str | None = None


@dataclass(frozen=True)
class LoginResult:
    """Result of a login attempt.

    identity and session are set only for "authenticated"; error is set only
    for "service_unavailable".
    """

    outcome: LoginOutcome
    identity: Identity | None = None
    session: Session | None = None
    error: ServiceUnavailableError | None = None

    @property
    def ok(self) -> bool:
        return self.outcome == "authenticated"

    def unwrap(self) -> tuple[Identity, Session]:
        """Return the identity and session, or raise the error for the outcome.

        Raises:
            ServiceUnavailableError: Provider could not answer.
            InvalidCredentialsError: Provider rejected the credentials.
        """
        if self.outcome == "service_unavailable":
            raise self.error or ServiceUnavailableError("Identity provider unavailable", reason="unknown")
        if self.identity is None or self.session is None:
            raise InvalidCredentialsError("Invalid credentials")
        return self.identity, self.session


@dataclass(frozen=True)
class GateResult:
    """Result of resolving a request's session."""

    status: Literal["authenticated", "missing", "expired"]
    identity: Identity | None = None
    session: Session | None = None

    @property
    def ok(self) -> bool:
        return self.status == "authenticated"


class SessionManager:
    """Coordinates credential checks, identities and sessions.

    Usage:
        manager = SessionManager(delegate, IdentityStore(), SessionStore())
        result = await manager.login("admin", "secret")
        if result.ok:
            token = result.session.token
        identity = manager.current_identity(token)
        manager.logout(token)
    """

    def __init__(
        self,
        delegate: "CredentialVerifier",
        identities: IdentityStore | None = None,
        sessions: SessionStore | None = None,
        auth_logger: "AuthLogger | None" = None,
    ) -> None:
        """Initialize session manager.

        Args:
            delegate: Verifies credentials against the identity provider.
            identities: Identity store (default: new empty store).
            sessions: Session store (default: 24h TTL, wall clock).
            auth_logger: Audit logger (default: discards events).
        """
        self._delegate = delegate
        self._identities = identities if identities is not None else IdentityStore()
        self._sessions = sessions if sessions is not None else SessionStore()
        self._auth_logger = auth_logger if auth_logger is not None else create_auth_logger(None)

    @property
    def identities(self) -> IdentityStore:
        return self._identities

    @property
    def sessions(self) -> SessionStore:
        return self._sessions

    # =========================================================================
    # Login / logout
    # =========================================================================

    async def login(
        self,
        username: str,
        password: str,
        context: RequestContext | None = None,
    ) -> LoginResult:
        """Verify credentials and, on success, issue a new session.

        Each successful login creates a new session; earlier sessions of the
        same identity stay valid. No state is touched unless the provider
        accepts the credentials.

        Args:
            username: Login name (passed to the provider unvalidated).
            password: Password (passed to the provider unvalidated).
            context: Request metadata for audit records.

        Returns:
            LoginResult with the outcome.
        """
        client_host = context.client_host if context else None

        try:
            accepted = await self._delegate.verify(username, password)
        except ServiceUnavailableError as e:
            self._auth_logger.log_login_failed(
                username=username,
                failure_reason="service_unavailable",
                client_host=client_host,
                error_type=e.reason,
                error_message=str(e),
            )
            return LoginResult(outcome="service_unavailable", error=e)

        if not accepted:
            self._auth_logger.log_login_failed(
                username=username,
                failure_reason="invalid_credentials",
                client_host=client_host,
            )
            return LoginResult(outcome="invalid_credentials")

        identity, created = self._identities.get_or_create(username)
        if created:
            get_system_logger().info(
                {
                    "event": "identity_created",
                    "identity_id": identity.id,
                }
            )

        session = self._sessions.create(identity.id)
        self._auth_logger.log_login_succeeded(
            username=username,
            identity_id=identity.id,
            client_host=client_host,
        )
        self._auth_logger.log_session_started(
            session_id=session.token,
            identity_id=identity.id,
        )
        return LoginResult(outcome="authenticated", identity=identity, session=session)

    def logout(self, token: str | None) -> bool:
        """Destroy the session for token. Idempotent.

        Args:
            token: Session token, or None if the client sent none.

        A session whose TTL already elapsed is purged and recorded as
        expired, not as a logout.

        Returns:
            True if a live session was destroyed, False otherwise.
        """
        lookup = self._sessions.lookup(token)
        if lookup.status == "expired" and lookup.session is not None:
            self._auth_logger.log_session_ended(
                session_id=lookup.session.token,
                identity_id=lookup.session.identity_id,
                end_reason="expired",
            )
            return False
        if not lookup.is_active:
            return False

        session = self._sessions.delete(token)
        if session is None:
            return False

        self._auth_logger.log_session_ended(
            session_id=session.token,
            identity_id=session.identity_id,
            end_reason="logout",
        )
        return True

    # =========================================================================
    # Authorization gate
    # =========================================================================

    def resolve(self, context: RequestContext) -> GateResult:
        """Resolve the session attached to a request.

        Expired sessions are purged and reported as "expired"; unknown or
        absent tokens are "missing". Callers that only need a yes/no answer
        should treat both the same way.
        """
        lookup = self._sessions.lookup(context.session_token)

        if lookup.status == "expired" and lookup.session is not None:
            self._auth_logger.log_session_ended(
                session_id=lookup.session.token,
                identity_id=lookup.session.identity_id,
                end_reason="expired",
            )
            return GateResult(status="expired")

        if lookup.session is None:
            return GateResult(status="missing")

        identity = self._identities.get(lookup.session.identity_id)
        if identity is None:
            # Identities are never deleted; a dangling session is unusable
            return GateResult(status="missing")

        return GateResult(status="authenticated", identity=identity, session=lookup.session)

    def current_identity(self, token: str | None) -> Identity | None:
        """Return the identity behind a token, or None if not authenticated."""
        return self.resolve(RequestContext(session_token=token)).identity

    def require_identity(self, context: RequestContext) -> Identity:
        """Gate a protected operation.

        Args:
            context: Request metadata including the session token.

        Returns:
            The authenticated identity.

        Raises:
            SessionExpiredError: Token referred to a session whose TTL elapsed.
            UnauthenticatedError: No token, or token unknown.
        """
        result = self.resolve(context)
        if result.ok and result.identity is not None:
            return result.identity

        self._auth_logger.log_access_denied(
            denial_reason=result.status,
            path=context.path,
            client_host=context.client_host,
        )
        if result.status == "expired":
            raise SessionExpiredError("Session expired")
        raise UnauthenticatedError("Authentication required")

    def active_sessions(self) -> list[tuple[Session, Identity]]:
        """Active sessions paired with their identities, oldest first."""
        pairs: list[tuple[Session, Identity]] = []
        for session in sorted(self._sessions.get_all_sessions(), key=lambda s: s.created_at):
            identity = self._identities.get(session.identity_id)
            if identity is not None:
                pairs.append((session, identity))
        return pairs
