"""Server-side sessions bound to a local identity.

A session is created on successful login and identified by an opaque,
cryptographically random token. The token is the only thing that leaves the
server (in the session cookie).

Validity:
- A session is valid while now <= created_at + ttl
- Past that instant it is treated exactly like an unknown token, and the
  record is purged the first time the expiry is noticed

Sessions are never mutated in place; logout deletes them.
"""

from __future__ import annotations

__all__ = [
    "Session",
    "SessionLookup",
    "SessionStore",
]

import secrets
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Literal

from resorter_admin.constants import DEFAULT_SESSION_TTL_SECONDS, SESSION_TOKEN_BYTES


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Session:
    """One authenticated client context.

    Attributes:
        token: Opaque session token (also the store key).
        identity_id: Id of the owning Identity.
        created_at: Session creation timestamp (UTC).
        expires_at: created_at + ttl (UTC).
        is_admin: Elevated-access flag; there is a single tier, so always True.
    """

    token: str
    identity_id: str
    created_at: datetime
    expires_at: datetime
    is_admin: bool = True

    def is_expired(self, now: datetime) -> bool:
        """Check if session has expired at ``now``."""
        return now > self.expires_at


@dataclass(frozen=True)
class SessionLookup:
    """Outcome of looking a token up.

    Attributes:
        status: "active", "missing" (unknown or no token) or "expired" (purged).
        session: The session for "active" and "expired", None for "missing".
    """

    status: Literal["active", "missing", "expired"]
    session: Session | None = None

    @property
    def is_active(self) -> bool:
        return self.status == "active"


class SessionStore:
    """In-memory session table with a fixed time-to-live.

    Usage:
        store = SessionStore(ttl=timedelta(hours=24))
        session = store.create(identity.id)
        lookup = store.lookup(session.token)
        store.delete(session.token)
    """

    DEFAULT_TTL = timedelta(seconds=DEFAULT_SESSION_TTL_SECONDS)

    def __init__(
        self,
        ttl: timedelta = DEFAULT_TTL,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """Initialize session store.

        Args:
            ttl: Session time-to-live. Default 24 hours.
            clock: Returns the current UTC time (injectable for tests).
        """
        self._ttl = ttl
        self._clock = clock
        self._sessions: dict[str, Session] = {}
        self._lock = threading.Lock()

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def create(self, identity_id: str) -> Session:
        """Create and store a new session for an identity.

        Args:
            identity_id: Id of an existing Identity.

        Returns:
            The new Session with a fresh token.
        """
        now = self._clock()
        session = Session(
            token=secrets.token_urlsafe(SESSION_TOKEN_BYTES),
            identity_id=identity_id,
            created_at=now,
            expires_at=now + self._ttl,
        )
        with self._lock:
            self._sessions[session.token] = session
        return session

    def lookup(self, token: str | None) -> SessionLookup:
        """Look a token up, purging it if it has expired.

        Args:
            token: Session token from the client, or None if none was presented.

        Returns:
            SessionLookup describing the outcome.
        """
        if not token:
            return SessionLookup(status="missing")

        now = self._clock()
        with self._lock:
            session = self._sessions.get(token)
            if session is None:
                return SessionLookup(status="missing")
            if session.is_expired(now):
                del self._sessions[token]
                return SessionLookup(status="expired", session=session)
        return SessionLookup(status="active", session=session)

    def get(self, token: str | None) -> Session | None:
        """Return the session if it exists and has not expired."""
        lookup = self.lookup(token)
        return lookup.session if lookup.is_active else None

    def delete(self, token: str | None) -> Session | None:
        """Remove a session. Unknown tokens are a no-op.

        Returns:
            The removed session, or None if there was nothing to remove.
        """
        if not token:
            return None
        with self._lock:
            return self._sessions.pop(token, None)

    def cleanup_expired(self) -> int:
        """Remove expired sessions. Returns count of removed sessions."""
        now = self._clock()
        with self._lock:
            expired = [token for token, session in self._sessions.items() if session.is_expired(now)]
            for token in expired:
                del self._sessions[token]
        return len(expired)

    @property
    def active_session_count(self) -> int:
        """Return count of active (non-expired) sessions."""
        self.cleanup_expired()
        with self._lock:
            return len(self._sessions)

    def get_all_sessions(self) -> list[Session]:
        """Get all active (non-expired) sessions."""
        self.cleanup_expired()
        with self._lock:
            return list(self._sessions.values())
