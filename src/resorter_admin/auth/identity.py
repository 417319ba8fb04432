"""Local identity records for admins that have logged in at least once."""

from __future__ import annotations

__all__ = [
    "Identity",
    "IdentityStore",
]

import threading
import uuid
from dataclasses import dataclass


@dataclass(frozen=True)
class Identity:
    """Local record of a principal that authenticated via the identity provider.

    Attributes:
        id: Opaque unique identifier (uuid4), never reused.
        username: Login name, unique and case-sensitive.
    """

    id: str
    username: str


class IdentityStore:
    """Insert-only store of identities keyed by username.

    Identities are created on first successful login and are never updated
    or deleted. All operations are serialized by a lock, so get_or_create is
    atomic: concurrent first logins for the same username yield one Identity.
    """

    def __init__(self) -> None:
        self._by_id: dict[str, Identity] = {}
        self._by_username: dict[str, Identity] = {}
        self._lock = threading.Lock()

    def get(self, identity_id: str) -> Identity | None:
        """Return the identity with this id, if any."""
        with self._lock:
            return self._by_id.get(identity_id)

    def get_by_username(self, username: str) -> Identity | None:
        """Return the identity with this username (exact match), if any."""
        with self._lock:
            return self._by_username.get(username)

    def get_or_create(self, username: str) -> tuple[Identity, bool]:
        """Return the identity for username, creating it if absent.

        Args:
            username: Login name accepted by the identity provider.

        Returns:
            Tuple of (identity, created).
        """
        with self._lock:
            existing = self._by_username.get(username)
            if existing is not None:
                return existing, False

            identity = Identity(id=str(uuid.uuid4()), username=username)
            self._by_id[identity.id] = identity
            self._by_username[username] = identity
            return identity, True

    def all(self) -> list[Identity]:
        """Snapshot of all identities."""
        with self._lock:
            return list(self._by_id.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._by_id)
