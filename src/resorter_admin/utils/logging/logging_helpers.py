"""Turning AuthEvent models into log-safe dicts.

Session tokens are bearer credentials and usernames are personal data, so
neither reaches auth.jsonl in clear text. They are replaced by a short,
stable SHA-256 prefix that still lets lines about the same session be
correlated.
"""

from __future__ import annotations

__all__ = [
    "hash_auth_event_ids",
    "hash_sensitive_id",
    "serialize_audit_event",
]

import hashlib
from typing import Any

from pydantic import BaseModel

# AuthEvent fields replaced by hash_sensitive_id before writing
SENSITIVE_AUTH_FIELDS: tuple[str, ...] = ("session_id", "username")


def serialize_audit_event(event: BaseModel) -> dict[str, Any]:
    """JSON-mode dump without ``time`` (the formatter stamps it) and without None fields."""
    return event.model_dump(mode="json", exclude={"time"}, exclude_none=True)


def hash_sensitive_id(value: str, prefix_length: int = 8) -> str:
    """``"sha256:<first prefix_length hex chars>"``; empty input maps to ``"sha256:empty"``.

    >>> hash_sensitive_id("admin")
    'sha256:8c6976e5'
    """
    if not value:
        return "sha256:empty"
    digest = hashlib.sha256(value.encode("utf-8")).hexdigest()
    return "sha256:" + digest[:prefix_length]


def hash_auth_event_ids(event_data: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of ``event_data`` with SENSITIVE_AUTH_FIELDS hashed.

    Serialized auth events are flat, so a shallow copy leaves the input untouched.
    """
    return {
        key: hash_sensitive_id(value) if key in SENSITIVE_AUTH_FIELDS and value else value
        for key, value in event_data.items()
    }
