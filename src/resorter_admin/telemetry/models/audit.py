"""Pydantic models for the authentication audit log.

IMPORTANT: The 'time' field is Optional[str] = None because:
- Model instances are created WITHOUT timestamps (time=None)
- JsonLineFormatter adds the timestamp during log serialization
- This provides a single source of truth for timestamps
"""

from __future__ import annotations

__all__ = [
    "AuthEvent",
]

from typing import Literal

from pydantic import BaseModel, Field


class AuthEvent(BaseModel):
    """One authentication/authorization log entry (audit/auth.jsonl).

    Inspired by:
      - OCSF Authentication (3002): login outcome, identity, provider context
      - OCSF Authorize Session (3003): session lifecycle tied to identity

    Note: 'time' is None when created, populated by JsonLineFormatter during logging.
    session_id and username are hashed before the event is written.
    """

    time: str | None = Field(
        None,
        description="ISO 8601 timestamp, added by formatter during serialization",
    )

    event_type: Literal[
        "login_succeeded",
        "login_failed",
        "session_started",
        "session_ended",
        "access_denied",
    ]
    status: Literal["Success", "Failure"]

    username: str | None = None
    identity_id: str | None = None
    session_id: str | None = None

    # login_failed
    failure_reason: Literal["invalid_credentials", "service_unavailable"] | None = None
    # session_ended
    end_reason: Literal["logout", "expired"] | None = None
    # access_denied
    denial_reason: Literal["missing", "expired"] | None = None
    path: str | None = None

    client_host: str | None = None
    error_type: str | None = None
    error_message: str | None = None
    message: str | None = None
