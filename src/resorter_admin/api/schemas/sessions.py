"""Auth session API schemas."""

from __future__ import annotations

__all__ = [
    "AuthSessionResponse",
]

from datetime import datetime

from pydantic import BaseModel


class AuthSessionResponse(BaseModel):
    """Response model for an active admin session.

    The session token itself is never returned; session_id is its hash.
    """

    session_id: str
    identity_id: str
    username: str
    is_admin: bool
    started_at: datetime
    expires_at: datetime
