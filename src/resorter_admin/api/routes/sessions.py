"""Auth session API endpoints.

Lets a logged-in admin see which admin sessions are currently active.
Tokens are never returned; each session is identified by a short hash.

Routes mounted at: /api/auth-sessions
"""

from __future__ import annotations

__all__ = ["router"]

from fastapi import APIRouter

from resorter_admin.api.deps import CurrentIdentityDep, SessionManagerDep
from resorter_admin.api.schemas import AUTH_ERROR_RESPONSES, AuthSessionResponse
from resorter_admin.utils.logging.logging_helpers import hash_sensitive_id

router = APIRouter()


@router.get("", response_model=list[AuthSessionResponse], responses=AUTH_ERROR_RESPONSES)
async def list_auth_sessions(
    identity: CurrentIdentityDep,
    manager: SessionManagerDep,
) -> list[AuthSessionResponse]:
    """List all active admin sessions, oldest first.

    Args:
        identity: Caller identity (gate).
        manager: Session manager (injected).

    Returns:
        List of active sessions.
    """
    return [
        AuthSessionResponse(
            session_id=hash_sensitive_id(session.token),
            identity_id=owner.id,
            username=owner.username,
            is_admin=session.is_admin,
            started_at=session.created_at,
            expires_at=session.expires_at,
        )
        for session, owner in manager.active_sessions()
    ]
