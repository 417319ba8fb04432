"""Shared dependencies for API routes.

FastAPI convention: deps.py contains reusable request dependencies.
All route files should import dependencies from here rather than
defining their own helper functions.

Usage with Annotated:
    from resorter_admin.api.deps import CurrentIdentityDep, UpstreamDep

    @router.delete("/{item_id}")
    async def delete_item(item_id: int, identity: CurrentIdentityDep, upstream: UpstreamDep) -> None:
        ...
"""

from __future__ import annotations

__all__ = [
    # Dependency functions
    "get_config",
    "get_request_context",
    "get_session_manager",
    "get_upstream",
    "require_identity",
    # Type aliases for Annotated pattern
    "ConfigDep",
    "CurrentIdentityDep",
    "RequestContextDep",
    "SessionManagerDep",
    "UpstreamDep",
]

from typing import Annotated, Any, Callable

from fastapi import Depends, HTTPException, Request

from resorter_admin.auth.identity import Identity
from resorter_admin.auth.manager import RequestContext, SessionManager
from resorter_admin.config import AppConfig
from resorter_admin.upstream.client import UpstreamClient


# =============================================================================
# Factory for State Getters
# =============================================================================


def _create_state_getter(
    attr_name: str,
    type_hint: str,
    error_detail: str,
) -> Callable[[Request], Any]:
    """Create a dependency function that retrieves a value from app.state.

    Args:
        attr_name: Attribute name on app.state (e.g., "config", "session_manager").
        type_hint: Type name used in the generated docstring.
        error_detail: Error message for HTTPException.

    Returns:
        A dependency function compatible with FastAPI's Depends().
    """

    def getter(request: Request) -> Any:
        value = getattr(request.app.state, attr_name, None)
        if value is None:
            raise HTTPException(status_code=503, detail=error_detail)
        return value

    getter.__name__ = f"get_{attr_name}"
    getter.__doc__ = f"Get {type_hint} from app.state.\n\nRaises HTTPException 503 if not available."
    return getter


# =============================================================================
# Dependency Functions
# =============================================================================

get_config: Callable[[Request], AppConfig] = _create_state_getter(
    "config",
    "AppConfig",
    "Config not available. Server may still be starting.",
)

get_session_manager: Callable[[Request], SessionManager] = _create_state_getter(
    "session_manager",
    "SessionManager",
    "Session manager not available. Server may still be starting.",
)

get_upstream: Callable[[Request], UpstreamClient] = _create_state_getter(
    "upstream",
    "UpstreamClient",
    "Upstream client not available. Server may still be starting.",
)


def get_request_context(
    request: Request,
    config: Annotated[AppConfig, Depends(get_config)],
) -> RequestContext:
    """Build the RequestContext for the current request.

    The session token is read from the configured session cookie only.

    Args:
        request: FastAPI request object.
        config: Application config (for the cookie name).

    Returns:
        RequestContext with token, client address and path.
    """
    return RequestContext(
        session_token=request.cookies.get(config.session.cookie_name) or None,
        client_host=request.client.host if request.client else None,
        path=request.url.path,
    )


def require_identity(
    manager: Annotated[SessionManager, Depends(get_session_manager)],
    context: Annotated[RequestContext, Depends(get_request_context)],
) -> Identity:
    """Authorization gate for protected routes.

    Raises:
        UnauthenticatedError: No valid session (handled as 401).
    """
    return manager.require_identity(context)


# =============================================================================
# Type Aliases for Annotated Pattern
# =============================================================================
# These allow clean route signatures:
#     async def endpoint(identity: CurrentIdentityDep) -> Response:
# Instead of:
#     async def endpoint(identity: Identity = Depends(require_identity)) -> Response:


ConfigDep = Annotated[AppConfig, Depends(get_config)]
SessionManagerDep = Annotated[SessionManager, Depends(get_session_manager)]
UpstreamDep = Annotated[UpstreamClient, Depends(get_upstream)]
RequestContextDep = Annotated[RequestContext, Depends(get_request_context)]
CurrentIdentityDep = Annotated[Identity, Depends(require_identity)]
