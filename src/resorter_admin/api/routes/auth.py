"""Authentication API endpoints.

Provides:
- GET/POST /api/login: Verify credentials with the identity provider, start a session
- GET /api/logout: End the current session (idempotent)
- GET /api/user: Return the identity behind the current session

The session token travels only in an HttpOnly cookie. Login maps the three
LoginResult outcomes to distinct responses:
    authenticated        -> 200 + cookie + identity
    invalid_credentials  -> 401 AUTH_INVALID_CREDENTIALS
    service_unavailable  -> 503 AUTH_PROVIDER_UNAVAILABLE

Routes mounted at: /api
"""

from __future__ import annotations

__all__ = ["router"]

from typing import Any

from fastapi import APIRouter, Query, Request, Response
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from resorter_admin.api.deps import (
    ConfigDep,
    CurrentIdentityDep,
    RequestContextDep,
    SessionManagerDep,
)
from resorter_admin.api.errors import APIError, ErrorCode
from resorter_admin.api.schemas import (
    AUTH_ERROR_RESPONSES,
    ErrorResponse,
    IdentityResponse,
    LoginRequest,
    LogoutResponse,
)
from resorter_admin.auth.manager import RequestContext, SessionManager
from resorter_admin.config import AppConfig
from resorter_admin.exceptions import InvalidCredentialsError, ServiceUnavailableError

router = APIRouter()

_LOGIN_RESPONSES: dict[int | str, dict[str, Any]] = {
    401: {"model": ErrorResponse, "description": "Invalid credentials"},
    503: {"model": ErrorResponse, "description": "Authentication service unavailable"},
}


# =============================================================================
# Helpers
# =============================================================================


def _set_session_cookie(response: Response, config: AppConfig, token: str) -> None:
    response.set_cookie(
        key=config.session.cookie_name,
        value=token,
        max_age=config.session.ttl_seconds,
        path="/",
        httponly=True,
        secure=config.session.cookie_secure,
        samesite=config.session.cookie_samesite,
    )


def _clear_session_cookie(response: Response, config: AppConfig) -> None:
    response.delete_cookie(
        key=config.session.cookie_name,
        path="/",
        httponly=True,
        secure=config.session.cookie_secure,
        samesite=config.session.cookie_samesite,
    )


async def _login(
    credentials: LoginRequest,
    response: Response,
    manager: SessionManager,
    config: AppConfig,
    context: RequestContext,
) -> IdentityResponse:
    """Run a login attempt and translate the outcome to HTTP."""
    result = await manager.login(credentials.username, credentials.password, context)

    try:
        identity, session = result.unwrap()
    except ServiceUnavailableError as e:
        raise APIError(
            status_code=503,
            code=ErrorCode.AUTH_PROVIDER_UNAVAILABLE,
            message="Authentication service unavailable",
        ) from e
    except InvalidCredentialsError as e:
        raise APIError(
            status_code=401,
            code=ErrorCode.AUTH_INVALID_CREDENTIALS,
            message="Invalid credentials",
        ) from e

    _set_session_cookie(response, config, session.token)
    return IdentityResponse(id=identity.id, username=identity.username)


async def _read_login_body(request: Request) -> LoginRequest:
    """Parse credentials from a JSON or form-encoded body.

    Raises:
        RequestValidationError: Body missing, unparseable or lacking fields.
    """
    content_type = request.headers.get("content-type", "")
    try:
        if content_type.startswith(("application/x-www-form-urlencoded", "multipart/form-data")):
            form = await request.form()
            return LoginRequest.model_validate(dict(form))
        return LoginRequest.model_validate_json(await request.body() or b"{}")
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False, include_context=False)) from e


# =============================================================================
# Routes
# =============================================================================


@router.get("/login", response_model=IdentityResponse, responses=_LOGIN_RESPONSES)
async def login_with_query(
    response: Response,
    manager: SessionManagerDep,
    config: ConfigDep,
    context: RequestContextDep,
    username: str = Query(...),
    password: str = Query(...),
) -> IdentityResponse:
    """Log in with credentials passed as query parameters.

    Returns:
        The authenticated identity; the session cookie is set on the response.

    Raises:
        APIError: 401 invalid credentials, 503 provider unavailable.
    """
    credentials = LoginRequest(username=username, password=password)
    return await _login(credentials, response, manager, config, context)


@router.post("/login", response_model=IdentityResponse, responses=_LOGIN_RESPONSES)
async def login_with_body(
    request: Request,
    response: Response,
    manager: SessionManagerDep,
    config: ConfigDep,
    context: RequestContextDep,
) -> IdentityResponse:
    """Log in with credentials in a JSON or form body.

    Raises:
        RequestValidationError: 422 if username or password is missing.
        APIError: 401 invalid credentials, 503 provider unavailable.
    """
    credentials = await _read_login_body(request)
    return await _login(credentials, response, manager, config, context)


@router.get("/logout", response_model=LogoutResponse)
async def logout(
    response: Response,
    manager: SessionManagerDep,
    config: ConfigDep,
    context: RequestContextDep,
) -> LogoutResponse:
    """End the current session and clear the cookie.

    Succeeds whether or not a session existed.
    """
    ended = manager.logout(context.session_token)
    _clear_session_cookie(response, config)
    return LogoutResponse(
        status="logged_out",
        message="Session ended" if ended else "No active session",
    )


@router.get("/user", response_model=IdentityResponse, responses=AUTH_ERROR_RESPONSES)
async def current_user(identity: CurrentIdentityDep) -> IdentityResponse:
    """Return the identity behind the session cookie (401 if none)."""
    return IdentityResponse(id=identity.id, username=identity.username)
