"""FastAPI server for the Resorter360 admin console API.

Implements:
- Auth API (/api/login, /api/logout, /api/user) - session cookie login
- Auth sessions API (/api/auth-sessions) - active admin sessions
- Catalogue API (/api/properties, /api/cities, ...) - CRUD pass-through
- Storage, languages, calendar, exchange and notification pass-throughs

Security:
- Session token in an HttpOnly, SameSite cookie; never in a response body
- Every mutating route passes the session gate before contacting upstream
- CORS is off unless origins are configured

Usage:
    resorter-admin serve

    For development without a config file:
        uvicorn resorter_admin.api.server:create_api_app \\
            --factory --host 127.0.0.1 --port 5000
"""

from __future__ import annotations

__all__ = ["create_api_app"]

from contextlib import asynccontextmanager
from datetime import timedelta
from typing import TYPE_CHECKING, AsyncIterator

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from resorter_admin import __version__
from resorter_admin.auth.credentials import CredentialDelegate
from resorter_admin.auth.identity import IdentityStore
from resorter_admin.auth.manager import SessionManager
from resorter_admin.auth.session import SessionStore
from resorter_admin.config import AppConfig, get_auth_log_path
from resorter_admin.exceptions import UnauthenticatedError, UpstreamError
from resorter_admin.telemetry.audit.auth_logger import create_auth_logger
from resorter_admin.telemetry.system.system_logger import get_system_logger
from resorter_admin.upstream.client import UpstreamClient

from .errors import (
    APIError,
    api_error_handler,
    http_exception_handler,
    unauthenticated_error_handler,
    upstream_error_handler,
    validation_error_handler,
)
from .routes import auth, catalog, integrations, languages, sessions, storage

if TYPE_CHECKING:
    from resorter_admin.auth.credentials import CredentialVerifier
    from resorter_admin.telemetry.audit.auth_logger import AuthLogger


def create_api_app(
    config: AppConfig | None = None,
    *,
    credential_delegate: "CredentialVerifier | None" = None,
    upstream_client: UpstreamClient | None = None,
    session_store: SessionStore | None = None,
    identity_store: IdentityStore | None = None,
    auth_logger: "AuthLogger | None" = None,
) -> FastAPI:
    """Create the FastAPI application with all routes.

    Stores and clients are created here (or injected) and attached to
    app.state; their lifetime is the app's. Clients created here are closed
    on shutdown; injected ones belong to the caller.

    Args:
        config: Application config. Defaults to AppConfig.from_env().
        credential_delegate: Credential verifier (default: CredentialDelegate
            against config.identity_provider).
        upstream_client: Catalogue API client (default: UpstreamClient
            against config.upstream).
        session_store: Session store (default: TTL from config.session).
        identity_store: Identity store (default: empty).
        auth_logger: Auth audit logger (default: from config.logging).

    Returns:
        Configured FastAPI application.
    """
    if config is None:
        config = AppConfig.from_env()

    owned: list[CredentialDelegate | UpstreamClient] = []
    if credential_delegate is None:
        credential_delegate = CredentialDelegate(config.identity_provider)
        owned.append(credential_delegate)
    if upstream_client is None:
        upstream_client = UpstreamClient(config.upstream)
        owned.append(upstream_client)
    if session_store is None:
        session_store = SessionStore(ttl=timedelta(seconds=config.session.ttl_seconds))
    if auth_logger is None:
        auth_logger = create_auth_logger(get_auth_log_path(config))

    manager = SessionManager(
        credential_delegate,
        identities=identity_store,
        sessions=session_store,
        auth_logger=auth_logger,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        get_system_logger().info(
            {
                "event": "api_started",
                "identity_provider": config.identity_provider.base_url,
                "upstream": config.upstream.base_url,
                "session_ttl_seconds": config.session.ttl_seconds,
            }
        )
        yield
        for client in owned:
            await client.aclose()
        get_system_logger().info({"event": "api_stopped"})

    app = FastAPI(
        title="Resorter360 Admin API",
        description="Admin console API for the Resorter360 catalogue",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.config = config
    app.state.session_manager = manager
    app.state.upstream = upstream_client

    # CORS is disabled unless origins are configured (e.g. Vite dev server)
    if config.server.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.server.cors_origins,
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            allow_headers=["Content-Type", "Authorization"],
            max_age=3600,
        )

    # Register exception handlers for structured error responses
    app.add_exception_handler(APIError, api_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(UnauthenticatedError, unauthenticated_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(UpstreamError, upstream_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]

    # Mount API routes
    app.include_router(auth.router, prefix="/api", tags=["auth"])
    app.include_router(sessions.router, prefix="/api/auth-sessions", tags=["auth-sessions"])
    for name, router in catalog.CATALOG_ROUTERS.items():
        app.include_router(router, prefix=f"/api/{name}", tags=[name])
    app.include_router(storage.router, prefix="/api/storage", tags=["storage"])
    app.include_router(languages.router, prefix="/api/languages", tags=["languages"])
    app.include_router(integrations.router, prefix="/api", tags=["integrations"])

    return app
