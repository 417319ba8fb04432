"""Shared fixtures: controllable clock, mock identity provider, mock upstream API.

Network access is never needed: both external services are served by
httpx.MockTransport handlers defined here.
"""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from resorter_admin.api.server import create_api_app
from resorter_admin.auth.credentials import CredentialDelegate
from resorter_admin.auth.session import SessionStore
from resorter_admin.config import AppConfig
from resorter_admin.upstream.client import UpstreamClient

PROVIDER_BASE_URL = "https://idp.test"
UPSTREAM_BASE_URL = "https://upstream.test"

# Credentials the mock identity provider accepts
VALID_USERS = {"admin": "admin123", "editor": "s3cret"}


# =============================================================================
# Clock
# =============================================================================


class FakeClock:
    """Manually advanced UTC clock for session TTL tests."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


# =============================================================================
# Identity provider handlers
# =============================================================================


def accepting_provider(request: httpx.Request) -> httpx.Response:
    """Answer true for VALID_USERS, false otherwise."""
    login = request.url.params.get("login")
    password = request.url.params.get("password")
    accepted = login in VALID_USERS and VALID_USERS[login] == password
    return httpx.Response(200, json=accepted)


async def hanging_provider(request: httpx.Request) -> httpx.Response:
    """Never answers within any configured timeout."""
    await asyncio.sleep(30)
    return httpx.Response(200, json=True)


def failing_provider(status_code: int = 500) -> Callable[[httpx.Request], httpx.Response]:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, text="Internal Server Error")

    return handler


def provider_client(handler: Callable[..., Any]) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


# =============================================================================
# Upstream catalogue API
# =============================================================================


@dataclass
class FakeUpstream:
    """Records requests and replays canned (status, body) answers.

    Unknown routes answer 404. A route whose answer is an exception instance
    raises it instead (e.g. httpx.ConnectError).
    """

    routes: dict[tuple[str, str], Any] = field(default_factory=dict)
    requests: list[httpx.Request] = field(default_factory=list)

    def add(self, method: str, path: str, status_code: int = 200, body: Any = None) -> None:
        self.routes[(method, path)] = (status_code, body)

    def fail(self, method: str, path: str, error: Exception) -> None:
        self.routes[(method, path)] = error

    def __call__(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        answer = self.routes.get((request.method, request.url.path))
        if answer is None:
            return httpx.Response(404, text=f"no route {request.method} {request.url.path}")
        if isinstance(answer, Exception):
            raise answer
        status_code, body = answer
        if body is None:
            return httpx.Response(status_code)
        if isinstance(body, str):
            return httpx.Response(status_code, text=body)
        return httpx.Response(status_code, json=body)

    def last_json(self) -> Any:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


def upstream_client(app_config: AppConfig, handler: Callable[..., Any]) -> UpstreamClient:
    return UpstreamClient(
        app_config.upstream,
        http_client=httpx.AsyncClient(base_url=UPSTREAM_BASE_URL, transport=httpx.MockTransport(handler)),
    )


# =============================================================================
# Config and app
# =============================================================================


@pytest.fixture
def app_config() -> AppConfig:
    """Config pointing at the mock services, file logging disabled."""
    return AppConfig.model_validate(
        {
            "identity_provider": {"base_url": PROVIDER_BASE_URL, "timeout_seconds": 0.5},
            "upstream": {"base_url": UPSTREAM_BASE_URL},
            "logging": {"log_dir": None},
        }
    )


@pytest.fixture
def make_app(
    app_config: AppConfig,
    clock: FakeClock,
    upstream: FakeUpstream,
) -> Callable[..., FastAPI]:
    """Factory building the full app against mock services."""

    def _make(provider: Callable[..., Any] = accepting_provider) -> FastAPI:
        return create_api_app(
            app_config,
            credential_delegate=CredentialDelegate(
                app_config.identity_provider,
                http_client=provider_client(provider),
            ),
            upstream_client=upstream_client(app_config, upstream),
            session_store=SessionStore(
                ttl=timedelta(seconds=app_config.session.ttl_seconds),
                clock=clock,
            ),
        )

    return _make


@pytest.fixture
def client(make_app: Callable[..., FastAPI]) -> TestClient:
    """Client for an app whose provider accepts VALID_USERS."""
    return TestClient(make_app())


@pytest.fixture
def logged_in_client(client: TestClient) -> TestClient:
    """Client holding a valid admin session cookie."""
    response = client.get("/api/login", params={"username": "admin", "password": "admin123"})
    assert response.status_code == 200
    return client
