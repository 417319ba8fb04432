"""Credential verification delegated to the Resorter360 identity endpoint.

The admin server never makes a local trust decision about a password. It asks
the external identity provider:

    GET <base_url>/API/User/login?login=<username>&password=<password>

and expects the JSON literal ``true`` (accepted) or anything else (rejected).
Transport failures, timeouts, non-2xx answers and undecodable bodies are NOT
rejections: they raise ServiceUnavailableError so callers can tell
"wrong password" from "provider down".
"""

from __future__ import annotations

__all__ = [
    "CredentialDelegate",
    "CredentialVerifier",
]

import asyncio
from typing import TYPE_CHECKING, Protocol

import httpx

from resorter_admin.constants import IDENTITY_LOGIN_PATH
from resorter_admin.exceptions import ServiceUnavailableError
from resorter_admin.telemetry.system.system_logger import get_system_logger

if TYPE_CHECKING:
    from resorter_admin.config import IdentityProviderConfig


class CredentialVerifier(Protocol):
    """Anything that can answer "are these credentials valid?"."""

    async def verify(self, username: str, password: str) -> bool:
        """Return the provider verdict or raise ServiceUnavailableError."""
        ...


class CredentialDelegate:
    """Asks the external identity provider for a yes/no verdict.

    Usage:
        async with CredentialDelegate(config.identity_provider) as delegate:
            accepted = await delegate.verify("admin", "secret")
    """

    def __init__(
        self,
        config: "IdentityProviderConfig",
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the delegate.

        Args:
            config: Identity provider base URL and timeout.
            http_client: Optional httpx client (for testing). Closed by the
                caller, not by the delegate.
        """
        self._timeout = config.timeout_seconds
        self._client = http_client or httpx.AsyncClient(timeout=config.timeout_seconds)
        self._owns_client = http_client is None
        self._login_url = f"{config.base_url.rstrip('/')}{IDENTITY_LOGIN_PATH}"

    @property
    def login_url(self) -> str:
        """Fully qualified credential check endpoint."""
        return self._login_url

    async def __aenter__(self) -> "CredentialDelegate":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close HTTP client if we own it."""
        if self._owns_client:
            await self._client.aclose()

    async def verify(self, username: str, password: str) -> bool:
        """Check credentials against the identity provider.

        The whole round trip (connect, send, read) is bounded by the configured
        timeout; an in-flight call that exceeds it is abandoned.

        Args:
            username: Login name, passed through unvalidated.
            password: Password, passed through unvalidated.

        Returns:
            True if the provider answered 2xx with the JSON literal true,
            False if it answered 2xx with any other JSON value.

        Raises:
            ServiceUnavailableError: On timeout, network failure, non-2xx
                status or a body that is not valid JSON.
        """
        try:
            response = await asyncio.wait_for(
                self._client.get(
                    self._login_url,
                    params={"login": username, "password": password},
                    headers={"Accept": "application/json"},
                    timeout=self._timeout,
                ),
                timeout=self._timeout,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise self._unavailable(
                f"Identity provider did not answer within {self._timeout:g}s",
                reason="timeout",
            ) from e
        except httpx.HTTPError as e:
            raise self._unavailable(
                f"Identity provider unreachable: {type(e).__name__}",
                reason="network",
            ) from e

        if not response.is_success:
            raise self._unavailable(
                f"Identity provider returned HTTP {response.status_code}",
                reason="status",
                status_code=response.status_code,
            )

        try:
            verdict = response.json()
        except ValueError as e:
            raise self._unavailable(
                "Identity provider returned a body that is not JSON",
                reason="malformed",
                status_code=response.status_code,
            ) from e

        return verdict is True

    @staticmethod
    def _unavailable(
        message: str,
        *,
        reason: str,
        status_code: int | None = None,
    ) -> ServiceUnavailableError:
        get_system_logger().warning(
            {
                "event": "identity_provider_unavailable",
                "reason": reason,
                "status_code": status_code,
                "message": message,
            }
        )
        return ServiceUnavailableError(message, reason=reason, status_code=status_code)
