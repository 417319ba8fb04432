"""Custom exceptions for resorter-admin.

Exceptions are organized by the phase of the request lifecycle they belong to:

Login phase (credential check against the identity provider):
    - InvalidCredentialsError: Provider explicitly rejected the username/password
    - ServiceUnavailableError: Provider unreachable, timed out or answered garbage

Request phase (authorization gate on every gated route):
    - UnauthenticatedError: No valid session presented
    - SessionExpiredError: A session was presented but its TTL elapsed

Upstream phase (catalogue pass-through to the Resorter360 API):
    - UpstreamError: Upstream API failed or could not be reached

Startup:
    - ConfigurationError: Config file missing or invalid

Usage:
    from resorter_admin.exceptions import ServiceUnavailableError
"""

from __future__ import annotations

__all__ = [
    "AuthError",
    "ConfigurationError",
    "InvalidCredentialsError",
    "ServiceUnavailableError",
    "SessionExpiredError",
    "UnauthenticatedError",
    "UpstreamError",
]


# =============================================================================
# Authentication
# =============================================================================


class AuthError(Exception):
    """Base class for authentication and authorization failures."""


class InvalidCredentialsError(AuthError):
    """The identity provider explicitly rejected the credentials.

    Surfaced as 401. Never retried automatically.
    """


class ServiceUnavailableError(AuthError):
    """The identity provider could not give a verdict.

    Raised when the provider:
    - Cannot be reached (connection refused, DNS failure, ...)
    - Does not answer within the configured timeout
    - Answers with a non-2xx status
    - Answers with a body that is not valid JSON

    Surfaced as 503. This must never be folded into InvalidCredentialsError:
    "wrong password" and "try again later" are different outcomes.

    Attributes:
        reason: Short machine-readable cause ("timeout", "network", "status", "malformed").
        status_code: Provider HTTP status, when one was received.
    """

    def __init__(self, message: str, *, reason: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.reason = reason
        self.status_code = status_code


class UnauthenticatedError(AuthError):
    """No valid session on a request that requires one. Surfaced as 401."""


class SessionExpiredError(UnauthenticatedError):
    """A session token was presented but its TTL had elapsed.

    Treated exactly like UnauthenticatedError at the HTTP boundary; the
    expired session record has already been purged when this is raised.
    """


# =============================================================================
# Upstream catalogue API
# =============================================================================


class UpstreamError(Exception):
    """The Resorter360 catalogue API failed.

    Attributes:
        status_code: Upstream HTTP status, or None if no response was received.
        body: Upstream response body (possibly truncated), if any.
    """

    def __init__(self, message: str, *, status_code: int | None = None, body: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


# =============================================================================
# Startup
# =============================================================================


class ConfigurationError(Exception):
    """Configuration is invalid or incomplete.

    Raised when:
    - Config file does not exist (not initialized)
    - Config file contains invalid JSON
    - Config file fails Pydantic validation
    """

    exit_code: int = 16
