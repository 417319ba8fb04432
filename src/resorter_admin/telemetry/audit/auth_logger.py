"""Authentication audit logger.

Logs authentication events to audit/auth.jsonl:
- Login outcomes (success, invalid credentials, provider unavailable)
- Session lifecycle (start, logout, expiry)
- Authorization gate denials

Credentials are never logged. Session tokens and usernames are hashed with
hash_sensitive_id before the event is written, so log lines can be correlated
without the log itself becoming a credential store.

If a write to the audit file fails, the event is reported through the
system logger instead and the request carries on.
"""

from __future__ import annotations

__all__ = [
    "AuthLogger",
    "create_auth_logger",
]

import logging
from pathlib import Path
from typing import Literal

from resorter_admin.constants import APP_NAME
from resorter_admin.telemetry.models.audit import AuthEvent
from resorter_admin.telemetry.system.system_logger import get_system_logger
from resorter_admin.utils.logging.logger_setup import setup_jsonl_logger, setup_null_logger
from resorter_admin.utils.logging.logging_helpers import (
    hash_auth_event_ids,
    serialize_audit_event,
)

AUTH_LOGGER_NAME = f"{APP_NAME}.audit.auth"


class AuthLogger:
    """Audit logger for authentication events.

    Usage:
        auth_logger = create_auth_logger(get_auth_log_path(config))
        auth_logger.log_login_succeeded(username="admin", identity_id="...")
    """

    def __init__(self, logger: logging.Logger) -> None:
        """Initialize auth logger.

        Args:
            logger: Configured logger (JSONL file handler or null handler).
        """
        self._logger = logger

    def _log_event(self, event: AuthEvent) -> bool:
        """Log an auth event, falling back to the system logger on I/O failure.

        Args:
            event: The auth event to log.

        Returns:
            True if written to the audit log, False if the fallback was used.
        """
        event_data = hash_auth_event_ids(serialize_audit_event(event))
        try:
            self._logger.info(event_data)
        except (OSError, ValueError) as e:
            get_system_logger().error(
                {
                    "event": "audit_write_failed",
                    "audit_event": event_data,
                    "error": str(e),
                    "message": f"Failed to write auth audit event {event.event_type}",
                }
            )
            return False
        return True

    def log_login_succeeded(
        self,
        *,
        username: str,
        identity_id: str,
        client_host: str | None = None,
    ) -> bool:
        """Log a login accepted by the identity provider."""
        return self._log_event(
            AuthEvent(
                event_type="login_succeeded",
                status="Success",
                username=username,
                identity_id=identity_id,
                client_host=client_host,
            )
        )

    def log_login_failed(
        self,
        *,
        username: str,
        failure_reason: Literal["invalid_credentials", "service_unavailable"],
        client_host: str | None = None,
        error_type: str | None = None,
        error_message: str | None = None,
    ) -> bool:
        """Log a failed login.

        Args:
            username: Username as submitted (hashed before writing).
            failure_reason: Whether the provider said no or could not answer.
            client_host: Remote address of the client, if known.
            error_type: Exception class name for provider failures.
            error_message: Human-readable error description.

        Returns:
            True if logged to the audit file.
        """
        return self._log_event(
            AuthEvent(
                event_type="login_failed",
                status="Failure",
                username=username,
                failure_reason=failure_reason,
                client_host=client_host,
                error_type=error_type,
                error_message=error_message,
            )
        )

    def log_session_started(self, *, session_id: str, identity_id: str) -> bool:
        """Log session creation."""
        return self._log_event(
            AuthEvent(
                event_type="session_started",
                status="Success",
                session_id=session_id,
                identity_id=identity_id,
            )
        )

    def log_session_ended(
        self,
        *,
        session_id: str,
        identity_id: str,
        end_reason: Literal["logout", "expired"],
    ) -> bool:
        """Log session end (explicit logout or TTL expiry detected on lookup)."""
        return self._log_event(
            AuthEvent(
                event_type="session_ended",
                status="Success" if end_reason == "logout" else "Failure",
                session_id=session_id,
                identity_id=identity_id,
                end_reason=end_reason,
            )
        )

    def log_access_denied(
        self,
        *,
        denial_reason: Literal["missing", "expired"],
        path: str | None = None,
        client_host: str | None = None,
    ) -> bool:
        """Log a request rejected by the authorization gate."""
        return self._log_event(
            AuthEvent(
                event_type="access_denied",
                status="Failure",
                denial_reason=denial_reason,
                path=path,
                client_host=client_host,
            )
        )


def create_auth_logger(log_path: Path | None) -> AuthLogger:
    """Create an auth logger.

    Args:
        log_path: Path to auth.jsonl (from get_auth_log_path()), or None to
            discard audit events (file logging disabled).

    Returns:
        AuthLogger: Configured logger for authentication events.
    """
    if log_path is None:
        return AuthLogger(setup_null_logger(AUTH_LOGGER_NAME))
    logger = setup_jsonl_logger(
        AUTH_LOGGER_NAME,
        log_path,
        log_level=logging.INFO,
        strict=True,
        include_level=False,
    )
    return AuthLogger(logger)
