"""Application configuration for resorter-admin.

Defines configuration models for the identity provider, the upstream
catalogue API, sessions, the HTTP server and logging. Config is created via
`resorter-admin config init` and stored at the OS-appropriate location
(via click.get_app_dir).

Example usage:
    # Load from config file
    config = AppConfig.load_from_files(config_path)

    # Defaults plus environment overrides (no file needed)
    config = AppConfig.from_env()

    # Save new configuration
    config.save_to_file(config_path)
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_LOG_DIR",
    "AppConfig",
    "IdentityProviderConfig",
    "LoggingConfig",
    "ServerConfig",
    "SessionConfig",
    "UpstreamConfig",
    "get_auth_log_path",
    "get_config_path",
    "get_system_log_path",
]

import os
import sys
from pathlib import Path
from typing import Literal, Mapping

from pydantic import BaseModel, Field

from resorter_admin.constants import (
    APP_NAME,
    AUTH_LOG_FILENAME,
    CONFIG_FILENAME,
    DEFAULT_API_BASE_URL,
    DEFAULT_CREDENTIAL_TIMEOUT_SECONDS,
    DEFAULT_SERVER_HOST,
    DEFAULT_SERVER_PORT,
    DEFAULT_SESSION_COOKIE_NAME,
    DEFAULT_SESSION_TTL_SECONDS,
    DEFAULT_UPSTREAM_TIMEOUT_SECONDS,
    ENV_API_BASE_URL,
    ENV_CORS_ORIGINS,
    ENV_SESSION_TTL,
    MAX_CREDENTIAL_TIMEOUT_SECONDS,
    MAX_UPSTREAM_TIMEOUT_SECONDS,
    MIN_CREDENTIAL_TIMEOUT_SECONDS,
    MIN_SESSION_TTL_SECONDS,
    MIN_UPSTREAM_TIMEOUT_SECONDS,
    SYSTEM_LOG_FILENAME,
)
from resorter_admin.utils.file_helpers import get_app_dir, read_model_file, write_model_file


# =============================================================================
# Platform-specific defaults
# =============================================================================


def _get_platform_log_dir() -> str:
    """Get platform-appropriate base log directory following OS conventions.

    Returns:
        Platform-specific base log directory path (unexpanded).

    Platform conventions:
        - macOS: ~/Library/Logs
        - Linux: ~/.local/state (XDG Base Directory Specification for logs/state)
        - Windows: ~/AppData/Local
    """
    if sys.platform == "darwin":
        return "~/Library/Logs"
    elif sys.platform == "win32":
        return "~/AppData/Local"
    else:
        return os.environ.get("XDG_STATE_HOME", "~/.local/state")


DEFAULT_LOG_DIR = _get_platform_log_dir()


# =============================================================================
# Sections
# =============================================================================


class IdentityProviderConfig(BaseModel):
    """External identity provider used to verify admin credentials.

    Attributes:
        base_url: Provider base URL; the login check is GET <base_url>/API/User/login.
        timeout_seconds: Hard bound on a single credential check.
    """

    base_url: str = Field(default=DEFAULT_API_BASE_URL, min_length=1)
    timeout_seconds: float = Field(
        default=DEFAULT_CREDENTIAL_TIMEOUT_SECONDS,
        ge=MIN_CREDENTIAL_TIMEOUT_SECONDS,
        le=MAX_CREDENTIAL_TIMEOUT_SECONDS,
    )


class UpstreamConfig(BaseModel):
    """Resorter360 catalogue API that CRUD routes are proxied to."""

    base_url: str = Field(default=DEFAULT_API_BASE_URL, min_length=1)
    timeout_seconds: float = Field(
        default=DEFAULT_UPSTREAM_TIMEOUT_SECONDS,
        ge=MIN_UPSTREAM_TIMEOUT_SECONDS,
        le=MAX_UPSTREAM_TIMEOUT_SECONDS,
    )


class SessionConfig(BaseModel):
    """Server-side session settings.

    Attributes:
        ttl_seconds: Session validity window measured from creation.
        cookie_name: Name of the cookie carrying the opaque session token.
        cookie_secure: Set the Secure flag (enable behind HTTPS).
        cookie_samesite: SameSite policy for the session cookie.
    """

    ttl_seconds: int = Field(default=DEFAULT_SESSION_TTL_SECONDS, ge=MIN_SESSION_TTL_SECONDS)
    cookie_name: str = Field(default=DEFAULT_SESSION_COOKIE_NAME, min_length=1, pattern=r"^[A-Za-z0-9_\-]+$")
    cookie_secure: bool = False
    cookie_samesite: Literal["lax", "strict", "none"] = "lax"


class ServerConfig(BaseModel):
    """HTTP server binding and CORS settings."""

    host: str = Field(default=DEFAULT_SERVER_HOST, min_length=1)
    port: int = Field(default=DEFAULT_SERVER_PORT, ge=1, le=65535)
    cors_origins: list[str] = Field(default_factory=list)


class LoggingConfig(BaseModel):
    """Logging configuration settings.

    Logs are stored under <log_dir>/resorter-admin/:
        <log_dir>/
        └── resorter-admin/
            ├── system/
            │   └── system.jsonl      # WARNING and above
            └── audit/
                └── auth.jsonl        # login/logout/session events

    Attributes:
        log_dir: Base directory for logs. None disables file logging
            (console output only, audit events discarded).
        log_level: Console log level for the system logger.
    """

    log_dir: str | None = DEFAULT_LOG_DIR
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


# =============================================================================
# Root
# =============================================================================


class AppConfig(BaseModel):
    """Main application configuration for resorter-admin.

    Every section has defaults, so an empty JSON object is a valid config.

    Attributes:
        identity_provider: Where and how credentials are verified.
        upstream: Catalogue API the CRUD routes proxy to.
        session: Session TTL and cookie settings.
        server: HTTP bind address and CORS origins.
        logging: Log directory and level.
    """

    identity_provider: IdentityProviderConfig = Field(default_factory=IdentityProviderConfig)
    upstream: UpstreamConfig = Field(default_factory=UpstreamConfig)
    session: SessionConfig = Field(default_factory=SessionConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "AppConfig":
        """Build a config from defaults plus environment overrides."""
        return cls().with_env_overrides(environ)

    def with_env_overrides(self, environ: Mapping[str, str] | None = None) -> "AppConfig":
        """Return a copy with environment overrides applied.

        Recognised variables:
            API_BASE_URL: Base URL for both the identity provider and upstream API.
            RESORTER_ADMIN_SESSION_TTL: Session TTL in seconds.
            RESORTER_ADMIN_CORS_ORIGINS: Comma-separated list of allowed origins.

        Args:
            environ: Mapping to read from (defaults to os.environ).

        Returns:
            New validated AppConfig.

        Raises:
            ValueError: If an override has an invalid value.
        """
        env = os.environ if environ is None else environ
        data = self.model_dump()

        base_url = env.get(ENV_API_BASE_URL, "").strip()
        if base_url:
            data["identity_provider"]["base_url"] = base_url
            data["upstream"]["base_url"] = base_url

        ttl = env.get(ENV_SESSION_TTL, "").strip()
        if ttl:
            try:
                data["session"]["ttl_seconds"] = int(ttl)
            except ValueError as e:
                raise ValueError(f"{ENV_SESSION_TTL} must be an integer, got {ttl!r}") from e

        origins = env.get(ENV_CORS_ORIGINS, "").strip()
        if origins:
            data["server"]["cors_origins"] = [o.strip() for o in origins.split(",") if o.strip()]

        return AppConfig.model_validate(data)

    def save_to_file(self, config_path: Path) -> None:
        """Write the config to JSON, creating owner-only parent directories."""
        write_model_file(config_path, self)

    @classmethod
    def load_from_files(cls, config_path: Path) -> "AppConfig":
        """Load configuration from JSON file.

        Args:
            config_path: Path to the config JSON file.

        Returns:
            AppConfig instance with loaded configuration.

        Raises:
            FileNotFoundError: If config file doesn't exist.
            ValueError: If config file is invalid.
        """
        return read_model_file(
            config_path,
            cls,
            description="configuration",
            reset_hint=f"Run '{APP_NAME} config init --force' to reset it.",
        )


# =============================================================================
# Paths
# =============================================================================


def get_config_path() -> Path:
    """Return the default config file location in the app dir."""
    return get_app_dir() / CONFIG_FILENAME


def _app_log_root(config: AppConfig) -> Path | None:
    if config.logging.log_dir is None:
        return None
    return Path(config.logging.log_dir).expanduser() / APP_NAME


def get_system_log_path(config: AppConfig) -> Path | None:
    """Path to system.jsonl, or None when file logging is disabled."""
    root = _app_log_root(config)
    return root / "system" / SYSTEM_LOG_FILENAME if root else None


def get_auth_log_path(config: AppConfig) -> Path | None:
    """Path to audit/auth.jsonl, or None when file logging is disabled."""
    root = _app_log_root(config)
    return root / "audit" / AUTH_LOG_FILENAME if root else None
