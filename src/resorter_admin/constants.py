"""Application-wide constants for resorter-admin.

Constants that define application behavior.
For user-configurable settings per deployment, see config.py.
"""

__all__ = [
    # Application identity
    "APP_NAME",
    "CONFIG_FILENAME",
    # External services
    "DEFAULT_API_BASE_URL",
    "IDENTITY_LOGIN_PATH",
    "DEFAULT_CREDENTIAL_TIMEOUT_SECONDS",
    "MIN_CREDENTIAL_TIMEOUT_SECONDS",
    "MAX_CREDENTIAL_TIMEOUT_SECONDS",
    "DEFAULT_UPSTREAM_TIMEOUT_SECONDS",
    "MIN_UPSTREAM_TIMEOUT_SECONDS",
    "MAX_UPSTREAM_TIMEOUT_SECONDS",
    "UPSTREAM_ERROR_EXCERPT_LENGTH",
    # Sessions
    "DEFAULT_SESSION_TTL_SECONDS",
    "MIN_SESSION_TTL_SECONDS",
    "SESSION_TOKEN_BYTES",
    "DEFAULT_SESSION_COOKIE_NAME",
    # HTTP server
    "DEFAULT_SERVER_HOST",
    "DEFAULT_SERVER_PORT",
    # Logging
    "SYSTEM_LOG_FILENAME",
    "AUTH_LOG_FILENAME",
    # Environment overrides
    "ENV_API_BASE_URL",
    "ENV_SESSION_TTL",
    "ENV_CORS_ORIGINS",
]

# =============================================================================
# Application identity
# =============================================================================

APP_NAME = "resorter-admin"

# Config file stored in click.get_app_dir(APP_NAME)
CONFIG_FILENAME = "config.json"

# =============================================================================
# External services (Resorter360 REST API)
# =============================================================================

# Both the identity endpoint and the catalogue API live here by default
DEFAULT_API_BASE_URL = "https://api.resorter360.ge"

# Credential check: GET <base>/API/User/login?login=<u>&password=<p> -> true/false
IDENTITY_LOGIN_PATH = "/API/User/login"

DEFAULT_CREDENTIAL_TIMEOUT_SECONDS = 5.0
MIN_CREDENTIAL_TIMEOUT_SECONDS = 0.5
MAX_CREDENTIAL_TIMEOUT_SECONDS = 60.0

DEFAULT_UPSTREAM_TIMEOUT_SECONDS = 30.0
MIN_UPSTREAM_TIMEOUT_SECONDS = 1.0
MAX_UPSTREAM_TIMEOUT_SECONDS = 300.0

# Max characters of an upstream error body echoed back to clients
UPSTREAM_ERROR_EXCERPT_LENGTH = 500

# =============================================================================
# Sessions
# =============================================================================

DEFAULT_SESSION_TTL_SECONDS = 24 * 60 * 60
MIN_SESSION_TTL_SECONDS = 60

# 256 bits via secrets.token_urlsafe
SESSION_TOKEN_BYTES = 32

DEFAULT_SESSION_COOKIE_NAME = "resorter_session"

# =============================================================================
# HTTP server
# =============================================================================

DEFAULT_SERVER_HOST = "127.0.0.1"
DEFAULT_SERVER_PORT = 5000

# =============================================================================
# Logging
# =============================================================================

SYSTEM_LOG_FILENAME = "system.jsonl"
AUTH_LOG_FILENAME = "auth.jsonl"  # under <log_dir>/audit/

# =============================================================================
# Environment overrides
# =============================================================================

ENV_API_BASE_URL = "API_BASE_URL"
ENV_SESSION_TTL = "RESORTER_ADMIN_SESSION_TTL"
ENV_CORS_ORIGINS = "RESORTER_ADMIN_CORS_ORIGINS"
