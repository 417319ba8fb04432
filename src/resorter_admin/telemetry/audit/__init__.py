"""Authentication audit logging."""

from .auth_logger import AuthLogger, create_auth_logger

__all__ = [
    "AuthLogger",
    "create_auth_logger",
]
