"""Authentication API schemas."""

from __future__ import annotations

__all__ = [
    "IdentityResponse",
    "LoginRequest",
    "LogoutResponse",
]

from pydantic import BaseModel


class LoginRequest(BaseModel):
    """Login credentials (JSON or form body).

    Values are forwarded to the identity provider as-is; only presence is
    checked here.
    """

    username: str
    password: str


class IdentityResponse(BaseModel):
    """The authenticated identity. Never carries a password."""

    id: str
    username: str


class LogoutResponse(BaseModel):
    """Logout response."""

    status: str
    message: str
