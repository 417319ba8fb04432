"""Error response schemas for OpenAPI documentation.

Routes reference these in their ``responses=`` declarations. The handlers
that actually build the bodies live in api/errors.py.
"""

from __future__ import annotations

__all__ = [
    "AUTH_ERROR_RESPONSES",
    "ErrorDetail",
    "ErrorResponse",
    "UPSTREAM_ERROR_RESPONSES",
    "ValidationErrorItem",
]

from typing import Any

from pydantic import BaseModel, Field


class ValidationErrorItem(BaseModel):
    """One field-level problem from request validation."""

    loc: list[str | int] = Field(description="Path to the offending field, e.g. ['body', 'rooms', 0, 'price']")
    msg: str
    type: str


class ErrorDetail(BaseModel):
    """Body of every non-2xx response.

    Attributes:
        code: Stable machine-readable code (see ErrorCode).
        message: Human-readable message safe to show in the admin UI.
        details: Extra context, e.g. upstream status and body excerpt on 502.
        validation_errors: Present on 422 only.
    """

    code: str = Field(examples=["AUTH_INVALID_CREDENTIALS", "AUTH_PROVIDER_UNAVAILABLE", "UPSTREAM_ERROR"])
    message: str = Field(examples=["Authentication service unavailable"])
    details: dict[str, Any] | None = Field(default=None, examples=[{"upstream_status": 404}])
    validation_errors: list[ValidationErrorItem] | None = None


class ErrorResponse(BaseModel):
    """Wrapper matching FastAPI's ``{"detail": ...}`` envelope."""

    detail: ErrorDetail


# Shared ``responses=`` fragments for route decorators
AUTH_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    401: {"model": ErrorResponse, "description": "No valid session"},
}

UPSTREAM_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    502: {"model": ErrorResponse, "description": "Catalogue API failed or unreachable"},
}
