"""Structured API errors and the exception handlers that render them.

Every error response from the admin API has the same envelope:

    {
        "detail": {
            "code": "AUTH_REQUIRED",
            "message": "Authentication required",
            "details": {...},            # optional
            "validation_errors": [...]   # 422 only
        }
    }

Routes raise APIError directly. Domain exceptions from the auth and
upstream layers (UnauthenticatedError, UpstreamError) are translated here,
so route bodies stay free of try/except for the common failure paths.
"""

from __future__ import annotations

__all__ = [
    "APIError",
    "ErrorCode",
    "api_error_handler",
    "http_exception_handler",
    "unauthenticated_error_handler",
    "upstream_error_handler",
    "validation_error_handler",
]

from enum import Enum
from typing import Any, Mapping

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from resorter_admin.exceptions import UnauthenticatedError, UpstreamError


class ErrorCode(str, Enum):
    """Machine-readable error codes, prefixed by area (AUTH_, UPSTREAM_, ...)."""

    # 401 / 503 from the auth routes and the session gate
    AUTH_REQUIRED = "AUTH_REQUIRED"
    AUTH_INVALID_CREDENTIALS = "AUTH_INVALID_CREDENTIALS"
    AUTH_PROVIDER_UNAVAILABLE = "AUTH_PROVIDER_UNAVAILABLE"

    NOT_FOUND = "NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    VALIDATION_ERROR = "VALIDATION_ERROR"

    INTERNAL_ERROR = "INTERNAL_ERROR"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"


_STATUS_CODES: Mapping[int, ErrorCode] = {
    400: ErrorCode.VALIDATION_ERROR,
    401: ErrorCode.AUTH_REQUIRED,
    404: ErrorCode.NOT_FOUND,
    405: ErrorCode.METHOD_NOT_ALLOWED,
    500: ErrorCode.INTERNAL_ERROR,
    502: ErrorCode.UPSTREAM_ERROR,
    503: ErrorCode.SERVICE_UNAVAILABLE,
}


def _error_detail(
    code: ErrorCode,
    message: str,
    details: Mapping[str, Any] | None = None,
    validation_errors: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    detail: dict[str, Any] = {"code": code.value, "message": message}
    if details:
        detail["details"] = dict(details)
    if validation_errors:
        detail["validation_errors"] = validation_errors
    return detail


def _respond(status_code: int, detail: Any, headers: Mapping[str, str] | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": detail}, headers=headers)


class APIError(HTTPException):
    """HTTPException carrying an ErrorCode and the structured envelope.

    Attributes:
        code: ErrorCode member.
        error_message: Human-readable message (``detail.message``).
        error_details: Optional context (``detail.details``).
        validation_errors: Optional per-field errors.
    """

    def __init__(
        self,
        status_code: int,
        code: ErrorCode,
        message: str,
        details: dict[str, Any] | None = None,
        validation_errors: list[dict[str, Any]] | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.code = code
        self.error_message = message
        self.error_details = details
        self.validation_errors = validation_errors
        super().__init__(
            status_code=status_code,
            detail=_error_detail(code, message, details, validation_errors),
            headers=headers,
        )


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    return _respond(exc.status_code, exc.detail, exc.headers)


def _describe_validation_errors(errors: list[dict[str, Any]]) -> str:
    """``field: msg`` for a single error, ``N validation errors`` otherwise.

    The ``body``/``query`` prefix of the location is dropped.
    """
    if len(errors) != 1:
        return f"{len(errors)} validation errors"
    error = errors[0]
    msg = error.get("msg", "Validation error")
    field = ".".join(str(part) for part in error.get("loc", ()) if part not in ("body", "query"))
    return f"{field}: {msg}" if field else msg


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render request validation failures as 422 VALIDATION_ERROR with per-field entries."""
    errors = list(exc.errors())
    entries = [
        {"loc": list(e.get("loc", [])), "msg": e.get("msg", ""), "type": e.get("type", "")}
        for e in errors
    ]
    detail = _error_detail(
        ErrorCode.VALIDATION_ERROR,
        _describe_validation_errors(errors),
        validation_errors=entries,
    )
    return _respond(422, detail)


async def unauthenticated_error_handler(request: Request, exc: UnauthenticatedError) -> JSONResponse:
    """401 AUTH_REQUIRED; expired and missing sessions are indistinguishable to clients."""
    return _respond(401, _error_detail(ErrorCode.AUTH_REQUIRED, "Authentication required"))


async def upstream_error_handler(request: Request, exc: UpstreamError) -> JSONResponse:
    """502 UPSTREAM_ERROR with the catalogue API's status and a body excerpt when known."""
    details: dict[str, Any] = {}
    if exc.status_code is not None:
        details["upstream_status"] = exc.status_code
    if exc.body:
        details["upstream_body"] = exc.body
    return _respond(502, _error_detail(ErrorCode.UPSTREAM_ERROR, str(exc), details))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Wrap framework HTTPExceptions (404, 405, ...) in the envelope.

    Details that are already structured (APIError raised from a dependency)
    pass through untouched. Response headers such as ``Allow`` are kept.
    """
    headers = getattr(exc, "headers", None)
    if isinstance(exc.detail, dict) and "code" in exc.detail:
        return _respond(exc.status_code, exc.detail, headers)

    code = _STATUS_CODES.get(exc.status_code, ErrorCode.INTERNAL_ERROR)
    message = str(exc.detail) if exc.detail else f"HTTP {exc.status_code}"
    return _respond(exc.status_code, _error_detail(code, message), headers)
