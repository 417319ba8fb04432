"""API schemas (Pydantic models) for request/response validation.

Centralized schemas for all API routes.
"""

from __future__ import annotations

# Auth schemas
from resorter_admin.api.schemas.auth import (
    IdentityResponse,
    LoginRequest,
    LogoutResponse,
)

# Error schemas
from resorter_admin.api.schemas.errors import (
    AUTH_ERROR_RESPONSES,
    UPSTREAM_ERROR_RESPONSES,
    ErrorDetail,
    ErrorResponse,
    ValidationErrorItem,
)

# Catalogue schemas
from resorter_admin.api.schemas.listings import (
    BlogCreate,
    CityCreate,
    LanguageText,
    PlaceCreate,
    PropertyCreate,
    PropertyOrderItem,
    RegionCreate,
    RoomCreate,
    TypeCreate,
)

# Session schemas
from resorter_admin.api.schemas.sessions import AuthSessionResponse

__all__ = [
    # Auth
    "IdentityResponse",
    "LoginRequest",
    "LogoutResponse",
    # Errors
    "AUTH_ERROR_RESPONSES",
    "UPSTREAM_ERROR_RESPONSES",
    "ErrorDetail",
    "ErrorResponse",
    "ValidationErrorItem",
    # Catalogue
    "BlogCreate",
    "CityCreate",
    "LanguageText",
    "PlaceCreate",
    "PropertyCreate",
    "PropertyOrderItem",
    "RegionCreate",
    "RoomCreate",
    "TypeCreate",
    # Sessions
    "AuthSessionResponse",
]
