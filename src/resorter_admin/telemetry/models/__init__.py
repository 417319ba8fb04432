"""Pydantic models for telemetry events."""

from .audit import AuthEvent

__all__ = ["AuthEvent"]
