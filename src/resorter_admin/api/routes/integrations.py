"""Calendar, currency exchange and notification pass-throughs.

Routes mounted at: /api
    GET  /calendar/events          iCal feed events for a URL
    GET  /calendar/properties      properties with iCal links
    GET  /exchange/convert         currency conversion
    POST /notifications/welcome    welcome e-mail (session required)
    POST /notifications            arbitrary notification (session required)
"""

from __future__ import annotations

__all__ = ["router"]

from typing import Any

from fastapi import APIRouter, Body, Query

from resorter_admin.api.deps import CurrentIdentityDep, UpstreamDep
from resorter_admin.api.schemas import AUTH_ERROR_RESPONSES, UPSTREAM_ERROR_RESPONSES

router = APIRouter()

_NOTIFY_RESPONSES = {**AUTH_ERROR_RESPONSES, **UPSTREAM_ERROR_RESPONSES}


# =============================================================================
# Calendar
# =============================================================================


@router.get("/calendar/events", response_model=None, responses=UPSTREAM_ERROR_RESPONSES)
async def calendar_events(
    upstream: UpstreamDep,
    ical_url: str = Query(..., alias="icalUrl", min_length=1),
) -> Any:
    """Events parsed from an iCal feed."""
    return await upstream.request_json("GET", "/api/ICalendar/events", params={"icalUrl": ical_url})


@router.get("/calendar/properties", response_model=None, responses=UPSTREAM_ERROR_RESPONSES)
async def calendar_properties(upstream: UpstreamDep) -> Any:
    return await upstream.request_json("GET", "/api/ICalendarProperty")


# =============================================================================
# Exchange rates
# =============================================================================


@router.get("/exchange/convert", response_model=None, responses=UPSTREAM_ERROR_RESPONSES)
async def convert_currency(
    upstream: UpstreamDep,
    from_currency: str = Query(..., alias="fromCurrency", min_length=1),
    to_currency: str = Query(..., alias="toCurrency", min_length=1),
    amount: float = Query(..., ge=0),
) -> Any:
    """Convert an amount between currencies at the upstream rate."""
    return await upstream.request_json(
        "GET",
        "/api/ExchangeRate/convert",
        params={"fromCurrency": from_currency, "toCurrency": to_currency, "amount": amount},
    )


# =============================================================================
# Notifications
# =============================================================================


@router.post("/notifications/welcome", responses=_NOTIFY_RESPONSES)
async def send_welcome(
    identity: CurrentIdentityDep,
    upstream: UpstreamDep,
    email: str = Query(..., min_length=3),
) -> dict[str, bool]:
    """Ask the upstream to send a welcome e-mail."""
    await upstream.request_json("POST", "/api/Notifications/welcome", params={"email": email})
    return {"success": True}


@router.post("/notifications", responses=_NOTIFY_RESPONSES)
async def send_notification(
    identity: CurrentIdentityDep,
    upstream: UpstreamDep,
    notification: dict[str, Any] = Body(...),
) -> dict[str, bool]:
    """Forward a notification body unchanged."""
    await upstream.request_json("POST", "/api/Notifications", json=notification)
    return {"success": True}
