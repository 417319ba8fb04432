"""Translation entries proxied to the Resorter360 API.

Routes mounted at: /api/languages
"""

from __future__ import annotations

__all__ = ["router"]

from typing import Any

from fastapi import APIRouter, Body, Query

from resorter_admin.api.deps import CurrentIdentityDep, UpstreamDep
from resorter_admin.api.schemas import AUTH_ERROR_RESPONSES, UPSTREAM_ERROR_RESPONSES

router = APIRouter()


@router.get("", response_model=None, responses=UPSTREAM_ERROR_RESPONSES)
async def list_languages(upstream: UpstreamDep) -> Any:
    """List all translation entries."""
    return await upstream.request_json("GET", "/api/Languages")


@router.get("/by-reference", response_model=None, responses=UPSTREAM_ERROR_RESPONSES)
async def get_by_reference(
    upstream: UpstreamDep,
    table_name: str = Query(..., alias="tableName", min_length=1),
    ref_id: str = Query(..., alias="refId", min_length=1),
) -> Any:
    """Translations attached to one record."""
    return await upstream.request_json(
        "GET",
        "/api/Languages/by-reference",
        params={"tableName": table_name, "refId": ref_id},
    )


@router.post(
    "",
    status_code=201,
    response_model=None,
    responses={**AUTH_ERROR_RESPONSES, **UPSTREAM_ERROR_RESPONSES},
)
async def create_language_entry(
    identity: CurrentIdentityDep,
    upstream: UpstreamDep,
    entry: dict[str, Any] = Body(...),
) -> Any:
    """Create a translation entry. The body is forwarded unchanged."""
    return await upstream.request_json("POST", "/api/Languages", json=entry)
