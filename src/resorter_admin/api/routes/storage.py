"""Media storage endpoints proxied to the Resorter360 API.

Routes mounted at: /api/storage
"""

from __future__ import annotations

__all__ = ["router"]

from typing import Any

from fastapi import APIRouter, File, Form, UploadFile

from resorter_admin.api.deps import CurrentIdentityDep, UpstreamDep
from resorter_admin.api.schemas import AUTH_ERROR_RESPONSES, UPSTREAM_ERROR_RESPONSES

router = APIRouter()


@router.get("", response_model=None, responses=UPSTREAM_ERROR_RESPONSES)
async def list_files(upstream: UpstreamDep) -> Any:
    """List all stored media files."""
    return await upstream.request_json("GET", "/api/Storage")


@router.get("/property/{property_id}", response_model=None, responses=UPSTREAM_ERROR_RESPONSES)
async def list_property_files(property_id: int, upstream: UpstreamDep) -> Any:
    """List media attached to one property."""
    return await upstream.request_json("GET", f"/api/Storage/property/{property_id}")


@router.post(
    "/upload",
    response_model=None,
    responses={**AUTH_ERROR_RESPONSES, **UPSTREAM_ERROR_RESPONSES},
)
async def upload_file(
    identity: CurrentIdentityDep,
    upstream: UpstreamDep,
    file: UploadFile = File(...),
    ref_id: str | None = Form(None, alias="refId"),
    table_name: str | None = Form(None, alias="tableName"),
    is_thumbnail: str | None = Form(None, alias="isThumbnail"),
) -> Any:
    """Forward a single multipart file to upstream storage.

    Args:
        identity: Caller identity (gate).
        upstream: Upstream client (injected).
        file: The uploaded file part.
        ref_id: Id of the record the file belongs to.
        table_name: Table of the record the file belongs to.
        is_thumbnail: "true" to mark the file as the record thumbnail.

    Returns:
        Upstream answer (stored file metadata).
    """
    content = await file.read()
    return await upstream.upload(
        filename=file.filename or "upload",
        content=content,
        content_type=file.content_type,
        fields={"refId": ref_id, "tableName": table_name, "isThumbnail": is_thumbnail},
    )
