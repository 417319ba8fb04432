"""Catalogue CRUD endpoints proxied to the Resorter360 API.

Every resource gets the same five routes:
    GET    ""          list (selected query params passed through)
    GET    "/{id}"     fetch one
    POST   ""          create (validated, 201)
    PUT    "/{id}"     update (validated)
    DELETE "/{id}"     delete (204)

Reads are open. Mutations require a session and are rejected with 401
before anything is sent upstream.

Routes mounted at: /api/<resource> (see CATALOG_ROUTERS)
"""

# No `from __future__ import annotations` here: the factory annotates route
# parameters with runtime schema classes that FastAPI must see as objects.

__all__ = [
    "CATALOG_ROUTERS",
    "build_catalog_router",
]

from typing import Any

from fastapi import APIRouter, Request, Response
from pydantic import BaseModel

from resorter_admin.api.deps import CurrentIdentityDep, UpstreamDep
from resorter_admin.api.schemas import (
    AUTH_ERROR_RESPONSES,
    UPSTREAM_ERROR_RESPONSES,
    BlogCreate,
    CityCreate,
    PlaceCreate,
    PropertyCreate,
    PropertyOrderItem,
    RegionCreate,
    TypeCreate,
)

_WRITE_RESPONSES = {**AUTH_ERROR_RESPONSES, **UPSTREAM_ERROR_RESPONSES}


def _to_upstream(body: BaseModel) -> dict[str, Any]:
    return body.model_dump(by_alias=True, exclude_none=True)


def build_catalog_router(
    upstream_path: str,
    create_schema: type[BaseModel],
    *,
    list_params: tuple[str, ...] = (),
) -> APIRouter:
    """Create the CRUD router for one catalogue resource.

    Args:
        upstream_path: Collection path on the upstream API (e.g. "/api/City").
        create_schema: Pydantic model validating POST and PUT bodies.
        list_params: Query parameter names forwarded on the list route.

    Returns:
        APIRouter with list/get/create/update/delete routes.
    """
    router = APIRouter()

    @router.get("", response_model=None, responses=UPSTREAM_ERROR_RESPONSES)
    async def list_items(request: Request, upstream: UpstreamDep) -> Any:
        params = {name: request.query_params[name] for name in list_params if request.query_params.get(name)}
        return await upstream.request_json("GET", upstream_path, params=params or None)

    @router.get("/{item_id}", response_model=None, responses=UPSTREAM_ERROR_RESPONSES)
    async def get_item(item_id: int, upstream: UpstreamDep) -> Any:
        return await upstream.request_json("GET", f"{upstream_path}/{item_id}")

    @router.post("", status_code=201, response_model=None, responses=_WRITE_RESPONSES)
    async def create_item(
        body: create_schema,  # type: ignore[valid-type]
        identity: CurrentIdentityDep,
        upstream: UpstreamDep,
    ) -> Any:
        return await upstream.request_json("POST", upstream_path, json=_to_upstream(body))

    @router.put("/{item_id}", response_model=None, responses=_WRITE_RESPONSES)
    async def update_item(
        item_id: int,
        body: create_schema,  # type: ignore[valid-type]
        identity: CurrentIdentityDep,
        upstream: UpstreamDep,
    ) -> Any:
        return await upstream.request_json("PUT", f"{upstream_path}/{item_id}", json=_to_upstream(body))

    @router.delete("/{item_id}", status_code=204, response_class=Response, responses=_WRITE_RESPONSES)
    async def delete_item(item_id: int, identity: CurrentIdentityDep, upstream: UpstreamDep) -> Response:
        await upstream.request_json("DELETE", f"{upstream_path}/{item_id}")
        return Response(status_code=204)

    return router


# =============================================================================
# Resources
# =============================================================================

properties_router = build_catalog_router("/api/Properties", PropertyCreate, list_params=("numberOf",))


@properties_router.post("/order", status_code=204, response_class=Response, responses=_WRITE_RESPONSES)
async def reorder_properties(
    order: list[PropertyOrderItem],
    identity: CurrentIdentityDep,
    upstream: UpstreamDep,
) -> Response:
    """Persist the display order of properties."""
    await upstream.request_json("POST", "/api/Properties/order", json=[_to_upstream(item) for item in order])
    return Response(status_code=204)


# Local mount prefix -> router
CATALOG_ROUTERS: dict[str, APIRouter] = {
    "properties": properties_router,
    "cities": build_catalog_router("/api/City", CityCreate),
    "regions": build_catalog_router("/api/Region", RegionCreate, list_params=("numberOf",)),
    "places": build_catalog_router(
        "/api/Places",
        PlaceCreate,
        list_params=("category", "search", "cityId", "regionId"),
    ),
    "blog": build_catalog_router("/api/Blog", BlogCreate),
    "types": build_catalog_router("/api/Types", TypeCreate),
}
