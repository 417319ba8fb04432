"""HTTP client for the Resorter360 catalogue API.

Admin CRUD routes are thin pass-throughs: they validate input locally and
forward it here. Any upstream failure surfaces as UpstreamError carrying the
upstream status (when there was one) and an excerpt of the body.
"""

from __future__ import annotations

__all__ = [
    "STORAGE_UPLOAD_PATH",
    "UpstreamClient",
]

from typing import TYPE_CHECKING, Any, Mapping

import httpx

from resorter_admin.constants import UPSTREAM_ERROR_EXCERPT_LENGTH
from resorter_admin.exceptions import UpstreamError
from resorter_admin.telemetry.system.system_logger import get_system_logger

if TYPE_CHECKING:
    from resorter_admin.config import UpstreamConfig

STORAGE_UPLOAD_PATH = "/api/Storage/upload"


class UpstreamClient:
    """Async JSON client bound to the catalogue API base URL.

    Usage:
        async with UpstreamClient(config.upstream) as upstream:
            cities = await upstream.request_json("GET", "/api/City")
    """

    def __init__(
        self,
        config: "UpstreamConfig",
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Upstream base URL and timeout.
            http_client: Optional httpx client (for testing). Must already be
                configured with the upstream base_url; closed by the caller.
        """
        self._client = http_client or httpx.AsyncClient(
            base_url=config.base_url.rstrip("/"),
            timeout=config.timeout_seconds,
        )
        self._owns_client = http_client is None

    async def __aenter__(self) -> "UpstreamClient":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close HTTP client if we own it."""
        if self._owns_client:
            await self._client.aclose()

    async def request_json(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        """Send a JSON request and decode the JSON answer.

        Args:
            method: HTTP method.
            path: Upstream path (e.g. "/api/City/3").
            params: Query parameters; None values are dropped.
            json: JSON-serializable request body.

        Returns:
            Decoded JSON, or None if the upstream answered with an empty body.

        Raises:
            UpstreamError: Upstream unreachable, timed out, answered non-2xx
                or answered a non-empty body that is not JSON.
        """
        query = {k: v for k, v in params.items() if v is not None} if params else None
        try:
            response = await self._client.request(
                method,
                path,
                params=query,
                json=json,
                headers={"Accept": "application/json"},
            )
        except httpx.HTTPError as e:
            raise self._transport_error(method, path, e) from e

        return self._decode(method, path, response)

    async def upload(
        self,
        filename: str,
        content: bytes,
        content_type: str | None = None,
        fields: Mapping[str, str | None] | None = None,
    ) -> Any:
        """Forward a single file to the storage upload endpoint.

        Args:
            filename: Original client filename.
            content: File bytes.
            content_type: MIME type of the file part.
            fields: Extra form fields (refId, tableName, isThumbnail, ...); None values are dropped.

        Returns:
            Decoded JSON answer from the upstream.

        Raises:
            UpstreamError: As for request_json.
        """
        files = {"file": (filename, content, content_type or "application/octet-stream")}
        data = {k: v for k, v in (fields or {}).items() if v is not None}
        try:
            response = await self._client.post(STORAGE_UPLOAD_PATH, files=files, data=data)
        except httpx.HTTPError as e:
            raise self._transport_error("POST", STORAGE_UPLOAD_PATH, e) from e

        return self._decode("POST", STORAGE_UPLOAD_PATH, response)

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _decode(method: str, path: str, response: httpx.Response) -> Any:
        if not response.is_success:
            body = response.text[:UPSTREAM_ERROR_EXCERPT_LENGTH]
            get_system_logger().warning(
                {
                    "event": "upstream_error",
                    "method": method,
                    "path": path,
                    "status_code": response.status_code,
                }
            )
            raise UpstreamError(
                f"Upstream {method} {path} failed with HTTP {response.status_code}",
                status_code=response.status_code,
                body=body,
            )

        if not response.content.strip():
            return None

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(
                f"Upstream {method} {path} returned a body that is not JSON",
                status_code=response.status_code,
                body=response.text[:UPSTREAM_ERROR_EXCERPT_LENGTH],
            ) from e

    @staticmethod
    def _transport_error(method: str, path: str, error: httpx.HTTPError) -> UpstreamError:
        kind = "timed out" if isinstance(error, httpx.TimeoutException) else "unreachable"
        get_system_logger().warning(
            {
                "event": "upstream_unreachable",
                "method": method,
                "path": path,
                "error_type": type(error).__name__,
            }
        )
        return UpstreamError(f"Upstream {method} {path} {kind}: {type(error).__name__}")
