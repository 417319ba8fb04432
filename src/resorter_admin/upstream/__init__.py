"""Pass-through client for the Resorter360 catalogue API."""

from resorter_admin.upstream.client import UpstreamClient

__all__ = ["UpstreamClient"]
