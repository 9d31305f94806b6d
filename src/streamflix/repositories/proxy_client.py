"""StreamFlix catalog proxy client (client tier upstream).

Calls the server's ``/api/tmdb/...`` routes, which already hold the API
key and assemble composite payloads, so every resource is one request.
"""

import httpx

from streamflix.config import settings
from streamflix.entities import CatalogResource, UpstreamRequest
from streamflix.repositories.http_client import JsonHttpClient


class CatalogProxyClient(JsonHttpClient):
    """Proxy implementation of the UpstreamClient protocol."""

    name = "proxy"

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(
            base_url=base_url or settings.proxy_base_url,
            timeout=timeout or settings.tmdb_timeout,
            http_client=http_client,
        )

    @classmethod
    def create(cls, base_url: str | None = None) -> "CatalogProxyClient":
        """Factory method; ``base_url`` defaults to settings.proxy_base_url."""
        return cls(base_url=base_url)

    def requests_for(self, resource: CatalogResource) -> list[UpstreamRequest]:
        return [resource.proxy_request()]
