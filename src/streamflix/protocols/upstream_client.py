"""Upstream metadata client protocol.

Defines the interface for anything the gateway can fetch catalog data
from. The gateway asks the client which HTTP requests a resource needs,
then admits each one through the rate limiter before calling
``get_json``.

Implementations can include:
- TMDB REST API (server tier)
- The StreamFlix ``/api/tmdb`` proxy (client tier)
"""

from typing import Any, Protocol, runtime_checkable

from streamflix.entities import CatalogResource, UpstreamRequest


@runtime_checkable
class UpstreamClient(Protocol):
    """Protocol for upstream metadata clients.

    Example:
        ```python
        from streamflix.protocols import UpstreamClient

        client: UpstreamClient = TMDBClient.create()
        client: UpstreamClient = CatalogProxyClient.create()
        ```
    """

    @property
    def name(self) -> str:
        """Short identifier used in logs (e.g. "tmdb", "proxy")."""
        ...

    def requests_for(self, resource: CatalogResource) -> list[UpstreamRequest]:
        """Return the HTTP requests needed to build ``resource``.

        Args:
            resource: The logical catalog resource

        Returns:
            One request, or several labelled requests for composite payloads
        """
        ...

    async def get_json(self, request: UpstreamRequest) -> Any:
        """Perform one GET and decode the JSON body.

        Args:
            request: The request to send

        Returns:
            The decoded body

        Raises:
            UpstreamRateLimited: On HTTP 429
            UpstreamError: On any other transport, status or decoding failure
        """
        ...

    async def close(self) -> None:
        """Release the underlying HTTP connection pool."""
        ...
