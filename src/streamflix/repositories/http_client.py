"""Shared httpx plumbing for upstream JSON clients.

Maps every way an HTTP GET can fail onto the ``UpstreamError`` hierarchy so
the gateway never has to know about httpx.
"""

from typing import Any

import httpx

from streamflix.entities import UpstreamRequest
from streamflix.errors import (
    UpstreamDecodeError,
    UpstreamRateLimited,
    UpstreamStatusError,
    UpstreamTransportError,
)
from streamflix.logging import get_logger

logger = get_logger(__name__)


class JsonHttpClient:
    """Base class for async JSON-over-HTTP upstream clients.

    Subclasses set ``name`` and decide which requests a resource needs;
    this class owns the connection pool and the error mapping.
    """

    name = "http"

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Prefix joined with each request path.
            timeout: Request timeout in seconds.
            http_client: Pre-built httpx client (tests pass one backed by MockTransport).
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._client = http_client

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client.

        Returns:
            The httpx.AsyncClient instance
        """
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
            )
        return self._client

    @property
    def base_url(self) -> str:
        return self._base_url

    def _params(self, request: UpstreamRequest) -> dict[str, str]:
        return dict(request.params)

    async def get_json(self, request: UpstreamRequest) -> Any:
        """Perform one GET and decode the JSON body.

        Args:
            request: Path (relative to base_url) and query parameters

        Returns:
            The decoded JSON body

        Raises:
            UpstreamRateLimited: If the upstream answers 429
            UpstreamStatusError: For any other non-2xx status
            UpstreamTransportError: If no response was received
            UpstreamDecodeError: If the body is not valid JSON
        """
        url = f"{self._base_url}{request.path}"

        try:
            response = await self.client.get(url, params=self._params(request))
        except httpx.HTTPError as e:
            raise UpstreamTransportError(
                f"{self.name} request failed: {e.__class__.__name__}",
                {"path": request.path},
            ) from e

        if response.status_code == 429:
            raise UpstreamRateLimited(path=request.path)

        if not response.is_success:
            raise UpstreamStatusError(
                response.status_code,
                f"TMDB API error: {response.status_code} {response.reason_phrase}",
                path=request.path,
            )

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamDecodeError(
                f"{self.name} returned a non-JSON body",
                {"path": request.path},
            ) from e

    async def close(self) -> None:
        """Close the async HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.debug("upstream.client_closed", client=self.name)
