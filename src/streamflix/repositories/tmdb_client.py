"""TMDB REST client (server tier upstream).

Talks to https://api.themoviedb.org/3 with the API key from settings.

Key behaviour:
- Every request carries ``api_key``; the language comes from settings
- Details lookups fan out into record + credits + videos
- A missing API key fails before any request is admitted or sent
"""

import httpx

from streamflix.config import settings
from streamflix.entities import CatalogResource, UpstreamRequest
from streamflix.errors import MissingApiKeyError
from streamflix.repositories.http_client import JsonHttpClient


class TMDBClient(JsonHttpClient):
    """TMDB implementation of the UpstreamClient protocol.

    Example:
        ```python
        client = TMDBClient.create()
        requests = client.requests_for(CatalogResource.movie(603))
        movie = await client.get_json(requests[0])
        ```
    """

    name = "tmdb"

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        language: str | None = None,
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the TMDB client.

        Args:
            api_key: TMDB v3 API key. Defaults to settings.tmdb_api_key.
            base_url: API root. Defaults to settings.tmdb_base_url.
            language: Response language. Defaults to settings.tmdb_language.
            timeout: Request timeout in seconds. Defaults to settings.tmdb_timeout.
            http_client: Pre-built httpx client, mainly for tests.
        """
        super().__init__(
            base_url=base_url or settings.tmdb_base_url,
            timeout=timeout or settings.tmdb_timeout,
            http_client=http_client,
        )
        self._api_key = api_key if api_key is not None else settings.tmdb_api_key
        self._language = language or settings.tmdb_language

    @classmethod
    def create(
        cls,
        api_key: str | None = None,
        language: str | None = None,
    ) -> "TMDBClient":
        """Factory method to create a TMDBClient with defaults.

        Args:
            api_key: API key. If None, uses settings.
            language: Response language. If None, uses settings.

        Returns:
            Configured TMDBClient
        """
        return cls(api_key=api_key, language=language)

    @property
    def has_api_key(self) -> bool:
        return bool(self._api_key and self._api_key.strip())

    @property
    def language(self) -> str:
        return self._language

    def requests_for(self, resource: CatalogResource) -> list[UpstreamRequest]:
        """Return the TMDB requests needed for ``resource``.

        Raises:
            MissingApiKeyError: If no API key is configured
        """
        if not self.has_api_key:
            raise MissingApiKeyError()
        return resource.tmdb_requests(self._language)

    def _params(self, request: UpstreamRequest) -> dict[str, str]:
        if not self.has_api_key:
            raise MissingApiKeyError()
        return {"api_key": self._api_key or "", **request.params}
