"""Repository layer for data access.

This layer hides external dependencies (the TMDB API, the StreamFlix proxy,
the in-process response store) behind protocol-based interfaces. This
enables:
- Swapping the upstream without touching the gateway
- Unit testing with httpx.MockTransport and fake clocks
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
"""

from streamflix.protocols import ResponseCacheStore, UpstreamClient

from .http_client import JsonHttpClient
from .memory_cache import ResponseCache
from .proxy_client import CatalogProxyClient
from .tmdb_client import TMDBClient

__all__ = [
    "ResponseCacheStore",
    "UpstreamClient",
    "JsonHttpClient",
    "ResponseCache",
    "CatalogProxyClient",
    "TMDBClient",
]
