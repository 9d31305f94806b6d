"""StreamFlix catalog core: cached, rate-limited TMDB access and plan entitlements.

Layers:
    - protocols: Interface contracts (ResponseCacheStore, UpstreamClient)
    - repositories: In-process cache and HTTP clients (TMDB, StreamFlix proxy)
    - services: Gateway, rate limiter, circuit breaker, entitlements
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from streamflix.services import CatalogGateway

    gateway = CatalogGateway.for_server()   # TMDB, placeholders on failure
    gateway = CatalogGateway.for_client()   # StreamFlix proxy, errors propagate
    ```

For HTTP API:
    ```python
    from streamflix.api.app import app
    ```
"""

from streamflix.config import settings
from streamflix.entities import CatalogResource, Feature, PlanFeatureSet, VideoQuality
from streamflix.errors import (
    RateLimitWaitExceeded,
    StreamflixError,
    UpstreamError,
    UpstreamRateLimited,
)
from streamflix.protocols import ResponseCacheStore, UpstreamClient
from streamflix.repositories import CatalogProxyClient, ResponseCache, TMDBClient
from streamflix.services import (
    CatalogGateway,
    EntitlementService,
    FailurePolicy,
    SlidingWindowRateLimiter,
)

__all__ = [
    # Configuration
    "settings",
    # Protocols (interfaces)
    "ResponseCacheStore",
    "UpstreamClient",
    # Services (business logic)
    "CatalogGateway",
    "FailurePolicy",
    "SlidingWindowRateLimiter",
    "EntitlementService",
    # Repositories (data access)
    "ResponseCache",
    "TMDBClient",
    "CatalogProxyClient",
    # Entities (domain models)
    "CatalogResource",
    "Feature",
    "PlanFeatureSet",
    "VideoQuality",
    # Errors
    "StreamflixError",
    "UpstreamError",
    "UpstreamRateLimited",
    "RateLimitWaitExceeded",
]
