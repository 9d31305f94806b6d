"""Catalog gateway: response cache + rate limiter in front of an upstream.

The same class serves both deployments of the catalog core. They differ
only in their upstream client and failure policy:

    Server tier: TMDBClient          + FailurePolicy.FALLBACK
    Client tier: CatalogProxyClient  + FailurePolicy.PROPAGATE (+ circuit breaker)

Request flow for ``fetch``:
1. Derive the cache key; a fresh hit returns immediately and consumes no
   rate-limiter admission.
2. On a miss, admit each upstream HTTP request through the limiter, then
   send it. Details resources send three requests and consume three
   admissions.
3. Store successful payloads and return them.
4. On failure apply the policy. HTTP 429 is always re-raised as
   ``UpstreamRateLimited``, never folded into a fallback.
"""

import asyncio
from enum import Enum
from typing import Any

from streamflix.entities import CatalogResource, ResourceKind, UpstreamRequest
from streamflix.errors import (
    CircuitOpenError,
    MissingApiKeyError,
    UpstreamError,
    UpstreamRateLimited,
)
from streamflix.logging import get_logger
from streamflix.protocols import ResponseCacheStore, UpstreamClient
from streamflix.repositories import CatalogProxyClient, ResponseCache, TMDBClient
from streamflix.services.circuit_breaker import CircuitBreaker
from streamflix.services.fallback import placeholder_for
from streamflix.services.rate_limiter import SlidingWindowRateLimiter

logger = get_logger(__name__)


class FailurePolicy(str, Enum):
    """What the gateway does when an upstream call fails (other than 429)."""

    FALLBACK = "fallback"  # log and serve a placeholder payload
    PROPAGATE = "propagate"  # raise to the caller


class CatalogGateway:
    """Cached, rate-limited access to catalog metadata.

    Depends on PROTOCOLS, not concrete implementations:
    - UpstreamClient: TMDB directly, or the StreamFlix proxy
    - ResponseCacheStore: the in-process TTL cache, or anything honouring its contract

    Example:
        ```python
        gateway = CatalogGateway.for_server()
        movies = await gateway.popular_movies()
        season = await gateway.tv_season(1399, 2)
        ```
    """

    def __init__(
        self,
        client: UpstreamClient,
        cache: ResponseCacheStore,
        rate_limiter: SlidingWindowRateLimiter,
        failure_policy: FailurePolicy = FailurePolicy.FALLBACK,
        breaker: CircuitBreaker | None = None,
        admit_timeout: float | None = None,
    ) -> None:
        """Initialize the gateway.

        Args:
            client: Upstream client (required).
            cache: Response cache (required).
            rate_limiter: Outbound admission controller (required).
            failure_policy: FALLBACK for the server tier, PROPAGATE for the client tier.
            breaker: Optional circuit breaker consulted before each upstream fetch.
            admit_timeout: Per-admission wait bound passed to the limiter; None uses its default.
        """
        self._client = client
        self._cache = cache
        self._limiter = rate_limiter
        self._policy = failure_policy
        self._breaker = breaker
        self._admit_timeout = admit_timeout
        self._log = logger.bind(tier=failure_policy.value, upstream=client.name)

    @classmethod
    def for_server(
        cls,
        client: UpstreamClient | None = None,
        cache: ResponseCacheStore | None = None,
        rate_limiter: SlidingWindowRateLimiter | None = None,
        breaker: CircuitBreaker | None = None,
    ) -> "CatalogGateway":
        """Factory for the request-handling tier: TMDB upstream, graceful fallback.

        Returns:
            A gateway that serves placeholders instead of failing
        """
        return cls(
            client=client if client is not None else TMDBClient.create(),
            cache=cache if cache is not None else ResponseCache.create(),
            rate_limiter=rate_limiter if rate_limiter is not None else SlidingWindowRateLimiter.create(),
            failure_policy=FailurePolicy.FALLBACK,
            breaker=breaker,
        )

    @classmethod
    def for_client(
        cls,
        client: UpstreamClient | None = None,
        cache: ResponseCacheStore | None = None,
        rate_limiter: SlidingWindowRateLimiter | None = None,
        breaker: CircuitBreaker | None = None,
    ) -> "CatalogGateway":
        """Factory for the client tier: proxy upstream, errors propagate.

        A circuit breaker is created when none is given.

        Returns:
            A gateway that raises on upstream failure
        """
        return cls(
            client=client if client is not None else CatalogProxyClient.create(),
            cache=cache if cache is not None else ResponseCache.create(),
            rate_limiter=rate_limiter if rate_limiter is not None else SlidingWindowRateLimiter.create(),
            failure_policy=FailurePolicy.PROPAGATE,
            breaker=breaker if breaker is not None else CircuitBreaker(name="proxy"),
        )

    @property
    def failure_policy(self) -> FailurePolicy:
        return self._policy

    @property
    def cache(self) -> ResponseCacheStore:
        """Get the underlying cache (for testing)."""
        return self._cache

    @property
    def rate_limiter(self) -> SlidingWindowRateLimiter:
        """Get the underlying rate limiter (for testing)."""
        return self._limiter

    async def fetch(self, resource: CatalogResource) -> Any:
        """Return the payload for ``resource``, from cache or upstream.

        Args:
            resource: The logical catalog resource

        Returns:
            The decoded payload; composite resources return a dict keyed by
            part ("movie"/"show", "credits", "videos"). Under FALLBACK a
            placeholder is returned when the upstream fails.

        Raises:
            UpstreamRateLimited: Upstream answered 429 (both policies)
            UpstreamError: Any other upstream failure (PROPAGATE only)
            RateLimitWaitExceeded: Admission would exceed ``admit_timeout``
        """
        key = resource.cache_key
        if key is not None:
            cached = self._cache.get(key)
            if cached is not None:
                self._log.debug("catalog.cache_hit", key=key)
                return cached
            self._log.debug("catalog.cache_miss", key=key)

        try:
            payload = await self._fetch_upstream(resource)
        except UpstreamRateLimited as e:
            self._record_failure(e)
            self._log.warning("catalog.rate_limited", resource=str(resource), details=e.details)
            raise
        except UpstreamError as e:
            self._record_failure(e)
            self._log.error(
                "catalog.upstream_failed",
                resource=str(resource),
                code=e.code,
                error=e.message,
                details=e.details,
                cause=repr(e.__cause__) if e.__cause__ else None,
            )
            if self._policy == FailurePolicy.PROPAGATE:
                raise
            self._log.warning("catalog.fallback_served", resource=str(resource))
            return placeholder_for(resource)

        if self._breaker is not None:
            self._breaker.record_success()
        if key is not None:
            self._cache.set(key, payload)
        return payload

    async def _fetch_upstream(self, resource: CatalogResource) -> Any:
        requests = self._client.requests_for(resource)

        if self._breaker is not None and not self._breaker.allow_request():
            raise CircuitOpenError(self._breaker.retry_in())

        if len(requests) == 1 and not requests[0].label:
            return await self._admit_and_get(requests[0])

        tasks = [asyncio.create_task(self._admit_and_get(request)) for request in requests]
        try:
            parts = await asyncio.gather(*tasks)
        finally:
            # no-op for finished parts; stops the ones still waiting on the limiter
            for task in tasks:
                task.cancel()
        return {request.label: part for request, part in zip(requests, parts)}

    async def _admit_and_get(self, request: UpstreamRequest) -> Any:
        await self._limiter.admit(self._admit_timeout)
        return await self._client.get_json(request)

    def _record_failure(self, error: UpstreamError) -> None:
        # Local conditions say nothing about upstream health
        if self._breaker is None or isinstance(error, (MissingApiKeyError, CircuitOpenError)):
            return
        self._breaker.record_failure()

    async def _fetch_results(self, resource: CatalogResource) -> list[dict[str, Any]]:
        return _results(await self.fetch(resource))

    async def _search(self, kind: ResourceKind, query: str) -> list[dict[str, Any]]:
        resource = CatalogResource.search(kind, query)
        try:
            payload = await self.fetch(resource)
        except UpstreamRateLimited:
            raise
        except UpstreamError:
            # fetch already logged it; searches degrade to no results
            return []
        return _results(payload)

    # Movies

    async def trending(self) -> list[dict[str, Any]]:
        return await self._fetch_results(CatalogResource.trending())

    async def popular_movies(self) -> list[dict[str, Any]]:
        return await self._fetch_results(CatalogResource.popular_movies())

    async def movies_by_genre(self, genre_id: int) -> list[dict[str, Any]]:
        return await self._fetch_results(CatalogResource.movies_by_genre(genre_id))

    async def movie_details(self, movie_id: int) -> dict[str, Any]:
        """Movie record with its credits and videos."""
        return await self.fetch(CatalogResource.movie(movie_id))

    async def search_movies(self, query: str) -> list[dict[str, Any]]:
        """Search movies by title. Never cached.

        Raises:
            ValueError: If the query is blank
            UpstreamRateLimited: If the upstream answered 429
        """
        return await self._search(ResourceKind.SEARCH_MOVIES, query)

    # TV

    async def popular_tv(self) -> list[dict[str, Any]]:
        return await self._fetch_results(CatalogResource.popular_tv())

    async def top_rated_tv(self) -> list[dict[str, Any]]:
        return await self._fetch_results(CatalogResource.top_rated_tv())

    async def on_the_air_tv(self) -> list[dict[str, Any]]:
        return await self._fetch_results(CatalogResource.on_the_air_tv())

    async def airing_today_tv(self) -> list[dict[str, Any]]:
        return await self._fetch_results(CatalogResource.airing_today_tv())

    async def tv_by_genre(self, genre_id: int) -> list[dict[str, Any]]:
        return await self._fetch_results(CatalogResource.tv_by_genre(genre_id))

    async def tv_details(self, show_id: int) -> dict[str, Any]:
        """Show record with its credits and videos."""
        return await self.fetch(CatalogResource.tv(show_id))

    async def tv_season(self, show_id: int, season: int) -> dict[str, Any]:
        return await self.fetch(CatalogResource.tv_season(show_id, season))

    async def search_tv(self, query: str) -> list[dict[str, Any]]:
        return await self._search(ResourceKind.SEARCH_TV, query)

    async def multi_search(self, query: str) -> list[dict[str, Any]]:
        """Search movies and TV shows together. Never cached."""
        return await self._search(ResourceKind.MULTI_SEARCH, query)

    # Management

    def clear_cache(self) -> int:
        """Drop every cached response, forcing fresh upstream fetches.

        Returns:
            Number of entries removed
        """
        count = self._cache.clear()
        self._log.info("catalog.cache_cleared", deleted=count)
        return count

    def stats(self) -> dict:
        """Get gateway statistics.

        Returns:
            Dictionary combining cache, rate limiter and breaker figures
        """
        return {
            "tier": self._policy.value,
            "upstream": self._client.name,
            "cache": self._cache.stats(),
            "rate_limiter": self._limiter.stats(),
            "circuit_breaker": self._breaker.stats() if self._breaker is not None else None,
        }

    async def close(self) -> None:
        await self._client.close()


def _results(payload: Any) -> list[dict[str, Any]]:
    if isinstance(payload, dict):
        return payload.get("results") or []
    return []
