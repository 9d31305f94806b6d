"""HTTP handlers for the TMDB proxy routes.

Handlers convert gateway results and errors into HTTP responses. Catalog
payloads pass through unchanged; error bodies keep the shape existing web
clients already parse (``{"error": ..., "status": ...}``).
"""

from typing import Any

from fastapi import HTTPException, status
from fastapi.responses import JSONResponse

from streamflix.config import settings
from streamflix.dto import (
    CacheClearResponse,
    GatewayStatsResponse,
    HealthCheckResponse,
    LegacyErrorResponse,
)
from streamflix.entities import CatalogResource, ResourceKind
from streamflix.errors import RateLimitWaitExceeded, UpstreamError, UpstreamRateLimited
from streamflix.services import BreakerState, CatalogGateway


def _legacy_error(status_code: int, message: str, include_status: bool = True) -> JSONResponse:
    body = LegacyErrorResponse(error=message, status=status_code if include_status else None)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


class CatalogHandler:
    """HTTP handlers for catalog metadata.

    Example:
        ```python
        gateway = CatalogGateway.for_server()
        handler = CatalogHandler(gateway=gateway)

        @app.get("/api/tmdb/trending")
        async def trending():
            return await handler.get(CatalogResource.trending())
        ```
    """

    def __init__(self, gateway: CatalogGateway) -> None:
        """Initialize the catalog handler.

        Args:
            gateway: The catalog gateway (required).
        """
        self._gateway = gateway

    async def get(self, resource: CatalogResource) -> Any:
        """Serve one catalog resource.

        Returns:
            The TMDB payload (or a placeholder), or a JSONResponse carrying
            the error status

        Raises:
            HTTPException: 502 if the gateway propagated an upstream failure
        """
        try:
            return await self._gateway.fetch(resource)

        except UpstreamRateLimited as e:
            return _legacy_error(status.HTTP_429_TOO_MANY_REQUESTS, e.message)

        except RateLimitWaitExceeded as e:
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content=e.to_response().model_dump(),
            )

        except UpstreamError as e:
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail=e.to_response().model_dump(),
            ) from e

    async def search(self, kind: ResourceKind, query: str | None) -> Any:
        """Serve a search route; a missing or blank query is a 400."""
        if not (query and query.strip()):
            return _legacy_error(
                status.HTTP_400_BAD_REQUEST, "Query parameter is required", include_status=False
            )
        return await self.get(CatalogResource.search(kind, query))

    async def clear_cache(self) -> CacheClearResponse:
        """Handle DELETE /api/tmdb/cache requests."""
        count = self._gateway.clear_cache()
        return CacheClearResponse(
            success=True,
            deleted_count=count,
            message="Cache cleared successfully",
        )

    async def get_stats(self) -> GatewayStatsResponse:
        """Handle GET /api/tmdb/cache/stats requests."""
        return GatewayStatsResponse(**self._gateway.stats())

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests.

        The service stays up without TMDB (it serves placeholders), so a
        missing key or an open breaker reports ``degraded`` rather than an
        error status.
        """
        breaker = self._gateway.stats()["circuit_breaker"]
        circuit_state = breaker["state"] if breaker else None
        healthy = settings.has_tmdb_api_key and circuit_state != BreakerState.OPEN.value

        return HealthCheckResponse(
            status="healthy" if healthy else "degraded",
            tmdb_configured=settings.has_tmdb_api_key,
            circuit_state=circuit_state,
        )
