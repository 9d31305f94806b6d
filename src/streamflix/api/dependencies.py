"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state
"""

from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from streamflix.config import settings
from streamflix.handlers import CatalogHandler, EntitlementHandler
from streamflix.logging import configure_logging, get_logger
from streamflix.services import CatalogGateway, CircuitBreaker, EntitlementService

logger = get_logger(__name__)


def get_catalog_handler(request: Request) -> CatalogHandler:
    """Dependency injection for CatalogHandler from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The CatalogHandler instance from app.state

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "catalog_handler", None)
    if handler is None:
        raise RuntimeError("CatalogHandler not initialized. Check lifespan setup.")
    return handler


def get_entitlement_handler(request: Request) -> EntitlementHandler:
    """Dependency injection for EntitlementHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "entitlement_handler", None)
    if handler is None:
        raise RuntimeError("EntitlementHandler not initialized. Check lifespan setup.")
    return handler


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores them in app.state:
    1. Gateway (TMDB client, response cache, rate limiter, breaker)
    2. Entitlement service over the static plan catalog
    3. Handlers for both

    Args:
        app: The FastAPI application instance

    Yields:
        None

    Cleanup:
        Closes the upstream HTTP client and removes services from app.state
    """
    configure_logging("streamflix-api", settings.log_level, settings.log_json)

    gateway = CatalogGateway.for_server(breaker=CircuitBreaker(name="tmdb"))
    entitlement_service = EntitlementService()

    app.state.catalog_gateway = gateway
    app.state.entitlement_service = entitlement_service
    app.state.catalog_handler = CatalogHandler(gateway=gateway)
    app.state.entitlement_handler = EntitlementHandler(entitlement_service=entitlement_service)

    if not settings.has_tmdb_api_key:
        logger.warning("tmdb.api_key_missing", detail="catalog routes will serve placeholders")
    logger.info(
        "api.started",
        cache_ttl_seconds=settings.cache_ttl_seconds,
        rate_limit=f"{settings.rate_limit_max_requests}/{settings.rate_limit_window_seconds}s",
    )

    yield

    await gateway.close()
    del app.state.catalog_handler
    del app.state.entitlement_handler
    del app.state.catalog_gateway
    del app.state.entitlement_service
    logger.info("api.stopped")


# Type aliases for cleaner dependency injection
CatalogHandlerDep = Annotated[CatalogHandler, Depends(get_catalog_handler)]
EntitlementHandlerDep = Annotated[EntitlementHandler, Depends(get_entitlement_handler)]
