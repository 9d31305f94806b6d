"""Service layer for the catalog core.

Services depend on protocols (interfaces), not concrete implementations,
so the gateway can sit in front of TMDB on the server or in front of the
StreamFlix proxy on the client.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)

Usage:
    ```python
    from streamflix.services import CatalogGateway, has_feature

    gateway = CatalogGateway.for_server()
    trending = await gateway.trending()

    has_feature("premium", "4k")  # True
    ```
"""

from .circuit_breaker import BreakerState, CircuitBreaker
from .entitlements import (
    FEATURE_CHECKS,
    EntitlementService,
    can_access_quality,
    capability_summary,
    device_limit,
    evaluate,
    features_for,
    has_feature,
)
from .fallback import placeholder_for
from .gateway import CatalogGateway, FailurePolicy
from .plan_catalog import DEFAULT_PLAN_ID, PLAN_CATALOG, PLAN_ORDER, resolve_plan
from .rate_limiter import SlidingWindowRateLimiter

__all__ = [
    # Catalog
    "CatalogGateway",
    "FailurePolicy",
    "SlidingWindowRateLimiter",
    "CircuitBreaker",
    "BreakerState",
    "placeholder_for",
    # Entitlements
    "EntitlementService",
    "FEATURE_CHECKS",
    "features_for",
    "has_feature",
    "can_access_quality",
    "device_limit",
    "capability_summary",
    "evaluate",
    "PLAN_CATALOG",
    "PLAN_ORDER",
    "DEFAULT_PLAN_ID",
    "resolve_plan",
]
