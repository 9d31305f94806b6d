"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract. Catalog routes
return TMDB payloads unchanged, so the models here cover the plan,
management and error bodies.

Internal domain logic should use entities from the entities package.
"""

from .responses import (
    CacheClearResponse,
    DeviceLimitResponse,
    FeatureDecisionResponse,
    GatewayStatsResponse,
    HealthCheckResponse,
    LegacyErrorResponse,
    PlanFeaturesResponse,
    QualityAccessResponse,
)

__all__ = [
    "PlanFeaturesResponse",
    "FeatureDecisionResponse",
    "QualityAccessResponse",
    "DeviceLimitResponse",
    "CacheClearResponse",
    "GatewayStatsResponse",
    "HealthCheckResponse",
    "LegacyErrorResponse",
]
