"""Domain entities for internal representation.

These are frozen dataclasses and enums used by services, repositories and
handlers. They are NOT used for API contracts - use DTOs from the dto
package for that.
"""

from .cache_entry import CacheEntryEntity
from .catalog_resource import CatalogResource, ResourceKind, UpstreamRequest
from .plan_features import (
    Bounded,
    DeviceAllowance,
    DeviceLimit,
    Feature,
    FeatureDecision,
    PlanFeatureSet,
    SupportLevel,
    Unlimited,
    VideoQuality,
)

__all__ = [
    "CacheEntryEntity",
    "CatalogResource",
    "ResourceKind",
    "UpstreamRequest",
    "Bounded",
    "DeviceAllowance",
    "DeviceLimit",
    "Feature",
    "FeatureDecision",
    "PlanFeatureSet",
    "SupportLevel",
    "Unlimited",
    "VideoQuality",
]
