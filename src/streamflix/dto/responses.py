"""Response DTOs for API endpoints."""

from typing import Any

from pydantic import BaseModel, Field

from streamflix.entities import Bounded, DeviceLimit, FeatureDecision, PlanFeatureSet


class PlanFeaturesResponse(BaseModel):
    """A plan's resolved features plus its display summary."""

    plan_id: str = Field(..., description="Catalog id of the resolved plan")
    name: str = Field(..., description="Display name")
    max_devices: int | None = Field(
        ...,
        description="Simultaneous devices; null means unlimited",
        ge=1,
    )
    unlimited_devices: bool = Field(..., description="Whether the device count is unbounded")
    max_video_quality: str = Field(..., description="Highest quality: SD, HD or 4K")
    can_download: bool
    has_exclusive: bool
    early_access_allowed: bool
    ads: bool = Field(..., description="Whether playback shows ads")
    support_level: str = Field(..., description="basic, priority or vip")
    summary: list[str] = Field(default_factory=list, description="Human-readable capability lines")

    @classmethod
    def from_entity(cls, plan: PlanFeatureSet, summary: list[str]) -> "PlanFeaturesResponse":
        bounded = isinstance(plan.max_devices, Bounded)
        return cls(
            plan_id=plan.plan_id,
            name=plan.name,
            max_devices=plan.max_devices.count if bounded else None,
            unlimited_devices=not bounded,
            max_video_quality=plan.max_video_quality.value,
            can_download=plan.can_download,
            has_exclusive=plan.has_exclusive,
            early_access_allowed=plan.early_access_allowed,
            ads=plan.ads,
            support_level=plan.support_level.value,
            summary=summary,
        )


class FeatureDecisionResponse(BaseModel):
    """Allow/deny answer for one feature."""

    plan_id: str = Field(..., description="Plan the decision was made against")
    feature: str = Field(..., description="Feature name as requested")
    allowed: bool
    summary: list[str] = Field(default_factory=list)

    @classmethod
    def from_entity(cls, decision: FeatureDecision) -> "FeatureDecisionResponse":
        return cls(
            plan_id=decision.plan_id,
            feature=decision.feature,
            allowed=decision.allowed,
            summary=list(decision.summary),
        )


class QualityAccessResponse(BaseModel):
    plan_id: str
    quality: str
    can_access: bool


class DeviceLimitResponse(BaseModel):
    """Device allowance as shown to the user."""

    plan_id: str
    max: int = Field(..., description="Device allowance; unlimited plans report the display cap", ge=1)
    can_add_more: bool = Field(..., description="Whether one more device may be registered")
    current: int = Field(..., ge=0)

    @classmethod
    def from_entity(cls, plan_id: str, limit: DeviceLimit, current: int) -> "DeviceLimitResponse":
        return cls(plan_id=plan_id, max=limit.max, can_add_more=limit.can_add_more, current=current)


class CacheClearResponse(BaseModel):
    success: bool = Field(..., description="Whether the operation succeeded")
    deleted_count: int = Field(..., ge=0)
    message: str


class GatewayStatsResponse(BaseModel):
    """Response DTO for gateway statistics."""

    tier: str = Field(..., description="fallback (server) or propagate (client)")
    upstream: str = Field(..., description="Upstream client name")
    cache: dict[str, Any]
    rate_limiter: dict[str, Any]
    circuit_breaker: dict[str, Any] | None = None


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'degraded'")
    tmdb_configured: bool = Field(..., description="Whether a TMDB API key is set")
    circuit_state: str | None = Field(None, description="Circuit breaker state, when one is configured")


class LegacyErrorResponse(BaseModel):
    """Error body kept compatible with existing web clients."""

    error: str
    status: int | None = None
