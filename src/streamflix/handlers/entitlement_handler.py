"""HTTP handlers for plan entitlement queries."""

from fastapi import HTTPException, status

from streamflix.dto import (
    DeviceLimitResponse,
    FeatureDecisionResponse,
    PlanFeaturesResponse,
    QualityAccessResponse,
)
from streamflix.services import EntitlementService


class EntitlementHandler:
    """HTTP handlers for plan features.

    Unknown plan ids and feature names are not errors here: they resolve
    to the free plan and to a denial, and the response says which plan
    was actually used.
    """

    def __init__(self, entitlement_service: EntitlementService) -> None:
        self._entitlements = entitlement_service

    def _plan_response(self, plan_id: str) -> PlanFeaturesResponse:
        plan = self._entitlements.features_for(plan_id)
        return PlanFeaturesResponse.from_entity(plan, self._entitlements.capability_summary(plan_id))

    async def list_plans(self) -> list[PlanFeaturesResponse]:
        """Handle GET /api/plans requests."""
        return [self._plan_response(plan_id) for plan_id in self._entitlements.plan_ids]

    async def get_plan(self, plan_id: str) -> PlanFeaturesResponse:
        """Handle GET /api/plans/{plan_id} requests."""
        return self._plan_response(plan_id)

    async def evaluate_feature(self, plan_id: str, feature: str) -> FeatureDecisionResponse:
        """Handle GET /api/plans/{plan_id}/features/{feature} requests."""
        return FeatureDecisionResponse.from_entity(self._entitlements.evaluate(plan_id, feature))

    async def quality_access(self, plan_id: str, quality: str) -> QualityAccessResponse:
        """Handle GET /api/plans/{plan_id}/quality/{quality} requests."""
        return QualityAccessResponse(
            plan_id=self._entitlements.features_for(plan_id).plan_id,
            quality=quality,
            can_access=self._entitlements.can_access_quality(plan_id, quality),
        )

    async def device_limit(self, plan_id: str, current: int) -> DeviceLimitResponse:
        """Handle GET /api/plans/{plan_id}/devices requests.

        Raises:
            HTTPException: 400 if ``current`` is negative
        """
        try:
            limit = self._entitlements.device_limit(plan_id, current)
        except ValueError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

        resolved = self._entitlements.features_for(plan_id).plan_id
        return DeviceLimitResponse.from_entity(resolved, limit, current)
