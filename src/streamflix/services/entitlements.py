"""Plan entitlement evaluation.

Pure functions over the static plan catalog. Nothing here raises for bad
input: an unknown plan resolves to the free plan and an unknown feature
name is denied, so a caller can be denied capability by a typo but never
granted extra.
"""

from collections.abc import Callable, Mapping
from types import MappingProxyType

from streamflix.config import settings
from streamflix.entities import (
    Bounded,
    DeviceAllowance,
    DeviceLimit,
    Feature,
    FeatureDecision,
    PlanFeatureSet,
    Unlimited,
    VideoQuality,
)
from streamflix.services.plan_catalog import (
    DEFAULT_PLAN_ID,
    PLAN_CATALOG,
    PLAN_ORDER,
    resolve_plan,
)

FeatureCheck = Callable[[PlanFeatureSet], bool]


def _allows_multiple_devices(allowance: DeviceAllowance) -> bool:
    if isinstance(allowance, Unlimited):
        return True
    return allowance.count > 1


FEATURE_CHECKS: Mapping[Feature, FeatureCheck] = MappingProxyType(
    {
        Feature.DOWNLOAD: lambda plan: plan.can_download,
        Feature.HD: lambda plan: plan.max_video_quality.at_least(VideoQuality.HD),
        Feature.UHD_4K: lambda plan: plan.max_video_quality.at_least(VideoQuality.UHD_4K),
        Feature.EXCLUSIVE: lambda plan: plan.has_exclusive,
        Feature.PRIORITY_SUPPORT: lambda plan: plan.support_level.is_priority,
        Feature.EARLY_ACCESS: lambda plan: plan.early_access_allowed,
        Feature.NO_ADS: lambda plan: not plan.ads,
        Feature.MULTIPLE_DEVICES: lambda plan: _allows_multiple_devices(plan.max_devices),
    }
)

_unchecked = set(Feature) - set(FEATURE_CHECKS)
if _unchecked:
    raise RuntimeError(f"Features without a check: {sorted(f.value for f in _unchecked)}")


def _check_feature(plan: PlanFeatureSet, feature: str | Feature) -> bool:
    parsed = Feature.parse(feature)
    if parsed is None:
        return False
    return FEATURE_CHECKS[parsed](plan)


def _check_quality(plan: PlanFeatureSet, quality: str | VideoQuality) -> bool:
    requested = VideoQuality.parse(quality)
    if requested is None:
        return False
    return plan.max_video_quality.at_least(requested)


def _device_limit(plan: PlanFeatureSet, current_device_count: int, unlimited_cap: int) -> DeviceLimit:
    if current_device_count < 0:
        raise ValueError("current_device_count cannot be negative")
    allowance = plan.max_devices
    if isinstance(allowance, Unlimited):
        return DeviceLimit(max=unlimited_cap, can_add_more=True)
    return DeviceLimit(max=allowance.count, can_add_more=allowance.allows(current_device_count))


def _summary(plan: PlanFeatureSet) -> list[str]:
    if isinstance(plan.max_devices, Bounded):
        devices = f"{plan.max_devices.count} appareil(s) simultané(s)"
    else:
        devices = "Appareils illimités"

    return [
        devices,
        f"Qualité vidéo : {plan.max_video_quality.value}",
        "Téléchargements autorisés" if plan.can_download else "Téléchargements non autorisés",
        "Contenu exclusif inclus" if plan.has_exclusive else "Contenu exclusif non inclus",
        "Support prioritaire" if plan.support_level.is_priority else "Support standard",
        "Accès anticipé" if plan.early_access_allowed else "Accès standard",
        "Avec publicités" if plan.ads else "Sans publicités",
    ]


def _decision(plan: PlanFeatureSet, feature: str | Feature) -> FeatureDecision:
    return FeatureDecision(
        plan_id=plan.plan_id,
        feature=feature.value if isinstance(feature, Feature) else feature,
        allowed=_check_feature(plan, feature),
        summary=tuple(_summary(plan)),
    )


def features_for(plan_id: str | None) -> PlanFeatureSet:
    """Return the feature set for ``plan_id``; unknown ids get the free plan."""
    return resolve_plan(plan_id)


def has_feature(plan_id: str | None, feature: str | Feature) -> bool:
    """Check one named feature for a plan.

    Args:
        plan_id: Plan identifier from the subscription record
        feature: A ``Feature`` or its wire name ("download", "4k", "noAds", ...)

    Returns:
        Whether the plan grants the feature; False for unknown feature names
    """
    return _check_feature(features_for(plan_id), feature)


def can_access_quality(plan_id: str | None, quality: str | VideoQuality) -> bool:
    """Check whether a plan may stream at ``quality``.

    SD is available to every plan. Unknown quality labels are denied.
    """
    return _check_quality(features_for(plan_id), quality)


def device_limit(
    plan_id: str | None,
    current_device_count: int,
    unlimited_cap: int | None = None,
) -> DeviceLimit:
    """Device allowance for display, plus whether one more device fits.

    Args:
        plan_id: Plan identifier
        current_device_count: Devices already in use
        unlimited_cap: Number shown as ``max`` for unlimited plans. Defaults to settings.

    Returns:
        DeviceLimit with a finite ``max``

    Raises:
        ValueError: If current_device_count is negative
    """
    cap = settings.unlimited_device_display_cap if unlimited_cap is None else unlimited_cap
    return _device_limit(features_for(plan_id), current_device_count, cap)


def capability_summary(plan_id: str | None) -> list[str]:
    """Human-readable lines describing what a plan includes."""
    return _summary(features_for(plan_id))


def evaluate(plan_id: str | None, feature: str | Feature) -> FeatureDecision:
    """Allow/deny a feature and explain what the resolved plan includes."""
    return _decision(features_for(plan_id), feature)


class EntitlementService:
    """Entitlement evaluator bound to a plan catalog.

    The module-level functions use the built-in catalog; this class exists so
    the HTTP layer can hold one explicitly-owned evaluator (and tests can
    hand it a different catalog).
    """

    def __init__(
        self,
        catalog: Mapping[str, PlanFeatureSet] = PLAN_CATALOG,
        default_plan_id: str = DEFAULT_PLAN_ID,
        unlimited_cap: int | None = None,
    ) -> None:
        if default_plan_id not in catalog:
            raise ValueError(f"Default plan {default_plan_id!r} is not in the catalog")
        self._catalog = catalog
        self._default_plan_id = default_plan_id
        self._unlimited_cap = (
            settings.unlimited_device_display_cap if unlimited_cap is None else unlimited_cap
        )

    @property
    def plan_ids(self) -> list[str]:
        """Catalog plan ids, lowest capability first where known."""
        ordered = [plan_id for plan_id in PLAN_ORDER if plan_id in self._catalog]
        return ordered + sorted(set(self._catalog) - set(ordered))

    def features_for(self, plan_id: str | None) -> PlanFeatureSet:
        return resolve_plan(plan_id, self._catalog, self._default_plan_id)

    def has_feature(self, plan_id: str | None, feature: str | Feature) -> bool:
        return _check_feature(self.features_for(plan_id), feature)

    def can_access_quality(self, plan_id: str | None, quality: str | VideoQuality) -> bool:
        return _check_quality(self.features_for(plan_id), quality)

    def device_limit(self, plan_id: str | None, current_device_count: int) -> DeviceLimit:
        return _device_limit(self.features_for(plan_id), current_device_count, self._unlimited_cap)

    def capability_summary(self, plan_id: str | None) -> list[str]:
        return _summary(self.features_for(plan_id))

    def evaluate(self, plan_id: str | None, feature: str | Feature) -> FeatureDecision:
        return _decision(self.features_for(plan_id), feature)
