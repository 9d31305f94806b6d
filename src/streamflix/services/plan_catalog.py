"""Static plan catalog.

The plan table is configuration: it is defined once here, never mutated,
and every lookup is total. Unknown plan ids resolve to ``DEFAULT_PLAN_ID``,
the lowest-privilege plan, so a typo can only ever deny capability.
"""

from collections.abc import Mapping
from types import MappingProxyType

from streamflix.entities import (
    Bounded,
    PlanFeatureSet,
    SupportLevel,
    Unlimited,
    VideoQuality,
)

DEFAULT_PLAN_ID = "free"

# Ascending by capability
PLAN_ORDER: tuple[str, ...] = ("free", "basic", "standard", "premium", "vip")

FREE_PLAN = PlanFeatureSet(
    plan_id="free",
    name="Gratuit",
    max_devices=Bounded(1),
    max_video_quality=VideoQuality.SD,
    can_download=False,
    has_exclusive=False,
    early_access_allowed=False,
    ads=True,
    support_level=SupportLevel.BASIC,
)

BASIC_PLAN = PlanFeatureSet(
    plan_id="basic",
    name="Basic",
    max_devices=Bounded(1),
    max_video_quality=VideoQuality.SD,
    can_download=False,
    has_exclusive=False,
    early_access_allowed=False,
    ads=False,
    support_level=SupportLevel.BASIC,
)

STANDARD_PLAN = PlanFeatureSet(
    plan_id="standard",
    name="Standard",
    max_devices=Bounded(2),
    max_video_quality=VideoQuality.HD,
    can_download=True,
    has_exclusive=False,
    early_access_allowed=False,
    ads=False,
    support_level=SupportLevel.PRIORITY,
)

PREMIUM_PLAN = PlanFeatureSet(
    plan_id="premium",
    name="Premium",
    max_devices=Bounded(4),
    max_video_quality=VideoQuality.UHD_4K,
    can_download=True,
    has_exclusive=True,
    early_access_allowed=False,
    ads=False,
    support_level=SupportLevel.PRIORITY,
)

VIP_PLAN = PlanFeatureSet(
    plan_id="vip",
    name="VIP",
    max_devices=Unlimited(),
    max_video_quality=VideoQuality.UHD_4K,
    can_download=True,
    has_exclusive=True,
    early_access_allowed=True,
    ads=False,
    support_level=SupportLevel.VIP,
)

PLAN_CATALOG: Mapping[str, PlanFeatureSet] = MappingProxyType(
    {plan.plan_id: plan for plan in (FREE_PLAN, BASIC_PLAN, STANDARD_PLAN, PREMIUM_PLAN, VIP_PLAN)}
)


def resolve_plan(
    plan_id: str | None,
    catalog: Mapping[str, PlanFeatureSet] = PLAN_CATALOG,
    default_plan_id: str = DEFAULT_PLAN_ID,
) -> PlanFeatureSet:
    """Return the features for ``plan_id``, defaulting to the free plan.

    Ids match exactly: "PREMIUM" or " vip " are not catalog ids and get the
    free plan like any other unknown id.
    """
    if plan_id is None or plan_id not in catalog:
        return catalog[default_plan_id]
    return catalog[plan_id]
