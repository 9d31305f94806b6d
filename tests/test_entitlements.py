"""
Tests for plan entitlement evaluation.
"""

from types import MappingProxyType

import pytest

from streamflix.entities import (
    Bounded,
    DeviceLimit,
    Feature,
    PlanFeatureSet,
    SupportLevel,
    Unlimited,
    VideoQuality,
)
from streamflix.services import (
    FEATURE_CHECKS,
    PLAN_CATALOG,
    PLAN_ORDER,
    EntitlementService,
    can_access_quality,
    capability_summary,
    device_limit,
    evaluate,
    features_for,
    has_feature,
)

MONOTONIC_FEATURES = ["download", "hd", "4k", "exclusive", "earlyAccess", "multipleDevices"]


def test_every_feature_has_a_check():
    assert set(FEATURE_CHECKS) == set(Feature)


@pytest.mark.parametrize("feature", MONOTONIC_FEATURES)
def test_features_are_monotonic_in_plan_order(feature):
    """Once a plan grants a feature, every higher plan grants it too."""
    granted = [has_feature(plan_id, feature) for plan_id in PLAN_ORDER]
    first = granted.index(True) if True in granted else len(granted)
    assert granted == [False] * first + [True] * (len(granted) - first)


def test_no_ads_only_on_paid_plans():
    assert has_feature("free", "noAds") is False
    for plan_id in ("basic", "standard", "premium", "vip"):
        assert has_feature(plan_id, "noAds") is True


@pytest.mark.parametrize(
    "plan_id, feature, expected",
    [
        ("free", "download", False),
        ("standard", "download", True),
        ("standard", "4k", False),
        ("premium", "4k", True),
        ("premium", "exclusive", True),
        ("premium", "earlyAccess", False),
        ("vip", "earlyAccess", True),
        ("basic", "prioritySupport", False),
        ("standard", "prioritySupport", True),
        ("vip", "prioritySupport", True),
        ("basic", "multipleDevices", False),
        ("standard", "multipleDevices", True),
        ("vip", Feature.MULTIPLE_DEVICES, True),
    ],
)
def test_has_feature(plan_id, feature, expected):
    assert has_feature(plan_id, feature) is expected


def test_unknown_feature_is_denied():
    assert has_feature("vip", "teleportation") is False


@pytest.mark.parametrize(
    "plan_id, quality, expected",
    [
        ("free", "SD", True),
        ("free", "HD", False),
        ("standard", "HD", True),
        ("standard", "4K", False),
        ("premium", "4K", True),
        ("vip", VideoQuality.UHD_4K, True),
        ("premium", "4k", True),
        ("vip", "8K", False),
    ],
)
def test_can_access_quality(plan_id, quality, expected):
    assert can_access_quality(plan_id, quality) is expected


def test_device_limit():
    assert device_limit("vip", 7) == DeviceLimit(max=10, can_add_more=True)
    assert device_limit("free", 1) == DeviceLimit(max=1, can_add_more=False)
    assert device_limit("free", 0) == DeviceLimit(max=1, can_add_more=True)
    assert device_limit("premium", 3) == DeviceLimit(max=4, can_add_more=True)
    assert device_limit("premium", 4) == DeviceLimit(max=4, can_add_more=False)


def test_device_limit_custom_unlimited_cap():
    assert device_limit("vip", 50, unlimited_cap=25) == DeviceLimit(max=25, can_add_more=True)


def test_device_limit_rejects_negative_count():
    with pytest.raises(ValueError):
        device_limit("free", -1)


@pytest.mark.parametrize("plan_id", ["gold", "", None, "  "])
def test_unknown_plan_resolves_to_free(plan_id):
    assert features_for(plan_id) == features_for("free")


@pytest.mark.parametrize("plan_id", ["PREMIUM", " vip ", "Standard"])
def test_plan_ids_match_exactly(plan_id):
    """Case or whitespace variants are unknown ids and get the free plan."""
    assert features_for(plan_id) == PLAN_CATALOG["free"]
    assert has_feature(plan_id, "4k") is False


def test_exact_plan_id_resolves():
    assert features_for("premium") == PLAN_CATALOG["premium"]


def test_vip_has_unlimited_devices():
    assert isinstance(features_for("vip").max_devices, Unlimited)
    assert features_for("standard").max_devices == Bounded(2)


def test_capability_summary_free():
    assert capability_summary("free") == [
        "1 appareil(s) simultané(s)",
        "Qualité vidéo : SD",
        "Téléchargements non autorisés",
        "Contenu exclusif non inclus",
        "Support standard",
        "Accès standard",
        "Avec publicités",
    ]


def test_capability_summary_vip():
    summary = capability_summary("vip")
    assert summary[0] == "Appareils illimités"
    assert "Qualité vidéo : 4K" in summary
    assert "Accès anticipé" in summary
    assert "Sans publicités" in summary


def test_evaluate():
    decision = evaluate("standard", Feature.UHD_4K)

    assert decision.plan_id == "standard"
    assert decision.feature == "4k"
    assert decision.allowed is False
    assert "Qualité vidéo : HD" in decision.summary


def test_evaluate_unknown_plan_reports_free():
    decision = evaluate("platinum", "download")
    assert decision.plan_id == "free"
    assert decision.allowed is False


def test_bounded_allowance_must_be_positive():
    with pytest.raises(ValueError):
        Bounded(0)


class TestEntitlementService:
    def test_matches_module_functions(self):
        service = EntitlementService()

        for plan_id in PLAN_ORDER:
            assert service.features_for(plan_id) == features_for(plan_id)
            assert service.capability_summary(plan_id) == capability_summary(plan_id)
            for feature in Feature:
                assert service.has_feature(plan_id, feature) == has_feature(plan_id, feature)

    def test_plan_ids_in_order(self):
        assert EntitlementService().plan_ids == list(PLAN_ORDER)

    def test_custom_catalog(self):
        trial = PlanFeatureSet(
            plan_id="trial",
            name="Essai",
            max_devices=Bounded(3),
            max_video_quality=VideoQuality.HD,
            can_download=True,
            has_exclusive=False,
            early_access_allowed=False,
            ads=True,
            support_level=SupportLevel.BASIC,
        )
        service = EntitlementService(
            catalog=MappingProxyType({"trial": trial}),
            default_plan_id="trial",
            unlimited_cap=5,
        )

        assert service.features_for("anything") == trial
        assert service.capability_summary("trial")[0] == "3 appareil(s) simultané(s)"
        assert service.device_limit("trial", 2) == DeviceLimit(max=3, can_add_more=True)
        assert service.plan_ids == ["trial"]

    def test_unlimited_cap(self):
        service = EntitlementService(unlimited_cap=6)
        assert service.device_limit("vip", 100) == DeviceLimit(max=6, can_add_more=True)

    def test_default_plan_must_exist(self):
        with pytest.raises(ValueError):
            EntitlementService(default_plan_id="gold")
