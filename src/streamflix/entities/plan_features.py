"""Plan entitlement domain entities.

All types here are immutable: the plan table is configuration, not state.
"""

from dataclasses import dataclass
from enum import Enum


class VideoQuality(str, Enum):
    """Streaming quality tiers, ordered SD < HD < 4K.

    Compare tiers with ``rank`` / ``at_least``; the string values are only
    for display and parsing.
    """

    SD = "SD"
    HD = "HD"
    UHD_4K = "4K"

    @property
    def rank(self) -> int:
        return _QUALITY_ORDER.index(self)

    def at_least(self, other: "VideoQuality") -> bool:
        return self.rank >= other.rank

    @classmethod
    def parse(cls, value: "str | VideoQuality") -> "VideoQuality | None":
        """Parse a quality label case-insensitively; None if unrecognized."""
        if isinstance(value, VideoQuality):
            return value
        normalized = value.strip().upper()
        for quality in cls:
            if quality.value == normalized:
                return quality
        return None


_QUALITY_ORDER = (VideoQuality.SD, VideoQuality.HD, VideoQuality.UHD_4K)


class SupportLevel(str, Enum):
    BASIC = "basic"
    PRIORITY = "priority"
    VIP = "vip"

    @property
    def is_priority(self) -> bool:
        """Priority and VIP both count as priority support."""
        return self in (SupportLevel.PRIORITY, SupportLevel.VIP)


class Feature(str, Enum):
    """Closed set of feature checks a caller can ask about."""

    DOWNLOAD = "download"
    HD = "hd"
    UHD_4K = "4k"
    EXCLUSIVE = "exclusive"
    PRIORITY_SUPPORT = "prioritySupport"
    EARLY_ACCESS = "earlyAccess"
    NO_ADS = "noAds"
    MULTIPLE_DEVICES = "multipleDevices"

    @classmethod
    def parse(cls, value: "str | Feature") -> "Feature | None":
        """Look up a feature by its wire name; None if it is not one of ours."""
        if isinstance(value, Feature):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass(frozen=True)
class Unlimited:
    """No cap on simultaneous devices."""

    def allows(self, current: int) -> bool:
        return True

    def __str__(self) -> str:
        return "unlimited"


@dataclass(frozen=True)
class Bounded:
    """At most ``count`` simultaneous devices."""

    count: int

    def __post_init__(self) -> None:
        if self.count < 1:
            raise ValueError(f"Device allowance must be positive, got {self.count}")

    def allows(self, current: int) -> bool:
        return current < self.count

    def __str__(self) -> str:
        return str(self.count)


DeviceAllowance = Unlimited | Bounded


@dataclass(frozen=True)
class PlanFeatureSet:
    """Capabilities granted by one subscription plan.

    Attributes:
        plan_id: Canonical plan identifier ("free", "basic", ...)
        name: Display label
        max_devices: Simultaneous device allowance
        max_video_quality: Highest streaming quality
        can_download: Offline downloads permitted
        has_exclusive: Access to subscriber-only titles
        early_access_allowed: Early access to new releases
        ads: Whether playback shows advertising
        support_level: Customer support tier
    """

    plan_id: str
    name: str
    max_devices: DeviceAllowance
    max_video_quality: VideoQuality
    can_download: bool
    has_exclusive: bool
    early_access_allowed: bool
    ads: bool
    support_level: SupportLevel


@dataclass(frozen=True)
class DeviceLimit:
    """Device allowance as rendered for a user interface.

    ``max`` is always a finite number; unlimited plans report a display cap.
    """

    max: int
    can_add_more: bool


@dataclass(frozen=True)
class FeatureDecision:
    """Outcome of a single feature check, with context for the caller."""

    plan_id: str
    feature: str
    allowed: bool
    summary: tuple[str, ...] = ()
