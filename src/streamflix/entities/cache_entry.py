"""Cache entry domain entity."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CacheEntryEntity:
    """Domain entity for a cached upstream response.

    Attributes:
        key: Deterministic resource identifier (e.g. "genre-28", "tv-1399-season-2")
        payload: The decoded upstream response body
        stored_at: Clock reading (seconds) at insertion time
    """

    key: str
    payload: Any
    stored_at: float

    def age(self, now: float) -> float:
        """Seconds elapsed since the entry was stored."""
        return now - self.stored_at

    def is_fresh(self, now: float, ttl: float) -> bool:
        """Whether the entry is still inside its TTL window at ``now``."""
        return self.age(now) < ttl
