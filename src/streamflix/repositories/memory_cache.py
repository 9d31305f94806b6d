"""In-process response cache with a fixed TTL.

Entries expire lazily: nothing sweeps the store in the background, an
expired entry is dropped by the first ``get`` that finds it. The key space
is bounded by the number of distinct catalog resources, not by traffic, so
the store is never size-limited and a fresh entry is never dropped early.
"""

import time
from collections.abc import Callable
from typing import Any

from streamflix.config import settings
from streamflix.entities import CacheEntryEntity


class ResponseCache:
    """In-memory implementation of the ResponseCacheStore protocol.

    This class satisfies the protocol through structural typing - no
    explicit inheritance needed.

    Each instance owns its entries; create one per process (or per test) and
    pass it to whatever needs it.

    Example:
        ```python
        cache = ResponseCache.create()
        cache.set("movie-603", {"movie": {...}})
        cache.get("movie-603")   # payload, for the next 15 minutes
        cache.clear()
        ```
    """

    def __init__(
        self,
        ttl: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the cache.

        Args:
            ttl: Time-to-live for every entry, in seconds. Defaults to settings.
            clock: Monotonic time source, injectable for tests.

        Raises:
            ValueError: If ttl is not positive
        """
        self._ttl = settings.cache_ttl_seconds if ttl is None else ttl
        if self._ttl <= 0:
            raise ValueError("Cache TTL must be positive")
        self._clock = clock
        self._entries: dict[str, CacheEntryEntity] = {}
        self._hits = 0
        self._misses = 0

    @classmethod
    def create(cls, ttl: float | None = None) -> "ResponseCache":
        """Factory method to create a ResponseCache with defaults.

        Args:
            ttl: Time-to-live in seconds. If None, uses settings.

        Returns:
            Configured ResponseCache
        """
        return cls(ttl=ttl)

    @property
    def ttl(self) -> float:
        return self._ttl

    def get(self, key: str) -> Any | None:
        """Return the cached payload for ``key``, evicting it if expired.

        Args:
            key: The resource cache key

        Returns:
            The payload, or None when absent or expired
        """
        entry = self._entries.get(key)
        if entry is None:
            self._misses += 1
            return None

        if not entry.is_fresh(self._clock(), self._ttl):
            del self._entries[key]
            self._misses += 1
            return None

        self._hits += 1
        return entry.payload

    def set(self, key: str, payload: Any) -> None:
        """Store ``payload`` under ``key`` with a fresh TTL window."""
        self._entries[key] = CacheEntryEntity(key=key, payload=payload, stored_at=self._clock())

    def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def clear(self) -> int:
        """Drop every entry.

        Returns:
            Number of entries removed (expired ones included)
        """
        count = len(self._entries)
        self._entries.clear()
        return count

    def stats(self) -> dict:
        """Get cache statistics.

        Returns:
            Dictionary with size, ttl and hit/miss counters
        """
        lookups = self._hits + self._misses
        return {
            "size": len(self._entries),
            "ttl_seconds": self._ttl,
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": self._hits / lookups if lookups else 0.0,
        }

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        # Honours the TTL but leaves eviction to get()
        entry = self._entries.get(key) if isinstance(key, str) else None
        return entry is not None and entry.is_fresh(self._clock(), self._ttl)
