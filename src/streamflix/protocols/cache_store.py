"""Response cache storage protocol.

Defines the interface the gateway needs from a response cache: a
time-bounded key/value store for decoded upstream responses.

Implementations can include:
- In-process dictionary with lazy TTL eviction (default)
- Any store that honours the same TTL contract
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ResponseCacheStore(Protocol):
    """Protocol for response cache backends.

    Any type that implements these methods satisfies the protocol, no
    explicit inheritance needed.

    Contract:
        A value stored with ``set`` is returned by ``get`` until exactly
        ``ttl`` seconds have elapsed, and never afterwards.

    Example:
        ```python
        from streamflix.protocols import ResponseCacheStore

        cache: ResponseCacheStore = ResponseCache(ttl=900)
        ```
    """

    @property
    def ttl(self) -> float:
        """Return the time-to-live applied to every entry, in seconds."""
        ...

    def get(self, key: str) -> Any | None:
        """Return the payload for ``key`` if present and fresh.

        Args:
            key: The resource cache key

        Returns:
            The cached payload, or None when absent or expired
        """
        ...

    def set(self, key: str, payload: Any) -> None:
        """Insert or overwrite ``key``, restarting its TTL.

        Args:
            key: The resource cache key
            payload: The decoded upstream response
        """
        ...

    def delete(self, key: str) -> bool:
        """Remove one entry.

        Returns:
            True if an entry was removed, False otherwise
        """
        ...

    def clear(self) -> int:
        """Remove every entry.

        Returns:
            Number of entries removed
        """
        ...

    def stats(self) -> dict:
        """Get cache statistics.

        Returns:
            Dictionary with stats (implementation-specific)
        """
        ...
