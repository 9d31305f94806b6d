"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Swapping the upstream (TMDB directly, or the StreamFlix proxy)
- Unit testing with fake clients and caches
- Clear separation of concerns
"""

from .cache_store import ResponseCacheStore
from .upstream_client import UpstreamClient

__all__ = [
    "ResponseCacheStore",
    "UpstreamClient",
]
