"""
Tests for the in-process response cache.
"""

import pytest

from streamflix.protocols import ResponseCacheStore
from streamflix.repositories import ResponseCache


def test_satisfies_protocol(cache):
    """ResponseCache is a ResponseCacheStore through structural typing."""
    assert isinstance(cache, ResponseCacheStore)


def test_get_missing_key(cache):
    assert cache.get("trending") is None


def test_entry_fresh_until_ttl(cache, clock):
    """A payload is returned on [t0, t0+ttl) and absent from t0+ttl on."""
    payload = {"results": [{"id": 603}]}
    cache.set("movie-603", payload)

    assert cache.get("movie-603") == payload
    clock.advance(899.999)
    assert cache.get("movie-603") == payload
    clock.advance(0.001)
    assert cache.get("movie-603") is None


def test_expired_entry_is_evicted(cache, clock):
    cache.set("popular", {"results": []})
    clock.advance(901)

    assert len(cache) == 1
    assert cache.get("popular") is None
    assert len(cache) == 0


def test_overwrite_wins_and_restarts_ttl(cache, clock):
    cache.set("popular", {"page": 1})
    clock.advance(600)
    cache.set("popular", {"page": 2})
    clock.advance(600)

    # 1200s after the first set, 600s after the second
    assert cache.get("popular") == {"page": 2}


def test_clear_removes_everything(cache):
    for key in ("trending", "popular", "genre-28", "tv-1399-season-2"):
        cache.set(key, {"key": key})

    assert cache.clear() == 4
    for key in ("trending", "popular", "genre-28", "tv-1399-season-2"):
        assert cache.get(key) is None


def test_delete(cache):
    cache.set("tv-popular", {})
    assert cache.delete("tv-popular") is True
    assert cache.delete("tv-popular") is False


def test_contains_honours_ttl_without_evicting(cache, clock):
    cache.set("trending", {})
    assert "trending" in cache

    clock.advance(900)
    assert "trending" not in cache
    assert len(cache) == 1


def test_movie_and_tv_keys_are_independent(cache):
    cache.set("movie-603", {"movie": {"title": "Matrix"}})
    cache.set("tv-603", {"show": {"name": "Something else"}})

    assert cache.get("movie-603") == {"movie": {"title": "Matrix"}}
    assert cache.get("tv-603") == {"show": {"name": "Something else"}}


def test_stats_counts_hits_and_misses(cache):
    cache.set("trending", {})
    cache.get("trending")
    cache.get("trending")
    cache.get("popular")

    stats = cache.stats()
    assert stats["size"] == 1
    assert stats["ttl_seconds"] == 900
    assert stats["hits"] == 2
    assert stats["misses"] == 1
    assert stats["hit_rate"] == pytest.approx(2 / 3)


def test_rejects_non_positive_ttl():
    with pytest.raises(ValueError):
        ResponseCache(ttl=0)


def test_create_uses_settings_ttl():
    assert ResponseCache.create().ttl > 0
    assert ResponseCache.create(ttl=60).ttl == 60
