#!/usr/bin/env python3
"""
Demo script for the StreamFlix catalog core.

Shows plan entitlements, the outbound rate limiter on a shortened window,
and (when TMDB_API_KEY is set) the server-tier gateway with its cache.
"""

import asyncio
import time

from streamflix.config import settings
from streamflix.logging import configure_logging
from streamflix.services import (
    PLAN_ORDER,
    CatalogGateway,
    SlidingWindowRateLimiter,
    can_access_quality,
    capability_summary,
    device_limit,
    has_feature,
)


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def demo_entitlements() -> None:
    """Print the feature matrix of every plan."""
    print_section("Plan Entitlements")

    features = ["download", "hd", "4k", "exclusive", "earlyAccess", "noAds", "multipleDevices"]
    print(f"\n{'plan':<10}" + "".join(f"{name:>16}" for name in features))
    for plan_id in PLAN_ORDER:
        row = "".join(f"{'✓' if has_feature(plan_id, name) else '-':>16}" for name in features)
        print(f"{plan_id:<10}{row}")

    print("\n📺 Quality checks:")
    for plan_id, quality in [("free", "SD"), ("standard", "HD"), ("standard", "4K"), ("premium", "4K")]:
        print(f"  {plan_id:<10} {quality:<3} -> {can_access_quality(plan_id, quality)}")

    print("\n📱 Device limits:")
    for plan_id, current in [("free", 1), ("premium", 3), ("vip", 7)]:
        limit = device_limit(plan_id, current)
        print(f"  {plan_id:<10} using {current}: max={limit.max} can_add_more={limit.can_add_more}")

    print("\n🇫🇷 Summary for 'gold' (unknown, resolves to free):")
    for line in capability_summary("gold"):
        print(f"  • {line}")


async def demo_rate_limiter() -> None:
    """Push 12 calls through a 5-per-second limiter."""
    print_section("Rate Limiter (5 requests / 1s window)")

    limiter = SlidingWindowRateLimiter(max_requests=5, time_window=1.0, safety_margin=0.01)
    start = time.monotonic()
    times = await asyncio.gather(*(limiter.admit() for _ in range(12)))

    for i, admitted_at in enumerate(sorted(times), start=1):
        print(f"  call {i:>2} admitted at +{admitted_at - start:.2f}s")
    print(f"\n📊 Stats: {limiter.stats()}")


async def demo_gateway() -> None:
    """Fetch popular movies twice; the second read comes from cache."""
    print_section("Server-tier Gateway")

    if not settings.has_tmdb_api_key:
        print("\n⚠️  TMDB_API_KEY not set; the gateway will serve placeholders.")

    gateway = CatalogGateway.for_server()
    try:
        for attempt in (1, 2):
            start = time.time()
            movies = await gateway.popular_movies()
            elapsed_ms = (time.time() - start) * 1000
            first = movies[0].get("title") if movies else None
            print(f"  attempt {attempt}: {len(movies)} movies in {elapsed_ms:.1f}ms (first: {first})")
        print(f"\n📊 Stats: {gateway.stats()}")
    finally:
        await gateway.close()


def main() -> None:
    configure_logging("streamflix-demo", settings.log_level)
    demo_entitlements()
    asyncio.run(demo_rate_limiter())
    asyncio.run(demo_gateway())


if __name__ == "__main__":
    main()
