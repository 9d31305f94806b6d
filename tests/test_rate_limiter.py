"""
Tests for the sliding-window rate limiter.
"""

import asyncio

import pytest

from streamflix.config import settings
from streamflix.errors import RateLimitWaitExceeded
from streamflix.services import SlidingWindowRateLimiter


def _max_in_any_window(times: list[float], window: float) -> int:
    ordered = sorted(times)
    return max(
        sum(1 for t in ordered if start <= t < start + window) for start in ordered
    )


@pytest.mark.asyncio
async def test_admits_immediately_below_ceiling(limiter, clock):
    times = [await limiter.admit() for _ in range(35)]

    assert times == [clock.now] * 35
    assert limiter.in_window() == 35
    assert limiter.stats()["delayed"] == 0


@pytest.mark.asyncio
async def test_ceiling_over_100_rapid_calls(limiter):
    """No 10s window holds more than 35 admissions; the 36th waits a full window."""
    times = [await limiter.admit() for _ in range(100)]

    assert len(times) == 100
    assert _max_in_any_window(times, 10) <= 35
    assert times[35] - times[0] >= 10
    assert times[70] - times[35] >= 10


@pytest.mark.asyncio
async def test_wait_includes_safety_margin(limiter, clock):
    start = clock.now
    for _ in range(35):
        await limiter.admit()

    admitted_at = await limiter.admit()
    assert admitted_at == pytest.approx(start + 10.05)


@pytest.mark.asyncio
async def test_window_slides(limiter, clock):
    for _ in range(35):
        await limiter.admit()

    clock.advance(10)
    assert limiter.in_window() == 0
    assert await limiter.admit() == clock.now


@pytest.mark.asyncio
async def test_timeout_exceeded_raises(clock):
    limiter = SlidingWindowRateLimiter(
        max_requests=2, time_window=10, safety_margin=0, clock=clock, sleep=clock.sleep
    )
    await limiter.admit()
    await limiter.admit()

    with pytest.raises(RateLimitWaitExceeded) as exc_info:
        await limiter.admit(timeout=1)

    assert exc_info.value.code == "RATE_LIMIT_WAIT_EXCEEDED"
    assert exc_info.value.required_wait == pytest.approx(10)
    assert limiter.in_window() == 2


@pytest.mark.asyncio
async def test_timeout_long_enough_waits(clock):
    limiter = SlidingWindowRateLimiter(
        max_requests=1, time_window=5, safety_margin=0, clock=clock, sleep=clock.sleep
    )
    first = await limiter.admit()
    second = await limiter.admit(timeout=6)

    assert second - first == pytest.approx(5)


@pytest.mark.asyncio
async def test_default_max_wait_applies(clock):
    limiter = SlidingWindowRateLimiter(
        max_requests=1, time_window=30, safety_margin=0, max_wait=2, clock=clock, sleep=clock.sleep
    )
    await limiter.admit()

    with pytest.raises(RateLimitWaitExceeded):
        await limiter.admit()


@pytest.mark.asyncio
async def test_concurrent_waiters_respect_ceiling():
    """Real event loop, small window: concurrent tasks never exceed the ceiling."""
    limiter = SlidingWindowRateLimiter(max_requests=3, time_window=0.2, safety_margin=0.01)

    times = await asyncio.gather(*(limiter.admit() for _ in range(8)))

    assert _max_in_any_window(list(times), 0.2) <= 3
    ordered = sorted(times)
    assert ordered[3] - ordered[0] >= 0.2


@pytest.mark.asyncio
async def test_cancelled_waiter_records_nothing():
    limiter = SlidingWindowRateLimiter(max_requests=1, time_window=5, safety_margin=0)
    await limiter.admit()

    waiter = asyncio.create_task(limiter.admit())
    await asyncio.sleep(0.01)
    waiter.cancel()

    with pytest.raises(asyncio.CancelledError):
        await waiter
    assert limiter.in_window() == 1
    assert limiter.stats()["admitted"] == 1


@pytest.mark.parametrize(
    "kwargs",
    [
        {"max_requests": 0},
        {"time_window": 0},
        {"safety_margin": -0.1},
    ],
)
def test_rejects_invalid_limits(kwargs):
    with pytest.raises(ValueError):
        SlidingWindowRateLimiter(**kwargs)


def test_create_uses_settings():
    limiter = SlidingWindowRateLimiter.create()
    assert limiter.max_requests == settings.rate_limit_max_requests
    assert limiter.time_window == settings.rate_limit_window_seconds
