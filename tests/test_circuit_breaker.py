"""
Tests for the upstream circuit breaker.
"""

import pytest

from streamflix.services import BreakerState, CircuitBreaker


@pytest.fixture
def breaker(clock):
    return CircuitBreaker(failure_threshold=3, reset_timeout=60, name="test", clock=clock)


def test_starts_closed(breaker):
    assert breaker.state == BreakerState.CLOSED
    assert breaker.allow_request()
    assert breaker.retry_in() == 0.0


def test_opens_after_threshold(breaker):
    breaker.record_failure()
    breaker.record_failure()
    assert breaker.state == BreakerState.CLOSED

    breaker.record_failure()
    assert breaker.state == BreakerState.OPEN
    assert not breaker.allow_request()


def test_success_resets_failure_count(breaker):
    breaker.record_failure()
    breaker.record_failure()
    breaker.record_success()
    breaker.record_failure()

    assert breaker.consecutive_failures == 1
    assert breaker.state == BreakerState.CLOSED


def test_half_opens_after_timeout(breaker, clock):
    for _ in range(3):
        breaker.record_failure()

    clock.advance(30)
    assert breaker.retry_in() == pytest.approx(30)
    assert not breaker.allow_request()

    clock.advance(30)
    assert breaker.state == BreakerState.HALF_OPEN
    assert breaker.allow_request()


def test_half_open_success_closes(breaker, clock):
    for _ in range(3):
        breaker.record_failure()
    clock.advance(60)

    breaker.record_success()
    assert breaker.state == BreakerState.CLOSED
    assert breaker.consecutive_failures == 0


def test_half_open_failure_reopens(breaker, clock):
    for _ in range(3):
        breaker.record_failure()
    clock.advance(60)
    assert breaker.state == BreakerState.HALF_OPEN

    breaker.record_failure()
    assert breaker.state == BreakerState.OPEN
    assert breaker.retry_in() == pytest.approx(60)


def test_stats(breaker):
    breaker.record_failure()

    stats = breaker.stats()
    assert stats["name"] == "test"
    assert stats["state"] == "closed"
    assert stats["consecutive_failures"] == 1
    assert stats["failure_threshold"] == 3


def test_rejects_invalid_threshold():
    with pytest.raises(ValueError):
        CircuitBreaker(failure_threshold=0)


def test_late_failures_do_not_extend_open_window(breaker, clock):
    for _ in range(3):
        breaker.record_failure()

    clock.advance(50)
    breaker.record_failure()
    assert breaker.retry_in() == pytest.approx(10)

    clock.advance(10)
    assert breaker.state == BreakerState.HALF_OPEN
