"""Circuit breaker for upstream catalog calls.

After ``failure_threshold`` consecutive upstream failures the breaker opens
and the gateway stops calling out for ``reset_timeout`` seconds. Once the
timeout elapses it moves to half-open: the next call is attempted, and its
outcome either closes the breaker or opens it again.
"""

import time
from collections.abc import Callable
from enum import Enum

from streamflix.config import settings
from streamflix.logging import get_logger

logger = get_logger(__name__)


class BreakerState(str, Enum):
    CLOSED = "closed"  # normal operation
    OPEN = "open"  # failing, calls blocked
    HALF_OPEN = "half_open"  # one trial call allowed


class CircuitBreaker:
    """Consecutive-failure circuit breaker.

    Unlike the rate limiter this never waits: callers ask ``allow_request``
    and fail fast when it says no.
    """

    def __init__(
        self,
        failure_threshold: int | None = None,
        reset_timeout: float | None = None,
        name: str = "tmdb",
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the breaker.

        Args:
            failure_threshold: Consecutive failures that open the breaker. Defaults to settings.
            reset_timeout: Seconds to stay open before a trial call. Defaults to settings.
            name: Label used in logs and stats.
            clock: Monotonic time source, injectable for tests.
        """
        self._failure_threshold = (
            settings.breaker_failure_threshold if failure_threshold is None else failure_threshold
        )
        self._reset_timeout = settings.breaker_reset_timeout if reset_timeout is None else reset_timeout
        if self._failure_threshold < 1:
            raise ValueError("failure_threshold must be at least 1")
        if self._reset_timeout < 0:
            raise ValueError("reset_timeout cannot be negative")
        self.name = name
        self._clock = clock
        self._state = BreakerState.CLOSED
        self._consecutive_failures = 0
        self._opened_at = 0.0

    @property
    def state(self) -> BreakerState:
        if self._state == BreakerState.OPEN and self._elapsed_since_open() >= self._reset_timeout:
            self._state = BreakerState.HALF_OPEN
            logger.info("circuit_breaker.half_open", breaker=self.name)
        return self._state

    @property
    def consecutive_failures(self) -> int:
        return self._consecutive_failures

    def _elapsed_since_open(self) -> float:
        return self._clock() - self._opened_at

    def allow_request(self) -> bool:
        """Whether a call may go out right now."""
        return self.state != BreakerState.OPEN

    def retry_in(self) -> float:
        """Seconds until an open breaker allows a trial call (0 if not open)."""
        if self.state != BreakerState.OPEN:
            return 0.0
        return max(self._reset_timeout - self._elapsed_since_open(), 0.0)

    def record_success(self) -> None:
        if self._state != BreakerState.CLOSED:
            logger.info("circuit_breaker.closed", breaker=self.name)
        self._state = BreakerState.CLOSED
        self._consecutive_failures = 0

    def record_failure(self) -> None:
        self._consecutive_failures += 1
        state = self.state
        if state == BreakerState.OPEN:
            # failures from calls already in flight
            return

        if state == BreakerState.HALF_OPEN or self._consecutive_failures >= self._failure_threshold:
            self._state = BreakerState.OPEN
            self._opened_at = self._clock()
            logger.warning(
                "circuit_breaker.opened",
                breaker=self.name,
                failure_count=self._consecutive_failures,
                threshold=self._failure_threshold,
            )

    def stats(self) -> dict:
        return {
            "name": self.name,
            "state": self.state.value,
            "consecutive_failures": self._consecutive_failures,
            "failure_threshold": self._failure_threshold,
            "reset_timeout_seconds": self._reset_timeout,
        }
