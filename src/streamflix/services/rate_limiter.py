"""Sliding-window rate limiter for outbound upstream calls.

Keeps the process under the upstream's documented request ceiling
(35 requests per 10 seconds by default) by delaying calls rather than
rejecting them.

Guarantees:
- No trailing window of ``time_window`` seconds ever holds more than
  ``max_requests`` admissions.
- Waiters are NOT served in FIFO order. When several tasks are suspended,
  whichever wakes first after capacity frees up is admitted; only the
  global ceiling is guaranteed.

The prune / check / record sequence in ``_try_admit`` contains no
``await``, so on a single event loop it cannot interleave with another
task's admission.
"""

import asyncio
import time
from collections import deque
from collections.abc import Awaitable, Callable

from streamflix.config import settings
from streamflix.errors import RateLimitWaitExceeded
from streamflix.logging import get_logger

logger = get_logger(__name__)


class SlidingWindowRateLimiter:
    """Admission controller composed in front of an upstream client.

    Example:
        ```python
        limiter = SlidingWindowRateLimiter.create()

        await limiter.admit()             # waits as long as the window requires
        await limiter.admit(timeout=2.0)  # raises RateLimitWaitExceeded instead
        response = await client.get_json(request)
        ```
    """

    def __init__(
        self,
        max_requests: int | None = None,
        time_window: float | None = None,
        safety_margin: float | None = None,
        max_wait: float | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """Initialize the rate limiter.

        Args:
            max_requests: Admissions allowed per window. Defaults to settings.
            time_window: Window length in seconds. Defaults to settings.
            safety_margin: Extra seconds added to each computed wait. Defaults to settings.
            max_wait: Default bound on how long ``admit`` may wait; None means unbounded.
                Defaults to settings.
            clock: Monotonic time source, injectable for tests.
            sleep: Coroutine used to suspend, injectable for tests.

        Raises:
            ValueError: If any limit is out of range
        """
        self._max_requests = settings.rate_limit_max_requests if max_requests is None else max_requests
        self._time_window = settings.rate_limit_window_seconds if time_window is None else time_window
        self._safety_margin = (
            settings.rate_limit_safety_margin if safety_margin is None else safety_margin
        )
        self._max_wait = settings.rate_limit_max_wait if max_wait is None else max_wait

        if self._max_requests < 1:
            raise ValueError("max_requests must be at least 1")
        if self._time_window <= 0:
            raise ValueError("time_window must be positive")
        if self._safety_margin < 0:
            raise ValueError("safety_margin cannot be negative")

        self._clock = clock
        self._sleep = sleep
        self._timestamps: deque[float] = deque()
        self._admitted = 0
        self._delayed = 0

    @classmethod
    def create(
        cls,
        max_requests: int | None = None,
        time_window: float | None = None,
    ) -> "SlidingWindowRateLimiter":
        """Factory method to create a limiter with defaults.

        Args:
            max_requests: Admissions per window. If None, uses settings.
            time_window: Window length in seconds. If None, uses settings.

        Returns:
            Configured SlidingWindowRateLimiter
        """
        return cls(max_requests=max_requests, time_window=time_window)

    @property
    def max_requests(self) -> int:
        return self._max_requests

    @property
    def time_window(self) -> float:
        return self._time_window

    def _prune(self, now: float) -> None:
        while self._timestamps and now - self._timestamps[0] >= self._time_window:
            self._timestamps.popleft()

    def _try_admit(self) -> tuple[float | None, float]:
        """Admit now if the window has room.

        Returns:
            (admission instant, 0.0) when admitted, or (None, seconds to wait)
        """
        now = self._clock()
        self._prune(now)

        if len(self._timestamps) < self._max_requests:
            self._timestamps.append(now)
            self._admitted += 1
            return now, 0.0

        oldest = self._timestamps[0]
        return None, self._time_window - (now - oldest) + self._safety_margin

    async def admit(self, timeout: float | None = None) -> float:
        """Suspend until a call can be made without exceeding the ceiling.

        The window is re-evaluated after every wait, since other tasks may
        have taken the freed capacity in the meantime.

        Args:
            timeout: Maximum seconds to wait for this admission. Falls back to
                the instance ``max_wait``; None on both means wait indefinitely.

        Returns:
            The clock reading recorded for this admission

        Raises:
            RateLimitWaitExceeded: If the next required wait would pass the deadline
            asyncio.CancelledError: If the waiting task is cancelled (nothing is recorded)
        """
        limit = timeout if timeout is not None else self._max_wait
        deadline = None if limit is None else self._clock() + limit

        while True:
            admitted_at, wait = self._try_admit()
            if admitted_at is not None:
                return admitted_at

            if deadline is not None:
                remaining = deadline - self._clock()
                if wait > remaining:
                    raise RateLimitWaitExceeded(wait, remaining)

            self._delayed += 1
            logger.debug(
                "rate_limiter.waiting",
                wait_seconds=round(wait, 3),
                in_window=len(self._timestamps),
                max_requests=self._max_requests,
            )
            await self._sleep(wait)

    def in_window(self) -> int:
        """Admissions inside the trailing window as of now."""
        self._prune(self._clock())
        return len(self._timestamps)

    def stats(self) -> dict:
        return {
            "max_requests": self._max_requests,
            "time_window_seconds": self._time_window,
            "in_window": self.in_window(),
            "admitted": self._admitted,
            "delayed": self._delayed,
        }
