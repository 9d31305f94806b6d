"""
Shared fixtures: a controllable clock and a fake upstream served through
httpx.MockTransport.
"""

import httpx
import pytest

from streamflix.repositories import CatalogProxyClient, ResponseCache, TMDBClient
from streamflix.services import SlidingWindowRateLimiter

TMDB_BASE_URL = "https://tmdb.test/3"
PROXY_BASE_URL = "https://streamflix.test/api/tmdb"


class FakeClock:
    """Monotonic clock that only moves when told to (or when slept on)."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    async def sleep(self, seconds: float) -> None:
        self.now += seconds


class FakeUpstream:
    """Records every request and answers from a path -> response table."""

    def __init__(self) -> None:
        self.routes: dict[str, httpx.Response | Exception] = {}
        self.requests: list[httpx.Request] = []

    def respond(self, path: str, status_code: int = 200, json=None, text: str | None = None) -> None:
        if text is not None:
            self.routes[path] = httpx.Response(status_code, text=text)
        else:
            self.routes[path] = httpx.Response(status_code, json=json if json is not None else {})

    def fail(self, path: str, exc: Exception) -> None:
        self.routes[path] = exc

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, json={"status_message": "not found"})
        if isinstance(route, Exception):
            raise route
        return route

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    @property
    def paths(self) -> list[str]:
        return [request.url.path for request in self.requests]


@pytest.fixture
def clock():
    """Fake monotonic clock starting at t=1000."""
    return FakeClock()


@pytest.fixture
def upstream():
    """Fake HTTP upstream; register responses with ``respond``."""
    return FakeUpstream()


@pytest.fixture
def cache(clock):
    return ResponseCache(ttl=900, clock=clock)


@pytest.fixture
def limiter(clock):
    return SlidingWindowRateLimiter(
        max_requests=35,
        time_window=10,
        safety_margin=0.05,
        max_wait=None,
        clock=clock,
        sleep=clock.sleep,
    )


@pytest.fixture
def tmdb_client(upstream):
    return TMDBClient(
        api_key="test-key",
        base_url=TMDB_BASE_URL,
        language="fr-FR",
        http_client=upstream.client(),
    )


@pytest.fixture
def proxy_client(upstream):
    return CatalogProxyClient(base_url=PROXY_BASE_URL, http_client=upstream.client())
