"""Error types for the catalog gateway.

Upstream failures share the ``UpstreamError`` base so the gateway can apply
its failure policy with a single ``except`` clause. ``UpstreamRateLimited``
is an ``UpstreamError`` too, but every policy surfaces it unchanged.
"""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error body returned by the HTTP layer."""

    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(default_factory=dict)


class StreamflixError(Exception):
    """Base exception for the catalog core."""

    def __init__(self, code: str, message: str, details: dict[str, Any] | None = None) -> None:
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(code=self.code, message=self.message, details=self.details)


class UpstreamError(StreamflixError):
    """An upstream metadata call did not produce a usable payload."""

    def __init__(
        self,
        message: str = "Upstream request failed",
        details: dict[str, Any] | None = None,
        code: str = "UPSTREAM_ERROR",
    ) -> None:
        super().__init__(code, message, details)


class UpstreamTransportError(UpstreamError):
    """The HTTP request never produced a response (DNS, connect, timeout...)."""


class UpstreamDecodeError(UpstreamError):
    """The upstream answered 2xx but the body was not valid JSON."""


class MissingApiKeyError(UpstreamError):
    def __init__(self) -> None:
        super().__init__("TMDB API key not configured", code="MISSING_API_KEY")


class UpstreamStatusError(UpstreamError):
    """The upstream answered with a non-2xx status other than 429."""

    def __init__(self, status_code: int, message: str | None = None, path: str | None = None) -> None:
        self.status_code = status_code
        details: dict[str, Any] = {"status": status_code}
        if path:
            details["path"] = path
        super().__init__(message or f"TMDB API error: {status_code}", details)


class UpstreamRateLimited(UpstreamStatusError):
    """The upstream answered HTTP 429."""

    def __init__(self, path: str | None = None) -> None:
        super().__init__(429, "Rate limit exceeded. Please try again later.", path)
        self.code = "UPSTREAM_RATE_LIMITED"


class CircuitOpenError(UpstreamError):
    def __init__(self, retry_in: float) -> None:
        super().__init__(
            "Circuit breaker is open - TMDB API temporarily unavailable",
            {"retry_in_seconds": round(retry_in, 3)},
            code="CIRCUIT_OPEN",
        )


class RateLimitWaitExceeded(StreamflixError):
    """Admission would take longer than the caller is willing to wait."""

    def __init__(self, required_wait: float, deadline_in: float) -> None:
        super().__init__(
            "RATE_LIMIT_WAIT_EXCEEDED",
            "Outbound rate limit would delay this call past its deadline",
            {
                "required_wait_seconds": round(required_wait, 3),
                "remaining_seconds": round(max(deadline_in, 0.0), 3),
            },
        )
        self.required_wait = required_wait
