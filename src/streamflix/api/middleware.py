"""Request correlation middleware."""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from streamflix.logging import clear_request_id, set_request_id


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Bind an X-Request-ID to every request and echo it on the response."""

    HEADER_NAME = "X-Request-ID"

    async def dispatch(self, request: Request, call_next):
        request_id = set_request_id(request.headers.get(self.HEADER_NAME) or None)
        request.state.request_id = request_id
        try:
            response = await call_next(request)
            response.headers[self.HEADER_NAME] = request_id
            return response
        finally:
            clear_request_id()
