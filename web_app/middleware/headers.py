"""Forwarded headers middleware."""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from typing import Callable

from shortlinks.common.headers import get_client_ip


class ForwardedHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware to resolve the client IP behind X-Forwarded-For."""

    async def dispatch(self, request: Request, call_next: Callable):
        """Process request and store the client IP on request.state."""
        request.state.client_ip = get_client_ip(
            request.headers,
            request.client.host if request.client else None,
        )

        response = await call_next(request)
        return response
