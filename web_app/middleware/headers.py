"""CORS headers middleware."""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from typing import Callable, Dict, Optional


DEFAULT_CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type",
}


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware that stamps fixed CORS headers on every response.

    Unlike starlette's CORSMiddleware the headers do not depend on an Origin
    request header, and OPTIONS requests still reach the route.
    """

    def __init__(self, app, headers: Optional[Dict[str, str]] = None):
        super().__init__(app)
        self.cors_headers = dict(headers or DEFAULT_CORS_HEADERS)

    async def dispatch(self, request: Request, call_next: Callable):
        """Process request and add CORS headers to the response."""
        response = await call_next(request)
        for name, value in self.cors_headers.items():
            response.headers[name] = value
        return response
