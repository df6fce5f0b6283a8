"""
Security Headers Middleware

Adds transport and content security headers to every HTTP response.
"""

from typing import Callable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

LOOPBACK_HOSTS = frozenset({"localhost", "127.0.0.1", "[::1]", "::1"})


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Middleware that adds security headers to all responses.

    Headers added:
    - X-Content-Type-Options: Prevent MIME type sniffing
    - Referrer-Policy: Control referrer information
    - Strict-Transport-Security: Enforce HTTPS (HTTPS responses only, never
      for loopback hosts)
    """

    def __init__(
        self,
        app,
        enable_hsts: bool = True,
        hsts_max_age: int = 60 * 60 * 24 * 30,  # 30 days
        hsts_include_subdomains: bool = False,
        hsts_preload: bool = False,
    ):
        super().__init__(app)
        self.enable_hsts = enable_hsts
        self.hsts_max_age = hsts_max_age
        self.hsts_include_subdomains = hsts_include_subdomains
        self.hsts_preload = hsts_preload

    @property
    def hsts_value(self) -> str:
        value = f"max-age={self.hsts_max_age}"
        if self.hsts_include_subdomains:
            value += "; includeSubDomains"
        if self.hsts_preload:
            value += "; preload"
        return value

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Add security headers to the response."""
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        if (
            self.enable_hsts
            and request.url.scheme == "https"
            and (request.url.hostname or "").lower() not in LOOPBACK_HOSTS
        ):
            response.headers["Strict-Transport-Security"] = self.hsts_value

        return response
