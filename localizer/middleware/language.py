"""
Request Localization Middleware

Sets request.state.locale / request.state.ui_locale and the current-culture
context variable from the LocaleResolver:
  1. culture cookie (when its locale is supported)
  2. Accept-Language header (quality-weighted, best-match)
  3. default locale (first supported entry)

No I/O, only cookie and header parsing. Runs before any route handler so
downstream code can read the locale from the context.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware

from localizer.i18n.context import reset_current_culture, set_current_culture
from localizer.i18n.resolver import LocaleResolver

if TYPE_CHECKING:
    from collections.abc import Callable

    from fastapi import Request
    from starlette.responses import Response
    from starlette.types import ASGIApp

    from localizer.config import LocalizationOptions


class RequestLocalizationMiddleware(BaseHTTPMiddleware):
    """Resolve the request culture and publish it for the rest of the request."""

    def __init__(self, app: ASGIApp, options: LocalizationOptions, resolver: LocaleResolver | None = None):
        super().__init__(app)
        self.options = options
        self.resolver = resolver or LocaleResolver(options)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_culture = self.resolver.resolve(request)
        request.state.culture = request_culture
        request.state.locale = request_culture.culture
        request.state.ui_locale = request_culture.ui_culture

        token = set_current_culture(request_culture)
        try:
            response = await call_next(request)
        finally:
            reset_current_culture(token)

        if self.options.apply_content_language and "Content-Language" not in response.headers:
            response.headers["Content-Language"] = request_culture.ui_culture
        return response
