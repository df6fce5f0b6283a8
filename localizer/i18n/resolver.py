"""
Locale resolution

``LocaleResolver`` walks an ordered list of culture providers and returns
the first candidate with at least one supported half (culture or UI
culture); an unsupported half takes the default locale. The default
provider order is:

  1. persisted culture cookie
  2. Accept-Language header (quality-weighted, intersected with the
     supported set)
  3. the default locale (first supported entry)

A query-string provider can be placed in front of the cookie with
``LocalizationOptions.query_string_override``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from localizer.i18n.culture import CULTURE_COOKIE_NAME, RequestCulture, parse_cookie_value
from localizer.i18n.locale import match_supported_locale, parse_accept_language

if TYPE_CHECKING:
    from collections.abc import Sequence

    from starlette.requests import HTTPConnection

    from localizer.config import LocalizationOptions

logger = logging.getLogger(__name__)


@runtime_checkable
class CultureProvider(Protocol):
    """Extracts a candidate culture from one request carrier."""

    name: str

    def __call__(self, request: HTTPConnection, options: LocalizationOptions) -> RequestCulture | None: ...


class QueryStringCultureProvider:
    """Reads ``?culture=`` and ``?ui-culture=`` from the query string."""

    name = "query"

    def __init__(self, culture_key: str = "culture", ui_culture_key: str = "ui-culture"):
        self.culture_key = culture_key
        self.ui_culture_key = ui_culture_key

    def __call__(self, request: HTTPConnection, options: LocalizationOptions) -> RequestCulture | None:
        culture = request.query_params.get(self.culture_key) or None
        ui_culture = request.query_params.get(self.ui_culture_key) or None
        if culture is None and ui_culture is None:
            return None
        return RequestCulture(culture=culture or ui_culture, ui_culture=ui_culture or culture)


class CookieCultureProvider:
    """Reads the persisted culture cookie."""

    name = "cookie"

    def __init__(self, cookie_name: str = CULTURE_COOKIE_NAME):
        self.cookie_name = cookie_name

    def __call__(self, request: HTTPConnection, options: LocalizationOptions) -> RequestCulture | None:
        return parse_cookie_value(request.cookies.get(self.cookie_name))


class AcceptLanguageCultureProvider:
    """Negotiates the Accept-Language header against the supported set."""

    name = "accept-language"

    def __call__(self, request: HTTPConnection, options: LocalizationOptions) -> RequestCulture | None:
        locale = parse_accept_language(request.headers.get("Accept-Language", ""), options.supported)
        return RequestCulture.single(locale) if locale else None


def default_providers(options: LocalizationOptions) -> list[CultureProvider]:
    providers: list[CultureProvider] = [CookieCultureProvider(), AcceptLanguageCultureProvider()]
    if options.query_string_override:
        providers.insert(0, QueryStringCultureProvider())
    return providers


class LocaleResolver:
    """Pick the culture for a request; always returns a supported locale."""

    def __init__(self, options: LocalizationOptions, providers: Sequence[CultureProvider] | None = None):
        self.options = options
        self.providers: tuple[CultureProvider, ...] = tuple(
            providers if providers is not None else default_providers(options)
        )

    @property
    def default_culture(self) -> RequestCulture:
        return RequestCulture.single(self.options.default)

    def match(self, candidate: RequestCulture | None) -> RequestCulture | None:
        """Map a candidate onto the supported spelling.

        Culture and UI culture are matched on their own; an unsupported half
        takes the default locale. Returns None when neither half is supported.
        """
        if candidate is None:
            return None
        culture = match_supported_locale(candidate.culture, self.options.supported)
        ui_culture = match_supported_locale(candidate.ui_culture, self.options.supported)
        if culture is None and ui_culture is None:
            return None
        return RequestCulture(
            culture=culture or self.options.default,
            ui_culture=ui_culture or self.options.default,
        )

    def resolve(self, request: HTTPConnection) -> RequestCulture:
        for provider in self.providers:
            candidate = provider(request, self.options)
            matched = self.match(candidate)
            if matched is not None:
                return matched
            if candidate is not None:
                logger.debug(
                    "Ignoring unsupported culture from %s provider: %s/%s",
                    provider.name,
                    candidate.culture,
                    candidate.ui_culture,
                )
        return self.default_culture

    def resolve_locale(self, request: HTTPConnection) -> str:
        return self.resolve(request).culture
