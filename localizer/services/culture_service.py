"""
Culture switching service

Validates a culture switch request, persists the chosen culture in the
culture cookie and builds the redirect back to the originating page.
"""

import logging
from datetime import datetime
from urllib.parse import urlsplit

from fastapi import status
from fastapi.responses import RedirectResponse

from localizer.config import LocalizationOptions
from localizer.exceptions import InvalidRedirectTargetError, UnsupportedLocaleError
from localizer.i18n.culture import (
    CULTURE_COOKIE_NAME,
    CULTURE_COOKIE_PATH,
    RequestCulture,
    cookie_expiry,
    encode_cookie_value,
)
from localizer.i18n.locale import match_supported_locale

logger = logging.getLogger(__name__)


def is_local_url(url: str | None) -> bool:
    """Return True when ``url`` is a path on this host.

    Accepts "/" and "/path?query#fragment". Rejects absolute URLs,
    protocol-relative "//host" and the browser-normalized "/\\host", and
    anything containing control characters or backslashes.
    """
    if not url or not url.startswith("/"):
        return False
    if any(ord(ch) < 0x20 or ord(ch) == 0x7F for ch in url):
        return False
    if "\\" in url:
        return False
    if len(url) > 1 and url[1] == "/":
        return False
    parts = urlsplit(url)
    return not parts.scheme and not parts.netloc


def resolve_requested_culture(culture: str, options: LocalizationOptions) -> str:
    """Map ``culture`` onto a supported locale according to the configured policy."""
    matched = match_supported_locale(culture, options.supported)
    if matched is not None:
        return matched

    if options.unsupported_culture_policy == "fallback":
        logger.info(f"Unsupported culture '{culture}' replaced by default '{options.default}'")
        return options.default

    logger.warning(f"Rejected unsupported culture '{culture}'")
    raise UnsupportedLocaleError(culture, options.supported)


def set_culture(
    culture: str | None,
    redirect_uri: str | None,
    options: LocalizationOptions,
    now: datetime | None = None,
) -> RedirectResponse:
    """Persist ``culture`` in the culture cookie and redirect to ``redirect_uri``.

    The redirect target is validated before anything else so a rejected
    request never writes a cookie. When ``culture`` is empty the cookie is
    left untouched and only the redirect is returned.

    Raises:
        InvalidRedirectTargetError: redirect_uri is missing or not local
        UnsupportedLocaleError: culture is unsupported and the policy is "reject"
    """
    if not is_local_url(redirect_uri):
        logger.warning(f"Rejected non-local redirect target: {redirect_uri!r}")
        raise InvalidRedirectTargetError(redirect_uri)

    response = RedirectResponse(url=redirect_uri, status_code=status.HTTP_302_FOUND)

    if not culture:
        return response

    locale = resolve_requested_culture(culture, options)
    response.set_cookie(
        key=CULTURE_COOKIE_NAME,
        value=encode_cookie_value(RequestCulture.single(locale)),
        path=CULTURE_COOKIE_PATH,
        expires=cookie_expiry(now),
    )
    logger.info(f"Culture set to '{locale}', redirecting to {redirect_uri}")
    return response
