"""
i18n package

Locale helpers, the culture cookie format, per-request locale resolution
and the current-locale context value.
"""

from .context import get_current_culture, get_current_locale
from .culture import (
    CULTURE_COOKIE_NAME,
    RequestCulture,
    encode_cookie_value,
    make_cookie_value,
    parse_cookie_value,
)
from .locale import (
    LANGUAGE_NAMES,
    RTL_LOCALES,
    get_language_info,
    is_rtl_locale,
    match_supported_locale,
    parse_accept_language,
)
from .resolver import LocaleResolver

__all__ = [
    "CULTURE_COOKIE_NAME",
    "LANGUAGE_NAMES",
    "RTL_LOCALES",
    "LocaleResolver",
    "RequestCulture",
    "encode_cookie_value",
    "get_current_culture",
    "get_current_locale",
    "get_language_info",
    "is_rtl_locale",
    "make_cookie_value",
    "match_supported_locale",
    "parse_accept_language",
    "parse_cookie_value",
]
