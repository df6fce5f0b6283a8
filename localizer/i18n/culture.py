"""
Request culture and the persisted culture cookie.

The cookie stores one value for both the formatting culture and the UI
culture in the form ``c=<culture>|uic=<ui_culture>``, percent-encoded on
the wire so it never needs cookie quoting.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from urllib.parse import quote, unquote

CULTURE_COOKIE_NAME = ".AspNetCore.Culture"
CULTURE_COOKIE_PATH = "/"

_CULTURE_PREFIX = "c="
_UI_CULTURE_PREFIX = "uic="
_SEPARATOR = "|"


@dataclass(frozen=True)
class RequestCulture:
    """Formatting culture and UI culture selected for a request."""

    culture: str
    ui_culture: str

    @classmethod
    def single(cls, locale: str) -> RequestCulture:
        return cls(culture=locale, ui_culture=locale)


def make_cookie_value(request_culture: RequestCulture) -> str:
    """Encode a culture pair as the decoded cookie value, e.g. ``c=sv|uic=sv``."""
    return (
        f"{_CULTURE_PREFIX}{request_culture.culture}"
        f"{_SEPARATOR}"
        f"{_UI_CULTURE_PREFIX}{request_culture.ui_culture}"
    )


def encode_cookie_value(request_culture: RequestCulture) -> str:
    """Cookie value as written into ``Set-Cookie``."""
    return quote(make_cookie_value(request_culture), safe="")


def parse_cookie_value(value: str | None) -> RequestCulture | None:
    """Decode a cookie value; returns None when it is missing or malformed.

    Both the percent-encoded and the plain form are accepted. If one of the
    two components is empty the other is used for both.
    """
    if not value:
        return None

    parts = unquote(value).split(_SEPARATOR)
    if len(parts) != 2:
        return None

    culture_part, ui_culture_part = parts[0].strip(), parts[1].strip()
    if not culture_part.startswith(_CULTURE_PREFIX) or not ui_culture_part.startswith(_UI_CULTURE_PREFIX):
        return None

    culture = culture_part[len(_CULTURE_PREFIX):]
    ui_culture = ui_culture_part[len(_UI_CULTURE_PREFIX):]

    if not culture and not ui_culture:
        return None
    if not culture:
        culture = ui_culture
    elif not ui_culture:
        ui_culture = culture

    return RequestCulture(culture=culture, ui_culture=ui_culture)


def cookie_expiry(now: datetime | None = None) -> datetime:
    """Return ``now`` plus one calendar year (Feb 29 rolls back to Feb 28)."""
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    else:
        now = now.astimezone(timezone.utc)
    try:
        return now.replace(year=now.year + 1)
    except ValueError:
        return now.replace(year=now.year + 1, day=28)
