"""
Locale helpers

Pure functions for BCP 47 locale handling:
- Matching a requested tag against the supported locale set
- Accept-Language header parsing with quality-value (q=) support
- RTL (right-to-left) language detection and language metadata lookup
"""

from __future__ import annotations

import math
from collections.abc import Sequence

# ── Constants ─────────────────────────────────────────────────────────────────

# BCP 47 base language codes whose scripts read right-to-left
RTL_LOCALES: frozenset[str] = frozenset({"ar", "he", "fa", "ur", "yi", "ku"})

# Native names for locales the host knows how to label
LANGUAGE_NAMES: dict[str, str] = {
    "en": "English",
    "sv": "Svenska",
    "da": "Dansk",
    "nb": "Norsk bokmål",
    "fi": "Suomi",
    "de": "Deutsch",
    "fr": "Français",
    "es": "Español",
    "ar": "العربية",
    "ja": "日本語",
}


# ── Public helpers ────────────────────────────────────────────────────────────


def base_language(locale: str) -> str:
    """Return the lower-cased primary language subtag ("sv-SE" → "sv")."""
    return locale.replace("_", "-").split("-")[0].strip().lower()


def match_supported_locale(
    tag: str | None,
    supported: Sequence[str],
    fallback_to_parent: bool = True,
) -> str | None:
    """Return the entry of ``supported`` that ``tag`` selects, or None.

    Matching is case-insensitive and returns the supported spelling. When
    ``fallback_to_parent`` is set, a regional tag such as "sv-FI" falls back
    to its base language "sv" if only the latter is supported.
    """
    if not tag:
        return None
    tag_lower = tag.strip().replace("_", "-").lower()
    if not tag_lower:
        return None

    supported_lower = [s.lower() for s in supported]
    if tag_lower in supported_lower:
        return supported[supported_lower.index(tag_lower)]

    if fallback_to_parent:
        base = base_language(tag_lower)
        if base in supported_lower:
            return supported[supported_lower.index(base)]

    return None


def _parse_quality(params: list[str]) -> float | None:
    """Return the q-value among ``params`` (1.0 when absent), or None if it is malformed.

    A valid weight is a finite float in [0, 1].
    """
    for param in params:
        name, sep, value = param.strip().partition("=")
        if name.strip().lower() != "q":
            continue
        if not sep:
            return None
        try:
            q = float(value.strip())
        except ValueError:
            return None
        if not math.isfinite(q) or not 0.0 <= q <= 1.0:
            return None
        return q
    return 1.0


def parse_accept_language(header: str, supported: Sequence[str]) -> str | None:
    """Parse an Accept-Language header and return the best matching locale.

    Algorithm:
    1. Split header into tags with optional parameters; the q parameter may
       appear anywhere among them (default q=1.0).
    2. Drop entries whose q-value is malformed or outside [0, 1], wildcards,
       and tags with q=0 (explicitly not acceptable).
    3. Sort by q-value descending.
    4. For each tag, try exact match in `supported`, then base-language match.
    5. Return the first match or None if nothing matches.

    Args:
        header:    Value of the Accept-Language HTTP header, e.g.
                   "sv-SE,sv;q=0.9,en-US;q=0.8,en;q=0.7".
        supported: Ordered list of BCP 47 locale codes the server supports.

    Returns:
        The best matching locale from `supported`, or None.
    """
    if not header:
        return None

    # Parse "tag;param;q=value" entries
    weighted: list[tuple[float, str]] = []
    for part in header.split(","):
        tag, *params = part.split(";")
        tag = tag.strip()
        if not tag or tag == "*":
            continue
        q = _parse_quality(params)
        if q is None or q <= 0:
            continue
        weighted.append((q, tag))

    # Stable sort keeps header order among equal q-values
    weighted.sort(key=lambda x: x[0], reverse=True)

    for _, tag in weighted:
        match = match_supported_locale(tag, supported)
        if match is not None:
            return match

    return None


def is_rtl_locale(locale: str) -> bool:
    """Return True when the given BCP 47 locale is right-to-left.

    Compares only the base language tag, so both "ar" and "ar-SA" are
    identified as RTL.
    """
    return base_language(locale) in RTL_LOCALES


def get_language_info(locale: str) -> dict[str, str | bool]:
    """Return a metadata dict describing the given locale.

    Returns:
        Dict with keys: ``code`` (str), ``name`` (str), ``is_rtl`` (bool).
    """
    name = LANGUAGE_NAMES.get(locale) or LANGUAGE_NAMES.get(base_language(locale), locale)
    return {
        "code": locale,
        "name": name,
        "is_rtl": is_rtl_locale(locale),
    }
