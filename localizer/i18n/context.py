"""Current request locale, readable by anything running inside the request."""

from __future__ import annotations

from contextvars import ContextVar, Token

from localizer.i18n.culture import RequestCulture

_current_culture: ContextVar[RequestCulture | None] = ContextVar("current_culture", default=None)


def set_current_culture(request_culture: RequestCulture) -> Token:
    return _current_culture.set(request_culture)


def reset_current_culture(token: Token) -> None:
    _current_culture.reset(token)


def get_current_culture() -> RequestCulture | None:
    """Return the culture resolved for the running request, or None outside one."""
    return _current_culture.get()


def get_current_locale(default: str = "") -> str:
    """Return the UI locale of the running request."""
    current = _current_culture.get()
    return current.ui_culture if current is not None else default
