"""
Culture & i18n Routes

Two APIRouter objects exported from this module:

culture_router  (no prefix)
    GET    /Culture/Set?culture=<id>&redirectUri=<path>  → persist culture, 302 back

i18n_router  (prefix: /api/v1/i18n)
    GET    /languages                                    → supported languages
    GET    /current                                      → culture of this request
"""

import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import RedirectResponse
from pydantic import BaseModel

from localizer.config import LocalizationOptions
from localizer.dependencies import get_localization_options, get_request_culture
from localizer.i18n.culture import RequestCulture
from localizer.i18n.locale import get_language_info, is_rtl_locale
from localizer.services.culture_service import set_culture

culture_router = APIRouter(tags=["Culture"])
i18n_router = APIRouter(tags=["Internationalization"])
logger = logging.getLogger(__name__)


# ── Pydantic schemas ───────────────────────────────────────────────────────────


class LanguageInfo(BaseModel):
    code: str
    name: str
    is_rtl: bool


class CurrentCultureResponse(BaseModel):
    culture: str
    ui_culture: str
    is_rtl: bool


# ── Culture switching ──────────────────────────────────────────────────────────


@culture_router.get("/Culture/Set", response_class=RedirectResponse)
async def set_request_culture(
    culture: str | None = Query(default=None),
    redirect_uri: str | None = Query(default=None, alias="redirectUri"),
    options: LocalizationOptions = Depends(get_localization_options),
) -> RedirectResponse:
    """Store the chosen culture in the culture cookie and return to redirectUri."""
    return set_culture(culture, redirect_uri, options)


# ── i18n metadata ──────────────────────────────────────────────────────────────


@i18n_router.get("/languages", response_model=list[LanguageInfo])
async def list_supported_languages(
    options: LocalizationOptions = Depends(get_localization_options),
) -> list[LanguageInfo]:
    """List supported languages in preference order; the first is the default."""
    return [LanguageInfo(**get_language_info(code)) for code in options.supported]


@i18n_router.get("/current", response_model=CurrentCultureResponse)
async def get_current_culture(
    request_culture: RequestCulture = Depends(get_request_culture),
) -> CurrentCultureResponse:
    return CurrentCultureResponse(
        culture=request_culture.culture,
        ui_culture=request_culture.ui_culture,
        is_rtl=is_rtl_locale(request_culture.ui_culture),
    )
