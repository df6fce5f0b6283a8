from fastapi import Request

from localizer.config import LocalizationOptions
from localizer.i18n.culture import RequestCulture


def get_localization_options(request: Request) -> LocalizationOptions:
    """Options built in create_app() and stored on the application state."""
    return request.app.state.localization


def get_request_culture(request: Request) -> RequestCulture:
    """Culture resolved by RequestLocalizationMiddleware for this request."""
    culture = getattr(request.state, "culture", None)
    if culture is None:
        return RequestCulture.single(get_localization_options(request).default)
    return culture
