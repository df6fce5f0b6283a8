import logging
from pathlib import Path

import uvicorn
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from starlette.middleware import Middleware
from starlette.middleware.httpsredirect import HTTPSRedirectMiddleware

from localizer.config import LocalizationOptions, Settings, settings as default_settings
from localizer.exception_handlers import register_exception_handlers
from localizer.i18n.context import get_current_locale
from localizer.middleware.language import RequestLocalizationMiddleware
from localizer.middleware.logging import StructuredLoggingMiddleware, setup_structured_logging
from localizer.middleware.security_headers import SecurityHeadersMiddleware
from localizer.routes.culture import culture_router, i18n_router

logger = logging.getLogger("localizer")


def build_pipeline(settings: Settings, options: LocalizationOptions) -> list[Middleware]:
    """Return the request pipeline, outermost first.

    1. access logging (sees every response, including redirects and errors)
    2. HTTPS redirection (outside development unless overridden)
    3. security headers / HSTS (HSTS outside development)
    4. request localization (last, so handlers always see a resolved locale)
    """
    pipeline = [Middleware(StructuredLoggingMiddleware)]
    if settings.use_https_redirect:
        pipeline.append(Middleware(HTTPSRedirectMiddleware))
    pipeline.append(
        Middleware(
            SecurityHeadersMiddleware,
            enable_hsts=not settings.is_development,
            hsts_max_age=settings.hsts_max_age,
        )
    )
    pipeline.append(Middleware(RequestLocalizationMiddleware, options=options))
    return pipeline


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create the FastAPI application."""
    settings = settings or default_settings
    options = LocalizationOptions.from_settings(settings)

    app = FastAPI(
        title=settings.app_name,
        description="Per-request locale resolution and culture switching",
        debug=settings.debug,
        version=settings.app_version,
        middleware=build_pipeline(settings, options),
    )
    app.state.localization = options
    app.state.settings = settings

    register_exception_handlers(app)

    app.include_router(culture_router)
    app.include_router(i18n_router, prefix="/api/v1/i18n")

    @app.get("/health", tags=["Health"])
    async def health():
        return {"status": "ok"}

    @app.get("/", tags=["Root"])
    async def root():
        return {
            "message": f"Welcome to {settings.app_name}",
            "locale": get_current_locale(options.default),
        }

    static_dir = Path(settings.static_dir)
    if static_dir.is_dir():
        app.mount("/static", StaticFiles(directory=static_dir), name="static")

    logger.info(
        f"Running in {settings.environment} mode; supported locales: {', '.join(options.supported)} "
        f"(default {options.default})"
    )
    return app


setup_structured_logging(log_level=default_settings.log_level, json_format=default_settings.log_json)
app = create_app()


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=default_settings.debug)
