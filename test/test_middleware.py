"""
Tests for middleware modules
"""

import inspect
import json
import logging

from conftest import make_settings
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient
from starlette.middleware.base import BaseHTTPMiddleware

from localizer.config import LocalizationOptions
from localizer.i18n.context import get_current_culture, get_current_locale
from localizer.i18n.culture import CULTURE_COOKIE_NAME
from localizer.middleware.language import RequestLocalizationMiddleware
from localizer.middleware.logging import (
    RequestIdFilter,
    StructuredFormatter,
    StructuredLoggingMiddleware,
    get_request_id,
    request_id_var,
)
from localizer.middleware.security_headers import SecurityHeadersMiddleware
from main import build_pipeline, create_app


def localized_app(options: LocalizationOptions) -> FastAPI:
    app = FastAPI()

    @app.get("/echo")
    async def echo(request: Request):
        current = get_current_culture()
        return {
            "state_locale": request.state.locale,
            "state_ui_locale": request.state.ui_locale,
            "context_locale": get_current_locale(),
            "context_culture": current.culture if current else None,
        }

    app.add_middleware(RequestLocalizationMiddleware, options=options)
    return app


class TestRequestLocalizationMiddleware:
    """Test request localization middleware"""

    def test_is_base_http_middleware(self):
        assert issubclass(RequestLocalizationMiddleware, BaseHTTPMiddleware)
        assert inspect.iscoroutinefunction(RequestLocalizationMiddleware.dispatch)

    def test_publishes_default_locale(self, options):
        client = TestClient(localized_app(options))

        data = client.get("/echo").json()

        assert data == {
            "state_locale": "en",
            "state_ui_locale": "en",
            "context_locale": "en",
            "context_culture": "en",
        }

    def test_publishes_cookie_locale(self, options):
        client = TestClient(localized_app(options))
        client.cookies.set(CULTURE_COOKIE_NAME, "c%3Dsv%7Cuic%3Dsv")

        data = client.get("/echo", headers={"Accept-Language": "en"}).json()

        assert data["state_locale"] == "sv"
        assert data["context_locale"] == "sv"

    def test_publishes_accept_language_locale(self, options):
        client = TestClient(localized_app(options))

        data = client.get("/echo", headers={"Accept-Language": "sv-SE,en;q=0.5"}).json()

        assert data["state_ui_locale"] == "sv"

    def test_context_cleared_after_request(self, options):
        client = TestClient(localized_app(options))
        client.get("/echo", headers={"Accept-Language": "sv"})

        assert get_current_culture() is None
        assert get_current_locale("none") == "none"

    def test_content_language_header_off_by_default(self, options):
        client = TestClient(localized_app(options))

        response = client.get("/echo", headers={"Accept-Language": "sv"})

        assert "content-language" not in response.headers

    def test_content_language_header_when_enabled(self):
        options = LocalizationOptions(supported=("en", "sv"), apply_content_language=True)
        client = TestClient(localized_app(options))

        response = client.get("/echo", headers={"Accept-Language": "sv"})

        assert response.headers["content-language"] == "sv"


class TestSecurityHeadersMiddleware:
    """Test security headers middleware"""

    def _app(self, **kwargs) -> FastAPI:
        app = FastAPI()

        @app.get("/test")
        async def test_route():
            return {"message": "test"}

        app.add_middleware(SecurityHeadersMiddleware, **kwargs)
        return app

    def test_basic_headers_added(self):
        client = TestClient(self._app())
        response = client.get("/test")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["Referrer-Policy"] == "strict-origin-when-cross-origin"

    def test_hsts_only_over_https(self):
        app = self._app()

        plain = TestClient(app).get("/test")
        secure = TestClient(app, base_url="https://testserver").get("/test")

        assert "Strict-Transport-Security" not in plain.headers
        assert secure.headers["Strict-Transport-Security"] == "max-age=2592000"

    def test_hsts_skipped_for_localhost(self):
        client = TestClient(self._app(), base_url="https://localhost")

        assert "Strict-Transport-Security" not in client.get("/test").headers

    def test_hsts_options(self):
        app = self._app(hsts_max_age=60, hsts_include_subdomains=True, hsts_preload=True)
        client = TestClient(app, base_url="https://testserver")

        assert client.get("/test").headers["Strict-Transport-Security"] == "max-age=60; includeSubDomains; preload"

    def test_hsts_disabled(self):
        client = TestClient(self._app(enable_hsts=False), base_url="https://testserver")

        assert "Strict-Transport-Security" not in client.get("/test").headers


class TestPipeline:
    """Test the composed application pipeline"""

    def test_development_pipeline_order(self):
        settings = make_settings()
        options = LocalizationOptions.from_settings(settings)

        classes = [m.cls for m in build_pipeline(settings, options)]

        assert classes == [StructuredLoggingMiddleware, SecurityHeadersMiddleware, RequestLocalizationMiddleware]

    def test_production_redirects_to_https(self):
        app = create_app(make_settings(environment="production"))
        client = TestClient(app, follow_redirects=False)

        response = client.get("/health")

        assert response.status_code in (307, 308)
        assert response.headers["location"].startswith("https://testserver/health")

    def test_production_sends_hsts(self):
        app = create_app(make_settings(environment="production", hsts_max_age=123))
        client = TestClient(app, base_url="https://testserver")

        response = client.get("/health")

        assert response.status_code == 200
        assert response.headers["Strict-Transport-Security"] == "max-age=123"

    def test_https_redirect_can_be_disabled(self):
        app = create_app(make_settings(environment="production", https_redirect=False))
        client = TestClient(app, follow_redirects=False)

        assert client.get("/health").status_code == 200

    def test_localization_options_on_app_state(self, app):
        assert app.state.localization.supported == ("en", "sv")

    def test_static_files_mounted_when_directory_exists(self, tmp_path):
        (tmp_path / "site.css").write_text("body {}")
        app = create_app(make_settings(static_dir=str(tmp_path)))
        client = TestClient(app)

        response = client.get("/static/site.css")

        assert response.status_code == 200
        assert response.text == "body {}"

    def test_unknown_route_uses_error_envelope(self, client):
        response = client.get("/nope")

        assert response.status_code == 404
        assert response.json()["error"]["error_code"] == "RESOURCE_NOT_FOUND"


class TestStructuredLogging:
    """Test structured logging middleware and formatter"""

    def test_request_id_header_echoed(self, client):
        response = client.get("/", headers={"X-Request-ID": "abc-123"})

        assert response.headers["X-Request-ID"] == "abc-123"

    def test_request_id_generated(self, client):
        response = client.get("/")

        assert len(response.headers["X-Request-ID"]) == 36

    def test_access_log_contains_locale(self, client, caplog):
        caplog.set_level(logging.INFO, logger="localizer.access")

        client.get("/api/v1/i18n/current", headers={"Accept-Language": "sv"})

        records = [r for r in caplog.records if r.name == "localizer.access"]
        assert records
        assert records[-1].locale == "sv"
        assert records[-1].status_code == 200

    def test_health_not_logged(self, client, caplog):
        caplog.set_level(logging.INFO, logger="localizer.access")

        client.get("/health")

        assert not [r for r in caplog.records if r.name == "localizer.access"]

    def test_rejected_redirect_logged_as_warning(self, client, caplog):
        caplog.set_level(logging.INFO, logger="localizer.access")

        client.get("/Culture/Set", params={"culture": "sv", "redirectUri": "//evil.example"})

        records = [r for r in caplog.records if r.name == "localizer.access"]
        assert records[-1].levelno == logging.WARNING

    def test_formatter_outputs_json(self):
        record = logging.LogRecord("localizer", logging.INFO, __file__, 1, "culture set", None, None)
        record.locale = "sv"
        record.path = "/Culture/Set"
        RequestIdFilter().filter(record)

        data = json.loads(StructuredFormatter().format(record))

        assert data["message"] == "culture set"
        assert data["locale"] == "sv"
        assert data["path"] == "/Culture/Set"
        assert data["level"] == "INFO"

    def test_request_id_filter_reads_context(self):
        token = request_id_var.set("req-1")
        try:
            record = logging.LogRecord("x", logging.INFO, __file__, 1, "m", None, None)
            RequestIdFilter().filter(record)
            assert record.request_id == "req-1"
            assert get_request_id() == "req-1"
        finally:
            request_id_var.reset(token)
