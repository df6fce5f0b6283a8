"""
Pytest configuration and fixtures for Localizer tests
"""

import os
import sys

import pytest
from fastapi.testclient import TestClient
from starlette.requests import Request

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))  # noqa: PTH100, PTH118, PTH120

from localizer.config import LocalizationOptions, Settings  # noqa: E402
from main import create_app  # noqa: E402


def make_settings(**overrides) -> Settings:
    """Settings independent of the developer's environment and .env file."""
    values = {
        "environment": "development",
        "supported_languages": ["en", "sv"],
        "static_dir": "does-not-exist",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_request(
    headers: dict[str, str] | None = None,
    cookies: dict[str, str] | None = None,
    query_string: str = "",
    path: str = "/",
) -> Request:
    """Build a bare Starlette request carrying the given carriers."""
    raw_headers = [(k.lower().encode("latin-1"), v.encode("latin-1")) for k, v in (headers or {}).items()]
    if cookies:
        cookie_header = "; ".join(f"{name}={value}" for name, value in cookies.items())
        raw_headers.append((b"cookie", cookie_header.encode("latin-1")))
    scope = {
        "type": "http",
        "method": "GET",
        "path": path,
        "query_string": query_string.encode("latin-1"),
        "headers": raw_headers,
    }
    return Request(scope)


@pytest.fixture
def options() -> LocalizationOptions:
    return LocalizationOptions(supported=("en", "sv"))


@pytest.fixture
def app():
    return create_app(make_settings())


@pytest.fixture
def client(app):
    with TestClient(app, follow_redirects=False) as test_client:
        yield test_client
