"""Test configuration utilities and shared fixtures."""

import sys
from pathlib import Path

# Ensure the ``src`` directory is importable when tests are executed without an
# editable install.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import httpx  # noqa: E402
import pytest  # noqa: E402
from flask import Flask  # noqa: E402
from flask.testing import FlaskClient  # noqa: E402

from notfound.backend.app import create_app  # noqa: E402
from notfound.backend.config import (  # noqa: E402
    AppSettings,
    DimensionPresetTable,
    parse_dimension_presets,
)

LANGUAGE_PRESETS = {
    "dimensions": {
        "language": {
            "defaultPreset": "en",
            "presets": {
                "en": {"uriSegment": "en", "label": "English"},
                "de": {"uriSegment": "de", "label": "Deutsch"},
            },
        }
    }
}

LANGUAGE_AND_COUNTRY_PRESETS = {
    "dimensions": {
        "language": LANGUAGE_PRESETS["dimensions"]["language"],
        "country": {
            "defaultPreset": "us",
            "presets": {
                "us": {"uriSegment": "us"},
                "fr": {"uriSegment": "fr"},
            },
        },
    }
}


@pytest.fixture()
def language_presets() -> DimensionPresetTable:
    return parse_dimension_presets(LANGUAGE_PRESETS)


@pytest.fixture()
def language_and_country_presets() -> DimensionPresetTable:
    return parse_dimension_presets(LANGUAGE_AND_COUNTRY_PRESETS)


def build_self_served_app(
    settings: AppSettings | None = None,
    presets: DimensionPresetTable | None = None,
) -> Flask:
    """Create an app whose internal requests are answered by the app itself."""

    holder: dict[str, Flask] = {}

    def dispatch(environ, start_response):
        return holder["app"](environ, start_response)

    http_client = httpx.Client(transport=httpx.WSGITransport(app=dispatch))
    application = create_app(
        settings=settings or AppSettings(),
        presets=presets if presets is not None else parse_dimension_presets(LANGUAGE_PRESETS),
        http_client=http_client,
    )
    application.config.update(TESTING=True)
    holder["app"] = application
    return application


@pytest.fixture()
def app() -> Flask:
    """Return a configured Flask application for integration tests."""

    return build_self_served_app()


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Provide a test client bound to the configured Flask app."""

    return app.test_client()


@pytest.fixture()
def make_app():
    """Return the factory for self-served applications with custom configuration."""

    return build_self_served_app
