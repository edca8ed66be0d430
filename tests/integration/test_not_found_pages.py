"""End-to-end coverage for localized not found pages."""

from __future__ import annotations

import logging
from http import HTTPStatus
from pathlib import Path

import httpx
import pytest
from flask.testing import FlaskClient

from notfound.backend.app import create_app
from notfound.backend.config import AppSettings, RoutingSettings

GERMAN_NOT_FOUND = "Diese Seite wurde leider nicht gefunden"
ENGLISH_NOT_FOUND = "Sorry, we could not find that page"
GENERIC_NOT_FOUND = "The page you requested does not exist."


def test_existing_pages_are_served(client: FlaskClient) -> None:
    response = client.get("/de/")

    assert response.status_code == HTTPStatus.OK
    assert "Willkommen" in response.get_data(as_text=True)


def test_missing_page_renders_localized_content(client: FlaskClient) -> None:
    response = client.get("/de/missing")

    assert response.status_code == HTTPStatus.NOT_FOUND
    body = response.get_data(as_text=True)
    assert GERMAN_NOT_FOUND in body
    assert "<main>" in body


def test_missing_page_without_dimension_uses_default_language(client: FlaskClient) -> None:
    response = client.get("/about")

    assert response.status_code == HTTPStatus.NOT_FOUND
    assert ENGLISH_NOT_FOUND in response.get_data(as_text=True)


def test_unknown_segment_with_empty_segment_support_falls_back_to_generic(make_app) -> None:
    app = make_app(
        settings=AppSettings(
            routing=RoutingSettings(support_empty_segment_for_dimensions=True)
        )
    )

    response = app.test_client().get("/xx/missing")

    assert response.status_code == HTTPStatus.NOT_FOUND
    body = response.get_data(as_text=True)
    assert GENERIC_NOT_FOUND in body
    assert ENGLISH_NOT_FOUND not in body


def test_missing_localized_page_falls_back_to_generic(
    make_app, tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    (tmp_path / "de").mkdir()
    (tmp_path / "de" / "index.html").write_text("<h1>Start</h1>", encoding="utf-8")
    app = make_app(settings=AppSettings(content_directory=str(tmp_path)))

    with caplog.at_level(logging.WARNING):
        response = app.test_client().get("/de/missing")

    assert response.status_code == HTTPStatus.NOT_FOUND
    assert GENERIC_NOT_FOUND in response.get_data(as_text=True)
    assert "http://localhost/de/404" in caplog.text


def test_internal_requests_receive_empty_not_found_page(client: FlaskClient) -> None:
    response = client.get("/de/missing", headers={"User-Agent": "NotFound/0.1"})

    assert response.status_code == HTTPStatus.NOT_FOUND
    body = response.get_data(as_text=True)
    assert GERMAN_NOT_FOUND not in body
    assert GENERIC_NOT_FOUND not in body


def test_transport_failure_falls_back_to_generic(
    language_presets, caplog: pytest.LogCaptureFixture
) -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    app = create_app(
        settings=AppSettings(),
        presets=language_presets,
        http_client=httpx.Client(transport=httpx.MockTransport(refuse)),
    )
    app.config.update(TESTING=True)

    with caplog.at_level(logging.WARNING):
        response = app.test_client().get("/de/missing")

    assert response.status_code == HTTPStatus.NOT_FOUND
    assert GENERIC_NOT_FOUND in response.get_data(as_text=True)
    assert "Could not fetch not found page" in caplog.text


def test_unknown_api_paths_return_json_problem(client: FlaskClient) -> None:
    response = client.get("/api/v1/unknown")

    assert response.status_code == HTTPStatus.NOT_FOUND
    assert response.get_json()["error"] == "not_found"
