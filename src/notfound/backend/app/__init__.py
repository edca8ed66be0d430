"""Application factory for the notfound content service."""

import atexit
import logging
from pathlib import Path

import httpx
from flask import Flask, jsonify, render_template, request
from werkzeug.exceptions import BadRequest, NotFound

from notfound.backend.config import (
    AppSettings,
    ConfigurationPresetSource,
    DimensionPresetTable,
    load_dimension_presets,
    load_settings,
)
from notfound.backend.services import ContentFetcher, PathLocalizer
from notfound.backend.version import get_project_version

from .content_helper import (
    EXTENSION_KEY,
    ContentFetchError,
    NotFoundContentHelper,
    NotFoundExtension,
    RouteNotFoundError,
)
from .http import problem_response
from .routes import register_routes

# Content fragments bundled with the package; ``content_directory`` in the
# settings points elsewhere for real sites.
CONTENT_ROOT = Path(__file__).resolve().parents[2] / "content"

logger = logging.getLogger(__name__)


def _build_http_client(settings: AppSettings) -> httpx.Client:
    client = httpx.Client(
        timeout=settings.fetch.timeout_seconds,
        follow_redirects=settings.fetch.follow_redirects,
        verify=settings.fetch.verify_tls,
    )
    atexit.register(client.close)
    return client


def create_app(
    settings: AppSettings | None = None,
    presets: DimensionPresetTable | None = None,
    http_client: httpx.Client | None = None,
) -> Flask:
    """Create and configure the Flask application instance.

    ``settings`` and ``presets`` default to the YAML configuration; tests pass
    their own along with an ``http_client`` bound to a fake transport.
    """

    app = Flask(__name__)

    settings = settings or load_settings()
    preset_source = ConfigurationPresetSource(
        presets if presets is not None else load_dimension_presets()
    )
    fetcher = ContentFetcher(
        http_client or _build_http_client(settings),
        signature=settings.fetch.user_agent_signature,
    )
    localizer = PathLocalizer(
        preset_source,
        fetcher,
        support_empty_segments=settings.routing.support_empty_segment_for_dimensions,
    )
    helper = NotFoundContentHelper(localizer)
    content_directory = (
        Path(settings.content_directory).expanduser()
        if settings.content_directory
        else CONTENT_ROOT
    )

    app.extensions[EXTENSION_KEY] = NotFoundExtension(
        settings=settings,
        preset_source=preset_source,
        localizer=localizer,
        helper=helper,
        content_directory=content_directory,
    )
    app.add_template_global(helper.render, name="not_found_content")

    @app.route("/health", methods=["GET"])
    def health_check():
        """Simple health check endpoint for infrastructure monitoring."""

        payload = {
            "status": "ok",
            "version": get_project_version(),
            "dimensions": list(preset_source.get_all_presets().names),
            "support_empty_segments": localizer.support_empty_segments,
        }
        return jsonify(payload)

    register_routes(app)

    @app.errorhandler(BadRequest)
    def handle_bad_request(error: BadRequest):
        """Return consistent JSON responses for malformed requests."""

        message = error.description or "Invalid request"
        return problem_response("bad_request", status=400, message=message).to_response()

    @app.errorhandler(NotFound)
    def handle_not_found(error: NotFound):
        """Render localized fallback content, or the generic page when it is missing."""

        if request.path.startswith("/api/"):
            return problem_response(
                "not_found", status=404, message=error.description
            ).to_response()

        try:
            return render_template("404.html"), 404
        except RouteNotFoundError as exc:
            logger.warning("Localized not found page missing: %s", exc)
        except ContentFetchError as exc:
            logger.warning("Could not fetch not found page: %s", exc, exc_info=True)
        return render_template("generic_404.html"), 404

    return app
