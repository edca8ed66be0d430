"""Template helper inserting localized fallback content into error pages.

Templates call ``not_found_content()`` (optionally with a path other than
``"404"``). The helper asks :class:`PathLocalizer` for the page under the
current request's dimension prefix and returns its body as markup.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from flask import Flask, current_app, request
from markupsafe import Markup

from notfound.backend.config import AppSettings, ConfigurationPresetSource
from notfound.backend.services import (
    NotFound,
    PathLocalizer,
    RequestContext,
    Skipped,
    TransportFailure,
)

DEFAULT_PATH = "404"
EXTENSION_KEY = "notfound"


class RouteNotFoundError(LookupError):
    """The localized fallback page itself could not be found."""

    def __init__(self, uri: str) -> None:
        super().__init__(f'Uri with path "{uri}" could not be found.')
        self.uri = uri


class ContentFetchError(RuntimeError):
    """The fallback page could not be requested at all."""

    def __init__(self, uri: str) -> None:
        super().__init__(f'Requesting "{uri}" failed.')
        self.uri = uri


class NotFoundContentHelper:
    """Callable exposed to Jinja as ``not_found_content``."""

    def __init__(self, localizer: PathLocalizer) -> None:
        self._localizer = localizer

    def render(self, path: str = DEFAULT_PATH, context: RequestContext | None = None) -> str:
        if context is None:
            context = RequestContext.from_request(request)

        result = self._localizer.resolve_and_fetch(path, context)
        if isinstance(result, Skipped):
            return ""
        if isinstance(result, NotFound):
            raise RouteNotFoundError(result.uri)
        if isinstance(result, TransportFailure):
            raise ContentFetchError(result.uri) from result.cause
        return Markup(result.body)


@dataclass(frozen=True)
class NotFoundExtension:
    """Services registered on the Flask app under ``app.extensions``."""

    settings: AppSettings
    preset_source: ConfigurationPresetSource
    localizer: PathLocalizer
    helper: NotFoundContentHelper
    content_directory: Path


def get_extension(app: Flask | None = None) -> NotFoundExtension:
    """Return the services registered by :func:`create_app`."""

    target = app or current_app
    return target.extensions[EXTENSION_KEY]


__all__ = [
    "ContentFetchError",
    "DEFAULT_PATH",
    "EXTENSION_KEY",
    "NotFoundContentHelper",
    "NotFoundExtension",
    "RouteNotFoundError",
    "get_extension",
]
