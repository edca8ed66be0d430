"""Serve HTML content fragments from the configured content directory."""

from __future__ import annotations

from pathlib import Path

from flask import Blueprint, abort, send_from_directory
from werkzeug.security import safe_join

from notfound.backend.app.content_helper import get_extension

blueprint = Blueprint("pages", __name__)


def _content_filename(root: Path, page_path: str) -> str:
    """Map a request path onto ``<page>.html`` or ``<page>/index.html``."""

    relative = page_path.strip("/") or "index"
    resolved = safe_join(str(root), relative)
    if resolved is None:
        abort(404)
    if Path(resolved).is_dir():
        relative = f"{relative}/index"
    return f"{relative}.html"


@blueprint.get("/", defaults={"page_path": ""})
@blueprint.get("/<path:page_path>")
def view_page(page_path: str):
    """Return the content fragment stored for ``page_path``."""

    root = get_extension().content_directory
    return send_from_directory(root, _content_filename(root, page_path))
