"""Expose the dimension preset table and path resolution to API consumers."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, jsonify, request

from notfound.backend.app.content_helper import DEFAULT_PATH, get_extension
from notfound.backend.app.http import problem_response
from notfound.backend.config import DimensionPreset

blueprint = Blueprint("dimensions", __name__, url_prefix="/api/v1/dimensions")


def _serialise_dimension(dimension: DimensionPreset) -> dict[str, Any]:
    return {
        "name": dimension.name,
        "label": dimension.label,
        "default_preset": dimension.default_preset,
        "presets": [
            {
                "id": preset_id,
                "uri_segment": preset.uri_segment,
                "label": preset.label,
                "values": list(preset.values),
            }
            for preset_id, preset in dimension.presets.items()
        ],
    }


@blueprint.get("")
def list_dimensions():
    """Return configured dimensions in URI segment order."""

    extension = get_extension()
    table = extension.preset_source.get_all_presets()
    payload = {
        "support_empty_segments": extension.localizer.support_empty_segments,
        "dimensions": [_serialise_dimension(dimension) for _, dimension in table.items()],
    }
    return jsonify(payload), 200


@blueprint.get("/resolve")
def resolve_path():
    """Show which path ``not_found_content`` would fetch for a request path."""

    request_path = request.args.get("request_path")
    if request_path is None:
        return problem_response(
            "bad_request",
            status=400,
            message="Query parameter 'request_path' is required",
        ).to_response()

    candidate_path = request.args.get("path") or DEFAULT_PATH
    resolved_path = get_extension().localizer.resolve_path(candidate_path, request_path)
    return (
        jsonify(
            {
                "request_path": request_path,
                "candidate_path": candidate_path,
                "resolved_path": resolved_path,
            }
        ),
        200,
    )
