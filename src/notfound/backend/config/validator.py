"""Lint dimension presets for problems the path localizer silently assumes away."""

from __future__ import annotations

import argparse
from collections import Counter
from typing import Sequence

from .presets import load_dimension_presets
from .schema import ConfigurationError, DimensionPreset, DimensionPresetTable
from .settings import load_settings

SEGMENT_DELIMITER = "_"
_FORBIDDEN_CHARACTERS = ("/", "@", SEGMENT_DELIMITER)


def _format_scope(scope: str, message: str) -> str:
    return f"{scope}: {message}"


def _validate_dimension(
    dimension: DimensionPreset, *, support_empty_segments: bool
) -> list[str]:
    scope = f"dimensions.{dimension.name}"
    errors: list[str] = []

    counts = Counter(preset.uri_segment for preset in dimension.presets.values())
    for segment, count in counts.items():
        if count > 1:
            errors.append(
                _format_scope(scope, f"uriSegment '{segment}' is used by {count} presets")
            )

    for preset_id, preset in dimension.presets.items():
        preset_scope = f"{scope}.presets.{preset_id}"
        segment = preset.uri_segment
        if not segment:
            if not support_empty_segments:
                errors.append(
                    _format_scope(
                        preset_scope,
                        "empty uriSegment requires supportEmptySegmentForDimensions",
                    )
                )
            elif preset_id != dimension.default_preset:
                errors.append(
                    _format_scope(preset_scope, "only the default preset may use an empty uriSegment")
                )
            continue
        for character in _FORBIDDEN_CHARACTERS:
            if character in segment:
                errors.append(
                    _format_scope(
                        preset_scope, f"uriSegment '{segment}' must not contain '{character}'"
                    )
                )

    return errors


def validate_dimension_presets(
    table: DimensionPresetTable, *, support_empty_segments: bool = False
) -> list[str]:
    """Return human readable issues found in ``table``."""

    errors: list[str] = []
    for _, dimension in table.items():
        errors.extend(
            _validate_dimension(dimension, support_empty_segments=support_empty_segments)
        )
    return errors


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate configured dimension presets and report issues."
    )
    parser.add_argument(
        "--support-empty-segments",
        action="store_true",
        default=None,
        help="Validate as if supportEmptySegmentForDimensions were enabled",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for running validations from the command line."""

    parser = _build_argument_parser()
    args = parser.parse_args(argv)

    try:
        table = load_dimension_presets()
        settings = load_settings()
    except (FileNotFoundError, ConfigurationError) as error:
        print(f"failed to load configuration: {error}")
        return 1

    support_empty = args.support_empty_segments
    if support_empty is None:
        support_empty = settings.routing.support_empty_segment_for_dimensions

    issues = validate_dimension_presets(table, support_empty_segments=support_empty)
    if issues:
        print(f"{len(issues)} issue(s) detected:")
        for issue in issues:
            print(f"  - {issue}")
        return 1

    print(f"OK ({', '.join(table.names) or 'no dimensions'})")
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())
