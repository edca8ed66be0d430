"""Unit coverage for dimension preset loading and lookups."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from notfound.backend.config import (
    ConfigurationError,
    ConfigurationPresetSource,
    DimensionPresetTable,
    parse_dimension_presets,
    presets,
)


@pytest.fixture()
def isolated_presets_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the preset loader at a temporary YAML file."""

    presets_path = tmp_path / "presets.yaml"
    monkeypatch.setenv(presets.PRESETS_FILE_ENV, str(presets_path))
    presets.load_dimension_presets.cache_clear()

    yield presets_path

    presets.load_dimension_presets.cache_clear()


def test_bundled_presets_declare_language_dimension() -> None:
    presets.load_dimension_presets.cache_clear()
    table = presets.load_dimension_presets()

    assert table.names == ("language",)
    assert table.default_uri_segments() == ("en",)


def test_loader_preserves_declaration_order(isolated_presets_file: Path) -> None:
    isolated_presets_file.write_text(
        yaml.safe_dump(
            {
                "dimensions": {
                    "market": {
                        "defaultPreset": "eu",
                        "presets": {"eu": {"uriSegment": "eu"}, "us": {"uriSegment": "us"}},
                    },
                    "language": {
                        "defaultPreset": "en",
                        "presets": {"en": {"uriSegment": "en"}},
                    },
                }
            },
            sort_keys=False,
        ),
        encoding="utf-8",
    )

    table = presets.load_dimension_presets()

    assert table.names == ("market", "language")
    assert table.default_uri_segments() == ("eu", "en")
    assert table.get("market").name == "market"


def test_loader_reports_missing_file(isolated_presets_file: Path) -> None:
    with pytest.raises(FileNotFoundError):
        presets.load_dimension_presets()


def test_loader_rejects_non_mapping_document(isolated_presets_file: Path) -> None:
    isolated_presets_file.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        presets.load_dimension_presets()


def test_missing_default_preset_is_rejected() -> None:
    with pytest.raises(ConfigurationError, match="defaultPreset|Default preset"):
        parse_dimension_presets(
            {
                "dimensions": {
                    "language": {
                        "defaultPreset": "fr",
                        "presets": {"en": {"uriSegment": "en"}},
                    }
                }
            }
        )


def test_preset_metadata_is_preserved() -> None:
    table = parse_dimension_presets(
        {
            "dimensions": {
                "language": {
                    "defaultPreset": "en",
                    "presets": {
                        "en": {"uriSegment": "en", "values": ["en"], "hreflang": "en-GB"}
                    },
                }
            }
        }
    )

    preset = table.get("language").presets["en"]
    assert preset.values == ("en",)
    assert preset.model_extra == {"hreflang": "en-GB"}


def test_preset_source_finds_presets_by_segment(
    language_and_country_presets: DimensionPresetTable,
) -> None:
    source = ConfigurationPresetSource(language_and_country_presets)

    assert source.get_all_presets() is language_and_country_presets
    assert source.find_preset_by_uri_segment("language", "de").label == "Deutsch"
    assert source.find_preset_by_uri_segment("country", "fr").uri_segment == "fr"
    assert source.find_preset_by_uri_segment("language", "fr") is None
    assert source.find_preset_by_uri_segment("currency", "eur") is None
