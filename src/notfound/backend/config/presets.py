"""Dimension preset loader and the configuration-backed preset source."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import ValidationError

from .schema import ConfigurationError, DimensionPresetTable, PresetRecord

CONFIG_DIRECTORY = Path(__file__).resolve().parent / "data"
PRESETS_FILE = CONFIG_DIRECTORY / "presets.yaml"
PRESETS_FILE_ENV = "NOTFOUND_PRESETS_FILE"


def _load_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ConfigurationError("Configuration file must define a mapping at the top level")
    return data


def _presets_path() -> Path:
    override = os.getenv(PRESETS_FILE_ENV)
    if override and override.strip():
        return Path(override).expanduser()
    return PRESETS_FILE


def parse_dimension_presets(raw: Mapping[str, Any]) -> DimensionPresetTable:
    """Validate a raw preset mapping into a :class:`DimensionPresetTable`."""

    try:
        return DimensionPresetTable.model_validate(raw)
    except ValidationError as error:
        raise ConfigurationError(f"Dimension preset validation failed: {error}") from error


@lru_cache(maxsize=1)
def load_dimension_presets() -> DimensionPresetTable:
    """Load and cache the dimension preset table from disk."""

    path = _presets_path()
    if not path.exists():
        raise FileNotFoundError(f"Dimension preset file not found: {path}")

    return parse_dimension_presets(_load_yaml(path))


class ConfigurationPresetSource:
    """Preset source answering lookups against a fixed preset table."""

    def __init__(self, table: DimensionPresetTable) -> None:
        self._table = table

    @classmethod
    def from_configuration(cls) -> ConfigurationPresetSource:
        return cls(load_dimension_presets())

    def get_all_presets(self) -> DimensionPresetTable:
        return self._table

    def find_preset_by_uri_segment(
        self, dimension_name: str, uri_segment: str
    ) -> PresetRecord | None:
        """Return the preset of ``dimension_name`` encoded by ``uri_segment``.

        Unknown dimensions yield ``None`` just like unknown segments.
        """

        dimension = self._table.get(dimension_name)
        if dimension is None:
            return None
        return dimension.find_by_uri_segment(uri_segment)


__all__ = [
    "CONFIG_DIRECTORY",
    "ConfigurationPresetSource",
    "PRESETS_FILE",
    "PRESETS_FILE_ENV",
    "load_dimension_presets",
    "parse_dimension_presets",
]
