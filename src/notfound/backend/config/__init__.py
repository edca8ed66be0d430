"""Configuration models and loaders for dimension presets and settings."""

from .presets import ConfigurationPresetSource, load_dimension_presets, parse_dimension_presets
from .schema import (
    AppSettings,
    ConfigurationError,
    DimensionPreset,
    DimensionPresetTable,
    FetchSettings,
    PresetRecord,
    RoutingSettings,
)
from .settings import load_settings

__all__ = [
    "AppSettings",
    "ConfigurationError",
    "ConfigurationPresetSource",
    "DimensionPreset",
    "DimensionPresetTable",
    "FetchSettings",
    "PresetRecord",
    "RoutingSettings",
    "load_dimension_presets",
    "load_settings",
    "parse_dimension_presets",
]
