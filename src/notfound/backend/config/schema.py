"""Pydantic models describing dimension presets and application settings."""

from __future__ import annotations

from typing import Any, Iterator, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ConfigurationError(ValueError):
    """Raised when configuration values violate schema expectations."""


class ImmutableModel(BaseModel):
    """Base class that freezes instances and rejects unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


class PresetRecord(BaseModel):
    """One allowed value of a dimension and the URI segment encoding it.

    Unknown keys are kept as metadata so preset files can carry whatever the
    content layer needs next to the segment.
    """

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    uri_segment: str = Field(alias="uriSegment")
    label: str | None = None
    values: tuple[str, ...] = ()

    @field_validator("uri_segment", mode="before")
    @classmethod
    def _coerce_segment(cls, value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, (str, int)):
            return str(value)
        raise ConfigurationError("Preset uriSegment must be a string")


class DimensionPreset(ImmutableModel):
    """A content dimension together with its presets and default preset."""

    name: str
    label: str | None = None
    default: str | None = None
    default_preset: str = Field(alias="defaultPreset")
    presets: Mapping[str, PresetRecord]

    @model_validator(mode="after")
    def _validate_default(self) -> DimensionPreset:
        if not self.presets:
            raise ConfigurationError(f"Dimension '{self.name}' declares no presets")
        if self.default_preset not in self.presets:
            raise ConfigurationError(
                f"Default preset '{self.default_preset}' of dimension '{self.name}' "
                "is not declared in its presets"
            )
        return self

    @property
    def default_uri_segment(self) -> str:
        return self.presets[self.default_preset].uri_segment

    def find_by_uri_segment(self, uri_segment: str) -> PresetRecord | None:
        """Return the preset encoded by ``uri_segment`` or ``None``."""

        for preset in self.presets.values():
            if preset.uri_segment == uri_segment:
                return preset
        return None


class DimensionPresetTable(ImmutableModel):
    """Ordered mapping of dimension names to their presets.

    Iteration follows declaration order, which decides how URI segments are
    assigned to dimensions positionally.
    """

    dimensions: Mapping[str, DimensionPreset] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _inject_dimension_names(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        dimensions = data.get("dimensions")
        if dimensions is None:
            return {**data, "dimensions": {}}
        if not isinstance(dimensions, Mapping):
            raise ConfigurationError("Dimensions must be declared as a mapping")

        named: dict[str, Any] = {}
        for name, definition in dimensions.items():
            if isinstance(definition, Mapping):
                named[str(name)] = {"name": str(name), **definition}
            else:
                named[str(name)] = definition
        return {**data, "dimensions": named}

    @property
    def is_empty(self) -> bool:
        return not self.dimensions

    def items(self) -> Iterator[tuple[str, DimensionPreset]]:
        return iter(self.dimensions.items())

    def get(self, name: str) -> DimensionPreset | None:
        return self.dimensions.get(name)

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self.dimensions)

    def default_uri_segments(self) -> tuple[str, ...]:
        """Return the default preset segment of every dimension, in order."""

        return tuple(
            dimension.default_uri_segment for dimension in self.dimensions.values()
        )


class RoutingSettings(ImmutableModel):
    """Routing options shared with the page blueprint."""

    support_empty_segment_for_dimensions: bool = Field(
        default=False, alias="supportEmptySegmentForDimensions"
    )


class FetchSettings(ImmutableModel):
    """Options applied to the internal content request."""

    timeout_seconds: float = 10.0
    follow_redirects: bool = True
    verify_tls: bool = True
    user_agent_signature: str = "NotFound"

    @model_validator(mode="after")
    def _validate_values(self) -> FetchSettings:
        if self.timeout_seconds <= 0:
            raise ConfigurationError("Fetch timeout must be a positive number of seconds")
        if not self.user_agent_signature.strip():
            raise ConfigurationError("User-Agent signature must not be empty")
        return self


class AppSettings(ImmutableModel):
    """Top-level application settings."""

    routing: RoutingSettings = Field(default_factory=RoutingSettings)
    fetch: FetchSettings = Field(default_factory=FetchSettings)
    content_directory: str | None = None


__all__ = [
    "AppSettings",
    "ConfigurationError",
    "DimensionPreset",
    "DimensionPresetTable",
    "FetchSettings",
    "ImmutableModel",
    "PresetRecord",
    "RoutingSettings",
]
