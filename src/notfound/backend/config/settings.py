"""Application settings loaded from YAML with environment overrides."""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .presets import CONFIG_DIRECTORY, _load_yaml
from .schema import AppSettings, ConfigurationError

SETTINGS_FILE = CONFIG_DIRECTORY / "settings.yaml"
SETTINGS_FILE_ENV = "NOTFOUND_SETTINGS_FILE"

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_bool(value: str | None, *, env: str) -> bool | None:
    if value is None or not value.strip():
        return None
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    logger.warning("Ignoring invalid value for %s: %s", env, value)
    return None


def _parse_positive_float(value: str | None, *, env: str) -> float | None:
    if value is None or not value.strip():
        return None
    try:
        parsed = float(value)
    except ValueError:
        logger.warning("Ignoring invalid value for %s: %s", env, value)
        return None
    if parsed <= 0:
        logger.warning("Ignoring non-positive value for %s: %s", env, value)
        return None
    return parsed


def _settings_path() -> Path:
    override = os.getenv(SETTINGS_FILE_ENV)
    if override and override.strip():
        return Path(override).expanduser()
    return SETTINGS_FILE


def _apply_environment_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    routing = dict(raw.get("routing") or {})
    fetch = dict(raw.get("fetch") or {})

    support_empty = _parse_bool(
        os.getenv("NOTFOUND_SUPPORT_EMPTY_SEGMENTS"), env="NOTFOUND_SUPPORT_EMPTY_SEGMENTS"
    )
    if support_empty is not None:
        routing.pop("support_empty_segment_for_dimensions", None)
        routing["supportEmptySegmentForDimensions"] = support_empty

    timeout = _parse_positive_float(
        os.getenv("NOTFOUND_FETCH_TIMEOUT"), env="NOTFOUND_FETCH_TIMEOUT"
    )
    if timeout is not None:
        fetch["timeout_seconds"] = timeout

    signature = os.getenv("NOTFOUND_USER_AGENT_SIGNATURE")
    if signature and signature.strip():
        fetch["user_agent_signature"] = signature.strip()

    content_directory = os.getenv("NOTFOUND_CONTENT_DIR")
    if content_directory and content_directory.strip():
        raw["content_directory"] = content_directory.strip()

    raw["routing"] = routing
    raw["fetch"] = fetch
    return raw


@lru_cache(maxsize=1)
def load_settings() -> AppSettings:
    """Load and cache application settings."""

    path = _settings_path()
    raw = _load_yaml(path) if path.exists() else {}
    raw = _apply_environment_overrides(raw)

    try:
        return AppSettings.model_validate(raw)
    except ValidationError as error:
        raise ConfigurationError(f"Settings validation failed: {error}") from error


__all__ = ["SETTINGS_FILE", "SETTINGS_FILE_ENV", "load_settings"]
