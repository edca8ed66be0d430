"""Project version lookup, used to identify the application's own requests."""

from __future__ import annotations

from functools import lru_cache
from importlib import metadata
from pathlib import Path
from typing import Final

PACKAGE_NAME: Final = "notfound"
PYPROJECT_PATH: Final = Path(__file__).resolve().parents[3] / "pyproject.toml"


@lru_cache(maxsize=1)
def get_project_version() -> str:
    """Return the installed version, or the one declared in ``pyproject.toml``."""

    try:
        return metadata.version(PACKAGE_NAME)
    except metadata.PackageNotFoundError:
        return _read_version_from_pyproject(PYPROJECT_PATH)


def get_version_branch(version: str | None = None) -> str:
    """Return the ``major.minor`` part of ``version`` (default: project version)."""

    parts = (version or get_project_version()).split(".")
    return ".".join(parts[:2])


def _read_version_from_pyproject(pyproject_path: Path) -> str:
    if not pyproject_path.exists():  # pragma: no cover - repository invariant
        raise RuntimeError(f"Unable to locate project metadata at {pyproject_path}")

    in_project_table = False
    for raw_line in pyproject_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if line.startswith("["):
            in_project_table = line == "[project]"
            continue
        if not in_project_table or not line.startswith("version"):
            continue
        key, _, value = line.partition("=")
        if key.strip() == "version" and value.strip().strip('"'):
            return value.strip().strip('"')

    raise RuntimeError("Unable to determine project version from pyproject.toml")


__all__ = ["PACKAGE_NAME", "get_project_version", "get_version_branch"]
