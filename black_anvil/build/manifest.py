"""
Cargo manifest reading.

Only the package name is needed to locate the build artifact.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

from black_anvil.build.config import MANIFEST_FILE
from black_anvil.core.errors import ManifestParseError, ManifestReadError


@dataclass(frozen=True)
class Manifest:
    """The parts of ``Cargo.toml`` the pipeline uses."""

    package_name: str
    path: Path


def read_manifest(project_path: Path, manifest_file: str = MANIFEST_FILE) -> Manifest:
    """Read ``<project_path>/<manifest_file>`` and extract ``[package].name``.

    Raises:
        ManifestReadError: The file is absent or unreadable.
        ManifestParseError: The file is not TOML, or has no usable package name.
    """
    manifest_path = project_path / manifest_file

    try:
        content = manifest_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestReadError(f"Failed to read {manifest_path}: {e}", manifest_path) from e

    try:
        data = tomllib.loads(content)
    except tomllib.TOMLDecodeError as e:
        raise ManifestParseError(f"Failed to parse {manifest_path}: {e}", manifest_path) from e

    package = data.get("package")
    if not isinstance(package, dict):
        raise ManifestParseError(f"{manifest_path} has no [package] table", manifest_path)

    name = package.get("name")
    if not isinstance(name, str) or not name.strip():
        raise ManifestParseError(f"{manifest_path} is missing [package].name", manifest_path)

    return Manifest(package_name=name, path=manifest_path)


def read_package_name(project_path: Path, manifest_file: str = MANIFEST_FILE) -> str:
    """Shortcut for ``read_manifest(...).package_name``."""
    return read_manifest(project_path, manifest_file).package_name
