"""
Build configuration for black-anvil.

Constants, dataclasses, config-file loading, and artifact location.
"""

from __future__ import annotations

import sys
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from black_anvil.core.errors import ConfigError
from black_anvil.core.utils import DEFAULT_BUILD_TOOL, DEFAULT_INSTALL_DIR

__all__ = [
    "MANIFEST_FILE",
    "TARGET_DIR",
    "VENDOR_DIR",
    "PROFILES",
    "EXE_SUFFIX",
    "BuildSpec",
    "InstallConfig",
    "load_config_file",
    "is_windows_like",
    "binary_name",
    "artifact_path",
]

# =============================================================================
# Constants
# =============================================================================

MANIFEST_FILE = "Cargo.toml"
TARGET_DIR = "target"
VENDOR_DIR = "vendor"

PROFILES = ("release", "debug")

EXE_SUFFIX = ".exe"

# Platform names (sys.platform values or target triple fragments) that use
# the Windows executable convention
WINDOWS_PLATFORMS = ("win32", "cygwin", "msys", "windows")

# Keys accepted in a config file, with their expected types
CONFIG_KEYS: dict[str, type] = {
    "project_path": str,
    "build_type": str,
    "install_dir": str,
    "vendor": bool,
    "build_tool": str,
    "target_platform": str,
}


# =============================================================================
# Data Classes
# =============================================================================


@dataclass(frozen=True)
class BuildSpec:
    """What to build: a project directory and a profile."""

    project_path: Path
    profile: str = "release"

    def __post_init__(self) -> None:
        if self.profile not in PROFILES:
            raise ConfigError(
                f"Unknown build profile {self.profile!r} (expected one of: {', '.join(PROFILES)})",
                self.project_path,
            )


@dataclass
class InstallConfig:
    """Configuration for an install run."""

    project_path: Path = field(default_factory=lambda: Path("."))
    profile: str = "release"
    install_dir: Path = field(default_factory=lambda: DEFAULT_INSTALL_DIR)
    vendor: bool = False
    build_tool: str = DEFAULT_BUILD_TOOL
    target_platform: str = field(default_factory=lambda: sys.platform)
    dry_run: bool = False
    verbose: bool = False

    @property
    def spec(self) -> BuildSpec:
        return BuildSpec(project_path=self.project_path, profile=self.profile)

    def apply_file_values(self, values: dict[str, Any]) -> None:
        """Overlay values loaded by :func:`load_config_file`."""
        if "project_path" in values:
            self.project_path = Path(values["project_path"])
        if "build_type" in values:
            self.profile = values["build_type"]
        if "install_dir" in values:
            self.install_dir = Path(values["install_dir"])
        if "vendor" in values:
            self.vendor = values["vendor"]
        if "build_tool" in values:
            self.build_tool = values["build_tool"]
        if "target_platform" in values:
            self.target_platform = values["target_platform"]


# =============================================================================
# Config File Loading
# =============================================================================


def _parse_config_text(path: Path, text: str) -> Any:
    if path.suffix in (".yaml", ".yml"):
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse config {path}: {e}", path) from e

    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Failed to parse config {path}: {e}", path) from e


def load_config_file(path: Path) -> dict[str, Any]:
    """Load a TOML or YAML config file and validate its keys.

    YAML is used for ``.yaml``/``.yml`` files, TOML for everything else.
    An empty file yields an empty dict.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Failed to read config file {path}: {e}", path) from e

    data = _parse_config_text(path, text)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a table of settings", path)

    for key, value in data.items():
        expected = CONFIG_KEYS.get(key)
        if expected is None:
            raise ConfigError(f"Unknown config key {key!r} in {path}", path)
        if not isinstance(value, expected):
            raise ConfigError(
                f"Config key {key!r} in {path} must be a {expected.__name__}, got {type(value).__name__}",
                path,
            )

    build_type = data.get("build_type")
    if build_type is not None and build_type not in PROFILES:
        raise ConfigError(f"Unknown build_type {build_type!r} in {path}", path)

    return data


# =============================================================================
# Artifact Location
# =============================================================================


def is_windows_like(platform: str) -> bool:
    """True for platforms whose executables carry an ``.exe`` suffix.

    Accepts ``sys.platform`` values (``win32``, ``cygwin``) as well as
    target triples such as ``x86_64-pc-windows-msvc``.
    """
    name = platform.lower()
    return any(name == p or p in name.split("-") for p in WINDOWS_PLATFORMS)


def binary_name(package_name: str, platform: Optional[str] = None) -> str:
    """File name of the compiled binary for ``package_name`` on ``platform``."""
    if platform is None:
        platform = sys.platform
    if is_windows_like(platform):
        return f"{package_name}{EXE_SUFFIX}"
    return package_name


def artifact_path(
    project_path: Path,
    profile: str,
    package_name: str,
    platform: Optional[str] = None,
) -> Path:
    """Where the build tool leaves the binary: ``target/<profile>/<binary>``.

    Existence is not checked here.
    """
    return project_path / TARGET_DIR / profile / binary_name(package_name, platform)
