"""
Error taxonomy for the install pipeline.

Every error carries the path it originated from (a file, a directory, or
the working directory of a failed command) so the CLI can report it.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence


class AnvilError(RuntimeError):
    """Base class for all pipeline failures."""

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


class ConfigError(AnvilError):
    """Invalid pipeline input or config file."""


# =============================================================================
# Manifest
# =============================================================================


class ManifestReadError(AnvilError):
    """Manifest file is missing or unreadable."""


class ManifestParseError(AnvilError):
    """Manifest is not valid TOML or lacks a package name."""


# =============================================================================
# External Commands
# =============================================================================


class CommandError(AnvilError):
    """Base for external command failures."""

    def __init__(self, message: str, cmd: Sequence[str], cwd: Path):
        super().__init__(message, cwd)
        self.cmd = list(cmd)
        self.cwd = cwd


class BuildSpawnError(CommandError):
    """The external tool could not be started."""


class BuildFailed(CommandError):
    """The external tool ran and exited with a non-zero status."""

    def __init__(self, message: str, cmd: Sequence[str], cwd: Path, returncode: int):
        super().__init__(message, cmd, cwd)
        self.returncode = returncode


# =============================================================================
# Staging
# =============================================================================


class ArtifactNotFound(AnvilError):
    """The compiled binary is not where the manifest says it should be."""


class InstallDirError(AnvilError):
    """The install directory could not be created."""


class CopyError(AnvilError):
    """Copying the binary into the install directory failed."""


# =============================================================================
# Vendoring
# =============================================================================


class VendorSourceMissing(AnvilError):
    """The resolved dependency directory does not exist."""


class MirrorIOError(AnvilError):
    """Reading, creating or copying part of the vendor tree failed."""
