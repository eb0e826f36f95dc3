"""
black_anvil.core - Foundation layer for the anvil CLI.

Exports logging and the error taxonomy.
"""

from black_anvil.core.utils import (
    # Logging
    log,
    Logger,
    # Constants
    DEFAULT_BUILD_TOOL,
    DEFAULT_INSTALL_DIR,
    format_cmd,
)
from black_anvil.core.errors import (
    AnvilError,
    ConfigError,
    ManifestReadError,
    ManifestParseError,
    CommandError,
    BuildSpawnError,
    BuildFailed,
    ArtifactNotFound,
    InstallDirError,
    CopyError,
    VendorSourceMissing,
    MirrorIOError,
)

__all__ = [
    # Logging
    "log",
    "Logger",
    # Constants
    "DEFAULT_BUILD_TOOL",
    "DEFAULT_INSTALL_DIR",
    "format_cmd",
    # Errors
    "AnvilError",
    "ConfigError",
    "ManifestReadError",
    "ManifestParseError",
    "CommandError",
    "BuildSpawnError",
    "BuildFailed",
    "ArtifactNotFound",
    "InstallDirError",
    "CopyError",
    "VendorSourceMissing",
    "MirrorIOError",
]
