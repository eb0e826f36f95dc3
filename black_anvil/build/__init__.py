"""
black_anvil.build - Build, stage and vendor pipeline.

Builds a Cargo project, stages its binary into an install directory,
and optionally mirrors the vendored dependency tree next to it.
"""

from black_anvil.build.config import (
    MANIFEST_FILE,
    TARGET_DIR,
    VENDOR_DIR,
    PROFILES,
    BuildSpec,
    InstallConfig,
    load_config_file,
    is_windows_like,
    binary_name,
    artifact_path,
)
from black_anvil.build.manifest import Manifest, read_manifest, read_package_name
from black_anvil.build.phases import (
    CommandRunner,
    subprocess_runner,
    build_command,
    vendor_command,
    run_tool,
    cargo_build,
    cargo_vendor,
)
from black_anvil.build.staging import ensure_dir, install_binary
from black_anvil.build.vendor import MirrorStats, mirror_vendor_tree, vendor_dependencies
from black_anvil.build.orchestrator import (
    PipelineState,
    InstallResult,
    InstallOrchestrator,
)

__all__ = [
    # Constants
    "MANIFEST_FILE",
    "TARGET_DIR",
    "VENDOR_DIR",
    "PROFILES",
    # Configuration
    "BuildSpec",
    "InstallConfig",
    "load_config_file",
    # Artifact location
    "is_windows_like",
    "binary_name",
    "artifact_path",
    # Manifest
    "Manifest",
    "read_manifest",
    "read_package_name",
    # Phases
    "CommandRunner",
    "subprocess_runner",
    "build_command",
    "vendor_command",
    "run_tool",
    "cargo_build",
    "cargo_vendor",
    # Staging
    "ensure_dir",
    "install_binary",
    # Vendoring
    "MirrorStats",
    "mirror_vendor_tree",
    "vendor_dependencies",
    # Orchestrator
    "PipelineState",
    "InstallResult",
    "InstallOrchestrator",
]
