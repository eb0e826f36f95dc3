"""
Build inspection for black-anvil.

Shows manifest contents, the expected artifact location, and install state
without building or writing anything.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from black_anvil.build.config import VENDOR_DIR, artifact_path, binary_name
from black_anvil.build.manifest import read_manifest
from black_anvil.core.errors import ManifestParseError, ManifestReadError
from black_anvil.core.utils import log


def count_tree(root: Path) -> tuple[int, int]:
    """Count (files, directories) below ``root``, excluding ``root`` itself."""
    files = 0
    directories = 0
    for path in root.rglob("*"):
        if path.is_dir():
            directories += 1
        else:
            files += 1
    return files, directories


def get_install_state(
    project_path: Path,
    profile: str,
    install_dir: Path,
    platform: str,
) -> dict[str, Any]:
    """Collect what an install run would read and write.

    Manifest problems are reported in the ``error`` key rather than raised.
    """
    state: dict[str, Any] = {
        "project_path": project_path,
        "profile": profile,
        "install_dir": install_dir,
        "package_name": None,
        "artifact": None,
        "artifact_exists": False,
        "destination": None,
        "destination_exists": False,
        "vendor_source_exists": (project_path / VENDOR_DIR).is_dir(),
        "vendor_mirror": None,
        "error": None,
    }

    try:
        manifest = read_manifest(project_path)
    except (ManifestReadError, ManifestParseError) as e:
        state["error"] = str(e)
        return state

    source = artifact_path(project_path, profile, manifest.package_name, platform)
    dest = install_dir / binary_name(manifest.package_name, platform)
    state.update({
        "package_name": manifest.package_name,
        "artifact": source,
        "artifact_exists": source.is_file(),
        "destination": dest,
        "destination_exists": dest.is_file(),
    })

    mirror_root = install_dir / VENDOR_DIR
    if mirror_root.is_dir():
        state["vendor_mirror"] = count_tree(mirror_root)

    return state


def _yes_no(value: bool) -> str:
    return "yes" if value else "no"


def inspect_project(
    project_path: Path,
    profile: str,
    install_dir: Path,
    platform: str,
) -> int:
    """Print install state. Returns 1 if the manifest cannot be read."""
    state = get_install_state(project_path, profile, install_dir, platform)

    log.header("Project")
    log.field("Path", str(project_path))
    log.field("Profile", profile)

    if state["error"]:
        log.error(state["error"])
        return 1

    log.field("Package", state["package_name"])

    log.header("Artifact")
    log.field("Expected at", str(state["artifact"]))
    log.field("Built", _yes_no(state["artifact_exists"]))

    log.header("Install")
    log.field("Destination", str(state["destination"]))
    log.field("Installed", _yes_no(state["destination_exists"]))
    log.field("Vendor source present", _yes_no(state["vendor_source_exists"]))

    mirror: Optional[tuple[int, int]] = state["vendor_mirror"]
    if mirror is None:
        log.field("Vendor mirror", "none")
    else:
        log.field("Vendor mirror", f"{mirror[0]} files, {mirror[1]} directories")

    return 0
