"""
Binary staging.

Copies the located build artifact into the install directory.
"""

from __future__ import annotations

import os
import shutil
from pathlib import Path

from black_anvil.core.errors import ArtifactNotFound, CopyError, InstallDirError
from black_anvil.core.utils import log


def ensure_dir(directory: Path, dry_run: bool = False) -> None:
    """Create ``directory`` and any missing parents. Idempotent."""
    if dry_run:
        if not directory.is_dir():
            log.info(f"[DRY-RUN] Would create {directory}")
        return

    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise InstallDirError(f"Failed to create directory {directory}: {e}", directory) from e


def install_binary(source: Path, install_dir: Path, dry_run: bool = False) -> Path:
    """Copy ``source`` into ``install_dir`` under its own name.

    An existing file at the destination is overwritten; if the destination
    is the artifact itself the call is a no-op. Permission bits
    follow the source so the staged binary stays executable.

    Returns:
        The destination path.

    Raises:
        ArtifactNotFound: ``source`` does not exist (nothing is created).
        InstallDirError: ``install_dir`` cannot be created.
        CopyError: Any other I/O failure during the copy.
    """
    dest = install_dir / source.name

    if dry_run:
        # The build did not run, so the artifact may legitimately be absent
        ensure_dir(install_dir, dry_run)
        log.info(f"[DRY-RUN] Would copy {source} to {dest}")
        return dest

    if not source.is_file():
        raise ArtifactNotFound(f"Build artifact not found at {source}", source)

    ensure_dir(install_dir)

    if dest.exists() and os.path.samefile(source, dest):
        log.info(f"{dest} is the build artifact itself, nothing to copy")
        return dest

    try:
        shutil.copyfile(source, dest)
        shutil.copymode(source, dest)
    except OSError as e:
        raise CopyError(f"Failed to copy binary from {source} to {dest}: {e}", dest) from e

    return dest
