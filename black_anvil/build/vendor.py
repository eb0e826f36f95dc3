"""
Vendor tree mirroring.

Duplicates the dependency tree produced by ``cargo vendor`` into
``<install_dir>/vendor`` so the install can be rebuilt offline.
"""

from __future__ import annotations

import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from black_anvil.build.config import VENDOR_DIR
from black_anvil.build.phases import CommandRunner, cargo_vendor
from black_anvil.core.errors import MirrorIOError, VendorSourceMissing
from black_anvil.core.utils import DEFAULT_BUILD_TOOL, log


@dataclass
class MirrorStats:
    """Counts of what was mirrored (the destination root is not counted)."""

    files: int = 0
    directories: int = 0
    symlinks: int = 0


def _check_no_overlap(vendor_source: Path, dest_root: Path) -> None:
    """Refuse a destination that is the source or lies inside it."""
    source = vendor_source.resolve()
    dest = dest_root.resolve()
    if dest == source:
        raise MirrorIOError(
            f"Vendor mirror destination {dest_root} is the vendor source itself",
            dest_root,
        )
    if source in dest.parents:
        raise MirrorIOError(
            f"Vendor mirror destination {dest_root} is inside the vendor source {vendor_source}",
            dest_root,
        )


def mirror_vendor_tree(vendor_source: Path, install_dir: Path, dry_run: bool = False) -> MirrorStats:
    """Copy every file and directory under ``vendor_source`` to ``install_dir/vendor``.

    Uses an explicit worklist of (source, destination) directory pairs.
    A directory is always created before anything inside it is copied.
    Sibling order follows ``os.scandir`` and is not guaranteed.

    Symbolic links are recreated as links with the same target, never
    followed, so dangling links and links to directories mirror as-is.

    The first failure aborts the traversal; whatever was copied so far is
    left in place.

    Raises:
        VendorSourceMissing: ``vendor_source`` is not a directory.
        MirrorIOError: The destination overlaps the source, or any read,
            create or copy failure.
    """
    if not vendor_source.is_dir():
        raise VendorSourceMissing(
            f"Vendor directory not found at {vendor_source} (did dependency resolution run?)",
            vendor_source,
        )

    dest_root = install_dir / VENDOR_DIR
    _check_no_overlap(vendor_source, dest_root)
    stats = MirrorStats()

    if dry_run:
        log.info(f"[DRY-RUN] Would mirror {vendor_source} to {dest_root}")
        return stats

    _make_dir(dest_root)
    worklist: list[tuple[Path, Path]] = [(vendor_source, dest_root)]

    while worklist:
        src_dir, dest_dir = worklist.pop()
        try:
            with os.scandir(src_dir) as it:
                entries = list(it)
        except OSError as e:
            raise MirrorIOError(f"Failed to read directory {src_dir}: {e}", Path(src_dir)) from e

        for entry in entries:
            src = Path(entry.path)
            dest = dest_dir / entry.name
            try:
                is_link = entry.is_symlink()
                is_dir = not is_link and entry.is_dir(follow_symlinks=False)
            except OSError as e:
                raise MirrorIOError(f"Failed to stat {src}: {e}", src) from e

            if is_link:
                _copy_link(src, dest)
                stats.symlinks += 1
            elif is_dir:
                _make_dir(dest)
                stats.directories += 1
                worklist.append((src, dest))
            else:
                try:
                    shutil.copyfile(src, dest)
                except OSError as e:
                    raise MirrorIOError(f"Failed to copy {src} to {dest}: {e}", src) from e
                stats.files += 1

    return stats


def _make_dir(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise MirrorIOError(f"Failed to create directory {path}: {e}", path) from e


def _copy_link(src: Path, dest: Path) -> None:
    """Recreate the link ``src`` at ``dest``, replacing a file or link there."""
    try:
        target = os.readlink(src)
        if dest.is_symlink() or dest.is_file():
            dest.unlink()
        os.symlink(target, dest)
    except OSError as e:
        raise MirrorIOError(f"Failed to copy link {src} to {dest}: {e}", src) from e


def vendor_dependencies(
    project_path: Path,
    install_dir: Path,
    runner: Optional[CommandRunner] = None,
    build_tool: str = DEFAULT_BUILD_TOOL,
    dry_run: bool = False,
) -> MirrorStats:
    """Run ``cargo vendor`` in the project, then mirror its output."""
    cargo_vendor(project_path, runner, build_tool, dry_run)
    vendor_source = project_path / VENDOR_DIR
    if dry_run and not vendor_source.is_dir():
        log.info(f"[DRY-RUN] Would mirror {vendor_source} to {install_dir / VENDOR_DIR}")
        return MirrorStats()
    return mirror_vendor_tree(vendor_source, install_dir, dry_run)
