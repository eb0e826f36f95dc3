"""
Build phases for black-anvil.

External tool invocations (``cargo build``, ``cargo vendor``) behind a narrow
runner interface so tests can substitute a fake process.
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Callable, Optional

from black_anvil.build.config import PROFILES
from black_anvil.core.errors import BuildFailed, BuildSpawnError, ConfigError
from black_anvil.core.utils import DEFAULT_BUILD_TOOL, format_cmd, log

# (cmd, cwd) -> exit status. Raises OSError if the command cannot be started.
CommandRunner = Callable[[list[str], Path], int]


def subprocess_runner(cmd: list[str], cwd: Path) -> int:
    """Run ``cmd`` in ``cwd``, inheriting stdio, and return its exit status."""
    return subprocess.run(cmd, cwd=cwd, check=False).returncode


# =============================================================================
# Command Construction
# =============================================================================


def build_command(profile: str, build_tool: str = DEFAULT_BUILD_TOOL) -> list[str]:
    """``<tool> build``, plus ``--release`` for the release profile."""
    if profile not in PROFILES:
        raise ConfigError(f"Unknown build profile {profile!r}")

    cmd = [build_tool, "build"]
    if profile == "release":
        cmd.append("--release")
    return cmd


def vendor_command(build_tool: str = DEFAULT_BUILD_TOOL) -> list[str]:
    return [build_tool, "vendor"]


# =============================================================================
# Tool Execution
# =============================================================================


def run_tool(
    cmd: list[str],
    cwd: Path,
    runner: Optional[CommandRunner] = None,
    dry_run: bool = False,
) -> None:
    """Run an external tool to completion, translating failures.

    Raises:
        BuildSpawnError: The tool could not be started.
        BuildFailed: The tool exited with a non-zero status.
    """
    if dry_run:
        log.info(f"[DRY-RUN] Would run: {format_cmd(cmd)} in {cwd}")
        return

    if runner is None:
        runner = subprocess_runner

    try:
        returncode = runner(cmd, cwd)
    except OSError as e:
        raise BuildSpawnError(
            f"Failed to run {format_cmd(cmd)} in {cwd}: {e}", cmd, cwd
        ) from e

    if returncode != 0:
        raise BuildFailed(
            f"{format_cmd(cmd)} failed in {cwd} (exit status {returncode})",
            cmd,
            cwd,
            returncode,
        )


def cargo_build(
    project_path: Path,
    profile: str,
    runner: Optional[CommandRunner] = None,
    build_tool: str = DEFAULT_BUILD_TOOL,
    dry_run: bool = False,
) -> None:
    """Build the project with the given profile."""
    run_tool(build_command(profile, build_tool), project_path, runner, dry_run)


def cargo_vendor(
    project_path: Path,
    runner: Optional[CommandRunner] = None,
    build_tool: str = DEFAULT_BUILD_TOOL,
    dry_run: bool = False,
) -> None:
    """Resolve dependencies into ``<project_path>/vendor``."""
    run_tool(vendor_command(build_tool), project_path, runner, dry_run)
