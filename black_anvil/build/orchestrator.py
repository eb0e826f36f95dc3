"""
Install orchestrator for black-anvil.

Runs the build, locates the artifact, stages it, and optionally mirrors the
vendored dependency tree. Every stage is gated on the previous one.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

from black_anvil.build.config import InstallConfig, artifact_path
from black_anvil.build.manifest import Manifest, read_manifest
from black_anvil.build.phases import CommandRunner, cargo_build
from black_anvil.build.staging import install_binary
from black_anvil.build.vendor import MirrorStats, vendor_dependencies
from black_anvil.core.errors import ArtifactNotFound
from black_anvil.core.utils import log


# =============================================================================
# Pipeline State
# =============================================================================


class PipelineState(Enum):
    """Where a pipeline run is, or where it stopped."""

    IDLE = "idle"
    BUILDING = "building"
    BUILD_FAILED = "build_failed"
    BUILT = "built"
    LOCATING = "locating"
    NOT_FOUND = "not_found"
    LOCATED = "located"
    INSTALLING = "installing"
    INSTALL_FAILED = "install_failed"
    INSTALLED = "installed"
    MIRRORING = "mirroring"
    MIRROR_FAILED = "mirror_failed"
    MIRRORED = "mirrored"
    DONE = "done"

    @property
    def failed(self) -> bool:
        return self in _FAILED_STATES


_FAILED_STATES = frozenset({
    PipelineState.BUILD_FAILED,
    PipelineState.NOT_FOUND,
    PipelineState.INSTALL_FAILED,
    PipelineState.MIRROR_FAILED,
})

# State entered when the stage that starts in the key state raises
_FAILURE_FOR = {
    PipelineState.BUILDING: PipelineState.BUILD_FAILED,
    PipelineState.LOCATING: PipelineState.NOT_FOUND,
    PipelineState.INSTALLING: PipelineState.INSTALL_FAILED,
    PipelineState.MIRRORING: PipelineState.MIRROR_FAILED,
}


@dataclass
class InstallResult:
    """Outcome of a successful pipeline run.

    ``phase_timings`` maps each in-progress state's value (``"building"``,
    ``"locating"``, ...) to its wall-clock seconds.
    """

    destination: Path
    package_name: str
    vendored: bool = False
    mirror: Optional[MirrorStats] = None
    phase_timings: dict[str, float] = field(default_factory=dict)


# =============================================================================
# Orchestrator
# =============================================================================


class InstallOrchestrator:
    """Orchestrates a single build-and-install run."""

    def __init__(self, config: InstallConfig, runner: Optional[CommandRunner] = None):
        self.config = config
        self.runner = runner
        self.spec = config.spec
        self.state = PipelineState.IDLE
        self.history: list[PipelineState] = [self.state]

        # Timing tracking
        self._phase_start: Optional[float] = None
        self._phase_timings: dict[str, float] = {}

    def _enter(self, state: PipelineState) -> None:
        self.state = state
        self.history.append(state)

    def _start_phase(self, state: PipelineState) -> None:
        """Enter an in-progress state and start its clock."""
        self._enter(state)
        self._phase_start = time.monotonic()

    def _end_phase(self, outcome: PipelineState) -> None:
        """Record the current phase's duration, then enter ``outcome``."""
        if self._phase_start is not None:
            duration = time.monotonic() - self._phase_start
            self._phase_timings[self.state.value] = round(duration, 3)
            self._phase_start = None
        self._enter(outcome)

    def _fail(self) -> None:
        failure = _FAILURE_FOR.get(self.state)
        if failure is not None:
            self._end_phase(failure)

    def _timing_summary(self) -> str:
        if not self._phase_timings:
            return "no phases ran"
        parts = [f"{name} {seconds:.1f}s" for name, seconds in self._phase_timings.items()]
        parts.append(f"total {sum(self._phase_timings.values()):.1f}s")
        return ", ".join(parts)

    # -------------------------------------------------------------------------
    # Stages
    # -------------------------------------------------------------------------

    def build(self) -> None:
        log.header(f"Building ({self.spec.profile})")
        self._start_phase(PipelineState.BUILDING)
        cargo_build(
            self.spec.project_path,
            self.spec.profile,
            runner=self.runner,
            build_tool=self.config.build_tool,
            dry_run=self.config.dry_run,
        )
        self._end_phase(PipelineState.BUILT)
        log.success("Build finished")

    def locate(self) -> tuple[Manifest, Path]:
        log.header("Locating artifact")
        self._start_phase(PipelineState.LOCATING)
        manifest = read_manifest(self.spec.project_path)
        source = artifact_path(
            self.spec.project_path,
            self.spec.profile,
            manifest.package_name,
            self.config.target_platform,
        )
        if not self.config.dry_run and not source.is_file():
            # A missing artifact is a NOT_FOUND outcome, not an install failure
            raise ArtifactNotFound(f"Build artifact not found at {source}", source)
        self._end_phase(PipelineState.LOCATED)
        log.info(f"Package: {manifest.package_name}")
        log.info(f"Artifact: {source}")
        return manifest, source

    def install(self, source: Path) -> Path:
        log.header("Installing")
        self._start_phase(PipelineState.INSTALLING)
        dest = install_binary(source, self.config.install_dir, self.config.dry_run)
        self._end_phase(PipelineState.INSTALLED)
        log.success(f"Staged {dest.name} in {self.config.install_dir}")
        return dest

    def mirror(self) -> MirrorStats:
        log.header("Vendoring dependencies")
        self._start_phase(PipelineState.MIRRORING)
        stats = vendor_dependencies(
            self.spec.project_path,
            self.config.install_dir,
            runner=self.runner,
            build_tool=self.config.build_tool,
            dry_run=self.config.dry_run,
        )
        self._end_phase(PipelineState.MIRRORED)
        log.success(f"Vendored {stats.files} files in {stats.directories} directories")
        return stats

    # -------------------------------------------------------------------------
    # Run
    # -------------------------------------------------------------------------

    def run(self) -> InstallResult:
        """Run every requested stage in order.

        Any failure is terminal: the error propagates unchanged, the state
        moves to the matching failed state, and files already written stay.
        """
        if self.state is not PipelineState.IDLE:
            raise RuntimeError(f"Pipeline already ran (state: {self.state.value})")

        try:
            self.build()
            manifest, source = self.locate()
            dest = self.install(source)

            stats = None
            if self.config.vendor:
                stats = self.mirror()

            self._enter(PipelineState.DONE)

        except Exception:
            self._fail()
            raise

        finally:
            if self.config.verbose:
                log.info(f"Timings: {self._timing_summary()}")

        return InstallResult(
            destination=dest,
            package_name=manifest.package_name,
            vendored=stats is not None,
            mirror=stats,
            phase_timings=dict(self._phase_timings),
        )
