"""
Shared pytest fixtures for anvil tests.

Provides throwaway Cargo projects on disk and a fake process runner so no
test ever spawns a real build tool.

Test Tier Markers:
  @pytest.mark.evergreen - Tests that always run, never skip (production tests)
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

import pytest

from black_anvil.core.utils import log


# =============================================================================
# Test Data Constants
# =============================================================================

BINARY_BYTES = b"\x7fELF fake binary \x00\x01\x02"

# Relative paths (files only) of a small vendored dependency tree
VENDOR_FILES: dict[str, bytes] = {
    "serde/Cargo.toml": b'[package]\nname = "serde"\n',
    "serde/src/lib.rs": b"pub fn ser() {}\n",
    "serde/src/de/mod.rs": b"pub mod de;\n",
    "libc/Cargo.toml": b'[package]\nname = "libc"\n',
    "libc/.cargo-checksum.json": b'{"files":{}}',
}

# serde, serde/src, serde/src/de, libc
VENDOR_DIR_COUNT = 4


# =============================================================================
# Project Factory
# =============================================================================


def write_manifest(project: Path, name: Optional[str] = "demo") -> Path:
    """Write a minimal Cargo.toml (no [package].name when name is None)."""
    project.mkdir(parents=True, exist_ok=True)
    manifest = project / "Cargo.toml"
    if name is None:
        manifest.write_text('[package]\nversion = "0.1.0"\n')
    else:
        manifest.write_text(f'[package]\nname = "{name}"\nversion = "0.1.0"\nedition = "2021"\n')
    return manifest


def write_artifact(project: Path, profile: str = "release", name: str = "demo") -> Path:
    """Place a fake compiled binary where cargo would leave it."""
    artifact = project / "target" / profile / name
    artifact.parent.mkdir(parents=True, exist_ok=True)
    artifact.write_bytes(BINARY_BYTES)
    artifact.chmod(0o755)
    return artifact


def write_vendor_tree(root: Path) -> None:
    """Populate ``root`` with VENDOR_FILES."""
    for rel, content in VENDOR_FILES.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)


# =============================================================================
# Fake Runner
# =============================================================================


class FakeRunner:
    """Records commands instead of spawning them.

    Args:
        returncodes: Exit status per subcommand (``"build"``, ``"vendor"``), default 0.
        effects: Callbacks run for a subcommand before returning, given the cwd.
        spawn_error: If set, raised for every call (simulates a missing tool).
    """

    def __init__(
        self,
        returncodes: Optional[dict[str, int]] = None,
        effects: Optional[dict[str, Callable[[Path], None]]] = None,
        spawn_error: Optional[OSError] = None,
    ):
        self.returncodes = returncodes or {}
        self.effects = effects or {}
        self.spawn_error = spawn_error
        self.calls: list[tuple[list[str], Path]] = []

    def __call__(self, cmd: list[str], cwd: Path) -> int:
        self.calls.append((list(cmd), cwd))
        if self.spawn_error is not None:
            raise self.spawn_error
        action = cmd[1] if len(cmd) > 1 else ""
        effect = self.effects.get(action)
        if effect is not None:
            effect(cwd)
        return self.returncodes.get(action, 0)

    @property
    def commands(self) -> list[list[str]]:
        return [cmd for cmd, _ in self.calls]


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A Cargo project named ``demo`` with no build output yet."""
    root = tmp_path / "demo"
    write_manifest(root)
    return root


@pytest.fixture
def install_dir(tmp_path: Path) -> Path:
    """Install directory path (not created)."""
    return tmp_path / "out" / "bin"


@pytest.fixture
def building_runner() -> FakeRunner:
    """Runner whose ``build`` produces the demo binary and ``vendor`` a vendor tree."""
    def build(cwd: Path) -> None:
        write_artifact(cwd, "release")
        write_artifact(cwd, "debug")

    def vendor(cwd: Path) -> None:
        write_vendor_tree(cwd / "vendor")

    return FakeRunner(effects={"build": build, "vendor": vendor})


@pytest.fixture(autouse=True)
def _plain_log() -> None:
    """Keep ANSI codes out of captured output."""
    log.set_color(False)


# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test tiers."""
    config.addinivalue_line(
        "markers",
        "evergreen: tests that always run, never skip (production tests)"
    )
