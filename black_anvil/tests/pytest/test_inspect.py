"""
Tests for install state inspection.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from black_anvil.build.inspect import count_tree, get_install_state
from .conftest import write_artifact, write_manifest, write_vendor_tree


@pytest.mark.evergreen
class TestGetInstallState:
    """get_install_state describes paths without modifying anything."""

    def test_fresh_project(self, project: Path, install_dir: Path) -> None:
        state = get_install_state(project, "release", install_dir, "linux")

        assert state["error"] is None
        assert state["package_name"] == "demo"
        assert state["artifact"] == project / "target" / "release" / "demo"
        assert state["artifact_exists"] is False
        assert state["destination"] == install_dir / "demo"
        assert state["destination_exists"] is False
        assert state["vendor_source_exists"] is False
        assert state["vendor_mirror"] is None

    def test_built_project(self, project: Path, install_dir: Path) -> None:
        write_artifact(project, "debug")
        write_vendor_tree(project / "vendor")
        state = get_install_state(project, "debug", install_dir, "linux")
        assert state["artifact_exists"] is True
        assert state["vendor_source_exists"] is True

    def test_windows_destination(self, project: Path, install_dir: Path) -> None:
        state = get_install_state(project, "release", install_dir, "win32")
        assert state["destination"] == install_dir / "demo.exe"

    def test_manifest_error_reported(self, tmp_path: Path, install_dir: Path) -> None:
        write_manifest(tmp_path / "proj", None)
        state = get_install_state(tmp_path / "proj", "release", install_dir, "linux")
        assert state["package_name"] is None
        assert "name" in state["error"]

    def test_count_tree(self, tmp_path: Path) -> None:
        write_vendor_tree(tmp_path / "vendor")
        assert count_tree(tmp_path / "vendor") == (5, 4)
