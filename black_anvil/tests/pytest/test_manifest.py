"""
Tests for Cargo manifest reading.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from black_anvil.build.manifest import read_manifest, read_package_name
from black_anvil.core.errors import ManifestParseError, ManifestReadError
from .conftest import write_manifest


@pytest.mark.evergreen
class TestReadManifest:
    """read_manifest extracts [package].name or fails with a typed error."""

    def test_reads_package_name(self, project: Path) -> None:
        manifest = read_manifest(project)
        assert manifest.package_name == "demo"
        assert manifest.path == project / "Cargo.toml"

    def test_read_package_name_shortcut(self, tmp_path: Path) -> None:
        write_manifest(tmp_path, "black-anvil")
        assert read_package_name(tmp_path) == "black-anvil"

    def test_ignores_other_tables(self, tmp_path: Path) -> None:
        (tmp_path / "Cargo.toml").write_text(
            '[package]\nname = "demo"\n\n[dependencies]\nserde = "1"\n\n[[bin]]\nname = "other"\n'
        )
        assert read_package_name(tmp_path) == "demo"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ManifestReadError) as exc_info:
            read_manifest(tmp_path)
        assert exc_info.value.path == tmp_path / "Cargo.toml"

    def test_manifest_is_directory(self, tmp_path: Path) -> None:
        (tmp_path / "Cargo.toml").mkdir()
        with pytest.raises(ManifestReadError):
            read_manifest(tmp_path)

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "Cargo.toml").write_text("[package\nname = demo\n")
        with pytest.raises(ManifestParseError) as exc_info:
            read_manifest(tmp_path)
        assert exc_info.value.path == tmp_path / "Cargo.toml"

    def test_missing_package_table(self, tmp_path: Path) -> None:
        (tmp_path / "Cargo.toml").write_text('[workspace]\nmembers = ["a"]\n')
        with pytest.raises(ManifestParseError, match=r"\[package\]"):
            read_manifest(tmp_path)

    def test_missing_name(self, tmp_path: Path) -> None:
        write_manifest(tmp_path, None)
        with pytest.raises(ManifestParseError, match="name"):
            read_manifest(tmp_path)

    def test_non_string_name(self, tmp_path: Path) -> None:
        (tmp_path / "Cargo.toml").write_text("[package]\nname = 42\n")
        with pytest.raises(ManifestParseError):
            read_manifest(tmp_path)

    def test_empty_name(self, tmp_path: Path) -> None:
        write_manifest(tmp_path, "")
        with pytest.raises(ManifestParseError):
            read_manifest(tmp_path)
