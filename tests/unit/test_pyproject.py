"""Tests for reading and writing the version in pyproject.toml."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from release_bump.exceptions import ProjectError, VersionNotFoundError
from release_bump.project.pyproject import get_pyproject_version, update_pyproject_version

if TYPE_CHECKING:
    from pathlib import Path

PEP621 = """\
# Project metadata
[build-system]
requires = ["hatchling"]
version = "9.9.9"

[project]
name = "demo"
version = '1.2.3'   # keep in sync
dependencies = ["rich"]

[tool.other]
version = "0.0.1"
"""

POETRY = """\
[tool.poetry]
name = "demo"
version = "0.4.0"

[tool.poetry.dependencies]
python = "^3.11"
"""


@pytest.fixture
def pep621_file(tmp_path: Path) -> Path:
    path = tmp_path / "pyproject.toml"
    path.write_text(PEP621)
    return path


class TestGetPyprojectVersion:
    """Tests for get_pyproject_version()."""

    def test_pep621(self, pep621_file: Path):
        """The [project] version is read, not versions from other tables."""
        assert get_pyproject_version(pep621_file) == "1.2.3"

    def test_from_directory(self, pep621_file: Path):
        assert get_pyproject_version(pep621_file.parent) == "1.2.3"

    def test_poetry(self, tmp_path: Path):
        path = tmp_path / "pyproject.toml"
        path.write_text(POETRY)

        assert get_pyproject_version(path) == "0.4.0"

    def test_missing_version_raises(self, tmp_path: Path):
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "demo"\n\n[tool.other]\nversion = "1.0.0"\n')

        with pytest.raises(VersionNotFoundError):
            get_pyproject_version(path)

    def test_missing_file_raises(self, tmp_path: Path):
        with pytest.raises(ProjectError):
            get_pyproject_version(tmp_path / "missing.toml")


class TestUpdatePyprojectVersion:
    """Tests for update_pyproject_version()."""

    def test_only_version_value_changes(self, pep621_file: Path):
        """Formatting, comments, quotes and other tables are preserved."""
        update_pyproject_version(pep621_file, "1.3.0")

        assert pep621_file.read_text() == PEP621.replace("'1.2.3'", "'1.3.0'")

    def test_returns_path(self, pep621_file: Path):
        assert update_pyproject_version(pep621_file.parent, "2.0.0") == pep621_file

    def test_poetry(self, tmp_path: Path):
        path = tmp_path / "pyproject.toml"
        path.write_text(POETRY)

        update_pyproject_version(path, "0.5.0")

        assert path.read_text() == POETRY.replace('"0.4.0"', '"0.5.0"')

    def test_same_version_raises(self, pep621_file: Path):
        with pytest.raises(ProjectError, match="already 1.2.3"):
            update_pyproject_version(pep621_file, "1.2.3")

    def test_missing_version_raises(self, tmp_path: Path):
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "demo"\n')

        with pytest.raises(VersionNotFoundError):
            update_pyproject_version(path, "1.0.0")
