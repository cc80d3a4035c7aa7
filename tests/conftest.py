"""Shared fixtures for release-bump tests."""

from __future__ import annotations

import shutil
import subprocess
from datetime import datetime
from typing import TYPE_CHECKING

import pytest

from release_bump.vcs.git import Commit

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

PYPROJECT = """\
[project]
name = "test-project"
version = "1.0.0"  # managed by release-bump
description = "A test project"

[tool.release-bump]
allow_dirty = false
"""


def build_commit(message: str, *tags: str, sha: str | None = None) -> Commit:
    """Build a Commit with placeholder author data."""
    return Commit(
        sha=sha or "abc1234",
        message=message,
        author_name="Test",
        author_email="test@test.com",
        date=datetime(2024, 1, 1, 12, 0, 0),
        tags=tags,
    )


@pytest.fixture
def feat_commit() -> Commit:
    return build_commit("feat: add user authentication", sha="feat123")


@pytest.fixture
def fix_commit() -> Commit:
    return build_commit("fix(core): handle empty input", sha="fix456")


@pytest.fixture
def chore_commit() -> Commit:
    return build_commit("chore: update dependencies", sha="chore789")


@pytest.fixture
def sample_history() -> list[Commit]:
    """History after a v1.2.0 release, newest first."""
    return [
        build_commit("feat: add login", sha="c4"),
        build_commit("fix: typo", sha="c3"),
        build_commit("chore: release", "v1.2.0", sha="c2"),
        build_commit("feat: initial feature", "v1.1.0", sha="c1"),
    ]


def _git(repo: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args],
        cwd=repo,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


@pytest.fixture
def git() -> Callable[..., str]:
    """Run a git command in a repository: ``git(repo, "log")``."""
    return _git


@pytest.fixture
def temp_git_repo(tmp_path: Path) -> Path:
    """An empty git repository with a committer configured."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")
    repo = tmp_path / "repo"
    repo.mkdir()
    _git(repo, "init", "-q")
    _git(repo, "config", "user.name", "Test User")
    _git(repo, "config", "user.email", "test@example.com")
    _git(repo, "config", "commit.gpgsign", "false")
    _git(repo, "config", "tag.gpgsign", "false")
    return repo


@pytest.fixture
def temp_git_repo_with_pyproject(temp_git_repo: Path) -> Path:
    """A git repository whose first commit adds pyproject.toml."""
    (temp_git_repo / "pyproject.toml").write_text(PYPROJECT)
    _git(temp_git_repo, "add", "pyproject.toml")
    _git(temp_git_repo, "commit", "-q", "-m", "chore: initial commit")
    return temp_git_repo


@pytest.fixture
def make_commit() -> Callable[..., Commit]:
    """Factory for commits: ``make_commit("feat: x", "v1.0.0", sha="abc")``."""
    return build_commit
