"""Tests for the git repository wrapper."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

import pytest

from release_bump.exceptions import GitError, NotAGitRepositoryError
from release_bump.vcs.git import Commit, GitRepository, parse_log_output, parse_tag_decoration

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path


class TestParseTagDecoration:
    """Tests for parse_tag_decoration()."""

    def test_tags_and_branches(self):
        decoration = "HEAD -> main, tag: v1.2.0, tag: latest, origin/main"
        assert parse_tag_decoration(decoration) == ("v1.2.0", "latest")

    def test_empty(self):
        assert parse_tag_decoration("") == ()

    def test_branches_only(self):
        assert parse_tag_decoration("HEAD -> main, origin/main") == ()


class TestParseLogOutput:
    """Tests for parse_log_output()."""

    def test_multiline_messages(self):
        output = (
            "aaa\x1fAlice\x1falice@example.com\x1f2024-01-02T10:00:00+00:00\x1f"
            "HEAD -> main\x1ffeat: add login\n\nLonger body.\n\x1e\n"
            "bbb\x1fBob\x1fbob@example.com\x1f2024-01-01T10:00:00+00:00\x1f"
            "tag: v1.2.0\x1fchore: release\n\x1e"
        )
        commits = list(parse_log_output(output))

        assert [c.sha for c in commits] == ["aaa", "bbb"]
        assert commits[0].message == "feat: add login\n\nLonger body."
        assert commits[0].subject == "feat: add login"
        assert commits[0].tags == ()
        assert commits[1].tags == ("v1.2.0",)
        assert commits[1].date == datetime.fromisoformat("2024-01-01T10:00:00+00:00")

    def test_empty_output(self):
        assert list(parse_log_output("")) == []


class TestCommit:
    """Tests for the Commit record."""

    def test_subject_and_short_sha(self):
        commit = Commit("0123456789abcdef", "fix: a\n\nbody", "T", "t@t.com", datetime.now())

        assert commit.subject == "fix: a"
        assert commit.short_sha == "0123456"
        assert commit.tags == ()


class TestGitRepository:
    """Tests for GitRepository against real repositories."""

    def test_not_a_repository(self, tmp_path: Path):
        with pytest.raises(NotAGitRepositoryError):
            GitRepository(tmp_path)

    def test_path_is_toplevel(self, temp_git_repo_with_pyproject: Path):
        subdir = temp_git_repo_with_pyproject / "src"
        subdir.mkdir()

        repo = GitRepository(subdir)

        assert repo.path.resolve() == temp_git_repo_with_pyproject.resolve()

    def test_empty_repository_has_no_commits(self, temp_git_repo: Path):
        assert list(GitRepository(temp_git_repo).iter_commits()) == []

    def test_iter_commits_newest_first_with_tags(
        self, temp_git_repo_with_pyproject: Path, git: Callable[..., str]
    ):
        repo_path = temp_git_repo_with_pyproject
        git(repo_path, "tag", "v1.0.0")
        git(repo_path, "tag", "nightly")
        git(repo_path, "commit", "-q", "--allow-empty", "-m", "fix: a\n\nDetails here.")
        git(repo_path, "commit", "-q", "--allow-empty", "-m", "feat(ui): b")

        commits = list(GitRepository(repo_path).iter_commits())

        assert [c.subject for c in commits] == [
            "feat(ui): b",
            "fix: a",
            "chore: initial commit",
        ]
        assert commits[1].message == "fix: a\n\nDetails here."
        assert commits[0].tags == ()
        assert set(commits[2].tags) == {"v1.0.0", "nightly"}
        assert commits[0].author_email == "test@example.com"

    def test_is_dirty(self, temp_git_repo_with_pyproject: Path):
        repo = GitRepository(temp_git_repo_with_pyproject)
        assert not repo.is_dirty()

        (temp_git_repo_with_pyproject / "untracked.txt").write_text("ignored")
        assert not repo.is_dirty()

        (temp_git_repo_with_pyproject / "pyproject.toml").write_text("[project]\n")
        assert repo.is_dirty()

    def test_no_upstream_is_not_behind(self, temp_git_repo_with_pyproject: Path):
        assert not GitRepository(temp_git_repo_with_pyproject).is_behind()

    def test_is_behind_upstream(
        self, tmp_path: Path, temp_git_repo_with_pyproject: Path, git: Callable[..., str]
    ):
        """A clone is behind once its upstream gains a commit and it fetches."""
        clone = tmp_path / "clone"
        git(tmp_path, "clone", "-q", str(temp_git_repo_with_pyproject), str(clone))
        git(temp_git_repo_with_pyproject, "commit", "-q", "--allow-empty", "-m", "fix: upstream")

        repo = GitRepository(clone)
        assert not repo.is_behind()

        repo.update_remote()
        assert repo.is_behind()

    def test_add_commit_and_tag(self, temp_git_repo_with_pyproject: Path):
        repo = GitRepository(temp_git_repo_with_pyproject)
        pyproject = temp_git_repo_with_pyproject / "pyproject.toml"
        pyproject.write_text(pyproject.read_text().replace("1.0.0", "1.0.1"))

        repo.add(pyproject)
        repo.commit("Release v1.0.1")
        repo.create_tag("v1.0.1")

        newest = next(repo.iter_commits())
        assert newest.subject == "Release v1.0.1"
        assert newest.tags == ("v1.0.1",)
        assert "v1.0.1" in repo.get_tags()
        assert not repo.is_dirty()

    def test_failed_command_raises_git_error(self, temp_git_repo_with_pyproject: Path):
        repo = GitRepository(temp_git_repo_with_pyproject)
        repo.create_tag("v1.0.0")

        with pytest.raises(GitError) as exc_info:
            repo.create_tag("v1.0.0")

        assert exc_info.value.stderr
