"""Git repository access via the git command line.

Only the handful of operations the release workflow needs are wrapped:
reading history with tag decorations, checking remote/working-tree state,
and creating the release commit and tag.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

from release_bump.exceptions import GitError, NotAGitRepositoryError

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger(__name__)

# Unit and record separators keep multi-line commit bodies intact.
_FIELD_SEP = "\x1f"
_RECORD_SEP = "\x1e"
_LOG_FORMAT = _FIELD_SEP.join(["%H", "%an", "%ae", "%aI", "%D", "%B"]) + _RECORD_SEP
_TAG_DECORATION = "tag: "


@dataclass(frozen=True)
class Commit:
    """A commit as read from git.

    Attributes:
        sha: Full commit hash
        message: Full commit message, possibly multi-line
        author_name: Author name
        author_email: Author email
        date: Author date
        tags: Tag names attached to this commit, in the order git reports them
    """

    sha: str
    message: str
    author_name: str
    author_email: str
    date: datetime
    tags: tuple[str, ...] = ()

    @property
    def subject(self) -> str:
        """First line of the commit message."""
        return self.message.strip().split("\n", 1)[0]

    @property
    def short_sha(self) -> str:
        return self.sha[:7]


def parse_tag_decoration(decoration: str) -> tuple[str, ...]:
    """Extract tag names from a ``%D`` ref decoration.

    ``"HEAD -> main, tag: v1.2.0, origin/main"`` yields ``("v1.2.0",)``.
    Branch and remote refs are ignored.
    """
    tags = []
    for ref in decoration.split(", "):
        ref = ref.strip()
        if ref.startswith(_TAG_DECORATION):
            tags.append(ref[len(_TAG_DECORATION) :])
    return tuple(tags)


def parse_log_output(output: str) -> Iterator[Commit]:
    """Parse ``git log`` output produced with the release-bump log format."""
    for record in output.split(_RECORD_SEP):
        record = record.lstrip("\n")
        if not record:
            continue
        sha, author_name, author_email, date, decoration, message = record.split(_FIELD_SEP, 5)
        yield Commit(
            sha=sha,
            message=message.rstrip("\n"),
            author_name=author_name,
            author_email=author_email,
            date=datetime.fromisoformat(date),
            tags=parse_tag_decoration(decoration),
        )


class GitRepository:
    """A git work tree.

    Args:
        path: Any path inside the work tree

    Raises:
        NotAGitRepositoryError: If path is not inside a git work tree
    """

    def __init__(self, path: Path | str | None = None) -> None:
        start = Path(path) if path is not None else Path.cwd()
        if not start.is_dir():
            raise NotAGitRepositoryError(f"Not a directory: {start}")
        try:
            toplevel = self._git(start, "rev-parse", "--show-toplevel")
        except GitError as e:
            raise NotAGitRepositoryError(f"Not a git repository: {start}", stderr=e.stderr) from e
        self.path = Path(toplevel)

    @staticmethod
    def _git(cwd: Path, *args: str) -> str:
        cmd = ["git", *args]
        logger.debug("Running %s in %s", " ".join(cmd), cwd)
        try:
            result = subprocess.run(
                cmd,
                cwd=cwd,
                capture_output=True,
                text=True,
                check=True,
            )
        except FileNotFoundError as e:
            raise GitError("git executable not found") from e
        except subprocess.CalledProcessError as e:
            raise GitError(
                f"git {args[0]} failed with exit code {e.returncode}",
                stderr=e.stderr,
            ) from e
        return result.stdout.strip()

    def run(self, *args: str) -> str:
        """Run a git command in the repository and return its stripped stdout."""
        return self._git(self.path, *args)

    # Remote and working tree state

    def update_remote(self) -> None:
        """Fetch all remotes."""
        self.run("remote", "update")

    def is_behind(self) -> bool:
        """Whether the current branch is behind its upstream.

        A branch without an upstream is never behind.
        """
        status = self.run("status", "-uno", "--porcelain=v2", "--branch")
        for line in status.splitlines():
            if line.startswith("# branch.ab "):
                # "# branch.ab +<ahead> -<behind>"
                behind = line.split()[-1]
                return int(behind.lstrip("-")) > 0
        return False

    def is_dirty(self) -> bool:
        """Whether tracked files have uncommitted changes."""
        return bool(self.run("status", "--porcelain", "--untracked-files=no"))

    # History

    def iter_commits(self) -> Iterator[Commit]:
        """Iterate over the history of HEAD, newest first.

        An empty repository (no commits yet) yields nothing.
        """
        try:
            self.run("rev-parse", "--verify", "--quiet", "HEAD")
        except GitError:
            return
        output = self.run("log", f"--format={_LOG_FORMAT}", "--decorate=short")
        yield from parse_log_output(output)

    def get_tags(self) -> list[str]:
        output = self.run("tag", "--list")
        return [line for line in output.splitlines() if line]

    # Release operations

    def add(self, *paths: Path | str) -> None:
        self.run("add", "--", *(str(p) for p in paths))

    def commit(self, message: str) -> None:
        self.run("commit", "-m", message)

    def create_tag(self, name: str) -> None:
        """Create a lightweight tag at HEAD."""
        self.run("tag", name)

    def push(self) -> None:
        self.run("push")

    def push_tags(self) -> None:
        self.run("push", "--tags")
