"""Implementation of the 'next' command.

Prints the version the next release would get, for use in scripts.
Nothing is printed when there are no commits since the last release.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich.markup import escape

from release_bump.config import load_config
from release_bump.core.commits import CommitClassifier
from release_bump.core.resolver import plan_release
from release_bump.exceptions import ReleaseBumpError, VersionNotFoundError
from release_bump.project.pyproject import get_pyproject_version
from release_bump.vcs import GitRepository

if TYPE_CHECKING:
    from rich.console import Console


def run_next(path: str | None, console: Console, err_console: Console) -> None:
    """Run the next command.

    Args:
        path: Optional path to project directory
        console: Console for standard output
        err_console: Console for error output
    """
    project_path = Path(path) if path else Path.cwd()

    try:
        config = load_config(project_path)
        repo = GitRepository(project_path)

        # A manifest without a version is fine as long as a release tag exists
        try:
            manifest_version: str | None = get_pyproject_version(project_path)
        except VersionNotFoundError:
            manifest_version = None

        plan = plan_release(
            repo.iter_commits(),
            manifest_version,
            classifier=CommitClassifier(config.commits.type_mapping()),
            tag_prefix=config.tag_prefix,
        )
    except ReleaseBumpError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    if plan is not None:
        console.print(str(plan.next_version), highlight=False, markup=False)
