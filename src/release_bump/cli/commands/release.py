"""Implementation of the 'release' command.

The release command resolves the unreleased commits, shows the proposed
version and, once confirmed, updates pyproject.toml, commits and tags.
Nothing is written before the confirmation.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from rich.markup import escape
from rich.prompt import Confirm
from rich.table import Table

from release_bump.config import load_config
from release_bump.config.loader import find_pyproject_toml
from release_bump.core.commits import CommitClassifier, decompose, describe_commit, first_line
from release_bump.core.resolver import plan_release
from release_bump.core.version import BumpLevel
from release_bump.exceptions import GitError, ReleaseBumpError
from release_bump.project.pyproject import get_pyproject_version, update_pyproject_version
from release_bump.vcs import GitRepository

if TYPE_CHECKING:
    from rich.console import Console

    from release_bump.config.models import ReleaseBumpConfig
    from release_bump.core.resolver import ReleasePlan

logger = logging.getLogger(__name__)

BUMP_STYLES = {
    BumpLevel.PATCH: "[blue]PATCH[/]",
    BumpLevel.MINOR: "[green]MINOR[/]",
    BumpLevel.MAJOR: "[yellow]MAJOR[/]",
}


def run_release(
    path: str | None,
    yes: bool,
    push: bool | None,
    fetch: bool | None,
    dry_run: bool,
    console: Console,
    err_console: Console,
) -> None:
    """Run the release command.

    Args:
        path: Optional path to project directory
        yes: Skip the "Proceed?" confirmation
        push: Force pushing on or off; None defers to config and prompting
        fetch: Force fetching on or off; None defers to config
        dry_run: Stop after showing the release plan
        console: Console for standard output
        err_console: Console for error output
    """
    project_path = Path(path) if path else Path.cwd()

    # Load configuration
    try:
        config = load_config(project_path)
    except ReleaseBumpError as e:
        err_console.print(f"[red]Error loading config:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    # Initialize git repository
    try:
        repo = GitRepository(project_path)
    except ReleaseBumpError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    # Read the manifest up front; it is rewritten after confirmation
    try:
        pyproject_path = find_pyproject_toml(project_path)
        manifest_version = get_pyproject_version(pyproject_path)
    except ReleaseBumpError as e:
        err_console.print(f"[red]Error reading pyproject.toml:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    try:
        _check_repository(repo, config, fetch, console, err_console)
        plan = plan_release(
            repo.iter_commits(),
            manifest_version,
            classifier=CommitClassifier(config.commits.type_mapping()),
            tag_prefix=config.tag_prefix,
        )
    except ReleaseBumpError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    if plan is None:
        console.print("\n[yellow]No new commits for release![/]")
        return

    for commit in plan.commits:
        logger.debug("%s %s", commit.short_sha, describe_commit(commit.message))

    show_plan(plan, console)

    if dry_run:
        console.print("[dim]Dry run, nothing was changed.[/]")
        return

    if not yes and not Confirm.ask("Proceed?", console=console):
        console.print("[red]Ok, exiting[/]")
        return

    try:
        _apply_release(repo, config, plan, pyproject_path, console)
    except ReleaseBumpError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    if _should_push(push, yes, config, console):
        try:
            with console.status("Pushing..."):
                repo.push()
                repo.push_tags()
        except ReleaseBumpError as e:
            err_console.print(f"[red]Error pushing:[/] {escape(str(e))}")
            raise SystemExit(1) from e
        console.print("  [green]✓[/] Pushed release commit and tags")

    console.print("\n[green bold]Done![/]")
    console.print("[yellow]Publish to PyPI: uv build && uv publish[/]")


def _check_repository(
    repo: GitRepository,
    config: ReleaseBumpConfig,
    fetch: bool | None,
    console: Console,
    err_console: Console,
) -> None:
    if not config.allow_dirty and repo.is_dirty():
        err_console.print(
            "[red]Error:[/] Repository has uncommitted changes.\n"
            "Commit or stash them, or use [cyan]allow_dirty = true[/] in config."
        )
        raise SystemExit(1)

    if config.git.fetch if fetch is None else fetch:
        with console.status("Fetching remote..."):
            repo.update_remote()
        console.print("  [green]✓[/] Fetched remote")

    if repo.is_behind():
        err_console.print("[red]Error:[/] Local branch is outdated, update first!")
        raise SystemExit(1)


def show_plan(plan: ReleasePlan, console: Console) -> None:
    """Print the commits in the release, the bump level and the version change."""
    table = Table(title="Commits in release", title_style="magenta", title_justify="left")
    table.add_column("Description")
    table.add_column("Type", style="green")
    table.add_column("Scope", style="blue")

    for commit in plan.commits:
        parts = decompose(commit.message)
        if parts is None:
            table.add_row(escape(first_line(commit.message)), "[yellow]non-conventional[/]", "")
        else:
            table.add_row(
                escape(parts.description),
                escape(parts.commit_type),
                escape(parts.scope or ""),
            )

    console.print()
    console.print(table)
    console.print(f"\n[magenta]Release type:[/] {BUMP_STYLES[plan.bump]}")

    source = "tag" if plan.from_tag else "pyproject.toml"
    console.print(
        f"[magenta]Version:[/] [blue]{plan.previous_version}[/] [dim]({source})[/] "
        f"[grey50]=>[/] [green]{plan.next_version}[/]\n"
    )


def _apply_release(
    repo: GitRepository,
    config: ReleaseBumpConfig,
    plan: ReleasePlan,
    pyproject_path: Path,
    console: Console,
) -> None:
    new_version = str(plan.next_version)

    if plan.tag_name in repo.get_tags():
        raise GitError(f"Tag '{plan.tag_name}' already exists")

    update_pyproject_version(pyproject_path, new_version)
    console.print("  [green]✓[/] Updated version in pyproject.toml")

    with console.status("Committing..."):
        repo.add(pyproject_path)
        repo.commit(config.format_commit_message(tag=plan.tag_name, version=new_version))
    console.print(f"  [green]✓[/] Committed release {new_version}")

    repo.create_tag(plan.tag_name)
    console.print(f"  [green]✓[/] Created tag [blue]{plan.tag_name}[/]")


def _should_push(
    push: bool | None,
    yes: bool,
    config: ReleaseBumpConfig,
    console: Console,
) -> bool:
    if push is not None:
        return push
    if config.git.push == "always":
        return True
    if config.git.push == "never" or yes:
        return False
    console.print()
    return Confirm.ask("Push?", default=False, console=console)
