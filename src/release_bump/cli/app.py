"""Typer application for release-bump."""

from __future__ import annotations

import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from release_bump import __version__

app = typer.Typer(
    name="release-bump",
    help="Bump the project version from conventional commits and tag the release.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()
err_console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    logger = logging.getLogger("release_bump")
    logger.handlers.clear()
    logger.addHandler(RichHandler(console=err_console, show_path=False, rich_tracebacks=True))
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"release-bump {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging."),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show the release-bump version and exit.",
        ),
    ] = False,
) -> None:
    """Conventional-commit release helper."""
    _configure_logging(verbose)


@app.command()
def release(
    path: Annotated[
        str | None,
        typer.Argument(help="Project directory (defaults to the current directory)."),
    ] = None,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Do not ask for confirmation before releasing."),
    ] = False,
    push: Annotated[
        bool | None,
        typer.Option(
            "--push/--no-push",
            help="Push the release commit and tag, or never push. Asks when omitted.",
        ),
    ] = None,
    no_fetch: Annotated[
        bool,
        typer.Option("--no-fetch", help="Do not fetch remotes before resolving."),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show the release plan without changing anything."),
    ] = False,
) -> None:
    """Bump the version, commit and tag a release."""
    from release_bump.cli.commands.release import run_release

    run_release(
        path=path,
        yes=yes,
        push=push,
        fetch=False if no_fetch else None,
        dry_run=dry_run,
        console=console,
        err_console=err_console,
    )


@app.command("next")
def next_version(
    path: Annotated[
        str | None,
        typer.Argument(help="Project directory (defaults to the current directory)."),
    ] = None,
) -> None:
    """Print the next release version, or nothing if there is nothing to release."""
    from release_bump.cli.commands.next import run_next

    run_next(path=path, console=console, err_console=err_console)
