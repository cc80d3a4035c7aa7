"""pyproject.toml version manipulation.

pyproject.toml is the manifest release-bump reads its fallback version
from and writes the released version into.

Updates preserve formatting, comments and key order by substituting the
version value in place rather than re-serialising the TOML document.
"""

from __future__ import annotations

import re
from pathlib import Path

from release_bump.config.loader import find_pyproject_toml
from release_bump.exceptions import ProjectError, VersionNotFoundError

# Sections that may declare the project version, in lookup order.
_VERSION_SECTIONS = ("project", "tool.poetry")

_VERSION_KEY = re.compile(
    r"^(?P<prefix>version\s*=\s*)(?P<quote>[\"'])(?P<value>[^\"'\n]*)(?P=quote)",
    re.MULTILINE,
)


def _resolve_path(path: Path | None) -> Path:
    if path is None:
        return find_pyproject_toml()
    if path.is_dir():
        return find_pyproject_toml(path)
    if not path.is_file():
        raise ProjectError(f"Manifest not found: {path}")
    return path


def _section_span(content: str, section: str) -> tuple[int, int] | None:
    """Character span of a TOML table body, up to the next table header."""
    header = re.search(rf"^\[{re.escape(section)}\][ \t]*(?:#.*)?$", content, re.MULTILINE)
    if header is None:
        return None
    next_header = re.compile(r"^\[", re.MULTILINE).search(content, header.end())
    end = next_header.start() if next_header else len(content)
    return header.end(), end


def _find_version(content: str) -> re.Match[str] | None:
    for section in _VERSION_SECTIONS:
        span = _section_span(content, section)
        if span is None:
            continue
        match = _VERSION_KEY.search(content, *span)
        if match is not None:
            return match
    return None


def get_pyproject_version(path: Path | None = None) -> str:
    """Get the version declared in pyproject.toml.

    Args:
        path: Path to pyproject.toml or a directory to search from

    Returns:
        Version string exactly as written

    Raises:
        VersionNotFoundError: If neither [project] nor [tool.poetry] declares a version
    """
    pyproject_path = _resolve_path(path)
    match = _find_version(pyproject_path.read_text())
    if match is None:
        raise VersionNotFoundError(
            f"Could not find version in {pyproject_path}. "
            "Expected [project].version or [tool.poetry].version."
        )
    return match.group("value")


def update_pyproject_version(path: Path | None, new_version: str) -> Path:
    """Write a new version into pyproject.toml.

    Only the version value changes; quoting style and everything else in
    the file is left as it was.

    Args:
        path: Path to pyproject.toml or directory containing it
        new_version: New version string to set

    Returns:
        Path to the updated pyproject.toml

    Raises:
        VersionNotFoundError: If no version is declared
        ProjectError: If the version is already new_version
    """
    pyproject_path = _resolve_path(path)
    content = pyproject_path.read_text()

    match = _find_version(content)
    if match is None:
        raise VersionNotFoundError(
            f"Could not find version to update in {pyproject_path}. "
            "Expected [project].version or [tool.poetry].version."
        )
    if match.group("value") == new_version:
        raise ProjectError(f"Version in {pyproject_path} is already {new_version}.")

    quote = match.group("quote")
    replacement = f"{match.group('prefix')}{quote}{new_version}{quote}"
    pyproject_path.write_text(content[: match.start()] + replacement + content[match.end() :])
    return pyproject_path
