"""Semantic version parsing and bumping.

Versions are plain ``major.minor.patch`` triples. Pre-release and build
metadata are deliberately not supported: a release tag either parses into
three integers or it is not a release tag at all.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum

from release_bump.exceptions import InvalidVersionError

_VERSION_RE = re.compile(r"(?P<major>[0-9]+)\.(?P<minor>[0-9]+)\.(?P<patch>[0-9]+)")


class BumpLevel(IntEnum):
    """Significance of a change, ordered PATCH < MINOR < MAJOR."""

    PATCH = 0
    MINOR = 1
    MAJOR = 2

    def __str__(self) -> str:
        return self.name.lower()


@dataclass(frozen=True, order=True)
class Version:
    """A semantic version.

    Attributes:
        major: Major version number
        minor: Minor version number
        patch: Patch version number
    """

    major: int
    minor: int
    patch: int

    def __post_init__(self) -> None:
        for name in ("major", "minor", "patch"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise InvalidVersionError(
                    f"Version component {name} must be a non-negative integer, got {value!r}"
                )

    @classmethod
    def parse(cls, text: str) -> Version:
        """Parse a ``major.minor.patch`` string.

        Args:
            text: Version string, surrounding whitespace is ignored

        Returns:
            Parsed Version

        Raises:
            InvalidVersionError: If any component is missing or not an integer
        """
        match = _VERSION_RE.fullmatch(text.strip())
        if match is None:
            raise InvalidVersionError(
                f"Invalid version '{text}'. Expected major.minor.patch with integer components."
            )
        return cls(int(match["major"]), int(match["minor"]), int(match["patch"]))

    def bump(self, level: BumpLevel) -> Version:
        """Return the next version for the given bump level."""
        if level == BumpLevel.MAJOR:
            return Version(self.major + 1, 0, 0)
        if level == BumpLevel.MINOR:
            return Version(self.major, self.minor + 1, 0)
        return Version(self.major, self.minor, self.patch + 1)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def bump_version(previous: Version, level: BumpLevel) -> Version:
    """Compute the version following ``previous`` at ``level``."""
    return previous.bump(level)


def parse_release_tag(tag: str, prefix: str = "v") -> Version | None:
    """Parse a release tag such as ``v1.2.3``.

    A tag that merely looks like a version (``v1.2``, ``v1.2.3-rc1``,
    ``v1.x.0``) is not a release tag and yields None.

    Args:
        tag: Tag name as reported by git
        prefix: Release tag prefix

    Returns:
        The tagged Version, or None if the tag is not a release tag
    """
    if not tag.startswith(prefix):
        return None
    match = _VERSION_RE.fullmatch(tag[len(prefix) :])
    if match is None:
        return None
    return Version(int(match["major"]), int(match["minor"]), int(match["patch"]))
