"""Conventional commit classification.

A commit's subject line is matched against a fixed, ordered mapping of
type tokens to bump levels. Only the ``type:`` and ``type(scope):``
prefixes are recognised; breaking-change markers are not interpreted.

Example subjects:
    feat: add user authentication
    fix(api): handle null response
    Merge branch 'main'           (non-conventional)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from release_bump.core.version import BumpLevel

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

# type[(scope)]: description
COMMIT_PATTERN = re.compile(
    r"^(?P<type>[^\s():]+)"
    r"(?:\((?P<scope>[^()]*)\))?"
    r": \s*(?P<description>\S.*)$"
)


def first_line(message: str) -> str:
    """Return the first line of a commit message, outer whitespace stripped."""
    return message.strip().split("\n", 1)[0].strip()


@dataclass(frozen=True)
class TypeMapping:
    """Ordered, immutable mapping of commit type tokens to bump levels.

    Declaration order decides which token wins when several could match.
    """

    entries: tuple[tuple[str, BumpLevel], ...]

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for token, _level in self.entries:
            if not token:
                raise ValueError("Commit type tokens must not be empty")
            if token in seen:
                raise ValueError(f"Commit type '{token}' is mapped more than once")
            seen.add(token)

    @classmethod
    def default(cls) -> TypeMapping:
        """``feat`` bumps MINOR, ``fix`` bumps PATCH."""
        return cls((("feat", BumpLevel.MINOR), ("fix", BumpLevel.PATCH)))

    @classmethod
    def from_levels(cls, levels: Iterable[tuple[str, BumpLevel]]) -> TypeMapping:
        return cls(tuple(levels))

    def __iter__(self) -> Iterator[tuple[str, BumpLevel]]:
        return iter(self.entries)

    @property
    def tokens(self) -> tuple[str, ...]:
        return tuple(token for token, _ in self.entries)

    def level_of(self, token: str) -> BumpLevel | None:
        for candidate, level in self.entries:
            if candidate == token:
                return level
        return None


class CommitClassifier:
    """Maps commit messages to bump levels.

    Args:
        mapping: Type mapping to use. Defaults to TypeMapping.default().
    """

    def __init__(self, mapping: TypeMapping | None = None) -> None:
        self.mapping = mapping if mapping is not None else TypeMapping.default()

    def commit_type(self, message: str) -> str | None:
        """Return the conventional commit type of a message.

        The first token, in mapping order, for which the subject starts with
        ``token:`` or ``token(`` wins. Matching is exact and case-sensitive.

        Returns:
            The matched type token, or None for a non-conventional message
        """
        subject = first_line(message)
        for token, _level in self.mapping:
            if subject.startswith((f"{token}:", f"{token}(")):
                return token
        return None

    def classify(self, message: str) -> BumpLevel | None:
        """Return the bump level a message implies, or None if it implies none."""
        token = self.commit_type(message)
        if token is None:
            return None
        return self.mapping.level_of(token)


@dataclass(frozen=True)
class CommitParts:
    """Display components of a conventional commit subject."""

    commit_type: str
    scope: str | None
    description: str


def decompose(message: str) -> CommitParts | None:
    """Split a subject into type, optional scope and description.

    Any type token is accepted here, not only the ones that bump the
    version, so ``docs(readme): typo`` still decomposes.

    Returns:
        CommitParts, or None if the subject is not ``type[(scope)]: description``
    """
    match = COMMIT_PATTERN.match(first_line(message))
    if match is None:
        return None
    return CommitParts(
        commit_type=match.group("type"),
        scope=match.group("scope") or None,
        description=match.group("description"),
    )


def describe_commit(message: str) -> str:
    """One-line label for a commit, e.g. ``add login | feat [auth]``."""
    parts = decompose(message)
    if parts is None:
        return f"{first_line(message)} | non-conventional"
    if parts.scope:
        return f"{parts.description} | {parts.commit_type} [{parts.scope}]"
    return f"{parts.description} | {parts.commit_type}"
