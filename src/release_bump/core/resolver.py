"""Release window resolution and bump calculation.

The pipeline is pure: history -> window -> bump level -> next version.
History must be supplied newest first; that ordering is a precondition
and is not checked.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from release_bump.core.commits import CommitClassifier
from release_bump.core.version import BumpLevel, Version, parse_release_tag
from release_bump.exceptions import MissingBaselineError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from release_bump.vcs.git import Commit

logger = logging.getLogger(__name__)


def find_release_tag(commit: Commit, tag_prefix: str = "v") -> tuple[str, Version] | None:
    """Return the first tag on a commit that parses as a release tag."""
    for tag in commit.tags:
        version = parse_release_tag(tag, tag_prefix)
        if version is not None:
            return tag, version
    return None


def resolve_window(
    history: Iterable[Commit],
    tag_prefix: str = "v",
) -> tuple[list[Commit], Version | None]:
    """Collect the commits made since the last release.

    History is consumed lazily and scanning stops at the first commit
    carrying a release tag. That commit is excluded from the window.

    Args:
        history: Commits, newest first
        tag_prefix: Release tag prefix

    Returns:
        Tuple of (unreleased commits newest first, last released version).
        The version is None when no release tag exists in the history.
    """
    window: list[Commit] = []
    for commit in history:
        release = find_release_tag(commit, tag_prefix)
        if release is not None:
            tag, version = release
            logger.debug("Last release %s at %s, %d new commit(s)", tag, commit.sha, len(window))
            return window, version
        window.append(commit)
    logger.debug("No release tag found, %d commit(s) in history", len(window))
    return window, None


def compute_bump(
    commits: Iterable[Commit],
    classifier: CommitClassifier | None = None,
) -> BumpLevel:
    """Reduce a release window to a single bump level.

    Non-conventional commits contribute nothing. An empty window, or one
    without any conventional commit, yields PATCH.
    """
    classifier = classifier or CommitClassifier()
    levels = (classifier.classify(commit.message) for commit in commits)
    return max((level for level in levels if level is not None), default=BumpLevel.PATCH)


def resolve_baseline(last_version: Version | None, fallback: str | None) -> Version:
    """Pick the version the next release is computed from.

    Args:
        last_version: Version of the last release tag, if any
        fallback: Version declared in the manifest

    Raises:
        MissingBaselineError: If neither is available
        InvalidVersionError: If the fallback is not major.minor.patch
    """
    if last_version is not None:
        return last_version
    if fallback is None:
        raise MissingBaselineError(
            "No release tag found in history and no fallback version available."
        )
    return Version.parse(fallback)


@dataclass(frozen=True)
class ReleasePlan:
    """Outcome of resolving a release.

    Attributes:
        commits: Unreleased commits, newest first
        previous_version: Version the bump starts from
        bump: Bump level applied
        next_version: Version to release
        from_tag: Whether previous_version came from a release tag
        tag_prefix: Prefix used for release tags
    """

    commits: tuple[Commit, ...]
    previous_version: Version
    bump: BumpLevel
    next_version: Version
    from_tag: bool
    tag_prefix: str = "v"

    @property
    def tag_name(self) -> str:
        return f"{self.tag_prefix}{self.next_version}"


def plan_release(
    history: Iterable[Commit],
    fallback_version: str | None,
    classifier: CommitClassifier | None = None,
    tag_prefix: str = "v",
) -> ReleasePlan | None:
    """Run the full resolution pipeline.

    Args:
        history: Commits, newest first
        fallback_version: Manifest version, used only when no release tag exists
        classifier: Commit classifier, defaults to the standard feat/fix mapping
        tag_prefix: Release tag prefix

    Returns:
        The release plan, or None when there is nothing to release

    Raises:
        MissingBaselineError: If no tag exists and fallback_version is None
        InvalidVersionError: If the fallback version is malformed
    """
    commits, last_version = resolve_window(history, tag_prefix)
    if not commits:
        return None

    previous = resolve_baseline(last_version, fallback_version)
    bump = compute_bump(commits, classifier)
    return ReleasePlan(
        commits=tuple(commits),
        previous_version=previous,
        bump=bump,
        next_version=previous.bump(bump),
        from_tag=last_version is not None,
        tag_prefix=tag_prefix,
    )
