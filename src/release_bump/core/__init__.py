"""Core business logic for release-bump.

This module contains the fundamental building blocks:
- Semantic version parsing and bumping
- Conventional commit classification
- Release window resolution
"""

from __future__ import annotations

from release_bump.core.commits import (
    CommitClassifier,
    CommitParts,
    TypeMapping,
    decompose,
    describe_commit,
)
from release_bump.core.resolver import (
    ReleasePlan,
    compute_bump,
    plan_release,
    resolve_baseline,
    resolve_window,
)
from release_bump.core.version import BumpLevel, Version, bump_version, parse_release_tag

__all__ = [
    # Version
    "BumpLevel",
    # Commits
    "CommitClassifier",
    "CommitParts",
    # Resolver
    "ReleasePlan",
    "TypeMapping",
    "Version",
    "bump_version",
    "compute_bump",
    "decompose",
    "describe_commit",
    "parse_release_tag",
    "plan_release",
    "resolve_baseline",
    "resolve_window",
]
