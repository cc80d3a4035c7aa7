"""Version control integration."""

from __future__ import annotations

from release_bump.vcs.git import Commit, GitRepository

__all__ = ["Commit", "GitRepository"]
