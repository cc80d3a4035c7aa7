"""release-bump: conventional-commit driven version bumps for Python projects."""

from __future__ import annotations

__version__ = "0.1.0"
