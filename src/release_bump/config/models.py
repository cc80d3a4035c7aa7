"""Configuration models for release-bump.

The configuration lives in pyproject.toml under [tool.release-bump]:

    [tool.release-bump]
    allow_dirty = false

    [tool.release-bump.commits]
    types_minor = ["feat"]
    types_patch = ["fix"]

    [tool.release-bump.version]
    tag_prefix = "v"

    [tool.release-bump.git]
    push = "ask"
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from release_bump.core.commits import TypeMapping
from release_bump.core.version import BumpLevel


class CommitsConfig(BaseModel):
    """Mapping of conventional commit types to bump levels."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    types_major: list[str] = Field(
        default_factory=list,
        description="Commit types that trigger a major bump",
    )
    types_minor: list[str] = Field(
        default_factory=lambda: ["feat"],
        description="Commit types that trigger a minor bump",
    )
    types_patch: list[str] = Field(
        default_factory=lambda: ["fix"],
        description="Commit types that trigger a patch bump",
    )

    @model_validator(mode="after")
    def _check_unique_types(self) -> CommitsConfig:
        seen: dict[str, str] = {}
        for level, types in (
            ("types_minor", self.types_minor),
            ("types_patch", self.types_patch),
            ("types_major", self.types_major),
        ):
            for commit_type in types:
                if not commit_type or not commit_type.strip():
                    raise ValueError(f"{level} contains an empty commit type")
                if commit_type in seen:
                    raise ValueError(
                        f"Commit type '{commit_type}' appears in both {seen[commit_type]} and {level}"
                    )
                seen[commit_type] = level
        return self

    def type_mapping(self) -> TypeMapping:
        """Build the classifier mapping: minor types, then patch, then major."""
        return TypeMapping.from_levels(
            [(t, BumpLevel.MINOR) for t in self.types_minor]
            + [(t, BumpLevel.PATCH) for t in self.types_patch]
            + [(t, BumpLevel.MAJOR) for t in self.types_major]
        )


class VersionConfig(BaseModel):
    """Version and tag settings."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    tag_prefix: str = Field(default="v", description="Prefix of release tags")
    commit_message: str = Field(
        default="Release {tag}",
        description="Release commit message; {tag} and {version} are substituted",
    )

    @field_validator("tag_prefix")
    @classmethod
    def _non_empty_prefix(cls, value: str) -> str:
        if not value or value != value.strip():
            raise ValueError("tag_prefix must be non-empty and contain no surrounding whitespace")
        return value

    @field_validator("commit_message")
    @classmethod
    def _known_placeholders(cls, value: str) -> str:
        try:
            value.format(tag="v0.0.0", version="0.0.0")
        except (KeyError, IndexError, AttributeError, ValueError) as e:
            raise ValueError(
                f"commit_message {value!r} is not a valid template; "
                "only {tag} and {version} can be substituted"
            ) from e
        return value


class GitConfig(BaseModel):
    """Remote interaction settings."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    fetch: bool = Field(default=True, description="Fetch remotes before resolving")
    push: Literal["ask", "always", "never"] = Field(
        default="ask",
        description="Whether to push the release commit and tag",
    )


class ReleaseBumpConfig(BaseModel):
    """Root configuration."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    allow_dirty: bool = Field(
        default=False,
        description="Allow releasing with uncommitted changes to tracked files",
    )
    commits: CommitsConfig = Field(default_factory=CommitsConfig)
    version: VersionConfig = Field(default_factory=VersionConfig)
    git: GitConfig = Field(default_factory=GitConfig)

    @property
    def tag_prefix(self) -> str:
        return self.version.tag_prefix

    def format_commit_message(self, tag: str, version: str) -> str:
        return self.version.commit_message.format(tag=tag, version=version)
