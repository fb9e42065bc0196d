"""Configuration models for relnotes.

Values come from the ``[tool.relnotes]`` table of ``pyproject.toml``
and from the command line. The GitHub token is never read from the
environment here; the CLI passes it in explicitly.
"""

from __future__ import annotations

import re
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

_REPOSITORY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+/[A-Za-z0-9_.-]+$")


class FallbackPolicy(str, Enum):
    """How an author is displayed when no GitHub handle could be resolved."""

    SLUG = "slug"
    """Profile-style link built from the author's name, e.g. ``[@jane-doe](...)``."""

    NAME = "name"
    """The author's name as written in the commit, without a link."""

    def __str__(self) -> str:
        return self.value


class GitHubConfig(BaseModel):
    """Settings for the GitHub user lookup service."""

    model_config = ConfigDict(extra="forbid")

    token: SecretStr | None = None
    api_url: str = "https://api.github.com"
    web_url: str = "https://github.com"
    timeout: float = Field(default=10.0, gt=0)
    max_workers: int = Field(default=4, ge=1, le=32)
    lookups: bool = True

    @field_validator("api_url", "web_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


class AttributionConfig(BaseModel):
    """Settings for author attribution."""

    model_config = ConfigDict(extra="forbid")

    fallback: FallbackPolicy = FallbackPolicy.SLUG


class RelnotesConfig(BaseModel):
    """Root configuration for a relnotes run."""

    model_config = ConfigDict(extra="forbid")

    repository: str
    short_sha_length: int = Field(default=7, ge=4, le=40)
    github: GitHubConfig = Field(default_factory=GitHubConfig)
    attribution: AttributionConfig = Field(default_factory=AttributionConfig)

    @field_validator("repository")
    @classmethod
    def _validate_repository(cls, value: str) -> str:
        value = value.strip().strip("/")
        if not _REPOSITORY_PATTERN.match(value):
            raise ValueError(f"expected <owner/repo>, got {value!r}")
        return value

    @property
    def repository_url(self) -> str:
        """Web URL of the repository, used for every hyperlink in the notes."""
        return f"{self.github.web_url}/{self.repository}"

    @property
    def lookups_enabled(self) -> bool:
        """Whether author lookups against the GitHub API should be attempted."""
        return self.github.lookups and self.github.token is not None
