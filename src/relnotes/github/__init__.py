"""GitHub API access."""

from __future__ import annotations

from relnotes.github.client import GitHubClient, sanitize_search_name

__all__ = ["GitHubClient", "sanitize_search_name"]
