"""Version control access."""

from __future__ import annotations

from relnotes.vcs.git import GitRepository

__all__ = ["GitRepository"]
