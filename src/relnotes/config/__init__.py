"""Configuration management for relnotes."""

from __future__ import annotations

from relnotes.config.loader import load_config
from relnotes.config.models import (
    AttributionConfig,
    FallbackPolicy,
    GitHubConfig,
    RelnotesConfig,
)

__all__ = [
    "AttributionConfig",
    "FallbackPolicy",
    "GitHubConfig",
    "RelnotesConfig",
    "load_config",
]
