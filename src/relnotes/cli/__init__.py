"""Command line interface for relnotes."""

from __future__ import annotations

from relnotes.cli.app import cli, main

__all__ = ["cli", "main"]
