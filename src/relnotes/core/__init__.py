"""Core logic for relnotes.

- Tag resolution and range selection
- Commit and author extraction
- Author attribution via GitHub
- Markdown rendering
"""

from __future__ import annotations

from relnotes.core.attribution import Attributor, slugify_name
from relnotes.core.commits import collect_commits, find_pr_number, unique_authors
from relnotes.core.composer import build_context, compose_release_notes, create_attributor
from relnotes.core.models import Author, Commit, ReleaseContext, ReleaseRange, Tag
from relnotes.core.notes import format_commit_line, render_release_notes
from relnotes.core.ranges import select_range, single_commit_range
from relnotes.core.tags import resolve_current_tag, resolve_previous_ref

__all__ = [
    # Attribution
    "Attributor",
    # Models
    "Author",
    "Commit",
    "ReleaseContext",
    "ReleaseRange",
    "Tag",
    "build_context",
    "collect_commits",
    "compose_release_notes",
    "create_attributor",
    "find_pr_number",
    "format_commit_line",
    "render_release_notes",
    "resolve_current_tag",
    "resolve_previous_ref",
    "select_range",
    "single_commit_range",
    "slugify_name",
    "unique_authors",
]
