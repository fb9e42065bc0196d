"""Markdown rendering of release notes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from relnotes.core.commits import find_pr_number

if TYPE_CHECKING:
    from collections.abc import Mapping

    from relnotes.config.models import RelnotesConfig
    from relnotes.core.models import Author, Commit, ReleaseContext


def render_release_notes(
    context: ReleaseContext,
    displays: Mapping[Author, str],
    config: RelnotesConfig,
) -> str:
    """Render the release notes document.

    Args:
        context: Repository snapshot for the release
        displays: Markdown display string per author
        config: Run configuration

    Returns:
        The notes as Markdown, ending with a newline
    """
    url = config.repository_url
    tag = context.current_tag.name
    head_short = context.head_sha[: config.short_sha_length]

    lines = [
        f"# Release {tag}",
        "",
        f"Repository: [{config.repository}]({url})"
        f" · Tag: [{tag}]({url}/releases/tag/{tag})"
        f" · Commit: [{head_short}]({url}/commit/{head_short})",
        "",
        f"In this release: **{context.commit_count}** commits"
        f" by **{context.contributor_count}** contributors",
        "",
        "## What's Changed",
        "",
    ]

    if context.commits:
        for commit in context.commits:
            lines.append(format_commit_line(commit, displays[commit.author], config))
    else:
        lines.append(f"- No changes found between {context.previous_ref} and {tag}")

    lines.extend(["", "## New Contributors", ""])
    for author in context.authors:
        lines.append(f"- {displays[author]} made their first contribution 🎉")

    lines.extend(
        [
            "",
            f"Full Changelog: [{context.previous_ref} → {tag}]"
            f"({url}/compare/{context.previous_ref}...{tag})",
        ]
    )
    return "\n".join(lines) + "\n"


def format_commit_line(commit: Commit, author_display: str, config: RelnotesConfig) -> str:
    """One ``What's Changed`` entry: commit link, subject, author and optional PR link."""
    url = config.repository_url
    short = commit.abbreviate(config.short_sha_length)
    line = f"- [{short}]({url}/commit/{commit.sha}) {commit.subject} by {author_display}"

    pr_number = find_pr_number(commit.message)
    if pr_number is not None:
        line += f" in [#{pr_number}]({url}/pull/{pr_number})"
    return line
