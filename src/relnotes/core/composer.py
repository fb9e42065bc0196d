"""End-to-end composition of release notes for a repository."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from relnotes.core.attribution import Attributor
from relnotes.core.commits import collect_commits, unique_authors
from relnotes.core.models import ReleaseContext
from relnotes.core.notes import render_release_notes
from relnotes.core.ranges import select_range
from relnotes.core.tags import resolve_current_tag, resolve_previous_ref
from relnotes.github.client import GitHubClient

if TYPE_CHECKING:
    from relnotes.config.models import RelnotesConfig
    from relnotes.vcs.git import GitRepository

logger = logging.getLogger(__name__)


def build_context(repo: GitRepository) -> ReleaseContext:
    """Gather tags, range, commits and authors for the release at HEAD.

    Raises:
        NoTagsFoundError: If the repository has no tags
        GitError: If a git query fails
    """
    tags = repo.list_tags()
    current = resolve_current_tag(repo, tags)
    previous = resolve_previous_ref(repo, current, tags)
    release_range = select_range(repo, current, previous)
    logger.info("Release %s: commits in %s", current.name, release_range)

    commits = collect_commits(repo, release_range)
    return ReleaseContext(
        current_tag=current,
        previous_ref=previous,
        release_range=release_range,
        head_sha=repo.head_sha(),
        commits=commits,
        authors=unique_authors(commits),
    )


def create_attributor(config: RelnotesConfig) -> Attributor:
    """Attributor for ``config``; lookups are only wired in when a token is set."""
    client = None
    if config.lookups_enabled and config.github.token is not None:
        client = GitHubClient(
            token=config.github.token.get_secret_value(),
            api_url=config.github.api_url,
            timeout=config.github.timeout,
        )
    return Attributor(
        client=client,
        fallback=config.attribution.fallback,
        web_url=config.github.web_url,
        max_workers=config.github.max_workers,
    )


def compose_release_notes(
    repo: GitRepository,
    config: RelnotesConfig,
    attributor: Attributor | None = None,
) -> str:
    """Produce the Markdown release notes for the release at HEAD.

    Args:
        repo: Git repository
        config: Run configuration
        attributor: Author resolver; built from ``config`` when omitted

    Returns:
        Markdown document
    """
    context = build_context(repo)
    owns_attributor = attributor is None
    if attributor is None:
        attributor = create_attributor(config)

    try:
        displays = attributor.display_many(context.authors)
    finally:
        if owns_attributor and attributor.client is not None:
            attributor.client.close()

    logger.info(
        "%d commits by %d contributors", context.commit_count, context.contributor_count
    )
    return render_release_notes(context, displays, config)
