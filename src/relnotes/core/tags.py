"""Resolution of the current and previous release tags."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from relnotes.core.models import Tag
from relnotes.exceptions import NoTagsFoundError

if TYPE_CHECKING:
    from relnotes.vcs.git import GitRepository

logger = logging.getLogger(__name__)


def resolve_current_tag(repo: GitRepository, tags: list[Tag] | None = None) -> Tag:
    """Determine the tag being released.

    This is the nearest tag reachable from HEAD. When HEAD has no tag in
    its history, the highest tag in version order is used instead.

    Args:
        repo: Git repository
        tags: Tags in descending version order, if already listed

    Returns:
        The current tag

    Raises:
        NoTagsFoundError: If the repository has no tags at all
    """
    if tags is None:
        tags = repo.list_tags()
    if not tags:
        raise NoTagsFoundError()

    name = repo.nearest_tag("HEAD")
    if name is None:
        logger.debug("No tag reachable from HEAD, using highest tag %s", tags[0].name)
        return tags[0]

    for tag in tags:
        if tag.name == name:
            return tag
    return Tag(name=name, commit=repo.rev_parse(name))


def resolve_previous_ref(
    repo: GitRepository,
    current: Tag,
    tags: list[Tag] | None = None,
) -> str:
    """Determine where the release range starts.

    Tags are scanned in descending version order. The first tag after
    ``current`` that points at a different commit wins, so several tags
    on one commit are treated as a single release. Without such a tag,
    the repository's root commit is returned.

    Args:
        repo: Git repository
        current: The tag being released
        tags: Tags in descending version order, if already listed

    Returns:
        A tag name, or the full id of the root commit
    """
    if tags is None:
        tags = repo.list_tags()

    found_current = False
    for tag in tags:
        if tag.name == current.name:
            found_current = True
            continue
        if found_current and tag.commit != current.commit:
            return tag.name

    roots = repo.root_commits("HEAD")
    logger.debug("No tag before %s, falling back to root commit", current.name)
    # rev-list lists newest first; the oldest root is where history starts
    return roots[-1]
