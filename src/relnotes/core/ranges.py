"""Selection of the commit range covered by a release."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from relnotes.core.models import ReleaseRange, Tag

if TYPE_CHECKING:
    from relnotes.vcs.git import GitRepository

logger = logging.getLogger(__name__)


def select_range(repo: GitRepository, current: Tag, previous: str) -> ReleaseRange:
    """Pick the commit range for the release notes.

    When HEAD sits exactly on a tag the notes describe a finished
    release (``previous..current``). Otherwise they describe unreleased
    work on top of the current tag (``current..HEAD``).

    A degenerate range, where both ends name or resolve to the same
    commit, is replaced by the single commit the current tag points at.

    Args:
        repo: Git repository
        current: The tag being released
        previous: Tag name or commit id the release starts after

    Returns:
        The range to enumerate commits from
    """
    at_tag = repo.exact_tag("HEAD") is not None
    if at_tag:
        release_range = ReleaseRange(base=previous, head=current.name)
    else:
        release_range = ReleaseRange(base=current.name, head="HEAD")

    degenerate = previous == current.name or release_range.is_degenerate
    if at_tag and not degenerate:
        degenerate = repo.rev_parse(previous) == current.commit

    if degenerate:
        release_range = single_commit_range(repo, current)
        logger.debug("Degenerate range, using %s", release_range)

    return release_range


def single_commit_range(repo: GitRepository, current: Tag) -> ReleaseRange:
    """The range holding only the commit ``current`` points at."""
    if repo.has_parent(current.name):
        return ReleaseRange(base=f"{current.name}^", head=current.name)
    return ReleaseRange(base=None, head=current.name)
