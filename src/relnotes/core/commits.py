"""Commit and author extraction for a release range."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from relnotes.core.models import Author, Commit

if TYPE_CHECKING:
    from collections.abc import Iterable

    from relnotes.core.models import ReleaseRange
    from relnotes.vcs.git import GitRepository

PR_REFERENCE_PATTERN = re.compile(r"#([0-9]+)")


def collect_commits(repo: GitRepository, release_range: ReleaseRange) -> list[Commit]:
    """Commits in ``release_range``, newest first, each exactly once."""
    seen: set[str] = set()
    commits = []
    for commit in repo.log(release_range):
        if commit.sha in seen:
            continue
        seen.add(commit.sha)
        commits.append(commit)
    return commits


def unique_authors(commits: Iterable[Commit]) -> list[Author]:
    """Distinct (name, email) pairs across ``commits``, sorted by name then email."""
    return sorted({commit.author for commit in commits})


def find_pr_number(text: str) -> str | None:
    """Return the number of the first ``#<digits>`` reference in ``text``.

    Only ASCII digits count. The number is returned as written, as text.

    >>> find_pr_number("Fix crash (fixes #42, see #7)")
    '42'
    >>> find_pr_number("Refactor parser") is None
    True
    """
    match = PR_REFERENCE_PATTERN.search(text)
    if match is None:
        return None
    return match.group(1)
