"""Read-only snapshots of repository history used to build release notes."""

from __future__ import annotations

from dataclasses import dataclass, field

@dataclass(frozen=True)
class Tag:
    """A tag and the commit it points at (annotated tags are peeled)."""

    name: str
    commit: str


@dataclass(frozen=True, order=True)
class Author:
    """A commit author, identified by the (name, email) pair."""

    name: str
    email: str


@dataclass(frozen=True)
class Commit:
    """A single commit in a release range."""

    sha: str
    subject: str
    body: str
    author_name: str
    author_email: str

    @property
    def author(self) -> Author:
        return Author(self.author_name, self.author_email)

    @property
    def message(self) -> str:
        """Subject and body joined, the text searched for pull request references."""
        return f"{self.subject} {self.body}"

    def abbreviate(self, length: int) -> str:
        return self.sha[:length]


@dataclass(frozen=True)
class ReleaseRange:
    """Half-open commit interval: reachable from ``head`` but not from ``base``.

    A ``base`` of None selects everything reachable from ``head``.
    """

    base: str | None
    head: str

    @property
    def revision(self) -> str:
        """The git revision expression for this range."""
        if self.base is None:
            return self.head
        return f"{self.base}..{self.head}"

    @property
    def is_degenerate(self) -> bool:
        return self.base == self.head

    def __str__(self) -> str:
        return self.revision


@dataclass(frozen=True)
class ReleaseContext:
    """Everything gathered from the repository for one release."""

    current_tag: Tag
    previous_ref: str
    release_range: ReleaseRange
    head_sha: str
    commits: list[Commit] = field(default_factory=list)
    authors: list[Author] = field(default_factory=list)

    @property
    def commit_count(self) -> int:
        return len(self.commits)

    @property
    def contributor_count(self) -> int:
        return len(self.authors)
