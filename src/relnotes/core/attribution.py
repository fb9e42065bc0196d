"""Attribution of commits to contributors.

An author is shown by GitHub handle when one can be resolved through
the user search API, first by email and then by name. Lookups are best
effort: any failure is logged and the author is shown using the
configured fallback policy instead.
"""

from __future__ import annotations

import logging
import re
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING

from relnotes.config.models import FallbackPolicy
from relnotes.exceptions import LookupFailure

if TYPE_CHECKING:
    from collections.abc import Iterable

    from relnotes.core.models import Author
    from relnotes.github.client import GitHubClient

logger = logging.getLogger(__name__)

_SLUG_UNSAFE = re.compile(r"[^a-z0-9-]")


def slugify_name(name: str) -> str:
    """Profile-style slug from an author name: ``"Jane O'Doe"`` -> ``"jane-odoe"``."""
    return _SLUG_UNSAFE.sub("", name.replace(" ", "-").lower())


def profile_link(login: str, web_url: str = "https://github.com") -> str:
    return f"[@{login}]({web_url}/{login})"


class Attributor:
    """Resolves authors to Markdown display strings.

    Results are cached per author, so each author is looked up at most
    once per run regardless of how many commits they made.
    """

    def __init__(
        self,
        client: GitHubClient | None = None,
        fallback: FallbackPolicy = FallbackPolicy.SLUG,
        web_url: str = "https://github.com",
        max_workers: int = 4,
    ) -> None:
        self.client = client
        self.fallback = fallback
        self.web_url = web_url.rstrip("/")
        self.max_workers = max_workers
        self._logins: dict[Author, str | None] = {}
        self._lock = threading.Lock()

    def resolve_login(self, author: Author) -> str | None:
        """GitHub login for ``author``, or None when it cannot be resolved."""
        with self._lock:
            if author in self._logins:
                return self._logins[author]

        login = self._lookup(author)

        with self._lock:
            self._logins.setdefault(author, login)
            return self._logins[author]

    def _lookup(self, author: Author) -> str | None:
        if self.client is None:
            return None

        try:
            login = self.client.find_login_by_email(author.email)
        except LookupFailure as e:
            logger.debug("Email lookup for %s failed: %s", author.name, e)
            login = None

        if login:
            return login

        try:
            return self.client.find_login_by_name(author.name)
        except LookupFailure as e:
            logger.debug("Name lookup for %s failed: %s", author.name, e)
            return None

    def fallback_display(self, author: Author) -> str:
        slug = slugify_name(author.name)
        if self.fallback is FallbackPolicy.NAME or not slug:
            return author.name
        return profile_link(slug, self.web_url)

    def display(self, author: Author) -> str:
        """Markdown shown for ``author`` in the release notes."""
        login = self.resolve_login(author)
        if login:
            return profile_link(login, self.web_url)
        return self.fallback_display(author)

    def display_many(self, authors: Iterable[Author]) -> dict[Author, str]:
        """Display strings for ``authors``, resolved concurrently.

        The returned mapping preserves the order of first appearance.
        """
        unique = list(dict.fromkeys(authors))
        if self.client is None or len(unique) <= 1:
            return {author: self.display(author) for author in unique}

        workers = min(self.max_workers, len(unique))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="relnotes-lookup") as pool:
            displays = list(pool.map(self.display, unique))
        return dict(zip(unique, displays, strict=True))
