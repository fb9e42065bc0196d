"""Minimal GitHub REST client for resolving commit authors to user handles."""

from __future__ import annotations

import logging
import re
import threading
from typing import Any

import requests

from relnotes import __version__
from relnotes.exceptions import LookupFailure, MalformedResponseError

logger = logging.getLogger(__name__)

_NAME_UNSAFE = re.compile(r"[^A-Za-z0-9 ]")


def sanitize_search_name(name: str) -> str:
    """Reduce an author name to letters, digits and single spaces.

    Spaces are encoded as ``+`` when the query string is built.
    """
    return " ".join(_NAME_UNSAFE.sub("", name).split())


class GitHubClient:
    """Searches GitHub users by email address or display name.

    Each call issues exactly one request; there are no retries. Every
    thread gets its own ``requests.Session`` unless one is injected.
    """

    def __init__(
        self,
        token: str,
        api_url: str = "https://api.github.com",
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.headers = {
            "Accept": "application/vnd.github+json",
            "Authorization": f"token {token}",
            "User-Agent": f"relnotes/{__version__}",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        self._shared_session = session
        if session is not None:
            session.headers.update(self.headers)
        self._local = threading.local()
        self._sessions: list[requests.Session] = []
        self._sessions_lock = threading.Lock()

    @property
    def session(self) -> requests.Session:
        """The session for the calling thread."""
        if self._shared_session is not None:
            return self._shared_session

        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            session.headers.update(self.headers)
            self._local.session = session
            with self._sessions_lock:
                self._sessions.append(session)
        return session

    def find_login_by_email(self, email: str) -> str | None:
        """Login of the first user whose public email matches ``email``."""
        if not email:
            return None
        return self._search_users(f"{email} in:email")

    def find_login_by_name(self, name: str) -> str | None:
        """Login of the first user whose profile name matches ``name``."""
        search_name = sanitize_search_name(name)
        if not search_name:
            return None
        return self._search_users(f"{search_name} in:name")

    def _search_users(self, query: str) -> str | None:
        url = f"{self.api_url}/search/users"
        try:
            response = self.session.get(url, params={"q": query}, timeout=self.timeout)
        except requests.RequestException as e:
            raise LookupFailure(f"User search {query!r} failed: {e}") from e

        if not response.ok:
            raise LookupFailure(
                f"User search {query!r} failed: HTTP {response.status_code} {response.reason}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResponseError(f"User search {query!r} returned invalid JSON") from e

        return _first_login(data, query)

    def close(self) -> None:
        if self._shared_session is not None:
            self._shared_session.close()
        with self._sessions_lock:
            sessions, self._sessions = self._sessions, []
        for session in sessions:
            session.close()

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def _first_login(data: Any, query: str) -> str | None:
    if not isinstance(data, dict) or not isinstance(data.get("items"), list):
        raise MalformedResponseError(f"User search {query!r} returned no 'items' list")

    items = data["items"]
    if not items:
        return None

    first = items[0]
    login = first.get("login") if isinstance(first, dict) else None
    if login is not None and not isinstance(login, str):
        raise MalformedResponseError(f"User search {query!r} returned a non-string login")
    if not login or login == "null":
        return None
    logger.debug("Resolved %r to @%s", query, login)
    return login
