"""Shared fixtures: throwaway git repositories with controlled history."""

from __future__ import annotations

import os
import subprocess
from collections.abc import Callable
from pathlib import Path

import pytest

ALICE = ("Alice Smith", "alice@example.com")
BOB = ("Bob Jones", "bob@example.com")


def git(path: Path, *args: str, env: dict[str, str] | None = None) -> str:
    """Run git in ``path`` and return stripped stdout."""
    full_env = {
        **os.environ,
        "GIT_CONFIG_NOSYSTEM": "1",
        "GIT_COMMITTER_NAME": "Release Bot",
        "GIT_COMMITTER_EMAIL": "bot@example.com",
        **(env or {}),
    }
    full_env.pop("GIT_DIR", None)
    result = subprocess.run(
        ["git", "-c", "commit.gpgsign=false", "-c", "tag.gpgsign=false", *args],
        cwd=path,
        capture_output=True,
        text=True,
        check=True,
        env=full_env,
    )
    return result.stdout.strip()


CommitFactory = Callable[..., str]


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """An empty git repository."""
    repo = tmp_path / "repo"
    repo.mkdir()
    git(repo, "init", "-q")
    git(repo, "config", "user.name", "Release Bot")
    git(repo, "config", "user.email", "bot@example.com")
    return repo


@pytest.fixture
def make_commit(git_repo: Path) -> CommitFactory:
    """Create an empty commit by a given author and return its full sha."""
    counter = {"n": 0}

    def _make(
        subject: str,
        body: str = "",
        author: tuple[str, str] = ALICE,
    ) -> str:
        counter["n"] += 1
        name, email = author
        message = subject if not body else f"{subject}\n\n{body}"
        # Distinct, increasing dates keep history order unambiguous
        date = f"2024-01-01T00:{counter['n']:02d}:00+00:00"
        git(
            git_repo,
            "commit",
            "-q",
            "--allow-empty",
            "-m",
            message,
            env={
                "GIT_AUTHOR_NAME": name,
                "GIT_AUTHOR_EMAIL": email,
                "GIT_AUTHOR_DATE": date,
                "GIT_COMMITTER_DATE": date,
            },
        )
        return git(git_repo, "rev-parse", "HEAD")

    return _make


@pytest.fixture
def tag(git_repo: Path) -> Callable[..., None]:
    """Tag a ref; annotated when a message is given."""

    def _tag(name: str, ref: str = "HEAD", message: str | None = None) -> None:
        if message is None:
            git(git_repo, "tag", name, ref)
        else:
            git(git_repo, "tag", "-a", name, "-m", message, ref)

    return _tag


@pytest.fixture
def release_repo(git_repo: Path, make_commit: CommitFactory, tag: Callable[..., None]) -> Path:
    """v1.0.0 on the root commit, then 3 commits by 2 authors tagged v1.1.0.

    HEAD is at v1.1.0.
    """
    make_commit("Initial commit")
    tag("v1.0.0")
    make_commit("Add parser", author=ALICE)
    make_commit("Fix crash on empty input", body="fixes #42", author=BOB)
    make_commit("Update docs", author=ALICE)
    tag("v1.1.0")
    return git_repo


@pytest.fixture(autouse=True)
def _no_ambient_token(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)


@pytest.fixture
def run_git(git_repo: Path) -> Callable[..., str]:
    """Run a git command inside ``git_repo``."""

    def _run(*args: str) -> str:
        return git(git_repo, *args)

    return _run
