"""Thin wrapper around the git command line.

Every query is a single ``git`` subprocess. Commit and tag listings
are fetched in one batched call each, using ASCII unit and record
separators to split fields.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from relnotes.core.models import Commit, ReleaseRange, Tag
from relnotes.exceptions import GitError

logger = logging.getLogger(__name__)

FIELD_SEP = "\x1f"
RECORD_SEP = "\x1e"

_LOG_FORMAT = FIELD_SEP.join(["%H", "%s", "%b", "%an", "%ae"]) + RECORD_SEP
_TAG_FORMAT = FIELD_SEP.join(["%(refname:short)", "%(objectname)", "%(*objectname)"])


class GitRepository:
    """A git working copy queried through the ``git`` executable."""

    def __init__(self, path: Path | str | None = None) -> None:
        self.path = Path(path) if path else Path.cwd()
        if not self.path.is_dir():
            raise GitError(f"Not a directory: {self.path}")
        self._run("rev-parse", "--git-dir")

    def _run(self, *args: str, check: bool = True) -> subprocess.CompletedProcess[str]:
        cmd = ["git", *args]
        logger.debug("Running %s", " ".join(cmd))
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                cwd=self.path,
            )
        except FileNotFoundError as e:
            raise GitError("git not found. Install git and make sure it is on PATH") from e

        if check and result.returncode != 0:
            raise GitError(
                f"git {args[0]} failed with exit code {result.returncode}",
                stderr=result.stderr,
            )
        return result

    def _output(self, *args: str) -> str:
        return self._run(*args).stdout.strip()

    def rev_parse(self, ref: str) -> str:
        """Resolve a ref to the full id of the commit it points at."""
        return self._output("rev-parse", "--verify", f"{ref}^{{commit}}")

    def head_sha(self) -> str:
        return self.rev_parse("HEAD")

    def nearest_tag(self, ref: str = "HEAD") -> str | None:
        """Name of the nearest tag reachable from ``ref``, or None."""
        result = self._run("describe", "--tags", "--abbrev=0", ref, check=False)
        if result.returncode != 0:
            return None
        return result.stdout.strip() or None

    def exact_tag(self, ref: str = "HEAD") -> str | None:
        """Name of a tag pointing exactly at ``ref``, or None."""
        result = self._run("describe", "--tags", "--exact-match", ref, check=False)
        if result.returncode != 0:
            return None
        return result.stdout.strip() or None

    def list_tags(self) -> list[Tag]:
        """All tags, highest version first, each with its peeled commit id."""
        output = self._output(
            "for-each-ref",
            "--sort=-version:refname",
            f"--format={_TAG_FORMAT}",
            "refs/tags",
        )
        tags = []
        for line in output.splitlines():
            if not line:
                continue
            name, object_id, peeled = (line.split(FIELD_SEP) + ["", ""])[:3]
            tags.append(Tag(name=name, commit=peeled or object_id))
        return tags

    def root_commits(self, ref: str = "HEAD") -> list[str]:
        """Commits without parents reachable from ``ref``, newest first."""
        return self._output("rev-list", "--max-parents=0", ref).split()

    def has_parent(self, ref: str) -> bool:
        result = self._run("rev-parse", "--verify", "--quiet", f"{ref}^", check=False)
        return result.returncode == 0

    def log(self, release_range: ReleaseRange) -> list[Commit]:
        """Commits in ``release_range``, newest first."""
        output = self._run("log", f"--format={_LOG_FORMAT}", release_range.revision, "--").stdout
        commits = []
        for record in output.split(RECORD_SEP):
            record = record.strip("\n")
            if not record:
                continue
            sha, subject, body, author_name, author_email = record.split(FIELD_SEP, 4)
            commits.append(
                Commit(
                    sha=sha,
                    subject=subject,
                    body=body.strip(),
                    author_name=author_name,
                    author_email=author_email,
                )
            )
        return commits
