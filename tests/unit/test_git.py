"""Tests for the git command wrapper."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from relnotes.core.models import ReleaseRange
from relnotes.exceptions import GitError
from relnotes.vcs.git import GitRepository


class TestGitRepositoryInit:
    """Tests for GitRepository construction."""

    def test_not_a_repository(self, tmp_path: Path):
        with pytest.raises(GitError):
            GitRepository(tmp_path)

    def test_missing_directory(self, tmp_path: Path):
        with pytest.raises(GitError, match="Not a directory"):
            GitRepository(tmp_path / "missing")

    def test_git_not_installed(self, tmp_path: Path):
        """A missing git executable is reported as GitError."""
        with patch("subprocess.run", side_effect=FileNotFoundError("git")):
            with pytest.raises(GitError, match="git not found"):
                GitRepository(tmp_path)

    def test_failure_carries_stderr(self, tmp_path: Path):
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = subprocess.CompletedProcess(
                args=["git"], returncode=128, stdout="", stderr="fatal: not a git repository"
            )
            with pytest.raises(GitError) as exc_info:
                GitRepository(tmp_path)

        assert exc_info.value.stderr == "fatal: not a git repository"
        assert "not a git repository" in str(exc_info.value)


class TestTags:
    """Tests for tag queries."""

    def test_list_tags_version_order(self, git_repo, make_commit, tag):
        """Tags are sorted by version, not lexically."""
        make_commit("one")
        tag("v1.2.0")
        make_commit("two")
        tag("v1.10.0")
        make_commit("three")
        tag("v1.9.0")

        names = [t.name for t in GitRepository(git_repo).list_tags()]
        assert names == ["v1.10.0", "v1.9.0", "v1.2.0"]

    def test_annotated_tags_are_peeled(self, git_repo, make_commit, tag):
        """Annotated tags report the commit, not the tag object."""
        sha = make_commit("one")
        tag("v1.0.0", message="Release 1.0.0")

        (listed,) = GitRepository(git_repo).list_tags()
        assert listed.commit == sha

    def test_no_tags(self, git_repo, make_commit):
        make_commit("one")
        assert GitRepository(git_repo).list_tags() == []

    def test_nearest_and_exact_tag(self, git_repo, make_commit, tag):
        make_commit("one")
        tag("v1.0.0")
        repo = GitRepository(git_repo)
        assert repo.nearest_tag() == "v1.0.0"
        assert repo.exact_tag() == "v1.0.0"

        make_commit("two")
        assert repo.nearest_tag() == "v1.0.0"
        assert repo.exact_tag() is None

    def test_nearest_tag_none(self, git_repo, make_commit):
        make_commit("one")
        assert GitRepository(git_repo).nearest_tag() is None


class TestHistory:
    """Tests for history queries."""

    def test_rev_parse_and_head(self, git_repo, make_commit, tag):
        sha = make_commit("one")
        tag("v1.0.0", message="annotated")
        repo = GitRepository(git_repo)

        assert repo.head_sha() == sha
        assert repo.rev_parse("v1.0.0") == sha

    def test_rev_parse_unknown_ref(self, git_repo, make_commit):
        make_commit("one")
        with pytest.raises(GitError):
            GitRepository(git_repo).rev_parse("does-not-exist")

    def test_root_commits(self, git_repo, make_commit):
        root = make_commit("root")
        make_commit("child")
        assert GitRepository(git_repo).root_commits() == [root]

    def test_has_parent(self, git_repo, make_commit):
        root = make_commit("root")
        child = make_commit("child")
        repo = GitRepository(git_repo)

        assert repo.has_parent(child)
        assert not repo.has_parent(root)

    def test_log_is_single_batched_call(self, release_repo):
        """Commit metadata for a whole range comes from one git log."""
        repo = GitRepository(release_repo)
        with patch.object(repo, "_run", wraps=repo._run) as spy:
            commits = repo.log(ReleaseRange("v1.0.0", "v1.1.0"))

        assert len(commits) == 3
        assert spy.call_count == 1

    def test_log_multiline_body(self, git_repo, make_commit):
        make_commit("Subject line", body="First paragraph.\n\nSecond paragraph.")
        (commit,) = GitRepository(git_repo).log(ReleaseRange(None, "HEAD"))

        assert commit.subject == "Subject line"
        assert commit.body == "First paragraph.\n\nSecond paragraph."

    def test_log_empty_range(self, release_repo):
        repo = GitRepository(release_repo)
        assert repo.log(ReleaseRange("v1.1.0", "v1.1.0")) == []
