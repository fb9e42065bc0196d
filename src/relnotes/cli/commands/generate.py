"""Implementation of the release notes command.

Writes Markdown to stdout (or a file); diagnostics go to stderr.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

from rich.markup import escape

from relnotes.config import load_config
from relnotes.core.composer import compose_release_notes
from relnotes.exceptions import ConfigError, GitError, NoTagsFoundError
from relnotes.vcs import GitRepository

if TYPE_CHECKING:
    from rich.console import Console

    from relnotes.config.models import FallbackPolicy


def run_generate(
    repository: str,
    path: str | None,
    output: str | None,
    token: str | None,
    lookup: bool,
    fallback: FallbackPolicy | None,
    console: Console,
    err_console: Console,
) -> None:
    """Run the release notes command.

    Args:
        repository: ``owner/repo`` used to build links
        path: Optional path to the repository working copy
        output: Optional file to write the notes to instead of stdout
        token: GitHub access token enabling author lookups
        lookup: Whether author lookups may be attempted at all
        fallback: Fallback display policy overriding the configured one
        console: Console for standard output
        err_console: Console for error output
    """
    project_path = Path(path) if path else Path.cwd()

    overrides: dict[str, Any] = {}
    if not lookup:
        overrides["github"] = {"lookups": False}
    if fallback is not None:
        overrides["attribution"] = {"fallback": fallback}

    try:
        config = load_config(project_path, repository, token=token, overrides=overrides)
    except ConfigError as e:
        err_console.print(f"[red]Error loading config:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    try:
        repo = GitRepository(project_path)
        notes = compose_release_notes(repo, config)
    except NoTagsFoundError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise SystemExit(1) from e
    except GitError as e:
        err_console.print(f"[red]Git error:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    if output:
        Path(output).write_text(notes, encoding="utf-8")
        err_console.print(f"[green]✓[/] Wrote release notes to [cyan]{output}[/]")
        return

    # Markdown must reach stdout untouched by rich markup or wrapping
    console.file.write(notes)
    console.file.flush()
