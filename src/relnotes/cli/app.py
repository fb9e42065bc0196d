"""Command line entry point for relnotes."""

from __future__ import annotations

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from relnotes import __version__
from relnotes.config.models import FallbackPolicy

console = Console()
err_console = Console(stderr=True)


def setup_logging(verbose: bool) -> None:
    """Send log records to stderr through rich; WARNING unless verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )
    if verbose:
        logging.getLogger("urllib3").setLevel(logging.WARNING)


class _Command(click.Command):
    """Command reporting usage errors with exit status 1."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            e.exit_code = 1
            raise


@click.command(cls=_Command, context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("repository", metavar="<owner/repo>")
@click.option(
    "-C",
    "--path",
    type=click.Path(exists=True, file_okay=False),
    help="Repository working copy (defaults to the current directory).",
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, writable=True),
    help="Write the notes to this file instead of stdout.",
)
@click.option(
    "--token",
    envvar="GITHUB_TOKEN",
    show_envvar=True,
    help="GitHub token used to resolve authors to GitHub handles.",
)
@click.option(
    "--no-lookup",
    is_flag=True,
    help="Never query GitHub; show every author with the fallback policy.",
)
@click.option(
    "--fallback",
    type=click.Choice([policy.value for policy in FallbackPolicy]),
    help="How to show authors without a resolved handle (default: slug).",
)
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging on stderr.")
@click.version_option(__version__, prog_name="relnotes")
def cli(
    repository: str,
    path: str | None,
    output: str | None,
    token: str | None,
    no_lookup: bool,
    fallback: str | None,
    verbose: bool,
) -> None:
    """Generate Markdown release notes for the tag at HEAD.

    Commits since the previous tag are listed with links to the commit,
    the author and any referenced pull request.

    \b
    EXAMPLES:
      relnotes myorg/myapp
      GITHUB_TOKEN=... relnotes myorg/myapp -o RELEASE_NOTES.md
    """
    from relnotes.cli.commands.generate import run_generate

    setup_logging(verbose)
    run_generate(
        repository=repository,
        path=path,
        output=output,
        token=token or None,
        lookup=not no_lookup,
        fallback=FallbackPolicy(fallback) if fallback else None,
        console=console,
        err_console=err_console,
    )


def main() -> None:
    cli(prog_name="relnotes")
