"""CLI module for git-ai."""

from typing import Annotated, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from gitai import __version__
from gitai.cli.commands import (
    report as report_cmd,
    setup as setup_cmd,
)
from gitai.cli.router import Mode, parse_invocation
from gitai.config import Settings
from gitai.errors import GitAIError, InvalidArguments
from gitai.log import configure_logging
from gitai.vcs.git import GitRepository

console = Console()
err_console = Console(stderr=True)

EXAMPLES = """
Examples:

  git ai -b                          AI commits in current branch

  git ai -b feature/new-login        AI commits in a specific branch

  git ai -f                          AI commits since current branch left main/master

  git ai -f feature/new-login main   AI commits since branch creation from main

  git ai -c main feature/new-login   Compare feature branch with main

  git ai -t v2.0.3                   AI commits added by a tag

  git ai -t v2.0.3 v2.0.2            AI commits between two tags

  git ai -r v1.0.0 v2.0.0            AI commits between two versions

  git ai -a                          AI stats for all branches

  git ai -s                          Set up AI tracking in current repo
"""

app = typer.Typer(
    name="git-ai",
    help="Track AI-assisted commits across branches, tags and ranges.",
    epilog=EXAMPLES,
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[dim]git-ai[/dim] v{__version__}")
        raise typer.Exit()


@app.command()
def main(
    ctx: typer.Context,
    refs: Annotated[
        Optional[list[str]],
        typer.Argument(help="Branches, tags or commits for the selected mode.", show_default=False),
    ] = None,
    branch: Annotated[
        bool, typer.Option("--branch", "-b", help="AI commits in a branch [BRANCH] (default: current).")
    ] = False,
    tag: Annotated[
        bool, typer.Option("--tag", "-t", help="AI commits in a tag TAG [PREV_TAG] (default: previous tag).")
    ] = False,
    feature: Annotated[
        bool,
        typer.Option(
            "--feature",
            "-f",
            help="AI commits since a branch diverged [BRANCH] [BASE] (default base: main, then master).",
        ),
    ] = False,
    compare: Annotated[
        bool, typer.Option("--compare", "-c", help="Compare BASE FEATURE branches.")
    ] = False,
    all_branches: Annotated[
        bool, typer.Option("--all-branches", "-a", help="AI stats for all branches [BASE].")
    ] = False,
    range_: Annotated[
        bool, typer.Option("--range", "-r", help="AI commits between FROM TO.")
    ] = False,
    setup: Annotated[
        bool, typer.Option("--setup", "-s", help="Set up AI tracking hooks in current repository.")
    ] = False,
    limit: Annotated[
        Optional[int],
        typer.Option("--limit", "-n", min=0, help="Number of recent AI commits to list."),
    ] = None,
    json_output: Annotated[
        bool, typer.Option("--json", help="Print the report as JSON.")
    ] = False,
    verbose: Annotated[
        int, typer.Option("--verbose", "-v", count=True, help="Increase log verbosity.")
    ] = 0,
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, is_eager=True, help="Show version and exit."),
    ] = None,
) -> None:
    """Track AI-assisted commits across branches, tags and ranges."""
    configure_logging(verbose)

    flags = {
        Mode.BRANCH: branch,
        Mode.TAG: tag,
        Mode.FEATURE: feature,
        Mode.COMPARE: compare,
        Mode.ALL_BRANCHES: all_branches,
        Mode.RANGE: range_,
        Mode.SETUP: setup,
    }

    try:
        invocation = parse_invocation([mode for mode, on in flags.items() if on], refs)
        if invocation.mode == Mode.HELP:
            console.print(ctx.get_help())
            return

        repo = GitRepository.discover()

        if invocation.mode == Mode.SETUP:
            setup_cmd.setup(repo)
            return

        try:
            settings = Settings.load(repo)
        except ValidationError as e:
            raise InvalidArguments(f"Invalid configuration: {e}") from e

        report_cmd.report(
            invocation,
            repo,
            settings,
            limit=settings.recent_limit if limit is None else limit,
            as_json=json_output,
        )
    except GitAIError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(e.exit_code)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
