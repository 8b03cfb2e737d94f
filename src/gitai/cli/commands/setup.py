"""Set up AI tracking hooks in the current repository."""

from rich.console import Console
from rich.panel import Panel

from gitai.hooks.installer import install_hooks
from gitai.vcs.git import GitRepository

console = Console()


def setup(repo: GitRepository) -> None:
    """Install the commit-msg hook and its helper.

    Safe to run again: the hooks are overwritten with the same content.
    """
    installed = install_hooks(repo)
    hooks = "\n".join(f"  [green]✓[/green] {path}" for path in installed)

    console.print(
        Panel(
            f"[green]AI tracking enabled in {repo.root.name}[/green]\n\n"
            f"[bold]Installed:[/bold]\n{hooks}\n\n"
            f"Each commit now asks:\n"
            f"  [cyan]Is this code written by AI? (y/n)[/cyan]\n"
            f"AI commits are tagged with [bold]\\[AI][/bold] at the start of the subject.\n\n"
            f"[bold]Track AI commits:[/bold]\n"
            f"  [cyan]git ai -a[/cyan]              All branches\n"
            f"  [cyan]git ai -f <branch>[/cyan]     Feature branch since divergence\n"
            f"  [cyan]git ai -t <tag>[/cyan]        Commits added by a tag",
            title="git ai setup",
            border_style="green",
        )
    )
