"""CLI commands for git-ai."""

from gitai.cli.commands import (
    report,
    setup,
)

__all__ = [
    "report",
    "setup",
]
