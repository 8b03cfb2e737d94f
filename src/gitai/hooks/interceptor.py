"""Commit-msg hook: ask whether a commit was written by AI and mark it.

Git runs this with the path of the pending commit message file. The hook
must never make the commit fail, so every error degrades to leaving the
message untouched.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Annotated, Mapping, Optional, TextIO

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.prompt import Confirm

from gitai.config import SOURCES, Settings
from gitai.errors import GitAIError
from gitai.log import configure_logging
from gitai.marker import COMMENT_CHAR, encode
from gitai.vcs.git import GitRepository

logger = logging.getLogger(__name__)

TTY_PATH = "/dev/tty"
QUESTION = "Is this code written by AI?"

# commit.cleanup modes that keep comment lines in the commit
KEEP_COMMENTS_CLEANUP = {"verbatim", "whitespace", "scissors"}


def ask(tty_path: str = TTY_PATH) -> bool:
    """Ask on the controlling terminal. Non-AI when there is none."""
    try:
        tty = open(tty_path, "r+", encoding="utf-8")
    except OSError:
        logger.info("No controlling terminal, treating commit as non-AI")
        return False

    with tty:
        return _confirm(tty)


def _confirm(tty: TextIO) -> bool:
    if not tty.isatty():
        logger.info("Not a terminal, treating commit as non-AI")
        return False

    console = Console(file=tty, force_terminal=True)
    try:
        return Confirm.ask(QUESTION, default=False, console=console, stream=tty)
    except EOFError:
        return False


def _discover() -> Optional[GitRepository]:
    try:
        return GitRepository.discover()
    except GitAIError:
        return None


def _settings_answer(repo: Optional[GitRepository]) -> Optional[bool]:
    """Answer from GIT_AI or ai.answer, if configured."""
    try:
        return Settings.load(repo).hook_answer
    except ValidationError as e:
        error = e.errors()[0]
        field = str(error["loc"][0]) if error["loc"] else "settings"
        env_var, config_key = SOURCES.get(field, (field, field))
        logger.warning(
            f"Ignoring invalid settings, {env_var} ({config_key}): {error['msg']}"
        )
        return None


def comment_char(
    repo: Optional[GitRepository],
    environ: Optional[Mapping[str, str]] = None,
) -> Optional[str]:
    """Return the comment prefix git strips from the message after the hook.

    Git sets GIT_EDITOR=: for the hook when it did not open an editor
    (-m, -F, --no-edit). Such a message holds no comment template and
    git keeps every line, so there is nothing to skip.

    Args:
        repo: Repository whose commit.cleanup and core.commentChar are read
            (git's defaults are assumed if None).
        environ: Hook environment (defaults to os.environ).

    Returns:
        Comment prefix, or None when no line of the message is a comment.
    """
    environ = os.environ if environ is None else environ
    if environ.get("GIT_EDITOR") == ":":
        return None
    if repo is None:
        return COMMENT_CHAR

    if repo.config_get("commit.cleanup") in KEEP_COMMENTS_CLEANUP:
        return None

    char = repo.config_get("core.commentString") or repo.config_get("core.commentChar")
    # "auto" picks a character the message does not use; "#" is its first choice.
    if not char or char == "auto":
        return COMMENT_CHAR
    return char


def intercept(message_file: Path, answer: Optional[bool] = None) -> bool:
    """Mark the pending commit message as AI-authored if the author says so.

    Args:
        message_file: Path to the commit message file git passes to the hook.
        answer: Answer to use instead of asking (GIT_AI, then the terminal,
            are consulted when None).

    Returns:
        True if the marker was written.
    """
    try:
        message = message_file.read_text(encoding="utf-8")
        repo = _discover()

        if answer is None:
            answer = _settings_answer(repo)
        if answer is None:
            answer = ask()
        if not answer:
            return False

        marked = encode(message, answer, comment_char(repo))
        if marked == message:
            return False

        message_file.write_text(marked, encoding="utf-8")
        logger.info(f"Marked commit message in {message_file} as AI")
        return True
    except Exception as e:
        logger.warning(f"Leaving commit message unmodified: {e}")
        return False


def hook(
    message_file: Annotated[Path, typer.Argument(help="Commit message file passed by git")],
) -> None:
    """Ask whether the commit was written by AI and tag its message."""
    configure_logging(1 if os.environ.get("GIT_AI_VERBOSE") else 0)
    intercept(message_file)


def run() -> None:
    """Console entry point. Always exits 0 so the commit goes through."""
    try:
        typer.run(hook)
    except SystemExit:
        pass
    raise SystemExit(0)


if __name__ == "__main__":
    run()
