"""Exception types shared by the scanner, router and installer."""

from __future__ import annotations

from typing import Optional


class GitAIError(Exception):
    """Base class for git-ai failures that end an invocation."""

    exit_code: int = 1

    def __init__(self, message: str, exit_code: Optional[int] = None):
        super().__init__(message)
        if exit_code:
            self.exit_code = exit_code


class NotARepository(GitAIError):
    """Raised when no enclosing git repository is found."""

    exit_code = 128


class UnresolvedReference(GitAIError):
    """Raised when a branch, tag or commit does not resolve to a commit."""


class InvalidArguments(GitAIError):
    """Raised for malformed command-line invocations."""

    exit_code = 2


class InstallationFailure(GitAIError):
    """Raised when hook templates are missing or did not install cleanly."""


class GitCommandError(GitAIError):
    """Raised when a git query exits with a non-zero status."""

    def __init__(self, args: list[str], returncode: int, stderr: str = ""):
        self.git_args = args
        self.returncode = returncode
        self.stderr = stderr.strip()
        message = f"Git command failed: git {' '.join(args)}"
        if self.stderr:
            message = f"{message}: {self.stderr}"
        super().__init__(message, exit_code=returncode)
