"""Git query interface used by the scanner, router and installer."""

from __future__ import annotations

import logging
import subprocess
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Protocol

from gitai.errors import GitCommandError, NotARepository, UnresolvedReference
from gitai.models.commit import Commit

logger = logging.getLogger(__name__)

FIELD_SEP = "\x1f"
RECORD_SEP = "\x1e"
LOG_FORMAT = FIELD_SEP.join(["%H", "%an", "%ae", "%ct", "%P", "%B"]) + RECORD_SEP


class VersionControl(Protocol):
    """The queries the history scanner needs from a repository."""

    def resolve(self, ref: str) -> str: ...

    def log(self, end: str, start: Optional[str] = None) -> list[Commit]: ...

    def merge_base(self, a: str, b: str) -> Optional[str]: ...

    def branches(self) -> list[str]: ...

    def branch_exists(self, name: str) -> bool: ...

    def current_branch(self) -> Optional[str]: ...

    def previous_tag(self, tag: str) -> Optional[str]: ...


def parse_log(output: str) -> list[Commit]:
    """Parse git log output produced with LOG_FORMAT.

    Args:
        output: Raw stdout of git log.

    Returns:
        Commits in the order git printed them.
    """
    commits = []
    for record in output.split(RECORD_SEP):
        record = record.lstrip("\n")
        if not record:
            continue

        fields = record.split(FIELD_SEP, 5)
        if len(fields) != 6:
            logger.warning(f"Skipping malformed log record: {record[:40]!r}")
            continue

        sha, author, email, timestamp, parents, message = fields
        commits.append(
            Commit(
                sha=sha,
                author=author,
                email=email,
                timestamp=datetime.fromtimestamp(int(timestamp), tz=timezone.utc),
                parents=tuple(parents.split()),
                message=message.rstrip("\n"),
            )
        )
    return commits


class GitRepository:
    """A git repository rooted at an explicit toplevel path.

    All queries run synchronously through the git CLI and check the exit
    status of every call.
    """

    def __init__(self, root: Path):
        """Initialize repository handle.

        Args:
            root: Toplevel directory of the working tree.
        """
        self.root = root

    @classmethod
    def discover(cls, path: Optional[Path] = None) -> "GitRepository":
        """Find the repository enclosing path.

        Args:
            path: Any directory inside the repository (defaults to cwd).

        Returns:
            Repository handle for the enclosing toplevel.

        Raises:
            NotARepository: If path is not inside a git work tree.
        """
        path = path or Path.cwd()
        try:
            inside = _run_git(["rev-parse", "--is-inside-work-tree"], cwd=path)
            toplevel = _run_git(["rev-parse", "--show-toplevel"], cwd=path)
        except GitCommandError as e:
            raise NotARepository(f"Not a git repository: {path}") from e

        if inside != "true" or not toplevel:
            raise NotARepository(f"Not a git work tree: {path}")

        return cls(Path(toplevel))

    def run(self, *args: str, check: bool = True) -> str:
        """Execute a git command in this repository and return stdout."""
        return _run_git(list(args), cwd=self.root, check=check)

    def resolve(self, ref: str) -> str:
        """Resolve a branch, tag or commit-ish to a full commit sha.

        Raises:
            UnresolvedReference: If ref does not name a commit.
        """
        try:
            return self.run("rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}")
        except GitCommandError as e:
            raise UnresolvedReference(
                f"Unknown revision: {ref}", exit_code=e.returncode
            ) from e

    def log(self, end: str, start: Optional[str] = None) -> list[Commit]:
        """List commits reachable from end and not from start, newest first.

        Args:
            end: Commit-ish whose history is listed.
            start: Commit-ish whose history is excluded (None for none).

        Returns:
            Commits with full messages.
        """
        revision = end if start is None else f"{start}..{end}"
        output = _run_git(
            ["log", f"--format={LOG_FORMAT}", revision, "--"],
            cwd=self.root,
            strip=False,
        )
        return parse_log(output)

    def merge_base(self, a: str, b: str) -> Optional[str]:
        """Return the best common ancestor of a and b, or None if unrelated."""
        try:
            return self.run("merge-base", a, b) or None
        except GitCommandError as e:
            # Exit status 1 with no output means there is no common ancestor.
            if e.returncode == 1 and not e.stderr:
                return None
            raise

    def branches(self) -> list[str]:
        """Return local branch names, sorted."""
        output = self.run("for-each-ref", "--format=%(refname:short)", "refs/heads/")
        return sorted(line for line in output.splitlines() if line)

    def branch_exists(self, name: str) -> bool:
        output = self.run("rev-parse", "--verify", "--quiet", f"refs/heads/{name}", check=False)
        return bool(output)

    def current_branch(self) -> Optional[str]:
        """Return the checked out branch, or None when HEAD is detached."""
        output = self.run("symbolic-ref", "--quiet", "--short", "HEAD", check=False)
        return output or None

    def previous_tag(self, tag: str) -> Optional[str]:
        """Return the nearest tag reachable from the parent of tag.

        Returns:
            Tag name, or None when tag has no parent or no earlier tag.
        """
        commit = self.resolve(tag)
        output = self.run(
            "describe", "--tags", "--abbrev=0", f"{commit}^", check=False
        )
        return output or None

    def hooks_dir(self) -> Path:
        """Directory git runs hooks from (honours core.hooksPath)."""
        path = Path(self.run("rev-parse", "--git-path", "hooks"))
        if not path.is_absolute():
            path = self.root / path
        return path

    def config_get(self, key: str) -> Optional[str]:
        """Return a git config value, or None when unset."""
        output = self.run("config", "--get", key, check=False)
        return output or None


def _run_git(
    args: list[str],
    cwd: Optional[Path] = None,
    check: bool = True,
    strip: bool = True,
) -> str:
    """Execute a git command and return its output.

    Args:
        args: Git command arguments.
        cwd: Working directory.
        check: Whether to raise on non-zero exit. Failed unchecked
            commands return an empty string.
        strip: Whether to strip surrounding whitespace from stdout.

    Returns:
        Command stdout.

    Raises:
        GitCommandError: If git cannot be run, or exits non-zero and
            check is True.
    """
    logger.debug(f"Running git {' '.join(args)} in {cwd}")
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
    except OSError as e:
        raise GitCommandError(args, 127, str(e)) from e

    if result.returncode != 0:
        logger.debug(f"git exited {result.returncode}: {result.stderr.strip()}")
        if check:
            raise GitCommandError(args, result.returncode, result.stderr)
        return ""

    return result.stdout.strip() if strip else result.stdout
