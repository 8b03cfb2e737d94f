import os
import shutil
import subprocess
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional

import pytest

from gitai.errors import UnresolvedReference
from gitai.models.commit import Commit

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")

EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)


class FakeRepo:
    """In-memory commit graph answering the scanner's git queries."""

    def __init__(self):
        self.commits: dict[str, Commit] = {}
        self.refs: dict[str, str] = {}
        self.heads: set[str] = set()
        self.tags: list[str] = []
        self.head: Optional[str] = None
        self.config: dict[str, str] = {}

    def add(self, sha: str, message: str, parents: tuple[str, ...] = ()) -> str:
        self.commits[sha] = Commit(
            sha=sha,
            author="dev",
            timestamp=EPOCH + timedelta(minutes=len(self.commits)),
            parents=parents,
            message=message,
        )
        return sha

    def chain(self, branch: str, messages: list[str], parent: Optional[str] = None) -> str:
        """Append commits on top of parent and point branch at the last one."""
        for i, message in enumerate(messages):
            sha = f"{branch.replace('/', '-')}-{len(self.commits):02d}-{i}"
            parent = self.add(sha, message, (parent,) if parent else ())
        self.set_branch(branch, parent)
        return parent

    def set_branch(self, name: str, sha: str) -> None:
        self.refs[name] = sha
        self.heads.add(name)

    def set_tag(self, name: str, sha: str) -> None:
        self.refs[name] = sha
        self.tags.append(name)

    def ancestors(self, sha: Optional[str]) -> set[str]:
        seen: set[str] = set()
        stack = [sha] if sha else []
        while stack:
            current = stack.pop()
            if current in seen:
                continue
            seen.add(current)
            stack.extend(self.commits[current].parents)
        return seen

    def resolve(self, ref: str) -> str:
        if ref in self.refs:
            return self.refs[ref]
        if ref in self.commits:
            return ref
        raise UnresolvedReference(f"Unknown revision: {ref}")

    def log(self, end: str, start: Optional[str] = None) -> list[Commit]:
        shas = self.ancestors(self.resolve(end)) - self.ancestors(
            self.resolve(start) if start else None
        )
        return sorted(
            (self.commits[s] for s in shas), key=lambda c: c.timestamp, reverse=True
        )

    def merge_base(self, a: str, b: str) -> Optional[str]:
        common = self.ancestors(self.resolve(a)) & self.ancestors(self.resolve(b))
        if not common:
            return None
        return max(common, key=lambda s: self.commits[s].timestamp)

    def branches(self) -> list[str]:
        return sorted(self.heads)

    def branch_exists(self, name: str) -> bool:
        return name in self.heads

    def current_branch(self) -> Optional[str]:
        return self.head

    def previous_tag(self, tag: str) -> Optional[str]:
        commit = self.commits[self.resolve(tag)]
        if not commit.parents:
            return None
        reachable = self.ancestors(commit.parents[0])
        candidates = [t for t in self.tags if self.refs[t] in reachable]
        if not candidates:
            return None
        return max(candidates, key=lambda t: self.commits[self.refs[t]].timestamp)

    def config_get(self, key: str) -> Optional[str]:
        return self.config.get(key)


@pytest.fixture
def fake_repo() -> FakeRepo:
    return FakeRepo()


class GitRepoBuilder:
    """Builds a throwaway git repository with deterministic commit dates."""

    def __init__(self, path: Path):
        self.path = path
        self._tick = 0

    def git(self, *args: str, **kwargs) -> str:
        env = os.environ.copy()
        stamp = f"{1700000000 + self._tick} +0000"
        env["GIT_AUTHOR_DATE"] = stamp
        env["GIT_COMMITTER_DATE"] = stamp
        result = subprocess.run(
            ["git", *args],
            cwd=str(self.path),
            text=True,
            capture_output=True,
            check=True,
            env=env,
            **kwargs,
        )
        return result.stdout.strip()

    def commit(self, message: str, verify: bool = False, **kwargs) -> str:
        """Commit a change to history.txt. Hooks only run when verify is True."""
        self._tick += 60
        marker = self.path / "history.txt"
        with marker.open("a") as f:
            f.write(f"{self._tick} {message}\n")
        self.git("add", "history.txt")
        flags = [] if verify else ["--no-verify"]
        self.git("commit", *flags, "-q", "-m", message, **kwargs)
        return self.git("rev-parse", "HEAD")

    def commits(self, *messages: str) -> str:
        sha = ""
        for message in messages:
            sha = self.commit(message)
        return sha


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """Keep the user's git config and git-ai settings out of the tests."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
    for var in ("GIT_AI", "GIT_AI_BASE", "GIT_AI_LIMIT", "GIT_DIR", "GIT_WORK_TREE"):
        monkeypatch.delenv(var, raising=False)
    return home


@pytest.fixture
def git_repo(tmp_path, isolated_env, monkeypatch) -> GitRepoBuilder:
    path = tmp_path / "repo"
    path.mkdir()
    builder = GitRepoBuilder(path)
    builder.git("init", "-q")
    builder.git("symbolic-ref", "HEAD", "refs/heads/main")
    builder.git("config", "user.name", "git-ai")
    builder.git("config", "user.email", "git-ai@example.com")
    builder.git("config", "commit.gpgsign", "false")
    builder.git("config", "tag.gpgsign", "false")
    monkeypatch.chdir(path)
    return builder
