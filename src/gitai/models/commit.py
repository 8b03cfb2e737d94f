"""Commit models read from git history."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Marker(str, Enum):
    """AI classification of a commit."""

    AI = "ai"
    NON_AI = "non-ai"


class Commit(BaseModel):
    """A commit as reported by git log. Read-only."""

    model_config = ConfigDict(frozen=True)

    sha: str = Field(..., min_length=4)
    author: str = ""
    email: str = ""
    timestamp: datetime
    parents: tuple[str, ...] = ()
    message: str = ""

    @property
    def subject(self) -> str:
        """First line of the commit message."""
        for line in self.message.splitlines():
            if line.strip():
                return line.strip()
        return ""

    @property
    def short_sha(self) -> str:
        return self.sha[:7]


class ClassifiedCommit(BaseModel):
    """A commit together with its AI marker state."""

    model_config = ConfigDict(frozen=True)

    commit: Commit
    marker: Marker

    @property
    def is_ai(self) -> bool:
        return self.marker is Marker.AI

    @property
    def sha(self) -> str:
        return self.commit.sha


class RangeMode(str, Enum):
    """How a commit range was resolved."""

    BRANCH = "branch"
    TAG = "tag"
    FEATURE = "feature-divergence"
    RANGE = "explicit-range"
    COMPARE = "compare"
    ALL_BRANCHES = "all-branches"


class CommitRange(BaseModel):
    """An ancestry-exclusion range: commits reachable from end but not start.

    A start of None means the whole history of end.
    """

    model_config = ConfigDict(frozen=True)

    mode: RangeMode
    start: Optional[str] = None
    end: str = Field(..., min_length=1)
    label: str = ""

    @property
    def display(self) -> str:
        if self.start is None:
            return self.end
        return f"{self.start}..{self.end}"
