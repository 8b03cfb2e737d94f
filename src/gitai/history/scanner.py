"""Enumerate and classify commits in a range."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from gitai.marker import classify
from gitai.models.commit import ClassifiedCommit, CommitRange
from gitai.vcs.git import VersionControl

logger = logging.getLogger(__name__)


class HistoryScanner:
    """Reads commits from a repository and tags each as AI or non-AI."""

    def __init__(self, vcs: VersionControl):
        self.vcs = vcs

    def scan(self, commit_range: CommitRange) -> list[ClassifiedCommit]:
        """Classify the commits of a range, newest first.

        Args:
            commit_range: Range whose endpoints are branch names, tags or
                commit hashes.

        Returns:
            Classified commits. Empty when both endpoints are the same commit.

        Raises:
            UnresolvedReference: If either endpoint does not resolve.
        """
        end = self.vcs.resolve(commit_range.end)
        start = self.vcs.resolve(commit_range.start) if commit_range.start else None

        if start == end:
            logger.info(f"Empty range {commit_range.display}")
            return []

        commits = self.vcs.log(end, start)
        logger.info(f"Scanned {len(commits)} commits in {commit_range.display}")
        return [classify(commit) for commit in commits]

    def scan_all_branches(
        self, base: Optional[str] = None
    ) -> dict[str, list[ClassifiedCommit]]:
        """Classify the history of every local branch.

        Each branch head's history is taken exclusive of a common base.
        With no base, the common base is the root of history and each
        branch contributes its full history.

        Args:
            base: Commit-ish excluded from every branch (optional).

        Returns:
            Mapping of branch name to its classified commits.
        """
        base_sha = self.vcs.resolve(base) if base else None
        histories = {}

        for branch in self.vcs.branches():
            head = self.vcs.resolve(branch)
            if head == base_sha:
                histories[branch] = []
                continue
            histories[branch] = [classify(c) for c in self.vcs.log(head, base_sha)]

        return histories


def union(histories: Iterable[list[ClassifiedCommit]]) -> list[ClassifiedCommit]:
    """Merge commit lists, dropping duplicate shas, newest first."""
    seen = {}
    for commits in histories:
        for commit in commits:
            seen.setdefault(commit.sha, commit)

    # sorted() is stable, so commits with equal timestamps keep git's order.
    return sorted(seen.values(), key=lambda c: c.commit.timestamp, reverse=True)
