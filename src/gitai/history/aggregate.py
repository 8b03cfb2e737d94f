"""Reduce classified commits to AI statistics."""

from __future__ import annotations

from typing import Mapping, Sequence

from gitai.history.scanner import union
from gitai.models.commit import ClassifiedCommit
from gitai.models.report import BranchesReport, ComparisonReport, Report


def aggregate(commits: Sequence[ClassifiedCommit], label: str = "") -> Report:
    """Count total and AI commits."""
    return Report(
        label=label,
        total=len(commits),
        ai_count=sum(1 for c in commits if c.is_ai),
        commits=list(commits),
    )


def compare(
    base: Sequence[ClassifiedCommit],
    feature: Sequence[ClassifiedCommit],
    base_label: str = "base",
    feature_label: str = "feature",
) -> ComparisonReport:
    """Report both sides plus the commits only present on the feature side."""
    base_shas = {c.sha for c in base}
    exclusive = [c for c in feature if c.sha not in base_shas]

    return ComparisonReport(
        base=aggregate(base, base_label),
        feature=aggregate(feature, feature_label),
        exclusive=aggregate(exclusive, f"only in {feature_label}"),
    )


def aggregate_branches(
    histories: Mapping[str, Sequence[ClassifiedCommit]],
) -> BranchesReport:
    """One report per branch, in name order, plus the combined history."""
    names = sorted(histories)
    return BranchesReport(
        branches=[aggregate(histories[name], name) for name in names],
        combined=aggregate(
            union(list(histories[name]) for name in names), "all branches"
        ),
    )
