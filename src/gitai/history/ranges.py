"""Resolve command-line endpoints into commit ranges."""

from __future__ import annotations

import logging
from typing import Optional

from gitai.config import Settings
from gitai.errors import UnresolvedReference
from gitai.models.commit import CommitRange, RangeMode
from gitai.vcs.git import VersionControl

logger = logging.getLogger(__name__)

MAINLINE_BRANCHES = ("main", "master")


def current_branch_or_head(vcs: VersionControl) -> str:
    """Current branch name, or HEAD when detached."""
    return vcs.current_branch() or "HEAD"


def default_base(vcs: VersionControl, settings: Optional[Settings] = None) -> str:
    """Get the conventional main-line branch.

    Returns:
        The configured base if any, else main or master, whichever exists
        (main when neither does).
    """
    if settings and settings.default_base:
        return settings.default_base

    for branch in MAINLINE_BRANCHES:
        if vcs.branch_exists(branch):
            return branch

    return MAINLINE_BRANCHES[0]


def branch_range(vcs: VersionControl, name: Optional[str] = None) -> CommitRange:
    """Whole history of a branch (current branch by default)."""
    name = name or current_branch_or_head(vcs)
    return CommitRange(mode=RangeMode.BRANCH, end=name, label=f"branch {name}")


def tag_range(
    vcs: VersionControl, tag: str, previous: Optional[str] = None
) -> CommitRange:
    """Commits added by a tag since the previous one.

    Args:
        vcs: Repository to query.
        tag: Tag to report on.
        previous: Earlier tag. Defaults to the nearest tag reachable
            from the parent of tag; the root of history if there is none.
    """
    if previous is None:
        previous = vcs.previous_tag(tag)
        logger.info(f"Previous tag for {tag}: {previous or '(none)'}")

    label = f"tag {tag}" if previous is None else f"tag {previous}..{tag}"
    return CommitRange(mode=RangeMode.TAG, start=previous, end=tag, label=label)


def feature_range(
    vcs: VersionControl,
    feature: Optional[str] = None,
    base: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> CommitRange:
    """Commits on a feature branch since it diverged from base.

    Raises:
        UnresolvedReference: If either branch is unknown or the two share
            no history.
    """
    feature = feature or current_branch_or_head(vcs)
    base = base or default_base(vcs, settings)

    fork_point = vcs.merge_base(vcs.resolve(base), vcs.resolve(feature))
    if fork_point is None:
        raise UnresolvedReference(f"No common ancestor between {base} and {feature}")

    logger.info(f"{feature} diverged from {base} at {fork_point[:7]}")
    return CommitRange(
        mode=RangeMode.FEATURE,
        start=fork_point,
        end=feature,
        label=f"feature {feature} (since {base})",
    )


def explicit_range(start: str, end: str) -> CommitRange:
    return CommitRange(mode=RangeMode.RANGE, start=start, end=end, label=f"range {start}..{end}")


def compare_ranges(base: str, feature: str) -> tuple[CommitRange, CommitRange]:
    """Full histories of both sides of a comparison."""
    return (
        CommitRange(mode=RangeMode.COMPARE, end=base, label=f"base {base}"),
        CommitRange(mode=RangeMode.COMPARE, end=feature, label=f"feature {feature}"),
    )
