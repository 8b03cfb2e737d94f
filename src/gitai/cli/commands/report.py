"""Scan history and report AI commit statistics."""

from typing import Union

import typer
from pydantic import BaseModel
from rich.console import Console

from gitai.cli.render import render_branches, render_comparison, render_report
from gitai.cli.router import Invocation, Mode
from gitai.config import Settings
from gitai.history import ranges
from gitai.history.aggregate import aggregate, aggregate_branches, compare
from gitai.history.scanner import HistoryScanner
from gitai.models.report import BranchesReport, ComparisonReport, Report
from gitai.vcs.git import VersionControl

console = Console()

Result = Union[Report, ComparisonReport, BranchesReport]


def build(invocation: Invocation, vcs: VersionControl, settings: Settings) -> Result:
    """Resolve the invocation's range, scan it and aggregate.

    Everything is computed before anything is printed, so a failing
    reference never leaves a partial report behind.
    """
    scanner = HistoryScanner(vcs)
    mode = invocation.mode

    if mode == Mode.COMPARE:
        base_range, feature_range = ranges.compare_ranges(invocation.ref(0), invocation.ref(1))
        return compare(
            scanner.scan(base_range),
            scanner.scan(feature_range),
            base_label=invocation.ref(0),
            feature_label=invocation.ref(1),
        )

    if mode == Mode.ALL_BRANCHES:
        return aggregate_branches(scanner.scan_all_branches(invocation.ref(0)))

    if mode == Mode.BRANCH:
        commit_range = ranges.branch_range(vcs, invocation.ref(0))
    elif mode == Mode.TAG:
        commit_range = ranges.tag_range(vcs, invocation.ref(0), invocation.ref(1))
    elif mode == Mode.FEATURE:
        commit_range = ranges.feature_range(
            vcs, invocation.ref(0), invocation.ref(1), settings=settings
        )
    elif mode == Mode.RANGE:
        commit_range = ranges.explicit_range(invocation.ref(0), invocation.ref(1))
    else:
        raise ValueError(f"Not a report mode: {mode}")

    return aggregate(scanner.scan(commit_range), commit_range.label)


def report(
    invocation: Invocation,
    vcs: VersionControl,
    settings: Settings,
    limit: int,
    as_json: bool = False,
) -> None:
    """Print AI commit statistics for the selected mode."""
    result = build(invocation, vcs, settings)

    if as_json:
        typer.echo(_to_json(result))
    elif isinstance(result, ComparisonReport):
        render_comparison(console, result, limit)
    elif isinstance(result, BranchesReport):
        render_branches(console, result)
    else:
        render_report(console, result, limit)


def _to_json(result: BaseModel) -> str:
    return result.model_dump_json(indent=2)
