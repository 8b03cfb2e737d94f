"""Terminal rendering of reports."""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from gitai.models.report import BranchesReport, ComparisonReport, Report


def _summary(report: Report) -> str:
    return (
        f"[bold]Total commits:[/bold]  {report.total}\n"
        f"[bold]AI commits:[/bold]     [magenta]{report.ai_count}[/magenta]\n"
        f"[bold]Human commits:[/bold]  {report.human_count}\n"
        f"[bold]AI percentage:[/bold]  [cyan]{report.percentage_display}[/cyan]"
    )


def _recent_table(report: Report, limit: int) -> Table:
    table = Table(title=f"Recent AI commits ({escape(report.label)})")
    table.add_column("Commit", style="yellow")
    table.add_column("Date", style="dim")
    table.add_column("Author", style="cyan")
    table.add_column("Subject")

    for classified in report.recent_ai(limit):
        commit = classified.commit
        table.add_row(
            commit.short_sha,
            commit.timestamp.strftime("%Y-%m-%d"),
            escape(commit.author),
            escape(commit.subject),
        )

    return table


def render_report(console: Console, report: Report, limit: int) -> None:
    """Print one report with its most recent AI commits."""
    border_style = "magenta" if report.ai_count else "blue"
    console.print(Panel(_summary(report), title=escape(report.label), border_style=border_style))

    if report.total == 0:
        console.print("[dim]No commits in range[/dim]")
    elif report.ai_count and limit > 0:
        console.print(_recent_table(report, limit))


def render_comparison(console: Console, comparison: ComparisonReport, limit: int) -> None:
    table = Table(title="AI commit comparison")
    table.add_column("Side", style="bold")
    table.add_column("Total", justify="right")
    table.add_column("AI", justify="right", style="magenta")
    table.add_column("AI %", justify="right", style="cyan")

    for report in (comparison.base, comparison.feature, comparison.exclusive):
        table.add_row(escape(report.label), str(report.total), str(report.ai_count), report.percentage_display)

    console.print(table)
    if comparison.exclusive.ai_count and limit > 0:
        console.print(_recent_table(comparison.exclusive, limit))


def render_branches(console: Console, branches: BranchesReport) -> None:
    table = Table(title="AI commits by branch")
    table.add_column("Branch", style="cyan")
    table.add_column("Total", justify="right")
    table.add_column("AI", justify="right", style="magenta")
    table.add_column("AI %", justify="right")

    for report in branches.branches:
        table.add_row(escape(report.label), str(report.total), str(report.ai_count), report.percentage_display)

    combined = branches.combined
    table.add_section()
    table.add_row(
        f"[bold]{escape(combined.label)}[/bold]",
        f"[bold]{combined.total}[/bold]",
        f"[bold]{combined.ai_count}[/bold]",
        f"[bold]{combined.percentage_display}[/bold]",
    )

    console.print(table)
