"""Report models produced by the aggregation engine."""

from decimal import ROUND_HALF_UP, Decimal

from pydantic import BaseModel, Field, computed_field

from gitai.models.commit import ClassifiedCommit

PERCENT_PLACES = Decimal("0.01")


def percent_of(part: int, whole: int) -> float:
    """Return part/whole as a percentage rounded half-up to 2 decimals.

    Returns 0.0 when whole is 0.
    """
    if whole <= 0:
        return 0.0
    value = Decimal(part) * 100 / Decimal(whole)
    return float(value.quantize(PERCENT_PLACES, rounding=ROUND_HALF_UP))


class Report(BaseModel):
    """AI vs total commit counts for one set of commits."""

    label: str = ""
    total: int = Field(default=0, ge=0)
    ai_count: int = Field(default=0, ge=0)
    commits: list[ClassifiedCommit] = Field(default_factory=list, exclude=True)

    @computed_field
    @property
    def percentage(self) -> float:
        """Share of AI commits, 0 for an empty report."""
        return percent_of(self.ai_count, self.total)

    @computed_field
    @property
    def human_count(self) -> int:
        return self.total - self.ai_count

    @property
    def percentage_display(self) -> str:
        return f"{self.percentage:.2f}%"

    def recent_ai(self, limit: int) -> list[ClassifiedCommit]:
        """Most recent AI commits, newest first."""
        if limit <= 0:
            return []
        return [c for c in self.commits if c.is_ai][:limit]


class ComparisonReport(BaseModel):
    """Base branch vs feature branch, plus commits only on the feature side."""

    base: Report
    feature: Report
    exclusive: Report


class BranchesReport(BaseModel):
    """One report per local branch and one for their combined history."""

    branches: list[Report] = Field(default_factory=list)
    combined: Report
