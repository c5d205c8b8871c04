"""Point scoring over finding statuses."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from diag_core.enums import FindingStatus

MAX_POINTS_PER_FINDING = 3

# not_applicable is absent: it counts towards neither points nor the denominator.
STATUS_POINTS: dict[FindingStatus, int] = {
    FindingStatus.COMPLIANT: 3,
    FindingStatus.PARTIAL: 1,
    FindingStatus.CRITICAL_GAP: 0,
    FindingStatus.NOT_STARTED: 0,
}


@dataclass(frozen=True)
class ScoreBreakdown:
    points: int
    max_points: int
    applicable_count: int

    @property
    def percentage(self) -> float:
        if self.max_points == 0:
            return 0.0
        return self.points / self.max_points


def score_statuses(statuses: Iterable[FindingStatus]) -> ScoreBreakdown:
    """Sum points over applicable statuses."""
    points = 0
    applicable = 0
    for status in statuses:
        if status == FindingStatus.NOT_APPLICABLE:
            continue
        applicable += 1
        points += STATUS_POINTS[status]

    return ScoreBreakdown(
        points=points,
        max_points=applicable * MAX_POINTS_PER_FINDING,
        applicable_count=applicable,
    )
