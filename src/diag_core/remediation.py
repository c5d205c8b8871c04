"""Remediation roadmap and grade presentation bands."""

from __future__ import annotations

from collections.abc import Iterable

from diag_core.enums import FindingStatus, Grade, GradeBand, Priority
from diag_core.models import Finding, RemediationItem
from diag_core.obligations import Obligation, list_obligations

STATUS_PRIORITY: dict[FindingStatus, Priority] = {
    FindingStatus.CRITICAL_GAP: Priority.P1,
    FindingStatus.NOT_STARTED: Priority.P2,
    FindingStatus.PARTIAL: Priority.P2,
    FindingStatus.COMPLIANT: Priority.P3,
    FindingStatus.NOT_APPLICABLE: Priority.NONE,
}

# Target used when the reviewer left the deadline blank.
DEFAULT_TARGETS: dict[FindingStatus, str] = {
    FindingStatus.CRITICAL_GAP: "IMMEDIATE",
    FindingStatus.NOT_STARTED: "June 2026",
    FindingStatus.PARTIAL: "May 2026",
}

_PLAN_ORDER: dict[FindingStatus, int] = {
    FindingStatus.CRITICAL_GAP: 0,
    FindingStatus.NOT_STARTED: 1,
    FindingStatus.PARTIAL: 2,
}

_GRADE_BANDS: dict[Grade, GradeBand] = {
    Grade.A_PLUS: GradeBand.STRONG,
    Grade.A: GradeBand.STRONG,
    Grade.B_PLUS: GradeBand.STRONG,
    Grade.B: GradeBand.MODERATE,
    Grade.C_PLUS: GradeBand.MODERATE,
    Grade.C: GradeBand.WEAK,
    Grade.D: GradeBand.WEAK,
    Grade.F: GradeBand.WEAK,
}


def priority_for(status: FindingStatus) -> Priority:
    return STATUS_PRIORITY[status]


def grade_band(grade: Grade) -> GradeBand:
    return _GRADE_BANDS[grade]


def build_remediation_plan(
    findings: Iterable[Finding],
    catalogue: Iterable[Obligation] | None = None,
) -> list[RemediationItem]:
    """Build the prioritised remediation roadmap.

    Compliant and not-applicable findings are left out. Items are ordered
    critical gaps first, then not started, then partial; within a status the
    catalogue order is kept. Findings for obligations outside the catalogue
    are ignored.
    """
    obligations = list(catalogue) if catalogue is not None else list_obligations()
    by_obligation = {f.obligation_id: f for f in findings}

    items: list[RemediationItem] = []
    for obligation in obligations:
        finding = by_obligation.get(obligation.id)
        if finding is None or finding.status not in _PLAN_ORDER:
            continue
        items.append(
            RemediationItem(
                obligation_id=obligation.id,
                obligation_name=obligation.name,
                article_ref=obligation.article_ref,
                status=finding.status,
                priority=priority_for(finding.status),
                action=finding.remediation,
                effort=finding.effort,
                target=finding.deadline or DEFAULT_TARGETS[finding.status],
            )
        )

    # sort is stable, so catalogue order survives within a status
    items.sort(key=lambda item: _PLAN_ORDER[item.status])
    return items
