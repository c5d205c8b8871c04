"""Pydantic V2 domain models for the diagnostics platform."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

from diag_core.enums import (
    DiagnosticStatus,
    Effort,
    FindingStatus,
    Grade,
    GradeBand,
    Priority,
)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class FindingInput(BaseModel):
    """Minimal grading input: one obligation and its assessed status."""

    model_config = ConfigDict(frozen=True)

    obligation_id: str = Field(min_length=1, max_length=100)
    status: FindingStatus


class Finding(BaseModel):
    """Full reviewer record for one (diagnostic, obligation) pair."""

    model_config = ConfigDict(from_attributes=True)

    obligation_id: str = Field(min_length=1, max_length=100)
    status: FindingStatus = FindingStatus.NOT_STARTED
    finding_text: str = ""
    citation: str = ""
    remediation: str = ""
    effort: Effort | None = None
    deadline: str | None = None
    updated_at: datetime = Field(default_factory=_utcnow)


class DraftFinding(BaseModel):
    """Finding proposed by the LLM drafter, pending human review."""

    obligation_id: str = Field(min_length=1, max_length=100)
    status: FindingStatus
    finding_text: str = ""
    citation: str = ""
    remediation: str = ""


class StatusTally(BaseModel):
    """Per-status counts over a graded finding set."""

    compliant: int = 0
    partial: int = 0
    critical_gap: int = 0
    not_started: int = 0
    not_applicable: int = 0
    human_oversight_status: FindingStatus | None = None

    @property
    def human_oversight_critical(self) -> bool:
        return self.human_oversight_status == FindingStatus.CRITICAL_GAP

    @property
    def total(self) -> int:
        return self.compliant + self.partial + self.critical_gap + self.not_started + self.not_applicable

    def count(self, status: FindingStatus) -> int:
        return getattr(self, status.value)


class TriggeredOverride(BaseModel):
    """A hard-override rule that fired during grading."""

    rule_id: str
    ceiling: Grade
    description: str


class GradeResult(BaseModel):
    """Outcome of grading one finding set."""

    grade: Grade
    base_grade: Grade
    percentage: float = Field(ge=0.0, le=1.0)
    points: int = Field(ge=0)
    max_points: int = Field(ge=0)
    applicable_count: int = Field(ge=0)
    tally: StatusTally
    overrides: list[TriggeredOverride] = Field(default_factory=list)

    @property
    def capped(self) -> bool:
        """True when an override lowered the percentage-derived grade."""
        return self.grade != self.base_grade


class RemediationItem(BaseModel):
    """One row of the prioritised remediation roadmap."""

    obligation_id: str
    obligation_name: str
    article_ref: str
    status: FindingStatus
    priority: Priority
    action: str
    effort: Effort | None = None
    target: str


class ReportSummary(BaseModel):
    """Headline figures shown on a diagnostic report or dashboard card."""

    diagnostic_id: uuid.UUID
    report_ref: str
    grade: Grade
    band: GradeBand
    percentage: float
    tally: StatusTally
    urgent_count: int
    overrides: list[TriggeredOverride] = Field(default_factory=list)
    remediation: list[RemediationItem] = Field(default_factory=list)


class DiagnosticSnapshot(BaseModel):
    """State of a findings workbook at a point in time."""

    diagnostic_id: uuid.UUID
    status: DiagnosticStatus
    findings: list[Finding]
    delivered_grade: Grade | None = None
    delivered_at: datetime | None = None
