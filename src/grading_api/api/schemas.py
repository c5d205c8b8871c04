"""Pydantic request/response schemas for the grading API."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from diag_core.enums import Effort, FindingStatus, Grade, GradeBand
from diag_core.models import RemediationItem, StatusTally, TriggeredOverride


class FindingPayload(BaseModel):
    """A finding as submitted by a caller.

    ``status`` is a plain string so the grading engine, not the request
    parser, decides whether it is valid and which alias it maps to.
    """

    obligation_id: str = Field(min_length=1, max_length=100)
    status: str = Field(min_length=1, max_length=50)
    finding_text: str = ""
    citation: str = ""
    remediation: str = ""
    effort: Effort | None = None
    deadline: str | None = Field(default=None, max_length=100)


class GradeRequest(BaseModel):
    """Request to grade a set of findings."""

    findings: list[FindingPayload] = Field(default_factory=list)
    complete_missing: bool = True


class GradeResponse(BaseModel):
    """Grade and the figures it was derived from."""

    grade: Grade
    base_grade: Grade
    band: GradeBand
    percentage: float
    points: int
    max_points: int
    applicable_count: int
    tally: StatusTally
    overrides: list[TriggeredOverride]


class ReportSummaryRequest(BaseModel):
    """Request for the headline figures of a diagnostic report."""

    diagnostic_id: uuid.UUID
    created_at: datetime
    report_ref: str | None = Field(default=None, max_length=50)
    findings: list[FindingPayload] = Field(default_factory=list)


class ReportSummaryResponse(BaseModel):
    diagnostic_id: uuid.UUID
    report_ref: str
    grade: Grade
    band: GradeBand
    percentage: float
    tally: StatusTally
    urgent_count: int
    overrides: list[TriggeredOverride]
    remediation: list[RemediationItem]


class ObligationResponse(BaseModel):
    id: str
    name: str
    article_ref: str
    description: str
    guidance: str


class DraftParseRequest(BaseModel):
    """Raw drafter output to validate."""

    raw_text: str = Field(min_length=1)


class DraftFindingResponse(BaseModel):
    obligation_id: str
    status: FindingStatus
    finding_text: str
    citation: str
    remediation: str
