"""Grading API routes."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from diag_core.drafting import parse_draft_response
from diag_core.exceptions import DraftParseError, UnknownObligationError, ValidationError
from diag_core.grading import GradingEngine, normalize_status
from diag_core.models import Finding
from diag_core.obligations import get_obligation, list_obligations, obligation_ids
from diag_core.remediation import grade_band
from diag_core.report import build_report_summary
from diag_core.settings import GradingSettings
from grading_api.api.schemas import (
    DraftFindingResponse,
    DraftParseRequest,
    FindingPayload,
    GradeRequest,
    GradeResponse,
    ObligationResponse,
    ReportSummaryRequest,
    ReportSummaryResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["grading"])

_engine = GradingEngine.from_settings(GradingSettings())


def _to_finding(payload: FindingPayload) -> Finding:
    return Finding(
        obligation_id=payload.obligation_id,
        status=normalize_status(payload.status, payload.obligation_id),
        finding_text=payload.finding_text,
        citation=payload.citation,
        remediation=payload.remediation,
        effort=payload.effort,
        deadline=payload.deadline,
    )


@router.get("/obligations")
async def list_obligation_catalogue() -> list[ObligationResponse]:
    """List the obligation catalogue in canonical order."""
    return [ObligationResponse(**ob.model_dump()) for ob in list_obligations()]


@router.get("/obligations/{obligation_id}", responses={404: {"description": "Obligation not found"}})
async def get_obligation_entry(obligation_id: str) -> ObligationResponse:
    """Get one catalogue entry by its stable id."""
    try:
        obligation = get_obligation(obligation_id)
    except UnknownObligationError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return ObligationResponse(**obligation.model_dump())


@router.post("/grading/grade", responses={422: {"description": "Invalid or duplicate finding"}})
async def grade_findings(body: GradeRequest) -> GradeResponse:
    """Grade a finding set.

    With ``complete_missing`` (the default) catalogue obligations without a
    finding are graded as not started.
    """
    expected = obligation_ids() if body.complete_missing else None
    try:
        result = _engine.evaluate(body.findings, expected_obligations=expected)
    except ValidationError as e:
        logger.warning("Rejected findings: %s", e)
        raise HTTPException(status_code=422, detail=str(e)) from e

    return GradeResponse(
        grade=result.grade,
        base_grade=result.base_grade,
        band=grade_band(result.grade),
        percentage=result.percentage,
        points=result.points,
        max_points=result.max_points,
        applicable_count=result.applicable_count,
        tally=result.tally,
        overrides=result.overrides,
    )


@router.post(
    "/grading/report-summary",
    responses={422: {"description": "Invalid, duplicate or unknown-obligation finding"}},
)
async def report_summary(body: ReportSummaryRequest) -> ReportSummaryResponse:
    """Compute the headline figures and remediation roadmap of a report."""
    try:
        summary = build_report_summary(
            [_to_finding(f) for f in body.findings],
            diagnostic_id=body.diagnostic_id,
            created_at=body.created_at,
            report_ref=body.report_ref,
            engine=_engine,
        )
    except (ValidationError, UnknownObligationError) as e:
        logger.warning("Rejected findings for %s: %s", body.diagnostic_id, e)
        raise HTTPException(status_code=422, detail=str(e)) from e
    return ReportSummaryResponse(**summary.model_dump())


@router.post("/drafts/parse", responses={422: {"description": "Unparseable draft"}})
async def parse_drafts(body: DraftParseRequest) -> list[DraftFindingResponse]:
    """Validate raw drafter output against the catalogue."""
    try:
        drafts = parse_draft_response(body.raw_text, known_obligations=obligation_ids())
    except DraftParseError as e:
        logger.warning("Unparseable draft: %s (raw: %.200s)", e, e.raw_excerpt)
        raise HTTPException(status_code=422, detail=str(e)) from e
    return [DraftFindingResponse(**d.model_dump()) for d in drafts]
