"""Report and dashboard summaries built on the grading engine."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable
from typing import TYPE_CHECKING

from diag_core.exceptions import UnknownObligationError
from diag_core.grading.engine import GradingEngine
from diag_core.models import Finding, ReportSummary
from diag_core.obligations import Obligation, list_obligations
from diag_core.remediation import build_remediation_plan, grade_band

if TYPE_CHECKING:
    from datetime import datetime

logger = logging.getLogger(__name__)

REPORT_REF_PREFIX = "LSR"

_default_engine = GradingEngine()


def derive_report_ref(diagnostic_id: uuid.UUID | str, created_at: datetime) -> str:
    """Derive a human-readable reference: ``LSR-<year>-<first 4 hex of id>``."""
    hex_id = uuid.UUID(str(diagnostic_id)).hex
    return f"{REPORT_REF_PREFIX}-{created_at.year}-{hex_id[:4].upper()}"


def build_report_summary(
    findings: Iterable[Finding],
    *,
    diagnostic_id: uuid.UUID,
    created_at: datetime,
    report_ref: str | None = None,
    engine: GradingEngine | None = None,
    catalogue: Iterable[Obligation] | None = None,
) -> ReportSummary:
    """Compute the headline figures of a diagnostic report.

    Obligations of the catalogue with no finding count as not started. A
    stored ``report_ref`` takes precedence over the derived one.

    Raises:
        UnknownObligationError: If a finding names an obligation outside the catalogue.
    """
    engine = engine or _default_engine
    obligations = list(catalogue) if catalogue is not None else list_obligations()
    findings = list(findings)

    known = {ob.id for ob in obligations}
    for finding in findings:
        if finding.obligation_id not in known:
            raise UnknownObligationError(finding.obligation_id)

    result = engine.evaluate(findings, expected_obligations=[ob.id for ob in obligations])
    tally = result.tally
    urgent_count = tally.critical_gap + (1 if tally.not_started > 0 else 0)

    summary = ReportSummary(
        diagnostic_id=diagnostic_id,
        report_ref=report_ref or derive_report_ref(diagnostic_id, created_at),
        grade=result.grade,
        band=grade_band(result.grade),
        percentage=result.percentage,
        tally=tally,
        urgent_count=urgent_count,
        overrides=result.overrides,
        remediation=build_remediation_plan(findings, obligations),
    )
    logger.debug("Report summary %s: grade=%s urgent=%d", summary.report_ref, summary.grade, urgent_count)
    return summary
