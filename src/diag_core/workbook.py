"""Findings workbook: the reviewer's editable view of one diagnostic.

Holds exactly one finding per catalogue obligation (upsert keyed on the
obligation id) and tracks the diagnostic lifecycle:

    pending → in_review → draft → delivered

Persistence is the caller's concern; the workbook is an in-memory model.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable
from datetime import UTC, datetime

from diag_core.enums import DiagnosticStatus, FindingStatus, Grade
from diag_core.exceptions import DiagnosticStateError, DraftParseError, UnknownObligationError
from diag_core.grading.engine import GradingEngine
from diag_core.grading.status import normalize_status
from diag_core.models import DiagnosticSnapshot, DraftFinding, Finding, GradeResult, ReportSummary
from diag_core.obligations import Obligation, default_citation, list_obligations
from diag_core.report import build_report_summary

logger = logging.getLogger(__name__)

_EDITABLE = frozenset({DiagnosticStatus.PENDING, DiagnosticStatus.IN_REVIEW, DiagnosticStatus.DRAFT})
_DELIVERABLE = frozenset({DiagnosticStatus.IN_REVIEW, DiagnosticStatus.DRAFT})


class DiagnosticWorkbook:
    """Editable finding set for one diagnostic."""

    def __init__(
        self,
        diagnostic_id: uuid.UUID | None = None,
        *,
        status: DiagnosticStatus = DiagnosticStatus.PENDING,
        findings: Iterable[Finding] = (),
        catalogue: Iterable[Obligation] | None = None,
        engine: GradingEngine | None = None,
    ) -> None:
        self.diagnostic_id = diagnostic_id or uuid.uuid4()
        self.status = status
        self.delivered_grade: Grade | None = None
        self.delivered_at: datetime | None = None
        self._catalogue = list(catalogue) if catalogue is not None else list_obligations()
        self._obligations = {ob.id: ob for ob in self._catalogue}
        self._engine = engine or GradingEngine()

        self._findings: dict[str, Finding] = {
            ob.id: Finding(obligation_id=ob.id, citation=default_citation(ob)) for ob in self._catalogue
        }
        for finding in findings:
            self._put(finding)

    # ── Accessors ────────────────────────────────────────────

    @property
    def findings(self) -> list[Finding]:
        """Findings in catalogue order."""
        return [self._findings[ob.id] for ob in self._catalogue]

    def get(self, obligation_id: str) -> Finding:
        if obligation_id not in self._findings:
            raise UnknownObligationError(obligation_id)
        return self._findings[obligation_id]

    # ── Editing ──────────────────────────────────────────────

    def _ensure_editable(self) -> None:
        if self.status not in _EDITABLE:
            raise DiagnosticStateError(f"Diagnostic {self.diagnostic_id} is {self.status} and can no longer be edited")

    def _put(self, finding: Finding) -> None:
        if finding.obligation_id not in self._obligations:
            raise UnknownObligationError(finding.obligation_id)
        self._findings[finding.obligation_id] = finding

    def upsert(self, finding: Finding) -> Finding:
        """Insert or replace the finding for ``finding.obligation_id``."""
        self._ensure_editable()
        self._put(finding)
        return finding

    def set_status(self, obligation_id: str, status: FindingStatus | str) -> Finding:
        """Change only the status of one finding."""
        current = self.get(obligation_id)
        updated = current.model_copy(
            update={"status": normalize_status(status, obligation_id), "updated_at": datetime.now(UTC)}
        )
        return self.upsert(updated)

    def apply_drafts(self, drafts: Iterable[DraftFinding]) -> list[Finding]:
        """Merge LLM drafts into the workbook and move it to draft.

        Reviewer-only fields (effort, deadline) of existing findings are kept.
        The batch is all-or-nothing: if any draft names an unknown obligation,
        or repeats one, no finding is changed.

        Raises:
            UnknownObligationError: If a draft names an obligation outside the catalogue.
            DraftParseError: If two drafts name the same obligation.
        """
        self._ensure_editable()
        drafts = list(drafts)

        seen: set[str] = set()
        for draft in drafts:
            if draft.obligation_id not in self._findings:
                raise UnknownObligationError(draft.obligation_id)
            if draft.obligation_id in seen:
                raise DraftParseError(f"Draft repeats obligation {draft.obligation_id!r}")
            seen.add(draft.obligation_id)

        applied: list[Finding] = []
        for draft in drafts:
            current = self._findings[draft.obligation_id]
            merged = current.model_copy(
                update={
                    "status": draft.status,
                    "finding_text": draft.finding_text,
                    "citation": draft.citation or current.citation,
                    "remediation": draft.remediation,
                    "updated_at": datetime.now(UTC),
                }
            )
            self._put(merged)
            applied.append(merged)

        self.status = DiagnosticStatus.DRAFT
        logger.info("Applied %d draft findings to diagnostic %s", len(applied), self.diagnostic_id)
        return applied

    # ── Lifecycle ────────────────────────────────────────────

    def submit_for_review(self) -> None:
        """Move from PENDING to IN_REVIEW once the client questionnaire is in."""
        if self.status != DiagnosticStatus.PENDING:
            raise DiagnosticStateError(f"Diagnostic must be pending to submit, got {self.status}")
        self.status = DiagnosticStatus.IN_REVIEW

    def save(self) -> None:
        """Save the reviewer's edits as a draft."""
        self._ensure_editable()
        self.status = DiagnosticStatus.DRAFT
        logger.info("Saved draft findings for diagnostic %s", self.diagnostic_id)

    def deliver(self, *, now: datetime | None = None) -> Grade:
        """Approve the findings, snapshot the grade and mark delivered."""
        if self.status not in _DELIVERABLE:
            raise DiagnosticStateError(f"Diagnostic must be in_review or draft to deliver, got {self.status}")

        self.delivered_grade = self.evaluate().grade
        self.delivered_at = now or datetime.now(UTC)
        self.status = DiagnosticStatus.DELIVERED
        logger.info("Delivered diagnostic %s with grade %s", self.diagnostic_id, self.delivered_grade)
        return self.delivered_grade

    # ── Grading ──────────────────────────────────────────────

    def evaluate(self) -> GradeResult:
        return self._engine.evaluate(self.findings, expected_obligations=self._obligations)

    def grade(self) -> Grade:
        return self.evaluate().grade

    def summary(self, *, created_at: datetime, report_ref: str | None = None) -> ReportSummary:
        return build_report_summary(
            self.findings,
            diagnostic_id=self.diagnostic_id,
            created_at=created_at,
            report_ref=report_ref,
            engine=self._engine,
            catalogue=self._catalogue,
        )

    def snapshot(self) -> DiagnosticSnapshot:
        return DiagnosticSnapshot(
            diagnostic_id=self.diagnostic_id,
            status=self.status,
            findings=self.findings,
            delivered_grade=self.delivered_grade,
            delivered_at=self.delivered_at,
        )
