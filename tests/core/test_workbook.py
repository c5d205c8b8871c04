"""Tests for the findings workbook and diagnostic lifecycle."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

import pytest

from diag_core.enums import DiagnosticStatus, Effort, FindingStatus, Grade
from diag_core.exceptions import (
    DiagnosticStateError,
    DraftParseError,
    FindingValidationError,
    UnknownObligationError,
)
from diag_core.models import DraftFinding, Finding
from diag_core.obligations import obligation_ids
from diag_core.workbook import DiagnosticWorkbook


@pytest.fixture
def workbook() -> DiagnosticWorkbook:
    return DiagnosticWorkbook(uuid.UUID("0f1e2d3c-4b5a-4978-8695-a4b3c2d1e0f9"))


def _all_compliant(workbook: DiagnosticWorkbook) -> None:
    for oid in obligation_ids():
        workbook.set_status(oid, FindingStatus.COMPLIANT)


class TestWorkbookSeeding:
    def test_one_finding_per_obligation(self, workbook: DiagnosticWorkbook) -> None:
        assert [f.obligation_id for f in workbook.findings] == obligation_ids()
        assert all(f.status == FindingStatus.NOT_STARTED for f in workbook.findings)

    def test_seeded_with_default_citation(self, workbook: DiagnosticWorkbook) -> None:
        assert workbook.get("human_oversight").citation == "EU AI Act Art. 14 | Regulation (EU) 2024/1689"

    def test_fresh_workbook_grades_f(self, workbook: DiagnosticWorkbook) -> None:
        result = workbook.evaluate()
        assert result.tally.not_started == 8
        assert result.grade == Grade.F

    def test_initial_findings(self) -> None:
        wb = DiagnosticWorkbook(findings=[Finding(obligation_id="transparency", status=FindingStatus.PARTIAL)])
        assert wb.get("transparency").status == FindingStatus.PARTIAL
        assert wb.status == DiagnosticStatus.PENDING

    def test_initial_findings_must_be_in_catalogue(self) -> None:
        with pytest.raises(UnknownObligationError):
            DiagnosticWorkbook(findings=[Finding(obligation_id="art_99")])


class TestWorkbookEditing:
    def test_upsert_replaces_finding(self, workbook: DiagnosticWorkbook) -> None:
        workbook.upsert(
            Finding(
                obligation_id="risk_management",
                status=FindingStatus.PARTIAL,
                finding_text="Risk register exists but is not maintained.",
                effort=Effort.MEDIUM,
            )
        )
        assert workbook.get("risk_management").status == FindingStatus.PARTIAL
        assert len(workbook.findings) == 8

    def test_upsert_unknown_obligation(self, workbook: DiagnosticWorkbook) -> None:
        with pytest.raises(UnknownObligationError):
            workbook.upsert(Finding(obligation_id="art_99", status=FindingStatus.COMPLIANT))

    def test_get_unknown_obligation(self, workbook: DiagnosticWorkbook) -> None:
        with pytest.raises(UnknownObligationError):
            workbook.get("art_99")

    def test_set_status_accepts_alias(self, workbook: DiagnosticWorkbook) -> None:
        updated = workbook.set_status("human_oversight", "critical")
        assert updated.status == FindingStatus.CRITICAL_GAP

    def test_set_status_rejects_unknown(self, workbook: DiagnosticWorkbook) -> None:
        with pytest.raises(FindingValidationError):
            workbook.set_status("human_oversight", "fine")

    def test_grade_follows_edits(self, workbook: DiagnosticWorkbook) -> None:
        _all_compliant(workbook)
        assert workbook.grade() == Grade.A_PLUS
        workbook.set_status("human_oversight", FindingStatus.CRITICAL_GAP)
        assert workbook.grade() == Grade.C_PLUS


class TestApplyDrafts:
    def test_drafts_merge_and_move_to_draft(self, workbook: DiagnosticWorkbook) -> None:
        workbook.upsert(
            Finding(obligation_id="transparency", status=FindingStatus.NOT_STARTED, effort=Effort.LOW, deadline="Q2")
        )
        applied = workbook.apply_drafts(
            [
                DraftFinding(
                    obligation_id="transparency",
                    status=FindingStatus.PARTIAL,
                    finding_text="Instructions for use are incomplete.",
                    remediation="Publish deployer instructions.",
                )
            ]
        )
        assert len(applied) == 1
        assert workbook.status == DiagnosticStatus.DRAFT

        finding = workbook.get("transparency")
        assert finding.status == FindingStatus.PARTIAL
        assert finding.finding_text == "Instructions for use are incomplete."
        assert finding.effort == Effort.LOW
        assert finding.deadline == "Q2"
        # blank draft citation keeps the seeded one
        assert finding.citation.startswith("EU AI Act Art. 13")

    def test_draft_for_unknown_obligation(self, workbook: DiagnosticWorkbook) -> None:
        with pytest.raises(UnknownObligationError):
            workbook.apply_drafts([DraftFinding(obligation_id="art_99", status=FindingStatus.COMPLIANT)])

    def test_failed_batch_changes_nothing(self, workbook: DiagnosticWorkbook) -> None:
        workbook.submit_for_review()
        before = workbook.findings

        with pytest.raises(UnknownObligationError):
            workbook.apply_drafts(
                [
                    DraftFinding(obligation_id="risk_management", status=FindingStatus.COMPLIANT),
                    DraftFinding(obligation_id="art_99", status=FindingStatus.COMPLIANT),
                ]
            )

        assert workbook.findings == before
        assert workbook.get("risk_management").status == FindingStatus.NOT_STARTED
        assert workbook.status == DiagnosticStatus.IN_REVIEW

    def test_repeated_draft_changes_nothing(self, workbook: DiagnosticWorkbook) -> None:
        with pytest.raises(DraftParseError, match="repeats"):
            workbook.apply_drafts(
                [
                    DraftFinding(obligation_id="transparency", status=FindingStatus.COMPLIANT),
                    DraftFinding(obligation_id="transparency", status=FindingStatus.PARTIAL),
                ]
            )

        assert workbook.get("transparency").status == FindingStatus.NOT_STARTED
        assert workbook.status == DiagnosticStatus.PENDING


class TestLifecycle:
    def test_full_lifecycle(self, workbook: DiagnosticWorkbook) -> None:
        workbook.submit_for_review()
        assert workbook.status == DiagnosticStatus.IN_REVIEW

        _all_compliant(workbook)
        workbook.save()
        assert workbook.status == DiagnosticStatus.DRAFT

        delivered_at = datetime(2026, 4, 1, tzinfo=UTC)
        assert workbook.deliver(now=delivered_at) == Grade.A_PLUS
        assert workbook.status == DiagnosticStatus.DELIVERED
        assert workbook.delivered_grade == Grade.A_PLUS
        assert workbook.delivered_at == delivered_at

    def test_deliver_from_in_review(self, workbook: DiagnosticWorkbook) -> None:
        workbook.submit_for_review()
        assert workbook.deliver() == Grade.F

    def test_cannot_deliver_pending(self, workbook: DiagnosticWorkbook) -> None:
        with pytest.raises(DiagnosticStateError):
            workbook.deliver()

    def test_submit_only_from_pending(self, workbook: DiagnosticWorkbook) -> None:
        workbook.submit_for_review()
        with pytest.raises(DiagnosticStateError):
            workbook.submit_for_review()

    def test_delivered_is_read_only(self, workbook: DiagnosticWorkbook) -> None:
        workbook.save()
        workbook.deliver()
        with pytest.raises(DiagnosticStateError):
            workbook.set_status("transparency", FindingStatus.COMPLIANT)
        with pytest.raises(DiagnosticStateError):
            workbook.apply_drafts([])
        with pytest.raises(DiagnosticStateError):
            workbook.save()
        with pytest.raises(DiagnosticStateError):
            workbook.deliver()

    def test_delivered_grade_is_a_snapshot(self, workbook: DiagnosticWorkbook) -> None:
        _all_compliant(workbook)
        workbook.save()
        workbook.deliver()
        snapshot = workbook.snapshot()
        assert snapshot.status == DiagnosticStatus.DELIVERED
        assert snapshot.delivered_grade == Grade.A_PLUS
        assert len(snapshot.findings) == 8


class TestWorkbookSummary:
    def test_summary(self, workbook: DiagnosticWorkbook) -> None:
        _all_compliant(workbook)
        workbook.set_status("record_keeping", FindingStatus.CRITICAL_GAP)
        summary = workbook.summary(created_at=datetime(2026, 2, 1))
        assert summary.report_ref == "LSR-2026-0F1E"
        assert summary.grade == Grade.A
        assert summary.urgent_count == 1
        assert [item.obligation_id for item in summary.remediation] == ["record_keeping"]
