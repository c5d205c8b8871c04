"""Tests for the grading building blocks: grades, statuses, scoring, thresholds, overrides."""

from __future__ import annotations

import pytest

from diag_core.enums import FindingStatus, Grade
from diag_core.exceptions import FindingValidationError
from diag_core.grading import (
    DEFAULT_OVERRIDE_RULES,
    GRADE_THRESHOLDS,
    OverrideRule,
    apply_overrides,
    grade_from_percentage,
    normalize_status,
    score_statuses,
)
from diag_core.models import StatusTally


class TestGradeOrdering:
    def test_declared_best_to_worst(self) -> None:
        assert [g.value for g in Grade] == ["A+", "A", "B+", "B", "C+", "C", "D", "F"]

    def test_rank_and_comparison(self) -> None:
        assert Grade.A_PLUS.rank == 0
        assert Grade.F.rank == 7
        assert Grade.B.is_better_than(Grade.C_PLUS)
        assert not Grade.C_PLUS.is_better_than(Grade.C_PLUS)

    def test_cap_lowers_better_grades_only(self) -> None:
        assert Grade.A.cap(Grade.C_PLUS) == Grade.C_PLUS
        assert Grade.C.cap(Grade.C_PLUS) == Grade.C
        assert Grade.D.cap(Grade.D) == Grade.D

    def test_lowest(self) -> None:
        assert Grade.lowest() == Grade.F


class TestNormalizeStatus:
    @pytest.mark.parametrize("raw", ["compliant", "COMPLIANT", "  Compliant  "])
    def test_canonical_strings(self, raw: str) -> None:
        assert normalize_status(raw) == FindingStatus.COMPLIANT

    def test_enum_member_passes_through(self) -> None:
        assert normalize_status(FindingStatus.PARTIAL) is FindingStatus.PARTIAL

    def test_critical_alias(self) -> None:
        assert normalize_status("critical") == FindingStatus.CRITICAL_GAP
        assert normalize_status("Critical") == FindingStatus.CRITICAL_GAP

    def test_unknown_status(self) -> None:
        with pytest.raises(FindingValidationError, match="unrecognized status") as exc_info:
            normalize_status("green", "risk_management")
        assert exc_info.value.obligation_id == "risk_management"
        assert exc_info.value.value == "green"

    def test_non_string_status(self) -> None:
        with pytest.raises(FindingValidationError, match="non-string"):
            normalize_status(3, "risk_management")


class TestScoring:
    def test_points_per_status(self) -> None:
        breakdown = score_statuses(
            [
                FindingStatus.COMPLIANT,
                FindingStatus.PARTIAL,
                FindingStatus.CRITICAL_GAP,
                FindingStatus.NOT_STARTED,
            ]
        )
        assert breakdown.points == 4
        assert breakdown.max_points == 12
        assert breakdown.applicable_count == 4

    def test_not_applicable_excluded(self) -> None:
        breakdown = score_statuses([FindingStatus.COMPLIANT, FindingStatus.NOT_APPLICABLE])
        assert breakdown.points == 3
        assert breakdown.max_points == 3
        assert breakdown.percentage == 1.0

    def test_zero_applicable_percentage(self) -> None:
        breakdown = score_statuses([FindingStatus.NOT_APPLICABLE])
        assert breakdown.max_points == 0
        assert breakdown.percentage == 0.0


class TestThresholds:
    @pytest.mark.parametrize(
        ("percentage", "expected"),
        [
            (1.0, Grade.A_PLUS),
            (0.95, Grade.A_PLUS),
            (0.9499, Grade.A),
            (0.85, Grade.A),
            (0.70, Grade.B_PLUS),
            (0.6999, Grade.B),
            (0.55, Grade.B),
            (0.40, Grade.C_PLUS),
            (0.25, Grade.C),
            (0.10, Grade.D),
            (0.0999, Grade.F),
            (0.0, Grade.F),
        ],
    )
    def test_boundaries_inclusive(self, percentage: float, expected: Grade) -> None:
        assert grade_from_percentage(percentage) == expected

    def test_thresholds_descend(self) -> None:
        minimums = [minimum for minimum, _ in GRADE_THRESHOLDS]
        assert minimums == sorted(minimums, reverse=True)

    @pytest.mark.parametrize("percentage", [-0.01, 1.01])
    def test_out_of_range(self, percentage: float) -> None:
        with pytest.raises(ValueError, match="within"):
            grade_from_percentage(percentage)

    def test_custom_table(self) -> None:
        table = ((0.5, Grade.A), (0.2, Grade.C))
        assert grade_from_percentage(0.6, thresholds=table) == Grade.A
        assert grade_from_percentage(0.3, thresholds=table) == Grade.C
        assert grade_from_percentage(0.1, thresholds=table) == Grade.F


class TestApplyOverrides:
    def test_no_rule_fires(self) -> None:
        grade, fired = apply_overrides(Grade.A, StatusTally(compliant=8), DEFAULT_OVERRIDE_RULES)
        assert grade == Grade.A
        assert fired == []

    def test_fired_rule_reported_even_without_effect(self) -> None:
        grade, fired = apply_overrides(Grade.F, StatusTally(critical_gap=2), DEFAULT_OVERRIDE_RULES)
        assert grade == Grade.F
        assert [o.rule_id for o in fired] == ["critical_gaps_2"]
        assert fired[0].ceiling == Grade.C_PLUS

    def test_human_oversight_rule(self) -> None:
        tally = StatusTally(critical_gap=1, compliant=7, human_oversight_status=FindingStatus.CRITICAL_GAP)
        grade, fired = apply_overrides(Grade.A, tally, DEFAULT_OVERRIDE_RULES)
        assert grade == Grade.C_PLUS
        assert [o.rule_id for o in fired] == ["human_oversight_critical"]

    def test_custom_rule(self) -> None:
        rule = OverrideRule(
            rule_id="any_partial",
            ceiling=Grade.B,
            description="Any partial finding caps the grade at B",
            predicate=lambda tally: tally.partial > 0,
        )
        grade, fired = apply_overrides(Grade.A_PLUS, StatusTally(partial=1), [rule])
        assert grade == Grade.B
        assert fired[0].description == "Any partial finding caps the grade at B"

    def test_default_rule_ids(self) -> None:
        assert [r.rule_id for r in DEFAULT_OVERRIDE_RULES] == [
            "critical_gaps_2",
            "critical_gaps_3",
            "human_oversight_critical",
            "not_started_3",
        ]
