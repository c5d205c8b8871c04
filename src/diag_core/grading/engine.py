"""Grading engine: per-obligation findings → overall letter grade.

Pipeline:
1. Normalise every finding's status onto the canonical vocabulary.
2. Score applicable findings (not_applicable is excluded entirely).
3. Map the percentage onto the grade thresholds.
4. Clamp the result under the hard-override ceilings.

The engine is a pure function of its input and holds no per-call state, so a
single instance can be shared by every caller.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from diag_core.enums import FindingStatus, Grade
from diag_core.exceptions import DuplicateFindingError, FindingValidationError
from diag_core.grading.overrides import DEFAULT_OVERRIDE_RULES, OverrideRule, apply_overrides
from diag_core.grading.scoring import score_statuses
from diag_core.grading.status import normalize_status
from diag_core.grading.thresholds import GRADE_THRESHOLDS, grade_from_percentage
from diag_core.models import GradeResult, StatusTally
from diag_core.obligations import HUMAN_OVERSIGHT_ID
from diag_core.settings import GradingSettings

logger = logging.getLogger(__name__)


def _coerce(item: Any) -> tuple[str, FindingStatus]:
    """Read ``(obligation_id, status)`` from any supported finding shape."""
    if isinstance(item, Mapping):
        obligation_id = item.get("obligation_id")
        raw_status = item["status"] if "status" in item else item.get("score")
    elif isinstance(item, tuple | list):
        if len(item) != 2:
            raise FindingValidationError(f"Finding pair must have 2 elements, got {len(item)}", value=item)
        obligation_id, raw_status = item
    elif hasattr(item, "obligation_id") and hasattr(item, "status"):
        obligation_id, raw_status = item.obligation_id, item.status
    else:
        raise FindingValidationError(f"Unsupported finding shape: {type(item).__name__}", value=item)

    if not isinstance(obligation_id, str) or not obligation_id.strip():
        raise FindingValidationError(
            f"Finding has missing or invalid obligation id {obligation_id!r}",
            obligation_id=obligation_id if isinstance(obligation_id, str) else None,
            value=obligation_id,
        )
    if raw_status is None:
        raise FindingValidationError(
            f"Finding for obligation {obligation_id!r} has no status",
            obligation_id=obligation_id,
        )
    return obligation_id, normalize_status(raw_status, obligation_id)


class GradingEngine:
    """Computes the overall compliance grade of a diagnostic."""

    def __init__(
        self,
        *,
        rules: Sequence[OverrideRule] = DEFAULT_OVERRIDE_RULES,
        thresholds: tuple[tuple[float, Grade], ...] = GRADE_THRESHOLDS,
        reject_duplicates: bool = True,
        human_oversight_id: str = HUMAN_OVERSIGHT_ID,
    ) -> None:
        self._rules = tuple(rules)
        self._thresholds = thresholds
        self._reject_duplicates = reject_duplicates
        self._human_oversight_id = human_oversight_id

    @classmethod
    def from_settings(cls, settings: GradingSettings | None = None) -> GradingEngine:
        settings = settings or GradingSettings()
        return cls(
            reject_duplicates=settings.reject_duplicates,
            human_oversight_id=settings.human_oversight_id,
        )

    @property
    def reject_duplicates(self) -> bool:
        return self._reject_duplicates

    def collect(
        self,
        findings: Iterable[Any],
        *,
        expected_obligations: Iterable[str] | None = None,
    ) -> dict[str, FindingStatus]:
        """Validate findings into an obligation → status map.

        Obligations listed in ``expected_obligations`` that have no finding are
        recorded as not_started.

        Raises:
            FindingValidationError: On an unknown status or malformed finding.
            DuplicateFindingError: On a repeated obligation id, unless the
                engine was built with ``reject_duplicates=False`` (last wins).
        """
        statuses: dict[str, FindingStatus] = {}
        for item in findings:
            obligation_id, status = _coerce(item)
            if obligation_id in statuses and self._reject_duplicates:
                raise DuplicateFindingError(
                    f"Duplicate finding for obligation {obligation_id!r}",
                    obligation_id=obligation_id,
                    value=status.value,
                )
            statuses[obligation_id] = status

        for obligation_id in expected_obligations or ():
            statuses.setdefault(obligation_id, FindingStatus.NOT_STARTED)
        return statuses

    def tally(self, statuses: Mapping[str, FindingStatus]) -> StatusTally:
        counts = {status.value: 0 for status in FindingStatus}
        for status in statuses.values():
            counts[status.value] += 1
        return StatusTally(**counts, human_oversight_status=statuses.get(self._human_oversight_id))

    def evaluate(
        self,
        findings: Iterable[Any],
        *,
        expected_obligations: Iterable[str] | None = None,
    ) -> GradeResult:
        """Grade a finding set and report how the grade was reached.

        Args:
            findings: ``FindingInput``/``Finding`` objects, mappings with
                ``obligation_id`` and ``status`` (or legacy ``score``), or
                ``(obligation_id, status)`` pairs. Order is irrelevant.
            expected_obligations: Obligation ids the diagnostic covers; any
                without a finding are graded as not_started.

        Returns:
            A ``GradeResult``. Empty input, or input where every finding is
            not_applicable, grades F.
        """
        statuses = self.collect(findings, expected_obligations=expected_obligations)
        tally = self.tally(statuses)
        breakdown = score_statuses(statuses.values())

        if breakdown.applicable_count == 0:
            base_grade = Grade.lowest()
        else:
            base_grade = grade_from_percentage(breakdown.percentage, thresholds=self._thresholds)

        grade, fired = apply_overrides(base_grade, tally, self._rules)

        logger.info(
            "Graded %d findings: %d/%d points (%.3f) base=%s final=%s overrides=%s",
            len(statuses),
            breakdown.points,
            breakdown.max_points,
            breakdown.percentage,
            base_grade,
            grade,
            [o.rule_id for o in fired],
        )

        return GradeResult(
            grade=grade,
            base_grade=base_grade,
            percentage=breakdown.percentage,
            points=breakdown.points,
            max_points=breakdown.max_points,
            applicable_count=breakdown.applicable_count,
            tally=tally,
            overrides=fired,
        )

    def grade(
        self,
        findings: Iterable[Any],
        *,
        expected_obligations: Iterable[str] | None = None,
    ) -> Grade:
        """Return only the final grade of :meth:`evaluate`."""
        return self.evaluate(findings, expected_obligations=expected_obligations).grade


_default_engine = GradingEngine()


def compute_grade(findings: Iterable[Any], *, expected_obligations: Iterable[str] | None = None) -> Grade:
    """Grade ``findings`` with the default engine."""
    return _default_engine.grade(findings, expected_obligations=expected_obligations)
