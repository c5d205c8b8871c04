"""Domain enums for the EU AI Act diagnostics platform."""

from __future__ import annotations

from enum import StrEnum


class FindingStatus(StrEnum):
    """Assessed compliance state of one obligation."""

    COMPLIANT = "compliant"
    PARTIAL = "partial"
    CRITICAL_GAP = "critical_gap"
    NOT_STARTED = "not_started"
    NOT_APPLICABLE = "not_applicable"


class Grade(StrEnum):
    """Overall compliance grade, declared from best to worst."""

    A_PLUS = "A+"
    A = "A"
    B_PLUS = "B+"
    B = "B"
    C_PLUS = "C+"
    C = "C"
    D = "D"
    F = "F"

    @property
    def rank(self) -> int:
        """Ordinal position; 0 is the best grade."""
        return _GRADE_ORDER.index(self)

    def is_better_than(self, other: Grade) -> bool:
        return self.rank < other.rank

    def cap(self, ceiling: Grade) -> Grade:
        """Return this grade, lowered to ``ceiling`` if it is better than it.

        A ceiling never raises a grade.
        """
        return ceiling if self.is_better_than(ceiling) else self

    @classmethod
    def lowest(cls) -> Grade:
        return _GRADE_ORDER[-1]


_GRADE_ORDER: tuple[Grade, ...] = tuple(Grade)


class GradeBand(StrEnum):
    """Traffic-light band a grade is displayed in."""

    STRONG = "strong"
    MODERATE = "moderate"
    WEAK = "weak"


class Priority(StrEnum):
    """Remediation priority attached to a finding status."""

    P1 = "P1"
    P2 = "P2"
    P3 = "P3"
    NONE = "N/A"


class DiagnosticStatus(StrEnum):
    """Lifecycle states of a diagnostic assessment.

    pending → in_review → draft → delivered
    """

    PENDING = "pending"
    IN_REVIEW = "in_review"
    DRAFT = "draft"
    DELIVERED = "delivered"


class Effort(StrEnum):
    """Reviewer effort estimates offered for a remediation."""

    LOW = "Low (days)"
    MEDIUM = "Medium (1-2 weeks)"
    HIGH = "High (2-4 weeks)"
    VERY_HIGH = "Very High (month+)"
    EXTERNAL = "External required"
