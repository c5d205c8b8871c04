"""Canonical grading engine for diagnostic findings."""

from diag_core.grading.engine import GradingEngine, compute_grade
from diag_core.grading.overrides import DEFAULT_OVERRIDE_RULES, OverrideRule, apply_overrides
from diag_core.grading.scoring import STATUS_POINTS, score_statuses
from diag_core.grading.status import normalize_status
from diag_core.grading.thresholds import GRADE_THRESHOLDS, grade_from_percentage

__all__ = [
    "DEFAULT_OVERRIDE_RULES",
    "GRADE_THRESHOLDS",
    "STATUS_POINTS",
    "GradingEngine",
    "OverrideRule",
    "apply_overrides",
    "compute_grade",
    "grade_from_percentage",
    "normalize_status",
    "score_statuses",
]
