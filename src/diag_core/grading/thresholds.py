"""Percentage → letter grade mapping."""

from __future__ import annotations

from diag_core.enums import Grade

# Evaluated top-down, first match wins. Anything below the last entry is F.
GRADE_THRESHOLDS: tuple[tuple[float, Grade], ...] = (
    (0.95, Grade.A_PLUS),
    (0.85, Grade.A),
    (0.70, Grade.B_PLUS),
    (0.55, Grade.B),
    (0.40, Grade.C_PLUS),
    (0.25, Grade.C),
    (0.10, Grade.D),
)


def grade_from_percentage(
    percentage: float,
    *,
    thresholds: tuple[tuple[float, Grade], ...] = GRADE_THRESHOLDS,
) -> Grade:
    """Return the highest grade whose threshold ``percentage`` reaches.

    Args:
        percentage: Score ratio between 0.0 and 1.0.
        thresholds: ``(minimum, grade)`` pairs ordered from highest minimum down.

    Raises:
        ValueError: If ``percentage`` is outside [0, 1].
    """
    if not 0.0 <= percentage <= 1.0:
        raise ValueError(f"percentage must be within [0, 1], got {percentage}")

    for minimum, grade in thresholds:
        if percentage >= minimum:
            return grade
    return Grade.lowest()
