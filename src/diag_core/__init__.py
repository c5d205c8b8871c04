"""EU AI Act diagnostics domain library."""

from diag_core.enums import FindingStatus, Grade
from diag_core.exceptions import DiagError, FindingValidationError, ValidationError
from diag_core.grading import GradingEngine, compute_grade

__version__ = "0.1.0"

__all__ = [
    "DiagError",
    "FindingStatus",
    "FindingValidationError",
    "Grade",
    "GradingEngine",
    "ValidationError",
    "compute_grade",
]
