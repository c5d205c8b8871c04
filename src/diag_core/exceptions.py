"""Diagnostics domain exceptions."""

from __future__ import annotations

from typing import Any


class DiagError(Exception):
    """Base exception for all diagnostics errors."""


class ValidationError(DiagError):
    """Input failed domain validation."""


class FindingValidationError(ValidationError):
    """A finding carries a value outside the closed vocabulary."""

    def __init__(self, message: str, *, obligation_id: str | None = None, value: Any = None):
        super().__init__(message)
        self.obligation_id = obligation_id
        self.value = value


class DuplicateFindingError(FindingValidationError):
    """More than one finding was supplied for the same obligation."""


class UnknownObligationError(DiagError):
    """Obligation id is not part of the catalogue."""

    def __init__(self, obligation_id: str):
        super().__init__(f"Unknown obligation: {obligation_id!r}")
        self.obligation_id = obligation_id


class DiagnosticStateError(DiagError):
    """Operation is not allowed in the diagnostic's current lifecycle state."""


class DraftParseError(DiagError):
    """LLM draft output could not be turned into findings."""

    def __init__(self, message: str, *, raw_excerpt: str = ""):
        super().__init__(message)
        self.raw_excerpt = raw_excerpt


class DrafterError(DiagError):
    """Base exception for the LLM drafting collaborator."""


class DrafterAPIError(DrafterError):
    """Drafting endpoint answered with an error status."""

    def __init__(self, message: str, status_code: int | None = None, response_data: dict | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_data = response_data


class DrafterConnectionError(DrafterError):
    """Failed to reach the drafting endpoint."""
