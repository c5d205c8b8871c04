"""LLM-assisted drafting of findings (AI proposes, reviewer decides)."""

from diag_core.drafting.context import DraftRequest, QuestionAnswer, SystemProfile, build_drafting_context
from diag_core.drafting.drafter import FindingsDrafter, MessagesAPIDrafter
from diag_core.drafting.parser import parse_draft_response

__all__ = [
    "DraftRequest",
    "FindingsDrafter",
    "MessagesAPIDrafter",
    "QuestionAnswer",
    "SystemProfile",
    "build_drafting_context",
    "parse_draft_response",
]
