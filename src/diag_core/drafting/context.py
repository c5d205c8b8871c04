"""Assemble the per-obligation context sent to the drafter."""

from __future__ import annotations

from pydantic import BaseModel, Field

from diag_core.obligations import REGULATION_REF, Obligation, list_obligations


class QuestionAnswer(BaseModel):
    """One questionnaire answer from the client."""

    question: str
    answer: str


class SystemProfile(BaseModel):
    """The AI system under assessment."""

    name: str = "Unknown"
    risk_category: str = "Unknown"
    description: str = ""


class DraftRequest(BaseModel):
    """Everything the drafter needs to propose findings for one diagnostic."""

    diagnostic_id: str = Field(min_length=1)
    system: SystemProfile = Field(default_factory=SystemProfile)
    regulation: str = f"EU AI Act — {REGULATION_REF}"
    answers: dict[str, list[QuestionAnswer]] = Field(default_factory=dict)


NO_RESPONSES = "(No responses provided)"


def build_drafting_context(request: DraftRequest, catalogue: list[Obligation] | None = None) -> str:
    """Render the user message: system profile, obligation ids, then Q&A per obligation."""
    obligations = catalogue if catalogue is not None else list_obligations()

    header = "\n".join(
        [
            f"AI System: {request.system.name}",
            f"Risk Category: {request.system.risk_category}",
            f"Description: {request.system.description or '—'}",
            f"Regulation Version: {request.regulation}",
            "",
            "Obligation IDs for reference:",
            *(f'- {ob.name}: "{ob.id}"' for ob in obligations),
        ]
    )

    sections = []
    for ob in obligations:
        qa = request.answers.get(ob.id, [])
        responses = "\n\n".join(f"Q: {pair.question}\nA: {pair.answer}" for pair in qa) or NO_RESPONSES
        sections.append(f"## {ob.name} ({ob.article_ref})\n{ob.description}\n\nClient responses:\n{responses}")

    return header + "\n\n---\n\n" + "\n\n---\n\n".join(sections)
