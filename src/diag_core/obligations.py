"""Catalogue of the eight mandatory EU AI Act obligations for high-risk systems.

Reference data only: obligations are never created or mutated at runtime.
Grading rules refer to obligations by their stable ``id``; display names may
change without affecting any rule.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from diag_core.exceptions import UnknownObligationError

REGULATION_REF = "Regulation (EU) 2024/1689"

HUMAN_OVERSIGHT_ID = "human_oversight"


class Obligation(BaseModel):
    """One catalogue entry."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    article_ref: str
    description: str
    guidance: str = ""


_CATALOGUE: tuple[Obligation, ...] = (
    Obligation(
        id="risk_management",
        name="Risk Management System",
        article_ref="Art. 9",
        description=(
            "A continuous, iterative risk management process run across the entire lifecycle "
            "of the high-risk AI system."
        ),
        guidance=(
            "Documented risk register covering the full lifecycle, regularly updated, with "
            "mitigation measures next to each identified risk, a sign-off record, and a "
            "reference to the specific use case and affected persons."
        ),
    ),
    Obligation(
        id="data_governance",
        name="Data & Data Governance",
        article_ref="Art. 10",
        description=(
            "Training, validation and testing data sets subject to appropriate governance "
            "and management practices, including examination for possible biases."
        ),
        guidance=(
            "AI-specific data governance policy (not only a GDPR policy), dataset origin and "
            "collection documentation, bias testing records, representation analysis, and "
            "separation of validation and test sets from training data."
        ),
    ),
    Obligation(
        id="technical_documentation",
        name="Technical Documentation",
        article_ref="Art. 11",
        description=(
            "Technical documentation drawn up before the system is placed on the market and "
            "kept up to date, covering the elements listed in Annex IV."
        ),
        guidance=(
            "A document explicitly identified as the Annex IV documentation pack addressing all "
            "nine Annex IV items, from the general system description to the post-market "
            "monitoring system."
        ),
    ),
    Obligation(
        id="record_keeping",
        name="Record-Keeping & Logging",
        article_ref="Art. 12",
        description="Automatic recording of events (logs) over the lifetime of the system.",
        guidance=(
            "Logging built into the system architecture, capture of the decision inputs behind "
            "each output, log format documentation, and a formal retention policy with "
            "specific periods."
        ),
    ),
    Obligation(
        id="transparency",
        name="Transparency & Provision of Information",
        article_ref="Art. 13",
        description=(
            "Operation sufficiently transparent for deployers to interpret outputs, with "
            "instructions for use."
        ),
        guidance=(
            "User documentation explicitly disclosing the AI nature of the system, its "
            "limitations as well as capabilities, deployer instructions for use, and accuracy "
            "claims backed by evidence."
        ),
    ),
    Obligation(
        id=HUMAN_OVERSIGHT_ID,
        name="Human Oversight",
        article_ref="Art. 14",
        description=(
            "Design enabling natural persons to effectively oversee the system, including the "
            "ability to override or stop it."
        ),
        guidance=(
            "A technical human review step in the product flow, an override and stop mechanism, "
            "operator training material, and deployer terms mandating human review. A "
            "procedural guideline alone is not sufficient."
        ),
    ),
    Obligation(
        id="accuracy_robustness",
        name="Accuracy, Robustness & Cybersecurity",
        article_ref="Art. 15",
        description=(
            "An appropriate level of accuracy, robustness and cybersecurity, performing "
            "consistently throughout the lifecycle."
        ),
        guidance=(
            "Formal accuracy benchmarks with named metrics, failure mode analysis, AI-specific "
            "security and adversarial robustness testing, and production accuracy monitoring."
        ),
    ),
    Obligation(
        id="conformity_assessment",
        name="Conformity Assessment",
        article_ref="Art. 43",
        description=(
            "Conformity assessment completed before placing on the market, with EU declaration "
            "of conformity, CE marking and EU database registration."
        ),
        guidance=(
            "An internal self-assessment started or completed, an EU Declaration of Conformity "
            "in preparation, CE marking where already on the market, and EU database "
            "registration. ISO 42001 certification does not replace the assessment."
        ),
    ),
)

_BY_ID: dict[str, Obligation] = {ob.id: ob for ob in _CATALOGUE}

# Keyword → obligation id, for rows that only carry a display name.
_NAME_KEYWORDS: tuple[tuple[str, str], ...] = (
    ("risk management", "risk_management"),
    ("data governance", "data_governance"),
    ("technical documentation", "technical_documentation"),
    ("logging", "record_keeping"),
    ("record", "record_keeping"),
    ("transparency", "transparency"),
    ("human oversight", HUMAN_OVERSIGHT_ID),
    ("accuracy", "accuracy_robustness"),
    ("robustness", "accuracy_robustness"),
    ("conformity", "conformity_assessment"),
)


def list_obligations() -> list[Obligation]:
    """Return the catalogue in its canonical order."""
    return list(_CATALOGUE)


def obligation_ids() -> list[str]:
    return [ob.id for ob in _CATALOGUE]


def get_obligation(obligation_id: str) -> Obligation:
    """Look up a catalogue entry by stable id."""
    try:
        return _BY_ID[obligation_id]
    except KeyError:
        raise UnknownObligationError(obligation_id) from None


def is_known_obligation(obligation_id: str) -> bool:
    return obligation_id in _BY_ID


def default_citation(obligation: Obligation) -> str:
    """Citation a new finding starts with before a reviewer edits it."""
    return f"EU AI Act {obligation.article_ref} | {REGULATION_REF}"


def match_obligation(name: str) -> Obligation | None:
    """Map a legacy display name onto a catalogue entry.

    Case-insensitive keyword match; returns ``None`` when nothing matches.
    """
    lowered = name.strip().lower()
    if not lowered:
        return None
    for keyword, obligation_id in _NAME_KEYWORDS:
        if keyword in lowered:
            return _BY_ID[obligation_id]
    return None
