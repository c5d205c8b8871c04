"""Hard-override rules applied after the percentage grade.

Each rule is a ceiling: when its predicate holds, the grade can be no better
than the rule's ceiling. Several triggered rules compose by taking the
strictest ceiling. A ceiling never lifts a grade that is already lower.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from diag_core.enums import Grade
from diag_core.models import StatusTally, TriggeredOverride


@dataclass(frozen=True)
class OverrideRule:
    rule_id: str
    ceiling: Grade
    description: str
    predicate: Callable[[StatusTally], bool]

    def triggered(self, tally: StatusTally) -> bool:
        return self.predicate(tally)


DEFAULT_OVERRIDE_RULES: tuple[OverrideRule, ...] = (
    OverrideRule(
        rule_id="critical_gaps_2",
        ceiling=Grade.C_PLUS,
        description="Two or more critical gaps cap the grade at C+",
        predicate=lambda t: t.critical_gap >= 2,
    ),
    OverrideRule(
        rule_id="critical_gaps_3",
        ceiling=Grade.D,
        description="Three or more critical gaps cap the grade at D",
        predicate=lambda t: t.critical_gap >= 3,
    ),
    OverrideRule(
        rule_id="human_oversight_critical",
        ceiling=Grade.C_PLUS,
        description="A critical gap in Human Oversight caps the grade at C+",
        predicate=lambda t: t.human_oversight_critical,
    ),
    OverrideRule(
        rule_id="not_started_3",
        ceiling=Grade.D,
        description="Three or more obligations not started cap the grade at D",
        predicate=lambda t: t.not_started >= 3,
    ),
)


def apply_overrides(
    grade: Grade,
    tally: StatusTally,
    rules: Sequence[OverrideRule] = DEFAULT_OVERRIDE_RULES,
) -> tuple[Grade, list[TriggeredOverride]]:
    """Clamp ``grade`` under every triggered rule.

    Returns:
        The final grade and the rules that fired, in rule order. A fired rule is
        reported even when its ceiling did not change the grade.
    """
    final = grade
    fired: list[TriggeredOverride] = []
    for rule in rules:
        if not rule.triggered(tally):
            continue
        final = final.cap(rule.ceiling)
        fired.append(TriggeredOverride(rule_id=rule.rule_id, ceiling=rule.ceiling, description=rule.description))
    return final, fired
