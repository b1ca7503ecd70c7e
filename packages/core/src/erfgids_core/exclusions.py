"""Facts the engine declines to compute.

Like the nudges, this is a table of predicate rows. A matching row turns
into a ``NotComputed`` entry on the report, so a limitation is always
visible instead of silently producing a wrong figure.
"""

from dataclasses import dataclass
from typing import Callable

from .config import Jurisdiction
from .models import CaseFacts, NotComputed, TransferMode


@dataclass(frozen=True)
class ExclusionRule:
    code: str
    reason: str
    applies: Callable[[CaseFacts, str], bool]


EXCLUSION_RULES: tuple[ExclusionRule, ...] = (
    ExclusionRule(
        code="life_insurance",
        reason="Assurance-vie valt onder een eigen regime en is niet meegerekend.",
        applies=lambda f, home: f.estate.includes_life_insurance,
    ),
    ExclusionRule(
        code="business_assets",
        reason="Waardering en vrijstellingen voor bedrijfsvermogen zijn niet meegerekend.",
        applies=lambda f, home: f.estate.involves_business,
    ),
    ExclusionRule(
        code="stepchildren",
        reason="Stiefkinderen zijn niet als afzonderlijke ontvangers doorgerekend.",
        applies=lambda f, home: f.family.has_stepchildren,
    ),
    ExclusionRule(
        code="adoption_form",
        reason="Het effect van de adoptievorm op vrijstelling en tarief is niet doorgerekend.",
        applies=lambda f, home: f.family.has_adopted_children,
    ),
    ExclusionRule(
        code="cross_border",
        reason="Toepasselijk erfrecht en mogelijke dubbele heffing zijn niet doorgerekend; alleen Franse heffing.",
        applies=lambda f, home: f.anchors.differs_from(home),
    ),
    ExclusionRule(
        code="mixed_mode",
        reason="Het traject 'combinatie' wordt niet berekend.",
        applies=lambda f, home: f.scenario.mode is TransferMode.MIXED,
    ),
)


def build_exclusions(
    facts: CaseFacts,
    home: Jurisdiction = Jurisdiction.FR,
    rules: tuple[ExclusionRule, ...] = EXCLUSION_RULES,
) -> list[NotComputed]:
    """Return a NotComputed entry for every matching exclusion rule."""
    home_value = Jurisdiction(home).value
    return [
        NotComputed(code=rule.code, reason=rule.reason)
        for rule in rules
        if rule.applies(facts, home_value)
    ]
