"""Nudge rule set: contextual legal warnings.

Each rule is a row of ``NUDGE_RULES``: a code, a severity, the message and
the reference it is based on, plus a pure predicate over the facts. The
rules do not look at tax figures and can be tested one by one.
"""

from dataclasses import dataclass
from typing import Callable

from .config import Jurisdiction
from .exceptions import ConfigurationError
from .models import CaseFacts, DonationType, Nudge, RelationType, Severity, TransferMode
from .sources import get_source

Predicate = Callable[[CaseFacts, str], bool]


@dataclass(frozen=True)
class NudgeRule:
    """Condition → warning mapping."""
    code: str
    severity: Severity
    title: str
    body: str
    source_id: str
    applies: Predicate

    def evaluate(self, facts: CaseFacts, home: str) -> bool:
        return bool(self.applies(facts, home))

    def to_nudge(self) -> Nudge:
        return Nudge(
            code=self.code,
            severity=self.severity,
            title=self.title,
            body=self.body,
            source_id=self.source_id,
        )


NUDGE_RULES: tuple[NudgeRule, ...] = (
    NudgeRule(
        code="pacs_without_will",
        severity=Severity.WARN,
        title="PACS ≠ automatisch erven",
        body=(
            "Een PACS-partner erft niet van rechtswege. Zonder testament krijgt "
            "de partner niets uit de nalatenschap, ook al is hij of zij vrijgesteld "
            "van successierechten."
        ),
        source_id="sp_pacs_2026",
        applies=lambda f, home: (
            f.family.relation is RelationType.REGISTERED_PARTNERSHIP and not f.wishes.has_will
        ),
    ),
    NudgeRule(
        code="pacs_succession_exempt",
        severity=Severity.OK,
        title="PACS: vrijgesteld bij overlijden",
        body=(
            "De PACS-partner is fiscaal vrijgesteld van successierechten. Dat zegt "
            "niets over de civielrechtelijke verdeling zonder testament."
        ),
        source_id="sp_pacs_2026",
        applies=lambda f, home: f.family.relation is RelationType.REGISTERED_PARTNERSHIP,
    ),
    NudgeRule(
        code="children_reserved_share",
        severity=Severity.WARN,
        title="Kinderen → reserve/quotité (civielrecht)",
        body=(
            "Kinderen zijn reservataire erfgenamen: een deel van de nalatenschap is "
            "niet vrij te bestemmen. Een gewenste verdeling moet binnen de quotité "
            "disponible blijven."
        ),
        source_id="legi_cc_912",
        applies=lambda f, home: f.family.children_count > 0,
    ),
    NudgeRule(
        code="children_earlier_relationship",
        severity=Severity.WARN,
        title="Kinderen uit een eerdere relatie",
        body=(
            "Samengestelde gezinnen maken verdeling en bescherming van de partner "
            "complexer. Laat het scenario toetsen door een notaris."
        ),
        source_id="legi_cc_912",
        applies=lambda f, home: f.family.has_children_from_earlier_relationship,
    ),
    NudgeRule(
        code="cohabiting_high_risk",
        severity=Severity.BAD,
        title="Samenwonend (concubinage): hoog risico",
        body=(
            "Zonder huwelijk of PACS erft de partner niet van rechtswege en wordt "
            "hij of zij fiscaal als derde behandeld. De berekening voor de partner "
            "is daarom niet betrouwbaar."
        ),
        source_id="sp_succession_2025",
        applies=lambda f, home: f.family.relation is RelationType.COHABITING,
    ),
    NudgeRule(
        code="life_insurance_regime",
        severity=Severity.WARN,
        title="Assurance-vie: eigen regime",
        body=(
            "Assurance-vie valt grotendeels buiten de gewone nalatenschap en kent "
            "eigen vrijstellingen. Dit onderdeel wordt niet doorgerekend."
        ),
        source_id="sp_succession_2025",
        applies=lambda f, home: f.estate.includes_life_insurance,
    ),
    NudgeRule(
        code="stepchildren_not_direct_line",
        severity=Severity.WARN,
        title="Stiefkinderen: geen rechte lijn",
        body=(
            "Zonder adoption simple of andere wettelijke gelijkstelling gelden "
            "stiefkinderen fiscaal als derden; de wet voorziet dan in het derdentarief "
            "(60% na een minimale vrijstelling). Die heffing is hier niet doorgerekend."
        ),
        source_id="sp_donation_2024",
        applies=lambda f, home: f.family.has_stepchildren and not f.family.stepchildren_adopted,
    ),
    NudgeRule(
        code="stepchildren_adoption_check",
        severity=Severity.OK,
        title="Stiefkinderen met adoption simple",
        body=(
            "Na een adoption simple kan een stiefkind als kind in de rechte lijn "
            "worden belast. Controleer of aan de voorwaarden is voldaan."
        ),
        source_id="sp_donation_2024",
        applies=lambda f, home: f.family.has_stepchildren and f.family.stepchildren_adopted,
    ),
    NudgeRule(
        code="adopted_children_form",
        severity=Severity.WARN,
        title="Adoptie: vorm bepaalt de abattements",
        body=(
            "Bij adoptie hangen vrijstelling en tarief af van de adoptievorm "
            "(plénière of simple). Dit wordt niet per vorm doorgerekend."
        ),
        source_id="sp_donation_2024",
        applies=lambda f, home: f.family.has_adopted_children,
    ),
    NudgeRule(
        code="minor_children_planning",
        severity=Severity.WARN,
        title="Minderjarige kinderen: extra planning",
        body=(
            "Voogdij, bewind en een executeur vragen om afzonderlijke afspraken "
            "in testament of akte."
        ),
        source_id="legi_cc_912",
        applies=lambda f, home: f.family.has_minor_children,
    ),
    NudgeRule(
        code="business_out_of_scope",
        severity=Severity.WARN,
        title="Onderneming of vennootschap",
        body=(
            "Bedrijfsvermogen en SCI-aandelen vallen onder eigen waarderings- en "
            "vrijstellingsregels en worden niet doorgerekend."
        ),
        source_id="sp_succession_2025",
        applies=lambda f, home: f.estate.involves_business,
    ),
    NudgeRule(
        code="cross_border_law_vs_tax",
        severity=Severity.WARN,
        title="Internationale situatie: erfrecht ≠ belasting",
        body=(
            "Bij grensoverschrijdende situaties volgen het toepasselijke erfrecht en "
            "de belastingheffing elk hun eigen aanknopingspunten. De berekening gaat "
            "uit van Franse heffing."
        ),
        source_id="eurlex_650_2012",
        applies=lambda f, home: f.anchors.differs_from(home),
    ),
    NudgeRule(
        code="net_estate_non_positive",
        severity=Severity.BAD,
        title="Netto massa ≤ 0",
        body=(
            "Met de ingevoerde bezittingen en schulden is er geen positieve massa "
            "om te verdelen. Controleer de invoer."
        ),
        source_id="sp_succession_2025",
        applies=lambda f, home: f.estate.net_estate <= 0,
    ),
    NudgeRule(
        code="no_will_default_rules",
        severity=Severity.WARN,
        title="Geen testament: wettelijke regels",
        body=(
            "Zonder testament geldt het wettelijk erfrecht. De gewenste verdeling "
            "is dan mogelijk niet uitvoerbaar."
        ),
        source_id="legi_cc_912",
        applies=lambda f, home: not f.wishes.has_will,
    ),
    NudgeRule(
        code="choice_of_law_civil_only",
        severity=Severity.WARN,
        title="Rechtskeuze: civiel, niet fiscaal",
        body=(
            "Een keuze voor het recht van de nationaliteit bepaalt het erfrecht, "
            "niet waar en hoeveel belasting verschuldigd is."
        ),
        source_id="eurlex_650_2012",
        applies=lambda f, home: f.anchors.wants_choice_of_law,
    ),
    NudgeRule(
        code="choice_of_law_forced_heirship",
        severity=Severity.BAD,
        title="Rechtskeuze en reserve van kinderen",
        body=(
            "Ondanks een rechtskeuze kunnen kinderen in internationale successies "
            "een compenserende voorafneming op Frans vermogen vorderen als het "
            "gekozen recht geen reserve kent."
        ),
        source_id="legi_cc_912",
        applies=lambda f, home: f.anchors.wants_choice_of_law and f.family.children_count > 0,
    ),
    NudgeRule(
        code="donation_periodic_allowance",
        severity=Severity.OK,
        title="Schenking: vrijstelling hernieuwt elke 15 jaar",
        body=(
            "De vrijstelling per kind geldt per ouder en wordt elke 15 jaar opnieuw "
            "beschikbaar. Spreiden in de tijd kan de heffing verlagen."
        ),
        source_id="sp_donation_2024",
        applies=lambda f, home: (
            f.scenario.mode is TransferMode.DONATION and f.family.children_count > 0
        ),
    ),
    NudgeRule(
        code="cash_gift_conditions",
        severity=Severity.WARN,
        title="Familiale geldschenking: voorwaarden",
        body=(
            "De extra vrijstelling voor geldschenkingen geldt alleen onder voorwaarden "
            "(onder meer leeftijd van schenker en begiftigde) en is hier indicatief toegepast."
        ),
        source_id="sp_donation_2024",
        applies=lambda f, home: (
            f.scenario.mode is TransferMode.DONATION
            and f.scenario.donation_type is DonationType.CASH_GIFT
        ),
    ),
    NudgeRule(
        code="mixed_mode_deprecated",
        severity=Severity.WARN,
        title="Combinatie wordt niet doorgerekend",
        body=(
            "Het traject 'combinatie' heeft geen eenduidige berekening. Kies erfenis "
            "of schenking om belasting te zien."
        ),
        source_id="sp_succession_2025",
        applies=lambda f, home: f.scenario.mode is TransferMode.MIXED,
    ),
)


def _check_rule_sources(rules: tuple[NudgeRule, ...]) -> None:
    """Every rule must point at a known reference and have a unique code."""
    seen = set()
    for rule in rules:
        if get_source(rule.source_id) is None:
            raise ConfigurationError(
                "Nudge rule references an unknown source",
                config_key=f"nudge_rules.{rule.code}.source_id",
                actual=rule.source_id,
            )
        if rule.code in seen:
            raise ConfigurationError(
                "Duplicate nudge rule code",
                config_key="nudge_rules",
                actual=rule.code,
            )
        seen.add(rule.code)


_check_rule_sources(NUDGE_RULES)


def build_nudges(
    facts: CaseFacts,
    home: Jurisdiction = Jurisdiction.FR,
    rules: tuple[NudgeRule, ...] = NUDGE_RULES,
) -> list[Nudge]:
    """Evaluate every rule once and return the nudges that apply."""
    home_value = Jurisdiction(home).value
    return [rule.to_nudge() for rule in rules if rule.evaluate(facts, home_value)]
