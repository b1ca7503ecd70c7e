"""Input facts for the Erfgids engine.

These models hold the answers collected by the wizard: family situation,
connecting factors (anchors), estate, will/wishes and the chosen scenario.
A ``CaseFacts`` instance is an immutable snapshot; the engine only ever
reads from it.

Every field accepts untrusted input. Values that cannot be used are
clamped or replaced by the field default instead of raising, so a report
can always be computed.
"""

from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator

from erfgids_core.money import ZERO, coerce_amount, coerce_int, round_cents

MAX_CHILDREN = 20


# =============================================================================
# ENUMERATIONS
# =============================================================================

class RelationType(str, Enum):
    """Relationship between the testator/donor and their partner."""
    MARRIED = "married"
    REGISTERED_PARTNERSHIP = "pacs"
    COHABITING = "cohab"  # concubinage
    SINGLE = "single"


class TransferMode(str, Enum):
    """How the estate passes to the recipients."""
    SUCCESSION = "succession"  # on death
    DONATION = "donation"  # lifetime gift
    MIXED = "mixed"  # deprecated, never computed


class DonationType(str, Enum):
    """Sub-regime for lifetime gifts."""
    STANDARD = "standard"
    CASH_GIFT = "cash_gift_31865"  # don familial de sommes d'argent


class ResidenceAnchor(str, Enum):
    """Habitual residence at death (EU 650/2012 connecting factor)."""
    FR = "fr"
    NL = "nl"
    OTHER = "other"


class NationalityAnchor(str, Enum):
    """Nationality of the testator."""
    NL = "nl"
    FR = "fr"
    OTHER = "other"


class AssetLocation(str, Enum):
    """Where the main assets are located."""
    FR = "fr"
    NL = "nl"
    MIXED = "mixed"


def _coerce_enum(enum_cls: type[Enum], value: Any, default: Enum) -> Enum:
    """Return the enum member for value, or default when it is unknown."""
    if isinstance(value, str):
        value = value.strip().lower()
    try:
        return enum_cls(value)
    except (ValueError, TypeError):
        return default


def _coerce_flag(value: Any) -> bool:
    """Read a checkbox-style flag from untrusted input."""
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on", "ja"}
    return bool(value)


# =============================================================================
# FACT SECTIONS
# =============================================================================

class FamilyFacts(BaseModel):
    """Family composition.

    The child-type flags never change the tax computation; they drive the
    nudges and the list of things the engine declines to compute.
    """
    model_config = ConfigDict(frozen=True)

    relation: RelationType = RelationType.SINGLE
    children_count: int = Field(default=0, ge=0, le=MAX_CHILDREN)
    has_stepchildren: bool = False
    stepchildren_adopted: bool = False  # adoption simple completed
    has_adopted_children: bool = False
    has_minor_children: bool = False
    has_children_from_earlier_relationship: bool = False

    @field_validator("relation", mode="before")
    @classmethod
    def coerce_relation(cls, v: Any) -> RelationType:
        return _coerce_enum(RelationType, v, RelationType.SINGLE)

    @field_validator("children_count", mode="before")
    @classmethod
    def clamp_children_count(cls, v: Any) -> int:
        return coerce_int(v, 0, MAX_CHILDREN)

    @field_validator(
        "has_stepchildren",
        "stepchildren_adopted",
        "has_adopted_children",
        "has_minor_children",
        "has_children_from_earlier_relationship",
        mode="before",
    )
    @classmethod
    def coerce_flags(cls, v: Any) -> bool:
        return _coerce_flag(v)

    @property
    def has_partner(self) -> bool:
        """Whether a partner recipient exists (married, PACS or cohabiting)."""
        return self.relation in (
            RelationType.MARRIED,
            RelationType.REGISTERED_PARTNERSHIP,
            RelationType.COHABITING,
        )


class AnchorFacts(BaseModel):
    """Connecting factors for applicable law and tax jurisdiction."""
    model_config = ConfigDict(frozen=True)

    habitual_residence: ResidenceAnchor = ResidenceAnchor.FR
    nationality: NationalityAnchor = NationalityAnchor.NL
    main_assets_location: AssetLocation = AssetLocation.FR
    wants_choice_of_law: bool = False  # professio juris for the law of nationality

    @field_validator("habitual_residence", mode="before")
    @classmethod
    def coerce_residence(cls, v: Any) -> ResidenceAnchor:
        return _coerce_enum(ResidenceAnchor, v, ResidenceAnchor.FR)

    @field_validator("nationality", mode="before")
    @classmethod
    def coerce_nationality(cls, v: Any) -> NationalityAnchor:
        return _coerce_enum(NationalityAnchor, v, NationalityAnchor.NL)

    @field_validator("main_assets_location", mode="before")
    @classmethod
    def coerce_assets_location(cls, v: Any) -> AssetLocation:
        return _coerce_enum(AssetLocation, v, AssetLocation.FR)

    @field_validator("wants_choice_of_law", mode="before")
    @classmethod
    def coerce_choice_of_law(cls, v: Any) -> bool:
        return _coerce_flag(v)

    def differs_from(self, home: str) -> bool:
        """True when any anchor points away from the home jurisdiction."""
        return any(
            anchor.value != home
            for anchor in (self.habitual_residence, self.nationality, self.main_assets_location)
        )


class EstateFacts(BaseModel):
    """Assets and debts of the estate (or of the planned gift).

    ``includes_main_home`` is informational only: it is carried into the
    exported dossier but no computation, nudge or exclusion reads it.
    """
    model_config = ConfigDict(frozen=True)

    assets_total: Decimal = ZERO
    debts_total: Decimal = ZERO
    includes_main_home: bool = False
    includes_life_insurance: bool = False
    involves_business: bool = False

    @field_validator("assets_total", "debts_total", mode="before")
    @classmethod
    def clamp_amounts(cls, v: Any) -> Decimal:
        return coerce_amount(v)

    @field_validator(
        "includes_main_home", "includes_life_insurance", "involves_business", mode="before"
    )
    @classmethod
    def coerce_flags(cls, v: Any) -> bool:
        return _coerce_flag(v)

    @computed_field
    @property
    def net_estate(self) -> Decimal:
        """Assets minus debts, never below zero."""
        return round_cents(max(ZERO, self.assets_total - self.debts_total))

    @computed_field
    @property
    def net_estate_clamped(self) -> bool:
        """True when assets do not exceed debts."""
        return self.assets_total - self.debts_total <= 0


class WishesFacts(BaseModel):
    """Will and testamentary wishes."""
    model_config = ConfigDict(frozen=True)

    has_will: bool = False

    @field_validator("has_will", mode="before")
    @classmethod
    def coerce_has_will(cls, v: Any) -> bool:
        return _coerce_flag(v)


class ScenarioFacts(BaseModel):
    """Chosen transfer mode and distribution.

    Only the partner percentage is stored; the children percentage is always
    its complement, so the split cannot be inconsistent.
    """
    model_config = ConfigDict(frozen=True)

    mode: TransferMode = TransferMode.SUCCESSION
    partner_pct: int = Field(default=50, ge=0, le=100)
    donation_type: DonationType = DonationType.STANDARD

    @field_validator("mode", mode="before")
    @classmethod
    def coerce_mode(cls, v: Any) -> TransferMode:
        return _coerce_enum(TransferMode, v, TransferMode.SUCCESSION)

    @field_validator("partner_pct", mode="before")
    @classmethod
    def clamp_partner_pct(cls, v: Any) -> int:
        return coerce_int(v, 0, 100)

    @field_validator("donation_type", mode="before")
    @classmethod
    def coerce_donation_type(cls, v: Any) -> DonationType:
        return _coerce_enum(DonationType, v, DonationType.STANDARD)

    @computed_field
    @property
    def children_pct(self) -> int:
        """Share of the net estate for the children together."""
        return 100 - self.partner_pct


class CaseFacts(BaseModel):
    """Complete, immutable snapshot of the wizard answers."""
    model_config = ConfigDict(frozen=True)

    family: FamilyFacts = Field(default_factory=FamilyFacts)
    anchors: AnchorFacts = Field(default_factory=AnchorFacts)
    estate: EstateFacts = Field(default_factory=EstateFacts)
    wishes: WishesFacts = Field(default_factory=WishesFacts)
    scenario: ScenarioFacts = Field(default_factory=ScenarioFacts)

    @model_validator(mode="before")
    @classmethod
    def drop_malformed_sections(cls, data: Any) -> Any:
        """Discard sections that are neither a mapping nor a section model."""
        if not isinstance(data, dict):
            return data
        return {
            key: value
            for key, value in data.items()
            if isinstance(value, (dict, BaseModel))
        }
