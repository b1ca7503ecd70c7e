"""French gift and inheritance tax tables (droits de donation et de succession).

This module contains the published progressive brackets and allowances
(abattements) used for the indicative computation, plus the marginal
bracket function itself.

Sources:
- Succession: https://www.service-public.fr/particuliers/vosdroits/F35794
- Donation: https://www.service-public.fr/particuliers/vosdroits/F14203

Updated: succession verified 2025-07-31, donation verified 2024-11-07
"""

from decimal import Decimal
from typing import NamedTuple

from .exceptions import ConfigurationError
from .money import ZERO, round_cents, to_decimal


# =============================================================================
# VERSION TRACKING
# =============================================================================

TAX_TABLES_VERSION = "service-public-2025"
SUCCESSION_VERIFIED = "2025-07-31"
DONATION_VERIFIED = "2024-11-07"


def get_tax_tables_version() -> str:
    """Return current tax tables version."""
    return TAX_TABLES_VERSION


# =============================================================================
# BRACKETS
# =============================================================================

UNBOUNDED = Decimal("Infinity")


class Bracket(NamedTuple):
    """One marginal bracket: amounts up to upper_bound are taxed at rate."""
    upper_bound: Decimal
    rate: Decimal


def validate_brackets(brackets: tuple[Bracket, ...]) -> tuple[Bracket, ...]:
    """Check that a table is usable by progressive_tax and return it.

    Bounds must be strictly ascending, the last bound unbounded, and every
    rate between 0 and 1.

    Raises:
        ConfigurationError: If the table violates any of these rules.
    """
    if not brackets:
        raise ConfigurationError(
            "Bracket table is empty",
            config_key="brackets",
            expected="at least one bracket",
        )

    last_bound = ZERO
    for i, bracket in enumerate(brackets):
        if bracket.upper_bound <= last_bound:
            raise ConfigurationError(
                "Bracket bounds must be strictly ascending",
                config_key=f"brackets[{i}].upper_bound",
                expected=f"> {last_bound}",
                actual=str(bracket.upper_bound),
            )
        if not ZERO <= bracket.rate <= 1:
            raise ConfigurationError(
                "Bracket rate must be between 0 and 1",
                config_key=f"brackets[{i}].rate",
                actual=str(bracket.rate),
            )
        last_bound = bracket.upper_bound

    if last_bound != UNBOUNDED:
        raise ConfigurationError(
            "Top bracket must be unbounded",
            config_key="brackets[-1].upper_bound",
            expected="Infinity",
            actual=str(last_bound),
        )
    return brackets


# Ligne directe: children, in both succession and donation
DIRECT_LINE_BRACKETS = validate_brackets((
    Bracket(Decimal("8072"), Decimal("0.05")),
    Bracket(Decimal("12109"), Decimal("0.10")),
    Bracket(Decimal("15932"), Decimal("0.15")),
    Bracket(Decimal("552324"), Decimal("0.20")),
    Bracket(Decimal("902838"), Decimal("0.30")),
    Bracket(Decimal("1805677"), Decimal("0.40")),
    Bracket(UNBOUNDED, Decimal("0.45")),
))

# Donation between spouses or PACS partners
SPOUSE_PARTNER_DONATION_BRACKETS = validate_brackets((
    Bracket(Decimal("8072"), Decimal("0.05")),
    Bracket(Decimal("15932"), Decimal("0.10")),
    Bracket(Decimal("31865"), Decimal("0.15")),
    Bracket(Decimal("552324"), Decimal("0.20")),
    Bracket(Decimal("902838"), Decimal("0.30")),
    Bracket(Decimal("1805677"), Decimal("0.40")),
    Bracket(UNBOUNDED, Decimal("0.45")),
))

BRACKET_TABLES = {
    "direct_line": DIRECT_LINE_BRACKETS,
    "spouse_partner_donation": SPOUSE_PARTNER_DONATION_BRACKETS,
}


def get_bracket_table(name: str) -> tuple[Bracket, ...]:
    """Look up a bracket table by name.

    Raises:
        ConfigurationError: If no table has that name.
    """
    try:
        return BRACKET_TABLES[name]
    except KeyError:
        raise ConfigurationError(
            "Unknown bracket table",
            config_key="bracket_table",
            expected=" or ".join(sorted(BRACKET_TABLES)),
            actual=name,
        ) from None


def progressive_tax(amount, brackets: tuple[Bracket, ...]) -> Decimal:
    """Tax an amount slice by slice across marginal brackets.

    Each bracket taxes the part of the amount between the previous bound and
    its own bound. Slices are summed at full precision and the total is
    rounded to cents once.

    Args:
        amount: Taxable amount; negative values are treated as zero
        brackets: Table ordered by ascending upper bound

    Returns:
        Tax owed, rounded to cents
    """
    remaining = max(ZERO, to_decimal(amount))
    tax = ZERO
    last_bound = ZERO

    for bracket in brackets:
        if remaining <= 0:
            break
        slice_amount = min(remaining, bracket.upper_bound - last_bound)
        tax += slice_amount * bracket.rate
        remaining -= slice_amount
        last_bound = bracket.upper_bound

    return round_cents(tax)


# =============================================================================
# ALLOWANCES (ABATTEMENTS)
# =============================================================================

# Per child, per parent; renewable every 15 years for donations
CHILD_ALLOWANCE = Decimal("100000")

# Donation to a spouse or PACS partner
SPOUSE_PARTNER_DONATION_ALLOWANCE = Decimal("80724")

# Extra exemption for a family cash gift (don familial de sommes d'argent),
# subject to age conditions on donor and recipient
CASH_GIFT_ALLOWANCE = Decimal("31865")

DONATION_RENEWAL_YEARS = 15
