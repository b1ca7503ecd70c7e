"""Per-person tax resolution.

Maps (transfer mode, recipient category, gross amount, donation sub-regime)
to an allowance, a taxable base, the tax and the net amount.
"""

from decimal import Decimal
from typing import Optional

import structlog

from .config import TaxPolicyConfig, UnknownRecipientPolicy
from .models import DonationType, RecipientCategory, TaxResult, TransferMode
from .money import ZERO, coerce_amount, round_cents
from .tax_tables import (
    CASH_GIFT_ALLOWANCE,
    CHILD_ALLOWANCE,
    DIRECT_LINE_BRACKETS,
    SPOUSE_PARTNER_DONATION_ALLOWANCE,
    SPOUSE_PARTNER_DONATION_BRACKETS,
    progressive_tax,
)

logger = structlog.get_logger()

UNRESOLVED_NOTE = (
    "Relatie valt buiten de rechte lijn en de partnervrijstelling; "
    "geen betrouwbare belastingberekening."
)
MIXED_MODE_NOTE = (
    "Traject 'combinatie' wordt niet doorgerekend; "
    "kies erfenis of schenking voor een berekening."
)


def _finalize(
    gross: Decimal,
    allowance: Decimal,
    taxable: Decimal,
    tax: Decimal,
    computed: bool = True,
    notes: Optional[list[str]] = None,
) -> TaxResult:
    """Round every field to cents and derive net."""
    return TaxResult(
        gross=round_cents(gross),
        allowance=round_cents(allowance),
        taxable=round_cents(taxable),
        tax=round_cents(tax),
        net=round_cents(max(ZERO, gross - tax)),
        computed=computed,
        notes=notes or [],
    )


def _decline(gross: Decimal, note: str) -> TaxResult:
    """No allowance, full gross taxable, no tax, flagged as not computed."""
    return _finalize(gross, ZERO, gross, ZERO, computed=False, notes=[note])


def _third_party(gross: Decimal, policy: TaxPolicyConfig) -> TaxResult:
    """Flat third-party rate after the minimal allowance."""
    allowance = policy.third_party_allowance
    taxable = max(ZERO, gross - allowance)
    tax = round_cents(taxable * policy.third_party_rate)
    note = (
        f"Derdentarief {policy.third_party_rate * 100:.0f}% toegepast na een "
        f"vrijstelling van {allowance}; controleer of een wettelijke gelijkstelling mogelijk is."
    )
    return _finalize(gross, allowance, taxable, tax, notes=[note])


def _unresolved(gross: Decimal, policy: TaxPolicyConfig) -> TaxResult:
    if policy.unknown_recipient_policy is UnknownRecipientPolicy.THIRD_PARTY_RATE:
        return _third_party(gross, policy)
    return _decline(gross, UNRESOLVED_NOTE)


def resolve_person_tax(
    mode: TransferMode,
    category: RecipientCategory,
    gross,
    donation_type: DonationType = DonationType.STANDARD,
    policy: Optional[TaxPolicyConfig] = None,
) -> TaxResult:
    """Compute the indicative French tax for one recipient.

    Rules:
        succession + spouse/partner: fully exempt (allowance = gross)
        succession + child: 100,000 allowance, direct-line brackets
        donation + spouse/partner: 80,724 allowance, spouse/partner brackets
        donation + child: 100,000 allowance, plus up to 31,865 for a cash
            gift, direct-line brackets
        unknown category: declined, or flat third-party rate when the
            policy says so
        mixed mode: always declined

    Args:
        mode: Succession or donation
        category: Tax category of the recipient
        gross: Gross amount received; invalid or negative input counts as 0
        donation_type: Sub-regime for donations
        policy: Tax policy settings (defaults to TaxPolicyConfig())

    Returns:
        TaxResult with every field rounded to cents
    """
    policy = policy or TaxPolicyConfig()
    mode = TransferMode(mode)
    category = RecipientCategory(category)
    donation_type = DonationType(donation_type)
    g = coerce_amount(gross)

    if mode is TransferMode.MIXED:
        return _decline(g, MIXED_MODE_NOTE)

    if category is RecipientCategory.UNKNOWN:
        return _unresolved(g, policy)

    if mode is TransferMode.SUCCESSION:
        if category is RecipientCategory.SPOUSE_OR_PARTNER:
            return _finalize(
                g, g, ZERO, ZERO,
                notes=["Echtgenoot/PACS-partner vrijgesteld van successierechten."],
            )
        allowance = CHILD_ALLOWANCE
        taxable = max(ZERO, g - allowance)
        return _finalize(g, allowance, taxable, progressive_tax(taxable, DIRECT_LINE_BRACKETS))

    # Donation
    if category is RecipientCategory.SPOUSE_OR_PARTNER:
        allowance = SPOUSE_PARTNER_DONATION_ALLOWANCE
        taxable = max(ZERO, g - allowance)
        return _finalize(
            g, allowance, taxable, progressive_tax(taxable, SPOUSE_PARTNER_DONATION_BRACKETS)
        )

    allowance = CHILD_ALLOWANCE
    taxable = max(ZERO, g - allowance)
    notes = []
    if donation_type is DonationType.CASH_GIFT:
        extra = min(CASH_GIFT_ALLOWANCE, taxable)
        allowance += extra
        taxable -= extra
        notes.append("Extra vrijstelling geldschenking indicatief toegepast (alleen onder voorwaarden).")
        logger.debug("cash_gift_allowance_applied", extra=str(extra))
    return _finalize(
        g, allowance, taxable, progressive_tax(taxable, DIRECT_LINE_BRACKETS), notes=notes
    )
