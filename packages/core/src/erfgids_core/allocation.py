"""Allocation of the net estate over partner and children."""

from decimal import Decimal
from typing import Optional

from .models import AllocationLine, RecipientCategory, RelationType
from .money import HUNDRED, ZERO, coerce_amount, coerce_int

PARTNER_LABEL = "Partner"
CHILD_LABEL = "Kind"


def partner_category(relation: RelationType) -> Optional[RecipientCategory]:
    """Tax category of the partner, or None when there is no partner.

    Only marriage and PACS give the partner spousal treatment; a cohabiting
    partner is a third party for tax purposes.
    """
    if relation in (RelationType.MARRIED, RelationType.REGISTERED_PARTNERSHIP):
        return RecipientCategory.SPOUSE_OR_PARTNER
    if relation is RelationType.COHABITING:
        return RecipientCategory.UNKNOWN
    return None


def child_label(index: int) -> str:
    """Label of the index-th child, counting from 1."""
    return f"{CHILD_LABEL} {index}"


def allocate(
    net_estate,
    has_partner: bool,
    children_count: int,
    partner_pct: int,
    partner_cat: RecipientCategory = RecipientCategory.SPOUSE_OR_PARTNER,
) -> list[AllocationLine]:
    """Split the net estate into gross amounts per recipient.

    The partner gets ``partner_pct`` percent, the children share the rest
    equally. Without children the partner gets everything, whatever the
    configured percentage. A non-positive estate yields no recipients.

    Args:
        net_estate: Net estate to distribute
        has_partner: Whether a partner recipient exists
        children_count: Number of children (clamped to >= 0)
        partner_pct: Partner share in percent (clamped to 0..100)
        partner_cat: Tax category to give the partner line

    Returns:
        Partner line first (if any), then one line per child
    """
    net = coerce_amount(net_estate)
    children = coerce_int(children_count, 0, 10**6)
    pct = Decimal(coerce_int(partner_pct, 0, 100))

    if net <= 0:
        return []

    if children == 0 and has_partner:
        partner_gross = net
    elif has_partner:
        partner_gross = net * pct / HUNDRED
    else:
        partner_gross = ZERO
    children_total = max(ZERO, net - partner_gross)

    lines = []
    if has_partner and partner_gross > 0:
        lines.append(AllocationLine(recipient=PARTNER_LABEL, category=partner_cat, gross=partner_gross))

    if children > 0 and children_total > 0:
        per_child = children_total / children
        for i in range(1, children + 1):
            lines.append(
                AllocationLine(recipient=child_label(i), category=RecipientCategory.CHILD, gross=per_child)
            )
    return lines
