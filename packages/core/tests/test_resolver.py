"""Tests for per-recipient tax resolution."""

from decimal import Decimal

import pytest

from erfgids_core.config import TaxPolicyConfig, UnknownRecipientPolicy
from erfgids_core.models import DonationType, RecipientCategory, TransferMode
from erfgids_core.resolver import MIXED_MODE_NOTE, UNRESOLVED_NOTE, resolve_person_tax


@pytest.fixture
def third_party_policy() -> TaxPolicyConfig:
    """Policy that taxes unresolved recipients at the flat rate."""
    return TaxPolicyConfig(unknown_recipient_policy=UnknownRecipientPolicy.THIRD_PARTY_RATE)


class TestSuccession:
    """Tests for transfers on death."""

    def test_spouse_is_exempt(self):
        """A spouse or PACS partner pays nothing; the allowance equals the gross."""
        result = resolve_person_tax(
            TransferMode.SUCCESSION, RecipientCategory.SPOUSE_OR_PARTNER, Decimal("500000")
        )

        assert result.computed
        assert result.allowance == Decimal("500000.00")
        assert result.taxable == Decimal("0.00")
        assert result.tax == Decimal("0.00")
        assert result.net == Decimal("500000.00")
        assert result.notes

    def test_child(self):
        """100,000 allowance, direct-line brackets on the rest."""
        result = resolve_person_tax(TransferMode.SUCCESSION, RecipientCategory.CHILD, Decimal("150000"))

        assert result.allowance == Decimal("100000.00")
        assert result.taxable == Decimal("50000.00")
        assert result.tax == Decimal("8194.35")
        assert result.net == Decimal("141805.65")

    def test_child_below_allowance(self):
        result = resolve_person_tax(TransferMode.SUCCESSION, RecipientCategory.CHILD, Decimal("60000"))

        assert result.taxable == Decimal("0.00")
        assert result.tax == Decimal("0.00")
        assert result.net == Decimal("60000.00")

    def test_accepts_plain_strings(self):
        """Enum values given as strings resolve the same way."""
        result = resolve_person_tax("succession", "child", "120750")
        assert result.tax == Decimal("2344.35")


class TestDonation:
    """Tests for lifetime gifts."""

    def test_spouse_partner(self):
        """80,724 allowance and the spouse/partner brackets."""
        result = resolve_person_tax(
            TransferMode.DONATION, RecipientCategory.SPOUSE_OR_PARTNER, Decimal("100000")
        )

        assert result.allowance == Decimal("80724.00")
        assert result.taxable == Decimal("19276.00")
        assert result.tax == Decimal("1691.20")

    def test_child_standard(self):
        result = resolve_person_tax(TransferMode.DONATION, RecipientCategory.CHILD, Decimal("140000"))

        assert result.allowance == Decimal("100000.00")
        assert result.taxable == Decimal("40000.00")
        assert not result.notes

    def test_child_cash_gift(self):
        """The cash gift adds up to 31,865 to the allowance."""
        result = resolve_person_tax(
            TransferMode.DONATION,
            RecipientCategory.CHILD,
            Decimal("140000"),
            donation_type=DonationType.CASH_GIFT,
        )

        assert result.allowance == Decimal("131865.00")
        assert result.taxable == Decimal("8135.00")
        # 403.60 + 63 * 10%
        assert result.tax == Decimal("409.90")
        assert result.taxable == result.gross - result.allowance
        assert len(result.notes) == 1

    def test_cash_gift_capped_at_taxable(self):
        """The extra allowance never exceeds what is left to tax."""
        result = resolve_person_tax(
            TransferMode.DONATION,
            RecipientCategory.CHILD,
            Decimal("110000"),
            donation_type=DonationType.CASH_GIFT,
        )

        assert result.allowance == Decimal("110000.00")
        assert result.taxable == Decimal("0.00")
        assert result.tax == Decimal("0.00")

    def test_cash_gift_ignored_for_succession(self):
        result = resolve_person_tax(
            TransferMode.SUCCESSION,
            RecipientCategory.CHILD,
            Decimal("140000"),
            donation_type=DonationType.CASH_GIFT,
        )
        assert result.allowance == Decimal("100000.00")


class TestUnresolved:
    """Tests for recipients and modes the engine does not compute by default."""

    def test_unknown_declined_by_default(self):
        """Declined: no tax, net equals gross, flagged as not computed."""
        result = resolve_person_tax(TransferMode.SUCCESSION, RecipientCategory.UNKNOWN, Decimal("200000"))

        assert not result.computed
        assert result.tax == Decimal("0.00")
        assert result.net == result.gross
        assert result.notes == [UNRESOLVED_NOTE]

    def test_unknown_third_party_rate(self, third_party_policy):
        """60% after a 1,594 allowance."""
        result = resolve_person_tax(
            TransferMode.SUCCESSION,
            RecipientCategory.UNKNOWN,
            Decimal("10000"),
            policy=third_party_policy,
        )

        assert result.computed
        assert result.allowance == Decimal("1594.00")
        assert result.taxable == Decimal("8406.00")
        assert result.tax == Decimal("5043.60")
        assert result.net == Decimal("4956.40")

    def test_mixed_mode_always_declined(self, third_party_policy):
        """Mixed mode is declined even for children and under any policy."""
        result = resolve_person_tax(
            TransferMode.MIXED, RecipientCategory.CHILD, Decimal("150000"), policy=third_party_policy
        )

        assert not result.computed
        assert result.tax == Decimal("0.00")
        assert result.notes == [MIXED_MODE_NOTE]


class TestUntrustedAmounts:
    """Invalid gross amounts count as zero."""

    @pytest.mark.parametrize("gross", [None, "abc", Decimal("-10"), float("nan"), True])
    def test_invalid_gross(self, gross):
        result = resolve_person_tax(TransferMode.SUCCESSION, RecipientCategory.CHILD, gross)

        assert result.gross == Decimal("0.00")
        assert result.tax == Decimal("0.00")
        assert result.net == Decimal("0.00")

    def test_huge_gross_capped(self):
        result = resolve_person_tax(TransferMode.SUCCESSION, RecipientCategory.CHILD, "1e30")

        assert result.gross == Decimal("1000000000000.00")
        assert result.net == result.gross - result.tax

    def test_float_input(self):
        result = resolve_person_tax(TransferMode.SUCCESSION, RecipientCategory.CHILD, 100000.1)
        assert result.gross == Decimal("100000.10")
        assert result.taxable == Decimal("0.10")
