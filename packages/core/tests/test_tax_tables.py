"""Tests for the French tax tables and the progressive bracket function."""

from decimal import Decimal

import pytest

from erfgids_core.exceptions import ConfigurationError
from erfgids_core.tax_tables import (
    DIRECT_LINE_BRACKETS,
    SPOUSE_PARTNER_DONATION_BRACKETS,
    UNBOUNDED,
    Bracket,
    get_bracket_table,
    get_tax_tables_version,
    progressive_tax,
    validate_brackets,
)


class TestProgressiveTax:
    """Tests for progressive_tax."""

    def test_first_bracket_only(self):
        """8072 sits exactly on the first bound: 5% of it."""
        assert progressive_tax(Decimal("8072"), DIRECT_LINE_BRACKETS) == Decimal("403.60")

    def test_spans_four_brackets(self):
        """20750 crosses into the 20% bracket."""
        # 403.60 + 403.70 + 573.45 + 963.60
        assert progressive_tax(Decimal("20750"), DIRECT_LINE_BRACKETS) == Decimal("2344.35")

    def test_partial_twenty_percent_slice(self):
        """Full lower brackets plus the partial 20% slice."""
        # 403.60 + 403.70 + 573.45 + 4068 * 20%
        assert progressive_tax(Decimal("20000"), DIRECT_LINE_BRACKETS) == Decimal("2194.35")

    def test_spouse_partner_table(self):
        """Spouse/partner brackets are wider at the low end."""
        # 403.60 + 786.00 + 501.60
        assert progressive_tax(Decimal("19276"), SPOUSE_PARTNER_DONATION_BRACKETS) == Decimal("1691.20")

    @pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-500"), 0])
    def test_zero_or_negative_is_untaxed(self, amount):
        """Non-positive amounts owe nothing."""
        assert progressive_tax(amount, DIRECT_LINE_BRACKETS) == Decimal("0.00")

    def test_top_bracket(self):
        """Amounts above the last finite bound reach the 45% rate."""
        tax_at_bound = progressive_tax(Decimal("1805677"), DIRECT_LINE_BRACKETS)
        tax_above = progressive_tax(Decimal("1815677"), DIRECT_LINE_BRACKETS)
        assert tax_above - tax_at_bound == Decimal("4500.00")

    def test_monotonic(self):
        """More taxable amount never means less tax."""
        amounts = [Decimal(n) for n in range(0, 2_000_000, 37_501)]
        taxes = [progressive_tax(a, DIRECT_LINE_BRACKETS) for a in amounts]
        assert taxes == sorted(taxes)

    def test_rounded_to_cents(self):
        """The result always has two decimals."""
        tax = progressive_tax(Decimal("8072.33"), DIRECT_LINE_BRACKETS)
        assert tax.as_tuple().exponent == -2


class TestValidateBrackets:
    """Tests for bracket table validation."""

    def test_shipped_tables_are_valid(self):
        """Both shipped tables end unbounded."""
        assert DIRECT_LINE_BRACKETS[-1].upper_bound == UNBOUNDED
        assert SPOUSE_PARTNER_DONATION_BRACKETS[-1].upper_bound == UNBOUNDED

    def test_empty_table_rejected(self):
        with pytest.raises(ConfigurationError):
            validate_brackets(())

    def test_non_ascending_bounds_rejected(self):
        """Bounds must strictly increase."""
        table = (
            Bracket(Decimal("1000"), Decimal("0.1")),
            Bracket(Decimal("1000"), Decimal("0.2")),
            Bracket(UNBOUNDED, Decimal("0.3")),
        )
        with pytest.raises(ConfigurationError) as exc_info:
            validate_brackets(table)
        assert exc_info.value.config_key == "brackets[1].upper_bound"

    def test_rate_out_of_range_rejected(self):
        table = (Bracket(UNBOUNDED, Decimal("1.5")),)
        with pytest.raises(ConfigurationError):
            validate_brackets(table)

    def test_bounded_top_rejected(self):
        """The last bracket must be unbounded."""
        table = (Bracket(Decimal("1000"), Decimal("0.1")),)
        with pytest.raises(ConfigurationError) as exc_info:
            validate_brackets(table)
        assert exc_info.value.expected == "Infinity"


class TestTableLookup:
    """Tests for table lookup and versioning."""

    def test_get_known_table(self):
        assert get_bracket_table("direct_line") is DIRECT_LINE_BRACKETS

    def test_get_unknown_table(self):
        """Unknown names raise a ConfigurationError naming the table."""
        with pytest.raises(ConfigurationError) as exc_info:
            get_bracket_table("siblings")
        assert exc_info.value.actual == "siblings"
        assert not exc_info.value.recoverable

    def test_version(self):
        assert "2025" in get_tax_tables_version()
