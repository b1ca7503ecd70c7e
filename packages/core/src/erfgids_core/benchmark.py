"""Benchmark allocation and tax gap analysis.

The benchmark is an engine-chosen distribution with a low tax cost. The gap
is how much more tax the desired distribution costs. The benchmark ignores
forced heirship entirely: it is a fiscal signal, not a plan anyone could
execute.
"""

from decimal import Decimal

from .allocation import allocate, partner_category
from .models import (
    AllocationLine,
    BenchmarkStrategy,
    FamilyFacts,
    GapResult,
    RecipientCategory,
    RelationType,
    Severity,
    TransferMode,
)
from .money import ZERO, round_cents, to_decimal

DEFAULT_GAP_WARN_THRESHOLD = Decimal("5000")

BENCHMARK_LABELS = {
    BenchmarkStrategy.ALL_TO_PARTNER: "100% naar partner (fiscale referentie)",
    BenchmarkStrategy.ALL_TO_CHILDREN: "100% naar kinderen (fiscale referentie)",
}

GAP_NOTE = (
    "De referentieverdeling negeert civielrechtelijke beperkingen zoals de "
    "reserve héréditaire van kinderen. Het verschil is alleen een fiscaal "
    "signaal en geen uitvoerbaar plan."
)


def select_benchmark(
    has_partner: bool,
    mode: TransferMode,
    relation: RelationType,
) -> BenchmarkStrategy:
    """Pick the reference allocation for a situation.

    Cohabiting: always children only, since the partner has no exemption.
    Succession with a partner: everything to the exempt partner.
    Otherwise (donation, or no partner): children only.
    """
    if relation is RelationType.COHABITING:
        return BenchmarkStrategy.ALL_TO_CHILDREN
    if mode is TransferMode.SUCCESSION and has_partner:
        return BenchmarkStrategy.ALL_TO_PARTNER
    return BenchmarkStrategy.ALL_TO_CHILDREN


def benchmark_allocation(
    net_estate,
    family: FamilyFacts,
    mode: TransferMode,
) -> tuple[BenchmarkStrategy, list[AllocationLine]]:
    """Allocate the net estate according to the selected benchmark.

    The allocation goes through ``allocate`` so the same override applies:
    without children, a partner still receives the whole estate. The
    returned strategy then reads ALL_TO_PARTNER, so the label matches the
    lines actually allocated.
    """
    strategy = select_benchmark(family.has_partner, mode, family.relation)
    if family.has_partner and family.children_count == 0:
        strategy = BenchmarkStrategy.ALL_TO_PARTNER
    partner_pct = 100 if strategy is BenchmarkStrategy.ALL_TO_PARTNER else 0
    lines = allocate(
        net_estate,
        has_partner=family.has_partner,
        children_count=family.children_count,
        partner_pct=partner_pct,
        partner_cat=partner_category(family.relation) or RecipientCategory.UNKNOWN,
    )
    return strategy, lines


def gap_severity(tax_gap: Decimal, warn_threshold: Decimal = DEFAULT_GAP_WARN_THRESHOLD) -> Severity:
    """ok for no gap, warn up to the threshold, bad above it."""
    if tax_gap <= 0:
        return Severity.OK
    if tax_gap <= warn_threshold:
        return Severity.WARN
    return Severity.BAD


def compute_gap(
    desired_total_tax,
    benchmark_total_tax,
    benchmark_label: str = "",
    warn_threshold: Decimal = DEFAULT_GAP_WARN_THRESHOLD,
) -> GapResult:
    """Compare the desired total tax with the benchmark total tax.

    The gap is floored at zero: a desired allocation that happens to be
    cheaper than the benchmark has no gap.
    """
    desired = round_cents(to_decimal(desired_total_tax))
    minimum = round_cents(to_decimal(benchmark_total_tax))
    tax_gap = max(ZERO, desired - minimum)
    return GapResult(
        tax_desired=desired,
        tax_min=minimum,
        tax_gap=tax_gap,
        severity=gap_severity(tax_gap, warn_threshold),
        benchmark_label=benchmark_label,
        note=GAP_NOTE,
    )
