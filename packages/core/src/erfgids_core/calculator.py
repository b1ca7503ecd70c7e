"""Indicative French gift/inheritance tax report.

This module ties the engine together: allocation of the net estate, tax
per recipient, the benchmark and gap analysis, the nudge rule set and the
list of things not computed, merged into one ``Report``.

All calculations are logged for audit trail and review by a notary.
"""

from typing import Optional

import structlog

from .allocation import allocate, partner_category
from .benchmark import BENCHMARK_LABELS, benchmark_allocation, compute_gap
from .config import ErfgidsConfig, UnknownRecipientPolicy
from .exclusions import build_exclusions
from .models import (
    AllocationLine,
    AuditEntry,
    BenchmarkResult,
    CaseFacts,
    NotComputed,
    RecipientCategory,
    RecipientResult,
    Report,
    Totals,
)
from .nudges import build_nudges
from .resolver import resolve_person_tax
from .tax_tables import DONATION_VERIFIED, SUCCESSION_VERIFIED, TAX_TABLES_VERSION

logger = structlog.get_logger()

ASSUMPTIONS = (
    "Verdeling als percentage van de netto massa.",
    "Het kinderdeel wordt gelijk over alle kinderen verdeeld.",
    "Geen assurance-vie, SCI/bedrijf, vruchtgebruik/blote eigendom of internationale verrekening.",
    f"Franse barèmes/abattements volgens Service-Public "
    f"(succession {SUCCESSION_VERIFIED}, donation {DONATION_VERIFIED}).",
    "Eerdere schenkingen binnen 15 jaar zijn niet meegenomen.",
)
THIRD_PARTY_ASSUMPTION = (
    "Ontvangers zonder erkende fiscale band zijn belast tegen het derdentarief."
)
NO_RECIPIENTS_REASON = "Er is een positieve massa maar geen partner of kinderen om aan toe te delen."


class ReportCalculator:
    """
    Compute the full report for one facts snapshot.

    The calculator holds no state between calls other than its
    configuration: each ``calculate`` starts a fresh audit log, so two calls
    with the same facts give identical reports.
    """

    def __init__(self, config: Optional[ErfgidsConfig] = None):
        """
        Initialize calculator with configuration.

        Args:
            config: Engine configuration (default: loaded from environment)
        """
        self.config = config or ErfgidsConfig()
        self._audit_log: list[AuditEntry] = []
        self._not_computed: list[NotComputed] = []

    def _log_step(
        self,
        step: str,
        input_value: str,
        output_value: str,
        source: str,
        notes: Optional[str] = None,
    ) -> None:
        """Add an entry to the audit log."""
        entry = AuditEntry(
            step=step,
            input_value=input_value,
            output_value=output_value,
            source=source,
            notes=notes,
        )
        self._audit_log.append(entry)
        logger.info(
            "calculation_step",
            step=step,
            input=input_value,
            output=output_value,
            source=source,
        )

    def _add_not_computed(self, entry: NotComputed) -> None:
        """Record a limitation once per (code, recipient)."""
        key = (entry.code, entry.recipient)
        if any((e.code, e.recipient) == key for e in self._not_computed):
            return
        self._not_computed.append(entry)
        logger.warning("tax_not_computed", code=entry.code, recipient=entry.recipient)

    def _resolve_lines(
        self,
        lines: list[AllocationLine],
        facts: CaseFacts,
        step_prefix: str,
        record_declines: bool,
    ) -> list[RecipientResult]:
        """Compute tax for each allocated recipient."""
        scenario = facts.scenario
        results = []

        for line in lines:
            tax_result = resolve_person_tax(
                mode=scenario.mode,
                category=line.category,
                gross=line.gross,
                donation_type=scenario.donation_type,
                policy=self.config.tax,
            )
            result = RecipientResult(
                recipient=line.recipient,
                category=line.category,
                **tax_result.model_dump(),
            )
            results.append(result)

            self._log_step(
                step=f"{step_prefix}_{line.recipient.lower().replace(' ', '_')}",
                input_value=f"mode={scenario.mode.value}, category={line.category.value}, gross={result.gross}",
                output_value=(
                    f"allowance={result.allowance}, taxable={result.taxable}, "
                    f"tax={result.tax}, net={result.net}"
                ),
                source=f"Service-Public barèmes {TAX_TABLES_VERSION}",
                notes="; ".join(result.notes) or None,
            )

            if record_declines and not result.computed:
                self._add_not_computed(NotComputed(
                    code="recipient_tax",
                    reason=result.notes[0] if result.notes else "Belasting niet berekend.",
                    recipient=result.recipient,
                ))

        return results

    def calculate(self, facts: CaseFacts) -> Report:
        """
        Compute allocation, tax, benchmark, gap and nudges.

        Args:
            facts: Immutable snapshot of the wizard answers

        Returns:
            Report with full audit trail; never raises on user input
        """
        self._audit_log = []  # Reset audit log
        self._not_computed = []

        family = facts.family
        scenario = facts.scenario
        estate = facts.estate
        home = self.config.home_jurisdiction

        # Step 1: Net estate
        net_estate = estate.net_estate
        self._log_step(
            step="net_estate",
            input_value=f"assets={estate.assets_total}, debts={estate.debts_total}",
            output_value=str(net_estate),
            source="max(0, assets - debts)",
            notes="Raw difference clamped to zero" if estate.net_estate_clamped else None,
        )

        # Step 2: Desired allocation
        lines = allocate(
            net_estate,
            has_partner=family.has_partner,
            children_count=family.children_count,
            partner_pct=scenario.partner_pct,
            partner_cat=partner_category(family.relation) or RecipientCategory.UNKNOWN,
        )
        self._log_step(
            step="allocation",
            input_value=(
                f"net={net_estate}, relation={family.relation.value}, "
                f"children={family.children_count}, split={scenario.partner_pct}/{scenario.children_pct}"
            ),
            output_value=", ".join(f"{line.recipient}={line.gross}" for line in lines) or "none",
            source="Partner share, remainder equally over children",
        )
        if net_estate > 0 and not lines:
            self._add_not_computed(NotComputed(code="no_recipients", reason=NO_RECIPIENTS_REASON))

        # Step 3: Tax per recipient
        results = self._resolve_lines(lines, facts, "recipient_tax", record_declines=True)
        totals = Totals.from_results(results)
        self._log_step(
            step="desired_totals",
            input_value=f"{len(results)} recipients",
            output_value=f"gross={totals.gross}, tax={totals.tax}, net={totals.net}",
            source="Calculated",
        )

        # Step 4: Benchmark
        strategy, benchmark_lines = benchmark_allocation(net_estate, family, scenario.mode)
        benchmark_results = self._resolve_lines(
            benchmark_lines, facts, "benchmark_tax", record_declines=False
        )
        benchmark = BenchmarkResult(
            strategy=strategy,
            label=BENCHMARK_LABELS[strategy],
            results=benchmark_results,
            totals=Totals.from_results(benchmark_results),
        )

        # Step 5: Gap
        gap = compute_gap(
            totals.tax,
            benchmark.totals.tax,
            benchmark_label=benchmark.label,
            warn_threshold=self.config.tax.gap_warn_threshold,
        )
        self._log_step(
            step="tax_gap",
            input_value=f"desired={gap.tax_desired}, benchmark={gap.tax_min} ({strategy.value})",
            output_value=f"gap={gap.tax_gap}, severity={gap.severity.value}",
            source="max(0, desired - benchmark)",
        )

        # Step 6: Nudges and limitations
        nudges = build_nudges(facts, home)
        for entry in build_exclusions(facts, home):
            self._add_not_computed(entry)

        assumptions = list(ASSUMPTIONS)
        if self.config.tax.unknown_recipient_policy is UnknownRecipientPolicy.THIRD_PARTY_RATE:
            assumptions.append(THIRD_PARTY_ASSUMPTION)

        self._log_step(
            step="report_complete",
            input_value=f"mode={scenario.mode.value}",
            output_value=(
                f"tax={totals.tax}, gap={gap.tax_gap}, nudges={len(nudges)}, "
                f"not_computed={len(self._not_computed)}"
            ),
            source="Erfgids Core Calculator",
        )

        return Report(
            net_estate=net_estate,
            net_estate_clamped=estate.net_estate_clamped,
            mode=scenario.mode,
            results=results,
            totals=totals,
            benchmark=benchmark,
            gap=gap,
            nudges=nudges,
            not_computed=list(self._not_computed),
            assumptions=assumptions,
            audit_log=list(self._audit_log),
            methodology_version=TAX_TABLES_VERSION,
        )


def compute_report(facts: CaseFacts, config: Optional[ErfgidsConfig] = None) -> Report:
    """Compute a report for one facts snapshot."""
    return ReportCalculator(config).calculate(facts)
