"""Export of reports to the dossier payload and to a readable summary.

The dossier payload is the structured record handed to an external dossier
system; the summary is the plain-text (or Markdown) version a user copies
into an e-mail or a note for their notary.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Optional, Union

import structlog
from pydantic import BaseModel, Field

from .config import ErfgidsConfig
from .exceptions import ValidationError
from .models import CaseFacts, RelationType, Report, TransferMode
from .money import round_cents
from .sources import LegalSource, list_sources

logger = structlog.get_logger()

TOOL_NAME = "nlfr-erf-schenkingsrecht"

DISCLAIMER = (
    "Informatietool. De bedragen zijn een indicatieve schatting op basis van publiek "
    "gepubliceerde barèmes en abattements. Complexe situaties (internationaal, "
    "assurance-vie, stiefkinderen, grote vermogens) vereisen controle door een "
    "notaris of fiscalist."
)

MODE_SOURCES = {
    TransferMode.SUCCESSION: "sp_succession_2025",
    TransferMode.DONATION: "sp_donation_2024",
}

RELATION_LABELS = {
    RelationType.MARRIED: "Gehuwd",
    RelationType.REGISTERED_PARTNERSHIP: "PACS",
    RelationType.COHABITING: "Samenwonend (concubinage)",
    RelationType.SINGLE: "Geen partner",
}

MODE_LABELS = {
    TransferMode.SUCCESSION: "Erfenis (koude hand)",
    TransferMode.DONATION: "Schenking (warme hand)",
    TransferMode.MIXED: "Combinatie",
}


def _utc_now() -> datetime:
    """Return current UTC datetime with timezone info."""
    return datetime.now(timezone.utc)


# =============================================================================
# LABELS AND FORMATTING
# =============================================================================

def label_relation(relation: RelationType) -> str:
    return RELATION_LABELS.get(relation, str(relation))


def label_mode(mode: TransferMode) -> str:
    return MODE_LABELS.get(mode, str(mode))


def format_eur(amount: Union[Decimal, int, float]) -> str:
    """Format an amount the nl-NL way: € 1.234,56."""
    text = f"{round_cents(amount):,.2f}"
    return "€ " + text.replace(",", "_").replace(".", ",").replace("_", ".")


# =============================================================================
# DOSSIER PAYLOAD
# =============================================================================

class DossierPayload(BaseModel):
    """Record handed to an external dossier: inputs, outputs and references."""
    schema_id: str
    tool: str = TOOL_NAME
    version: str
    generated_at: datetime = Field(default_factory=_utc_now)
    inputs: CaseFacts
    outputs: Report
    sources_used: list[LegalSource] = Field(default_factory=list)
    disclaimer: str = DISCLAIMER


def select_sources_used(report: Report) -> list[LegalSource]:
    """References behind the active nudges plus the tax source for the mode."""
    ids = {nudge.source_id for nudge in report.nudges}
    if report.mode in MODE_SOURCES:
        ids.add(MODE_SOURCES[report.mode])
    return list_sources(ids)


def build_dossier_payload(
    facts: CaseFacts,
    report: Report,
    config: Optional[ErfgidsConfig] = None,
    generated_at: Optional[datetime] = None,
) -> DossierPayload:
    """
    Package facts and report for an external dossier.

    Args:
        facts: The facts the report was computed from (copied verbatim)
        report: The computed report
        config: Supplies schema id and tool version
        generated_at: Timestamp to stamp (default: now, UTC)

    Returns:
        DossierPayload ready for ``model_dump_json()``
    """
    config = config or ErfgidsConfig()
    payload = DossierPayload(
        schema_id=config.schema_id,
        version=config.tool_version,
        generated_at=generated_at or _utc_now(),
        inputs=facts,
        outputs=report,
        sources_used=select_sources_used(report),
    )
    logger.info(
        "dossier_payload_built",
        schema_id=payload.schema_id,
        recipients=len(report.results),
        sources=len(payload.sources_used),
    )
    return payload


def load_facts(data: Union[str, bytes, dict[str, Any]]) -> CaseFacts:
    """
    Read facts from a JSON document or an already parsed mapping.

    A dossier payload is accepted too: its ``inputs`` section is used.

    Raises:
        ValidationError: If the document is not valid JSON or not an object.
    """
    if isinstance(data, (str, bytes)):
        try:
            data = json.loads(data)
        except json.JSONDecodeError as e:
            raise ValidationError(
                "Facts document is not valid JSON",
                field="facts",
                constraint="JSON object",
                details={"error": str(e)},
            ) from e

    if not isinstance(data, dict):
        raise ValidationError(
            "Facts document must be a JSON object",
            field="facts",
            value=type(data).__name__,
            constraint="JSON object",
        )

    if isinstance(data.get("inputs"), dict):
        data = data["inputs"]
    return CaseFacts.model_validate(data)


# =============================================================================
# SUMMARY
# =============================================================================

@dataclass
class SummarySection:
    """A section of the summary."""
    title: str
    lines: list[str] = field(default_factory=list)


class SummaryGenerator:
    """
    Build a readable summary of a report.

    Sections:
    - Header (scenario, net estate, family)
    - Result per recipient
    - Benchmark and gap
    - Nudges
    - Not computed
    - Sources
    """

    def __init__(self):
        """Initialize the summary generator."""
        self._sections: list[SummarySection] = []

    def generate(self, facts: CaseFacts, report: Report, format: str = "text") -> str:
        """
        Generate the summary.

        Args:
            facts: The facts the report was computed from
            report: The computed report
            format: Output format ("text" or "markdown")

        Returns:
            Formatted summary string
        """
        self._sections = []

        self._add_header(facts, report)
        self._add_recipients(report)
        self._add_gap(report)
        self._add_nudges(report)
        self._add_not_computed(report)
        self._add_sources(report)

        if format == "markdown":
            return self._format_markdown()
        return self._format_text()

    def _add_header(self, facts: CaseFacts, report: Report) -> None:
        self._sections.append(SummarySection(
            title="Header",
            lines=[
                "Erf-/Schenkingsrecht NL/FR — samenvatting",
                f"Traject: {label_mode(report.mode)}",
                f"Netto massa: {format_eur(report.net_estate)}",
                f"Relatie: {label_relation(facts.family.relation)}",
                f"Kinderen: {facts.family.children_count}",
            ],
        ))

    def _add_recipients(self, report: Report) -> None:
        lines = [
            f"{r.recipient}: bruto {format_eur(r.gross)} | belasting {format_eur(r.tax)} | "
            f"netto {format_eur(r.net)}" + ("" if r.computed else " (niet berekend)")
            for r in report.results
        ]
        if not lines:
            lines = ["Onvoldoende invoer om te rekenen."]
        else:
            lines.append(
                f"Totaal: bruto {format_eur(report.totals.gross)} | "
                f"belasting {format_eur(report.totals.tax)} | netto {format_eur(report.totals.net)}"
            )
        self._sections.append(SummarySection(title="Uitkomst per ontvanger", lines=lines))

    def _add_gap(self, report: Report) -> None:
        gap = report.gap
        self._sections.append(SummarySection(
            title="Fiscale referentie",
            lines=[
                f"Referentie: {gap.benchmark_label}",
                f"Belasting gewenst: {format_eur(gap.tax_desired)} | referentie: {format_eur(gap.tax_min)}",
                f"Verschil: {format_eur(gap.tax_gap)} ({gap.severity.value})",
                gap.note,
            ],
        ))

    def _add_nudges(self, report: Report) -> None:
        if not report.nudges:
            return
        self._sections.append(SummarySection(
            title="Aandachtspunten",
            lines=[f"[{n.severity.value}] {n.title}" for n in report.nudges],
        ))

    def _add_not_computed(self, report: Report) -> None:
        if not report.not_computed:
            return
        self._sections.append(SummarySection(
            title="Niet berekend",
            lines=[
                f"{entry.recipient}: {entry.reason}" if entry.recipient else entry.reason
                for entry in report.not_computed
            ],
        ))

    def _add_sources(self, report: Report) -> None:
        self._sections.append(SummarySection(
            title="Bronnen",
            lines=[f"{s.name} ({s.verified})" for s in select_sources_used(report)],
        ))

    def _format_text(self) -> str:
        """Format summary as plain text."""
        output = []

        for section in self._sections:
            if section.title != "Header":
                output.append("")
                output.append(section.title)
                output.append("-" * len(section.title))
            output.extend(section.lines)

        output.append("")
        output.append(DISCLAIMER)
        return "\n".join(output)

    def _format_markdown(self) -> str:
        """Format summary as Markdown."""
        output = []

        for section in self._sections:
            if section.title == "Header":
                output.append(f"# {section.lines[0]}\n")
                output.extend(f"- {line}" for line in section.lines[1:])
            else:
                output.append(f"\n## {section.title}\n")
                output.extend(f"- {line}" for line in section.lines)

        output.append("\n---\n")
        output.append(f"*{DISCLAIMER}*")
        return "\n".join(output)


def format_summary(facts: CaseFacts, report: Report, format: str = "text") -> str:
    """Shortcut for SummaryGenerator().generate()."""
    return SummaryGenerator().generate(facts, report, format=format)
