"""Output records of the Erfgids engine.

Everything here is a plain Pydantic model without back-references, so a
``Report`` serializes cleanly with ``model_dump(mode="json")``.
"""

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from erfgids_core.models.audit import AuditEntry
from erfgids_core.models.facts import TransferMode
from erfgids_core.money import ZERO


# =============================================================================
# ENUMERATIONS
# =============================================================================

class Severity(str, Enum):
    """Severity of a nudge or of the tax gap."""
    OK = "ok"
    WARN = "warn"
    BAD = "bad"


class RecipientCategory(str, Enum):
    """Tax category of a recipient.

    Cohabiting partners and any other recipient without a legal link that
    the tables cover are UNKNOWN and never get direct-line or spousal
    treatment.
    """
    SPOUSE_OR_PARTNER = "spouse_or_partner"
    CHILD = "child"
    UNKNOWN = "unknown"


class BenchmarkStrategy(str, Enum):
    """Reference allocations used to measure the tax cost of the desired split."""
    ALL_TO_PARTNER = "all_to_partner"
    ALL_TO_CHILDREN = "all_to_children"


# =============================================================================
# PER-RECIPIENT RESULTS
# =============================================================================

class AllocationLine(BaseModel):
    """Gross amount routed to one recipient."""
    recipient: str
    category: RecipientCategory
    gross: Decimal


class TaxResult(BaseModel):
    """Tax outcome for a single transfer.

    Invariants: ``taxable == max(0, gross - allowance)``, ``tax >= 0`` and
    ``net == max(0, gross - tax)``. When ``computed`` is False the engine
    declined to compute (tax 0, net = gross) and ``notes`` says why.
    """
    gross: Decimal
    allowance: Decimal
    taxable: Decimal
    tax: Decimal
    net: Decimal
    computed: bool = True
    notes: list[str] = Field(default_factory=list)


class RecipientResult(TaxResult):
    """Tax outcome tied to a named recipient."""
    recipient: str
    category: RecipientCategory


class Totals(BaseModel):
    """Sums over a list of recipient results."""
    gross: Decimal = ZERO
    tax: Decimal = ZERO
    net: Decimal = ZERO

    @classmethod
    def from_results(cls, results: list[TaxResult]) -> "Totals":
        """Add up the (already rounded) per-recipient figures."""
        return cls(
            gross=sum((r.gross for r in results), ZERO),
            tax=sum((r.tax for r in results), ZERO),
            net=sum((r.net for r in results), ZERO),
        )


# =============================================================================
# BENCHMARK AND GAP
# =============================================================================

class BenchmarkResult(BaseModel):
    """Alternative allocation computed purely as a fiscal reference."""
    strategy: BenchmarkStrategy
    label: str
    results: list[RecipientResult] = Field(default_factory=list)
    totals: Totals = Field(default_factory=Totals)


class GapResult(BaseModel):
    """Extra tax of the desired allocation compared with the benchmark."""
    tax_desired: Decimal
    tax_min: Decimal
    tax_gap: Decimal
    severity: Severity
    benchmark_label: str
    note: str


# =============================================================================
# NUDGES AND LIMITATIONS
# =============================================================================

class Nudge(BaseModel):
    """Contextual legal warning raised by the rule set."""
    code: str
    severity: Severity
    title: str
    body: str
    source_id: str


class NotComputed(BaseModel):
    """Something the engine deliberately declines to compute."""
    code: str
    reason: str
    recipient: Optional[str] = None


# =============================================================================
# REPORT
# =============================================================================

class Report(BaseModel):
    """Full, consistent recomputation from one facts snapshot."""

    net_estate: Decimal
    net_estate_clamped: bool
    mode: TransferMode

    # Desired allocation
    results: list[RecipientResult] = Field(default_factory=list)
    totals: Totals = Field(default_factory=Totals)

    # Reference allocation
    benchmark: BenchmarkResult
    gap: GapResult

    # Warnings and limitations
    nudges: list[Nudge] = Field(default_factory=list)
    not_computed: list[NotComputed] = Field(default_factory=list)
    assumptions: list[str] = Field(default_factory=list)

    # Full Audit Trail
    audit_log: list[AuditEntry] = Field(default_factory=list)

    # Methodology
    methodology_version: str
