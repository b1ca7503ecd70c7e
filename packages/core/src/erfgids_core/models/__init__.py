"""Data models for erfgids-core.

This package provides:
- Input facts collected by the wizard (facts.py)
- Per-recipient results, benchmark, gap, nudges and the report (results.py)
- Calculation audit trail (audit.py)
"""

from erfgids_core.models.audit import AuditEntry
from erfgids_core.models.facts import (
    # Enumerations
    RelationType,
    TransferMode,
    DonationType,
    ResidenceAnchor,
    NationalityAnchor,
    AssetLocation,
    # Facts
    FamilyFacts,
    AnchorFacts,
    EstateFacts,
    WishesFacts,
    ScenarioFacts,
    CaseFacts,
    MAX_CHILDREN,
)
from erfgids_core.models.results import (
    # Enumerations
    Severity,
    RecipientCategory,
    BenchmarkStrategy,
    # Results
    AllocationLine,
    TaxResult,
    RecipientResult,
    Totals,
    BenchmarkResult,
    GapResult,
    Nudge,
    NotComputed,
    Report,
)

__all__ = [
    # Enumerations
    "RelationType",
    "TransferMode",
    "DonationType",
    "ResidenceAnchor",
    "NationalityAnchor",
    "AssetLocation",
    "Severity",
    "RecipientCategory",
    "BenchmarkStrategy",
    # Facts
    "FamilyFacts",
    "AnchorFacts",
    "EstateFacts",
    "WishesFacts",
    "ScenarioFacts",
    "CaseFacts",
    "MAX_CHILDREN",
    # Results
    "AllocationLine",
    "TaxResult",
    "RecipientResult",
    "Totals",
    "BenchmarkResult",
    "GapResult",
    "Nudge",
    "NotComputed",
    "Report",
    # Audit
    "AuditEntry",
]
