"""Audit trail models for calculation transparency.

The report calculator records every step it takes so that a notary or
tax advisor can follow how each figure was reached.
"""

from typing import Optional

from pydantic import BaseModel


class AuditEntry(BaseModel):
    """Single calculation step.

    Attributes:
        step: Name of the step (e.g., "net_estate", "recipient_tax_kind_1")
        input_value: Inputs the step worked on
        output_value: What the step produced
        source: Rule or reference the step is based on
        notes: Additional context or explanation

    Entries carry no timestamp: computing the same facts twice must yield
    an identical report.
    """
    step: str
    input_value: str
    output_value: str
    source: str
    notes: Optional[str] = None
