"""Erfgids Core - indicative NL/FR inheritance and gift tax engine."""

__version__ = "0.1.0"

from .calculator import ReportCalculator, compute_report
from .config import ErfgidsConfig, TaxPolicyConfig, UnknownRecipientPolicy
from .export import build_dossier_payload, format_summary, load_facts
from .models import CaseFacts, Report

__all__ = [
    "ReportCalculator",
    "compute_report",
    "ErfgidsConfig",
    "TaxPolicyConfig",
    "UnknownRecipientPolicy",
    "build_dossier_payload",
    "format_summary",
    "load_facts",
    "CaseFacts",
    "Report",
]
