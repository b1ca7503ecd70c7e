#!/usr/bin/env python3
"""
Erfgids Report Demonstration

Computes an indicative French inheritance/gift tax report for a facts
document and prints a summary or the full dossier payload.

Usage:
    python examples/erfgids_demo.py
    python examples/erfgids_demo.py facts.json
    python examples/erfgids_demo.py facts.json --json --output dossier.json
    python examples/erfgids_demo.py --mode donation --cash-gift
"""

import argparse
import sys
from pathlib import Path

from erfgids_core import (
    CaseFacts,
    ErfgidsConfig,
    build_dossier_payload,
    compute_report,
    format_summary,
    load_facts,
)
from erfgids_core.config import configure_logging
from erfgids_core.exceptions import ValidationError


def create_sample_facts(mode: str = "succession", cash_gift: bool = False) -> CaseFacts:
    """Married couple, two children, house in France."""
    return CaseFacts.model_validate({
        "family": {
            "relation": "married",
            "children_count": 2,
        },
        "anchors": {
            "habitual_residence": "fr",
            "nationality": "nl",
            "main_assets_location": "fr",
        },
        "estate": {
            "assets_total": 533000,
            "debts_total": 50000,
            "includes_main_home": True,
        },
        "wishes": {"has_will": True},
        "scenario": {
            "mode": mode,
            "partner_pct": 50,
            "donation_type": "cash_gift_31865" if cash_gift else "standard",
        },
    })


def main():
    """Run the report demonstration."""
    parser = argparse.ArgumentParser(
        description="Compute an indicative NL/FR inheritance or gift tax report",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Built-in sample (married, 2 children, succession)
  python erfgids_demo.py

  # Facts from a file, dossier payload as JSON
  python erfgids_demo.py ./facts.json --json --output dossier.json
        """
    )
    parser.add_argument(
        "facts",
        type=str,
        nargs="?",
        default=None,
        help="Path to a facts JSON file (default: built-in sample)"
    )
    parser.add_argument(
        "--mode",
        choices=["succession", "donation"],
        default="succession",
        help="Transfer mode for the built-in sample (default: succession)"
    )
    parser.add_argument(
        "--cash-gift",
        action="store_true",
        help="Apply the family cash gift regime to the built-in sample"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output the dossier payload as JSON instead of the summary"
    )
    parser.add_argument(
        "--markdown",
        action="store_true",
        help="Output the summary as Markdown"
    )
    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Write the output to this file instead of stdout"
    )

    args = parser.parse_args()

    config = ErfgidsConfig()
    configure_logging(config)

    if args.facts:
        try:
            facts = load_facts(Path(args.facts).read_text(encoding="utf-8"))
        except (OSError, ValidationError) as e:
            print(f"Error: cannot read facts from {args.facts}: {e}", file=sys.stderr)
            return 1
    else:
        facts = create_sample_facts(args.mode, args.cash_gift)

    report = compute_report(facts, config)

    if args.json:
        output = build_dossier_payload(facts, report, config).model_dump_json(indent=2)
    else:
        output = format_summary(facts, report, format="markdown" if args.markdown else "text")

    if args.output:
        Path(args.output).write_text(output, encoding="utf-8")
        print(f"Saved: {args.output}")
    else:
        print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
