"""Tests for dossier export and the readable summary."""

import json
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from erfgids_core import ErfgidsConfig, compute_report
from erfgids_core.exceptions import ValidationError
from erfgids_core.export import (
    DISCLAIMER,
    DossierPayload,
    build_dossier_payload,
    format_eur,
    format_summary,
    label_mode,
    label_relation,
    load_facts,
    select_sources_used,
)
from erfgids_core.models import CaseFacts, RelationType, TransferMode


@pytest.fixture
def facts() -> CaseFacts:
    return CaseFacts.model_validate({
        "family": {"relation": "married", "children_count": 2},
        "estate": {"assets_total": 533000, "debts_total": 50000},
        "wishes": {"has_will": True},
    })


@pytest.fixture
def generated_at() -> datetime:
    return datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


class TestFormatting:
    """Tests for labels and amount formatting."""

    @pytest.mark.parametrize(
        "amount,expected",
        [
            ("1234.5", "€ 1.234,50"),
            (Decimal("0"), "€ 0,00"),
            (Decimal("1234567.891"), "€ 1.234.567,89"),
            (12, "€ 12,00"),
        ],
    )
    def test_format_eur(self, amount, expected):
        assert format_eur(amount) == expected

    def test_labels(self):
        assert label_relation(RelationType.REGISTERED_PARTNERSHIP) == "PACS"
        assert label_mode(TransferMode.DONATION).startswith("Schenking")


class TestDossierPayload:
    """Tests for build_dossier_payload."""

    def test_payload_fields(self, facts: CaseFacts, generated_at: datetime):
        config = ErfgidsConfig()
        report = compute_report(facts, config)
        payload = build_dossier_payload(facts, report, config, generated_at=generated_at)

        assert isinstance(payload, DossierPayload)
        assert payload.schema_id == "nlfr-erf-schenkingsrecht/dossier-v1"
        assert payload.version == config.tool_version
        assert payload.inputs == facts
        assert payload.outputs == report
        assert payload.disclaimer == DISCLAIMER

    def test_serializes_to_json(self, facts: CaseFacts, generated_at: datetime):
        report = compute_report(facts)
        payload = build_dossier_payload(facts, report, generated_at=generated_at)
        data = json.loads(payload.model_dump_json())

        assert data["generated_at"].startswith("2026-01-15T12:00:00")
        assert data["inputs"]["family"]["relation"] == "married"
        assert data["outputs"]["totals"]["tax"] == "4688.70"

    def test_sources_used(self, facts: CaseFacts):
        """Mode source plus the sources of the active nudges, in registry order."""
        report = compute_report(facts)
        ids = [source.id for source in select_sources_used(report)]

        assert ids == ["sp_succession_2025", "legi_cc_912", "eurlex_650_2012"]

    def test_payload_round_trip_to_facts(self, facts: CaseFacts):
        """A dossier document can be read back as facts."""
        report = compute_report(facts)
        document = build_dossier_payload(facts, report).model_dump_json()

        loaded = load_facts(document)
        assert loaded.family == facts.family
        assert loaded.estate.net_estate == facts.estate.net_estate


class TestLoadFacts:
    """Tests for load_facts."""

    def test_from_json_string(self):
        facts = load_facts('{"family": {"relation": "pacs"}}')
        assert facts.family.relation is RelationType.REGISTERED_PARTNERSHIP

    def test_from_mapping(self):
        assert load_facts({"scenario": {"partner_pct": 20}}).scenario.partner_pct == 20

    def test_invalid_json(self):
        with pytest.raises(ValidationError) as exc_info:
            load_facts("{not json")
        assert exc_info.value.field == "facts"
        assert exc_info.value.recoverable

    def test_not_an_object(self):
        with pytest.raises(ValidationError) as exc_info:
            load_facts("[1, 2, 3]")
        assert exc_info.value.value == "list"


class TestSummary:
    """Tests for the readable summary."""

    def test_text_summary(self, facts: CaseFacts):
        report = compute_report(facts)
        summary = format_summary(facts, report)

        assert "Partner: bruto € 241.500,00" in summary
        assert "Kind 1" in summary
        assert "Totaal:" in summary
        assert "Fiscale referentie" in summary
        assert "Bronnen" in summary
        assert summary.rstrip().endswith(DISCLAIMER)

    def test_markdown_summary(self, facts: CaseFacts):
        report = compute_report(facts)
        summary = format_summary(facts, report, format="markdown")

        assert summary.startswith("# ")
        assert "\n## Uitkomst per ontvanger\n" in summary

    def test_empty_estate(self):
        facts = CaseFacts()
        summary = format_summary(facts, compute_report(facts))

        assert "Onvoldoende invoer om te rekenen." in summary

    def test_declined_recipient_marked(self):
        facts = CaseFacts.model_validate({
            "family": {"relation": "cohab"},
            "estate": {"assets_total": 100000},
        })
        summary = format_summary(facts, compute_report(facts))

        assert "(niet berekend)" in summary
        assert "Niet berekend" in summary
