"""Tests for configuration."""

from decimal import Decimal

import pytest
from pydantic import ValidationError as PydanticValidationError

from erfgids_core.config import (
    ErfgidsConfig,
    Jurisdiction,
    TaxPolicyConfig,
    UnknownRecipientPolicy,
    configure_logging,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Isolate tests from ERFGIDS_* variables in the environment."""
    for name in (
        "ERFGIDS_ENV",
        "ERFGIDS_LOG_LEVEL",
        "ERFGIDS_HOME_JURISDICTION",
        "ERFGIDS_TAX_UNKNOWN_RECIPIENT_POLICY",
        "ERFGIDS_TAX_THIRD_PARTY_RATE",
        "ERFGIDS_TAX_GAP_WARN_THRESHOLD",
    ):
        monkeypatch.delenv(name, raising=False)


class TestTaxPolicyConfig:
    """Tests for TaxPolicyConfig."""

    def test_defaults(self):
        policy = TaxPolicyConfig()

        assert policy.unknown_recipient_policy is UnknownRecipientPolicy.DECLINE
        assert policy.third_party_rate == Decimal("0.60")
        assert policy.third_party_allowance == Decimal("1594")
        assert policy.gap_warn_threshold == Decimal("5000")

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("ERFGIDS_TAX_UNKNOWN_RECIPIENT_POLICY", "third_party_rate")
        monkeypatch.setenv("ERFGIDS_TAX_GAP_WARN_THRESHOLD", "2500")

        policy = TaxPolicyConfig()
        assert policy.unknown_recipient_policy is UnknownRecipientPolicy.THIRD_PARTY_RATE
        assert policy.gap_warn_threshold == Decimal("2500")

    def test_rate_above_one_rejected(self):
        with pytest.raises(PydanticValidationError):
            TaxPolicyConfig(third_party_rate=Decimal("1.5"))

    def test_unknown_policy_rejected(self):
        with pytest.raises(PydanticValidationError):
            TaxPolicyConfig(unknown_recipient_policy="guess")


class TestErfgidsConfig:
    """Tests for ErfgidsConfig."""

    def test_defaults(self):
        config = ErfgidsConfig()

        assert config.env == "development"
        assert config.is_development
        assert not config.is_production
        assert config.home_jurisdiction is Jurisdiction.FR
        assert config.schema_id == "nlfr-erf-schenkingsrecht/dossier-v1"
        assert isinstance(config.tax, TaxPolicyConfig)

    def test_env_normalized(self):
        assert ErfgidsConfig(env=" Production ").is_production

    def test_invalid_env(self):
        with pytest.raises(PydanticValidationError):
            ErfgidsConfig(env="qa")

    def test_log_level_normalized(self):
        config = ErfgidsConfig(log_level="debug")
        assert config.log_level == "DEBUG"
        assert config.is_debug

    def test_invalid_log_level(self):
        with pytest.raises(PydanticValidationError):
            ErfgidsConfig(log_level="LOUD")

    def test_nested_tax_from_environment(self, monkeypatch):
        monkeypatch.setenv("ERFGIDS_TAX_UNKNOWN_RECIPIENT_POLICY", "third_party_rate")
        monkeypatch.setenv("ERFGIDS_HOME_JURISDICTION", "nl")

        config = ErfgidsConfig()
        assert config.tax.unknown_recipient_policy is UnknownRecipientPolicy.THIRD_PARTY_RATE
        assert config.home_jurisdiction is Jurisdiction.NL

    def test_configure_logging(self):
        configure_logging(ErfgidsConfig(log_level="WARNING"))
