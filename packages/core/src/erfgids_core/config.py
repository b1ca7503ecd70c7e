"""Configuration system for the Erfgids engine.

This module provides Pydantic Settings-based configuration with environment
variable support and sensible defaults.

Usage:
    from erfgids_core.config import ErfgidsConfig

    # Load from environment variables and .env file
    config = ErfgidsConfig()

    # Access tax policy settings
    print(config.tax.unknown_recipient_policy)
    print(config.tax.gap_warn_threshold)
"""

import logging
from decimal import Decimal
from enum import Enum

import structlog
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class UnknownRecipientPolicy(str, Enum):
    """How to treat recipients without a resolved tax category."""

    DECLINE = "decline"  # tax = 0, net = gross, explicit not-computed entry
    THIRD_PARTY_RATE = "third_party_rate"  # flat rate after a minimal allowance


class Jurisdiction(str, Enum):
    """Jurisdictions the anchors are compared with."""

    FR = "fr"
    NL = "nl"


class TaxPolicyConfig(BaseSettings):
    """Tax policy settings.

    Environment Variables:
        ERFGIDS_TAX_UNKNOWN_RECIPIENT_POLICY: decline or third_party_rate
        ERFGIDS_TAX_THIRD_PARTY_RATE: Flat rate for unresolved recipients
        ERFGIDS_TAX_THIRD_PARTY_ALLOWANCE: Allowance before the flat rate
        ERFGIDS_TAX_GAP_WARN_THRESHOLD: Gap above which severity becomes bad
    """

    model_config = SettingsConfigDict(
        env_prefix="ERFGIDS_TAX_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    unknown_recipient_policy: UnknownRecipientPolicy = Field(
        default=UnknownRecipientPolicy.DECLINE,
        description="Treatment of cohabiting partners and other unresolved recipients",
    )
    third_party_rate: Decimal = Field(
        default=Decimal("0.60"),
        gt=0,
        le=1,
        description="Flat rate applied under the third_party_rate policy",
    )
    third_party_allowance: Decimal = Field(
        default=Decimal("1594"),
        ge=0,
        description="Allowance applied before the flat third-party rate",
    )
    gap_warn_threshold: Decimal = Field(
        default=Decimal("5000"),
        ge=0,
        description="Tax gap up to which severity is warn; above it is bad",
    )


class ErfgidsConfig(BaseSettings):
    """Root configuration for the Erfgids engine.

    Environment Variables:
        ERFGIDS_ENV: Environment name (development, staging, production, test)
        ERFGIDS_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
        ERFGIDS_HOME_JURISDICTION: Jurisdiction anchors are compared with
        ERFGIDS_TOOL_VERSION: Version stamped on exported dossiers
        ERFGIDS_SCHEMA_ID: Schema identifier of exported dossiers

    Example:
        # Override specific settings
        config = ErfgidsConfig(
            tax=TaxPolicyConfig(unknown_recipient_policy="third_party_rate"),
        )
    """

    model_config = SettingsConfigDict(
        env_prefix="ERFGIDS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    env: str = Field(
        default="development",
        description="Environment name (development, staging, production)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    home_jurisdiction: Jurisdiction = Field(
        default=Jurisdiction.FR,
        description="Anchors differing from this jurisdiction trigger cross-border nudges",
    )
    tool_version: str = Field(
        default="0.1.0",
        description="Tool version written into exported dossiers",
    )
    schema_id: str = Field(
        default="nlfr-erf-schenkingsrecht/dossier-v1",
        description="Schema identifier written into exported dossiers",
    )

    tax: TaxPolicyConfig = Field(default_factory=TaxPolicyConfig)

    @field_validator("env")
    @classmethod
    def validate_env(cls, v: str) -> str:
        """Validate environment name."""
        valid_envs = {"development", "staging", "production", "test"}
        v_lower = v.lower().strip()
        if v_lower not in valid_envs:
            raise ValueError(f"Invalid environment: {v}. Must be one of: {valid_envs}")
        return v_lower

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper().strip()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of: {valid_levels}")
        return v_upper

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.env == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.env == "development"

    @property
    def is_debug(self) -> bool:
        """Check if debug logging is enabled."""
        return self.log_level == "DEBUG"


def configure_logging(config: ErfgidsConfig) -> None:
    """Filter structlog output at the configured log level."""
    level = logging.getLevelName(config.log_level)
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )
