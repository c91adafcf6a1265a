"""Centralized configuration management using pydantic-settings.

Configuration is loaded from environment variables with sensible defaults.
All settings can be overridden via environment variables or a .env file.
"""

from decimal import Decimal
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from equity_award_cgt.domain.value_objects import Currency, TaxpayerStatus


class Environment(str, Enum):
    """Application environment."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"


class LogLevel(str, Enum):
    """Log level options."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Override via environment variables (prefixed with EAC_) or .env file.

    Examples:
        EAC_REPORTING_CURRENCY=GBP
        EAC_ANNUAL_EXEMPTION_AMOUNT=3000
        EAC_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix="EAC_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Equity Award CGT Calculator"
    environment: Environment = Environment.DEVELOPMENT

    # Logging
    log_level: LogLevel = LogLevel.WARNING
    log_format: Literal["json", "console"] = Field(
        default=None,
        validate_default=True,
        description="Log output format: 'json' for production, 'console' for development",
    )
    log_file: Path | None = Field(default=None, description="Optional log file path")

    # Tax
    reporting_currency: Currency = Currency.GBP
    award_currency: Currency = Currency.USD
    annual_exemption_amount: Decimal = Field(
        default=Decimal("12300"),
        description="Annual exempt amount in the reporting currency",
    )
    basic_rate: Decimal = Field(default=Decimal("0.10"))
    higher_rate: Decimal = Field(default=Decimal("0.20"))
    bed_and_breakfast_window_days: int = Field(default=30, ge=0)

    # Market data
    yahoo_finance_enabled: bool = Field(
        default=True, description="Download histories from Yahoo Finance"
    )
    yahoo_base_url: str = "https://query1.finance.yahoo.com/v7/finance/download"
    http_timeout_seconds: float = Field(default=30.0, gt=0)

    @field_validator("basic_rate", "higher_rate", mode="after")
    @classmethod
    def validate_rate(cls, v: Decimal) -> Decimal:
        """CGT rates are ratios between 0 and 1."""
        if v < 0 or v > 1:
            raise ValueError(f"CGT rate must be between 0 and 1, got {v}")
        return v

    @field_validator("annual_exemption_amount", mode="after")
    @classmethod
    def validate_exemption(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise ValueError(f"Annual exemption must not be negative, got {v}")
        return v

    @field_validator("log_format", mode="before")
    @classmethod
    def set_log_format_from_environment(
        cls, v: str | None, info: ValidationInfo
    ) -> str:
        """Default to JSON logging in production."""
        if v is None:
            env = info.data.get("environment")
            if env == Environment.PRODUCTION:
                return "json"
        return v or "console"

    def rate_for(self, status: TaxpayerStatus) -> Decimal:
        """Return the CGT rate applying to a taxpayer status."""
        if status == TaxpayerStatus.HIGHER:
            return self.higher_rate
        return self.basic_rate

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == Environment.PRODUCTION

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.environment == Environment.TESTING


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload settings.

    Returns:
        Configured Settings instance.
    """
    return Settings()
