"""Configuration management.

Settings are read from ``LEDGERKIT_*`` environment variables (and an
optional ``.env`` file) through pydantic-settings.
"""

from decimal import Decimal
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ledgerkit.domain.entities import Currency
from ledgerkit.domain.money import ROUNDING_MODES


class LedgerSettings(BaseSettings):
    """ledgerkit configuration"""

    model_config = SettingsConfigDict(
        env_prefix="LEDGERKIT_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Database configuration
    database_url: Optional[str] = None  # None = ~/.ledgerkit/ledgerkit.db
    sqlite_busy_timeout: float = 30.0

    # Business rules
    max_transaction_amount: Decimal = Decimal("1000000.00")
    rounding: str = "ROUND_HALF_UP"
    default_currency: Currency = Currency.USD
    unit_timeout_seconds: Optional[float] = None

    # Queries
    default_page_size: int = 10
    max_page_size: int = 100
    statement_item_count: int = 100

    # Logging
    log_level: str = "INFO"

    @field_validator("rounding")
    @classmethod
    def _known_rounding(cls, value: str) -> str:
        value = value.upper()
        if value not in ROUNDING_MODES:
            raise ValueError(f"rounding must be one of {', '.join(sorted(ROUNDING_MODES))}")
        return value

    @field_validator("max_transaction_amount")
    @classmethod
    def _positive_ceiling(cls, value: Decimal) -> Decimal:
        if value <= 0:
            raise ValueError("max_transaction_amount must be positive")
        return value

    @field_validator("default_page_size", "max_page_size", "statement_item_count")
    @classmethod
    def _positive_count(cls, value: int) -> int:
        if value < 1:
            raise ValueError("must be at least 1")
        return value


def get_settings(**overrides) -> LedgerSettings:
    """Build settings from the environment, applying any explicit overrides."""
    return LedgerSettings(**overrides)
