"""Application Configuration - environment-driven settings via pydantic-settings.

Invariants:
    - supported_currencies is the single source of the currency allow-list
    - get_settings() is cached (lru_cache) - single instance per process

Design Decisions:
    - Defaults provided for every setting: the service runs with no .env at all
    - List settings come from the environment as JSON, e.g. SUPPORTED_CURRENCIES='["USD","GBP"]'
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

from payinstruct.core.domain_types import DEFAULT_SUPPORTED_CURRENCIES


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Settlement
    supported_currencies: list[str] = sorted(DEFAULT_SUPPORTED_CURRENCIES)

    @field_validator("supported_currencies")
    @classmethod
    def normalize_currencies(cls, v: list[str]) -> list[str]:
        """Currency codes compare upper-case; blanks are dropped."""
        return [code.strip().upper() for code in v if code.strip()]

    # API
    service_name: str = "payment-instructions-api"
    service_version: str = "1.0.0"
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def currency_set(self) -> frozenset[str]:
        return frozenset(self.supported_currencies)


@lru_cache
def get_settings() -> Settings:
    return Settings()
