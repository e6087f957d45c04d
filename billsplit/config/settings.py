"""
Configuration Management for Bill Split

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The allocation engine itself takes no configuration; only the
text parsing, currency formatting and logging layers read settings.
"""

from functools import lru_cache

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


ALLOWED_SEPARATORS = {",", ".", " "}


class CurrencySettings(BaseSettings):
    """How amounts are typed by users and shown back to them."""

    model_config = SettingsConfigDict(
        env_prefix="CURRENCY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    symbol: str = Field(
        default="R$",
        max_length=5,
        description="Currency symbol used when formatting amounts"
    )
    decimal_separator: str = Field(
        default=",",
        description="Character separating whole units from cents"
    )
    thousands_separator: str = Field(
        default=".",
        description="Character grouping thousands"
    )

    @field_validator('decimal_separator', 'thousands_separator')
    @classmethod
    def validate_separator(cls, v: str) -> str:
        """Only comma, dot or space are understood by the parser."""
        if v not in ALLOWED_SEPARATORS:
            raise ValueError(
                f"Unsupported separator {v!r}. Allowed: {sorted(ALLOWED_SEPARATORS)}"
            )
        return v

    @model_validator(mode='after')
    def validate_distinct_separators(self) -> 'CurrencySettings':
        if self.decimal_separator == self.thousands_separator:
            raise ValueError("Decimal and thousands separators must differ")
        return self


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    debug_mode: bool = Field(
        default=False,
        description="Log at DEBUG regardless of log_level"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Minimum level for structured logs"
    )

    @field_validator('log_level', mode='before')
    @classmethod
    def normalize_log_level(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug_mode else self.log_level


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def currency(self) -> CurrencySettings:
        return CurrencySettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus
    {setting_name}_error entries describing failures.
    """
    results = {}

    settings = get_settings()

    try:
        _ = settings.currency
        results["currency"] = True
    except Exception as e:
        results["currency"] = False
        results["currency_error"] = str(e)

    try:
        _ = settings.app
        results["app"] = True
    except Exception as e:
        results["app"] = False
        results["app_error"] = str(e)

    return results
