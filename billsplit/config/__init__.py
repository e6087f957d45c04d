"""Configuration package."""

from billsplit.config.settings import (
    AppSettings,
    CurrencySettings,
    Settings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "CurrencySettings",
    "Settings",
    "get_settings",
    "validate_all_settings",
]
