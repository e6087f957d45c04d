"""
Tests for configuration
"""

import pytest

from billsplit.config import (
    AppSettings,
    CurrencySettings,
    get_settings,
    validate_all_settings,
)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestCurrencySettings:
    """Tests for CurrencySettings."""

    def test_defaults(self, monkeypatch):
        """Test Brazilian real is the default currency."""
        for name in ("CURRENCY_SYMBOL", "CURRENCY_DECIMAL_SEPARATOR", "CURRENCY_THOUSANDS_SEPARATOR"):
            monkeypatch.delenv(name, raising=False)
        settings = CurrencySettings()
        assert settings.symbol == "R$"
        assert settings.decimal_separator == ","
        assert settings.thousands_separator == "."

    def test_from_environment(self, monkeypatch):
        """Test settings are read from CURRENCY_ variables."""
        monkeypatch.setenv("CURRENCY_SYMBOL", "$")
        monkeypatch.setenv("CURRENCY_DECIMAL_SEPARATOR", ".")
        monkeypatch.setenv("CURRENCY_THOUSANDS_SEPARATOR", ",")
        settings = get_settings().currency
        assert settings.symbol == "$"
        assert settings.decimal_separator == "."

    def test_rejects_unknown_separator(self):
        """Test only comma, dot and space are accepted."""
        with pytest.raises(ValueError):
            CurrencySettings(decimal_separator=";", thousands_separator=".")

    def test_rejects_identical_separators(self):
        """Test decimal and thousands separators must differ."""
        with pytest.raises(ValueError, match="must differ"):
            CurrencySettings(decimal_separator=",", thousands_separator=",")


class TestAppSettings:
    """Tests for AppSettings."""

    def test_log_level_normalized(self, monkeypatch):
        """Test log level is case-insensitive."""
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert AppSettings().log_level == "DEBUG"

    def test_invalid_log_level(self, monkeypatch):
        """Test unknown log levels are rejected."""
        monkeypatch.setenv("LOG_LEVEL", "LOUD")
        with pytest.raises(ValueError):
            AppSettings()

    def test_debug_mode_overrides_log_level(self, monkeypatch):
        """Test debug mode logs at DEBUG."""
        monkeypatch.setenv("LOG_LEVEL", "ERROR")
        monkeypatch.setenv("DEBUG_MODE", "1")
        settings = AppSettings()
        assert settings.log_level == "ERROR"
        assert settings.effective_log_level == "DEBUG"

    def test_effective_level_without_debug_mode(self, monkeypatch):
        """Test the configured level applies when debug mode is off."""
        monkeypatch.setenv("LOG_LEVEL", "ERROR")
        monkeypatch.delenv("DEBUG_MODE", raising=False)
        assert AppSettings().effective_log_level == "ERROR"


class TestValidateAllSettings:
    """Tests for the startup check."""

    def test_all_valid(self, monkeypatch):
        """Test a clean environment validates."""
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.delenv("CURRENCY_DECIMAL_SEPARATOR", raising=False)
        monkeypatch.delenv("CURRENCY_THOUSANDS_SEPARATOR", raising=False)
        results = validate_all_settings()
        assert results["currency"] is True
        assert results["app"] is True

    def test_reports_invalid_currency(self, monkeypatch):
        """Test a bad setting is reported, not raised."""
        monkeypatch.setenv("CURRENCY_DECIMAL_SEPARATOR", ".")
        monkeypatch.setenv("CURRENCY_THOUSANDS_SEPARATOR", ".")
        results = validate_all_settings()
        assert results["currency"] is False
        assert "currency_error" in results


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
