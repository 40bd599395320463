# tests/journal/test_settings.py
"""Tests for journal settings."""
import pytest
from pydantic import ValidationError

from src.journal.settings import DEFAULT_EXCHANGE_RATES, JournalSettings


class TestJournalSettings:
    """Tests for JournalSettings."""

    def test_default_settings(self):
        """Default settings should report in INR with the static rate table."""
        settings = JournalSettings()

        assert settings.base_currency == "INR"
        assert settings.exchange_rates == DEFAULT_EXCHANGE_RATES
        assert settings.exchange_rates["USD"] == 83.5

    def test_default_rates_are_not_shared(self):
        """Mutating one instance's rates must not leak into the defaults."""
        settings = JournalSettings()
        settings.exchange_rates["USD"] = 1.0

        assert DEFAULT_EXCHANGE_RATES["USD"] == 83.5

    def test_currency_codes_are_upper_cased(self):
        settings = JournalSettings(
            base_currency="usd",
            exchange_rates={"usd": 1.0, "inr": 0.012},
        )

        assert settings.base_currency == "USD"
        assert settings.exchange_rates == {"USD": 1.0, "INR": 0.012}

    def test_missing_base_rate_is_added(self):
        settings = JournalSettings(base_currency="EUR", exchange_rates={"USD": 0.92})

        assert settings.exchange_rates["EUR"] == 1.0

    def test_base_rate_must_be_one(self):
        with pytest.raises(ValidationError):
            JournalSettings(base_currency="INR", exchange_rates={"INR": 2.0})

    def test_non_positive_rate_rejected(self):
        with pytest.raises(ValidationError):
            JournalSettings(exchange_rates={"INR": 1.0, "USD": 0})

        with pytest.raises(ValidationError):
            JournalSettings(exchange_rates={"INR": 1.0, "USD": -83.5})

    def test_empty_base_currency_rejected(self):
        with pytest.raises(ValidationError):
            JournalSettings(base_currency="  ")
