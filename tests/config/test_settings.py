# tests/config/test_settings.py
import logging

import pytest
from pydantic import ValidationError

from src.config.logging_config import setup_logging
from src.config.settings import JournalEnvConfig, Settings, SystemConfig


class TestSettings:
    def test_load_settings_from_yaml(self, tmp_path):
        config_content = """
system:
  name: "Test Journal"
  log_level: "debug"

journal:
  base_currency: "usd"
  exchange_rates:
    USD: 1.0
    INR: 0.012

analytics:
  max_streak_threshold: 4
  daily_loss_limit_r: 2.5
"""
        config_file = tmp_path / "settings.yaml"
        config_file.write_text(config_content)

        settings = Settings.from_yaml(config_file)

        assert settings.system.name == "Test Journal"
        assert settings.system.log_level == "DEBUG"
        assert settings.journal.base_currency == "USD"
        assert settings.journal.exchange_rates == {"USD": 1.0, "INR": 0.012}
        assert settings.analytics.max_streak_threshold == 4
        assert settings.analytics.daily_loss_limit_r == 2.5

    def test_settings_defaults(self, tmp_path):
        config_file = tmp_path / "settings.yaml"
        config_file.write_text('system:\n  name: "Minimal"\n')

        settings = Settings.from_yaml(config_file)

        assert settings.system.name == "Minimal"
        assert settings.system.version == "1.0.0"
        assert settings.journal.base_currency == "INR"
        assert settings.analytics.max_drawdown_periods == 5

    def test_empty_yaml(self, tmp_path):
        config_file = tmp_path / "settings.yaml"
        config_file.write_text("")

        settings = Settings.from_yaml(config_file)

        assert settings.system.name == "Trade Journal Analytics"

    def test_invalid_values_rejected(self, tmp_path):
        config_file = tmp_path / "settings.yaml"
        config_file.write_text("analytics:\n  max_streak_threshold: 0\n")

        with pytest.raises(ValidationError):
            Settings.from_yaml(config_file)

    def test_env_overrides(self, tmp_path, monkeypatch):
        config_file = tmp_path / "settings.yaml"
        config_file.write_text(
            "journal:\n"
            "  base_currency: \"INR\"\n"
            "  exchange_rates:\n"
            "    INR: 0.011\n"
            "system:\n"
            "  log_level: \"INFO\"\n"
        )
        monkeypatch.setenv("JOURNAL_BASE_CURRENCY", "eur")
        monkeypatch.setenv("JOURNAL_LOG_LEVEL", "warning")

        settings = Settings.from_yaml(config_file)

        assert settings.journal.base_currency == "EUR"
        assert settings.journal.exchange_rates["EUR"] == 1.0
        assert settings.system.log_level == "WARNING"

    def test_env_config_defaults_to_none(self, monkeypatch):
        monkeypatch.delenv("JOURNAL_BASE_CURRENCY", raising=False)
        monkeypatch.delenv("JOURNAL_LOG_LEVEL", raising=False)

        env = JournalEnvConfig()

        assert env.base_currency is None
        assert env.log_level is None

    def test_repository_settings_file_loads(self):
        settings = Settings.from_yaml("config/settings.yaml")

        assert settings.journal.base_currency == "INR"
        assert settings.analytics.drawdown_scale == 1000.0


class TestSystemConfig:
    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            SystemConfig(log_level="VERBOSE")


class TestSetupLogging:
    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_sets_root_level(self):
        setup_logging("DEBUG")

        assert logging.getLogger().level == logging.DEBUG

        setup_logging("INFO")
        assert logging.getLogger().level == logging.INFO
