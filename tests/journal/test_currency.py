# tests/journal/test_currency.py
"""Tests for base-currency normalization."""
from datetime import date

import pytest

from src.journal.currency import BaseCurrencyNormalizer, format_currency
from src.journal.models import Direction, Trade, TradeType


def make_trade(
    pnl: float,
    currency: str = "INR",
    pnl_base: float | None = None,
) -> Trade:
    """Create a trade for testing."""
    return Trade(
        trade_id="t1",
        trade_date=date(2026, 3, 2),
        symbol="EURUSD",
        setup_name="Breakout",
        trade_type=TradeType.INTRADAY,
        direction=Direction.BUY,
        stop_loss=1.0,
        quantity=1,
        pnl=pnl,
        currency=currency,
        pnl_base=pnl_base,
    )


class TestFormatCurrency:
    """Tests for format_currency."""

    def test_prefix_symbol(self):
        assert format_currency(12.5, "USD") == "$12.50"
        assert format_currency(1500, "INR", decimals=0) == "₹1500"

    def test_suffix_symbol(self):
        assert format_currency(1200, "JPY") == "1200.00 ¥"
        assert format_currency(10, "AUD", decimals=1) == "10.0 A$"

    def test_unknown_currency_uses_code(self):
        assert format_currency(5, "CHF") == "CHF5.00"

    def test_negative_value(self):
        assert format_currency(-20, "EUR") == "€-20.00"


class TestBaseCurrencyNormalizer:
    """Tests for BaseCurrencyNormalizer."""

    def test_stored_snapshot_wins_over_current_rate(self):
        """A stored pnl_base is returned untouched even if rates changed."""
        normalizer = BaseCurrencyNormalizer(exchange_rates={"INR": 1.0, "USD": 90.0})
        trade = make_trade(pnl=10.0, currency="USD", pnl_base=835.0)

        assert normalizer.base_pnl(trade) == 835.0

    def test_converts_without_snapshot(self):
        normalizer = BaseCurrencyNormalizer()
        trade = make_trade(pnl=10.0, currency="USD")

        assert normalizer.base_pnl(trade) == pytest.approx(835.0)

    def test_unknown_currency_converts_at_one(self):
        normalizer = BaseCurrencyNormalizer()
        trade = make_trade(pnl=42.0, currency="XYZ")

        assert normalizer.base_pnl(trade) == 42.0

    def test_rate_for_is_case_insensitive(self):
        normalizer = BaseCurrencyNormalizer()

        assert normalizer.rate_for("usd") == 83.5
        assert normalizer.rate_for(None) == 1.0

    def test_convert_with_explicit_rate(self):
        normalizer = BaseCurrencyNormalizer()

        assert normalizer.convert(2.0, "USD", exchange_rate=80.0) == 160.0

    def test_total_base_pnl_mixes_currencies(self):
        normalizer = BaseCurrencyNormalizer()
        trades = [
            make_trade(pnl=100.0, currency="INR"),
            make_trade(pnl=-1.0, currency="USD"),
            make_trade(pnl=5.0, currency="USD", pnl_base=400.0),
        ]

        assert normalizer.total_base_pnl(trades) == pytest.approx(100.0 - 83.5 + 400.0)

    def test_total_of_no_trades_is_zero(self):
        assert BaseCurrencyNormalizer().total_base_pnl([]) == 0

    def test_format_uses_base_currency(self):
        normalizer = BaseCurrencyNormalizer(
            exchange_rates={"USD": 1.0}, base_currency="usd"
        )

        assert normalizer.base_currency == "USD"
        assert normalizer.format(1234.567) == "$1234.57"
