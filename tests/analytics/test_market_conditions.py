# tests/analytics/test_market_conditions.py
"""Tests for MarketConditionAnalyzer."""
from datetime import date

from src.analytics.market_conditions import CONDITIONS, MarketConditionAnalyzer
from src.journal.models import Direction, MarketCondition, Trade, TradeType


def make_trade(
    trade_id: str,
    pnl: float,
    r_factor: float,
    market_condition: MarketCondition | None = None,
) -> Trade:
    """Create a trade for testing."""
    return Trade(
        trade_id=trade_id,
        trade_date=date(2026, 3, 2),
        symbol="NIFTY",
        setup_name="Breakout",
        trade_type=TradeType.INTRADAY,
        direction=Direction.BUY,
        stop_loss=95.0,
        quantity=10,
        pnl=pnl,
        r_factor=r_factor,
        market_condition=market_condition,
    )


class TestMarketConditionAnalyzer:
    """Tests for MarketConditionAnalyzer.analyze."""

    def test_one_row_per_condition(self):
        results = MarketConditionAnalyzer().analyze([])

        assert [r.condition for r in results] == CONDITIONS
        assert all(r.total_trades == 0 for r in results)
        assert all(r.expectancy == 0.0 for r in results)

    def test_condition_stats(self):
        trades = [
            make_trade("1", 300.0, 3.0, MarketCondition.TRENDING),
            make_trade("2", -100.0, -1.0, MarketCondition.TRENDING),
            make_trade("3", -100.0, -1.0, MarketCondition.RANGING),
            make_trade("4", 50.0, 0.5),
        ]

        results = {r.condition: r for r in MarketConditionAnalyzer().analyze(trades)}

        trending = results[MarketCondition.TRENDING]
        assert trending.total_trades == 2
        assert trending.win_rate == 50.0
        assert trending.avg_r == 1.0
        assert trending.total_pnl == 200.0
        assert trending.expectancy == 1.0

        ranging = results[MarketCondition.RANGING]
        assert ranging.total_trades == 1
        assert ranging.expectancy == -1.0

    def test_untagged_trades_are_skipped(self):
        trades = [make_trade("1", 50.0, 0.5)]

        results = MarketConditionAnalyzer().analyze(trades)

        assert sum(r.total_trades for r in results) == 0
