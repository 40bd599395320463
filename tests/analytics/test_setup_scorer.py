# tests/analytics/test_setup_scorer.py
"""Tests for SetupScorer."""
from datetime import date

import pytest

from src.analytics.models import SetupRecommendation
from src.analytics.setup_scorer import SetupScorer
from src.journal.models import Direction, Trade, TradeType


def make_trade(
    trade_id: str,
    setup_name: str,
    pnl: float,
    r_factor: float,
    day: int = 2,
) -> Trade:
    """Create a trade for testing."""
    return Trade(
        trade_id=trade_id,
        trade_date=date(2026, 3, day),
        symbol="NIFTY",
        setup_name=setup_name,
        trade_type=TradeType.INTRADAY,
        direction=Direction.BUY,
        stop_loss=95.0,
        quantity=10,
        pnl=pnl,
        r_factor=r_factor,
    )


@pytest.fixture
def trades() -> list[Trade]:
    return [
        make_trade("1", "Fade", -100.0, -1.0, day=2),
        make_trade("2", "Breakout", 200.0, 2.0, day=2),
        make_trade("3", "Range", 100.0, 1.0, day=3),
        make_trade("4", "Breakout", -100.0, -1.0, day=3),
        make_trade("5", "Fade", -200.0, -2.0, day=4),
        make_trade("6", "Range", -50.0, -0.5, day=4),
        make_trade("7", "Breakout", 300.0, 3.0, day=5),
    ]


class TestSetupScorer:
    """Tests for SetupScorer.score."""

    def test_empty(self):
        assert SetupScorer().score([]) == []

    def test_sorted_and_ranked(self, trades):
        scores = SetupScorer().score(trades)

        assert [s.setup_name for s in scores] == ["Breakout", "Range", "Fade"]
        assert [s.rank for s in scores] == [1, 2, 3]
        assert all(a.score >= b.score for a, b in zip(scores, scores[1:]))

    def test_breakout_score(self, trades):
        # win_rate 66.67%, avg_r 4/3, drawdown 100 (< scale, no penalty)
        breakout = SetupScorer().score(trades)[0]

        assert breakout.score == pytest.approx(0.889, abs=1e-3)
        assert breakout.win_rate == 66.67
        assert breakout.avg_r == 1.33
        assert breakout.expectancy == pytest.approx(1.333)
        assert breakout.max_drawdown == 100.0
        assert breakout.total_trades == 3
        assert breakout.total_pnl == 400.0
        assert breakout.recommendation == SetupRecommendation.KEEP

    def test_review_and_avoid(self, trades):
        scores = {s.setup_name: s for s in SetupScorer().score(trades)}

        # Range: score 0.125 with positive expectancy 0.25R
        assert scores["Range"].score == pytest.approx(0.125)
        assert scores["Range"].recommendation == SetupRecommendation.REVIEW
        # Fade: expectancy -1.5R
        assert scores["Fade"].expectancy == -1.5
        assert scores["Fade"].recommendation == SetupRecommendation.AVOID

    def test_negative_score_is_avoid(self):
        trades = [
            make_trade("1", "Chase", 100.0, 0.5),
            make_trade("2", "Chase", -300.0, -3.0, day=3),
        ]

        score = SetupScorer().score(trades)[0]

        assert score.score == pytest.approx(-0.625)
        assert score.recommendation == SetupRecommendation.AVOID

    def test_large_drawdown_reduces_score(self):
        # cumulative 5000, 2000, 3000 -> drawdown 3000 -> factor 3
        trades = [
            make_trade("1", "Swing", 5000.0, 5.0, day=2),
            make_trade("2", "Swing", -3000.0, -1.0, day=3),
            make_trade("3", "Swing", 1000.0, 1.0, day=4),
        ]

        score = SetupScorer(drawdown_scale=1000.0).score(trades)[0]

        assert score.max_drawdown == 3000.0
        assert score.score == pytest.approx(0.37, abs=1e-3)

    def test_drawdown_scale_is_configurable(self):
        trades = [
            make_trade("1", "Swing", 5000.0, 5.0, day=2),
            make_trade("2", "Swing", -3000.0, -1.0, day=3),
            make_trade("3", "Swing", 1000.0, 1.0, day=4),
        ]

        score = SetupScorer(drawdown_scale=10000.0).score(trades)[0]

        assert score.score == pytest.approx(1.111, abs=1e-3)

    def test_keep_threshold_is_configurable(self, trades):
        scores = SetupScorer(keep_score_threshold=1.0).score(trades)

        assert scores[0].recommendation == SetupRecommendation.REVIEW
