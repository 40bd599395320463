# tests/analytics/test_session_analyzer.py
"""Tests for session and time-of-day analysis."""
from datetime import date

import pytest

from src.analytics.session_analyzer import (
    SESSIONS,
    SessionAnalyzer,
    TimeOfDayAnalyzer,
    detect_session,
    parse_hour,
)
from src.journal.models import Direction, MarketSession, Trade, TradeType


def make_trade(
    trade_id: str,
    pnl: float,
    r_factor: float,
    session: MarketSession | None = None,
    entry_time: str | None = None,
) -> Trade:
    """Create a trade for testing."""
    return Trade(
        trade_id=trade_id,
        trade_date=date(2026, 3, 2),
        symbol="EURUSD",
        setup_name="Breakout",
        trade_type=TradeType.INTRADAY,
        direction=Direction.BUY,
        stop_loss=1.08,
        quantity=1,
        pnl=pnl,
        r_factor=r_factor,
        session=session,
        entry_time=entry_time,
    )


class TestDetectSession:
    """Tests for detect_session."""

    @pytest.mark.parametrize(
        "entry_time,expected",
        [
            ("00:00", MarketSession.ASIA),
            ("06:59", MarketSession.ASIA),
            ("07:00", MarketSession.OVERLAP_ASIA_LONDON),
            ("08:59", MarketSession.OVERLAP_ASIA_LONDON),
            ("09:00", MarketSession.LONDON),
            ("11:59", MarketSession.LONDON),
            ("12:00", MarketSession.OVERLAP_LONDON_NY),
            ("15:59", MarketSession.OVERLAP_LONDON_NY),
            ("16:00", MarketSession.NEW_YORK),
            ("20:59", MarketSession.NEW_YORK),
            ("21:00", MarketSession.OFF_HOURS),
            ("23:59", MarketSession.OFF_HOURS),
        ],
    )
    def test_window_boundaries(self, entry_time, expected):
        assert detect_session(entry_time) == expected

    def test_malformed_time_raises(self):
        with pytest.raises(ValueError):
            detect_session("noon")


class TestParseHour:
    """Tests for parse_hour."""

    def test_valid(self):
        assert parse_hour("09:30") == 9
        assert parse_hour("23:59") == 23

    def test_missing(self):
        assert parse_hour(None) is None
        assert parse_hour("") is None

    def test_malformed_is_skipped(self):
        assert parse_hour("ab:30") is None
        assert parse_hour("25:00") is None


class TestSessionAnalyzer:
    """Tests for SessionAnalyzer.analyze."""

    @pytest.fixture
    def trades(self) -> list[Trade]:
        return [
            make_trade("1", 100.0, 1.0, MarketSession.LONDON),
            make_trade("2", -50.0, -0.5, MarketSession.LONDON),
            make_trade("3", -100.0, -1.0, MarketSession.NEW_YORK),
            make_trade("4", 200.0, 2.0, MarketSession.ASIA),
            make_trade("5", 500.0, 5.0),
        ]

    def test_one_row_per_session_in_order(self, trades):
        results = SessionAnalyzer().analyze(trades)

        assert [r.session for r in results] == SESSIONS

    def test_untagged_trades_are_not_bucketed(self, trades):
        results = SessionAnalyzer().analyze(trades)

        assert sum(r.total_trades for r in results) == 4

    def test_session_stats(self, trades):
        london = SessionAnalyzer().analyze(trades)[1]

        assert london.session == MarketSession.LONDON
        assert london.total_trades == 2
        assert london.win_rate == 50.0
        assert london.avg_r == 0.25
        assert london.total_pnl == 50.0
        assert london.expectancy == 0.25

    def test_best_and_worst_flags(self, trades):
        results = {r.session: r for r in SessionAnalyzer().analyze(trades)}

        assert results[MarketSession.ASIA].best_session is True
        assert results[MarketSession.NEW_YORK].worst_session is True
        assert sum(r.best_session for r in results.values()) == 1
        assert sum(r.worst_session for r in results.values()) == 1

    def test_ties_go_to_first_session_in_order(self):
        trades = [
            make_trade("1", 100.0, 1.0, MarketSession.NEW_YORK),
            make_trade("2", 100.0, 1.0, MarketSession.ASIA),
            make_trade("3", -50.0, -0.5, MarketSession.OFF_HOURS),
            make_trade("4", -50.0, -0.5, MarketSession.LONDON),
        ]

        results = {r.session: r for r in SessionAnalyzer().analyze(trades)}

        assert results[MarketSession.ASIA].best_session is True
        assert results[MarketSession.NEW_YORK].best_session is False
        assert results[MarketSession.LONDON].worst_session is True
        assert results[MarketSession.OFF_HOURS].worst_session is False

    def test_empty_sessions_never_flagged(self, trades):
        results = {r.session: r for r in SessionAnalyzer().analyze(trades)}

        off_hours = results[MarketSession.OFF_HOURS]
        assert off_hours.total_trades == 0
        assert off_hours.best_session is False
        assert off_hours.worst_session is False

    def test_no_trades(self):
        results = SessionAnalyzer().analyze([])

        assert len(results) == 6
        assert not any(r.best_session or r.worst_session for r in results)

    def test_stored_tag_is_used_not_entry_time(self):
        trade = make_trade("1", 100.0, 1.0, MarketSession.ASIA, entry_time="14:00")

        results = {r.session: r for r in SessionAnalyzer().analyze([trade])}

        assert results[MarketSession.ASIA].total_trades == 1
        assert results[MarketSession.OVERLAP_LONDON_NY].total_trades == 0


class TestTimeOfDayAnalyzer:
    """Tests for TimeOfDayAnalyzer.analyze."""

    def test_24_hour_rows(self):
        results = TimeOfDayAnalyzer().analyze([])

        assert [r.hour for r in results] == list(range(24))
        assert results[0].display_hour == "00:00"
        assert results[15].display_hour == "15:00"

    def test_buckets_by_entry_hour(self):
        trades = [
            make_trade("1", 100.0, 1.0, entry_time="09:15"),
            make_trade("2", -50.0, -0.5, entry_time="09:45"),
            make_trade("3", 30.0, 0.3, entry_time="14:00"),
            make_trade("4", 10.0, 0.1),
            make_trade("5", 10.0, 0.1, entry_time="bad"),
        ]

        results = TimeOfDayAnalyzer().analyze(trades)

        nine = results[9]
        assert nine.total_trades == 2
        assert nine.win_rate == 50.0
        assert nine.avg_r == 0.25
        assert nine.total_pnl == 50.0
        assert results[14].total_trades == 1
        assert sum(r.total_trades for r in results) == 3
