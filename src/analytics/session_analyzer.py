# src/analytics/session_analyzer.py
"""Session and time-of-day performance analysis."""
import logging
from dataclasses import replace

from src.analytics.expectancy import ExpectancyCalculator
from src.analytics.grouping import aggregate, bucket_reducers, group_by
from src.analytics.models import SessionPerformance, TimePerformance
from src.journal.currency import BaseCurrencyNormalizer
from src.journal.models import MarketSession, Trade

logger = logging.getLogger(__name__)

# Output order of the session breakdown
SESSIONS: list[MarketSession] = [
    MarketSession.ASIA,
    MarketSession.LONDON,
    MarketSession.NEW_YORK,
    MarketSession.OVERLAP_LONDON_NY,
    MarketSession.OVERLAP_ASIA_LONDON,
    MarketSession.OFF_HOURS,
]

# Session windows as [start, end) minutes of the UTC day
SESSION_WINDOWS: list[tuple[int, int, MarketSession]] = [
    (0, 420, MarketSession.ASIA),  # 00:00 - 07:00
    (420, 540, MarketSession.OVERLAP_ASIA_LONDON),  # 07:00 - 09:00
    (540, 720, MarketSession.LONDON),  # 09:00 - 12:00
    (720, 960, MarketSession.OVERLAP_LONDON_NY),  # 12:00 - 16:00
    (960, 1260, MarketSession.NEW_YORK),  # 16:00 - 21:00
]


def detect_session(entry_time: str) -> MarketSession:
    """Map a UTC "HH:MM" entry time to its market session.

    Args:
        entry_time: Time of day in 24h format.

    Returns:
        The session whose window contains the time; OFF_HOURS otherwise.

    Raises:
        ValueError: If entry_time is not "HH:MM".
    """
    hours, minutes = (int(part) for part in entry_time.split(":")[:2])
    total_minutes = hours * 60 + minutes
    for start, end, session in SESSION_WINDOWS:
        if start <= total_minutes < end:
            return session
    return MarketSession.OFF_HOURS


def parse_hour(entry_time: str | None) -> int | None:
    """Extract the hour from an "HH:MM" time, None if missing or malformed."""
    if not entry_time:
        return None
    try:
        hour = int(entry_time.split(":")[0])
    except ValueError:
        logger.warning(f"Skipping unparseable entry time: {entry_time!r}")
        return None
    if not 0 <= hour <= 23:
        logger.warning(f"Skipping out-of-range entry time: {entry_time!r}")
        return None
    return hour


class SessionAnalyzer:
    """Performance per stored market-session tag.

    Trades are bucketed by their recorded session, never by detect_session.
    """

    def __init__(self, normalizer: BaseCurrencyNormalizer | None = None) -> None:
        self._normalizer = normalizer or BaseCurrencyNormalizer()
        self._expectancy = ExpectancyCalculator(self._normalizer)

    def analyze(self, trades: list[Trade]) -> list[SessionPerformance]:
        """Analyze performance for each of the six sessions.

        Sessions without trades are reported with zero stats and are never
        flagged best or worst.

        Args:
            trades: Trades to analyze.

        Returns:
            One SessionPerformance per session in SESSIONS order.
        """
        groups = group_by(trades, lambda t: t.session)
        reducers = bucket_reducers(self._normalizer)

        results = []
        for session in SESSIONS:
            session_trades = groups.get(session, [])
            stats = aggregate(session_trades, reducers)
            results.append(
                SessionPerformance(
                    session=session,
                    total_trades=len(session_trades),
                    win_rate=round(stats["win_rate"], 1),
                    avg_r=round(stats["avg_r"], 2),
                    total_pnl=round(stats["total_pnl"], 2),
                    expectancy=self._expectancy.calculate(session_trades).expectancy_r,
                )
            )

        return self._mark_best_worst(results)

    def _mark_best_worst(self, results: list[SessionPerformance]) -> list[SessionPerformance]:
        """Flag the best and worst sessions among those with trades.

        Ties go to the session that comes first in SESSIONS order.
        """
        traded = [r for r in results if r.total_trades > 0]
        if not traded:
            return results

        best = max(traded, key=lambda r: r.expectancy).session
        worst = min(traded, key=lambda r: r.expectancy).session
        return [
            replace(r, best_session=r.session == best, worst_session=r.session == worst)
            for r in results
        ]


class TimeOfDayAnalyzer:
    """Performance per hour of entry."""

    def __init__(self, normalizer: BaseCurrencyNormalizer | None = None) -> None:
        self._normalizer = normalizer or BaseCurrencyNormalizer()

    def analyze(self, trades: list[Trade]) -> list[TimePerformance]:
        """Analyze performance for each hour 0-23.

        Args:
            trades: Trades to analyze; those without an entry time are skipped.

        Returns:
            24 TimePerformance rows, zero stats for hours without trades.
        """
        groups = group_by(trades, lambda t: parse_hour(t.entry_time))
        reducers = bucket_reducers(self._normalizer)

        results = []
        for hour in range(24):
            stats = aggregate(groups.get(hour, []), reducers)
            results.append(
                TimePerformance(
                    hour=hour,
                    display_hour=f"{hour:02d}:00",
                    total_trades=int(stats["total_trades"]),
                    win_rate=round(stats["win_rate"], 1),
                    avg_r=round(stats["avg_r"], 2),
                    total_pnl=round(stats["total_pnl"], 2),
                )
            )
        return results
