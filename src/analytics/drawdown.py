# src/analytics/drawdown.py
"""Drawdown analysis over the chronological equity curve."""
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from src.analytics.models import DrawdownAnalysis, DrawdownPeriod
from src.journal.currency import BaseCurrencyNormalizer
from src.journal.models import MarketSession, Trade, chronological

logger = logging.getLogger(__name__)


def max_drawdown(pnls: list[float]) -> float:
    """Largest peak-to-current drop of a cumulative P&L series.

    The running peak starts at 0, so an initial loss counts as drawdown.

    Args:
        pnls: Per-trade P&L values in chronological order.

    Returns:
        Maximum drawdown as a non-negative amount.
    """
    cumulative = 0.0
    peak = 0.0
    worst = 0.0
    for pnl in pnls:
        cumulative += pnl
        peak = max(peak, cumulative)
        worst = max(worst, peak - cumulative)
    return worst


class _State(Enum):
    AT_PEAK = "at_peak"
    IN_DRAWDOWN = "in_drawdown"


@dataclass
class _OpenPeriod:
    """Trades buffered since equity last stood at a peak."""

    start_date: date
    peak: float
    trades: list[Trade] = field(default_factory=list)


class DrawdownAnalyzer:
    """Reconstructs drawdown periods from the equity curve.

    Walks the trades in chronological order as a two-state machine:

    - AT_PEAK: a trade that does not set a new peak opens a period.
    - IN_DRAWDOWN: trades are buffered until cumulative P&L exceeds the
      peak again, which closes and records the period.

    Attributes:
        max_periods: How many of the most recent closed periods to report.
    """

    def __init__(
        self,
        normalizer: BaseCurrencyNormalizer | None = None,
        max_periods: int = 5,
    ) -> None:
        """Initialize the analyzer.

        Args:
            normalizer: Converts P&L to the base currency.
            max_periods: Number of recent closed periods to keep.
        """
        self._normalizer = normalizer or BaseCurrencyNormalizer()
        self.max_periods = max_periods

    def analyze(self, trades: list[Trade]) -> DrawdownAnalysis:
        """Analyze drawdowns of the trade history.

        Args:
            trades: Trades in any order.

        Returns:
            DrawdownAnalysis; all zeros for no trades.
        """
        if not trades:
            return DrawdownAnalysis(
                max_drawdown=0.0,
                max_drawdown_r=0.0,
                current_drawdown=0.0,
                drawdown_periods=[],
                structural_weaknesses=[],
            )

        state = _State.AT_PEAK
        open_period: _OpenPeriod | None = None
        periods: list[DrawdownPeriod] = []

        cumulative = 0.0
        peak = 0.0
        cumulative_r = 0.0
        peak_r = 0.0
        worst = 0.0
        worst_r = 0.0

        for trade in chronological(trades):
            cumulative += self._normalizer.base_pnl(trade)
            cumulative_r += trade.r_factor
            peak_r = max(peak_r, cumulative_r)

            if cumulative > peak:
                if state is _State.IN_DRAWDOWN and open_period is not None:
                    periods.append(self._close_period(open_period, trade))
                peak = cumulative
                state = _State.AT_PEAK
                open_period = None
            else:
                if state is _State.AT_PEAK:
                    open_period = _OpenPeriod(start_date=trade.trade_date, peak=peak)
                    state = _State.IN_DRAWDOWN
                open_period.trades.append(trade)

            worst = max(worst, peak - cumulative)
            worst_r = max(worst_r, peak_r - cumulative_r)

        current_drawdown = peak - cumulative
        logger.debug(
            f"Drawdown walk: {len(periods)} closed periods, max {worst:.2f}, "
            f"current {current_drawdown:.2f}, state {state.value}"
        )

        return DrawdownAnalysis(
            max_drawdown=round(worst, 2),
            max_drawdown_r=round(worst_r, 2),
            current_drawdown=round(current_drawdown, 2),
            drawdown_periods=periods[-self.max_periods:] if self.max_periods > 0 else [],
            structural_weaknesses=self._structural_weaknesses(periods),
        )

    def _close_period(self, period: _OpenPeriod, recovery_trade: Trade) -> DrawdownPeriod:
        """Build the record of a period ended by a recovering trade."""
        equity = period.peak
        lowest = period.peak
        for trade in period.trades:
            equity += self._normalizer.base_pnl(trade)
            lowest = min(lowest, equity)

        setups = list(dict.fromkeys(t.setup_name for t in period.trades))
        sessions = list(dict.fromkeys(t.session for t in period.trades if t.session))

        return DrawdownPeriod(
            start_date=period.start_date,
            end_date=recovery_trade.trade_date,
            drawdown_amount=round(period.peak - lowest, 2),
            drawdown_r=round(sum(min(0.0, t.r_factor) for t in period.trades), 2),
            trades_in_period=len(period.trades),
            recovery_trades=1,
            caused_by_setups=setups,
            caused_by_sessions=sessions,
        )

    def _structural_weaknesses(self, periods: list[DrawdownPeriod]) -> list[str]:
        """Name the setup and session carrying the most drawdown."""
        weaknesses: list[str] = []

        setup_impact: dict[str, float] = defaultdict(float)
        session_impact: dict[MarketSession, float] = defaultdict(float)
        for period in periods:
            for setup in period.caused_by_setups:
                setup_impact[setup] += period.drawdown_amount
            for session in period.caused_by_sessions:
                session_impact[session] += period.drawdown_amount

        if setup_impact:
            worst_setup = max(setup_impact, key=lambda s: setup_impact[s])
            weaknesses.append(f'Setup "{worst_setup}" contributed most to drawdowns')
        if session_impact:
            worst_session = max(session_impact, key=lambda s: session_impact[s])
            weaknesses.append(f"{worst_session.value} session contributed most to drawdowns")

        return weaknesses
