# src/analytics/account_stats.py
"""Headline account statistics in the base currency."""
import math

from src.analytics.drawdown import max_drawdown
from src.analytics.grouping import average_r, group_by, win_rate
from src.analytics.models import AccountStats, EquityPoint
from src.journal.currency import BaseCurrencyNormalizer
from src.journal.models import Trade, chronological


class AccountStatsCalculator:
    """Calculates account-level statistics from journal trades."""

    def __init__(self, normalizer: BaseCurrencyNormalizer | None = None) -> None:
        self._normalizer = normalizer or BaseCurrencyNormalizer()

    def calculate(self, trades: list[Trade]) -> AccountStats:
        """Calculate headline statistics.

        Args:
            trades: Trades in any order.

        Returns:
            AccountStats; zeros and "N/A" setups for no trades.
        """
        if not trades:
            return AccountStats(
                total_trades=0,
                win_rate=0.0,
                total_pnl=0.0,
                average_r=0.0,
                max_drawdown=0.0,
                best_setup="N/A",
                worst_setup="N/A",
            )

        setup_pnl = {
            setup: self._normalizer.total_base_pnl(group)
            for setup, group in group_by(trades, lambda t: t.setup_name).items()
        }

        return AccountStats(
            total_trades=len(trades),
            win_rate=round(win_rate(trades), 2),
            total_pnl=round(self._normalizer.total_base_pnl(trades), 2),
            average_r=round(average_r(trades), 2),
            max_drawdown=round(self._max_drawdown(trades), 2),
            best_setup=max(setup_pnl, key=lambda s: setup_pnl[s]),
            worst_setup=min(setup_pnl, key=lambda s: setup_pnl[s]),
        )

    def profit_factor(self, trades: list[Trade]) -> float:
        """Gross profit over gross loss.

        Returns:
            The ratio; math.inf when there is profit but no loss, 0.0 when
            there is neither.
        """
        gross_profit = sum(
            self._normalizer.base_pnl(t) for t in trades if t.pnl > 0
        )
        gross_loss = abs(sum(self._normalizer.base_pnl(t) for t in trades if t.pnl < 0))
        if gross_loss == 0:
            return math.inf if gross_profit > 0 else 0.0
        return round(gross_profit / gross_loss, 2)

    def risk_reward_ratio(self, trades: list[Trade]) -> float:
        """Average win over average non-winning trade magnitude."""
        wins = [self._normalizer.base_pnl(t) for t in trades if t.pnl > 0]
        others = [self._normalizer.base_pnl(t) for t in trades if t.pnl <= 0]
        if not wins or not others:
            return 0.0

        avg_loss = abs(sum(others) / len(others))
        if avg_loss == 0:
            return 0.0
        return round((sum(wins) / len(wins)) / avg_loss, 2)

    def recovery_factor(self, trades: list[Trade]) -> float:
        """Total P&L over maximum drawdown; 0.0 without drawdown."""
        drawdown = self._max_drawdown(trades)
        if drawdown == 0:
            return 0.0
        return round(self._normalizer.total_base_pnl(trades) / drawdown, 2)

    def equity_curve(self, trades: list[Trade]) -> list[EquityPoint]:
        """Cumulative base-currency balance after each trade, oldest first."""
        balance = 0.0
        curve = []
        for trade in chronological(trades):
            balance += self._normalizer.base_pnl(trade)
            curve.append(EquityPoint(trade_date=trade.trade_date, balance=round(balance, 2)))
        return curve

    def average_daily_pnl(self, trades: list[Trade]) -> float:
        """Total P&L divided by the number of distinct trading days."""
        if not trades:
            return 0.0
        trading_days = {t.trade_date for t in trades}
        return self._normalizer.total_base_pnl(trades) / len(trading_days)

    def _max_drawdown(self, trades: list[Trade]) -> float:
        return max_drawdown([self._normalizer.base_pnl(t) for t in chronological(trades)])
