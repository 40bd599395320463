# src/analytics/expectancy.py
"""Calculator for trading expectancy."""
from collections.abc import Callable, Hashable
from typing import TypeVar

from src.analytics.grouping import group_by
from src.analytics.models import ExpectancyInterpretation, ExpectancyResult
from src.journal.currency import BaseCurrencyNormalizer
from src.journal.models import MarketSession, Trade

K = TypeVar("K", bound=Hashable)


class ExpectancyCalculator:
    """Calculates expectancy in base currency and in R.

    Expectancy = (win rate x average win) - (loss rate x average loss), with
    rates as fractions. Break-even trades count toward the total only.
    """

    def __init__(self, normalizer: BaseCurrencyNormalizer | None = None) -> None:
        """Initialize the calculator.

        Args:
            normalizer: Converts P&L to the base currency.
        """
        self._normalizer = normalizer or BaseCurrencyNormalizer()

    def calculate(self, trades: list[Trade]) -> ExpectancyResult:
        """Calculate expectancy for any list of trades.

        Args:
            trades: Trades to analyze (full set or a group).

        Returns:
            ExpectancyResult; all zeros with BREAK_EVEN for an empty list.
        """
        if not trades:
            return self._empty_result()

        winners = [t for t in trades if t.pnl > 0]
        losers = [t for t in trades if t.pnl < 0]

        total_trades = len(trades)
        win_rate = len(winners) / total_trades
        loss_rate = len(losers) / total_trades

        avg_win = self._average(self._normalizer.base_pnl(t) for t in winners)
        avg_loss = abs(self._average(self._normalizer.base_pnl(t) for t in losers))
        avg_win_r = self._average(t.r_factor for t in winners)
        avg_loss_r = abs(self._average(t.r_factor for t in losers))

        expectancy = (win_rate * avg_win) - (loss_rate * avg_loss)
        expectancy_r = (win_rate * avg_win_r) - (loss_rate * avg_loss_r)

        return ExpectancyResult(
            expectancy=round(expectancy, 2),
            expectancy_r=round(expectancy_r, 3),
            win_rate=round(win_rate * 100, 2),
            loss_rate=round(loss_rate * 100, 2),
            avg_win=round(avg_win, 2),
            avg_loss=round(avg_loss, 2),
            avg_win_r=round(avg_win_r, 2),
            avg_loss_r=round(avg_loss_r, 2),
            total_trades=total_trades,
            interpretation=ExpectancyInterpretation.from_expectancy(expectancy),
        )

    def calculate_by(
        self, trades: list[Trade], key_fn: Callable[[Trade], K | None]
    ) -> dict[K, ExpectancyResult]:
        """Calculate expectancy per group.

        Args:
            trades: Trades to analyze.
            key_fn: Group key extractor; trades without a key are skipped.

        Returns:
            Dict of group key to ExpectancyResult.
        """
        return {
            key: self.calculate(group)
            for key, group in group_by(trades, key_fn).items()
        }

    def by_setup(self, trades: list[Trade]) -> dict[str, ExpectancyResult]:
        return self.calculate_by(trades, lambda t: t.setup_name)

    def by_symbol(self, trades: list[Trade]) -> dict[str, ExpectancyResult]:
        return self.calculate_by(trades, lambda t: t.symbol)

    def by_timeframe(self, trades: list[Trade]) -> dict[str, ExpectancyResult]:
        return self.calculate_by(trades, lambda t: t.timeframe)

    def by_session(self, trades: list[Trade]) -> dict[MarketSession, ExpectancyResult]:
        return self.calculate_by(trades, lambda t: t.session)

    @staticmethod
    def _average(values) -> float:
        values = list(values)
        return sum(values) / len(values) if values else 0.0

    def _empty_result(self) -> ExpectancyResult:
        """Return a zeroed result for an empty trade list."""
        return ExpectancyResult(
            expectancy=0.0,
            expectancy_r=0.0,
            win_rate=0.0,
            loss_rate=0.0,
            avg_win=0.0,
            avg_loss=0.0,
            avg_win_r=0.0,
            avg_loss_r=0.0,
            total_trades=0,
            interpretation=ExpectancyInterpretation.BREAK_EVEN,
        )
