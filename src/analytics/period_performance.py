# src/analytics/period_performance.py
"""Calendar-period P&L and win-rate breakdowns."""
from datetime import timedelta

import pandas as pd

from src.journal.currency import BaseCurrencyNormalizer
from src.journal.models import Trade

WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


class PeriodPerformanceAnalyzer:
    """Breaks base-currency P&L down by month, week and weekday.

    Attributes:
        weeks_to_keep: Number of most recent weeks reported by weekly_pnl.
    """

    def __init__(
        self,
        normalizer: BaseCurrencyNormalizer | None = None,
        weeks_to_keep: int = 12,
    ) -> None:
        self._normalizer = normalizer or BaseCurrencyNormalizer()
        self.weeks_to_keep = weeks_to_keep

    def _frame(self, trades: list[Trade]) -> pd.DataFrame:
        """One row per trade with its period keys and base P&L."""
        rows = [
            {
                "month": t.trade_date.strftime("%Y-%m"),
                "week": (t.trade_date - timedelta(days=t.trade_date.weekday())).isoformat(),
                "weekday": t.day_of_week,
                "pnl": self._normalizer.base_pnl(t),
                "win": t.pnl > 0,
            }
            for t in trades
        ]
        df = pd.DataFrame(rows, columns=["month", "week", "weekday", "pnl", "win"])
        return df.astype({"pnl": float, "win": bool})

    @staticmethod
    def _to_dict(series: pd.Series) -> dict[str, float]:
        return {str(key): round(float(value), 2) for key, value in series.items()}

    def monthly_pnl(self, trades: list[Trade]) -> dict[str, float]:
        """P&L per "YYYY-MM" month, oldest first."""
        df = self._frame(trades)
        return self._to_dict(df.groupby("month")["pnl"].sum().sort_index())

    def weekly_pnl(self, trades: list[Trade]) -> dict[str, float]:
        """P&L per week (keyed by its Monday), limited to the latest weeks."""
        df = self._frame(trades)
        sums = df.groupby("week")["pnl"].sum().sort_index()
        return self._to_dict(sums.tail(self.weeks_to_keep))

    def pnl_by_weekday(self, trades: list[Trade]) -> dict[str, float]:
        """P&L per weekday name, Monday first; untraded days are omitted."""
        df = self._frame(trades)
        sums = df.groupby("weekday")["pnl"].sum()
        return self._to_dict(sums.reindex([d for d in WEEKDAYS if d in sums.index]))

    def monthly_win_rate(self, trades: list[Trade]) -> dict[str, float]:
        """Win-rate percentage per "YYYY-MM" month."""
        df = self._frame(trades)
        rates = df.groupby("month")["win"].mean().sort_index() * 100
        return self._to_dict(rates)
