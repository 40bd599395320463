# src/analytics/market_conditions.py
"""Performance grouped by market condition."""
from src.analytics.expectancy import ExpectancyCalculator
from src.analytics.grouping import aggregate, bucket_reducers, group_by
from src.analytics.models import MarketConditionPerformance
from src.journal.currency import BaseCurrencyNormalizer
from src.journal.models import MarketCondition, Trade

CONDITIONS: list[MarketCondition] = [
    MarketCondition.TRENDING,
    MarketCondition.RANGING,
    MarketCondition.HIGH_VOLATILITY,
    MarketCondition.LOW_VOLATILITY,
    MarketCondition.NEWS_DAY,
    MarketCondition.NORMAL,
]


class MarketConditionAnalyzer:
    """Performance per stored market-condition tag."""

    def __init__(self, normalizer: BaseCurrencyNormalizer | None = None) -> None:
        self._normalizer = normalizer or BaseCurrencyNormalizer()
        self._expectancy = ExpectancyCalculator(self._normalizer)

    def analyze(self, trades: list[Trade]) -> list[MarketConditionPerformance]:
        """Analyze performance for each of the six market conditions.

        Args:
            trades: Trades to analyze.

        Returns:
            One row per condition in CONDITIONS order, zero stats when untraded.
        """
        groups = group_by(trades, lambda t: t.market_condition)
        reducers = bucket_reducers(self._normalizer)

        results = []
        for condition in CONDITIONS:
            condition_trades = groups.get(condition, [])
            stats = aggregate(condition_trades, reducers)
            results.append(
                MarketConditionPerformance(
                    condition=condition,
                    total_trades=len(condition_trades),
                    win_rate=round(stats["win_rate"], 1),
                    avg_r=round(stats["avg_r"], 2),
                    total_pnl=round(stats["total_pnl"], 2),
                    expectancy=self._expectancy.calculate(condition_trades).expectancy_r,
                )
            )
        return results
