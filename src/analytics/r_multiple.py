# src/analytics/r_multiple.py
"""R-multiple distribution statistics."""
import math

from src.analytics.models import RDistributionBucket, RMultipleStats
from src.journal.models import Trade


# Upper-inclusive ranges: a value v falls in (low, high]
R_BUCKETS: list[tuple[str, float, float]] = [
    ("< -2R", -math.inf, -2.0),
    ("-2R to -1R", -2.0, -1.0),
    ("-1R to 0", -1.0, 0.0),
    ("0 to 1R", 0.0, 1.0),
    ("1R to 2R", 1.0, 2.0),
    ("2R to 3R", 2.0, 3.0),
    ("> 3R", 3.0, math.inf),
]


def median(values: list[float]) -> float:
    """True median; the mean of the two middle values for even lengths."""
    if not values:
        return 0.0
    ordered = sorted(values)
    mid = len(ordered) // 2
    if len(ordered) % 2:
        return ordered[mid]
    return (ordered[mid - 1] + ordered[mid]) / 2


def _percent(count: int, total: int) -> float:
    return round(count / total * 100, 1)


class RMultipleAnalyzer:
    """Calculates distribution statistics over trade R-multiples."""

    def calculate(self, trades: list[Trade]) -> RMultipleStats:
        """Calculate R-multiple statistics.

        Args:
            trades: Trades to analyze.

        Returns:
            RMultipleStats; zeros and an empty histogram for no trades.
        """
        if not trades:
            return RMultipleStats(
                average_r=0.0,
                max_r=0.0,
                min_r=0.0,
                median_r=0.0,
                percent_above_2r=0.0,
                percent_above_3r=0.0,
                percent_minus_1r=0.0,
                percent_minus_2r_or_worse=0.0,
                total_r=0.0,
                r_distribution=[],
            )

        r_values = [t.r_factor for t in trades]
        total = len(r_values)
        total_r = sum(r_values)

        above_2r = sum(1 for r in r_values if r >= 2)
        above_3r = sum(1 for r in r_values if r >= 3)
        minus_1r = sum(1 for r in r_values if -2 < r <= -1)
        minus_2r_or_worse = sum(1 for r in r_values if r <= -2)

        return RMultipleStats(
            average_r=round(total_r / total, 2),
            max_r=round(max(r_values), 2),
            min_r=round(min(r_values), 2),
            median_r=round(median(r_values), 2),
            percent_above_2r=_percent(above_2r, total),
            percent_above_3r=_percent(above_3r, total),
            percent_minus_1r=_percent(minus_1r, total),
            percent_minus_2r_or_worse=_percent(minus_2r_or_worse, total),
            total_r=round(total_r, 2),
            r_distribution=self._distribution(r_values),
        )

    def _distribution(self, r_values: list[float]) -> list[RDistributionBucket]:
        """Count R values into the fixed histogram buckets."""
        total = len(r_values)
        buckets = []
        for label, low, high in R_BUCKETS:
            count = sum(1 for r in r_values if low < r <= high)
            buckets.append(
                RDistributionBucket(range=label, count=count, percentage=_percent(count, total))
            )
        return buckets
