# src/analytics/emotion_impact.py
"""Impact of emotional state and mistakes on trading results."""
import logging
from statistics import pstdev

from src.analytics.grouping import Reducer, aggregate, bucket_reducers, group_by
from src.analytics.models import EmotionImpact, MistakeImpact
from src.journal.currency import BaseCurrencyNormalizer
from src.journal.models import EmotionTag, Trade

logger = logging.getLogger(__name__)

POSITIVE_EMOTIONS: frozenset[EmotionTag] = frozenset({EmotionTag.CALM, EmotionTag.CONFIDENT})

# Share of trades taken in a positive state that earns the emotional-control insight
EMOTIONAL_CONTROL_SHARE = 0.7


class EmotionImpactAnalyzer:
    """Groups trades by emotion or mistake tag and compares outcomes."""

    def __init__(self, normalizer: BaseCurrencyNormalizer | None = None) -> None:
        self._normalizer = normalizer or BaseCurrencyNormalizer()

    def _reducers(self) -> dict[str, Reducer]:
        reducers = bucket_reducers(self._normalizer)
        reducers["avg_pnl"] = self._average_pnl
        reducers["consistency"] = self._pnl_stdev
        return reducers

    def _average_pnl(self, trades: list[Trade]) -> float:
        if not trades:
            return 0.0
        return self._normalizer.total_base_pnl(trades) / len(trades)

    def _pnl_stdev(self, trades: list[Trade]) -> float:
        """Population standard deviation of base P&L."""
        if not trades:
            return 0.0
        return pstdev(self._normalizer.base_pnl(t) for t in trades)

    def analyze(self, trades: list[Trade], at_exit: bool = False) -> list[EmotionImpact]:
        """Aggregate results per emotional state.

        Trades without a recorded emotion count as Neutral.

        Args:
            trades: Trades to analyze.
            at_exit: Group by the exit emotion instead of the entry emotion.

        Returns:
            One EmotionImpact per emotion seen, highest total P&L first.
        """
        if at_exit:
            groups = group_by(trades, lambda t: t.emotion_exit or EmotionTag.NEUTRAL)
        else:
            groups = group_by(trades, lambda t: t.emotion_entry or EmotionTag.NEUTRAL)
        reducers = self._reducers()

        results = []
        for emotion, group in groups.items():
            stats = aggregate(group, reducers)
            results.append(
                EmotionImpact(
                    emotion=emotion,
                    trade_count=len(group),
                    total_pnl=round(stats["total_pnl"], 2),
                    avg_pnl=round(stats["avg_pnl"], 2),
                    win_rate=round(stats["win_rate"], 1),
                    avg_r=round(stats["avg_r"], 2),
                    consistency=round(stats["consistency"], 2),
                )
            )
        return sorted(results, key=lambda e: e.total_pnl, reverse=True)

    def analyze_mistakes(self, trades: list[Trade]) -> list[MistakeImpact]:
        """Aggregate results per mistake tag, costliest first.

        Trades without a mistake tag are skipped.
        """
        groups = group_by(trades, lambda t: t.mistake_tag)
        reducers = self._reducers()

        results = []
        for mistake, group in groups.items():
            stats = aggregate(group, reducers)
            results.append(
                MistakeImpact(
                    mistake=mistake,
                    trade_count=len(group),
                    total_pnl=round(stats["total_pnl"], 2),
                    avg_pnl=round(stats["avg_pnl"], 2),
                    win_rate=round(stats["win_rate"], 1),
                    avg_r=round(stats["avg_r"], 2),
                )
            )
        return sorted(results, key=lambda m: m.total_pnl)

    def insights(self, trades: list[Trade]) -> list[str]:
        """Plain-text observations about emotional patterns.

        Args:
            trades: Trades to analyze.

        Returns:
            Best-emotion, worst-emotion (only when it lost money),
            most-consistent and emotional-control insights, in that order.
        """
        impacts = self.analyze(trades)
        if not impacts:
            return []

        insights: list[str] = []

        best = impacts[0]
        insights.append(
            f'Your best trades are when you feel "{best.emotion.value}" '
            f"({best.trade_count} trades, {best.win_rate:.1f}% win rate)"
        )

        worst = impacts[-1]
        if worst.total_pnl < 0:
            insights.append(
                f'Avoid trading when feeling "{worst.emotion.value}" - '
                f"{worst.trade_count} trades with "
                f"{self._normalizer.format(abs(worst.total_pnl))} loss"
            )

        steadiest = min(impacts, key=lambda e: e.consistency)
        insights.append(
            f'When "{steadiest.emotion.value}", your results are most consistent '
            f"({steadiest.consistency:.0f} stdev)"
        )

        positive = sum(1 for t in trades if t.emotion_entry in POSITIVE_EMOTIONS)
        if positive > len(trades) * EMOTIONAL_CONTROL_SHARE:
            insights.append(
                f"Excellent emotional control! {positive / len(trades) * 100:.1f}% "
                f"of trades made with positive mindset"
            )

        logger.debug(f"Derived {len(insights)} emotional insights from {len(impacts)} emotions")
        return insights
