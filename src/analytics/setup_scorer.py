# src/analytics/setup_scorer.py
"""Quality scoring and ranking of trading setups."""
from dataclasses import replace

from src.analytics.drawdown import max_drawdown
from src.analytics.expectancy import ExpectancyCalculator
from src.analytics.grouping import average_r, group_by
from src.analytics.models import SetupQualityScore, SetupRecommendation
from src.journal.currency import BaseCurrencyNormalizer
from src.journal.models import Trade, chronological


class SetupScorer:
    """Scores each setup and classifies it as Keep, Review or Avoid.

    Score = (win rate x average R) / drawdown factor, where the drawdown
    factor is max(1, setup max drawdown / drawdown_scale). Drawdowns below
    drawdown_scale base-currency units carry no penalty.

    Attributes:
        drawdown_scale: Base-currency amount of drawdown per unit of penalty.
        keep_score_threshold: Minimum score (exclusive) for KEEP.
        avoid_expectancy_r: Expectancy in R below which a setup is AVOID.
    """

    def __init__(
        self,
        normalizer: BaseCurrencyNormalizer | None = None,
        drawdown_scale: float = 1000.0,
        keep_score_threshold: float = 0.5,
        avoid_expectancy_r: float = -0.2,
    ) -> None:
        self._normalizer = normalizer or BaseCurrencyNormalizer()
        self._expectancy = ExpectancyCalculator(self._normalizer)
        self.drawdown_scale = drawdown_scale
        self.keep_score_threshold = keep_score_threshold
        self.avoid_expectancy_r = avoid_expectancy_r

    def score(self, trades: list[Trade]) -> list[SetupQualityScore]:
        """Score and rank every setup.

        Args:
            trades: Trades in any order.

        Returns:
            Scores sorted by descending score, ranked 1..N.
        """
        scores = [
            self._score_setup(setup_name, setup_trades)
            for setup_name, setup_trades in group_by(trades, lambda t: t.setup_name).items()
        ]

        ranked = sorted(scores, key=lambda s: s.score, reverse=True)
        return [replace(s, rank=i) for i, s in enumerate(ranked, start=1)]

    def _score_setup(self, setup_name: str, trades: list[Trade]) -> SetupQualityScore:
        """Score one setup; rank is assigned later."""
        expectancy = self._expectancy.calculate(trades)
        avg_r = average_r(trades)

        setup_drawdown = max_drawdown(
            [self._normalizer.base_pnl(t) for t in chronological(trades)]
        )
        drawdown_factor = max(1.0, setup_drawdown / self.drawdown_scale)
        score = (expectancy.win_rate / 100 * avg_r) / drawdown_factor

        return SetupQualityScore(
            setup_name=setup_name,
            score=round(score, 3),
            win_rate=expectancy.win_rate,
            avg_r=round(avg_r, 2),
            expectancy=expectancy.expectancy_r,
            max_drawdown=round(setup_drawdown, 2),
            total_trades=len(trades),
            total_pnl=round(self._normalizer.total_base_pnl(trades), 2),
            rank=0,
            recommendation=self._recommend(score, expectancy.expectancy_r),
        )

    def _recommend(self, score: float, expectancy_r: float) -> SetupRecommendation:
        if score > self.keep_score_threshold and expectancy_r > 0:
            return SetupRecommendation.KEEP
        elif score < 0 or expectancy_r < self.avoid_expectancy_r:
            return SetupRecommendation.AVOID
        else:
            return SetupRecommendation.REVIEW
