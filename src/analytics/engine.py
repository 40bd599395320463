# src/analytics/engine.py
"""Analytics engine composing every component into one summary."""
import logging
from datetime import date
from typing import TYPE_CHECKING

from src.analytics.drawdown import DrawdownAnalyzer
from src.analytics.emotion_impact import EmotionImpactAnalyzer
from src.analytics.expectancy import ExpectancyCalculator
from src.analytics.loss_streak import LossStreakDetector
from src.analytics.market_conditions import MarketConditionAnalyzer
from src.analytics.models import (
    AnalyticsSummary,
    ExpectancyResult,
    LossStreakAlert,
    RMultipleStats,
    RuleBreakAnalysis,
    SessionPerformance,
    SetupQualityScore,
    SetupRecommendation,
)
from src.analytics.r_multiple import RMultipleAnalyzer
from src.analytics.rule_breaks import RuleBreakAnalyzer
from src.analytics.session_analyzer import SessionAnalyzer, TimeOfDayAnalyzer
from src.analytics.settings import AnalyticsSettings
from src.analytics.setup_scorer import SetupScorer
from src.journal.currency import BaseCurrencyNormalizer
from src.journal.models import Trade

if TYPE_CHECKING:
    from src.config.settings import Settings

logger = logging.getLogger(__name__)


class AnalyticsEngine:
    """Runs every analytics component over one trade collection.

    Coordinates the expectancy, R-multiple, setup, rule-break, session,
    time-of-day, loss-streak, drawdown, market-condition and emotion
    components and derives plain-text insights from their results. Stateless
    between calls.
    """

    def __init__(
        self,
        settings: AnalyticsSettings | None = None,
        normalizer: BaseCurrencyNormalizer | None = None,
    ) -> None:
        """Initialize the engine with all components.

        Args:
            settings: Analytics thresholds; defaults when None.
            normalizer: Base-currency normalizer shared by all components.
        """
        self._settings = settings or AnalyticsSettings()
        self._normalizer = normalizer or BaseCurrencyNormalizer()

        self.expectancy = ExpectancyCalculator(self._normalizer)
        self.r_multiple = RMultipleAnalyzer()
        self.setup_scorer = SetupScorer(
            self._normalizer,
            drawdown_scale=self._settings.drawdown_scale,
            keep_score_threshold=self._settings.keep_score_threshold,
            avoid_expectancy_r=self._settings.avoid_expectancy_r,
        )
        self.rule_breaks = RuleBreakAnalyzer(self._normalizer)
        self.sessions = SessionAnalyzer(self._normalizer)
        self.time_of_day = TimeOfDayAnalyzer(self._normalizer)
        self.loss_streak = LossStreakDetector(
            max_streak_threshold=self._settings.max_streak_threshold,
            daily_loss_limit_r=self._settings.daily_loss_limit_r,
            reduce_size_ratio=self._settings.reduce_size_ratio,
        )
        self.drawdown = DrawdownAnalyzer(
            self._normalizer, max_periods=self._settings.max_drawdown_periods
        )
        self.market_conditions = MarketConditionAnalyzer(self._normalizer)
        self.emotions = EmotionImpactAnalyzer(self._normalizer)

    @classmethod
    def from_settings(cls, settings: "Settings") -> "AnalyticsEngine":
        """Build an engine from the root application settings."""
        normalizer = BaseCurrencyNormalizer(
            exchange_rates=settings.journal.exchange_rates,
            base_currency=settings.journal.base_currency,
        )
        return cls(settings=settings.analytics, normalizer=normalizer)

    def summarize(self, trades: list[Trade], today: date | None = None) -> AnalyticsSummary:
        """Generate the full analytics summary.

        Args:
            trades: Current snapshot of the trade collection, any order.
            today: Day used for the daily loss check; defaults to today.

        Returns:
            AnalyticsSummary with every component result and key insights.
        """
        trades = list(trades)
        logger.info(f"Generating analytics summary for {len(trades)} trades")

        expectancy = self.expectancy.calculate(trades)
        r_stats = self.r_multiple.calculate(trades)
        setup_scores = self.setup_scorer.score(trades)
        rule_breaks = self.rule_breaks.analyze(trades)
        sessions = self.sessions.analyze(trades)
        time_performance = self.time_of_day.analyze(trades)
        loss_streak = self.loss_streak.detect(trades, today=today)
        drawdown = self.drawdown.analyze(trades)
        conditions = self.market_conditions.analyze(trades)
        emotions = self.emotions.analyze(trades)
        mistakes = self.emotions.analyze_mistakes(trades)

        insights = self._key_insights(
            expectancy, r_stats, setup_scores, rule_breaks, sessions, loss_streak
        )
        logger.debug(f"Derived {len(insights)} insights")

        return AnalyticsSummary(
            expectancy=expectancy,
            r_multiple_stats=r_stats,
            setup_scores=setup_scores,
            rule_break_analysis=rule_breaks,
            session_performance=sessions,
            time_performance=time_performance,
            loss_streak_alert=loss_streak,
            drawdown_analysis=drawdown,
            market_condition_performance=conditions,
            key_insights=insights,
            emotion_impact=emotions,
            mistake_impact=mistakes,
            emotional_insights=self.emotions.insights(trades),
        )

    def _key_insights(
        self,
        expectancy: ExpectancyResult,
        r_stats: RMultipleStats,
        setup_scores: list[SetupQualityScore],
        rule_breaks: RuleBreakAnalysis,
        sessions: list[SessionPerformance],
        loss_streak: LossStreakAlert,
    ) -> list[str]:
        """Turn component results into short presentation strings."""
        insights: list[str] = []

        if expectancy.expectancy_r > self._settings.strong_expectancy_r:
            insights.append(
                f"Strong positive expectancy of {expectancy.expectancy_r}R per trade"
            )
        elif expectancy.expectancy_r < 0:
            insights.append(
                f"Negative expectancy of {expectancy.expectancy_r}R - review your strategy"
            )

        if setup_scores:
            best = setup_scores[0]
            if best.score > 0:
                insights.append(
                    f"Best setup: {best.setup_name} with {best.win_rate}% win rate "
                    f"and {best.avg_r}R average"
                )
            worst = setup_scores[-1]
            if worst.recommendation == SetupRecommendation.AVOID:
                insights.append(
                    f"Consider dropping: {worst.setup_name} has negative expectancy"
                )

        if rule_breaks.pnl_with_rules_followed > 0 and rule_breaks.pnl_with_rules_broken < 0:
            difference = rule_breaks.pnl_with_rules_followed - rule_breaks.pnl_with_rules_broken
            insights.append(
                f"Following rules would have added "
                f"{self._normalizer.format(difference, decimals=0)} to your P&L"
            )

        best_session = next((s for s in sessions if s.best_session), None)
        worst_session = next((s for s in sessions if s.worst_session), None)
        if best_session and best_session.total_trades > 0:
            insights.append(
                f"Best session: {best_session.session.value} with "
                f"{best_session.expectancy}R expectancy"
            )
        if worst_session and worst_session.total_trades > 0 and worst_session.expectancy < 0:
            insights.append(
                f"Avoid trading in {worst_session.session.value} session (negative expectancy)"
            )

        if loss_streak.is_on_tilt:
            insights.append("ALERT: You may be on tilt. Consider stopping for today.")

        if (
            r_stats.percent_above_2r < self._settings.big_winner_min_percent
            and expectancy.win_rate > self._settings.big_winner_min_win_rate
        ):
            insights.append(
                f"Consider letting winners run longer - only "
                f"{r_stats.percent_above_2r}% of trades reach 2R"
            )

        return insights
