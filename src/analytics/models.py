# src/analytics/models.py
"""Result models produced by the analytics engine."""
from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from src.journal.models import (
    EmotionTag,
    MarketCondition,
    MarketSession,
    MistakeTag,
    RuleViolation,
)


class ExpectancyInterpretation(str, Enum):
    """Reading of an expectancy value."""

    PROFITABLE = "Profitable"
    BREAK_EVEN = "Break-Even"
    LOSING = "Losing"

    @classmethod
    def from_expectancy(cls, expectancy: float) -> "ExpectancyInterpretation":
        """Classify by the sign of the expectancy."""
        if expectancy > 0:
            return cls.PROFITABLE
        elif expectancy < 0:
            return cls.LOSING
        else:
            return cls.BREAK_EVEN


class SetupRecommendation(str, Enum):
    """What to do with a setup given its quality score."""

    KEEP = "Keep"
    REVIEW = "Review"
    AVOID = "Avoid"


@dataclass(frozen=True)
class ExpectancyResult:
    """Expectancy breakdown for a group of trades.

    Attributes:
        expectancy: Average base-currency result per trade.
        expectancy_r: Average R result per trade.
        win_rate: Percentage of trades with pnl > 0 (0-100).
        loss_rate: Percentage of trades with pnl < 0 (0-100).
        avg_win: Average winning trade in base currency.
        avg_loss: Average losing trade magnitude in base currency.
        avg_win_r: Average winning R.
        avg_loss_r: Average losing R magnitude.
        total_trades: Trades in the group, break-even included.
        interpretation: Sign reading of expectancy.
    """

    expectancy: float
    expectancy_r: float
    win_rate: float
    loss_rate: float
    avg_win: float
    avg_loss: float
    avg_win_r: float
    avg_loss_r: float
    total_trades: int
    interpretation: ExpectancyInterpretation


@dataclass(frozen=True)
class RDistributionBucket:
    """One R-range of the R-multiple histogram."""

    range: str
    count: int
    percentage: float


@dataclass(frozen=True)
class RMultipleStats:
    """Distribution statistics over R-multiples."""

    average_r: float
    max_r: float
    min_r: float
    median_r: float
    percent_above_2r: float
    percent_above_3r: float
    percent_minus_1r: float
    percent_minus_2r_or_worse: float
    total_r: float
    r_distribution: list[RDistributionBucket] = field(default_factory=list)


@dataclass(frozen=True)
class SetupQualityScore:
    """Composite quality score of one setup.

    Attributes:
        setup_name: Setup label.
        score: (win rate x average R) / drawdown factor.
        win_rate: Win rate percentage.
        avg_r: Average R-multiple.
        expectancy: Expectancy in R.
        max_drawdown: Setup-local max drawdown in base currency.
        total_trades: Trades taken with this setup.
        total_pnl: Summed base-currency P&L.
        rank: 1 for the best score.
        recommendation: Keep, Review or Avoid.
    """

    setup_name: str
    score: float
    win_rate: float
    avg_r: float
    expectancy: float
    max_drawdown: float
    total_trades: int
    total_pnl: float
    rank: int
    recommendation: SetupRecommendation


@dataclass(frozen=True)
class ViolationImpact:
    """Aggregate outcome of trades carrying one violation tag."""

    violation: RuleViolation
    count: int
    pnl: float
    avg_r: float


@dataclass(frozen=True)
class RuleBreakAnalysis:
    """Performance with rules followed versus broken."""

    total_trades: int
    rules_followed_count: int
    rules_broken_count: int
    rule_followed_rate: float
    pnl_with_rules_followed: float
    pnl_with_rules_broken: float
    avg_r_with_rules_followed: float
    avg_r_with_rules_broken: float
    win_rate_with_rules_followed: float
    win_rate_with_rules_broken: float
    violation_breakdown: list[ViolationImpact] = field(default_factory=list)


@dataclass(frozen=True)
class SessionPerformance:
    """Performance of trades tagged with one market session."""

    session: MarketSession
    total_trades: int
    win_rate: float
    avg_r: float
    total_pnl: float
    expectancy: float
    best_session: bool = False
    worst_session: bool = False


@dataclass(frozen=True)
class TimePerformance:
    """Performance of trades entered during one hour of the day."""

    hour: int
    display_hour: str
    total_trades: int
    win_rate: float
    avg_r: float
    total_pnl: float


@dataclass(frozen=True)
class MarketConditionPerformance:
    """Performance of trades tagged with one market condition."""

    condition: MarketCondition
    total_trades: int
    win_rate: float
    avg_r: float
    total_pnl: float
    expectancy: float


@dataclass(frozen=True)
class LossStreakAlert:
    """Loss-streak and tilt status.

    Attributes:
        current_streak: Consecutive losses ending at the latest trade.
        max_streak: Longest run of consecutive losses.
        daily_loss_r: R lost on today's losing trades.
        daily_loss_limit: Configured daily R loss limit.
        is_on_tilt: Streak or daily limit breached.
        alerts: Human-readable alerts, possibly several.
        recommendation: Single tiered recommendation.
    """

    current_streak: int
    max_streak: int
    daily_loss_r: float
    daily_loss_limit: float
    is_on_tilt: bool
    alerts: list[str] = field(default_factory=list)
    recommendation: str = ""


@dataclass(frozen=True)
class DrawdownPeriod:
    """A closed peak-to-recovery drawdown period."""

    start_date: date
    end_date: date
    drawdown_amount: float
    drawdown_r: float
    trades_in_period: int
    recovery_trades: int
    caused_by_setups: list[str] = field(default_factory=list)
    caused_by_sessions: list[MarketSession] = field(default_factory=list)


@dataclass(frozen=True)
class DrawdownAnalysis:
    """Equity-curve drawdown statistics."""

    max_drawdown: float
    max_drawdown_r: float
    current_drawdown: float
    drawdown_periods: list[DrawdownPeriod] = field(default_factory=list)
    structural_weaknesses: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class EquityPoint:
    """Cumulative base-currency balance after a trade."""

    trade_date: date
    balance: float


@dataclass(frozen=True)
class AccountStats:
    """Headline account statistics."""

    total_trades: int
    win_rate: float
    total_pnl: float
    average_r: float
    max_drawdown: float
    best_setup: str
    worst_setup: str


@dataclass(frozen=True)
class EmotionImpact:
    """Performance of trades taken in one emotional state."""

    emotion: EmotionTag
    trade_count: int
    total_pnl: float
    avg_pnl: float
    win_rate: float
    avg_r: float
    consistency: float


@dataclass(frozen=True)
class MistakeImpact:
    """Cost of trades tagged with one post-trade mistake."""

    mistake: MistakeTag
    trade_count: int
    total_pnl: float
    avg_pnl: float
    win_rate: float
    avg_r: float


@dataclass(frozen=True)
class AnalyticsSummary:
    """Every analytics result for one trade collection plus insights."""

    expectancy: ExpectancyResult
    r_multiple_stats: RMultipleStats
    setup_scores: list[SetupQualityScore]
    rule_break_analysis: RuleBreakAnalysis
    session_performance: list[SessionPerformance]
    time_performance: list[TimePerformance]
    loss_streak_alert: LossStreakAlert
    drawdown_analysis: DrawdownAnalysis
    market_condition_performance: list[MarketConditionPerformance]
    key_insights: list[str] = field(default_factory=list)
    emotion_impact: list[EmotionImpact] = field(default_factory=list)
    mistake_impact: list[MistakeImpact] = field(default_factory=list)
    emotional_insights: list[str] = field(default_factory=list)
