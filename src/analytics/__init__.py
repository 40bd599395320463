"""Analytics module for journal performance metrics."""

from .account_stats import AccountStatsCalculator
from .drawdown import DrawdownAnalyzer
from .emotion_impact import EmotionImpactAnalyzer
from .engine import AnalyticsEngine
from .expectancy import ExpectancyCalculator
from .loss_streak import LossStreakDetector
from .market_conditions import MarketConditionAnalyzer
from .models import (
    AnalyticsSummary,
    EmotionImpact,
    ExpectancyInterpretation,
    ExpectancyResult,
    MistakeImpact,
    RMultipleStats,
    SetupQualityScore,
    SetupRecommendation,
)
from .period_performance import PeriodPerformanceAnalyzer
from .r_multiple import RMultipleAnalyzer
from .rule_breaks import RuleBreakAnalyzer
from .session_analyzer import SessionAnalyzer, TimeOfDayAnalyzer
from .settings import AnalyticsSettings
from .setup_scorer import SetupScorer

__all__ = [
    "AccountStatsCalculator",
    "AnalyticsEngine",
    "AnalyticsSettings",
    "AnalyticsSummary",
    "DrawdownAnalyzer",
    "EmotionImpact",
    "EmotionImpactAnalyzer",
    "ExpectancyCalculator",
    "ExpectancyInterpretation",
    "ExpectancyResult",
    "LossStreakDetector",
    "MarketConditionAnalyzer",
    "MistakeImpact",
    "PeriodPerformanceAnalyzer",
    "RMultipleAnalyzer",
    "RMultipleStats",
    "RuleBreakAnalyzer",
    "SessionAnalyzer",
    "SetupQualityScore",
    "SetupRecommendation",
    "SetupScorer",
    "TimeOfDayAnalyzer",
]
