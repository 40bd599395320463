# src/analytics/settings.py
"""Settings for the analytics engine."""
from pydantic import BaseModel, Field


class AnalyticsSettings(BaseModel):
    """Thresholds and scales used by the analytics engine.

    Attributes:
        max_streak_threshold: Consecutive losses that put a trader on tilt.
        daily_loss_limit_r: R lost in one day that puts a trader on tilt.
        reduce_size_ratio: Share of the daily limit that triggers the
            reduce-size recommendation.
        drawdown_scale: Base-currency drawdown per unit of setup-score penalty.
        max_drawdown_periods: Recent closed drawdown periods reported.
        keep_score_threshold: Setup score above which a setup is kept.
        avoid_expectancy_r: Setup expectancy (R) below which it is avoided.
        strong_expectancy_r: Expectancy (R) reported as strong.
        big_winner_min_percent: Share of 2R+ trades below which the
            "let winners run" insight fires.
        big_winner_min_win_rate: Win rate above which that insight applies.
    """

    max_streak_threshold: int = Field(default=3, ge=1, le=20)
    daily_loss_limit_r: float = Field(default=3.0, gt=0)
    reduce_size_ratio: float = Field(default=0.7, gt=0, le=1.0)

    drawdown_scale: float = Field(default=1000.0, gt=0)
    max_drawdown_periods: int = Field(default=5, ge=0, le=100)

    keep_score_threshold: float = Field(default=0.5, ge=0)
    avoid_expectancy_r: float = Field(default=-0.2, le=0)

    strong_expectancy_r: float = Field(default=0.3, ge=0)
    big_winner_min_percent: float = Field(default=20.0, ge=0, le=100)
    big_winner_min_win_rate: float = Field(default=50.0, ge=0, le=100)
