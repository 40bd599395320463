# src/analytics/loss_streak.py
"""Loss-streak and tilt detection."""
import logging
from datetime import date

from src.analytics.models import LossStreakAlert
from src.journal.models import Trade, chronological

logger = logging.getLogger(__name__)

STOP_TRADING = "STOP TRADING. Take a break, review your trades, and return tomorrow."
REDUCE_SIZE = "Reduce position size or take a short break before next trade."
NORMAL = "Trading conditions normal. Continue with your plan."


class LossStreakDetector:
    """Detects loss streaks and daily R losses that signal tilt.

    Attributes:
        max_streak_threshold: Consecutive losses that trigger tilt.
        daily_loss_limit_r: R lost today that triggers tilt.
        reduce_size_ratio: Fraction of the daily limit that triggers the
            reduce-size recommendation.
    """

    def __init__(
        self,
        max_streak_threshold: int = 3,
        daily_loss_limit_r: float = 3.0,
        reduce_size_ratio: float = 0.7,
    ) -> None:
        """Initialize the detector.

        Args:
            max_streak_threshold: Consecutive losses that trigger tilt.
            daily_loss_limit_r: Daily R loss limit.
            reduce_size_ratio: Share of the daily limit for the softer warning.
        """
        self.max_streak_threshold = max_streak_threshold
        self.daily_loss_limit_r = daily_loss_limit_r
        self.reduce_size_ratio = reduce_size_ratio

    def detect(self, trades: list[Trade], today: date | None = None) -> LossStreakAlert:
        """Evaluate loss streaks and today's losses.

        Args:
            trades: Trades in any order.
            today: The trading day to evaluate; defaults to date.today().

        Returns:
            LossStreakAlert with streaks, tilt status, alerts and recommendation.
        """
        today = today or date.today()
        ordered = chronological(trades)

        current_streak = self._current_streak(ordered)
        max_streak = self._max_streak(ordered)
        daily_loss_r = sum(
            abs(t.r_factor) for t in ordered if t.trade_date == today and t.pnl < 0
        )

        streak_breached = current_streak >= self.max_streak_threshold
        daily_breached = daily_loss_r >= self.daily_loss_limit_r
        is_on_tilt = streak_breached or daily_breached

        alerts = []
        if streak_breached:
            alerts.append(
                f"Warning: {current_streak} consecutive losses. Consider taking a break."
            )
        if daily_breached:
            alerts.append(f"Daily loss limit reached: {daily_loss_r:.1f}R lost today.")
        if 2 <= current_streak < self.max_streak_threshold:
            alerts.append(f"Caution: {current_streak} losses in a row. Stay disciplined.")

        if is_on_tilt:
            recommendation = STOP_TRADING
            logger.warning(
                f"Tilt detected: streak={current_streak}, daily_loss_r={daily_loss_r:.2f}"
            )
        elif (
            current_streak >= 2
            or daily_loss_r >= self.daily_loss_limit_r * self.reduce_size_ratio
        ):
            recommendation = REDUCE_SIZE
        else:
            recommendation = NORMAL

        return LossStreakAlert(
            current_streak=current_streak,
            max_streak=max_streak,
            daily_loss_r=round(daily_loss_r, 2),
            daily_loss_limit=self.daily_loss_limit_r,
            is_on_tilt=is_on_tilt,
            alerts=alerts,
            recommendation=recommendation,
        )

    def _current_streak(self, ordered: list[Trade]) -> int:
        """Consecutive losses ending at the most recent trade."""
        streak = 0
        for trade in reversed(ordered):
            if trade.pnl >= 0:
                break
            streak += 1
        return streak

    def _max_streak(self, ordered: list[Trade]) -> int:
        """Longest run of consecutive losses."""
        longest = 0
        running = 0
        for trade in ordered:
            if trade.pnl < 0:
                running += 1
                longest = max(longest, running)
            else:
                running = 0
        return longest
