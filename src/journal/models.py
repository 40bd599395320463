# src/journal/models.py
"""Data models for the trading journal."""
from dataclasses import dataclass, field
from datetime import date
from enum import Enum


class TradeType(str, Enum):
    """Holding style of a trade."""

    INTRADAY = "Intraday"
    SWING = "Swing"
    SCALPING = "Scalping"
    POSITIONAL = "Positional"


class Direction(str, Enum):
    """Position direction."""

    BUY = "Buy"
    SELL = "Sell"


class MarketSession(str, Enum):
    """Global market session a trade was taken in (UTC windows)."""

    ASIA = "Asia"
    LONDON = "London"
    NEW_YORK = "NewYork"
    OVERLAP_LONDON_NY = "Overlap_London_NY"
    OVERLAP_ASIA_LONDON = "Overlap_Asia_London"
    OFF_HOURS = "Off_Hours"


class MarketCondition(str, Enum):
    """Market regime at the time of the trade."""

    TRENDING = "Trending"
    RANGING = "Ranging"
    HIGH_VOLATILITY = "High_Volatility"
    LOW_VOLATILITY = "Low_Volatility"
    NEWS_DAY = "News_Day"
    NORMAL = "Normal"


class RuleViolation(str, Enum):
    """Discipline violations a trade can be tagged with."""

    NONE = "None"
    EARLY_ENTRY = "Early_Entry"
    LATE_ENTRY = "Late_Entry"
    SL_MOVED = "SL_Moved"
    TP_MOVED = "TP_Moved"
    OVER_RISKED = "Over_Risked"
    UNDER_RISKED = "Under_Risked"
    REVENGE_TRADE = "Revenge_Trade"
    FOMO_ENTRY = "FOMO_Entry"
    NO_SETUP = "No_Setup"
    MULTIPLE = "Multiple"


class EmotionTag(str, Enum):
    """Emotional state at entry or exit."""

    CALM = "Calm"
    CONFIDENT = "Confident"
    ANXIOUS = "Anxious"
    FEARFUL = "Fearful"
    GREEDY = "Greedy"
    FRUSTRATED = "Frustrated"
    REVENGE = "Revenge"
    FOMO = "FOMO"
    NEUTRAL = "Neutral"


class MistakeTag(str, Enum):
    """Post-trade mistake classification."""

    OVERTRADING = "Overtrading"
    EARLY_EXIT = "Early exit"
    LATE_ENTRY = "Late entry"
    SL_HUNT_FEAR = "SL hunt fear"
    GREED = "Greed"
    GOOD_LOSS = "No mistake (good loss)"


class TradeOutcome(str, Enum):
    """Win/loss classification derived from net P&L."""

    WIN = "W"
    LOSS = "L"
    BREAK_EVEN = "BE"

    @classmethod
    def from_pnl(cls, pnl: float) -> "TradeOutcome":
        """Get the outcome for a net P&L value.

        Args:
            pnl: Net profit/loss of the trade.

        Returns:
            TradeOutcome:
                - pnl > 0 -> WIN
                - pnl < 0 -> LOSS
                - pnl == 0 -> BREAK_EVEN
        """
        if pnl > 0:
            return cls.WIN
        elif pnl < 0:
            return cls.LOSS
        else:
            return cls.BREAK_EVEN


@dataclass(frozen=True)
class Trade:
    """A single closed trade in the journal.

    Attributes:
        trade_id: Unique identifier.
        trade_date: Calendar date the trade was taken.
        symbol: Instrument symbol.
        setup_name: Free-form setup label.
        trade_type: Holding style.
        direction: Buy or Sell.
        stop_loss: Stop-loss price.
        quantity: Position size (> 0).
        pnl: Net P&L in the trade's own currency (after fees).
        currency: Currency code of the trade.
        pnl_base: P&L in the base currency, snapshotted at close.
        exchange_rate: Rate used for the pnl_base snapshot.
        r_factor: Signed R-multiple; sign agrees with pnl.
        rule_followed: Whether the plan was followed (None if not recorded).
        rule_violations: Violation tags recorded for the trade.
    """

    trade_id: str
    trade_date: date
    symbol: str
    setup_name: str
    trade_type: TradeType
    direction: Direction
    stop_loss: float
    quantity: float
    pnl: float
    currency: str = "INR"
    pnl_base: float | None = None
    exchange_rate: float | None = None
    r_factor: float = 0.0

    # Optional pricing (process-journaling entries may omit them)
    entry_price: float | None = None
    exit_price: float | None = None
    fees: float = 0.0

    # Time of day, 24h "HH:MM"
    entry_time: str | None = None
    exit_time: str | None = None
    timeframe: str | None = None

    # Discipline
    rule_followed: bool | None = None
    rule_violations: frozenset[RuleViolation] = field(default_factory=frozenset)

    # Context tags
    session: MarketSession | None = None
    market_condition: MarketCondition | None = None
    emotion_entry: EmotionTag | None = None
    emotion_exit: EmotionTag | None = None
    mistake_tag: MistakeTag | None = None
    planned_r_target: float | None = None
    notes: str | None = None

    @property
    def outcome(self) -> TradeOutcome:
        """Outcome derived from net P&L."""
        return TradeOutcome.from_pnl(self.pnl)

    @property
    def day_of_week(self) -> str:
        """Weekday name of the trade date."""
        return self.trade_date.strftime("%A")


def chronological(trades: list[Trade]) -> list[Trade]:
    """Return a chronologically sorted copy of trades.

    Orders by trade date, then entry time; trades without an entry time
    sort first within their day. The input list is left untouched.
    """
    return sorted(trades, key=lambda t: (t.trade_date, t.entry_time or ""))
