# src/journal/filters.py
"""Filtering of journal trades by date, tags and performance."""
from dataclasses import dataclass, field
from datetime import date

from src.journal.currency import BaseCurrencyNormalizer
from src.journal.models import (
    EmotionTag,
    MarketSession,
    Trade,
    TradeOutcome,
    TradeType,
)


@dataclass
class TradeFilters:
    """Criteria for selecting trades. Unset criteria match everything.

    Attributes:
        start_date: First date included.
        end_date: Last date included.
        symbols: Allowed symbols.
        setups: Allowed setup names.
        trade_types: Allowed trade types.
        currencies: Allowed currency codes.
        min_pnl: Minimum base-currency P&L.
        max_pnl: Maximum base-currency P&L.
        min_r: Minimum R-multiple.
        max_r: Maximum R-multiple.
        outcomes: Allowed outcomes.
        rule_followed_only: Keep only trades that followed the plan.
        emotions: Emotion tags matched against entry or exit emotion.
        sessions: Allowed market sessions.
        search_text: Case-insensitive text matched in symbol, setup and notes.
    """

    start_date: date | None = None
    end_date: date | None = None
    symbols: list[str] = field(default_factory=list)
    setups: list[str] = field(default_factory=list)
    trade_types: list[TradeType] = field(default_factory=list)
    currencies: list[str] = field(default_factory=list)
    min_pnl: float | None = None
    max_pnl: float | None = None
    min_r: float | None = None
    max_r: float | None = None
    outcomes: list[TradeOutcome] = field(default_factory=list)
    rule_followed_only: bool = False
    emotions: list[EmotionTag] = field(default_factory=list)
    sessions: list[MarketSession] = field(default_factory=list)
    search_text: str | None = None


def _matches(
    trade: Trade, filters: TradeFilters, normalizer: BaseCurrencyNormalizer
) -> bool:
    if filters.start_date and trade.trade_date < filters.start_date:
        return False
    if filters.end_date and trade.trade_date > filters.end_date:
        return False

    if filters.symbols and trade.symbol not in filters.symbols:
        return False
    if filters.setups and trade.setup_name not in filters.setups:
        return False
    if filters.trade_types and trade.trade_type not in filters.trade_types:
        return False
    if filters.currencies and trade.currency.upper() not in {c.upper() for c in filters.currencies}:
        return False

    pnl = normalizer.base_pnl(trade)
    if filters.min_pnl is not None and pnl < filters.min_pnl:
        return False
    if filters.max_pnl is not None and pnl > filters.max_pnl:
        return False
    if filters.min_r is not None and trade.r_factor < filters.min_r:
        return False
    if filters.max_r is not None and trade.r_factor > filters.max_r:
        return False

    if filters.outcomes and trade.outcome not in filters.outcomes:
        return False
    if filters.rule_followed_only and trade.rule_followed is not True:
        return False
    if filters.emotions and not (
        trade.emotion_entry in filters.emotions or trade.emotion_exit in filters.emotions
    ):
        return False
    if filters.sessions and trade.session not in filters.sessions:
        return False

    if filters.search_text:
        needle = filters.search_text.lower()
        haystack = [trade.symbol, trade.setup_name, trade.notes]
        if not any(needle in text.lower() for text in haystack if text):
            return False

    return True


def apply_filters(
    trades: list[Trade],
    filters: TradeFilters,
    normalizer: BaseCurrencyNormalizer | None = None,
) -> list[Trade]:
    """Select the trades matching every set criterion.

    Args:
        trades: Trades to filter.
        filters: Criteria to apply.
        normalizer: Used for P&L range checks in the base currency.

    Returns:
        Matching trades in input order.
    """
    normalizer = normalizer or BaseCurrencyNormalizer()
    return [t for t in trades if _matches(t, filters, normalizer)]
