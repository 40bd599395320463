"""Journal module for trade records, ingestion and filtering."""

from .currency import BaseCurrencyNormalizer, format_currency
from .filters import TradeFilters, apply_filters
from .models import (
    Direction,
    EmotionTag,
    MarketCondition,
    MarketSession,
    MistakeTag,
    RuleViolation,
    Trade,
    TradeOutcome,
    TradeType,
    chronological,
)
from .settings import JournalSettings
from .trade_builder import TradeBuilder, TradeInput, TradeValidationError, validate_trade

__all__ = [
    "BaseCurrencyNormalizer",
    "Direction",
    "EmotionTag",
    "JournalSettings",
    "MarketCondition",
    "MarketSession",
    "MistakeTag",
    "RuleViolation",
    "Trade",
    "TradeBuilder",
    "TradeFilters",
    "TradeInput",
    "TradeOutcome",
    "TradeType",
    "TradeValidationError",
    "apply_filters",
    "chronological",
    "format_currency",
    "validate_trade",
]
