# src/journal/trade_builder.py
"""Ingestion boundary: turns raw journal input into normalized trades."""
import logging
import re
import uuid
from datetime import date

from pydantic import BaseModel, Field, field_validator

from src.journal.currency import BaseCurrencyNormalizer
from src.journal.models import (
    Direction,
    EmotionTag,
    MarketCondition,
    MarketSession,
    MistakeTag,
    RuleViolation,
    Trade,
    TradeType,
)

logger = logging.getLogger(__name__)

_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class TradeValidationError(ValueError):
    """Raised when a trade violates the journal's data invariants."""


def is_valid_time(value: str) -> bool:
    """Check a 24h "HH:MM" time string."""
    return bool(_TIME_PATTERN.match(value))


def calculate_pnl(
    entry_price: float,
    exit_price: float,
    quantity: float,
    direction: Direction,
    fees: float = 0.0,
) -> float:
    """Calculate net P&L for a priced trade.

    Args:
        entry_price: Entry price.
        exit_price: Exit price.
        quantity: Position size.
        direction: Buy profits when exit > entry, Sell when exit < entry.
        fees: Total charges deducted from gross P&L.

    Returns:
        Net P&L after fees.
    """
    if direction == Direction.BUY:
        gross_pnl = (exit_price - entry_price) * quantity
    else:
        gross_pnl = (entry_price - exit_price) * quantity
    return gross_pnl - fees


def calculate_r_factor(
    pnl: float, stop_loss: float, entry_price: float, quantity: float
) -> float:
    """Express P&L as a multiple of the initial risk.

    Args:
        pnl: Net P&L.
        stop_loss: Stop-loss price.
        entry_price: Entry price.
        quantity: Position size.

    Returns:
        Signed R-multiple, or 0.0 when no risk was defined.
    """
    risk = abs(entry_price - stop_loss) * quantity
    if risk == 0:
        return 0.0
    return pnl / risk


def align_r_sign(r_factor: float, pnl: float) -> float:
    """Force the R-multiple sign to agree with the P&L sign."""
    if pnl < 0 and r_factor > 0:
        return -abs(r_factor)
    if pnl > 0 and r_factor < 0:
        return abs(r_factor)
    return r_factor


def validate_trade(trade: Trade) -> None:
    """Check a trade against the journal invariants.

    Args:
        trade: The trade to check.

    Raises:
        TradeValidationError: If quantity is not positive, the R-multiple sign
            disagrees with P&L, or a time field is malformed.
    """
    if trade.quantity <= 0:
        raise TradeValidationError(
            f"Trade {trade.trade_id}: quantity must be > 0, got {trade.quantity}"
        )
    if (trade.pnl < 0 < trade.r_factor) or (trade.r_factor < 0 < trade.pnl):
        raise TradeValidationError(
            f"Trade {trade.trade_id}: R-multiple {trade.r_factor} disagrees with P&L {trade.pnl}"
        )
    for name in ("entry_time", "exit_time"):
        value = getattr(trade, name)
        if value is not None and not is_valid_time(value):
            raise TradeValidationError(
                f"Trade {trade.trade_id}: {name} must be HH:MM, got {value!r}"
            )


class TradeInput(BaseModel):
    """Raw trade as entered in the journal form.

    ``manual_profit`` is the gross P&L in the trade currency; charges are
    deducted when the trade is built.
    """

    trade_date: date
    symbol: str
    setup_name: str
    trade_type: TradeType = TradeType.INTRADAY
    direction: Direction = Direction.BUY
    stop_loss: float
    quantity: float = Field(gt=0)
    manual_profit: float = 0.0
    currency: str = "INR"

    entry_price: float | None = None
    exit_price: float | None = None
    brokerage: float = Field(default=0.0, ge=0)
    exchange_charges: float = Field(default=0.0, ge=0)
    taxes: float = Field(default=0.0, ge=0)
    exit_r_factor: float = 0.0

    entry_time: str | None = None
    exit_time: str | None = None
    timeframe: str | None = None

    rule_followed: bool = True
    rule_violations: list[RuleViolation] = Field(default_factory=list)

    session: MarketSession | None = None
    market_condition: MarketCondition | None = None
    emotion_entry: EmotionTag | None = None
    emotion_exit: EmotionTag | None = None
    mistake_tag: MistakeTag | None = None
    planned_r_target: float | None = None
    notes: str | None = None

    @field_validator("symbol", "currency")
    @classmethod
    def upper_case(cls, v: str) -> str:
        """Symbols and currency codes are stored upper case."""
        return v.strip().upper()

    @field_validator("entry_time", "exit_time")
    @classmethod
    def validate_time(cls, v: str | None) -> str | None:
        """Times must be 24h HH:MM."""
        if v is None or v == "":
            return None
        if not is_valid_time(v):
            raise ValueError(f"Invalid time: {v}. Must be HH:MM (24h)")
        return v

    @property
    def total_fees(self) -> float:
        """Sum of the charge breakdown."""
        return self.brokerage + self.exchange_charges + self.taxes


class TradeBuilder:
    """Builds normalized, immutable trades from journal input.

    Applies the creation-time rules the analytics rely on: P&L is net of
    charges, the R-multiple sign agrees with P&L, and the base-currency P&L is
    snapshotted with the rate known at close.
    """

    def __init__(self, normalizer: BaseCurrencyNormalizer | None = None) -> None:
        """Initialize the builder.

        Args:
            normalizer: Source of the exchange-rate snapshot.
        """
        self._normalizer = normalizer or BaseCurrencyNormalizer()

    def build(self, form: TradeInput, trade_id: str | None = None) -> Trade:
        """Create a trade from journal input.

        Args:
            form: Validated journal input.
            trade_id: Identifier to use; a random one is generated when None.

        Returns:
            A Trade satisfying validate_trade.
        """
        fees = form.total_fees
        pnl = form.manual_profit - fees
        r_factor = align_r_sign(form.exit_r_factor, pnl)
        if r_factor != form.exit_r_factor:
            logger.debug(
                f"Corrected R-multiple sign for {form.symbol}: {form.exit_r_factor} -> {r_factor}"
            )

        exchange_rate = self._normalizer.rate_for(form.currency)
        pnl_base = self._normalizer.convert(pnl, form.currency, exchange_rate)

        trade = Trade(
            trade_id=trade_id or uuid.uuid4().hex,
            trade_date=form.trade_date,
            symbol=form.symbol,
            setup_name=form.setup_name,
            trade_type=form.trade_type,
            direction=form.direction,
            stop_loss=form.stop_loss,
            quantity=form.quantity,
            pnl=pnl,
            currency=form.currency,
            pnl_base=pnl_base,
            exchange_rate=exchange_rate,
            r_factor=r_factor,
            entry_price=form.entry_price,
            exit_price=form.exit_price,
            fees=fees,
            entry_time=form.entry_time,
            exit_time=form.exit_time,
            timeframe=form.timeframe,
            rule_followed=form.rule_followed,
            rule_violations=frozenset(form.rule_violations),
            session=form.session,
            market_condition=form.market_condition,
            emotion_entry=form.emotion_entry,
            emotion_exit=form.emotion_exit,
            mistake_tag=form.mistake_tag,
            planned_r_target=form.planned_r_target,
            notes=form.notes,
        )
        validate_trade(trade)
        return trade
