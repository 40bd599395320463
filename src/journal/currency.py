# src/journal/currency.py
"""Base-currency normalization for multi-currency trade P&L."""
from src.journal.models import Trade
from src.journal.settings import DEFAULT_BASE_CURRENCY, DEFAULT_EXCHANGE_RATES


CURRENCY_SYMBOLS: dict[str, str] = {
    "INR": "₹",
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "AUD": "A$",
    "CAD": "C$",
}

# Currencies whose symbol is written after the amount
_SUFFIX_SYMBOL_CURRENCIES = {"JPY", "AUD", "CAD"}


def format_currency(value: float, currency: str, decimals: int = 2) -> str:
    """Format a value with the currency's symbol.

    Args:
        value: Amount to format.
        currency: Currency code; unknown codes fall back to the code itself.
        decimals: Number of decimal places.

    Returns:
        Formatted string, e.g. "$12.50" or "1200.00 ¥".
    """
    code = currency.upper()
    symbol = CURRENCY_SYMBOLS.get(code, code)
    formatted = f"{value:.{decimals}f}"
    if code in _SUFFIX_SYMBOL_CURRENCIES:
        return f"{formatted} {symbol}"
    return f"{symbol}{formatted}"


class BaseCurrencyNormalizer:
    """Converts trade P&L into the single reporting currency.

    A stored ``pnl_base`` is the snapshot taken when the trade closed and is
    always returned as-is. Only trades without a snapshot are converted with
    the static default table; unknown currencies convert at 1.

    Attributes:
        base_currency: Reporting currency code.
    """

    def __init__(
        self,
        exchange_rates: dict[str, float] | None = None,
        base_currency: str = DEFAULT_BASE_CURRENCY,
    ) -> None:
        """Initialize the normalizer.

        Args:
            exchange_rates: Rate per currency code into the base currency.
                Defaults to DEFAULT_EXCHANGE_RATES.
            base_currency: Reporting currency code.
        """
        rates = exchange_rates if exchange_rates is not None else DEFAULT_EXCHANGE_RATES
        self._rates = {code.upper(): rate for code, rate in rates.items()}
        self.base_currency = base_currency.upper()

    def rate_for(self, currency: str | None) -> float:
        """Get the default rate for a currency code (1 when unknown)."""
        if not currency:
            return 1.0
        return self._rates.get(currency.upper(), 1.0)

    def convert(
        self, pnl: float, currency: str | None, exchange_rate: float | None = None
    ) -> float:
        """Convert an amount to the base currency.

        Args:
            pnl: Amount in the source currency.
            currency: Source currency code.
            exchange_rate: Explicit rate; the default table is used when None.

        Returns:
            Amount in the base currency.
        """
        rate = exchange_rate if exchange_rate is not None else self.rate_for(currency)
        return pnl * rate

    def base_pnl(self, trade: Trade) -> float:
        """Get a trade's P&L in the base currency.

        Args:
            trade: The trade to normalize.

        Returns:
            The stored pnl_base snapshot, or pnl converted at the default rate.
        """
        if trade.pnl_base is not None:
            return trade.pnl_base
        return self.convert(trade.pnl, trade.currency)

    def total_base_pnl(self, trades: list[Trade]) -> float:
        """Sum base-currency P&L over trades."""
        return sum(self.base_pnl(t) for t in trades)

    def format(self, value: float, decimals: int = 2) -> str:
        """Format an amount in the base currency."""
        return format_currency(value, self.base_currency, decimals)
