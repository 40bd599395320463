# src/journal/settings.py
"""Settings for the journal module."""
from pydantic import BaseModel, Field, field_validator, model_validator


DEFAULT_BASE_CURRENCY = "INR"

# Static conversion table to the base currency. Not a live feed: historical
# trades keep the rate captured at close.
DEFAULT_EXCHANGE_RATES: dict[str, float] = {
    "INR": 1.0,
    "USD": 83.5,
    "EUR": 90.2,
    "GBP": 105.8,
    "JPY": 0.56,
    "AUD": 54.3,
    "CAD": 61.2,
}


class JournalSettings(BaseModel):
    """Configuration settings for the trading journal.

    Attributes:
        base_currency: Reporting currency all P&L is normalized into.
        exchange_rates: Default rate per currency code into the base currency.
    """

    base_currency: str = DEFAULT_BASE_CURRENCY
    exchange_rates: dict[str, float] = Field(
        default_factory=lambda: dict(DEFAULT_EXCHANGE_RATES)
    )

    @field_validator("base_currency")
    @classmethod
    def validate_base_currency(cls, v: str) -> str:
        """Normalize the base currency code to upper case."""
        code = v.strip().upper()
        if not code:
            raise ValueError("base_currency must not be empty")
        return code

    @field_validator("exchange_rates")
    @classmethod
    def validate_exchange_rates(cls, v: dict[str, float]) -> dict[str, float]:
        """Upper-case currency codes and reject non-positive rates."""
        rates: dict[str, float] = {}
        for code, rate in v.items():
            if rate <= 0:
                raise ValueError(f"Invalid exchange rate for {code}: {rate}. Must be > 0")
            rates[code.strip().upper()] = float(rate)
        return rates

    @model_validator(mode="after")
    def validate_base_rate(self) -> "JournalSettings":
        """The base currency converts to itself at exactly 1."""
        rate = self.exchange_rates.get(self.base_currency)
        if rate is None:
            self.exchange_rates[self.base_currency] = 1.0
        elif rate != 1.0:
            raise ValueError(
                f"Exchange rate for base currency {self.base_currency} must be 1, got {rate}"
            )
        return self
