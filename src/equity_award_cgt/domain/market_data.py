"""Market data observations: exchange rates and security prices."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum

from equity_award_cgt.domain.value_objects import Money


class MarketDataSource(str, Enum):
    """Source of a market data observation."""

    MANUAL = "manual"
    YAHOO = "yahoo"


@dataclass(frozen=True, slots=True)
class ExchangeRate:
    """Immutable exchange rate value object.

    Represents a conversion rate between two currencies on a specific date:
    one unit of from_currency buys `rate` units of to_currency.
    """

    from_currency: str
    to_currency: str
    rate: Decimal
    effective_date: date
    source: MarketDataSource = MarketDataSource.MANUAL

    def __post_init__(self) -> None:
        """Validate and coerce rate to Decimal."""
        if not isinstance(self.rate, Decimal):
            object.__setattr__(self, "rate", Decimal(str(self.rate)))
        if self.rate <= 0:
            raise ValueError(f"Exchange rate must be positive, got {self.rate}")

    @property
    def pair(self) -> str:
        """Return currency pair string like 'USD/GBP'."""
        return f"{self.from_currency}/{self.to_currency}"


@dataclass(frozen=True, slots=True)
class SecurityPrice:
    """Closing price of a security on a trading day."""

    symbol: str
    price: Money
    price_date: date
    source: MarketDataSource = MarketDataSource.MANUAL

    def __post_init__(self) -> None:
        if self.price.is_negative:
            raise ValueError(f"Price must not be negative, got {self.price.amount}")
