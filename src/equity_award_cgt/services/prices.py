from collections import defaultdict
from collections.abc import Iterable
from datetime import date
from decimal import Decimal

from equity_award_cgt.domain.market_data import SecurityPrice
from equity_award_cgt.domain.series import DatedSeries
from equity_award_cgt.domain.value_objects import Currency, Money
from equity_award_cgt.services.interfaces import SecurityPriceLookup


class HistoricalPriceLookup(SecurityPriceLookup):
    """In-memory daily closing prices, keyed by symbol."""

    def __init__(self, prices: Iterable[SecurityPrice]) -> None:
        observations: dict[str, list[tuple[date, Money]]] = defaultdict(list)
        for price in prices:
            observations[price.symbol].append((price.price_date, price.price))
        self._series: dict[str, DatedSeries[Money]] = {
            symbol: DatedSeries(points) for symbol, points in observations.items()
        }

    @classmethod
    def from_pairs(
        cls,
        symbol: str,
        pairs: Iterable[tuple[date, Decimal]],
        currency: Currency | str = Currency.USD,
    ) -> "HistoricalPriceLookup":
        return cls(
            SecurityPrice(symbol=symbol, price=Money(price, currency), price_date=day)
            for day, price in pairs
        )

    @property
    def symbols(self) -> list[str]:
        return sorted(self._series)

    def price_on_or_before(self, symbol: str, as_of: date) -> Money | None:
        series = self._series.get(symbol)
        if series is None:
            return None
        return series.on_or_before(as_of)
