from collections.abc import Iterable
from datetime import date
from decimal import Decimal

from equity_award_cgt.domain.market_data import ExchangeRate
from equity_award_cgt.domain.series import DatedSeries
from equity_award_cgt.domain.value_objects import Currency
from equity_award_cgt.services.interfaces import CurrencyRateLookup


def _get_currency(currency: Currency | str) -> Currency:
    if isinstance(currency, Currency):
        return currency
    return Currency(currency.upper())


class HistoricalRateLookup(CurrencyRateLookup):
    """In-memory daily rate history for one currency pair."""

    def __init__(
        self,
        rates: Iterable[ExchangeRate],
        from_currency: Currency | str = Currency.USD,
        reporting_currency: Currency | str = Currency.GBP,
    ) -> None:
        self._from_currency = _get_currency(from_currency)
        self._reporting_currency = _get_currency(reporting_currency)
        pair = f"{self._from_currency.value}/{self._reporting_currency.value}"

        observations: list[tuple[date, Decimal]] = []
        for rate in rates:
            if rate.pair != pair:
                raise ValueError(f"Expected {pair} rates, got {rate.pair}")
            observations.append((rate.effective_date, rate.rate))
        self._series: DatedSeries[Decimal] = DatedSeries(observations)

    @classmethod
    def from_pairs(
        cls,
        pairs: Iterable[tuple[date, Decimal]],
        from_currency: Currency | str = Currency.USD,
        reporting_currency: Currency | str = Currency.GBP,
    ) -> "HistoricalRateLookup":
        base = _get_currency(from_currency).value
        target = _get_currency(reporting_currency).value
        return cls(
            (
                ExchangeRate(
                    from_currency=base,
                    to_currency=target,
                    rate=rate,
                    effective_date=effective_date,
                )
                for effective_date, rate in pairs
            ),
            from_currency=from_currency,
            reporting_currency=reporting_currency,
        )

    @property
    def from_currency(self) -> Currency:
        return self._from_currency

    @property
    def reporting_currency(self) -> Currency:
        return self._reporting_currency

    @property
    def series(self) -> DatedSeries[Decimal]:
        return self._series

    def rate_to_reporting_currency_on_or_before(self, as_of: date) -> Decimal | None:
        return self._series.on_or_before(as_of)
