"""Tests for HistoricalRateLookup."""

from datetime import date
from decimal import Decimal

import pytest

from equity_award_cgt.domain.market_data import ExchangeRate
from equity_award_cgt.domain.value_objects import Currency, Money
from equity_award_cgt.exceptions import MissingExchangeRateError
from equity_award_cgt.services.currency import HistoricalRateLookup


@pytest.fixture
def lookup() -> HistoricalRateLookup:
    return HistoricalRateLookup.from_pairs(
        [
            (date(2003, 12, 1), Decimal("0.581870")),
            (date(2003, 12, 5), Decimal("0.577000")),
        ]
    )


class TestRateOnOrBefore:
    def test_exact_date(self, lookup: HistoricalRateLookup) -> None:
        assert lookup.rate_to_reporting_currency_on_or_before(
            date(2003, 12, 1)
        ) == Decimal("0.581870")

    def test_weekend_uses_previous_trading_day(
        self, lookup: HistoricalRateLookup
    ) -> None:
        assert lookup.rate_to_reporting_currency_on_or_before(
            date(2003, 12, 7)
        ) == Decimal("0.577000")

    def test_before_earliest_date_is_absent(self, lookup: HistoricalRateLookup) -> None:
        assert lookup.rate_to_reporting_currency_on_or_before(date(1900, 1, 1)) is None


class TestConvert:
    def test_converts_to_reporting_currency(self, lookup: HistoricalRateLookup) -> None:
        converted = lookup.convert(Money(Decimal("100"), "USD"), date(2003, 12, 1))

        assert converted == Money(Decimal("58.1870"), "GBP")

    def test_reporting_currency_is_unchanged(
        self, lookup: HistoricalRateLookup
    ) -> None:
        amount = Money(Decimal("100"), "GBP")

        assert lookup.convert(amount, date(1900, 1, 1)) is amount

    def test_missing_rate_raises(self, lookup: HistoricalRateLookup) -> None:
        with pytest.raises(MissingExchangeRateError) as exc_info:
            lookup.convert(Money(Decimal("1"), "USD"), date(1900, 1, 1))

        assert exc_info.value.context["from_currency"] == "USD"
        assert exc_info.value.context["to_currency"] == "GBP"
        assert exc_info.value.as_of == date(1900, 1, 1)

    def test_unsupported_currency_raises(self, lookup: HistoricalRateLookup) -> None:
        with pytest.raises(ValueError, match="only supports USD/GBP"):
            lookup.convert(Money(Decimal("1"), "EUR"), date(2003, 12, 1))


class TestConstruction:
    def test_rejects_rates_for_another_pair(self) -> None:
        rate = ExchangeRate(
            from_currency="EUR",
            to_currency="GBP",
            rate=Decimal("0.85"),
            effective_date=date(2021, 1, 1),
        )

        with pytest.raises(ValueError, match="Expected USD/GBP"):
            HistoricalRateLookup([rate])

    def test_custom_pair(self) -> None:
        lookup = HistoricalRateLookup.from_pairs(
            [(date(2021, 1, 1), Decimal("0.9"))],
            from_currency="usd",
            reporting_currency=Currency.EUR,
        )

        assert lookup.from_currency == Currency.USD
        assert lookup.reporting_currency == Currency.EUR
        assert lookup.convert(
            Money(Decimal("10"), "USD"), date(2021, 1, 2)
        ) == Money(Decimal("9"), "EUR")

    def test_exchange_rate_must_be_positive(self) -> None:
        with pytest.raises(ValueError):
            ExchangeRate(
                from_currency="USD",
                to_currency="GBP",
                rate=Decimal("0"),
                effective_date=date(2021, 1, 1),
            )
