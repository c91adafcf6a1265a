from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal

from equity_award_cgt.domain.disposals import CGTResult, DisposalRequest
from equity_award_cgt.domain.lots import AcquisitionLot
from equity_award_cgt.domain.value_objects import Currency, Money
from equity_award_cgt.exceptions import MissingExchangeRateError


class SecurityPriceLookup(ABC):
    @abstractmethod
    def price_on_or_before(self, symbol: str, as_of: date) -> Money | None:
        """Price on `as_of`, else the closest earlier price, else None."""
        pass


class CurrencyRateLookup(ABC):
    """Converts amounts from one foreign currency into the reporting currency."""

    @property
    @abstractmethod
    def from_currency(self) -> Currency:
        pass

    @property
    @abstractmethod
    def reporting_currency(self) -> Currency:
        pass

    @abstractmethod
    def rate_to_reporting_currency_on_or_before(self, as_of: date) -> Decimal | None:
        """Rate on `as_of`, else the closest earlier rate, else None."""
        pass

    def convert(self, amount: Money, as_of: date) -> Money:
        currency = Currency(amount.currency)
        if currency == self.reporting_currency:
            return amount
        if currency != self.from_currency:
            raise ValueError(
                f"Cannot convert {currency.value}: lookup only supports "
                f"{self.from_currency.value}/{self.reporting_currency.value}"
            )

        rate = self.rate_to_reporting_currency_on_or_before(as_of)
        if rate is None:
            raise MissingExchangeRateError(
                self.from_currency.value, self.reporting_currency.value, as_of
            )
        return Money(amount.amount * rate, self.reporting_currency)


class LotSource(ABC):
    @abstractmethod
    def load(self) -> list[AcquisitionLot]:
        """Return every acquisition lot held by the source."""
        pass


class CGTService(ABC):
    @abstractmethod
    def calculate(
        self, symbol: str, quantity: Decimal, sell_date: date
    ) -> CGTResult:
        pass

    def calculate_request(self, request: DisposalRequest) -> CGTResult:
        return self.calculate(request.symbol, request.quantity, request.sell_date)
