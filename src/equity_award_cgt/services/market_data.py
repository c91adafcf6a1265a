"""Download of daily price and exchange rate histories from Yahoo Finance."""

from datetime import date
from decimal import Decimal
from types import TracebackType

import httpx

from equity_award_cgt.domain.market_data import (
    ExchangeRate,
    MarketDataSource,
    SecurityPrice,
)
from equity_award_cgt.domain.value_objects import Currency, Money
from equity_award_cgt.exceptions import MarketDataFetchError
from equity_award_cgt.logging_config import get_logger
from equity_award_cgt.parsers.yahoo_history import YahooHistoryParser
from equity_award_cgt.services.currency import HistoricalRateLookup
from equity_award_cgt.services.prices import HistoricalPriceLookup

logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://query1.finance.yahoo.com/v7/finance/download"

HISTORY_PARAMS = {
    "period1": "0",
    "period2": "9999999999",
    "interval": "1d",
    "events": "history",
    "includeAdjustedClose": "true",
}


def fx_ticker(from_currency: Currency, to_currency: Currency) -> str:
    """Yahoo ticker quoting `to_currency` per unit of `from_currency`."""
    return f"{from_currency.value}{to_currency.value}=X"


class YahooFinanceClient:
    """Fetches full daily histories and wraps them in lookups.

    An httpx.Client can be injected; otherwise one is created and closed
    with this client.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        client: httpx.Client | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client if client is not None else httpx.Client(timeout=timeout)
        self._parser = YahooHistoryParser()

    def __enter__(self) -> "YahooFinanceClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def fetch_history_csv(self, ticker: str) -> str:
        url = f"{self._base_url}/{ticker}"
        try:
            response = self._client.get(url, params=HISTORY_PARAMS)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise MarketDataFetchError(
                ticker, f"HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise MarketDataFetchError(ticker, str(e) or type(e).__name__) from e

        logger.info("market_data_fetched", ticker=ticker, bytes=len(response.content))
        return response.text

    def fetch_prices(
        self, symbol: str, currency: Currency = Currency.USD
    ) -> HistoricalPriceLookup:
        history = self._parse(symbol, self.fetch_history_csv(symbol))
        return HistoricalPriceLookup(
            SecurityPrice(
                symbol=symbol,
                price=Money(close, currency),
                price_date=day,
                source=MarketDataSource.YAHOO,
            )
            for day, close in history
        )

    def fetch_rates(
        self,
        from_currency: Currency = Currency.USD,
        reporting_currency: Currency = Currency.GBP,
    ) -> HistoricalRateLookup:
        ticker = fx_ticker(from_currency, reporting_currency)
        history = self._parse(ticker, self.fetch_history_csv(ticker))
        return HistoricalRateLookup(
            (
                ExchangeRate(
                    from_currency=from_currency.value,
                    to_currency=reporting_currency.value,
                    rate=close,
                    effective_date=day,
                    source=MarketDataSource.YAHOO,
                )
                for day, close in history
                if close > 0
            ),
            from_currency=from_currency,
            reporting_currency=reporting_currency,
        )

    def _parse(self, ticker: str, text: str) -> list[tuple[date, Decimal]]:
        try:
            return self._parser.parse_text(text)
        except ValueError as e:
            raise MarketDataFetchError(ticker, str(e)) from e
