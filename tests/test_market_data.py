"""Tests for YahooFinanceClient using httpx.MockTransport."""

from datetime import date
from decimal import Decimal

import httpx
import pytest

from equity_award_cgt.domain.value_objects import Currency, Money
from equity_award_cgt.exceptions import MarketDataFetchError
from equity_award_cgt.services.market_data import YahooFinanceClient, fx_ticker

GOOG_HISTORY = """\
Date,Open,High,Low,Close,Adj Close,Volume
2004-08-19,2.49,2.59,2.39,2.51,2.499133,897427216
2004-08-20,2.51,2.71,2.50,2.71,2.697639,458857488
"""

FX_HISTORY = """\
Date,Open,High,Low,Close,Adj Close,Volume
2003-12-01,0.58,0.59,0.57,0.581870,0.581870,0
2003-12-05,0.57,0.58,0.57,0.577000,0.577000,0
"""


def make_client(responses: dict[str, httpx.Response], seen: list[httpx.Request]):
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        ticker = request.url.path.rsplit("/", 1)[-1]
        return responses.get(ticker, httpx.Response(404, text="Not Found"))

    http_client = httpx.Client(transport=httpx.MockTransport(handler))
    return YahooFinanceClient(base_url="https://example.test/download", client=http_client)


class TestFxTicker:
    def test_formats_yahoo_fx_ticker(self) -> None:
        assert fx_ticker(Currency.USD, Currency.GBP) == "USDGBP=X"


class TestFetchPrices:
    def test_builds_price_lookup(self) -> None:
        seen: list[httpx.Request] = []
        client = make_client({"GOOG": httpx.Response(200, text=GOOG_HISTORY)}, seen)

        lookup = client.fetch_prices("GOOG")

        assert lookup.price_on_or_before("GOOG", date(2004, 8, 19)) == Money(
            Decimal("2.499133"), "USD"
        )
        assert lookup.price_on_or_before("GOOG", date(1900, 1, 1)) is None
        params = seen[0].url.params
        assert params["period1"] == "0"
        assert params["interval"] == "1d"
        assert params["events"] == "history"

    def test_http_error_raises(self) -> None:
        client = make_client({}, [])

        with pytest.raises(MarketDataFetchError, match="HTTP 404"):
            client.fetch_prices("GOOG")

    def test_transport_error_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = YahooFinanceClient(
            client=httpx.Client(transport=httpx.MockTransport(handler))
        )

        with pytest.raises(MarketDataFetchError, match="connection refused"):
            client.fetch_prices("GOOG")

    def test_malformed_history_raises(self) -> None:
        client = make_client(
            {"GOOG": httpx.Response(200, text="<html>consent</html>\n")}, []
        )

        with pytest.raises(MarketDataFetchError):
            client.fetch_prices("GOOG")


class TestFetchRates:
    def test_builds_rate_lookup(self) -> None:
        seen: list[httpx.Request] = []
        client = make_client({"USDGBP=X": httpx.Response(200, text=FX_HISTORY)}, seen)

        lookup = client.fetch_rates(Currency.USD, Currency.GBP)

        assert lookup.reporting_currency == Currency.GBP
        assert lookup.rate_to_reporting_currency_on_or_before(
            date(2003, 12, 7)
        ) == Decimal("0.577000")
        assert seen[0].url.path.endswith("/USDGBP=X")


class TestClientLifecycle:
    def test_injected_client_is_not_closed(self) -> None:
        http_client = httpx.Client(
            transport=httpx.MockTransport(lambda request: httpx.Response(200))
        )

        with YahooFinanceClient(client=http_client):
            pass

        assert not http_client.is_closed

    def test_owned_client_is_closed(self) -> None:
        client = YahooFinanceClient()
        client.close()

        assert client._client.is_closed
