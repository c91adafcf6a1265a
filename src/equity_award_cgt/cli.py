"""Command-line interface for the Equity Award CGT calculator."""

import argparse
import json
import sys
from datetime import date
from datetime import datetime as dt
from decimal import Decimal, InvalidOperation

from pydantic import ValidationError as PydanticValidationError

from equity_award_cgt import __version__
from equity_award_cgt.config import Settings, get_settings
from equity_award_cgt.domain.value_objects import Currency, Money, TaxpayerStatus
from equity_award_cgt.exceptions import CGTCalculatorError
from equity_award_cgt.logging_config import configure_logging, get_logger
from equity_award_cgt.parsers.equity_award_center import EquityAwardCenterParser
from equity_award_cgt.parsers.yahoo_history import YahooHistoryParser
from equity_award_cgt.services.cgt import CGTServiceImpl
from equity_award_cgt.services.currency import HistoricalRateLookup
from equity_award_cgt.services.interfaces import CurrencyRateLookup, SecurityPriceLookup
from equity_award_cgt.services.lot_ledger import LotLedger
from equity_award_cgt.services.market_data import YahooFinanceClient
from equity_award_cgt.services.prices import HistoricalPriceLookup

logger = get_logger(__name__)


def _parse_date(value: str) -> date:
    try:
        return dt.strptime(value, "%Y-%m-%d").date()
    except ValueError as e:
        raise argparse.ArgumentTypeError(
            f"invalid date '{value}', expected YYYY-MM-DD"
        ) from e


def _parse_decimal(value: str) -> Decimal:
    try:
        parsed = Decimal(value)
    except InvalidOperation as e:
        raise argparse.ArgumentTypeError(f"invalid number '{value}'") from e
    if not parsed.is_finite():
        raise argparse.ArgumentTypeError(f"invalid number '{value}': must be finite")
    return parsed


def load_market_data(
    args: argparse.Namespace, settings: Settings
) -> tuple[SecurityPriceLookup, CurrencyRateLookup]:
    """Build price and rate lookups from local files or Yahoo Finance."""
    award_currency = settings.award_currency
    reporting_currency = settings.reporting_currency
    parser = YahooHistoryParser()
    prices: SecurityPriceLookup | None = None
    rates: CurrencyRateLookup | None = None

    if args.prices_csv:
        prices = HistoricalPriceLookup.from_pairs(
            args.symbol, parser.parse(args.prices_csv), award_currency
        )
    if args.rates_csv:
        rates = HistoricalRateLookup.from_pairs(
            parser.parse(args.rates_csv), award_currency, reporting_currency
        )
    if prices is not None and rates is not None:
        return prices, rates

    if not settings.yahoo_finance_enabled:
        raise ValueError(
            "Yahoo Finance is disabled: pass --prices-csv and --rates-csv"
        )

    with YahooFinanceClient(
        base_url=settings.yahoo_base_url, timeout=settings.http_timeout_seconds
    ) as client:
        if prices is None:
            prices = client.fetch_prices(args.symbol, award_currency)
        if rates is None:
            rates = client.fetch_rates(award_currency, reporting_currency)
    return prices, rates


def cmd_calculate(args: argparse.Namespace) -> int:
    """Calculate the CGT due on selling shares."""
    settings = get_settings()
    try:
        lots = EquityAwardCenterParser(args.path_to_csv, settings.award_currency).load()
        prices, rates = load_market_data(args, settings)

        status = TaxpayerStatus(args.taxpayer_status)
        exemption = (
            args.annual_exemption_amount
            if args.annual_exemption_amount is not None
            else settings.annual_exemption_amount
        )
        service = CGTServiceImpl(
            ledger=LotLedger(lots),
            price_lookup=prices,
            rate_lookup=rates,
            annual_exemption=Money(exemption, settings.reporting_currency),
            cgt_rate=settings.rate_for(status),
            window_days=settings.bed_and_breakfast_window_days,
        )
        result = service.calculate(args.symbol, args.shares_to_sell, args.sell_date)

    except CGTCalculatorError as e:
        logger.error("calculation_failed", error=e.error_code, **e.context)
        print(f"Error: {e.message}")
        return 1
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(result)
    return 0


def cmd_lots(args: argparse.Namespace) -> int:
    """List acquisition lots read from an Equity Award Center export."""
    settings = get_settings()
    try:
        lots = EquityAwardCenterParser(args.path_to_csv, settings.award_currency).load()
    except CGTCalculatorError as e:
        print(f"Error: {e.message}")
        return 1

    ledger = LotLedger(lots)
    symbols = [args.symbol] if args.symbol else ledger.symbols
    shown = 0
    for symbol in symbols:
        symbol_lots = ledger.lots_for(symbol)
        if not symbol_lots:
            continue
        print(f"{symbol}:")
        print("-" * 50)
        for lot in symbol_lots:
            print(
                f"  {lot.date_acquired}: {lot.quantity_available} shares "
                f"@ {lot.acquisition_price.amount} {Currency(lot.acquisition_price.currency).value}"
            )
        shown += len(symbol_lots)

    if shown == 0:
        print("No lots found")
    return 0


def cmd_version(args: argparse.Namespace) -> int:
    """Show version."""
    print(f"eac {__version__}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="eac",
        description="Equity Award CGT - UK Capital Gains Tax on equity award disposals",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # calculate command
    calculate_parser = subparsers.add_parser(
        "calculate", help="Calculate CGT due on selling shares"
    )
    calculate_parser.add_argument("--symbol", required=True, help="Stock symbol")
    calculate_parser.add_argument(
        "--sell-date", required=True, type=_parse_date, help="Sell date (YYYY-MM-DD)"
    )
    calculate_parser.add_argument(
        "--shares-to-sell",
        required=True,
        type=_parse_decimal,
        help="Number of shares to sell",
    )
    calculate_parser.add_argument(
        "--path-to-csv",
        required=True,
        help="Path to EquityAwardsCenter_EquityDetails CSV file",
    )
    calculate_parser.add_argument(
        "--annual-exemption-amount",
        type=_parse_decimal,
        default=None,
        help="Annual exemption amount (default: EAC_ANNUAL_EXEMPTION_AMOUNT or 12300)",
    )
    calculate_parser.add_argument(
        "--taxpayer-status",
        required=True,
        choices=[s.value for s in TaxpayerStatus],
        help="Taxpayer status (basic rate 10%%, higher rate 20%%)",
    )
    calculate_parser.add_argument(
        "--prices-csv", default=None, help="Yahoo-format price history CSV"
    )
    calculate_parser.add_argument(
        "--rates-csv", default=None, help="Yahoo-format exchange rate history CSV"
    )
    calculate_parser.add_argument(
        "--json", action="store_true", help="Print the result as JSON"
    )
    calculate_parser.set_defaults(func=cmd_calculate)

    # lots command
    lots_parser = subparsers.add_parser("lots", help="List acquisition lots")
    lots_parser.add_argument(
        "--path-to-csv",
        required=True,
        help="Path to EquityAwardsCenter_EquityDetails CSV file",
    )
    lots_parser.add_argument("--symbol", default=None, help="Only show this symbol")
    lots_parser.set_defaults(func=cmd_lots)

    # version command
    version_parser = subparsers.add_parser("version", help="Show version")
    version_parser.set_defaults(func=cmd_version)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        configure_logging(get_settings())
    except PydanticValidationError as e:
        print(f"Error: invalid settings: {e}")
        return 1

    result: int = args.func(args)
    return result


if __name__ == "__main__":
    sys.exit(main())
