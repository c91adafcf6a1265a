"""Tests for file parsers (Equity Award Center, Yahoo history)."""

from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest

from equity_award_cgt.domain.value_objects import Money
from equity_award_cgt.exceptions import LotSourceError
from equity_award_cgt.parsers.equity_award_center import EquityAwardCenterParser
from equity_award_cgt.parsers.yahoo_history import YahooHistoryParser

HEADER = (
    '"Award Date","Symbol","Award ID","Share Type","Market Value",'
    '"Date Holding Period Met","Deposit Date","Date Acquired",'
    '"Acquisition Price","Shares","Available to Sell"'
)

EQUITY_DETAILS = f"""\
"Equity Details for account XXX-123",
"*** RESTRICTED STOCK UNITS ***"
"Award Date","Symbol","Award ID","Granted"
"01-15-2018","GOOG","999","100"
"*** EQUITY AWARD SHARES ***"
{HEADER}
"11-26-2018","GOOG","111","RS","$4,341.24","11-26-2018","11-27-2018","11-26-2018","$51.194","42.42","42.42"
"09-25-2022","GOOG","222","RS","$1,026.55","09-25-2022","09-26-2022","09-25-2022","$99.17","10.351","10.351"
"Totals","","","","$5,367.79","","","","","52.771","52.771"
"*** OTHER ***"
"01-01-2023","GOOG","333","RS","$1.00","","","01-01-2023","$1.00","1","1"
"""


def write(tmp_path: Path, content: str, name: str = "equity.csv") -> Path:
    path = tmp_path / name
    path.write_text(content)
    return path


class TestEquityAwardCenterParser:
    def test_parses_equity_award_shares_section(self, tmp_path: Path) -> None:
        path = write(tmp_path, EQUITY_DETAILS)

        lots = EquityAwardCenterParser(path).parse()

        assert len(lots) == 2
        assert lots[0].symbol == "GOOG"
        assert lots[0].date_acquired == date(2018, 11, 26)
        assert lots[0].acquisition_price == Money(Decimal("51.194"), "USD")
        assert lots[0].quantity_available == Decimal("42.42")
        assert lots[-1].date_acquired == date(2022, 9, 25)
        assert lots[-1].acquisition_price == Money(Decimal("99.17"), "USD")
        assert lots[-1].quantity_available == Decimal("10.351")

    def test_load_matches_parse(self, tmp_path: Path) -> None:
        path = write(tmp_path, EQUITY_DETAILS)
        parser = EquityAwardCenterParser(str(path))

        assert parser.load() == parser.parse()

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(LotSourceError, match="file not found"):
            EquityAwardCenterParser(tmp_path / "missing.csv").parse()

    def test_unexpected_columns_raise(self, tmp_path: Path) -> None:
        content = EQUITY_DETAILS.replace('"Available to Sell"', '"Sellable"')
        path = write(tmp_path, content)

        with pytest.raises(LotSourceError) as exc_info:
            EquityAwardCenterParser(path).parse()

        assert exc_info.value.context["row"] == 6

    def test_invalid_price_raises(self, tmp_path: Path) -> None:
        content = EQUITY_DETAILS.replace('"$51.194"', '"n/a"')
        path = write(tmp_path, content)

        with pytest.raises(LotSourceError, match="row 7"):
            EquityAwardCenterParser(path).parse()

    def test_negative_quantity_raises(self, tmp_path: Path) -> None:
        content = EQUITY_DETAILS.replace('"42.42","42.42"', '"42.42","-1"')
        path = write(tmp_path, content)

        with pytest.raises(LotSourceError, match="must not be negative"):
            EquityAwardCenterParser(path).parse()

    def test_file_without_section_has_no_lots(self, tmp_path: Path) -> None:
        path = write(tmp_path, '"Equity Details"\n"Totals"\n')

        assert EquityAwardCenterParser(path).parse() == []


YAHOO_HISTORY = """\
Date,Open,High,Low,Close,Adj Close,Volume
2003-12-01,0.58,0.59,0.57,0.581870,0.581870,0
2003-12-02,null,null,null,null,null,null
2003-12-05,0.57,0.58,0.57,0.577000,0.577000,0
"""


class TestYahooHistoryParser:
    def test_parses_adjusted_close(self) -> None:
        history = YahooHistoryParser().parse_text(YAHOO_HISTORY)

        assert history == [
            (date(2003, 12, 1), Decimal("0.581870")),
            (date(2003, 12, 5), Decimal("0.577000")),
        ]

    def test_parses_file(self, tmp_path: Path) -> None:
        path = write(tmp_path, YAHOO_HISTORY, "USDGBP=X.csv")

        assert len(YahooHistoryParser().parse(path)) == 2

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            YahooHistoryParser().parse(tmp_path / "missing.csv")

    def test_missing_columns_raise(self) -> None:
        with pytest.raises(ValueError, match="Adj Close"):
            YahooHistoryParser().parse_text("Date,Close\n2021-01-01,1\n")

    def test_invalid_date_raises(self) -> None:
        with pytest.raises(ValueError, match="Failed to parse date"):
            YahooHistoryParser().parse_text(
                "Date,Adj Close\n01/01/2021,1\n"
            )

    def test_empty_text(self) -> None:
        assert YahooHistoryParser().parse_text("") == []
