"""Parser for Schwab Equity Award Center "Equity Details" CSV exports."""

import csv
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path

from equity_award_cgt.domain.lots import AcquisitionLot
from equity_award_cgt.domain.value_objects import Currency, Money
from equity_award_cgt.exceptions import LotSourceError
from equity_award_cgt.logging_config import get_logger
from equity_award_cgt.services.interfaces import LotSource

logger = get_logger(__name__)


class EquityAwardCenterParser(LotSource):
    """Reads acquisition lots from an EquityAwardsCenter_EquityDetails CSV.

    The export mixes several sections. Only rows between the
    "*** EQUITY AWARD SHARES ***" marker and the following "Totals" row are
    read; a row is a lot when its first cell is an MM-DD-YYYY award date.
    The file can be downloaded from the Equity Award Center's Export button.
    """

    SECTION_MARKER = "*** EQUITY AWARD SHARES ***"
    SECTION_END = "Totals"
    DATE_FORMAT = "%m-%d-%Y"
    EXPECTED_COLUMNS = [
        "Award Date",
        "Symbol",
        "Award ID",
        "Share Type",
        "Market Value",
        "Date Holding Period Met",
        "Deposit Date",
        "Date Acquired",
        "Acquisition Price",
        "Shares",
        "Available to Sell",
    ]

    SYMBOL = 1
    DATE_ACQUIRED = 7
    ACQUISITION_PRICE = 8
    AVAILABLE_TO_SELL = 10

    def __init__(
        self,
        file_path: str | Path,
        currency: Currency | str = Currency.USD,
    ) -> None:
        self._path = Path(file_path)
        self._currency = currency

    def load(self) -> list[AcquisitionLot]:
        return self.parse()

    def parse(self) -> list[AcquisitionLot]:
        """Parse the export and return its lots in file order.

        Raises:
            LotSourceError: If the file is missing, the section header does not
                match the expected columns, or a lot row holds invalid values.
        """
        source = str(self._path)
        if not self._path.exists():
            raise LotSourceError(source, "file not found")

        lots: list[AcquisitionLot] = []
        in_section = False

        with open(self._path, newline="", encoding="utf-8-sig") as csvfile:
            for row_num, row in enumerate(csv.reader(csvfile), start=1):
                first = row[0].strip() if row else ""
                if first == self.SECTION_MARKER:
                    in_section = True
                if not in_section:
                    continue
                if first == self.SECTION_END:
                    in_section = False
                    continue

                if first == self.EXPECTED_COLUMNS[0]:
                    self._verify_columns(row, source, row_num)
                    continue

                if self._parse_date(first) is not None:
                    lots.append(self._parse_row(row, source, row_num))

        logger.info("lots_loaded", source=source, lots=len(lots))
        return lots

    def _verify_columns(self, row: list[str], source: str, row_num: int) -> None:
        columns = [cell.strip() for cell in row if cell.strip()]
        if columns != self.EXPECTED_COLUMNS:
            raise LotSourceError(
                source,
                f"unexpected columns {columns}, expected {self.EXPECTED_COLUMNS}",
                row=row_num,
            )

    def _parse_row(self, row: list[str], source: str, row_num: int) -> AcquisitionLot:
        if len(row) <= self.AVAILABLE_TO_SELL:
            raise LotSourceError(
                source,
                f"expected {len(self.EXPECTED_COLUMNS)} columns, got {len(row)}",
                row=row_num,
            )

        date_acquired = self._parse_date(row[self.DATE_ACQUIRED].strip())
        if date_acquired is None:
            raise LotSourceError(
                source,
                f"invalid Date Acquired '{row[self.DATE_ACQUIRED]}'",
                row=row_num,
            )

        price = self._parse_decimal(row[self.ACQUISITION_PRICE])
        available = self._parse_decimal(row[self.AVAILABLE_TO_SELL])
        if price is None or available is None:
            raise LotSourceError(
                source,
                f"invalid Acquisition Price '{row[self.ACQUISITION_PRICE]}' "
                f"or Available to Sell '{row[self.AVAILABLE_TO_SELL]}'",
                row=row_num,
            )

        try:
            return AcquisitionLot(
                symbol=row[self.SYMBOL].strip(),
                date_acquired=date_acquired,
                acquisition_price=Money(price, self._currency),
                quantity_available=available,
            )
        except ValueError as e:
            raise LotSourceError(source, str(e), row=row_num) from e

    def _parse_date(self, value: str) -> date | None:
        try:
            return datetime.strptime(value, self.DATE_FORMAT).date()
        except ValueError:
            return None

    def _parse_decimal(self, value: str) -> Decimal | None:
        cleaned = value.strip().replace("$", "").replace(",", "").replace(" ", "")
        try:
            return Decimal(cleaned)
        except InvalidOperation:
            return None
