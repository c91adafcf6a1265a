"""Parser for Yahoo Finance daily history CSV downloads."""

import csv
import io
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path


class YahooHistoryParser:
    """Parses `Date,Open,High,Low,Close,Adj Close,Volume` history files.

    Only the date and adjusted close are kept. Rows whose close is missing
    (Yahoo writes "null" on non-trading days) are skipped.
    """

    DATE_FORMAT = "%Y-%m-%d"
    DATE_COLUMN = "Date"
    CLOSE_COLUMN = "Adj Close"

    def parse_text(self, text: str) -> list[tuple[date, Decimal]]:
        """Parse CSV text and return (date, adjusted close) pairs in file order.

        Raises:
            ValueError: If the header lacks the date/close columns or a date
                cannot be parsed.
        """
        reader = csv.DictReader(io.StringIO(text))
        if reader.fieldnames is None:
            return []
        fieldnames = [name.strip() for name in reader.fieldnames]
        if self.DATE_COLUMN not in fieldnames or self.CLOSE_COLUMN not in fieldnames:
            raise ValueError(
                f"History must have '{self.DATE_COLUMN}' and '{self.CLOSE_COLUMN}' "
                f"columns, got {fieldnames}"
            )
        reader.fieldnames = fieldnames

        history: list[tuple[date, Decimal]] = []
        for row in reader:
            raw_date = (row.get(self.DATE_COLUMN) or "").strip()
            if not raw_date:
                continue
            try:
                observed_on = datetime.strptime(raw_date, self.DATE_FORMAT).date()
            except ValueError as e:
                raise ValueError(f"Failed to parse date from string: {raw_date!r}") from e

            close = self._parse_decimal(row.get(self.CLOSE_COLUMN) or "")
            if close is None:
                continue
            history.append((observed_on, close))
        return history

    def parse(self, file_path: str | Path) -> list[tuple[date, Decimal]]:
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"History file not found: {file_path}")
        return self.parse_text(path.read_text(encoding="utf-8-sig"))

    def _parse_decimal(self, value: str) -> Decimal | None:
        try:
            parsed = Decimal(value.strip())
        except InvalidOperation:
            return None
        if not parsed.is_finite():
            return None
        return parsed
