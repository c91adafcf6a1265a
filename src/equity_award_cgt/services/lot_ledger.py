"""Read-only ledger of acquisition lots with date-based queries."""

from bisect import bisect_left, bisect_right
from collections import defaultdict
from collections.abc import Iterable
from datetime import date
from decimal import Decimal
from operator import attrgetter

from equity_award_cgt.domain.lots import AcquisitionLot

_by_date = attrgetter("date_acquired")


class LotLedger:
    """All acquisition lots, grouped by symbol and ordered by acquisition date.

    Lots acquired on the same date keep the order they were supplied in.
    Queries for an unknown symbol return empty results.
    """

    def __init__(self, lots: Iterable[AcquisitionLot]) -> None:
        grouped: dict[str, list[AcquisitionLot]] = defaultdict(list)
        for lot in lots:
            grouped[lot.symbol].append(lot)
        self._lots: dict[str, tuple[AcquisitionLot, ...]] = {
            symbol: tuple(sorted(symbol_lots, key=_by_date))
            for symbol, symbol_lots in grouped.items()
        }

    @property
    def symbols(self) -> list[str]:
        return sorted(self._lots)

    def lots_for(self, symbol: str) -> tuple[AcquisitionLot, ...]:
        return self._lots.get(symbol, ())

    def quantity_available_on_or_before(self, symbol: str, as_of: date) -> Decimal:
        """Shares acquired on or before `as_of`."""
        lots = self.lots_for(symbol)
        end = bisect_right(lots, as_of, key=_by_date)
        return sum((lot.quantity_available for lot in lots[:end]), Decimal("0"))

    def lots_in_window(
        self, symbol: str, start: date, end: date
    ) -> tuple[AcquisitionLot, ...]:
        """Lots acquired between `start` and `end`, both inclusive, oldest first."""
        lots = self.lots_for(symbol)
        lo = bisect_left(lots, start, key=_by_date)
        hi = bisect_right(lots, end, key=_by_date)
        return lots[lo:hi]

    def lots_before(self, symbol: str, before: date) -> tuple[AcquisitionLot, ...]:
        """Lots acquired strictly before `before`."""
        lots = self.lots_for(symbol)
        return lots[: bisect_left(lots, before, key=_by_date)]

    def __len__(self) -> int:
        return sum(len(lots) for lots in self._lots.values())
