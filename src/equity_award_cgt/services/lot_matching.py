"""Share matching for disposals under the 30-day and Section 104 rules."""

from datetime import date, timedelta
from decimal import Decimal

from equity_award_cgt.domain.disposals import DisposalPartition
from equity_award_cgt.logging_config import get_logger
from equity_award_cgt.services.lot_ledger import LotLedger

logger = get_logger(__name__)

BED_AND_BREAKFAST_WINDOW_DAYS = 30


class LotMatchingService:
    """Splits a disposal between reacquisitions and the Section 104 pool.

    Shares reacquired from the sell date up to `window_days` calendar days
    afterwards are matched first; only the remainder is drawn from the pool.
    """

    def __init__(
        self,
        ledger: LotLedger,
        window_days: int = BED_AND_BREAKFAST_WINDOW_DAYS,
    ) -> None:
        self._ledger = ledger
        self._window_days = window_days

    @property
    def window_days(self) -> int:
        return self._window_days

    def window_end(self, sell_date: date) -> date:
        return sell_date + timedelta(days=self._window_days)

    def partition(
        self, symbol: str, quantity: Decimal, sell_date: date
    ) -> DisposalPartition:
        window_end = self.window_end(sell_date)
        window_lots = self._ledger.lots_in_window(symbol, sell_date, window_end)
        lookahead_total = sum(
            (lot.quantity_available for lot in window_lots), Decimal("0")
        )

        bed_and_breakfast_quantity = min(lookahead_total, quantity)
        section_104_quantity = quantity - bed_and_breakfast_quantity

        logger.debug(
            "disposal_partitioned",
            symbol=symbol,
            sell_date=sell_date.isoformat(),
            window_end=window_end.isoformat(),
            window_supply=str(lookahead_total),
            bed_and_breakfast_quantity=str(bed_and_breakfast_quantity),
            section_104_quantity=str(section_104_quantity),
        )

        return DisposalPartition(
            symbol=symbol,
            sell_date=sell_date,
            window_end=window_end,
            bed_and_breakfast_quantity=bed_and_breakfast_quantity,
            section_104_quantity=section_104_quantity,
        )
