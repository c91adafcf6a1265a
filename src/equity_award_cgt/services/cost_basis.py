"""Cost basis for the two partitions of a disposal."""

from datetime import date, timedelta
from decimal import Decimal

from equity_award_cgt.domain.disposals import MatchedPartition
from equity_award_cgt.domain.value_objects import Money, PartitionKind
from equity_award_cgt.exceptions import InconsistentPoolError
from equity_award_cgt.logging_config import get_logger
from equity_award_cgt.services.interfaces import CurrencyRateLookup
from equity_award_cgt.services.lot_ledger import LotLedger
from equity_award_cgt.services.lot_matching import BED_AND_BREAKFAST_WINDOW_DAYS

logger = get_logger(__name__)


class CostBasisCalculator:
    """Prices matched shares in the reporting currency.

    Every lot's cost is converted at the exchange rate of its own
    acquisition date.
    """

    def __init__(
        self,
        ledger: LotLedger,
        rate_lookup: CurrencyRateLookup,
        window_days: int = BED_AND_BREAKFAST_WINDOW_DAYS,
    ) -> None:
        self._ledger = ledger
        self._rate_lookup = rate_lookup
        self._window_days = window_days

    def bed_and_breakfast_cost(
        self, symbol: str, quantity: Decimal, sell_date: date
    ) -> MatchedPartition:
        """FIFO cost of `quantity` shares reacquired within the window."""
        window_end = sell_date + timedelta(days=self._window_days)
        total = Money.zero(self._rate_lookup.reporting_currency)
        remaining = quantity

        for lot in self._ledger.lots_in_window(symbol, sell_date, window_end):
            if remaining <= Decimal("0"):
                break
            chunk = min(remaining, lot.quantity_available)
            if chunk <= Decimal("0"):
                continue
            total += self._rate_lookup.convert(
                lot.acquisition_price * chunk, lot.date_acquired
            )
            remaining -= chunk

        if remaining > Decimal("0"):
            raise InconsistentPoolError(
                symbol,
                sell_date,
                quantity,
                f"only {quantity - remaining} shares reacquired by {window_end.isoformat()}",
            )

        return MatchedPartition(
            kind=PartitionKind.BED_AND_BREAKFAST, quantity=quantity, cost=total
        )

    def section_104_cost(
        self, symbol: str, quantity: Decimal, sell_date: date
    ) -> MatchedPartition:
        """Average cost of `quantity` shares from the pool held before the sell date.

        Lots acquired on the sell date itself are left out of the pool.
        """
        reporting_currency = self._rate_lookup.reporting_currency
        if quantity == Decimal("0"):
            return MatchedPartition(
                kind=PartitionKind.SECTION_104,
                quantity=quantity,
                cost=Money.zero(reporting_currency),
            )

        pool = self._ledger.lots_before(symbol, sell_date)
        total_cost = Money.zero(reporting_currency)
        total_shares = Decimal("0")
        for lot in pool:
            total_cost += self._rate_lookup.convert(lot.cost, lot.date_acquired)
            total_shares += lot.quantity_available

        if total_shares == Decimal("0"):
            raise InconsistentPoolError(
                symbol,
                sell_date,
                quantity,
                "Section 104 pool holds no shares",
            )

        average_cost = total_cost / total_shares
        cost = average_cost * quantity

        logger.debug(
            "section_104_pool_costed",
            symbol=symbol,
            sell_date=sell_date.isoformat(),
            pool_lots=len(pool),
            pool_shares=str(total_shares),
            pool_cost=str(total_cost.amount),
            average_cost=str(average_cost.amount),
        )

        return MatchedPartition(
            kind=PartitionKind.SECTION_104, quantity=quantity, cost=cost
        )
