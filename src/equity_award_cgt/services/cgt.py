"""Capital Gains Tax calculation for a single disposal."""

from datetime import date
from decimal import Decimal

from equity_award_cgt.domain.disposals import CGTResult
from equity_award_cgt.domain.value_objects import Money
from equity_award_cgt.exceptions import (
    InsufficientHoldingsError,
    InvalidQuantityError,
    MissingMarketPriceError,
)
from equity_award_cgt.logging_config import LogContext, get_logger
from equity_award_cgt.services.cost_basis import CostBasisCalculator
from equity_award_cgt.services.interfaces import (
    CGTService,
    CurrencyRateLookup,
    SecurityPriceLookup,
)
from equity_award_cgt.services.lot_ledger import LotLedger
from equity_award_cgt.services.lot_matching import (
    BED_AND_BREAKFAST_WINDOW_DAYS,
    LotMatchingService,
)

logger = get_logger(__name__)


class CGTServiceImpl(CGTService):
    """Computes proceeds, matched cost and tax due for a disposal.

    The computation is a pure function of the ledger, the lookups and the
    request. Any missing price or rate aborts it; nothing is estimated.
    """

    def __init__(
        self,
        ledger: LotLedger,
        price_lookup: SecurityPriceLookup,
        rate_lookup: CurrencyRateLookup,
        annual_exemption: Money | Decimal,
        cgt_rate: Decimal,
        window_days: int = BED_AND_BREAKFAST_WINDOW_DAYS,
    ) -> None:
        reporting_currency = rate_lookup.reporting_currency
        if not isinstance(annual_exemption, Money):
            annual_exemption = Money(annual_exemption, reporting_currency)
        if annual_exemption.currency != reporting_currency:
            raise ValueError(
                f"Annual exemption must be in {reporting_currency.value}, "
                f"got {annual_exemption.currency}"
            )

        self._ledger = ledger
        self._price_lookup = price_lookup
        self._rate_lookup = rate_lookup
        self._annual_exemption = annual_exemption
        self._cgt_rate = Decimal(cgt_rate)
        self._matcher = LotMatchingService(ledger, window_days)
        self._cost_basis = CostBasisCalculator(ledger, rate_lookup, window_days)

    @property
    def annual_exemption(self) -> Money:
        return self._annual_exemption

    @property
    def cgt_rate(self) -> Decimal:
        return self._cgt_rate

    def calculate(
        self, symbol: str, quantity: Decimal, sell_date: date
    ) -> CGTResult:
        if not isinstance(quantity, Decimal):
            quantity = Decimal(str(quantity))
        with LogContext(symbol=symbol, sell_date=sell_date.isoformat()):
            self._check_holdings(symbol, quantity, sell_date)

            proceeds = self.calculate_proceeds(symbol, quantity, sell_date)

            partition = self._matcher.partition(symbol, quantity, sell_date)
            bed_and_breakfast = self._cost_basis.bed_and_breakfast_cost(
                symbol, partition.bed_and_breakfast_quantity, sell_date
            )
            section_104 = self._cost_basis.section_104_cost(
                symbol, partition.section_104_quantity, sell_date
            )

            zero = Money.zero(self._rate_lookup.reporting_currency)
            gain = (
                proceeds
                - bed_and_breakfast.cost
                - section_104.cost
                - self._annual_exemption
            )
            amount_subject_to_cgt = gain.max(zero)
            cgt_due = amount_subject_to_cgt * self._cgt_rate

            result = CGTResult(
                symbol=symbol,
                sell_date=sell_date,
                quantity=quantity,
                proceeds=proceeds,
                bed_and_breakfast_cost=bed_and_breakfast.cost,
                section_104_cost=section_104.cost,
                annual_exemption=self._annual_exemption,
                amount_subject_to_cgt=amount_subject_to_cgt,
                cgt_rate=self._cgt_rate,
                cgt_due=cgt_due,
                partitions=(bed_and_breakfast, section_104),
            )

            logger.info(
                "cgt_calculated",
                quantity=str(quantity),
                proceeds=str(proceeds.amount),
                bed_and_breakfast_quantity=str(partition.bed_and_breakfast_quantity),
                section_104_quantity=str(partition.section_104_quantity),
                cgt_due=str(cgt_due.amount),
            )
            return result

    def calculate_proceeds(
        self, symbol: str, quantity: Decimal, sell_date: date
    ) -> Money:
        """Market value of the disposal in the reporting currency."""
        sell_price = self._price_lookup.price_on_or_before(symbol, sell_date)
        if sell_price is None:
            raise MissingMarketPriceError(symbol, sell_date)
        return self._rate_lookup.convert(sell_price * quantity, sell_date)

    def _check_holdings(self, symbol: str, quantity: Decimal, sell_date: date) -> None:
        if not quantity.is_finite() or quantity < Decimal("0"):
            raise InvalidQuantityError(quantity)

        available = self._ledger.quantity_available_on_or_before(symbol, sell_date)
        if quantity > available:
            logger.warning(
                "insufficient_holdings",
                requested=str(quantity),
                available=str(available),
            )
            raise InsufficientHoldingsError(symbol, quantity, available, sell_date)
