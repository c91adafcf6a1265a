from datetime import date
from decimal import Decimal

import pytest

from equity_award_cgt.domain.lots import AcquisitionLot
from equity_award_cgt.domain.value_objects import Money
from equity_award_cgt.services.currency import HistoricalRateLookup
from equity_award_cgt.services.lot_ledger import LotLedger
from equity_award_cgt.services.prices import HistoricalPriceLookup


def make_lot(
    acquired: date,
    price: str,
    quantity: str,
    symbol: str = "GOOG",
) -> AcquisitionLot:
    return AcquisitionLot(
        symbol=symbol,
        date_acquired=acquired,
        acquisition_price=Money(Decimal(price), "USD"),
        quantity_available=Decimal(quantity),
    )


def gbp(amount: str) -> Money:
    return Money(Decimal(amount), "GBP")


@pytest.fixture
def pool_lot() -> AcquisitionLot:
    """100 shares bought at $10 well before the sale."""
    return make_lot(date(2020, 1, 1), "10", "100")


@pytest.fixture
def reacquired_lot() -> AcquisitionLot:
    """20 shares bought at $15 nine days after a 2021-01-01 sale."""
    return make_lot(date(2021, 1, 10), "15", "20")


@pytest.fixture
def single_lot_ledger(pool_lot: AcquisitionLot) -> LotLedger:
    return LotLedger([pool_lot])


@pytest.fixture
def reacquisition_ledger(
    pool_lot: AcquisitionLot, reacquired_lot: AcquisitionLot
) -> LotLedger:
    return LotLedger([pool_lot, reacquired_lot])


@pytest.fixture
def rate_lookup() -> HistoricalRateLookup:
    return HistoricalRateLookup.from_pairs(
        [
            (date(2020, 1, 1), Decimal("0.8")),
            (date(2021, 1, 1), Decimal("0.8")),
            (date(2021, 1, 10), Decimal("0.75")),
        ]
    )


@pytest.fixture
def price_lookup() -> HistoricalPriceLookup:
    return HistoricalPriceLookup.from_pairs(
        "GOOG",
        [
            (date(2020, 1, 1), Decimal("10")),
            (date(2021, 1, 1), Decimal("20")),
        ],
    )
