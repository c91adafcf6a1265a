from equity_award_cgt.services.cgt import CGTServiceImpl
from equity_award_cgt.services.cost_basis import CostBasisCalculator
from equity_award_cgt.services.currency import HistoricalRateLookup
from equity_award_cgt.services.interfaces import (
    CGTService,
    CurrencyRateLookup,
    LotSource,
    SecurityPriceLookup,
)
from equity_award_cgt.services.lot_ledger import LotLedger
from equity_award_cgt.services.lot_matching import (
    BED_AND_BREAKFAST_WINDOW_DAYS,
    LotMatchingService,
)
from equity_award_cgt.services.market_data import YahooFinanceClient
from equity_award_cgt.services.prices import HistoricalPriceLookup

__all__ = [
    "BED_AND_BREAKFAST_WINDOW_DAYS",
    "CGTService",
    "CGTServiceImpl",
    "CostBasisCalculator",
    "CurrencyRateLookup",
    "HistoricalPriceLookup",
    "HistoricalRateLookup",
    "LotLedger",
    "LotMatchingService",
    "LotSource",
    "SecurityPriceLookup",
    "YahooFinanceClient",
]
