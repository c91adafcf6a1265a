"""Domain models for the Equity Award CGT calculator."""

from equity_award_cgt.domain.disposals import (
    CGTResult,
    DisposalPartition,
    DisposalRequest,
    MatchedPartition,
)
from equity_award_cgt.domain.lots import AcquisitionLot
from equity_award_cgt.domain.market_data import (
    ExchangeRate,
    MarketDataSource,
    SecurityPrice,
)
from equity_award_cgt.domain.series import DatedSeries
from equity_award_cgt.domain.value_objects import (
    Currency,
    Money,
    PartitionKind,
    TaxpayerStatus,
)

__all__ = [
    "AcquisitionLot",
    "CGTResult",
    "Currency",
    "DatedSeries",
    "DisposalPartition",
    "DisposalRequest",
    "ExchangeRate",
    "MarketDataSource",
    "MatchedPartition",
    "Money",
    "PartitionKind",
    "SecurityPrice",
    "TaxpayerStatus",
]
