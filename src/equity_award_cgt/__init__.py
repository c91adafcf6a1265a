from equity_award_cgt.domain.disposals import (
    CGTResult,
    DisposalRequest,
    MatchedPartition,
)
from equity_award_cgt.domain.lots import AcquisitionLot
from equity_award_cgt.domain.value_objects import (
    Currency,
    Money,
    PartitionKind,
    TaxpayerStatus,
)
from equity_award_cgt.services.cgt import CGTServiceImpl
from equity_award_cgt.services.lot_ledger import LotLedger

__all__ = [
    "AcquisitionLot",
    "CGTResult",
    "CGTServiceImpl",
    "Currency",
    "DisposalRequest",
    "LotLedger",
    "MatchedPartition",
    "Money",
    "PartitionKind",
    "TaxpayerStatus",
]

__version__ = "0.1.0"
