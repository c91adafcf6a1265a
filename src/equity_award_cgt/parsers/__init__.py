"""File parsers for acquisition lots and market data histories."""

from equity_award_cgt.parsers.equity_award_center import EquityAwardCenterParser
from equity_award_cgt.parsers.yahoo_history import YahooHistoryParser

__all__ = [
    "EquityAwardCenterParser",
    "YahooHistoryParser",
]
