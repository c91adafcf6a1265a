"""Domain exception hierarchy for the Equity Award CGT calculator.

All domain-specific exceptions inherit from CGTCalculatorError.
This allows catching all application errors with a single base class
while preserving specificity for individual error types.
"""

from datetime import date
from decimal import Decimal
from typing import Any


class CGTCalculatorError(Exception):
    """Base exception for all calculator errors.

    Includes an error_code for machine-readable output and extra context
    describing the offending symbol, date or quantity.
    """

    error_code: str = "CGT_ERROR"

    def __init__(
        self,
        message: str,
        *,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if error_code:
            self.error_code = error_code
        self.context = context or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for JSON output."""
        return {
            "error": self.error_code,
            "message": self.message,
            "context": self.context,
        }


# =============================================================================
# Calculation Errors
# =============================================================================


class CalculationError(CGTCalculatorError):
    """Base exception for errors raised while computing a disposal."""

    error_code = "CALCULATION_ERROR"


class InsufficientHoldingsError(CalculationError):
    """Raised when a disposal exceeds the shares held on the sell date."""

    error_code = "INSUFFICIENT_HOLDINGS"

    def __init__(
        self, symbol: str, requested: Decimal, available: Decimal, as_of: date
    ) -> None:
        super().__init__(
            f"Insufficient holdings of {symbol} on {as_of.isoformat()}: "
            f"requested {requested}, available {available}",
            context={
                "symbol": symbol,
                "requested": str(requested),
                "available": str(available),
                "as_of": as_of.isoformat(),
            },
        )
        self.symbol = symbol
        self.requested = requested
        self.available = available
        self.as_of = as_of


class InconsistentPoolError(CalculationError):
    """Raised when lots cannot cover a quantity that must be costed.

    Signals a ledger inconsistency, e.g. an empty Section 104 pool while
    shares still need an average cost.
    """

    error_code = "INCONSISTENT_POOL"

    def __init__(
        self, symbol: str, as_of: date, quantity: Decimal, reason: str
    ) -> None:
        super().__init__(
            f"Cannot cost {quantity} shares of {symbol} on {as_of.isoformat()}: {reason}",
            context={
                "symbol": symbol,
                "as_of": as_of.isoformat(),
                "quantity": str(quantity),
                "reason": reason,
            },
        )
        self.symbol = symbol
        self.as_of = as_of
        self.quantity = quantity


# =============================================================================
# Market Data Errors
# =============================================================================


class MarketDataError(CGTCalculatorError):
    """Base exception for missing or unavailable market data."""

    error_code = "MARKET_DATA_ERROR"


class MissingMarketPriceError(MarketDataError):
    """Raised when no security price exists on or before a date."""

    error_code = "MISSING_MARKET_PRICE"

    def __init__(self, symbol: str, as_of: date) -> None:
        super().__init__(
            f"Missing stock price for {symbol} on or before {as_of.isoformat()}",
            context={"symbol": symbol, "as_of": as_of.isoformat()},
        )
        self.symbol = symbol
        self.as_of = as_of


class MissingExchangeRateError(MarketDataError):
    """Raised when no exchange rate exists on or before a date."""

    error_code = "MISSING_EXCHANGE_RATE"

    def __init__(self, from_currency: str, to_currency: str, as_of: date) -> None:
        super().__init__(
            f"Missing exchange rate {from_currency}/{to_currency} "
            f"on or before {as_of.isoformat()}",
            context={
                "from_currency": from_currency,
                "to_currency": to_currency,
                "as_of": as_of.isoformat(),
            },
        )
        self.as_of = as_of


class MarketDataFetchError(MarketDataError):
    """Raised when a remote price history cannot be downloaded."""

    error_code = "MARKET_DATA_FETCH_ERROR"

    def __init__(self, ticker: str, reason: str) -> None:
        super().__init__(
            f"Failed to fetch history for {ticker}: {reason}",
            context={"ticker": ticker, "reason": reason},
        )


# =============================================================================
# Input Errors
# =============================================================================


class ValidationError(CGTCalculatorError):
    """Base exception for validation errors."""

    error_code = "VALIDATION_ERROR"


class InvalidQuantityError(ValidationError):
    """Raised when a disposal quantity is negative or not a finite number."""

    error_code = "INVALID_QUANTITY"

    def __init__(self, quantity: Decimal) -> None:
        super().__init__(
            f"Invalid quantity '{quantity}': must be a finite, non-negative number",
            context={"quantity": str(quantity)},
        )


class LotSourceError(CGTCalculatorError):
    """Raised when acquisition lots cannot be read from their source."""

    error_code = "LOT_SOURCE_ERROR"

    def __init__(self, source: str, reason: str, row: int | None = None) -> None:
        location = f"{source} (row {row})" if row is not None else source
        context: dict[str, Any] = {"source": source, "reason": reason}
        if row is not None:
            context["row"] = row
        super().__init__(f"Cannot read lots from {location}: {reason}", context=context)
