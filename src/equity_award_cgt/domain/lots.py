"""Acquisition lot domain model."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from equity_award_cgt.domain.value_objects import Money


@dataclass(frozen=True, slots=True)
class AcquisitionLot:
    """Shares of one security acquired on a single date.

    Prices are per share in the award currency. Lots are immutable once
    loaded; a disposal never mutates the ledger it is matched against.
    """

    symbol: str
    date_acquired: date
    acquisition_price: Money
    quantity_available: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.quantity_available, Decimal):
            object.__setattr__(
                self, "quantity_available", Decimal(str(self.quantity_available))
            )
        if self.quantity_available < 0:
            raise ValueError(
                f"Lot quantity must not be negative, got {self.quantity_available}"
            )
        if self.acquisition_price.is_negative:
            raise ValueError(
                f"Acquisition price must not be negative, got {self.acquisition_price.amount}"
            )

    @property
    def cost(self) -> Money:
        """Cost of the whole lot in the award currency."""
        return self.acquisition_price * self.quantity_available
