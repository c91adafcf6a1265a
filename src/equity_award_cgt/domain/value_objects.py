from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class Currency(str, Enum):
    USD = "USD"
    GBP = "GBP"
    EUR = "EUR"
    JPY = "JPY"
    CHF = "CHF"
    CAD = "CAD"
    AUD = "AUD"


class TaxpayerStatus(str, Enum):
    BASIC = "basic"
    HIGHER = "higher"


class PartitionKind(str, Enum):
    BED_AND_BREAKFAST = "bed_and_breakfast"
    SECTION_104 = "section_104"


@dataclass(frozen=True, slots=True)
class Money:
    amount: Decimal
    currency: Currency | str = "USD"

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, "amount", Decimal(str(self.amount)))

        if isinstance(self.currency, str) and not isinstance(self.currency, Currency):
            try:
                currency_enum = Currency[self.currency.upper()]
                object.__setattr__(self, "currency", currency_enum)
            except KeyError:
                raise ValueError(f"Invalid currency: {self.currency}")
        elif not isinstance(self.currency, Currency):
            raise ValueError(f"Invalid currency: {self.currency}")

    def __add__(self, other: "Money") -> "Money":
        if self.currency != other.currency:
            raise ValueError(f"Cannot add {self.currency} and {other.currency}")
        return Money(self.amount + other.amount, self.currency)

    def __sub__(self, other: "Money") -> "Money":
        if self.currency != other.currency:
            raise ValueError(f"Cannot subtract {self.currency} and {other.currency}")
        return Money(self.amount - other.amount, self.currency)

    def __mul__(self, factor: Decimal | int) -> "Money":
        return Money(self.amount * Decimal(factor), self.currency)

    def __truediv__(self, divisor: Decimal | int) -> "Money":
        return Money(self.amount / Decimal(divisor), self.currency)

    def __neg__(self) -> "Money":
        return Money(-self.amount, self.currency)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.amount == other.amount and self.currency == other.currency

    def __lt__(self, other: "Money") -> bool:
        if self.currency != other.currency:
            raise ValueError(f"Cannot compare {self.currency} and {other.currency}")
        return self.amount < other.amount

    def __le__(self, other: "Money") -> bool:
        return self == other or self < other

    def max(self, other: "Money") -> "Money":
        return other if self < other else self

    @property
    def is_zero(self) -> bool:
        return self.amount == Decimal("0")

    @property
    def is_positive(self) -> bool:
        return self.amount > Decimal("0")

    @property
    def is_negative(self) -> bool:
        return self.amount < Decimal("0")

    @classmethod
    def zero(cls, currency: Currency | str = "USD") -> "Money":
        return cls(Decimal("0"), currency)


__all__ = [
    "Currency",
    "TaxpayerStatus",
    "PartitionKind",
    "Money",
]
