"""Disposal requests, matched partitions and CGT results."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any

from equity_award_cgt.domain.value_objects import Currency, Money, PartitionKind
from equity_award_cgt.exceptions import InvalidQuantityError

CURRENCY_SYMBOLS = {
    Currency.GBP: "£",
    Currency.USD: "$",
    Currency.EUR: "€",
}


def format_money(money: Money) -> str:
    """Format money rounded to pence/cents with its currency symbol."""
    currency = Currency(money.currency)
    symbol = CURRENCY_SYMBOLS.get(currency)
    if symbol is None:
        return f"{money.amount:,.2f} {currency.value}"
    return f"{symbol}{money.amount:,.2f}"


@dataclass(frozen=True, slots=True)
class DisposalRequest:
    symbol: str
    quantity: Decimal
    sell_date: date

    def __post_init__(self) -> None:
        if not isinstance(self.quantity, Decimal):
            object.__setattr__(self, "quantity", Decimal(str(self.quantity)))
        if not self.quantity.is_finite() or self.quantity < 0:
            raise InvalidQuantityError(self.quantity)


@dataclass(frozen=True, slots=True)
class DisposalPartition:
    """Split of a disposal between the 30-day window and the pool."""

    symbol: str
    sell_date: date
    window_end: date
    bed_and_breakfast_quantity: Decimal
    section_104_quantity: Decimal

    @property
    def window_start(self) -> date:
        return self.sell_date

    @property
    def total_quantity(self) -> Decimal:
        return self.bed_and_breakfast_quantity + self.section_104_quantity


@dataclass(frozen=True, slots=True)
class MatchedPartition:
    kind: PartitionKind
    quantity: Decimal
    cost: Money


@dataclass(frozen=True)
class CGTResult:
    """Outcome of a CGT calculation for one disposal.

    All money is in the reporting currency; cgt_rate is a ratio. Every
    intermediate figure is kept so the computation can be audited.
    """

    symbol: str
    sell_date: date
    quantity: Decimal
    proceeds: Money
    bed_and_breakfast_cost: Money
    section_104_cost: Money
    annual_exemption: Money
    amount_subject_to_cgt: Money
    cgt_rate: Decimal
    cgt_due: Money
    partitions: tuple[MatchedPartition, ...] = field(default_factory=tuple)

    @property
    def total_cost(self) -> Money:
        return self.bed_and_breakfast_cost + self.section_104_cost

    @property
    def net_proceeds(self) -> Money:
        return self.proceeds - self.total_cost

    @property
    def proceeds_after_tax(self) -> Money:
        return self.proceeds - self.cgt_due

    @property
    def cgt_rate_percent(self) -> str:
        return f"{(self.cgt_rate * 100).normalize():f}"

    def to_dict(self) -> dict[str, Any]:
        """Convert result to a JSON-serialisable dictionary."""
        return {
            "symbol": self.symbol,
            "sell_date": self.sell_date.isoformat(),
            "quantity": str(self.quantity),
            "currency": Currency(self.proceeds.currency).value,
            "proceeds": str(self.proceeds.amount),
            "bed_and_breakfast_cost": str(self.bed_and_breakfast_cost.amount),
            "section_104_cost": str(self.section_104_cost.amount),
            "total_cost": str(self.total_cost.amount),
            "annual_exemption": str(self.annual_exemption.amount),
            "amount_subject_to_cgt": str(self.amount_subject_to_cgt.amount),
            "cgt_rate": str(self.cgt_rate),
            "cgt_due": str(self.cgt_due.amount),
            "partitions": [
                {
                    "kind": p.kind.value,
                    "quantity": str(p.quantity),
                    "cost": str(p.cost.amount),
                }
                for p in self.partitions
            ],
        }

    def __str__(self) -> str:
        rule = "=" * 29
        return "\n".join(
            [
                rule,
                f"CGT due: {format_money(self.cgt_due)}",
                rule,
                "Breakdown:",
                f"* Proceeds: {format_money(self.proceeds)}",
                f"* Bed and breakfast cost: {format_money(self.bed_and_breakfast_cost)}",
                f"* Section 104 cost: {format_money(self.section_104_cost)}",
                f"* Cost: {format_money(self.total_cost)}",
                f"* Net proceeds: {format_money(self.net_proceeds)}",
                f"* Annual exemption: {format_money(self.annual_exemption)}",
                f"* Amount subject to CGT: {format_money(self.amount_subject_to_cgt)}",
                f"* CGT Rate: {self.cgt_rate_percent}%",
                f"* Proceeds after tax: {format_money(self.proceeds_after_tax)}",
            ]
        )
