from decimal import Decimal

import pytest

from equity_award_cgt.domain.value_objects import Currency, Money


class TestMoney:
    def test_money_creation_converts_float_to_decimal(self):
        money = Money(100.50, "USD")

        assert isinstance(money.amount, Decimal)
        assert money.amount == Decimal("100.5")

    def test_money_currency_string_is_coerced(self):
        money = Money(Decimal("1"), "gbp")

        assert money.currency == Currency.GBP

    def test_money_invalid_currency_raises(self):
        with pytest.raises(ValueError, match="Invalid currency"):
            Money(Decimal("1"), "XXX")

    def test_money_addition_different_currency_raises(self):
        with pytest.raises(ValueError, match="Cannot add"):
            Money(Decimal("1"), "USD") + Money(Decimal("1"), "GBP")

    def test_money_multiplication_by_decimal(self):
        result = Money(Decimal("10"), "USD") * Decimal("0.8")

        assert result == Money(Decimal("8"), "USD")

    def test_money_division(self):
        result = Money(Decimal("1000"), "GBP") / 3

        assert result.amount == Decimal("1000") / Decimal("3")

    def test_money_max_floors_at_other(self):
        loss = Money(Decimal("-50"), "GBP")

        assert loss.max(Money.zero("GBP")) == Money.zero("GBP")
        assert Money(Decimal("5"), "GBP").max(Money.zero("GBP")).amount == 5

    def test_money_compare_different_currency_raises(self):
        with pytest.raises(ValueError, match="Cannot compare"):
            Money(Decimal("1"), "USD") < Money(Decimal("2"), "GBP")

    def test_money_sign_properties(self):
        assert Money.zero("GBP").is_zero
        assert Money(Decimal("1"), "GBP").is_positive
        assert (-Money(Decimal("1"), "GBP")).is_negative
