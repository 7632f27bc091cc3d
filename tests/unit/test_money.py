"""Tests for sf_common.money."""

import pytest

from src.sf_common.errors import CurrencyMismatchError
from src.sf_common.money import Money, minor_units, percent_to_bps, sum_money


class TestMoney:
    def test_currency_is_upper_cased(self) -> None:
        assert Money(100, "nok").currency == "NOK"

    def test_rejects_float_amount(self) -> None:
        with pytest.raises(TypeError):
            Money(1.5, "NOK")  # type: ignore[arg-type]

    def test_rejects_bool_amount(self) -> None:
        with pytest.raises(TypeError):
            Money(True, "NOK")  # type: ignore[arg-type]

    def test_rejects_empty_currency(self) -> None:
        with pytest.raises(ValueError):
            Money(100, "")

    def test_add_and_subtract(self) -> None:
        assert Money(500, "NOK") + Money(200, "NOK") == Money(700, "NOK")
        assert Money(500, "NOK") - Money(700, "NOK") == Money(-200, "NOK")

    def test_add_currency_mismatch(self) -> None:
        with pytest.raises(CurrencyMismatchError) as exc_info:
            Money(500, "NOK") + Money(200, "EUR")
        assert exc_info.value.code == 1001

    def test_multiply_by_quantity(self) -> None:
        assert Money(10000, "NOK") * 2 == Money(20000, "NOK")
        assert 3 * Money(10, "NOK") == Money(30, "NOK")

    def test_negation(self) -> None:
        assert -Money(700, "NOK") == Money(-700, "NOK")


class TestPercentage:
    def test_exact(self) -> None:
        # 10% of 100.00
        assert Money(10000, "NOK").percentage(1000) == Money(1000, "NOK")

    def test_rounds_half_up(self) -> None:
        # 5% of 0.50 = 2.5 subunits -> 3
        assert Money(50, "NOK").percentage(500) == Money(3, "NOK")

    def test_rounds_down_below_half(self) -> None:
        # 5% of 0.49 = 2.45 -> 2
        assert Money(49, "NOK").percentage(500) == Money(2, "NOK")

    def test_negative_rounds_away_from_zero(self) -> None:
        assert Money(50, "NOK").percentage(-500) == Money(-3, "NOK")


class TestHelpers:
    def test_sum_money_empty_is_zero(self) -> None:
        assert sum_money([], "NOK") == Money(0, "NOK")

    def test_sum_money(self) -> None:
        assert sum_money([Money(1, "NOK"), Money(2, "NOK")], "NOK") == Money(3, "NOK")

    def test_minor_units(self) -> None:
        assert minor_units("NOK") == 2

    def test_to_display(self) -> None:
        assert Money(150000, "NOK").to_display() == "1,500.00 NOK"
        assert Money(-5, "NOK").to_display() == "-0.05 NOK"

    @pytest.mark.parametrize(
        "percentage,bps",
        [(10, 1000), (12.5, 1250), ("7.7", 770), (0.1, 10), (0, 0), (-10, -1000)],
    )
    def test_percent_to_bps(self, percentage, bps) -> None:
        assert percent_to_bps(percentage) == bps
