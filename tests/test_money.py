"""Tests for decimal money arithmetic."""

from decimal import Decimal

import pytest

from seder.domain.errors import MoneyError, ValidationError
from seder.utils.money import (
    add,
    divide,
    multiply,
    net_amount,
    percent_change,
    round_money,
    subtract,
    sum_amounts,
    to_decimal,
    total_with_vat,
    vat_amount,
    vat_fraction,
)


def test_thousand_dimes_sum_to_exactly_one_hundred():
    """Summing 0.10 a thousand times has no floating-point drift."""
    assert sum_amounts([0.10] * 1000) == Decimal("100.00")


def test_repeated_add_has_no_drift():
    total = Decimal("0")
    for _ in range(1000):
        total = add(total, "0.1")
    assert total == Decimal("100.00")


def test_float_inputs_use_their_shortest_repr():
    assert add(0.1, 0.2) == Decimal("0.30")
    assert to_decimal(0.1) == Decimal("0.1")


def test_results_are_rounded_half_up_to_cents():
    assert round_money("2.675") == Decimal("2.68")
    assert round_money("-2.675") == Decimal("-2.68")
    assert multiply("10.005", 1) == Decimal("10.01")
    assert subtract(5, "0.004") == Decimal("5.00")


def test_places_none_keeps_exact_value():
    assert divide(1, 3, places=None) == Decimal(1) / Decimal(3)
    assert vat_fraction(18) == Decimal("0.18")


def test_divide_by_zero_raises():
    with pytest.raises(MoneyError, match="divide"):
        divide(100, 0)

    with pytest.raises(MoneyError):
        divide("5", "0.00")


@pytest.mark.parametrize("value", ["abc", "", "1.2.3", None, True, float("nan"), "Infinity"])
def test_invalid_numeric_input_raises(value):
    with pytest.raises(MoneyError):
        to_decimal(value)


def test_money_error_is_a_validation_error():
    with pytest.raises(ValidationError):
        add("twelve", 1)
    with pytest.raises(ValueError):
        add("twelve", 1)


def test_formatted_amount_strings_are_accepted():
    assert to_decimal("₪1,234.50") == Decimal("1234.50")
    assert to_decimal("(50.00)") == Decimal("-50.00")
    assert to_decimal(" $ 12 ") == Decimal("12")


def test_percent_change():
    assert percent_change(150, 100) == Decimal("50.00")
    assert percent_change(50, 200) == Decimal("-75.00")
    assert percent_change(100, 300) == Decimal("-66.67")


def test_percent_change_zero_baseline_is_zero():
    assert percent_change(5000, 0) == Decimal("0.00")
    assert percent_change(0, 0) == Decimal("0.00")


def test_vat_extracted_when_included():
    assert vat_amount(118, 18, includes_vat=True) == Decimal("18.00")
    assert net_amount(118, 18, includes_vat=True) == Decimal("100.00")
    assert total_with_vat(118, 18, includes_vat=True) == Decimal("118.00")


def test_vat_added_when_excluded():
    assert vat_amount(100, 18, includes_vat=False) == Decimal("18.00")
    assert net_amount(100, 18, includes_vat=False) == Decimal("100.00")
    assert total_with_vat(100, 18, includes_vat=False) == Decimal("118.00")


def test_vat_fraction_is_not_rounded_early():
    # 1000 / 1.17 = 854.700854..., VAT 145.299145... -> 145.30
    assert vat_amount(1000, 17, includes_vat=True) == Decimal("145.30")
    assert vat_amount("0.00", 18, includes_vat=True) == Decimal("0.00")
