"""Precision-safe monetary arithmetic.

Every sum, difference, product and quotient of amounts or VAT rates goes
through this module. Values are handled as ``Decimal`` end to end and
rounded half-up to whole cents for storage and display. Intermediate
fractions (VAT rate / 100, growth ratios) can be kept unrounded by passing
``places=None``.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional, Union

from seder.domain.errors import MoneyError, division_by_zero, invalid_amount
from seder.utils.amount_parser import parse_amount

Number = Union[Decimal, int, float, str]

CENT = Decimal("0.01")
ZERO = Decimal("0.00")
HUNDRED = Decimal("100")


def to_decimal(value: Number) -> Decimal:
    """Convert a numeric or numeric-string value to Decimal.

    Floats are converted through their shortest repr so that 0.1 becomes
    Decimal("0.1") rather than its binary expansion.

    Raises:
        MoneyError: If the value is not a finite number
    """
    if isinstance(value, bool):
        raise MoneyError(invalid_amount(value))
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(repr(value))
    elif isinstance(value, str):
        try:
            result = parse_amount(value)
        except ValueError as e:
            raise MoneyError(invalid_amount(value)) from e
    else:
        raise MoneyError(invalid_amount(value))

    if not result.is_finite():
        raise MoneyError(invalid_amount(value))
    return result


def round_money(value: Number, places: Optional[int] = 2) -> Decimal:
    """Round half-up to the given number of decimal places.

    ``places=None`` returns the exact value unchanged.
    """
    amount = to_decimal(value)
    if places is None:
        return amount
    return amount.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def add(a: Number, b: Number, places: Optional[int] = 2) -> Decimal:
    return round_money(to_decimal(a) + to_decimal(b), places)


def subtract(a: Number, b: Number, places: Optional[int] = 2) -> Decimal:
    return round_money(to_decimal(a) - to_decimal(b), places)


def multiply(a: Number, b: Number, places: Optional[int] = 2) -> Decimal:
    return round_money(to_decimal(a) * to_decimal(b), places)


def divide(a: Number, b: Number, places: Optional[int] = 2) -> Decimal:
    """Divide ``a`` by ``b``.

    Raises:
        MoneyError: If ``b`` is zero
    """
    dividend = to_decimal(a)
    divisor = to_decimal(b)
    if divisor == 0:
        raise MoneyError(division_by_zero(dividend))
    return round_money(dividend / divisor, places)


def sum_amounts(values: Iterable[Number]) -> Decimal:
    """Sum amounts exactly, rounding once at the end."""
    total = Decimal(0)
    for value in values:
        total += to_decimal(value)
    return round_money(total)


def percent_change(current: Number, previous: Number) -> Decimal:
    """Percentage change from ``previous`` to ``current``.

    A zero (or negative) baseline yields 0 instead of an infinite change.
    """
    baseline = to_decimal(previous)
    if baseline <= 0:
        return ZERO
    ratio = divide(subtract(current, baseline, places=None), baseline, places=None)
    return multiply(ratio, HUNDRED)


def vat_fraction(vat_rate: Number) -> Decimal:
    """VAT rate as an unrounded fraction (18 -> 0.18)."""
    return divide(vat_rate, HUNDRED, places=None)


def vat_amount(gross: Number, vat_rate: Number, includes_vat: bool) -> Decimal:
    """VAT portion of an amount.

    When ``includes_vat`` is set the VAT is extracted from ``gross``
    (gross - gross / (1 + rate)); otherwise it is added on top (gross * rate).
    """
    fraction = vat_fraction(vat_rate)
    if includes_vat:
        net = divide(gross, add(1, fraction, places=None), places=None)
        return subtract(gross, net)
    return multiply(gross, fraction)


def net_amount(gross: Number, vat_rate: Number, includes_vat: bool) -> Decimal:
    """Amount before VAT."""
    if includes_vat:
        return subtract(gross, vat_amount(gross, vat_rate, includes_vat))
    return round_money(gross)


def total_with_vat(gross: Number, vat_rate: Number, includes_vat: bool) -> Decimal:
    """Amount the client pays, VAT included."""
    if includes_vat:
        return round_money(gross)
    return add(gross, vat_amount(gross, vat_rate, includes_vat))
