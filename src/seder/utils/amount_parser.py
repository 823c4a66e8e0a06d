"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re

_CURRENCY = re.compile(r"[₪$€£]|\b(?:ils|nis)\b", re.IGNORECASE)


def parse_amount(amount_str: str) -> Decimal:
    """Parse a typed or displayed amount into a Decimal.

    Accepts what people type into an amount field or copy from a
    formatted table:
    - "1180", "1180.50"
    - "₪1,180.00", "1,180 ₪", "1180 ILS", "NIS 1180"
    - "-250", "(250.00)" (negative in parentheses)

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    text = amount_str.strip()

    is_negative = text.startswith("(") and text.endswith(")")
    if is_negative:
        text = text[1:-1]

    text = _CURRENCY.sub("", text).replace(",", "").strip()

    try:
        amount = Decimal(text)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}") from e

    return -amount if is_negative else amount
