"""Display formatting shared by the CLI commands."""

from decimal import Decimal
from typing import Optional

from seder.domain.entities import DisplayStatus

CURRENCY_SYMBOL = "₪"


def format_amount(amount: Decimal) -> str:
    """Format an amount like ₪1,234.50 (negative as -₪1,234.50)."""
    sign = "-" if amount < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL}{abs(amount):,.2f}"


def format_status(status: Optional[DisplayStatus]) -> str:
    return status.value.upper() if status is not None else "-"


def format_percent(value: Decimal) -> str:
    return f"{value:+.2f}%"
