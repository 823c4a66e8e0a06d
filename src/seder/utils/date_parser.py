"""Date parsing and calendar range utilities."""

import calendar
from datetime import date, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

DATE_RANGE_PRESETS = (
    "this-month",
    "last-3-months",
    "this-year",
    "specific-month",
    "specific-year",
    "custom",
)


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "tomorrow", "last month", "this year"

    Args:
        date_str: Date string in various formats
        today: Reference date for relative dates (defaults to today)

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = today or date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
        "last month": (today - relativedelta(months=1)).replace(day=1),
        "this month": today.replace(day=1),
        "next month": (today + relativedelta(months=1)).replace(day=1),
        "last year": today.replace(month=1, day=1) - relativedelta(years=1),
        "this year": today.replace(month=1, day=1),
        "last week": week_start(today) - timedelta(days=7),
        "this week": week_start(today),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}") from e


def week_start(day: date) -> date:
    """Return the Sunday on or before ``day``."""
    return day - timedelta(days=(day.weekday() + 1) % 7)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """Return the first and last day of a calendar month."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def previous_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) of the month before the given one."""
    if month == 1:
        return year - 1, 12
    return year, month - 1


def get_date_range(
    preset: str,
    today: Optional[date] = None,
    year: Optional[int] = None,
    month: Optional[int] = None,
    custom_range: Optional[tuple[date, date]] = None,
) -> tuple[date, date]:
    """Get start and end dates for a date range preset.

    Args:
        preset: One of this-month, last-3-months, this-year,
            specific-month, specific-year, custom
        today: Reference date (defaults to today)
        year: Year for specific-month / specific-year
        month: Month (1-12) for specific-month
        custom_range: (start, end) for custom; falls back to this month

    Returns:
        Tuple of (start_date, end_date), both inclusive

    Raises:
        ValueError: If the preset is not recognized
    """
    preset = preset.strip().lower()
    today = today or date.today()

    if preset == "this-month":
        return month_bounds(today.year, today.month)

    elif preset == "last-3-months":
        # Current month plus the two before it
        first = today - relativedelta(months=2)
        return (
            month_bounds(first.year, first.month)[0],
            month_bounds(today.year, today.month)[1],
        )

    elif preset == "this-year":
        return date(today.year, 1, 1), date(today.year, 12, 31)

    elif preset == "specific-month":
        return month_bounds(year or today.year, month or today.month)

    elif preset == "specific-year":
        target_year = year or today.year
        return date(target_year, 1, 1), date(target_year, 12, 31)

    elif preset == "custom":
        if custom_range is None:
            return month_bounds(today.year, today.month)
        return custom_range

    raise ValueError(
        f"Unknown date range preset: '{preset}'. Supported presets: {', '.join(DATE_RANGE_PRESETS)}"
    )
