"""CLI helpers for date range resolution."""

from datetime import date

import click

from seder.utils.date_parser import DATE_RANGE_PRESETS, get_date_range, parse_date


def date_range_options(func):
    """Add the --preset/--start-date/--end-date/--year/--month options."""
    options = [
        click.option(
            "--preset",
            type=click.Choice(DATE_RANGE_PRESETS, case_sensitive=False),
            help="Date range preset (default: this-month)",
        ),
        click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month')"),
        click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')"),
        click.option("--year", type=int, help="Year for specific-month / specific-year"),
        click.option("--month", type=click.IntRange(1, 12), help="Month for specific-month"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def resolve_cli_date_range(
    ctx,
    *,
    preset: str | None,
    start_date: str | None,
    end_date: str | None,
    year: int | None = None,
    month: int | None = None,
    today: date | None = None,
) -> tuple[date, date]:
    """Resolve a date range from a preset or explicit dates.

    Explicit dates imply the custom preset; a missing bound is taken from
    the current month.
    """
    today = today or date.today()

    if preset and preset != "custom" and (start_date or end_date):
        click.echo(
            "Error: --preset cannot be combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    if start_date or end_date:
        default_start, default_end = get_date_range("this-month", today=today)
        start, end = default_start, default_end
        if start_date:
            try:
                start = parse_date(start_date, today=today)
            except ValueError as e:
                click.echo(f"Error: Invalid start date: {e}", err=True)
                ctx.exit(1)
        if end_date:
            try:
                end = parse_date(end_date, today=today)
            except ValueError as e:
                click.echo(f"Error: Invalid end date: {e}", err=True)
                ctx.exit(1)
        if start > end:
            click.echo("Error: Start date must not be after end date.", err=True)
            ctx.exit(1)
        return start, end

    return get_date_range(preset or "this-month", today=today, year=year, month=month)
