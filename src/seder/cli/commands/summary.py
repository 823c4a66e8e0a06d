"""Income summary (KPI) commands."""

from datetime import date

import click

from seder.cli.formatting import format_amount, format_percent
from seder.domain.analytics import AnalyticsService


@click.group()
def summary_group():
    """Show income summaries."""
    pass


@summary_group.command("kpi")
@click.option("--year", type=int, help="Year (default: current year)")
@click.option("--month", type=click.IntRange(1, 12), help="Month 1-12 (default: current month)")
@click.pass_context
def kpi(ctx, year: int | None, month: int | None):
    """Show the KPIs for a month.

    Outstanding, ready-to-invoice and overdue figures always cover all
    months; the monthly figures cover the selected month only.
    """
    db = ctx.obj["db"]
    service = AnalyticsService(db)
    today = date.today()
    year = year or today.year
    month = month or today.month

    kpis = service.get_kpis(year, month, today)

    click.echo(f"\nIncome Summary for {year:04d}-{month:02d}:")
    click.echo("-" * 60)
    click.echo(f"{'Outstanding':<36} {format_amount(kpis.outstanding):>20}")
    click.echo(f"{'  Invoices awaiting payment':<36} {kpis.invoiced_count:>20}")
    click.echo(f"{'  Overdue (over 30 days)':<36} {kpis.overdue_count:>20}")
    click.echo(f"{'Ready to invoice':<36} {format_amount(kpis.ready_to_invoice):>20}")
    click.echo(f"{'  Jobs':<36} {kpis.ready_to_invoice_count:>20}")
    click.echo("-" * 60)
    click.echo(f"{'This month':<36} {format_amount(kpis.this_month):>20}")
    click.echo(f"{'  Jobs':<36} {kpis.this_month_count:>20}")
    click.echo(f"{'  Unpaid':<36} {format_amount(kpis.this_month_unpaid):>20}")
    click.echo(f"{'  VAT':<36} {format_amount(kpis.vat_total):>20}")
    click.echo(f"{'Paid this month':<36} {format_amount(kpis.total_paid):>20}")
    click.echo(f"{'Paid previous month':<36} {format_amount(kpis.previous_month_paid):>20}")
    click.echo(f"{'Trend':<36} {format_percent(kpis.trend):>20}")


@summary_group.command("months")
@click.option("--year", type=int, help="Year (default: current year)")
@click.pass_context
def months(ctx, year: int | None):
    """Show which months of a year still have unpaid work."""
    db = ctx.obj["db"]
    service = AnalyticsService(db)
    today = date.today()
    year = year or today.year

    statuses = service.get_month_payment_statuses(year, today)
    click.echo(f"\nPayment status for {year}:")
    for month, status in statuses.items():
        click.echo(f"  {date(year, month, 1).strftime('%b'):<6} {status.value}")


def register_commands(cli):
    """Register summary commands with main CLI."""
    cli.add_command(summary_group, name="summary")
