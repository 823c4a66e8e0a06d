"""Analytics commands: timeline, category breakdown, follow-ups."""

import click

from seder.cli.date_filters import date_range_options, resolve_cli_date_range
from seder.cli.formatting import format_amount
from seder.domain.analytics import AnalyticsService


def _range_analytics(ctx, preset, start_date, end_date, year, month):
    start, end = resolve_cli_date_range(
        ctx, preset=preset, start_date=start_date, end_date=end_date, year=year, month=month
    )
    analytics = AnalyticsService(ctx.obj["db"]).get_range_analytics(start, end)

    kpis = analytics.kpis
    click.echo(f"\n{start} to {end}")
    click.echo(
        f"Total {format_amount(kpis.total_income)} | Jobs {kpis.jobs_count} | "
        f"Unpaid {format_amount(kpis.unpaid_amount)}"
    )
    return analytics


@click.group()
def analytics_group():
    """Analyze income over a date range."""
    pass


@analytics_group.command("timeline")
@date_range_options
@click.pass_context
def timeline(ctx, preset, start_date, end_date, year, month):
    """Income per week, or per month for ranges over 60 days."""
    analytics = _range_analytics(ctx, preset, start_date, end_date, year, month)

    click.echo("-" * 50)
    click.echo(f"{'Period':<12} {'Amount':>20} {'Jobs':>8}")
    click.echo("-" * 50)
    for bucket in analytics.timeline:
        click.echo(f"{bucket.label:<12} {format_amount(bucket.amount):>20} {bucket.count:>8}")


@analytics_group.command("categories")
@date_range_options
@click.pass_context
def categories(ctx, preset, start_date, end_date, year, month):
    """Income per category, top five plus the rest."""
    analytics = _range_analytics(ctx, preset, start_date, end_date, year, month)

    if not analytics.categories:
        click.echo("No income entries found.")
        return

    click.echo("-" * 60)
    click.echo(f"{'Category':<30} {'Amount':>20} {'Jobs':>8}")
    click.echo("-" * 60)
    for bucket in analytics.categories:
        click.echo(
            f"{bucket.category_name[:30]:<30} {format_amount(bucket.amount):>20} {bucket.count:>8}"
        )


@analytics_group.command("attention")
@date_range_options
@click.pass_context
def attention(ctx, preset, start_date, end_date, year, month):
    """Jobs still needing an invoice or a payment, largest first."""
    analytics = _range_analytics(ctx, preset, start_date, end_date, year, month)

    if not analytics.attention:
        click.echo("Nothing needs attention.")
        return

    click.echo("-" * 100)
    click.echo(f"{'ID':<6} {'Date':<12} {'Client':<20} {'Description':<24} {'Amount':>14} Status")
    click.echo("-" * 100)
    for job in analytics.attention:
        click.echo(
            f"{job.id:<6} {str(job.date):<12} {job.client_name[:20]:<20} "
            f"{job.description[:24]:<24} {format_amount(job.amount):>14} {job.status}"
        )


def register_commands(cli):
    """Register analytics commands with main CLI."""
    cli.add_command(analytics_group, name="analytics")
