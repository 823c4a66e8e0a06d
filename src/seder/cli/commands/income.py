"""Income entry (job) commands."""

from datetime import date

import click

from seder.cli.date_filters import date_range_options, resolve_cli_date_range
from seder.cli.error_handling import handle_domain_error
from seder.cli.formatting import format_amount, format_status
from seder.config import DEFAULT_VAT_RATE
from seder.domain.category import resolve_category_meta
from seder.domain.income import IncomeService
from seder.domain.status import DISPLAY_STATUSES, display_status, is_overdue, parse_display_status
from seder.utils.date_parser import parse_date
from seder.utils.money import sum_amounts, vat_amount

STATUS_CHOICES = [status.value for status in DISPLAY_STATUSES]


@click.group()
def income_group():
    """Manage income entries (jobs)."""
    pass


@income_group.command("add")
@click.option("--date", "entry_date", default="today", help="Job date (YYYY-MM-DD or relative like 'yesterday')")
@click.option("--amount", required=True, help="Gross amount (e.g., 1500 or '₪1,500.00')")
@click.option("--client", default="", help="Client name")
@click.option("--description", default="", help="What the job was")
@click.option("--vat-rate", default=str(DEFAULT_VAT_RATE), show_default=True, help="VAT percentage")
@click.option("--excludes-vat", is_flag=True, help="VAT comes on top of the amount")
@click.option("--category", help="Category name")
@click.option("--notes", help="Notes")
@click.pass_context
def add_entry(
    ctx,
    entry_date: str,
    amount: str,
    client: str,
    description: str,
    vat_rate: str,
    excludes_vat: bool,
    category: str | None,
    notes: str | None,
):
    """Add an income entry.

    Examples:
        seder income add --amount 1500 --client "Acme" --description "Wedding gig"
        seder income add --date yesterday --amount "₪800" --category "הופעות"
    """
    db = ctx.obj["db"]
    service = IncomeService(db)

    try:
        job_date = parse_date(entry_date)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        entry_id = service.create_entry(
            date=job_date,
            amount_gross=amount,
            description=description,
            client_name=client,
            vat_rate=vat_rate,
            includes_vat=not excludes_vat,
            category_name=category,
            notes=notes,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created income entry {entry_id}")


@income_group.command("list")
@date_range_options
@click.option(
    "--status",
    type=click.Choice(STATUS_CHOICES, case_sensitive=False),
    help="Show only entries with this status",
)
@click.pass_context
def list_entries(
    ctx,
    preset: str | None,
    start_date: str | None,
    end_date: str | None,
    year: int | None,
    month: int | None,
    status: str | None,
):
    """List income entries in a date range (default: this month)."""
    db = ctx.obj["db"]
    service = IncomeService(db)
    today = date.today()

    start, end = resolve_cli_date_range(
        ctx, preset=preset, start_date=start_date, end_date=end_date, year=year, month=month
    )
    entries = service.list_entries(start_date=start, end_date=end)

    if status is not None:
        wanted = parse_display_status(status)
        entries = [entry for entry in entries if display_status(entry, today) == wanted]

    if not entries:
        click.echo("No income entries found.")
        return

    click.echo(f"\nFound {len(entries)} entry(ies) from {start} to {end}:")
    click.echo("-" * 100)
    click.echo(
        f"{'ID':<6} {'Date':<12} {'Client':<20} {'Description':<24} {'Category':<14} {'Amount':>14} {'Status':<8}"
    )
    click.echo("-" * 100)

    for entry in entries:
        category = entry.category_name or resolve_category_meta(legacy_category=entry.legacy_category).name
        status_str = format_status(display_status(entry, today))
        if is_overdue(entry, today):
            status_str += " !"
        click.echo(
            f"{entry.id:<6} {str(entry.date):<12} {entry.client_name[:20]:<20} "
            f"{entry.description[:24]:<24} {category[:14]:<14} {format_amount(entry.amount_gross):>14} {status_str:<8}"
        )

    total = sum_amounts(entry.amount_gross for entry in entries)
    vat = sum_amounts(
        vat_amount(entry.amount_gross, entry.vat_rate, entry.includes_vat) for entry in entries
    )
    click.echo("-" * 100)
    click.echo(f"{'TOTAL':<6} {format_amount(total)} (VAT {format_amount(vat)}) | Count: {len(entries)}")


@income_group.command("update")
@click.argument("entry_id", type=int)
@click.option("--date", "entry_date", help="Job date")
@click.option("--amount", help="Gross amount")
@click.option("--client", help="Client name")
@click.option("--description", help="Description")
@click.option("--vat-rate", help="VAT percentage")
@click.option("--category", help="Category name, or empty string to clear")
@click.pass_context
def update_entry(
    ctx,
    entry_id: int,
    entry_date: str | None,
    amount: str | None,
    client: str | None,
    description: str | None,
    vat_rate: str | None,
    category: str | None,
):
    """Update an income entry.

    Updates only the fields that are provided. Use --category "" to clear the category.
    """
    db = ctx.obj["db"]
    service = IncomeService(db)

    job_date = None
    if entry_date is not None:
        try:
            job_date = parse_date(entry_date)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    changes = {}
    if category is not None:
        changes["category_name"] = category or None

    try:
        service.update_entry(
            entry_id,
            date=job_date,
            amount_gross=amount,
            client_name=client,
            description=description,
            vat_rate=vat_rate,
            **changes,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated income entry {entry_id}")


@income_group.command("status")
@click.argument("entry_id", type=int)
@click.argument("status", type=click.Choice(STATUS_CHOICES, case_sensitive=False))
@click.pass_context
def set_status(ctx, entry_id: int, status: str):
    """Mark an entry as done, sent or paid.

    Examples:
        seder income status 12 sent
        seder income status 12 paid
    """
    db = ctx.obj["db"]
    service = IncomeService(db)

    try:
        entry = service.set_status(entry_id, parse_display_status(status), date.today())
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Income entry {entry.id} is now {format_status(display_status(entry, date.today()))}")


@income_group.command("delete")
@click.argument("entry_id", type=int)
@click.option("--force", is_flag=True, help="Skip confirmation prompt")
@click.pass_context
def delete_entry(ctx, entry_id: int, force: bool):
    """Delete an income entry."""
    db = ctx.obj["db"]
    service = IncomeService(db)

    entry = service.get_entry(entry_id)
    if entry is None:
        click.echo(f"Error: Income entry {entry_id} not found", err=True)
        ctx.exit(1)

    if not force:
        click.echo(
            f"{entry.date} {entry.client_name} {entry.description} {format_amount(entry.amount_gross)}"
        )
        if not click.confirm("Delete this entry?"):
            click.echo("Cancelled")
            return

    service.delete_entry(entry_id)
    click.echo(f"Deleted income entry {entry_id}")


def register_commands(cli):
    """Register income commands with main CLI."""
    cli.add_command(income_group, name="income")
