"""Client management commands."""

from datetime import date

import click

from seder.cli.error_handling import handle_domain_error
from seder.cli.formatting import format_amount
from seder.domain.clients import ClientService


@click.group()
def client_group():
    """Manage clients."""
    pass


@client_group.command("list")
@click.option("--all", "include_archived", is_flag=True, help="Include archived clients")
@click.option("--stats", is_flag=True, help="Show revenue figures per client")
@click.pass_context
def list_clients(ctx, include_archived: bool, stats: bool):
    """List clients in display order."""
    db = ctx.obj["db"]
    service = ClientService(db)

    if stats:
        rows = service.get_clients_with_analytics(date.today())
        if not rows:
            click.echo("No clients found.")
            return
        click.echo("-" * 100)
        click.echo(
            f"{'ID':<6} {'Name':<24} {'Earned':>14} {'This year':>14} {'Outstanding':>14} "
            f"{'Jobs':>6} {'Overdue':>8} {'Avg days':>9}"
        )
        click.echo("-" * 100)
        for row in rows:
            avg_days = f"{row.avg_days_to_payment:.0f}" if row.avg_days_to_payment is not None else "-"
            click.echo(
                f"{row.client.id:<6} {row.client.name[:24]:<24} {format_amount(row.total_earned):>14} "
                f"{format_amount(row.this_year_revenue):>14} {format_amount(row.outstanding_amount):>14} "
                f"{row.job_count:>6} {row.overdue_invoices:>8} {avg_days:>9}"
            )
        return

    clients = service.list_clients(include_archived=include_archived)
    if not clients:
        click.echo("No clients found.")
        return

    click.echo("\nClients:")
    for client in clients:
        archived = " [archived]" if client.is_archived else ""
        click.echo(f"  {client.name} (ID: {client.id}){archived}")


@client_group.command("create")
@click.argument("name")
@click.option("--email", help="Email address")
@click.option("--phone", help="Phone number")
@click.option("--rate", "default_rate", help="Default rate for new jobs")
@click.option("--notes", help="Notes")
@click.pass_context
def create_client(ctx, name: str, email: str | None, phone: str | None, default_rate: str | None, notes: str | None):
    """Create a new client."""
    db = ctx.obj["db"]
    service = ClientService(db)

    try:
        client_id = service.create_client(
            name=name, email=email, phone=phone, notes=notes, default_rate=default_rate
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created client '{name}' (ID: {client_id})")


@client_group.command("archive")
@click.argument("client_id", type=int)
@click.pass_context
def archive_client(ctx, client_id: int):
    """Archive a client. Its income entries are kept."""
    db = ctx.obj["db"]
    service = ClientService(db)

    try:
        service.archive_client(client_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Archived client {client_id}")


@client_group.command("duplicates")
@click.pass_context
def duplicates(ctx):
    """Find client names that look like the same client."""
    db = ctx.obj["db"]
    service = ClientService(db)

    groups = service.find_duplicate_client_names()
    if not groups:
        click.echo("No duplicate client names found.")
        return

    for group in groups:
        click.echo(f"\n{group.normalized_name} ({group.total_count} entries)")
        for usage in group.clients:
            click.echo(f"  {usage.name:<30} {usage.count:>5} entries, last {usage.last_used}")


@client_group.command("merge-names")
@click.argument("target")
@click.argument("sources", nargs=-1, required=True)
@click.pass_context
def merge_names(ctx, target: str, sources: tuple[str, ...]):
    """Rename entries using any of SOURCES to TARGET.

    Examples:
        seder client merge-names "Acme" "acme ltd" "ACME"
    """
    db = ctx.obj["db"]
    service = ClientService(db)

    try:
        result = service.merge_client_names(target, list(sources))
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Merged into '{target}' (ID: {result.client_id}): {result.updated_count} entries updated")


@client_group.command("merge")
@click.argument("target_id", type=int)
@click.argument("source_ids", type=int, nargs=-1, required=True)
@click.pass_context
def merge_clients(ctx, target_id: int, source_ids: tuple[int, ...]):
    """Merge SOURCE_IDS clients into TARGET_ID and archive them."""
    db = ctx.obj["db"]
    service = ClientService(db)

    try:
        result = service.merge_clients(target_id, list(source_ids))
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Merged into client {result.client_id}: {result.updated_count} entries updated")


@client_group.command("sync")
@click.pass_context
def sync_clients(ctx):
    """Create clients for names used on entries and link those entries."""
    db = ctx.obj["db"]
    service = ClientService(db)

    created = service.create_clients_from_existing_names()
    linked = service.link_income_entries_to_clients()
    click.echo(f"Created {created} client(s), linked {linked} entry(ies)")


def register_commands(cli):
    """Register client commands with main CLI."""
    cli.add_command(client_group, name="client")
