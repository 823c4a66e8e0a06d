"""Calendar event classification and import commands."""

import json
from pathlib import Path

import click
from dateutil import parser as date_parser

from seder.cli.error_handling import handle_domain_error
from seder.config import resolve_rules_path
from seder.domain.classifier import classify_events, load_rules, select_for_import
from seder.domain.clients import ClientService
from seder.domain.entities import CalendarEvent
from seder.domain.income import IncomeService


def load_events(path: str) -> list[CalendarEvent]:
    """Read calendar events from a JSON file.

    The file holds a list of objects with ``id``, ``title``, ``start``,
    ``end`` and optionally ``calendarId`` (or ``calendar_id``).

    Raises:
        ValueError: If the file is not a list of well-formed events
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of events in {path}")

    events = []
    for item in data:
        try:
            events.append(
                CalendarEvent(
                    id=str(item["id"]),
                    title=str(item.get("title") or ""),
                    start=date_parser.parse(item["start"]),
                    end=date_parser.parse(item.get("end") or item["start"]),
                    calendar_id=item.get("calendarId") or item.get("calendar_id"),
                )
            )
        except (KeyError, TypeError) as e:
            raise ValueError(f"Malformed event {item!r}: {e}") from e
    return events


def _known_client_names(db) -> list[str]:
    names = {client.name for client in ClientService(db).list_clients()}
    names.update(IncomeService(db).unique_client_names())
    return sorted(names)


def _classify(ctx, events_file: str):
    db = ctx.obj["db"]
    try:
        events = load_events(events_file)
    except ValueError as e:
        handle_domain_error(ctx, e)

    rule_set = load_rules(resolve_rules_path(ctx.obj.get("rules_path")))
    results = classify_events(events, rule_set, _known_client_names(db))
    selected = set(select_for_import(results, db.list_calendar_event_ids()))
    return events, results, selected


@click.group()
def calendar_group():
    """Classify and import calendar events."""
    pass


@calendar_group.command("classify")
@click.argument("events_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def classify(ctx, events_file: str):
    """Show which events look like work.

    Events marked * would be imported by 'seder calendar import'.
    """
    events, results, selected = _classify(ctx, events_file)
    if not events:
        click.echo("No events found.")
        return

    click.echo("-" * 100)
    click.echo(f"  {'Date':<12} {'Title':<36} {'Type':<9} {'Conf':>5}  {'Client':<20} Keyword")
    click.echo("-" * 100)
    for event, result in zip(events, results):
        marker = "*" if result.event_id in selected else " "
        kind = "work" if result.is_work else "personal"
        click.echo(
            f"{marker} {str(event.start.date()):<12} {event.title[:36]:<36} {kind:<9} "
            f"{result.confidence:>5.2f}  {(result.suggested_client or '-')[:20]:<20} "
            f"{result.matched_keyword or '-'}"
        )


@calendar_group.command("import")
@click.argument("events_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--event-id",
    "event_ids",
    multiple=True,
    help="Import this event (repeatable); default is the automatic selection",
)
@click.pass_context
def import_events(ctx, events_file: str, event_ids: tuple[str, ...]):
    """Create draft entries for work events.

    Entries start at amount 0 with the suggested client filled in.
    Events imported before are skipped.
    """
    events, results, selected = _classify(ctx, events_file)
    wanted = set(event_ids) if event_ids else selected

    chosen = [event for event in events if event.id in wanted]
    client_names = {
        result.event_id: result.suggested_client
        for result in results
        if result.event_id in wanted and result.suggested_client
    }

    try:
        created = IncomeService(ctx.obj["db"]).import_calendar_events(chosen, client_names)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Imported {created} event(s) as draft entries")


def register_commands(cli):
    """Register calendar commands with main CLI."""
    cli.add_command(calendar_group, name="calendar")
