"""Main CLI entry point."""

import logging

import click

from seder.config import DB_PATH_ENV, RULES_PATH_ENV
from seder.database.factories import create_sqlite_database

# Import and register all commands at module level
from seder.cli.commands import (
    analytics,
    calendar,
    category,
    client,
    income,
    rules,
    summary,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help=f"Path to database file (overrides {DB_PATH_ENV} environment variable)",
    envvar=DB_PATH_ENV,
)
@click.option(
    "--rules-path",
    type=click.Path(),
    help=f"Path to classification rules file (overrides {RULES_PATH_ENV} environment variable)",
    envvar=RULES_PATH_ENV,
)
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr")
@click.pass_context
def cli(ctx, db_path: str | None, rules_path: str | None, verbose: bool):
    """Seder - Freelancer income and invoice tracking.

    Record jobs, follow them from done through invoiced to paid, and see
    what is outstanding, ready to invoice or overdue.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj["rules_path"] = rules_path

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
income.register_commands(cli)
summary.register_commands(cli)
analytics.register_commands(cli)
client.register_commands(cli)
category.register_commands(cli)
calendar.register_commands(cli)
rules.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
