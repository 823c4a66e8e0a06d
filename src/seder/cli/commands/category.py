"""Category management commands."""

import click

from seder.cli.error_handling import handle_domain_error
from seder.domain.category import CategoryService


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("list")
@click.option("--all", "include_archived", is_flag=True, help="Include archived categories")
@click.pass_context
def list_categories(ctx, include_archived: bool):
    """List categories in display order."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    categories = service.list_categories(include_archived=include_archived)
    if not categories:
        click.echo("No categories found.")
        return

    click.echo("\nCategories:")
    for category in categories:
        archived = " [archived]" if category.is_archived else ""
        click.echo(f"  {category.name} (ID: {category.id}, {category.color}/{category.icon}){archived}")


@category_group.command("create")
@click.argument("name")
@click.option("--color", default="slate", show_default=True, help="Color name")
@click.option("--icon", default="Circle", show_default=True, help="Icon name")
@click.pass_context
def create_category(ctx, name: str, color: str, icon: str):
    """Create a new category."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    try:
        category_id = service.create_category(name=name, color=color, icon=icon)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created category '{name}' (ID: {category_id})")


@category_group.command("update")
@click.argument("category_id", type=int)
@click.option("--name", help="New name")
@click.option("--color", help="Color name")
@click.option("--icon", help="Icon name")
@click.pass_context
def update_category(ctx, category_id: int, name: str | None, color: str | None, icon: str | None):
    """Rename a category or change its color or icon."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    try:
        service.update_category(category_id, name=name, color=color, icon=icon)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated category {category_id}")


@category_group.command("reorder")
@click.argument("category_ids", type=int, nargs=-1, required=True)
@click.pass_context
def reorder_categories(ctx, category_ids: tuple[int, ...]):
    """Put categories in the given order.

    Examples:
        seder category reorder 3 1 2
    """
    db = ctx.obj["db"]
    service = CategoryService(db)

    orders = {category_id: position for position, category_id in enumerate(category_ids, start=1)}
    try:
        service.reorder_categories(orders)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Reordered {len(orders)} category(ies)")


@category_group.command("seed")
@click.pass_context
def seed_categories(ctx):
    """Create the default categories in an empty database."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    created = service.seed_default_categories()
    if not created:
        click.echo("Categories already exist; nothing seeded.")
        return
    click.echo(f"Created {len(created)} default categories")


@category_group.command("archive")
@click.argument("category_id", type=int)
@click.pass_context
def archive_category(ctx, category_id: int):
    """Archive a category. Entries keep it."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    try:
        service.archive_category(category_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Archived category {category_id}")


@category_group.command("delete")
@click.argument("category_id", type=int)
@click.pass_context
def delete_category(ctx, category_id: int):
    """Delete an unused category."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    try:
        service.delete_category(category_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted category {category_id}")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
