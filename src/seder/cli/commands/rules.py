"""Classification rule commands."""

import click

from seder.cli.error_handling import handle_domain_error
from seder.config import resolve_rules_path
from seder.domain.classifier import add_keyword, load_rules, remove_keyword, reset_rules, save_rules
from seder.domain.entities import RuleType

RULE_TYPE_CHOICES = [rule_type.value for rule_type in RuleType]


@click.group()
def rules_group():
    """Manage calendar classification rules."""
    pass


@rules_group.command("list")
@click.pass_context
def list_rules(ctx):
    """Show the classification rules."""
    rule_set = load_rules(resolve_rules_path(ctx.obj.get("rules_path")))

    for rule in rule_set.rules:
        state = "" if rule.enabled else " [disabled]"
        click.echo(f"\n{rule.id} ({rule.type.value}, {rule.match_type.value}){state}")
        click.echo(f"  {', '.join(rule.keywords) or '-'}")


@rules_group.command("add-keyword")
@click.argument("rule_type", type=click.Choice(RULE_TYPE_CHOICES, case_sensitive=False))
@click.argument("keyword")
@click.pass_context
def add_rule_keyword(ctx, rule_type: str, keyword: str):
    """Add KEYWORD (and its translation) to the work or personal rule.

    Examples:
        seder rules add-keyword work "wedding"
        seder rules add-keyword personal "רופא"
    """
    path = resolve_rules_path(ctx.obj.get("rules_path"))
    try:
        rule_set = add_keyword(load_rules(path), RuleType(rule_type.lower()), keyword)
    except ValueError as e:
        handle_domain_error(ctx, e)

    save_rules(path, rule_set)
    click.echo(f"Added '{keyword.strip()}' to {rule_type.lower()} rules")


@rules_group.command("remove-keyword")
@click.argument("rule_type", type=click.Choice(RULE_TYPE_CHOICES, case_sensitive=False))
@click.argument("keyword")
@click.pass_context
def remove_rule_keyword(ctx, rule_type: str, keyword: str):
    """Remove KEYWORD from the work or personal rules."""
    path = resolve_rules_path(ctx.obj.get("rules_path"))
    save_rules(path, remove_keyword(load_rules(path), RuleType(rule_type.lower()), keyword))
    click.echo(f"Removed '{keyword.strip()}' from {rule_type.lower()} rules")


@rules_group.command("reset")
@click.pass_context
def reset(ctx):
    """Restore the default rules."""
    reset_rules(resolve_rules_path(ctx.obj.get("rules_path")))
    click.echo("Classification rules reset to defaults")


def register_commands(cli):
    """Register rules commands with main CLI."""
    cli.add_command(rules_group, name="rules")
