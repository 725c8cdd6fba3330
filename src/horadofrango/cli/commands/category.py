"""Category management commands."""

import click
from horadofrango.cli.error_handling import handle_domain_error
from horadofrango.cli.resolution import resolve_category_or_exit


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("list")
@click.pass_context
def list_categories(ctx):
    """List all categories."""
    store = ctx.obj["store"]

    if not store.categories:
        click.echo("No categories found.")
        return

    click.echo("\nCategories:")
    for category in store.categories:
        click.echo(f"{category.name} (ID: {category.id})")


@category_group.command("add")
@click.argument("name")
@click.pass_context
def add_category(ctx, name: str):
    """Add a new category."""
    store = ctx.obj["store"]

    try:
        category = store.add_category(name)
        click.echo(f"Created category '{category.name}' (ID: {category.id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@category_group.command("remove")
@click.argument("category")
@click.pass_context
def remove_category(ctx, category: str):
    """Remove a category (by name or ID).

    Transactions in the category are kept and grouped under "Other".
    """
    store = ctx.obj["store"]
    category_id = resolve_category_or_exit(ctx, store, category)
    name = store.get_category(category_id).name

    try:
        store.remove_category(category_id)
        click.echo(f"Removed category '{name}'")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
