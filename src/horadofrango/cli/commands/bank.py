"""Bank management commands."""

import click
from decimal import Decimal
from horadofrango.cli.error_handling import handle_domain_error
from horadofrango.cli.resolution import resolve_bank_or_exit
from horadofrango.domain.aggregation import bank_balances
from horadofrango.utils.amount_parser import parse_amount
from horadofrango.utils.formatting import format_currency


@click.group()
def bank_group():
    """Manage banks."""
    pass


@bank_group.command("add")
@click.argument("name", metavar="BANK_NAME")
@click.option("--color", default="#3b82f6", show_default=True, help="Display color")
@click.option("--initial-balance", default="0", help="Opening balance (e.g., 150,00)")
@click.pass_context
def add_bank(ctx, name: str, color: str, initial_balance: str):
    """Add a bank.

    Examples:
        horadofrango bank add "Mercado Pago"
        horadofrango bank add "Cofre" --color "#000000" --initial-balance 200
    """
    store = ctx.obj["store"]

    try:
        balance = parse_amount(initial_balance)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        bank = store.add_bank(name=name, color=color, initial_balance=balance)
        click.echo(f"Created bank '{bank.name}' (ID: {bank.id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@bank_group.command("list")
@click.pass_context
def list_banks(ctx):
    """List banks with their current balances.

    Balances count only paid transactions.
    """
    store = ctx.obj["store"]

    if not store.banks:
        click.echo("No banks found.")
        return

    balances = bank_balances(store.banks, store.transactions)
    total = sum(balances.values(), Decimal("0"))

    click.echo("\nBanks:")
    click.echo("-" * 70)
    for bank in store.banks:
        click.echo(
            f"ID: {bank.id:>32s} | {bank.name:20s} | {format_currency(balances[bank.id]):>14s}"
        )
    click.echo("-" * 70)
    click.echo(f"{'Total':>57s} {format_currency(total):>14s}")


@bank_group.command("remove")
@click.argument("bank", metavar="BANK")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def remove_bank(ctx, bank: str, yes: bool) -> None:
    """Remove a bank.

    BANK can be a bank name or ID. Transactions recorded against the bank
    are kept and shown as "Unknown".
    """
    store = ctx.obj["store"]
    bank_id = resolve_bank_or_exit(ctx, store, bank)
    bank_obj = store.get_bank(bank_id)

    if not yes and not click.confirm(f"Are you sure you want to remove bank '{bank_obj.name}'?"):
        click.echo("Removal cancelled.")
        return

    try:
        store.remove_bank(bank_id)
        click.echo(f"Removed bank '{bank_obj.name}'")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register bank commands with main CLI."""
    cli.add_command(bank_group, name="bank")
