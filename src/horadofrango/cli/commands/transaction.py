"""Transaction management commands."""

import click
from horadofrango.cli.error_handling import handle_domain_error
from horadofrango.cli.date_filters import collect_period_flags, period_options, resolve_cli_date_range
from horadofrango.cli.resolution import resolve_bank_or_exit, resolve_category_or_exit
from horadofrango.domain.aggregation import bank_label, category_label, filter_by_range
from horadofrango.domain.entities import TransactionType
from horadofrango.domain.store import sorted_recent_first
from horadofrango.utils.amount_parser import parse_amount
from horadofrango.utils.date_parser import parse_date
from horadofrango.utils.formatting import format_currency, format_date


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("add")
@click.option(
    "--type",
    "txn_type",
    type=click.Choice(["income", "expense"], case_sensitive=False),
    required=True,
    help="Money in (income) or out (expense)",
)
@click.option("--amount", required=True, help="Positive amount (e.g., 35,00 or 1.234,56)")
@click.option("--description", required=True, help="Transaction description")
@click.option("--bank", required=True, help="Bank name or ID")
@click.option("--category", required=True, help="Category name or ID")
@click.option("--date", default="today", show_default=True, help="Date (YYYY-MM-DD, DD/MM/YYYY, 'today', 'yesterday')")
@click.option("--quantity", type=int, help="Units sold or bought")
@click.option("--unpaid", is_flag=True, help="Record as not yet paid (does not affect bank balance)")
@click.pass_context
def add_transaction(
    ctx,
    txn_type: str,
    amount: str,
    description: str,
    bank: str,
    category: str,
    date: str,
    quantity: int | None,
    unpaid: bool,
):
    """Record a transaction.

    Examples:
        horadofrango transaction add --type income --amount 35 --description "Frango assado" --bank Dinheiro --category Venda --quantity 1
        horadofrango transaction add --type expense --amount 180 --description "Caixa de frango" --bank Nubank --category Fornecedor
    """
    store = ctx.obj["store"]

    bank_id = resolve_bank_or_exit(ctx, store, bank)
    category_id = resolve_category_or_exit(ctx, store, category)

    try:
        txn_date = parse_date(date, today=store.today())
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        txn_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        txn = store.add_transaction(
            date=txn_date,
            description=description,
            amount=txn_amount,
            type=TransactionType(txn_type.upper()),
            bank_id=bank_id,
            category_id=category_id,
            is_paid=not unpaid,
            quantity=quantity,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created transaction {txn.id}")
    click.echo(f"  Date: {format_date(txn.date)}")
    click.echo(f"  Amount: {format_currency(txn.signed_amount)}")
    click.echo(f"  Bank: {bank_label(txn.bank_id, store.banks)}")
    click.echo(f"  Category: {category_label(txn.category_id, store.categories)}")


@transaction_group.command("list")
@period_options
@click.option("--limit", type=int, help="Show at most this many transactions")
@click.pass_context
def list_transactions(ctx, start_date: str | None, end_date: str | None, limit: int | None, **periods):
    """List transactions, newest first."""
    store = ctx.obj["store"]
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=collect_period_flags(periods),
        today=store.today(),
    )

    transactions = sorted_recent_first(filter_by_range(store.transactions, start, end))
    if limit is not None:
        transactions = transactions[:limit]

    if not transactions:
        click.echo("No transactions found.")
        return

    for txn in transactions:
        status = "" if txn.is_paid else " (unpaid)"
        quantity = f" x{txn.quantity}" if txn.quantity else ""
        click.echo(
            f"{format_date(txn.date)} | {txn.description:30s}{quantity} | "
            f"{category_label(txn.category_id, store.categories):12s} | "
            f"{bank_label(txn.bank_id, store.banks):15s} | "
            f"{format_currency(txn.signed_amount):>14s}{status} | {txn.id}"
        )


@transaction_group.command("delete")
@click.argument("transaction_id")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_transaction(ctx, transaction_id: str, yes: bool):
    """Delete a transaction."""
    store = ctx.obj["store"]

    txn = store.get_transaction(transaction_id)
    if txn is None:
        click.echo(f"Error: Transaction '{transaction_id}' not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(f"Delete '{txn.description}' ({format_currency(txn.amount)})?"):
        click.echo("Deletion cancelled.")
        return

    try:
        store.remove_transaction(transaction_id)
        click.echo(f"Deleted transaction {transaction_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
