"""Fiado (customer credit) commands."""

import click
from horadofrango.cli.error_handling import handle_domain_error
from horadofrango.cli.resolution import resolve_bank_or_exit
from horadofrango.domain.aggregation import is_overdue, overdue_fiados, total_overdue, total_pending
from horadofrango.domain.defaults import OVERDUE_DAYS
from horadofrango.utils.amount_parser import parse_amount
from horadofrango.utils.date_parser import parse_date
from horadofrango.utils.formatting import format_currency, format_date


def _fiado_line(fiado, today) -> str:
    if fiado.is_paid:
        status = "paid"
    elif is_overdue(fiado, today):
        status = "OVERDUE"
    else:
        status = "pending"
    notes = f" - {fiado.notes}" if fiado.notes else ""
    return (
        f"{format_date(fiado.date)} | {fiado.customer_name:20s} | "
        f"{format_currency(fiado.amount):>12s} | {status:7s} | {fiado.id}{notes}"
    )


@click.group()
def fiado_group():
    """Manage customer credit (fiado)."""
    pass


@fiado_group.command("add")
@click.argument("customer_name")
@click.argument("amount")
@click.option("--date", default="today", show_default=True, help="Date the credit was given")
@click.option("--notes", help="Free-form notes")
@click.pass_context
def add_fiado(ctx, customer_name: str, amount: str, date: str, notes: str | None):
    """Record credit given to a customer.

    Examples:
        horadofrango fiado add "Seu João" 70,00
        horadofrango fiado add "Dona Maria" 35 --date 2026-09-01 --notes "2 frangos"
    """
    store = ctx.obj["store"]

    try:
        fiado_date = parse_date(date, today=store.today())
        fiado_amount = parse_amount(amount)
    except ValueError as e:
        handle_domain_error(ctx, e)

    try:
        fiado = store.add_fiado(
            customer_name=customer_name, amount=fiado_amount, date=fiado_date, notes=notes
        )
        click.echo(f"Created fiado {fiado.id} for '{fiado.customer_name}': {format_currency(fiado.amount)}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@fiado_group.command("list")
@click.option("--all", "show_all", is_flag=True, help="Include paid fiados")
@click.pass_context
def list_fiados(ctx, show_all: bool):
    """List fiados (unpaid only unless --all)."""
    store = ctx.obj["store"]
    today = store.today()

    fiados = [f for f in store.fiados if show_all or not f.is_paid]
    if not fiados:
        click.echo("No fiados found.")
        return

    for fiado in reversed(fiados):
        click.echo(_fiado_line(fiado, today))
    click.echo("-" * 70)
    click.echo(f"Pending: {format_currency(total_pending(store.fiados))}")
    click.echo(f"Overdue (> {OVERDUE_DAYS} days): {format_currency(total_overdue(store.fiados, today))}")


@fiado_group.command("pay")
@click.argument("fiado_id")
@click.option("--bank", required=True, help="Bank receiving the money (name or ID)")
@click.pass_context
def pay_fiado(ctx, fiado_id: str, bank: str):
    """Mark a fiado as paid and record the income."""
    store = ctx.obj["store"]
    bank_id = resolve_bank_or_exit(ctx, store, bank)

    fiado = store.get_fiado(fiado_id)
    if fiado is None:
        click.echo(f"Error: Fiado '{fiado_id}' not found", err=True)
        ctx.exit(1)
    if fiado.is_paid:
        click.echo(f"Fiado '{fiado_id}' is already paid; nothing to do.")
        return

    try:
        payment = store.pay_fiado(fiado_id, bank_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(
        f"Received {format_currency(payment.transaction.amount)} from "
        f"'{payment.fiado.customer_name}' (transaction {payment.transaction.id})"
    )


@fiado_group.command("remove")
@click.argument("fiado_id")
@click.pass_context
def remove_fiado(ctx, fiado_id: str):
    """Delete a fiado. Income already recorded for it is kept."""
    store = ctx.obj["store"]

    try:
        store.remove_fiado(fiado_id)
        click.echo(f"Removed fiado {fiado_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@fiado_group.command("overdue")
@click.pass_context
def overdue(ctx):
    """Show fiados unpaid for more than the overdue threshold."""
    store = ctx.obj["store"]
    today = store.today()

    late = overdue_fiados(store.fiados, today)
    if not late:
        click.echo("No overdue fiados.")
        return

    click.echo(
        f"{len(late)} overdue fiado{'s' if len(late) != 1 else ''} "
        f"totaling {format_currency(total_overdue(store.fiados, today))}:"
    )
    for fiado in late:
        click.echo(_fiado_line(fiado, today))


def register_commands(cli):
    """Register fiado commands with main CLI."""
    cli.add_command(fiado_group, name="fiado")
