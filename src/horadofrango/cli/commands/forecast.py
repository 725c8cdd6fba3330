"""Purchase simulator command."""

import click
from decimal import Decimal
from horadofrango.domain.entities import ForecastInputs
from horadofrango.domain.forecast import month_overhead, month_units_sold, simulate
from horadofrango.utils.amount_parser import parse_amount
from horadofrango.utils.formatting import format_currency, format_percent


def _amount_or_exit(ctx, label: str, value: str | None) -> Decimal:
    if value is None:
        return Decimal("0")
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


@click.command("forecast")
@click.option("--lot-cost", required=True, help="Cost of one purchase lot (box)")
@click.option("--units-per-lot", type=int, required=True, help="Sellable units in one lot")
@click.option("--price", required=True, help="Selling price per unit")
@click.option("--target-qty", type=int, default=0, help="Units you plan to sell")
@click.option("--target-revenue", help="Revenue goal")
@click.option("--target-profit", help="Profit goal")
@click.option("--overhead", help="Fixed costs to cover (defaults to this month's expenses)")
@click.option("--include-overhead", is_flag=True, help="Dilute overhead over units sold this month")
@click.pass_context
def forecast(
    ctx,
    lot_cost: str,
    units_per_lot: int,
    price: str,
    target_qty: int,
    target_revenue: str | None,
    target_profit: str | None,
    overhead: str | None,
    include_overhead: bool,
):
    """Simulate a purchase: unit cost, margin and break-even.

    Examples:
        horadofrango forecast --lot-cost 180 --units-per-lot 8 --price 35 --target-qty 40
    """
    store = ctx.obj["store"]
    today = store.today()

    if overhead is None:
        overhead_value = month_overhead(store.transactions, today)
    else:
        overhead_value = _amount_or_exit(ctx, "overhead", overhead)

    inputs = ForecastInputs(
        lot_cost=_amount_or_exit(ctx, "lot cost", lot_cost),
        units_per_lot=units_per_lot,
        selling_price=_amount_or_exit(ctx, "price", price),
        target_qty=target_qty,
        target_revenue=_amount_or_exit(ctx, "target revenue", target_revenue),
        target_profit=_amount_or_exit(ctx, "target profit", target_profit),
        overhead=overhead_value,
        units_sold_this_month=month_units_sold(store.transactions, today),
        include_overhead=include_overhead,
    )
    result = simulate(inputs)

    click.echo("\nForecast")
    click.echo("-" * 50)
    click.echo(f"{'Unit cost':<30s} {format_currency(result.unit_cost):>18s}")
    click.echo(f"{'Profit per unit':<30s} {format_currency(result.unit_profit):>18s}")
    click.echo(f"{'Margin':<30s} {format_percent(result.margin * 100):>18s}")
    click.echo(f"{'Overhead':<30s} {format_currency(inputs.overhead):>18s}")
    click.echo(f"{'Break-even units':<30s} {result.break_even_qty:>18d}")
    if inputs.target_qty:
        click.echo(f"{'Lots to buy':<30s} {result.lots_to_buy:>18d}")
        click.echo(f"{'Units bought':<30s} {result.total_units:>18d}")
        click.echo(f"{'Purchase cost':<30s} {format_currency(result.total_cost):>18s}")
    if inputs.target_revenue:
        click.echo(f"{'Units for revenue goal':<30s} {result.qty_for_target_revenue:>18d}")
    if inputs.target_profit:
        click.echo(f"{'Units for profit goal':<30s} {result.qty_for_target_profit:>18d}")


def register_commands(cli):
    """Register forecast command with main CLI."""
    cli.add_command(forecast)
