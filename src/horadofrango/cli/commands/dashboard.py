"""Dashboard, category breakdown and month history commands."""

import click
from horadofrango.cli.date_filters import collect_period_flags, period_options, resolve_cli_date_range
from horadofrango.domain.aggregation import (
    bank_label,
    build_dashboard,
    category_breakdown,
    filter_by_range,
    period_range,
)
from horadofrango.domain.defaults import OVERDUE_DAYS, PRODUCT_KEYWORD
from horadofrango.domain.entities import Period, TransactionType
from horadofrango.utils.formatting import format_currency, format_date, format_percent


def _range_label(start, end) -> str:
    if start is None and end is None:
        return "all time"
    if start == end:
        return format_date(start)
    start_text = format_date(start) if start else "..."
    end_text = format_date(end) if end else "..."
    return f"{start_text} - {end_text}"


@click.command("dashboard")
@period_options
@click.option("--product", default=PRODUCT_KEYWORD, show_default=True, help="Category keyword counted as units sold")
@click.pass_context
def dashboard(ctx, start_date: str | None, end_date: str | None, product: str, **periods):
    """Show the dashboard KPIs (defaults to today)."""
    store = ctx.obj["store"]
    today = store.today()
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=collect_period_flags(periods),
        today=today,
        default_range=period_range(Period.TODAY, today),
    )

    kpis = build_dashboard(
        store.transactions,
        store.fiados,
        store.banks,
        store.categories,
        today=today,
        start_date=start,
        end_date=end,
        keyword=product,
    )

    click.echo(f"\nDashboard: {_range_label(start, end)}")
    click.echo("-" * 50)
    click.echo(f"{'Sold':<30s} {format_currency(kpis.revenue):>18s}")
    click.echo(f"{'Costs':<30s} {format_currency(kpis.cost):>18s}")
    click.echo(f"{'Cash flow / profit':<30s} {format_currency(kpis.cash_flow):>18s}")
    click.echo(f"{f'Units ({product})':<30s} {kpis.unit_sales.units:>18d}")
    click.echo(f"{'Average ticket':<30s} {format_currency(kpis.unit_sales.average_ticket):>18s}")
    click.echo(f"{'Profit per unit':<30s} {format_currency(kpis.unit_sales.unit_profit):>18s}")

    click.echo(f"\nThis month ({today.month}/{today.year})")
    click.echo("-" * 50)
    click.echo(f"{'Revenue':<30s} {format_currency(kpis.month_revenue):>18s}")
    click.echo(f"{'Expenses':<30s} {format_currency(kpis.month_expenses):>18s}")
    click.echo(f"{'Projected revenue':<30s} {format_currency(kpis.projection):>18s}")

    click.echo("\nFiados")
    click.echo("-" * 50)
    click.echo(f"{'Pending':<30s} {format_currency(kpis.total_pending):>18s}")
    click.echo(f"{f'Overdue (> {OVERDUE_DAYS} days)':<30s} {format_currency(kpis.total_overdue):>18s}")
    if kpis.overdue_count:
        click.echo(
            f"Warning: {kpis.overdue_count} fiado{'s' if kpis.overdue_count != 1 else ''} overdue"
        )

    click.echo("\nBanks")
    click.echo("-" * 50)
    for bank_id, balance in kpis.bank_balances.items():
        click.echo(f"{bank_label(bank_id, store.banks):<30s} {format_currency(balance):>18s}")


@click.command("breakdown")
@period_options
@click.option("--by-type", is_flag=True, help="Separate income and expense lines of each category")
@click.pass_context
def breakdown(ctx, start_date: str | None, end_date: str | None, by_type: bool, **periods):
    """Show paid totals per category (defaults to this month)."""
    store = ctx.obj["store"]
    today = store.today()
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=collect_period_flags(periods),
        today=today,
        default_range=period_range(Period.MONTH, today),
    )

    lines = category_breakdown(
        filter_by_range(store.transactions, start, end), store.categories, by_type=by_type
    )
    if not lines:
        click.echo("No paid transactions in this period.")
        return

    click.echo(f"\nCategories: {_range_label(start, end)}")
    click.echo("-" * 60)
    for line in lines:
        name = line.category_name
        if line.type is not None:
            name = f"{name} ({'in' if line.type == TransactionType.INCOME else 'out'})"
        click.echo(f"{name:<30s} {format_currency(line.amount):>16s} {format_percent(line.percentage):>10s}")


@click.command("history")
@click.pass_context
def history(ctx):
    """Show the summaries of finished months."""
    store = ctx.obj["store"]

    if not store.history:
        click.echo("No month history yet.")
        return

    click.echo(f"\n{'Month':<10s} {'Sold':>16s} {'Cost':>16s} {'Profit':>16s} {'Margin':>8s}")
    click.echo("-" * 70)
    for entry in reversed(store.history):
        click.echo(
            f"{entry.month_year:<10s} {format_currency(entry.total_sold):>16s} "
            f"{format_currency(entry.total_cost):>16s} {format_currency(entry.profit):>16s} "
            f"{format_percent(entry.margin):>8s}"
        )


def register_commands(cli):
    """Register dashboard commands with main CLI."""
    cli.add_command(dashboard)
    cli.add_command(breakdown)
    cli.add_command(history)
