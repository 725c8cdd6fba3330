"""Purchase and break-even simulator.

Plain functions over user-entered figures. Any division by zero resolves to
zero instead of raising.
"""

import math
from datetime import date
from decimal import Decimal
from typing import Iterable

from horadofrango.domain.aggregation import cost_total, filter_by_range
from horadofrango.domain.entities import ForecastInputs, ForecastResult, Transaction
from horadofrango.utils.date_parser import month_bounds

ZERO = Decimal("0")


def month_overhead(transactions: Iterable[Transaction], today: date) -> Decimal:
    """Total expenses recorded in today's month."""
    start, end = month_bounds(today.year, today.month)
    return cost_total(filter_by_range(transactions, start, end))


def month_units_sold(transactions: Iterable[Transaction], today: date) -> int:
    """Units recorded across every transaction of today's month."""
    start, end = month_bounds(today.year, today.month)
    return sum(txn.quantity or 0 for txn in filter_by_range(transactions, start, end))


def unit_cost(
    lot_cost: Decimal,
    units_per_lot: int,
    overhead: Decimal = ZERO,
    units_sold_this_month: int = 0,
    include_overhead: bool = False,
) -> Decimal:
    """Cost of one unit, optionally diluting this month's overhead."""
    base = lot_cost / units_per_lot if units_per_lot > 0 else ZERO
    if include_overhead and units_sold_this_month > 0:
        return base + overhead / units_sold_this_month
    return base


def lots_to_buy(target_qty: int, units_per_lot: int) -> int:
    """Whole lots needed to cover the target quantity."""
    if units_per_lot <= 0 or target_qty <= 0:
        return 0
    return math.ceil(Decimal(target_qty) / units_per_lot)


def unit_profit(selling_price: Decimal, cost: Decimal) -> Decimal:
    return selling_price - cost


def margin(profit_per_unit: Decimal, selling_price: Decimal) -> float:
    """Profit share of the selling price, as a fraction (0.357 = 35.7%)."""
    if selling_price <= 0:
        return 0.0
    return float(profit_per_unit / selling_price)


def break_even_qty(overhead: Decimal, profit_per_unit: Decimal) -> int:
    """Units needed for unit profit to cover the overhead."""
    if profit_per_unit <= 0:
        return 0
    return math.ceil(overhead / profit_per_unit)


def qty_for_target_revenue(target_revenue: Decimal, selling_price: Decimal) -> int:
    if selling_price <= 0:
        return 0
    return math.ceil(target_revenue / selling_price)


def qty_for_target_profit(
    target_profit: Decimal, overhead: Decimal, profit_per_unit: Decimal
) -> int:
    """Units needed to earn the target profit after covering the overhead."""
    if profit_per_unit <= 0:
        return 0
    return math.ceil((target_profit + overhead) / profit_per_unit)


def simulate(inputs: ForecastInputs) -> ForecastResult:
    """Run every forecast calculation for one set of inputs."""
    cost = unit_cost(
        inputs.lot_cost,
        inputs.units_per_lot,
        overhead=inputs.overhead,
        units_sold_this_month=inputs.units_sold_this_month,
        include_overhead=inputs.include_overhead,
    )
    lots = lots_to_buy(inputs.target_qty, inputs.units_per_lot)
    per_unit = unit_profit(inputs.selling_price, cost)

    return ForecastResult(
        unit_cost=cost,
        lots_to_buy=lots,
        total_units=lots * max(inputs.units_per_lot, 0),
        total_cost=lots * inputs.lot_cost,
        unit_profit=per_unit,
        margin=margin(per_unit, inputs.selling_price),
        break_even_qty=break_even_qty(inputs.overhead, per_unit),
        qty_for_target_revenue=qty_for_target_revenue(inputs.target_revenue, inputs.selling_price),
        qty_for_target_profit=qty_for_target_profit(inputs.target_profit, inputs.overhead, per_unit),
    )
