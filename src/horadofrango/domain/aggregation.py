"""Derived figures for the dashboard, category summaries and bank balances.

Every function here is pure: it takes the current collections and returns a
freshly computed value. Nothing is cached, so callers simply call again after
a mutation.
"""

import calendar
from collections import defaultdict
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from horadofrango.domain.defaults import OVERDUE_DAYS, PRODUCT_KEYWORD
from horadofrango.domain.entities import (
    Bank,
    Category,
    CategoryBreakdownLine,
    DashboardKPIs,
    Fiado,
    Period,
    Transaction,
    TransactionType,
    UnitSales,
)
from horadofrango.utils.date_parser import get_date_range, month_bounds

ZERO = Decimal("0")
OTHER_CATEGORY_LABEL = "Other"
UNKNOWN_BANK_LABEL = "Unknown"


# Named dashboard periods and the date-range names they stand for
_PERIOD_RANGES = {
    Period.TODAY: "today",
    Period.YESTERDAY: "yesterday",
    Period.WEEK: "this-week",
    Period.MONTH: "this-month",
}


def period_range(period: Period | str, today: date) -> tuple[date, date]:
    """Return the inclusive calendar range of a named period.

    Weeks start on Monday and end on Sunday; months cover every day of
    today's month.
    """
    return get_date_range(_PERIOD_RANGES[Period(period)], today=today)


def filter_by_range(
    transactions: Iterable[Transaction],
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> list[Transaction]:
    """Keep transactions whose calendar date falls within [start, end]."""
    return [
        txn
        for txn in transactions
        if (start_date is None or txn.date >= start_date)
        and (end_date is None or txn.date <= end_date)
    ]


def revenue_total(transactions: Iterable[Transaction]) -> Decimal:
    """Sum of INCOME amounts."""
    return sum(
        (txn.amount for txn in transactions if txn.type == TransactionType.INCOME),
        ZERO,
    )


def cost_total(transactions: Iterable[Transaction]) -> Decimal:
    """Sum of EXPENSE amounts."""
    return sum(
        (txn.amount for txn in transactions if txn.type == TransactionType.EXPENSE),
        ZERO,
    )


def cash_flow(transactions: Iterable[Transaction]) -> Decimal:
    """Money in minus money out."""
    return sum((txn.signed_amount for txn in transactions), ZERO)


# Cash and profit are the same figure: there is no accrual distinction.
profit = cash_flow


def projection(revenue: Decimal, days_elapsed: int, days_in_month: int) -> Decimal:
    """Extrapolate the current revenue pace to a full month."""
    if days_elapsed <= 0:
        return ZERO
    return revenue / days_elapsed * days_in_month


def month_projection(transactions: Iterable[Transaction], today: date) -> Decimal:
    """Projected revenue for today's month based on month-to-date revenue."""
    start, _ = month_bounds(today.year, today.month)
    month_to_date = filter_by_range(transactions, start, today)
    days_in_month = calendar.monthrange(today.year, today.month)[1]
    return projection(revenue_total(month_to_date), today.day, days_in_month)


def is_overdue(fiado: Fiado, today: date) -> bool:
    """An unpaid fiado older than OVERDUE_DAYS is overdue."""
    return not fiado.is_paid and fiado.date < today - timedelta(days=OVERDUE_DAYS)


def overdue_fiados(fiados: Iterable[Fiado], today: date) -> list[Fiado]:
    """Unpaid fiados past the staleness threshold, largest first."""
    return sorted(
        (f for f in fiados if is_overdue(f, today)),
        key=lambda f: f.amount,
        reverse=True,
    )


def total_pending(fiados: Iterable[Fiado]) -> Decimal:
    """Sum of unpaid fiado amounts."""
    return sum((f.amount for f in fiados if not f.is_paid), ZERO)


def total_overdue(fiados: Iterable[Fiado], today: date) -> Decimal:
    """Sum of overdue fiado amounts."""
    return sum((f.amount for f in fiados if is_overdue(f, today)), ZERO)


def category_label(category_id: str, categories: Iterable[Category]) -> str:
    """Display name for a category id, or "Other" when it no longer exists."""
    for category in categories:
        if category.id == category_id:
            return category.name
    return OTHER_CATEGORY_LABEL


def bank_label(bank_id: str, banks: Iterable[Bank]) -> str:
    """Display name for a bank id, or "Unknown" when it no longer exists."""
    for bank in banks:
        if bank.id == bank_id:
            return bank.name
    return UNKNOWN_BANK_LABEL


def category_breakdown(
    transactions: Iterable[Transaction],
    categories: Sequence[Category],
    by_type: bool = False,
) -> list[CategoryBreakdownLine]:
    """Group paid transactions by category.

    Args:
        transactions: Transactions to group (already filtered by period)
        categories: Known categories, used for labels
        by_type: If True, key groups by (category, type) so income and
            expense lines of one category stay separate

    Returns:
        Lines sorted by amount, largest first. Percentages are shares of the
        grouped total and sum to 100 (or are all 0 when the total is 0).
    """
    names = {category.id: category.name for category in categories}
    totals: dict[tuple[str, Optional[TransactionType]], Decimal] = defaultdict(lambda: ZERO)

    for txn in transactions:
        if not txn.is_paid:
            continue
        key = (txn.category_id, txn.type if by_type else None)
        totals[key] += txn.amount

    grand_total = sum(totals.values(), ZERO)
    lines = [
        CategoryBreakdownLine(
            category_id=category_id,
            category_name=names.get(category_id, OTHER_CATEGORY_LABEL),
            amount=amount,
            percentage=float(amount / grand_total * 100) if grand_total > 0 else 0.0,
            type=txn_type,
        )
        for (category_id, txn_type), amount in totals.items()
    ]
    return sorted(lines, key=lambda line: (-line.amount, line.category_name))


def bank_balance(bank: Bank, transactions: Iterable[Transaction]) -> Decimal:
    """Initial balance plus every paid transaction of the bank, signed by type."""
    return bank.initial_balance + sum(
        (txn.signed_amount for txn in transactions if txn.bank_id == bank.id and txn.is_paid),
        ZERO,
    )


def bank_balances(banks: Iterable[Bank], transactions: Sequence[Transaction]) -> dict[str, Decimal]:
    """Balance of every bank, keyed by bank id."""
    return {bank.id: bank_balance(bank, transactions) for bank in banks}


def unit_sales(
    transactions: Iterable[Transaction],
    categories: Sequence[Category],
    keyword: str = PRODUCT_KEYWORD,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> UnitSales:
    """Units, average ticket and per-unit profit for one product.

    A transaction belongs to the product when its category name contains
    the keyword, ignoring case.
    """
    needle = keyword.lower()
    matching_ids = {c.id for c in categories if needle in c.name.lower()}
    selected = [
        txn
        for txn in filter_by_range(transactions, start_date, end_date)
        if txn.category_id in matching_ids
    ]

    units = sum(txn.quantity or 0 for txn in selected)
    revenue = revenue_total(selected)
    cost = cost_total(selected)
    if units > 0:
        average_ticket = revenue / units
        unit_profit = (revenue - cost) / units
    else:
        average_ticket = ZERO
        unit_profit = ZERO

    return UnitSales(
        keyword=keyword,
        units=units,
        revenue=revenue,
        cost=cost,
        average_ticket=average_ticket,
        unit_profit=unit_profit,
    )


def build_dashboard(
    transactions: Sequence[Transaction],
    fiados: Sequence[Fiado],
    banks: Sequence[Bank],
    categories: Sequence[Category],
    today: date,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    keyword: str = PRODUCT_KEYWORD,
) -> DashboardKPIs:
    """Compute every dashboard figure.

    Period figures cover [start_date, end_date]; month figures and the
    projection always cover today's month.
    """
    in_period = filter_by_range(transactions, start_date, end_date)
    month_start, month_end = month_bounds(today.year, today.month)
    in_month = filter_by_range(transactions, month_start, month_end)

    return DashboardKPIs(
        start_date=start_date,
        end_date=end_date,
        revenue=revenue_total(in_period),
        cost=cost_total(in_period),
        cash_flow=cash_flow(in_period),
        profit=profit(in_period),
        month_revenue=revenue_total(in_month),
        month_expenses=cost_total(in_month),
        projection=month_projection(transactions, today),
        total_pending=total_pending(fiados),
        total_overdue=total_overdue(fiados, today),
        overdue_count=len(overdue_fiados(fiados, today)),
        unit_sales=unit_sales(transactions, categories, keyword, start_date, end_date),
        bank_balances=bank_balances(banks, transactions),
    )
