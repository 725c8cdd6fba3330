"""Month rollover: archive a summary of the month that just ended."""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional

from horadofrango.domain.aggregation import cost_total, filter_by_range, revenue_total
from horadofrango.domain.entities import MonthHistory, Transaction
from horadofrango.utils.date_parser import month_bounds

logger = logging.getLogger(__name__)


def month_label(year: int, month: int) -> str:
    """History label for a month, e.g. "9/2026"."""
    return f"{month}/{year}"


def summarize_month(transactions: Iterable[Transaction], year: int, month: int) -> MonthHistory:
    """Build the history snapshot of one calendar month."""
    start, end = month_bounds(year, month)
    in_month = filter_by_range(transactions, start, end)
    total_sold = revenue_total(in_month)
    total_cost = cost_total(in_month)
    profit = total_sold - total_cost
    margin = float(profit / total_sold * 100) if total_sold > 0 else 0.0

    return MonthHistory(
        month_year=month_label(year, month),
        total_sold=total_sold,
        total_cost=total_cost,
        profit=profit,
        margin=margin,
    )


def crossed_month(last_check: datetime, now: datetime) -> bool:
    return (now.year, now.month) != (last_check.year, last_check.month)


def check_rollover(
    transactions: Iterable[Transaction], last_check: datetime, now: datetime
) -> Optional[MonthHistory]:
    """Summarize the checkpoint's month if a month boundary was crossed.

    Args:
        transactions: The full transaction ledger (never modified)
        last_check: When boundaries were last evaluated
        now: Current local time

    Returns:
        The snapshot to append, or None when still in the checkpoint's month
    """
    if not crossed_month(last_check, now):
        return None

    entry = summarize_month(transactions, last_check.year, last_check.month)
    logger.info(
        "Month rollover %s: sold=%s cost=%s profit=%s",
        entry.month_year,
        entry.total_sold,
        entry.total_cost,
        entry.profit,
    )
    return entry
