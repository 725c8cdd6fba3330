"""Domain model entities for horadofrango.

These are pure data classes representing business concepts, independent of
how they are serialized into storage slots. State changes never mutate an
entity in place; they build a new one with ``dataclasses.replace``.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional


class TransactionType(str, Enum):
    """Direction of a transaction. Amounts are always positive."""

    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class Period(str, Enum):
    """Named dashboard periods."""

    TODAY = "today"
    YESTERDAY = "yesterday"
    WEEK = "week"
    MONTH = "month"


@dataclass(frozen=True)
class Bank:
    """Bank (or cash drawer) domain entity."""

    id: str
    name: str
    color: str
    initial_balance: Decimal = Decimal("0")


@dataclass(frozen=True)
class Category:
    """Category domain entity."""

    id: str
    name: str


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity."""

    id: str
    date: date
    description: str
    amount: Decimal
    type: TransactionType
    bank_id: str
    category_id: str
    is_paid: bool = True
    quantity: Optional[int] = None

    @property
    def signed_amount(self) -> Decimal:
        """Amount signed by direction (income positive, expense negative)."""
        return self.amount if self.type == TransactionType.INCOME else -self.amount


@dataclass(frozen=True)
class Fiado:
    """Credit extended to a customer, tracked until paid."""

    id: str
    customer_name: str
    amount: Decimal
    date: date
    is_paid: bool = False
    notes: Optional[str] = None


@dataclass(frozen=True)
class MonthHistory:
    """Snapshot of a finished month."""

    month_year: str
    total_sold: Decimal
    total_cost: Decimal
    profit: Decimal
    margin: float


@dataclass(frozen=True)
class FiadoPayment:
    """Combined result of paying a fiado."""

    fiado: Fiado
    transaction: Transaction


@dataclass(frozen=True)
class CategoryBreakdownLine:
    """One group of a category breakdown."""

    category_id: str
    category_name: str
    amount: Decimal
    percentage: float
    type: Optional[TransactionType] = None


@dataclass(frozen=True)
class UnitSales:
    """Unit sales for a product keyword over a period."""

    keyword: str
    units: int
    revenue: Decimal
    cost: Decimal
    average_ticket: Decimal
    unit_profit: Decimal


@dataclass(frozen=True)
class DashboardKPIs:
    """Dashboard figures for a date range plus month-to-date context."""

    start_date: Optional[date]
    end_date: Optional[date]
    revenue: Decimal
    cost: Decimal
    cash_flow: Decimal
    profit: Decimal
    month_revenue: Decimal
    month_expenses: Decimal
    projection: Decimal
    total_pending: Decimal
    total_overdue: Decimal
    overdue_count: int
    unit_sales: UnitSales
    bank_balances: dict[str, Decimal] = field(default_factory=dict)


@dataclass(frozen=True)
class ForecastInputs:
    """User-entered purchase simulation parameters."""

    lot_cost: Decimal
    units_per_lot: int
    selling_price: Decimal
    target_qty: int = 0
    target_revenue: Decimal = Decimal("0")
    target_profit: Decimal = Decimal("0")
    overhead: Decimal = Decimal("0")
    units_sold_this_month: int = 0
    include_overhead: bool = False


@dataclass(frozen=True)
class ForecastResult:
    """Every figure the purchase simulator derives."""

    unit_cost: Decimal
    lots_to_buy: int
    total_units: int
    total_cost: Decimal
    unit_profit: Decimal
    margin: float
    break_even_qty: int
    qty_for_target_revenue: int
    qty_for_target_profit: int
