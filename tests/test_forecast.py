"""Tests for the purchase and break-even simulator."""

import pytest
from datetime import date
from decimal import Decimal

from horadofrango.domain import forecast
from horadofrango.domain.entities import ForecastInputs, Transaction, TransactionType


class TestUnitFigures:
    """Per-unit cost, profit and margin."""

    def test_unit_cost_from_lot(self):
        assert forecast.unit_cost(Decimal("180"), 8) == Decimal("22.5")

    def test_unit_cost_zero_units_per_lot(self):
        assert forecast.unit_cost(Decimal("180"), 0) == Decimal("0")

    def test_overhead_is_diluted_over_units_sold(self):
        cost = forecast.unit_cost(
            Decimal("180"), 8, overhead=Decimal("900"), units_sold_this_month=100, include_overhead=True
        )
        assert cost == Decimal("31.5")

    def test_overhead_ignored_without_units_sold(self):
        cost = forecast.unit_cost(
            Decimal("180"), 8, overhead=Decimal("900"), units_sold_this_month=0, include_overhead=True
        )
        assert cost == Decimal("22.5")

    def test_overhead_ignored_unless_requested(self):
        cost = forecast.unit_cost(Decimal("180"), 8, overhead=Decimal("900"), units_sold_this_month=100)
        assert cost == Decimal("22.5")

    def test_margin(self):
        assert forecast.margin(Decimal("12.5"), Decimal("35")) == pytest.approx(0.357, abs=1e-3)

    def test_margin_zero_price(self):
        assert forecast.margin(Decimal("12.5"), Decimal("0")) == 0.0


class TestQuantities:
    """Lots and break-even quantities."""

    @pytest.mark.parametrize(
        "target, per_lot, expected",
        [(16, 8, 2), (17, 8, 3), (1, 8, 1), (0, 8, 0), (10, 0, 0)],
    )
    def test_lots_to_buy(self, target, per_lot, expected):
        assert forecast.lots_to_buy(target, per_lot) == expected

    def test_break_even(self):
        assert forecast.break_even_qty(Decimal("900"), Decimal("12.5")) == 72

    def test_break_even_rounds_up(self):
        assert forecast.break_even_qty(Decimal("901"), Decimal("12.5")) == 73

    @pytest.mark.parametrize("per_unit", [Decimal("0"), Decimal("-2")])
    def test_break_even_without_unit_profit(self, per_unit):
        assert forecast.break_even_qty(Decimal("900"), per_unit) == 0

    def test_target_revenue(self):
        assert forecast.qty_for_target_revenue(Decimal("1000"), Decimal("35")) == 29
        assert forecast.qty_for_target_revenue(Decimal("1000"), Decimal("0")) == 0

    def test_target_profit_covers_overhead(self):
        assert forecast.qty_for_target_profit(Decimal("100"), Decimal("900"), Decimal("12.5")) == 80
        assert forecast.qty_for_target_profit(Decimal("100"), Decimal("900"), Decimal("0")) == 0


class TestSimulate:
    """The full simulation."""

    def test_frango_scenario(self):
        result = forecast.simulate(
            ForecastInputs(
                lot_cost=Decimal("180"),
                units_per_lot=8,
                selling_price=Decimal("35"),
                overhead=Decimal("900"),
                target_qty=20,
            )
        )

        assert result.unit_cost == Decimal("22.5")
        assert result.unit_profit == Decimal("12.5")
        assert result.margin == pytest.approx(0.357, abs=1e-3)
        assert result.break_even_qty == 72
        assert result.lots_to_buy == 3
        assert result.total_units == 24
        assert result.total_cost == Decimal("540")
        assert result.qty_for_target_revenue == 0
        assert result.qty_for_target_profit == 72

    def test_all_zero_inputs_do_not_raise(self):
        result = forecast.simulate(
            ForecastInputs(lot_cost=Decimal("0"), units_per_lot=0, selling_price=Decimal("0"))
        )

        assert result.unit_cost == Decimal("0")
        assert result.margin == 0.0
        assert result.break_even_qty == 0
        assert result.lots_to_buy == 0
        assert result.total_cost == Decimal("0")


def test_month_overhead_and_units():
    def txn(txn_id, day, amount, txn_type, quantity=None):
        return Transaction(
            id=txn_id,
            date=day,
            description="x",
            amount=Decimal(amount),
            type=txn_type,
            bank_id="3",
            category_id="c1",
            quantity=quantity,
        )

    txns = [
        txn("rent", date(2026, 10, 5), "600", TransactionType.EXPENSE),
        txn("gas", date(2026, 10, 20), "300", TransactionType.EXPENSE),
        txn("sale", date(2026, 10, 6), "350", TransactionType.INCOME, quantity=10),
        txn("old", date(2026, 9, 30), "999", TransactionType.EXPENSE, quantity=7),
    ]

    assert forecast.month_overhead(txns, date(2026, 10, 16)) == Decimal("900")
    assert forecast.month_units_sold(txns, date(2026, 10, 16)) == 10
