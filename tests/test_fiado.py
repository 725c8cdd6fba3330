"""Tests for the fiado payment workflow."""

import pytest
from datetime import date, timedelta
from decimal import Decimal

from horadofrango.domain.aggregation import bank_balance, total_overdue, total_pending
from horadofrango.domain.defaults import SALE_CATEGORY_ID
from horadofrango.domain.entities import Fiado, TransactionType
from horadofrango.domain.errors import NotFoundError, ValidationError
from horadofrango.domain.fiado import pay_fiado, payment_description
from horadofrango.domain.store import FinanceStore


class TestPayFiadoUseCase:
    """Tests for the pure pay_fiado function."""

    def _fiados(self):
        return [
            Fiado(id="f1", customer_name="Seu João", amount=Decimal("70"), date=date(2026, 9, 1)),
            Fiado(id="f2", customer_name="Dona Maria", amount=Decimal("35"), date=date(2026, 9, 2), is_paid=True),
        ]

    def test_builds_both_halves(self):
        payment = pay_fiado(self._fiados(), "f1", "3", date(2026, 10, 16))

        assert payment.fiado.id == "f1"
        assert payment.fiado.is_paid is True
        txn = payment.transaction
        assert txn.type == TransactionType.INCOME
        assert txn.amount == Decimal("70")
        assert txn.bank_id == "3"
        assert txn.category_id == SALE_CATEGORY_ID
        assert txn.date == date(2026, 10, 16)
        assert txn.is_paid is True
        assert txn.description == payment_description("Seu João")
        assert "Seu João" in txn.description

    def test_unknown_id_returns_none(self):
        assert pay_fiado(self._fiados(), "missing", "3", date(2026, 10, 16)) is None

    def test_already_paid_returns_none(self):
        assert pay_fiado(self._fiados(), "f2", "3", date(2026, 10, 16)) is None

    def test_input_is_not_mutated(self):
        fiados = self._fiados()
        pay_fiado(fiados, "f1", "3", date(2026, 10, 16))
        assert fiados[0].is_paid is False


class TestStorePayFiado:
    """Tests for FinanceStore.pay_fiado and friends."""

    def test_pay_marks_paid_and_records_income(self, store):
        fiado = store.add_fiado("Seu João", Decimal("70"))

        payment = store.pay_fiado(fiado.id, "3")

        assert store.get_fiado(fiado.id).is_paid is True
        assert store.transactions == (payment.transaction,)

    def test_pay_unknown_fiado_is_noop(self, store):
        assert store.pay_fiado("missing", "3") is None
        assert store.transactions == ()

    def test_pay_twice_records_income_once(self, store):
        fiado = store.add_fiado("Seu João", Decimal("70"))
        store.pay_fiado(fiado.id, "3")

        assert store.pay_fiado(fiado.id, "3") is None
        assert len(store.transactions) == 1

    def test_pay_into_unknown_bank_changes_nothing(self, store):
        fiado = store.add_fiado("Seu João", Decimal("70"))

        with pytest.raises(NotFoundError):
            store.pay_fiado(fiado.id, "nope")

        assert store.get_fiado(fiado.id).is_paid is False
        assert store.transactions == ()

    def test_pay_is_atomic_when_write_fails(self, store, temp_db, clock, monkeypatch):
        fiado = store.add_fiado("Seu João", Decimal("70"))

        def broken_write(documents):
            raise RuntimeError("disk full")

        monkeypatch.setattr(temp_db, "write_slots", broken_write)
        with pytest.raises(RuntimeError):
            store.pay_fiado(fiado.id, "3")
        monkeypatch.undo()

        assert store.get_fiado(fiado.id).is_paid is False
        assert store.transactions == ()
        reloaded = FinanceStore(temp_db, now=clock)
        assert reloaded.get_fiado(fiado.id).is_paid is False
        assert reloaded.transactions == ()

    def test_add_fiado_defaults_to_today(self, store, clock):
        fiado = store.add_fiado("Seu João", Decimal("70"))
        assert fiado.date == clock().date()
        assert fiado.is_paid is False

    def test_add_fiado_validation(self, store):
        with pytest.raises(ValidationError):
            store.add_fiado("Seu João", Decimal("0"))
        with pytest.raises(ValidationError):
            store.add_fiado(" ", Decimal("10"))

    def test_remove_fiado_keeps_income(self, store):
        fiado = store.add_fiado("Seu João", Decimal("70"))
        payment = store.pay_fiado(fiado.id, "3")

        store.remove_fiado(fiado.id)

        assert store.fiados == ()
        assert store.transactions == (payment.transaction,)

    def test_remove_unknown_fiado(self, store):
        with pytest.raises(NotFoundError):
            store.remove_fiado("missing")


class TestLegacyToggle:
    """The deprecated toggle flips the flag only."""

    def test_toggle_warns_and_flips(self, store):
        fiado = store.add_fiado("Seu João", Decimal("70"))

        with pytest.warns(DeprecationWarning):
            toggled = store.toggle_fiado_paid(fiado.id)

        assert toggled.is_paid is True
        assert store.transactions == ()

    def test_unpaying_keeps_recorded_income(self, store):
        fiado = store.add_fiado("Seu João", Decimal("70"))
        store.pay_fiado(fiado.id, "3")

        with pytest.warns(DeprecationWarning):
            store.toggle_fiado_paid(fiado.id)

        assert store.get_fiado(fiado.id).is_paid is False
        assert len(store.transactions) == 1

    def test_toggle_unknown_fiado(self, store):
        with pytest.warns(DeprecationWarning):
            with pytest.raises(NotFoundError):
                store.toggle_fiado_paid("missing")


def test_overdue_fiado_paid_into_bank(store, clock):
    """An overdue fiado leaves the overdue total and raises the bank balance once paid."""
    today = clock().date()
    bank = store.add_bank("b1", "#000000", Decimal("100"))
    fiado = store.add_fiado("Seu João", Decimal("200"), date=today - timedelta(days=40))

    assert total_overdue(store.fiados, today) == Decimal("200")
    assert total_pending(store.fiados) == Decimal("200")
    before = bank_balance(store.get_bank(bank.id), store.transactions)

    store.pay_fiado(fiado.id, bank.id)

    assert total_overdue(store.fiados, today) == Decimal("0")
    assert total_pending(store.fiados) == Decimal("0")
    assert bank_balance(store.get_bank(bank.id), store.transactions) == before + Decimal("200")
