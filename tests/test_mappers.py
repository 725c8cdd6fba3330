"""Tests for slot document mappers."""

import json
import pytest
from datetime import date, datetime
from decimal import Decimal

from horadofrango.database.mappers import (
    DocumentError,
    SCHEMA_VERSION,
    bank_from_dict,
    bank_to_dict,
    decode_items,
    decode_timestamp,
    encode_items,
    encode_timestamp,
    fiado_from_dict,
    fiado_to_dict,
    month_history_from_dict,
    month_history_to_dict,
    transaction_from_dict,
    transaction_to_dict,
)
from horadofrango.domain.entities import Bank, Fiado, MonthHistory, Transaction, TransactionType


class TestTransactionMapper:
    """Tests for Transaction mapper."""

    def test_transaction_to_dict(self):
        txn = Transaction(
            id="t1",
            date=date(2026, 10, 5),
            description="Frango",
            amount=Decimal("35.50"),
            type=TransactionType.INCOME,
            bank_id="3",
            category_id="c1",
            is_paid=False,
            quantity=2,
        )
        data = transaction_to_dict(txn)

        assert data["date"] == "2026-10-05"
        assert data["amount"] == "35.50"
        assert data["type"] == "INCOME"
        assert data["is_paid"] is False
        assert data["quantity"] == 2
        assert transaction_from_dict(data) == txn

    def test_transaction_from_legacy_camel_case(self):
        txn = transaction_from_dict(
            {
                "id": "abc123",
                "date": "2026-10-05T14:30:00.000Z",
                "description": "Caixa de frango",
                "amount": 180,
                "type": "DESPESA",
                "bankId": "1",
                "categoryId": "c4",
                "isPaid": True,
            }
        )

        assert txn.date == date(2026, 10, 5)
        assert txn.amount == Decimal("180")
        assert txn.type == TransactionType.EXPENSE
        assert txn.bank_id == "1"
        assert txn.category_id == "c4"
        assert txn.quantity is None

    def test_legacy_income_type(self):
        txn = transaction_from_dict(
            {
                "id": "x1",
                "date": "2026-10-05",
                "description": "Frango assado",
                "amount": 35,
                "type": "RECEITA",
                "bankId": "3",
                "categoryId": "c1",
                "isPaid": False,
                "quantity": 1,
            }
        )

        assert txn.type == TransactionType.INCOME
        assert txn.is_paid is False
        assert txn.quantity == 1

    @pytest.mark.parametrize("flag", ["false", "true", 0, 1, None])
    def test_paid_flag_must_be_boolean(self, flag):
        data = {
            "id": "x1",
            "date": "2026-10-05",
            "description": "Frango",
            "amount": "35",
            "type": "INCOME",
            "bank_id": "3",
            "category_id": "c1",
            "is_paid": flag,
        }
        with pytest.raises(ValueError):
            transaction_from_dict(data)


class TestFiadoMapper:
    """Tests for Fiado mapper."""

    def test_fiado_to_dict_and_back(self):
        fiado = Fiado(
            id="f1",
            customer_name="Dona Maria",
            amount=Decimal("70.00"),
            date=date(2026, 9, 1),
            notes="2 frangos",
        )
        data = fiado_to_dict(fiado)

        assert data["customer_name"] == "Dona Maria"
        assert data["is_paid"] is False
        assert fiado_from_dict(data) == fiado


def test_bank_from_dict_defaults_initial_balance():
    bank = bank_from_dict({"id": 7, "name": "Itaú", "color": "#FF7000"})
    assert bank == Bank(id="7", name="Itaú", color="#FF7000", initial_balance=Decimal("0"))
    assert bank_to_dict(bank)["initial_balance"] == "0"


def test_month_history_to_dict_and_back():
    entry = MonthHistory(
        month_year="9/2026",
        total_sold=Decimal("1000"),
        total_cost=Decimal("600"),
        profit=Decimal("400"),
        margin=40.0,
    )
    assert month_history_from_dict(month_history_to_dict(entry)) == entry


def test_encode_items_is_versioned():
    document = encode_items([Bank(id="1", name="Caixa", color="#1A75CF")], bank_to_dict)
    payload = json.loads(document)

    assert payload["version"] == SCHEMA_VERSION
    assert payload["items"][0]["name"] == "Caixa"


def test_decode_items_accepts_bare_list():
    document = json.dumps([{"id": "c1", "name": "Venda"}, {"id": "c2", "name": "Salário"}])
    from horadofrango.database.mappers import category_from_dict

    categories = decode_items(document, category_from_dict)
    assert [c.name for c in categories] == ["Venda", "Salário"]


@pytest.mark.parametrize(
    "document",
    [
        "not json",
        json.dumps({"unexpected": True}),
        json.dumps({"version": SCHEMA_VERSION + 1, "items": []}),
        json.dumps([{"id": "1"}]),
        json.dumps([{"id": "1", "name": "X", "amount": "abc"}]),
    ],
)
def test_decode_items_rejects_malformed(document):
    with pytest.raises(DocumentError):
        decode_items(document, fiado_from_dict)


def test_timestamp_round_trip():
    value = datetime(2026, 9, 30, 23, 59, 1)
    assert decode_timestamp(encode_timestamp(value)) == value


def test_decode_timestamp_accepts_raw_iso():
    assert decode_timestamp("2026-09-30T10:00:00") == datetime(2026, 9, 30, 10, 0)


def test_decode_timestamp_rejects_garbage():
    with pytest.raises(DocumentError):
        decode_timestamp("yesterday-ish")


def test_legacy_ledger_document_decodes_every_item():
    document = json.dumps(
        [
            {
                "id": "k3j9x",
                "date": "2026-09-12T03:00:00.000Z",
                "description": "Venda balcão",
                "amount": 70,
                "type": "RECEITA",
                "bankId": "3",
                "categoryId": "c1",
                "isPaid": True,
                "quantity": 2,
            },
            {
                "id": "p0q1z",
                "date": "2026-09-13",
                "description": "Fornecedor",
                "amount": 180.5,
                "type": "DESPESA",
                "bankId": "2",
                "categoryId": "c4",
                "isPaid": False,
            },
        ]
    )

    txns = decode_items(document, transaction_from_dict)

    assert [t.type for t in txns] == [TransactionType.INCOME, TransactionType.EXPENSE]
    assert txns[1].amount == Decimal("180.5")


def test_fiado_paid_flag_must_be_boolean():
    with pytest.raises(ValueError):
        fiado_from_dict(
            {"id": "f1", "customerName": "Seu João", "amount": 70, "date": "2026-09-01", "isPaid": "false"}
        )


@pytest.mark.parametrize("label", [None, "", 9])
def test_month_history_requires_label(label):
    data = {"totalSold": 1, "totalCost": 0, "profit": 1, "margin": 100}
    if label is not None:
        data["monthYear"] = label

    with pytest.raises((KeyError, ValueError)):
        month_history_from_dict(data)
    with pytest.raises(DocumentError):
        decode_items(json.dumps([data]), month_history_from_dict)


def test_month_history_from_legacy_camel_case():
    entry = month_history_from_dict(
        {"monthYear": "9/2026", "totalSold": 1000, "totalCost": 600, "profit": 400, "margin": 40}
    )
    assert entry.month_year == "9/2026"
    assert entry.total_sold == Decimal("1000")
