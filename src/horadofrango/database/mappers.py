"""Mapper functions to convert between domain entities and slot documents.

Slot documents are JSON objects of the form ``{"version": 1, "items": ...}``.
Bare JSON values (as written before versioning) are still accepted on read.
Money is stored as a decimal string and calendar dates as ``YYYY-MM-DD``.
"""

import json
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Optional, Sequence, TypeVar

from horadofrango.domain import entities as domain
from horadofrango.utils.date_parser import parse_local_date

SCHEMA_VERSION = 1

T = TypeVar("T")

# Transaction types as written by the browser version of the app
LEGACY_TRANSACTION_TYPES = {
    "RECEITA": domain.TransactionType.INCOME,
    "DESPESA": domain.TransactionType.EXPENSE,
}


class DocumentError(ValueError):
    """Stored document cannot be decoded."""


def bank_to_dict(bank: domain.Bank) -> dict[str, Any]:
    """Convert domain Bank entity to a JSON-ready dict."""
    return {
        "id": bank.id,
        "name": bank.name,
        "color": bank.color,
        "initial_balance": str(bank.initial_balance),
    }


def bank_from_dict(data: dict[str, Any]) -> domain.Bank:
    """Convert a stored dict to domain Bank entity."""
    return domain.Bank(
        id=str(data["id"]),
        name=data["name"],
        color=data.get("color", ""),
        initial_balance=_decimal(data.get("initial_balance", data.get("initialBalance", "0"))),
    )


def category_to_dict(category: domain.Category) -> dict[str, Any]:
    """Convert domain Category entity to a JSON-ready dict."""
    return {"id": category.id, "name": category.name}


def category_from_dict(data: dict[str, Any]) -> domain.Category:
    """Convert a stored dict to domain Category entity."""
    return domain.Category(id=str(data["id"]), name=data["name"])


def transaction_to_dict(txn: domain.Transaction) -> dict[str, Any]:
    """Convert domain Transaction entity to a JSON-ready dict."""
    return {
        "id": txn.id,
        "date": txn.date.isoformat(),
        "description": txn.description,
        "amount": str(txn.amount),
        "type": txn.type.value,
        "bank_id": txn.bank_id,
        "category_id": txn.category_id,
        "is_paid": txn.is_paid,
        "quantity": txn.quantity,
    }


def transaction_from_dict(data: dict[str, Any]) -> domain.Transaction:
    """Convert a stored dict to domain Transaction entity."""
    quantity = data.get("quantity")
    return domain.Transaction(
        id=str(data["id"]),
        date=parse_local_date(data["date"]),
        description=data.get("description", ""),
        amount=_decimal(data["amount"]),
        type=_transaction_type(data["type"]),
        bank_id=str(data.get("bank_id", data.get("bankId", ""))),
        category_id=str(data.get("category_id", data.get("categoryId", ""))),
        is_paid=_flag(data.get("is_paid", data.get("isPaid", True))),
        quantity=int(quantity) if quantity is not None else None,
    )


def fiado_to_dict(fiado: domain.Fiado) -> dict[str, Any]:
    """Convert domain Fiado entity to a JSON-ready dict."""
    return {
        "id": fiado.id,
        "customer_name": fiado.customer_name,
        "amount": str(fiado.amount),
        "date": fiado.date.isoformat(),
        "is_paid": fiado.is_paid,
        "notes": fiado.notes,
    }


def fiado_from_dict(data: dict[str, Any]) -> domain.Fiado:
    """Convert a stored dict to domain Fiado entity."""
    return domain.Fiado(
        id=str(data["id"]),
        customer_name=data.get("customer_name", data.get("customerName", "")),
        amount=_decimal(data["amount"]),
        date=parse_local_date(data["date"]),
        is_paid=_flag(data.get("is_paid", data.get("isPaid", False))),
        notes=data.get("notes"),
    )


def month_history_to_dict(entry: domain.MonthHistory) -> dict[str, Any]:
    """Convert domain MonthHistory entity to a JSON-ready dict."""
    return {
        "month_year": entry.month_year,
        "total_sold": str(entry.total_sold),
        "total_cost": str(entry.total_cost),
        "profit": str(entry.profit),
        "margin": entry.margin,
    }


def month_history_from_dict(data: dict[str, Any]) -> domain.MonthHistory:
    """Convert a stored dict to domain MonthHistory entity."""
    return domain.MonthHistory(
        month_year=_month_label(data["month_year"] if "month_year" in data else data["monthYear"]),
        total_sold=_decimal(data.get("total_sold", data.get("totalSold"))),
        total_cost=_decimal(data.get("total_cost", data.get("totalCost"))),
        profit=_decimal(data["profit"]),
        margin=float(data["margin"]),
    )


def encode_items(items: Sequence[T], to_dict: Callable[[T], dict[str, Any]]) -> str:
    """Serialize a collection into a versioned slot document."""
    return json.dumps(
        {"version": SCHEMA_VERSION, "items": [to_dict(item) for item in items]},
        ensure_ascii=False,
    )


def decode_items(document: str, from_dict: Callable[[dict[str, Any]], T]) -> list[T]:
    """Deserialize a slot document into a list of entities.

    Raises:
        DocumentError: If the document or any item is malformed
    """
    payload = _unwrap(document)
    if not isinstance(payload, list):
        raise DocumentError("Expected a list of items")
    try:
        return [from_dict(item) for item in payload]
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise DocumentError(f"Malformed item: {e!r}")


def encode_timestamp(value: datetime) -> str:
    """Serialize the rollover checkpoint."""
    return json.dumps({"version": SCHEMA_VERSION, "items": value.isoformat()})


def decode_timestamp(document: str) -> datetime:
    """Deserialize the rollover checkpoint.

    Accepts a versioned document, a JSON string or a raw ISO timestamp.

    Raises:
        DocumentError: If no timestamp can be read
    """
    try:
        payload = _unwrap(document)
    except DocumentError:
        payload = document
    if not isinstance(payload, str):
        raise DocumentError("Expected an ISO timestamp")
    try:
        value = datetime.fromisoformat(payload.strip().replace("Z", "+00:00"))
    except ValueError as e:
        raise DocumentError(f"Invalid timestamp: {e}")
    # Naive local time is the only clock the store compares against
    if value.tzinfo is not None:
        value = value.astimezone().replace(tzinfo=None)
    return value


def _unwrap(document: str) -> Any:
    try:
        payload = json.loads(document)
    except (TypeError, json.JSONDecodeError) as e:
        raise DocumentError(f"Invalid JSON: {e}")
    if isinstance(payload, dict) and "items" in payload:
        version = payload.get("version")
        if not isinstance(version, int) or version > SCHEMA_VERSION:
            raise DocumentError(f"Unsupported document version: {version!r}")
        return payload["items"]
    return payload


def _decimal(value: Any) -> Decimal:
    if value is None:
        raise ValueError("Missing amount")
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"Invalid amount {value!r}")
    if not amount.is_finite():
        raise ValueError(f"Invalid amount {value!r}")
    return amount


def _transaction_type(value: Any) -> domain.TransactionType:
    if value in LEGACY_TRANSACTION_TYPES:
        return LEGACY_TRANSACTION_TYPES[value]
    return domain.TransactionType(value)


def _flag(value: Any) -> bool:
    # "false" must not read as True
    if not isinstance(value, bool):
        raise ValueError(f"Invalid flag {value!r}")
    return value


def _month_label(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Invalid month label {value!r}")
    return value
