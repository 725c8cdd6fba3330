"""Fiado (customer credit) payment use case."""

import uuid
from dataclasses import replace
from datetime import date
from typing import Iterable, Optional

from horadofrango.domain.defaults import SALE_CATEGORY_ID
from horadofrango.domain.entities import Fiado, FiadoPayment, Transaction, TransactionType


def payment_description(customer_name: str) -> str:
    """Description of the income recorded when a fiado is paid."""
    return f"Recebimento Fiado: {customer_name}"


def pay_fiado(
    fiados: Iterable[Fiado], fiado_id: str, bank_id: str, today: date
) -> Optional[FiadoPayment]:
    """Settle a fiado into a bank.

    Builds both halves of the payment: the fiado marked as paid and the
    income transaction for its amount, filed under the sale category. Nothing
    is stored here; the caller persists both together.

    Args:
        fiados: Current fiados
        fiado_id: Fiado to settle
        bank_id: Bank receiving the money
        today: Date of the income transaction

    Returns:
        The payment, or None when the fiado does not exist or is already paid
    """
    fiado = next((f for f in fiados if f.id == fiado_id), None)
    if fiado is None or fiado.is_paid:
        return None

    transaction = Transaction(
        id=uuid.uuid4().hex,
        date=today,
        description=payment_description(fiado.customer_name),
        amount=fiado.amount,
        type=TransactionType.INCOME,
        bank_id=bank_id,
        category_id=SALE_CATEGORY_ID,
        is_paid=True,
    )
    return FiadoPayment(fiado=replace(fiado, is_paid=True), transaction=transaction)
