"""Finance store: the single source of truth for every collection."""

import logging
import uuid
import warnings
from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Optional, Sequence

from horadofrango.database.base import Database
from horadofrango.database.mappers import (
    DocumentError,
    bank_from_dict,
    bank_to_dict,
    category_from_dict,
    category_to_dict,
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
from horadofrango.domain import errors
from horadofrango.domain.defaults import DEFAULT_BANKS, DEFAULT_CATEGORIES
from horadofrango.domain.entities import (
    Bank,
    Category,
    Fiado,
    FiadoPayment,
    MonthHistory,
    Transaction,
    TransactionType,
)
from horadofrango.domain.fiado import pay_fiado as build_fiado_payment
from horadofrango.domain.rollover import check_rollover as build_rollover_entry

logger = logging.getLogger(__name__)

BANKS_SLOT = "hdf_banks"
CATEGORIES_SLOT = "hdf_categories"
TRANSACTIONS_SLOT = "hdf_transactions"
FIADOS_SLOT = "hdf_fiados"
HISTORY_SLOT = "hdf_history"
LAST_CHECK_SLOT = "hdf_last_check"

# Unreadable documents are copied to "<slot>.corrupt" before falling back
CORRUPT_SUFFIX = ".corrupt"

# slot -> (attribute, encoder, decoder)
_COLLECTIONS: dict[str, tuple[str, Callable[[Any], dict], Callable[[dict], Any]]] = {
    BANKS_SLOT: ("_banks", bank_to_dict, bank_from_dict),
    CATEGORIES_SLOT: ("_categories", category_to_dict, category_from_dict),
    TRANSACTIONS_SLOT: ("_transactions", transaction_to_dict, transaction_from_dict),
    FIADOS_SLOT: ("_fiados", fiado_to_dict, fiado_from_dict),
    HISTORY_SLOT: ("_history", month_history_to_dict, month_history_from_dict),
}


def new_id() -> str:
    """Generate an identifier for a new entity."""
    return uuid.uuid4().hex


class FinanceStore:
    """In-memory state of the app, persisted slot by slot.

    Every mutator validates first, writes the affected collections to the
    database in one commit and only then swaps the in-memory collections, so
    a failed write leaves the store unchanged.
    """

    def __init__(self, db: Database, now: Callable[[], datetime] = datetime.now):
        """Initialize the store and load every collection.

        Args:
            db: Database instance
            now: Clock returning the current local time
        """
        self.db = db
        self._now = now
        self._banks: list[Bank] = []
        self._categories: list[Category] = []
        self._transactions: list[Transaction] = []
        self._fiados: list[Fiado] = []
        self._history: list[MonthHistory] = []
        self._last_check: datetime = now()
        self.load()

    # Reads
    @property
    def banks(self) -> tuple[Bank, ...]:
        return tuple(self._banks)

    @property
    def categories(self) -> tuple[Category, ...]:
        return tuple(self._categories)

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        return tuple(self._transactions)

    @property
    def fiados(self) -> tuple[Fiado, ...]:
        return tuple(self._fiados)

    @property
    def history(self) -> tuple[MonthHistory, ...]:
        return tuple(self._history)

    @property
    def last_check(self) -> datetime:
        return self._last_check

    def today(self) -> date:
        """Current local calendar day according to the store clock."""
        return self._now().date()

    def get_bank(self, bank_id: str) -> Optional[Bank]:
        return next((b for b in self._banks if b.id == bank_id), None)

    def get_category(self, category_id: str) -> Optional[Category]:
        return next((c for c in self._categories if c.id == category_id), None)

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        return next((t for t in self._transactions if t.id == transaction_id), None)

    def get_fiado(self, fiado_id: str) -> Optional[Fiado]:
        return next((f for f in self._fiados if f.id == fiado_id), None)

    # Loading
    def load(self) -> None:
        """(Re)load every collection from the database.

        Missing or malformed slots fall back to defaults: seed banks and
        categories, empty transactions/fiados/history and a checkpoint of now.
        """
        self._banks = self._load_items(BANKS_SLOT, list(DEFAULT_BANKS))
        self._categories = self._load_items(CATEGORIES_SLOT, list(DEFAULT_CATEGORIES))
        self._transactions = self._load_items(TRANSACTIONS_SLOT, [])
        self._fiados = self._load_items(FIADOS_SLOT, [])
        self._history = self._load_items(HISTORY_SLOT, [])

        last_check = self._load_last_check()
        if last_check is None:
            self._last_check = self._now()
            self.db.write_slot(LAST_CHECK_SLOT, encode_timestamp(self._last_check))
        else:
            self._last_check = last_check

        logger.debug(
            "Loaded %d banks, %d categories, %d transactions, %d fiados",
            len(self._banks),
            len(self._categories),
            len(self._transactions),
            len(self._fiados),
        )
        self.check_rollover()

    def _load_items(self, slot: str, default: list) -> list:
        document = self.db.read_slot(slot)
        if document is None:
            return default
        decoder = _COLLECTIONS[slot][2]
        try:
            return decode_items(document, decoder)
        except DocumentError as e:
            backup = self._preserve(slot, document)
            logger.warning("Ignoring malformed slot %s (copied to %s): %s", slot, backup, e)
            return default

    def _preserve(self, slot: str, document: str) -> str:
        """Copy an unreadable document aside before it can be overwritten.

        Returns the name of the slot now holding the copy. An earlier copy
        of a different document is never replaced.
        """
        backup = slot + CORRUPT_SUFFIX
        for name in self.db.list_slots():
            if name.startswith(backup) and self.db.read_slot(name) == document:
                return name
        if self.db.read_slot(backup) is not None:
            backup = f"{backup}.{self._now():%Y%m%d%H%M%S%f}"
        self.db.write_slot(backup, document)
        return backup

    def _load_last_check(self) -> Optional[datetime]:
        document = self.db.read_slot(LAST_CHECK_SLOT)
        if document is None:
            return None
        try:
            return decode_timestamp(document)
        except DocumentError as e:
            logger.warning("Ignoring malformed slot %s: %s", LAST_CHECK_SLOT, e)
            return None

    def _commit(self, changes: dict[str, list], last_check: Optional[datetime] = None) -> None:
        """Persist whole collections in one write, then swap them in memory."""
        documents = {
            slot: encode_items(items, _COLLECTIONS[slot][1]) for slot, items in changes.items()
        }
        if last_check is not None:
            documents[LAST_CHECK_SLOT] = encode_timestamp(last_check)

        self.db.write_slots(documents)

        for slot, items in changes.items():
            setattr(self, _COLLECTIONS[slot][0], list(items))
        if last_check is not None:
            self._last_check = last_check

    # Rollover
    def check_rollover(self) -> Optional[MonthHistory]:
        """Archive the checkpoint's month once a month boundary is crossed.

        Safe to call repeatedly: after firing, the checkpoint moves to now
        and further calls within the same month do nothing.
        """
        now = self._now()
        entry = build_rollover_entry(self._transactions, self._last_check, now)
        if entry is None:
            return None
        self._commit({HISTORY_SLOT: self._history + [entry]}, last_check=now)
        return entry

    # Transactions
    def add_transaction(
        self,
        date: date,
        description: str,
        amount: Decimal,
        type: TransactionType | str,
        bank_id: str,
        category_id: str,
        is_paid: bool = True,
        quantity: Optional[int] = None,
    ) -> Transaction:
        """Record a transaction.

        Raises:
            ValidationError: If amount is not a positive finite number, quantity
                is negative or the description is blank
            NotFoundError: If the bank or category does not exist
        """
        amount = _finite_amount(amount)
        if amount <= 0:
            raise errors.ValidationError(errors.non_positive_amount(amount))
        if quantity is not None and quantity < 0:
            raise errors.ValidationError(f"Quantity must not be negative (got {quantity})")
        if not description or not description.strip():
            raise errors.ValidationError(errors.blank_field("Description"))
        try:
            txn_type = TransactionType(type)
        except ValueError:
            raise errors.ValidationError(f"Unknown transaction type '{type}'")
        if self.get_bank(bank_id) is None:
            raise errors.NotFoundError(errors.bank_not_found(bank_id))
        if self.get_category(category_id) is None:
            raise errors.NotFoundError(errors.category_not_found(category_id))

        txn = Transaction(
            id=new_id(),
            date=date,
            description=description.strip(),
            amount=amount,
            type=txn_type,
            bank_id=bank_id,
            category_id=category_id,
            is_paid=is_paid,
            quantity=quantity,
        )
        self._commit({TRANSACTIONS_SLOT: self._transactions + [txn]})
        logger.info("Added %s transaction %s of %s", txn.type.value, txn.id, txn.amount)
        self.check_rollover()
        return txn

    def remove_transaction(self, transaction_id: str) -> None:
        """Delete a transaction.

        Raises:
            NotFoundError: If the transaction does not exist
        """
        if self.get_transaction(transaction_id) is None:
            raise errors.NotFoundError(errors.transaction_not_found(transaction_id))
        self._commit(
            {TRANSACTIONS_SLOT: [t for t in self._transactions if t.id != transaction_id]}
        )
        logger.info("Removed transaction %s", transaction_id)
        self.check_rollover()

    # Banks
    def add_bank(self, name: str, color: str, initial_balance: Decimal = Decimal("0")) -> Bank:
        """Register a bank.

        Raises:
            ValidationError: If the name is blank or the balance is not a
                finite number
        """
        if not name or not name.strip():
            raise errors.ValidationError(errors.blank_field("Bank name"))
        balance = _finite_amount(initial_balance)
        bank = Bank(id=new_id(), name=name.strip(), color=color, initial_balance=balance)
        self._commit({BANKS_SLOT: self._banks + [bank]})
        logger.info("Added bank %s (%s)", bank.name, bank.id)
        return bank

    def remove_bank(self, bank_id: str) -> None:
        """Remove a bank. Transactions referencing it are kept.

        Raises:
            NotFoundError: If the bank does not exist
        """
        if self.get_bank(bank_id) is None:
            raise errors.NotFoundError(errors.bank_not_found(bank_id))
        self._commit({BANKS_SLOT: [b for b in self._banks if b.id != bank_id]})
        logger.info("Removed bank %s", bank_id)

    # Categories
    def add_category(self, name: str) -> Category:
        """Register a category.

        Raises:
            ValidationError: If the name is blank
        """
        if not name or not name.strip():
            raise errors.ValidationError(errors.blank_field("Category name"))
        category = Category(id=new_id(), name=name.strip())
        self._commit({CATEGORIES_SLOT: self._categories + [category]})
        logger.info("Added category %s (%s)", category.name, category.id)
        return category

    def remove_category(self, category_id: str) -> None:
        """Remove a category. Transactions referencing it are kept.

        Raises:
            NotFoundError: If the category does not exist
        """
        if self.get_category(category_id) is None:
            raise errors.NotFoundError(errors.category_not_found(category_id))
        self._commit({CATEGORIES_SLOT: [c for c in self._categories if c.id != category_id]})
        logger.info("Removed category %s", category_id)

    # Fiados
    def add_fiado(
        self,
        customer_name: str,
        amount: Decimal,
        date: Optional[date] = None,
        notes: Optional[str] = None,
    ) -> Fiado:
        """Record credit extended to a customer, unpaid.

        Raises:
            ValidationError: If amount is not positive or the name is blank
        """
        amount = _finite_amount(amount)
        if amount <= 0:
            raise errors.ValidationError(errors.non_positive_amount(amount))
        if not customer_name or not customer_name.strip():
            raise errors.ValidationError(errors.blank_field("Customer name"))

        fiado = Fiado(
            id=new_id(),
            customer_name=customer_name.strip(),
            amount=amount,
            date=date if date is not None else self.today(),
            is_paid=False,
            notes=notes or None,
        )
        self._commit({FIADOS_SLOT: self._fiados + [fiado]})
        logger.info("Added fiado %s for %s of %s", fiado.id, fiado.customer_name, fiado.amount)
        return fiado

    def pay_fiado(self, fiado_id: str, bank_id: str) -> Optional[FiadoPayment]:
        """Settle a fiado and record the matching income in one commit.

        Returns:
            The payment, or None when the fiado is unknown or already paid

        Raises:
            NotFoundError: If the receiving bank does not exist
        """
        if self.get_fiado(fiado_id) is not None and self.get_bank(bank_id) is None:
            raise errors.NotFoundError(errors.bank_not_found(bank_id))

        payment = build_fiado_payment(self._fiados, fiado_id, bank_id, self.today())
        if payment is None:
            logger.debug("pay_fiado ignored for %s", fiado_id)
            return None

        self._commit(
            {
                FIADOS_SLOT: [payment.fiado if f.id == fiado_id else f for f in self._fiados],
                TRANSACTIONS_SLOT: self._transactions + [payment.transaction],
            }
        )
        logger.info(
            "Fiado %s paid into bank %s as transaction %s",
            fiado_id,
            bank_id,
            payment.transaction.id,
        )
        self.check_rollover()
        return payment

    def toggle_fiado_paid(self, fiado_id: str) -> Fiado:
        """Flip a fiado's paid flag without touching transactions.

        Deprecated: un-paying leaves the income recorded by ``pay_fiado`` in
        place. Use ``pay_fiado`` to settle and ``remove_transaction`` to undo.

        Raises:
            NotFoundError: If the fiado does not exist
        """
        warnings.warn(
            "toggle_fiado_paid does not record or retract income; use pay_fiado",
            DeprecationWarning,
            stacklevel=2,
        )
        fiado = self.get_fiado(fiado_id)
        if fiado is None:
            raise errors.NotFoundError(errors.fiado_not_found(fiado_id))

        toggled = replace(fiado, is_paid=not fiado.is_paid)
        if not toggled.is_paid:
            logger.warning(
                "Fiado %s marked unpaid; any income already recorded for it is kept",
                fiado_id,
            )
        self._commit({FIADOS_SLOT: [toggled if f.id == fiado_id else f for f in self._fiados]})
        return toggled

    def remove_fiado(self, fiado_id: str) -> None:
        """Delete a fiado regardless of status. Recorded income is kept.

        Raises:
            NotFoundError: If the fiado does not exist
        """
        if self.get_fiado(fiado_id) is None:
            raise errors.NotFoundError(errors.fiado_not_found(fiado_id))
        self._commit({FIADOS_SLOT: [f for f in self._fiados if f.id != fiado_id]})
        logger.info("Removed fiado %s", fiado_id)

    # Reset
    def reset_all_data(self) -> None:
        """Erase the durable store and start over from the defaults.

        Irreversible. Transactions, fiados and history are gone; banks and
        categories are back to the seed data.
        """
        self.db.clear()
        logger.warning("All data erased")
        self.load()
        self._commit(
            {
                BANKS_SLOT: self._banks,
                CATEGORIES_SLOT: self._categories,
                TRANSACTIONS_SLOT: self._transactions,
                FIADOS_SLOT: self._fiados,
                HISTORY_SLOT: self._history,
            }
        )


def sorted_recent_first(items: Sequence[Transaction]) -> list[Transaction]:
    """Transactions newest first (by date, then insertion order)."""
    indexed = list(enumerate(items))
    indexed.sort(key=lambda pair: (pair[1].date, pair[0]), reverse=True)
    return [txn for _, txn in indexed]


def _finite_amount(value) -> Decimal:
    """Coerce to Decimal, rejecting NaN, infinities and unparseable values."""
    try:
        amount = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise errors.ValidationError(errors.invalid_amount(value))
    if not amount.is_finite():
        raise errors.ValidationError(errors.invalid_amount(value))
    return amount
