"""Utility for resolving bank and category references to IDs."""

from horadofrango.domain.errors import NotFoundError
from horadofrango.domain.store import FinanceStore


def resolve_bank(store: FinanceStore, bank: str) -> str:
    """Resolve bank name or ID to bank ID.

    IDs win over names; names match ignoring case.

    Args:
        store: FinanceStore instance
        bank: Bank ID or name

    Returns:
        Bank ID

    Raises:
        NotFoundError: If bank is not found
    """
    if store.get_bank(bank) is not None:
        return bank

    for candidate in store.banks:
        if candidate.name.lower() == bank.strip().lower():
            return candidate.id

    raise NotFoundError(f"Bank '{bank}' not found")


def resolve_category(store: FinanceStore, category: str) -> str:
    """Resolve category name or ID to category ID.

    Args:
        store: FinanceStore instance
        category: Category ID or name

    Returns:
        Category ID

    Raises:
        NotFoundError: If category is not found
    """
    if store.get_category(category) is not None:
        return category

    for candidate in store.categories:
        if candidate.name.lower() == category.strip().lower():
            return candidate.id

    raise NotFoundError(f"Category '{category}' not found")
