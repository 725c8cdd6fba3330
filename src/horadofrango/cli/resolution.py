"""CLI helpers for bank/category resolution and error handling."""

from __future__ import annotations

import click
from horadofrango.cli.error_handling import handle_domain_error
from horadofrango.domain.store import FinanceStore
from horadofrango.utils.resolver import resolve_bank, resolve_category


def resolve_bank_or_exit(ctx: click.Context, store: FinanceStore, bank: str) -> str:
    """Resolve bank name or ID, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_bank(store, bank)
    except ValueError as exc:
        handle_domain_error(ctx, exc)


def resolve_category_or_exit(ctx: click.Context, store: FinanceStore, category: str) -> str:
    """Resolve category name or ID, or exit with a CLI error."""
    try:
        return resolve_category(store, category)
    except ValueError as exc:
        handle_domain_error(ctx, exc)
