"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


def bank_not_found(bank_id: str) -> str:
    """Return message for missing bank."""
    return f"Bank '{bank_id}' not found"


def category_not_found(category_id: str) -> str:
    """Return message for missing category."""
    return f"Category '{category_id}' not found"


def transaction_not_found(transaction_id: str) -> str:
    """Return message for missing transaction."""
    return f"Transaction '{transaction_id}' not found"


def fiado_not_found(fiado_id: str) -> str:
    """Return message for missing fiado."""
    return f"Fiado '{fiado_id}' not found"


def non_positive_amount(amount) -> str:
    """Return message for amounts that are zero or negative."""
    return f"Amount must be greater than zero (got {amount})"


def blank_field(field_name: str) -> str:
    """Return message for a required text field left empty."""
    return f"{field_name} must not be empty"


def invalid_amount(amount) -> str:
    """Return message for amounts that are not finite numbers."""
    return f"Amount must be a finite number (got {amount})"
