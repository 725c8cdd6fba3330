"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles Brazilian and plain formats:
    - "123.45"
    - "123,45"
    - "R$ 1.234,56"
    - "1,234.56"
    - "1.234"  (thousands separator only when followed by three digits)

    The last separator seen is the decimal one when both are present; a lone
    comma is always decimal.

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()
    amount_str = re.sub(r"R\$|[$€£]", "", amount_str).strip()

    has_comma = "," in amount_str
    has_dot = "." in amount_str
    if has_comma and has_dot:
        if amount_str.rfind(",") > amount_str.rfind("."):
            amount_str = amount_str.replace(".", "").replace(",", ".")
        else:
            amount_str = amount_str.replace(",", "")
    elif has_comma:
        amount_str = amount_str.replace(",", ".")
    elif has_dot and re.fullmatch(r"-?\d{1,3}(\.\d{3})+", amount_str):
        amount_str = amount_str.replace(".", "")

    amount_str = amount_str.replace(" ", "")

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e!r}")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return amount
