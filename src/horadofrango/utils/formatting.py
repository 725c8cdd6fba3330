"""Display formatting for amounts, percentages and dates (pt-BR)."""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP


def format_currency(value: Decimal) -> str:
    """Format an amount as Brazilian reais, e.g. ``R$ 1.234,56``."""
    quantized = Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if quantized < 0 else ""
    text = f"{abs(quantized):,.2f}"
    # swap separators: 1,234.56 -> 1.234,56
    text = text.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}R$ {text}"


def format_percent(value: float) -> str:
    """Format a percentage value (35.7 -> ``35,7%``)."""
    return f"{value:.1f}%".replace(".", ",")


def format_date(value: date) -> str:
    """Format a calendar date as DD/MM/YYYY."""
    return value.strftime("%d/%m/%Y")
