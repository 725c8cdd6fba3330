"""Utility functions for horadofrango."""

from horadofrango.utils.date_parser import parse_date, parse_local_date, get_date_range
from horadofrango.utils.amount_parser import parse_amount

__all__ = ["parse_date", "parse_local_date", "get_date_range", "parse_amount"]
