"""Date parsing utilities."""

import calendar
from datetime import date, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta


def parse_local_date(date_str: str) -> date:
    """Parse a stored ``YYYY-MM-DD`` calendar date.

    Only the year/month/day part is read; a trailing time component (as
    written by older versions) is ignored so the calendar day never shifts
    with the timezone.

    Raises:
        ValueError: If the string is not a calendar date
    """
    day_part = date_str.strip().split("T")[0]
    try:
        year, month, day = (int(p) for p in day_part.split("-"))
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid calendar date '{date_str}': {e}")
    return date(year, month, day)


def parse_date(date_str: str, today: date | None = None) -> date:
    """Parse a user-entered date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "15/01/2024", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "hoje", "ontem", "this month", etc.

    Day-first parsing is used for ambiguous numeric dates (Brazilian format).

    Args:
        date_str: Date string in various formats
        today: Reference day for relative dates (defaults to date.today())

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    if today is None:
        today = date.today()

    relative_dates = {
        "today": today,
        "hoje": today,
        "yesterday": today - timedelta(days=1),
        "ontem": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    if date_str.startswith("last "):
        period = date_str[5:]
        if period == "month":
            return (today - relativedelta(months=1)).replace(day=1)
        elif period == "week":
            return today - timedelta(days=today.weekday() + 7)
    elif date_str.startswith("this "):
        period = date_str[5:]
        if period == "month":
            return today.replace(day=1)
        elif period == "week":
            return today - timedelta(days=today.weekday())

    # ISO dates go through the local parser so they are never day-first
    if len(date_str) == 10 and date_str[4] == "-" and date_str[7] == "-":
        return parse_local_date(date_str)

    try:
        dt = date_parser.parse(date_str, dayfirst=True)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """Return first and last day of a calendar month."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def get_date_range(period: str, today: date | None = None) -> tuple[date, date]:
    """Get start and end dates for a specified period.

    Weeks run Monday to Sunday; months run from the first to the last day,
    so a range may extend past today.

    Args:
        period: Period string (today, yesterday, this-week, this-month,
            last-week, last-month)
        today: Reference day (defaults to date.today())

    Returns:
        Tuple of (start_date, end_date) for the specified period

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    if today is None:
        today = date.today()

    if period == "today":
        return (today, today)

    elif period == "yesterday":
        yesterday = today - timedelta(days=1)
        return (yesterday, yesterday)

    elif period == "this-week":
        start_date = today - timedelta(days=today.weekday())
        return (start_date, start_date + timedelta(days=6))

    elif period == "last-week":
        start_date = today - timedelta(days=today.weekday() + 7)
        return (start_date, start_date + timedelta(days=6))

    elif period == "this-month":
        return month_bounds(today.year, today.month)

    elif period == "last-month":
        previous = today - relativedelta(months=1)
        return month_bounds(previous.year, previous.month)

    else:
        raise ValueError(
            f"Unknown period: '{period}'. Supported periods: today, yesterday, "
            "this-week, last-week, this-month, last-month"
        )
