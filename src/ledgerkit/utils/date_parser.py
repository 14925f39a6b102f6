"""Date parsing utilities."""

from datetime import date, datetime, time, timedelta, timezone
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2024-01-15", "January 15, 2024", ...) and a few
    relative ones: "today", "yesterday", "tomorrow", "this month", "last month",
    "this year", "last year".

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
        "this month": today.replace(day=1),
        "last month": (today - relativedelta(months=1)).replace(day=1),
        "this year": today.replace(month=1, day=1),
        "last year": today.replace(month=1, day=1) - relativedelta(years=1),
    }
    if date_str in relative_dates:
        return relative_dates[date_str]

    try:
        return date_parser.parse(date_str).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def start_of_day(day: date) -> datetime:
    """First instant of a day, for inclusive lower bounds."""
    return datetime.combine(day, time.min)


def end_of_day(day: date) -> datetime:
    """Last instant of a day, for inclusive upper bounds."""
    return datetime.combine(day, time.max)


def local_to_utc(value: datetime) -> datetime:
    """Convert a naive local time to the naive UTC time the ledger stores."""
    return value.astimezone(timezone.utc).replace(tzinfo=None)
