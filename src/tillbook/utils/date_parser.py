"""Date parsing utilities."""

from datetime import date, datetime, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

PERIODS = ("today", "yesterday", "this-week", "last-week", "this-month", "last-month")


def _relative_day(value: str, today: date) -> date | None:
    return {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }.get(value)


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Accepts "today", "yesterday", "tomorrow" and anything dateutil can
    parse ("2024-01-15", "Jan 15 2024", ...).

    Raises:
        ValueError: If date string cannot be parsed
    """
    value = date_str.strip().lower()
    relative = _relative_day(value, date.today())
    if relative is not None:
        return relative

    try:
        return date_parser.parse(value).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_datetime(value: str) -> datetime:
    """Parse a timestamp for a sale, payment or expense.

    "now" returns the current local time; a bare date means midnight of
    that day.

    Raises:
        ValueError: If the string cannot be parsed
    """
    text = value.strip().lower()
    if text == "now":
        return datetime.now().replace(microsecond=0)

    relative = _relative_day(text, date.today())
    if relative is not None:
        return datetime.combine(relative, datetime.min.time())

    try:
        return date_parser.parse(text)
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date/time '{value}': {e}")


def get_date_range(period: str) -> tuple[date, date]:
    """Get start and end dates (inclusive) for a named period.

    Args:
        period: One of today, yesterday, this-week, last-week, this-month,
            last-month

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = date.today()

    if period == "today":
        return (today, today)

    if period == "yesterday":
        yesterday = today - timedelta(days=1)
        return (yesterday, yesterday)

    if period == "this-week":
        return (today - timedelta(days=today.weekday()), today)

    if period == "last-week":
        # Monday to Sunday of the previous week
        start_date = today - timedelta(days=today.weekday() + 7)
        return (start_date, start_date + timedelta(days=6))

    if period == "this-month":
        return (today.replace(day=1), today)

    if period == "last-month":
        start_date = (today - relativedelta(months=1)).replace(day=1)
        return (start_date, today.replace(day=1) - timedelta(days=1))

    raise ValueError(f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}")
