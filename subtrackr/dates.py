"""Date utilities for subtrackr.

Pure functions for calendar arithmetic and date range calculations.
Month and year shifts clamp the day to the last valid day of the target
month (Jan 31 + 1 month is Feb 28, or Feb 29 in leap years).
"""

import calendar
from datetime import datetime, timedelta

import pandas as pd


def days_in_month(year: int, month: int) -> int:
    """Return the number of days in a calendar month."""
    return calendar.monthrange(year, month)[1]


def shift_months(moment: datetime, months: int, day: int | None = None) -> datetime:
    """Move a datetime by whole calendar months, keeping the time of day.

    Args:
        moment: Starting point.
        months: Number of months to move (may be negative).
        day: Day of month to land on. If None, uses moment's day.

    Returns:
        Shifted datetime, with the day clamped to the target month's length.
    """
    index = moment.year * 12 + (moment.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    target_day = min(day if day is not None else moment.day, days_in_month(year, month))
    return moment.replace(year=year, month=month, day=target_day)


def shift_years(moment: datetime, years: int, month: int | None = None, day: int | None = None) -> datetime:
    """Move a datetime by whole years, keeping the time of day.

    Args:
        moment: Starting point.
        years: Number of years to move (may be negative).
        month: Month to land on. If None, uses moment's month.
        day: Day of month to land on. If None, uses moment's day.

    Returns:
        Shifted datetime, with the day clamped (Feb 29 becomes Feb 28 in non-leap years).
    """
    year = moment.year + years
    target_month = month if month is not None else moment.month
    target_day = min(day if day is not None else moment.day, days_in_month(year, target_month))
    return moment.replace(year=year, month=target_month, day=target_day)


def start_of_day(moment: datetime) -> datetime:
    """Return midnight of moment's day."""
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def week_range(moment: datetime) -> tuple[datetime, datetime]:
    """Calculate the calendar week containing moment.

    Weeks start on Sunday.

    Args:
        moment: Any point in the week.

    Returns:
        Tuple of (start, end) where start is Sunday midnight and end is the
        following Sunday midnight (exclusive).
    """
    # Python weekdays run Monday=0 .. Sunday=6
    days_since_sunday = (moment.weekday() + 1) % 7
    start = start_of_day(moment) - timedelta(days=days_since_sunday)
    return start, start + timedelta(days=7)


def month_range(moment: datetime) -> tuple[datetime, datetime, str]:
    """Calculate the calendar month containing moment.

    Args:
        moment: Any point in the month.

    Returns:
        Tuple of (start, end, label) where:
        - start: Midnight on the first day of the month
        - end: Midnight on the first day of the next month (exclusive)
        - label: Human-readable month (e.g., "January 2025")
    """
    start = start_of_day(moment).replace(day=1)
    end = shift_months(start, 1)
    return start, end, start.strftime("%B %Y")


def parse_date(raw_date: str) -> datetime:
    """Parse a user-entered date.

    ISO dates are read directly. Anything else goes through pandas.to_datetime
    so European and other common formats are accepted, read day-first.

    Args:
        raw_date: Date text (e.g. "2025-03-15", "15/03/2025").

    Returns:
        Naive datetime.

    Raises:
        ValueError: If the text cannot be parsed.
    """
    try:
        return datetime.fromisoformat(raw_date.strip()).replace(tzinfo=None)
    except ValueError:
        pass

    try:
        parsed = pd.to_datetime(raw_date, dayfirst=True)
    except (ValueError, pd.errors.ParserError) as e:
        raise ValueError(f"Could not parse date '{raw_date}': {e}") from e

    if pd.isna(parsed):
        raise ValueError(f"Could not parse date '{raw_date}'")

    return parsed.to_pydatetime().replace(tzinfo=None)
