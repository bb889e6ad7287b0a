"""
Date helper utilities.
"""
from datetime import date, datetime, timedelta, timezone
from typing import Optional, Tuple, Union

from orange_sugar_inventory.config.app_config import BUSINESS_UTC_OFFSET_MINUTES

BUSINESS_TIMEZONE = timezone(timedelta(minutes=BUSINESS_UTC_OFFSET_MINUTES))


def to_date(value: Union[str, date, datetime]) -> date:
    """
    Coerce a YYYY-MM-DD string, date or datetime to a date.

    Args:
        value: The value to convert

    Returns:
        date: The calendar date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(value, '%Y-%m-%d').date()


def business_today() -> date:
    """
    Get today's date in the business timezone.
    """
    return datetime.now(BUSINESS_TIMEZONE).date()


def days_since(value: Union[str, date, datetime], today: Optional[date] = None) -> int:
    """
    Count whole days between a date and today.

    Args:
        value: The earlier date
        today (Optional[date]): Reference date (default: business today)

    Returns:
        int: Number of days, negative for future dates
    """
    today = today or business_today()
    return (today - to_date(value)).days


def business_day_bounds(day: Union[str, date]) -> Tuple[datetime, datetime]:
    """
    Get the UTC start and end of a calendar day in the business timezone.

    Args:
        day: The calendar day (YYYY-MM-DD or date)

    Returns:
        Tuple[datetime, datetime]: UTC start (inclusive) and end (exclusive)
    """
    start_local = datetime.combine(to_date(day), datetime.min.time(), tzinfo=BUSINESS_TIMEZONE)
    start_utc = start_local.astimezone(timezone.utc)
    return start_utc, start_utc + timedelta(days=1)


def utc_now() -> datetime:
    """
    Get the current time in UTC.
    """
    return datetime.now(timezone.utc)
