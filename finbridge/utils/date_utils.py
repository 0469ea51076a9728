"""Date manipulation utilities"""

import calendar
from datetime import date, datetime, timedelta, timezone

EPOCH = date(1970, 1, 1)


def months_before(from_date: date, months: int) -> date:
    """Same calendar day `months` months earlier, clamped to the end of shorter months"""
    month_index = from_date.year * 12 + (from_date.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(from_date.day, last_day))


def days_before(from_date: date, days: int) -> date:
    return from_date - timedelta(days=days)


def week_index(day: date) -> int:
    """Number of whole weeks between the Unix epoch and `day`"""
    return (day - EPOCH).days // 7


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
