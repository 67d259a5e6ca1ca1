"""
Named reporting periods resolved to inclusive calendar-date ranges.

All arithmetic is on local calendar dates; weeks run Monday to Sunday.
Bounds are ISO ``YYYY-MM-DD`` strings so they compare lexicographically.
"""

import calendar
import enum
import re
from datetime import date, timedelta
from typing import NamedTuple, Optional, Union


class DatePeriod(str, enum.Enum):
    ALL = "all"
    TODAY = "today"
    YESTERDAY = "yesterday"
    THIS_WEEK = "this_week"
    LAST_WEEK = "last_week"
    THIS_MONTH = "this_month"
    LAST_MONTH = "last_month"
    CUSTOM = "custom"
    MONTH_YEAR = "month_year"


class DateRange(NamedTuple):
    start: str
    end: str


MONTH_YEAR_RE = re.compile(r"^(\d{4})-(\d{1,2})$")


def fmt(d: date) -> str:
    return d.isoformat()


def month_bounds(year: int, month: int) -> DateRange:
    last_day = calendar.monthrange(year, month)[1]
    return DateRange(fmt(date(year, month, 1)), fmt(date(year, month, last_day)))


def week_start(d: date) -> date:
    # date.weekday(): Monday == 0
    return d - timedelta(days=d.weekday())


def get_date_range(
    period: Union[DatePeriod, str],
    custom_from: Optional[str] = "",
    custom_to: Optional[str] = "",
    month_year: Optional[str] = "",
    today: Optional[date] = None,
) -> Optional[DateRange]:
    """Resolve ``period`` to an inclusive range, or None for no filtering"""
    try:
        period = DatePeriod(period)
    except ValueError:
        return None

    if period is DatePeriod.ALL:
        return None

    if period is DatePeriod.CUSTOM:
        if custom_from and custom_to:
            return DateRange(custom_from, custom_to)
        if custom_from:
            return DateRange(custom_from, custom_from)
        return None

    if period is DatePeriod.MONTH_YEAR:
        match = MONTH_YEAR_RE.match((month_year or "").strip())
        if not match:
            return None
        year, month = int(match.group(1)), int(match.group(2))
        if not 1 <= month <= 12:
            return None
        return month_bounds(year, month)

    today = today or date.today()

    if period is DatePeriod.TODAY:
        return DateRange(fmt(today), fmt(today))

    if period is DatePeriod.YESTERDAY:
        y = today - timedelta(days=1)
        return DateRange(fmt(y), fmt(y))

    if period is DatePeriod.THIS_WEEK:
        monday = week_start(today)
        return DateRange(fmt(monday), fmt(monday + timedelta(days=6)))

    if period is DatePeriod.LAST_WEEK:
        last_monday = week_start(today) - timedelta(days=7)
        return DateRange(fmt(last_monday), fmt(last_monday + timedelta(days=6)))

    if period is DatePeriod.THIS_MONTH:
        return month_bounds(today.year, today.month)

    if period is DatePeriod.LAST_MONTH:
        first_of_this = today.replace(day=1)
        prev = first_of_this - timedelta(days=1)
        return month_bounds(prev.year, prev.month)

    return None


def is_date_in_range(value, date_range: Optional[DateRange]) -> bool:
    """Check a date, datetime or ISO string against an inclusive range"""
    if date_range is None:
        return True
    if not value:
        return False
    text = value.isoformat() if hasattr(value, "isoformat") else str(value)
    day = text[:10]
    return date_range.start <= day <= date_range.end
