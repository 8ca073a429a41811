"""Calendar arithmetic helpers.

Pure functions: business days, financial years (July to June), ages, week
boundaries, Unix time and "time ago" phrasing.
"""

import calendar
from datetime import date, datetime, time, timedelta, timezone
from typing import List, Optional

from dateutil import relativedelta


EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# First month of the financial year
FINANCIAL_YEAR_START_MONTH = 7


def is_between(value: datetime, start: datetime, end: datetime, inclusive: bool = True) -> bool:
    if inclusive:
        return start <= value <= end
    return start < value < end


def financial_year_label(day: date) -> str:
    """``2012/2013`` for any date from 1 July 2012 to 30 June 2013."""
    start = financial_year_start(day)
    return f"{start.year}/{start.year + 1}"


def financial_year_start(day: date) -> date:
    year = day.year - (1 if day.month < FINANCIAL_YEAR_START_MONTH else 0)
    return date(year, FINANCIAL_YEAR_START_MONTH, 1)


def financial_year_end(day: date) -> date:
    return financial_year_start(day) + relativedelta.relativedelta(years=1, days=-1)


def end_of_day(moment: datetime) -> datetime:
    """Last whole second of the day ``moment`` falls on."""
    return datetime.combine(moment.date(), time(23, 59, 59), tzinfo=moment.tzinfo)


def calculate_age(date_of_birth: date, at_date: Optional[date] = None) -> int:
    """Whole years between ``date_of_birth`` and ``at_date`` (default today).

    A 29 February birthday is only reached on 1 March in common years.
    """
    at_date = at_date or date.today()
    if isinstance(at_date, datetime):
        at_date = at_date.date()
    if isinstance(date_of_birth, datetime):
        date_of_birth = date_of_birth.date()
    before_birthday = (at_date.month, at_date.day) < (date_of_birth.month, date_of_birth.day)
    return at_date.year - date_of_birth.year - before_birthday


def months_between(start: date, end: date) -> int:
    delta = relativedelta.relativedelta(end, start)
    return delta.years * 12 + delta.months


def add_business_days(start: date, days: int) -> date:
    """Move ``days`` weekdays forward (or backward when negative), skipping weekends."""
    step = 1 if days >= 0 else -1
    remaining = abs(days)
    current = start
    while remaining:
        current += timedelta(days=step)
        if current.weekday() < 5:
            remaining -= 1
    return current


def days_from_last_monday(day: date) -> int:
    """Offset to the previous Monday: -7 on a Monday, -1 on a Tuesday, -6 on a Sunday."""
    return -(day.weekday() or 7)


def weekdays_in_month(day: date) -> List[date]:
    """All Monday to Friday dates in the month containing ``day``."""
    _, days_in_month = calendar.monthrange(day.year, day.month)
    return [
        date(day.year, day.month, d)
        for d in range(1, days_in_month + 1)
        if date(day.year, day.month, d).weekday() < 5
    ]


def start_of_week(day: date, first_weekday: int = calendar.MONDAY) -> date:
    if isinstance(day, datetime):
        day = day.date()
    diff = (day.weekday() - first_weekday) % 7
    return day - timedelta(days=diff)


def from_unix_time(seconds: float) -> datetime:
    return EPOCH + timedelta(seconds=seconds)


def to_unix_time(moment: datetime) -> int:
    """Whole seconds since the epoch; naive datetimes are taken as UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return int((moment - EPOCH).total_seconds())


def relative_format(moment: datetime, now: Optional[datetime] = None,
                    default_format: str = "%Y-%m-%d %H:%M:%S") -> str:
    """English "time ago" text for past moments, ``default_format`` otherwise.

    Args:
        moment: The moment to describe (UTC when naive)
        now: Reference moment (defaults to the current UTC time)
        default_format: strftime format used for moments not in the past

    Returns:
        Text such as ``"5 minutes ago"`` or ``"yesterday"``
    """
    if now is None:
        now = datetime.now(timezone.utc)
        if moment.tzinfo is None:
            now = now.replace(tzinfo=None)

    delta = now - moment
    seconds = delta.total_seconds()

    if seconds <= 0:
        return moment.strftime(default_format)
    if seconds < 60:
        whole = int(seconds)
        return "one second ago" if whole == 1 else f"{whole} seconds ago"
    if seconds < 120:
        return "a minute ago"
    if seconds < 45 * 60:
        return f"{int(seconds // 60)} minutes ago"
    if seconds < 90 * 60:
        return "an hour ago"
    if seconds < 24 * 3600:
        return f"{max(2, int(seconds // 3600))} hours ago"
    if seconds < 48 * 3600:
        return "yesterday"
    if seconds < 30 * 86400:
        return f"{delta.days} days ago"
    if seconds < 360 * 86400:
        months = delta.days // 30
        return "one month ago" if months <= 1 else f"{months} months ago"

    years = delta.days // 365
    return "one year ago" if years <= 1 else f"{years} years ago"
