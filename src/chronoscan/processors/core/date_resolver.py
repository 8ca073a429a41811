"""Turns a matched date token into a calendar date.

All failures (unknown month, rejected year, impossible day) come back as
``None`` so the caller cannot tell them apart from a pattern that did not
match at all.
"""

from datetime import date
from typing import Optional

from .models import DefaultDateConfig, FormatPreference
from .patterns import PatternMatch
from ...core.logging_manager import LoggingManager


logger = LoggingManager.get_logger(__name__)


MONTHS = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "may": 5, "jun": 6,
    "jul": 7, "aug": 8, "sep": 9, "oct": 10, "nov": 11, "dec": 12,
}

# Two-digit years above the pivot belong to the 1900s, the rest to the 2000s.
YEAR_PIVOT = 30


def expand_year(year: int) -> Optional[int]:
    """Apply two-digit-year windowing.

    ``99`` -> 1999, ``31`` -> 1931, ``30`` -> 2030, ``5`` -> 2005. Years from
    100 to 999 are neither two-digit nor four-digit and are rejected.
    """
    if year >= 1000:
        return year
    if year >= 100:
        return None
    if year > YEAR_PIVOT:
        return 1900 + year
    return 2000 + year


def month_from_name(token: Optional[str]) -> Optional[int]:
    if not token:
        return None
    return MONTHS.get(token[:3].lower())


def order_numeric(first: int, second: int, fmt: FormatPreference):
    """Return ``(month, day)`` for the two leading numbers of a numeric triad."""
    if fmt is FormatPreference.MONTH_FIRST:
        return first, second
    return second, first


def to_date(year: int, month: int, day: int) -> Optional[date]:
    """Build a date after windowing the year; ``None`` if it does not exist."""
    full_year = expand_year(year)
    if full_year is None:
        logger.debug(f"Rejected year {year}: not a two- or four-digit year")
        return None

    try:
        return date(full_year, month, day)
    except ValueError as e:
        logger.debug(f"Rejected date {full_year}-{month}-{day}: {e}")
        return None


def resolve_date(
    match: PatternMatch,
    fmt: FormatPreference,
    defaults: DefaultDateConfig
) -> Optional[date]:
    """Resolve a date pattern hit into a calendar date.

    Args:
        match: Hit returned by :func:`patterns.find_date`
        fmt: Ordering for numeric triads
        defaults: Supplies the year for month-day dates without one

    Returns:
        The date, or None when the components do not form a real date
    """
    if match.kind == "numeric_triad":
        month, day = order_numeric(int(match.group("first")), int(match.group("second")), fmt)
        return to_date(int(match.group("year")), month, day)

    if match.kind == "year_month_day_numeric":
        return to_date(int(match.group("year")), int(match.group("month")), int(match.group("day")))

    month = month_from_name(match.group("month"))
    if month is None:
        return None

    year_token = match.group("year")
    year = int(year_token) if year_token else defaults.resolve().year

    return to_date(year, month, int(match.group("day")))
