"""Date, time and zone recognizers tried in a fixed priority order.

Patterns overlap: ``Dec 25 2012`` satisfies both the month-day-year and the
month-day pattern, ``01/02/03`` is a numeric triad in any order. The first
pattern in each list that matches wins, so the order of the lists below is
part of the behaviour.

Every repeated construct runs over character classes that cannot overlap
with what follows it, which keeps matching free of catastrophic
backtracking on long inputs.
"""

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .models import FormatPreference, Span
from ...core.logging_manager import LoggingManager


logger = LoggingManager.get_logger(__name__)


MONTH = r"(?P<month>Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)[uarychilestmbro]*"
ORDINAL = r"(?:-?st|-?th|-?rd|-?nd)?"
OPTIONAL_COMMA = r"\s*(?:,\s*)?"

AMPM = r"AM|am|PM|pm"

# Zone abbreviations recognized per preference; CST/EST only for US ordering.
ZONES = {
    FormatPreference.DAY_FIRST: ("UTC", "GMT"),
    FormatPreference.MONTH_FIRST: ("UTC", "GMT", "CST", "EST"),
}

# Separators allowed between a found date and a time that follows it.
AFTER_DATE_PREFIX = r"(?:\s*,\s+|\s+|\s*at\s*|\s*[T\-]\s*)"

# Preceding context for a time searched in text without a date.
FREE_TIME_START = r"(?:^|(?<=[\sT]))"


@dataclass(frozen=True)
class PatternMatch:
    """A raw pattern hit: which pattern fired, its named groups and where."""
    kind: str
    groups: Dict[str, Optional[str]]
    span: Span

    def group(self, name: str) -> Optional[str]:
        return self.groups.get(name)


def _build_date_patterns() -> List[Dict[str, Any]]:
    """Build date recognizers in priority order.

    Returns:
        List of date pattern configurations
    """
    patterns = [
        {
            # 25/12/2012, 12.25.12, 1\2\2012
            "pattern": (
                r"(?<!\d)(?P<first>\d{1,2})\s*(?P<sep>[\\/.])+\s*(?P<second>\d{1,2})"
                r"\s*(?P=sep)+\s*(?P<year>\d{2}|\d{4})(?!\d)"
            ),
            "type": "numeric_triad",
        },
        {
            # 2012-12-25, 12-12-25
            "pattern": (
                r"(?<!\d)(?P<year>\d{2}|\d{4})\s*(?P<sep>-)\s*(?P<month>\d{1,2})"
                r"\s*(?P=sep)+\s*(?P<day>\d{1,2})(?!\d)"
            ),
            "type": "year_month_day_numeric",
        },
        {
            # Dec 25 2012, December 25th, 2012
            "pattern": (
                r"(?<![\d\w])" + MONTH + r"\s+(?P<day>\d{1,2})" + ORDINAL
                + OPTIONAL_COMMA + r"(?P<year>\d{4})(?![\d\w])"
            ),
            "type": "month_day_year",
        },
        {
            # 25 Dec 2012, 25th December '12, 25-Dec-12
            "pattern": (
                r"(?<![\w:])(?P<day>\d{1,2})(?:-?st\s+|-?th\s+|-?rd\s+|-?nd\s+|-|\s+)" + MONTH
                + r"(?:" + OPTIONAL_COMMA + r"|-)'?(?P<year>\d{2}|\d{4})(?![\d\w])"
            ),
            "type": "day_month_year",
        },
        {
            # 2012 Dec 25
            "pattern": (
                r"(?<![\d\w])(?P<year>\d{4})\s+" + MONTH + r"\s+(?P<day>\d{1,2})" + ORDINAL
                + r"(?![\d\w])"
            ),
            "type": "year_month_day",
        },
        {
            # Dec 25 14:30:00 UTC 2012 (log and `date` command output)
            "pattern": (
                r"(?<![\d\w])" + MONTH + r"\s+(?P<day>\d{1,2})\s+\d{2}:\d{2}:\d{2}"
                r"\s+(?:MDT|UTC)\s+(?P<year>\d{4})(?![\d\w])"
            ),
            "type": "log_timestamp",
        },
        {
            # Dec 25, Dec 25th, Dec 25 2012
            "pattern": (
                r"(?<![\d\w])" + MONTH + r"\s+(?P<day>\d{1,2})" + ORDINAL
                + r"(?:" + OPTIONAL_COMMA + r"(?P<year>\d{4}))?(?![\d\w])"
            ),
            "type": "month_day",
        },
    ]

    for config in patterns:
        config["regex"] = re.compile(config["pattern"], re.IGNORECASE)
    return patterns


def _clock_pattern(fmt: FormatPreference) -> str:
    """``h[h]:mm[:ss] [AM|PM] [ZONE]`` or ``h[h] AM|PM [ZONE]``."""
    zones = "|".join(ZONES[fmt])
    return (
        r"(?P<hour>\d{1,2})"
        r"(?:\s*:\s*(?P<minute>\d{2})(?:\s*:\s*(?P<second>\d{2}))?"
        r"(?:\s*(?P<ampm>" + AMPM + r"))?"
        r"|\s*(?P<ampm_bare>" + AMPM + r"))"
        r"(?:\s*(?P<zone>" + zones + r"))?"
    )


def _offset_pattern(minutes_required: bool) -> str:
    """``hh:mm:ss +HH[:]MM``."""
    minutes = r"(?P<offset_mm>\d{2})" if minutes_required else r"(?P<offset_mm>\d{2})?"
    return (
        r"(?P<hour>\d{2})\s*:\s*(?P<minute>\d{2})\s*:\s*(?P<second>\d{2})"
        r"\s+(?P<offset_sign>[+\-])(?P<offset_hh>\d{2}):?" + minutes
    )


def _build_time_patterns(fmt: FormatPreference) -> Dict[str, re.Pattern]:
    """Build the time recognizers used by :func:`find_time` for one preference.

    Returns:
        Mapping of search position to compiled pattern
    """
    clock = _clock_pattern(fmt)
    return {
        "offset_after_date": re.compile(
            AFTER_DATE_PREFIX + _offset_pattern(minutes_required=True) + r"(?![\d\w])"
        ),
        "clock_after_date": re.compile(AFTER_DATE_PREFIX + clock + r"(?![\d\w])"),
        "clock_near_date": re.compile(r"(?<!\d)" + clock + r"(?=$|[\s,])"),
        "offset_free": re.compile(
            FREE_TIME_START + _offset_pattern(minutes_required=False) + r"(?![\d\w])"
        ),
        "clock_free": re.compile(FREE_TIME_START + clock + r"(?![\d\w])"),
    }


DATE_PATTERNS = _build_date_patterns()

TIME_PATTERNS = {fmt: _build_time_patterns(fmt) for fmt in FormatPreference}


def find_date(text: str) -> Optional[PatternMatch]:
    """Return the first date pattern hit in ``text``, in priority order."""
    if not text:
        return None

    for config in DATE_PATTERNS:
        match = config["regex"].search(text)
        if match:
            logger.debug(f"Date pattern '{config['type']}' matched {match.group(0)!r}")
            return PatternMatch(
                kind=config["type"],
                groups=match.groupdict(),
                span=Span(match.start(), match.end() - match.start()),
            )

    return None


def find_time(
    text: str,
    fmt: FormatPreference,
    date_span: Optional[Span] = None
) -> Optional[PatternMatch]:
    """Return the first time pattern hit in ``text``.

    With a ``date_span`` the search looks right after the date, then
    anywhere before it, then inside it. Without one the whole text is
    searched. Returned spans always index into the full ``text``.

    Args:
        text: Source text
        fmt: Preference deciding which zone abbreviations are recognized
        date_span: Where a date was already found, if anywhere

    Returns:
        Pattern hit or None
    """
    if not text:
        return None

    patterns = TIME_PATTERNS[fmt]

    if date_span is None:
        for name in ("offset_free", "clock_free"):
            match = patterns[name].search(text)
            if match:
                return _time_match(name, match, base=0)
        return None

    # Directly after the date
    tail_start = date_span.end
    tail = text[tail_start:]
    for name in ("offset_after_date", "clock_after_date"):
        match = patterns[name].match(tail)
        if match:
            return _time_match(name, match, base=tail_start)

    # Before the date
    match = patterns["clock_near_date"].search(text[:date_span.start])
    if match:
        return _time_match("clock_before_date", match, base=0)

    # Inside the date (log timestamps embed the time)
    match = patterns["clock_near_date"].search(date_span.slice(text))
    if match:
        return _time_match("clock_within_date", match, base=date_span.start)

    return None


def _time_match(kind: str, match: re.Match, base: int) -> PatternMatch:
    """Build a PatternMatch whose span starts at the hour digits."""
    start = match.start("hour")
    logger.debug(f"Time pattern '{kind}' matched {match.string[start:match.end()]!r}")
    return PatternMatch(
        kind=kind,
        groups=match.groupdict(),
        span=Span(base + start, match.end() - start),
    )
