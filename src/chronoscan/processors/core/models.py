"""Result and configuration types shared by the extraction engine."""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any, Dict, NamedTuple, Optional

from dateutil.tz import tzoffset


# Offset reported when no offset was found; outside any real UTC offset.
UTC_OFFSET_NOT_FOUND = timedelta(hours=25)

# UTC datetime reported when no offset was found.
DATETIME_UNDEFINED = datetime.min

# Offsets at or beyond this magnitude are not treated as found.
MAX_UTC_OFFSET = timedelta(hours=12)


class FormatPreference(Enum):
    """Ordering used for ambiguous numeric dates such as 01/02/2012."""
    DAY_FIRST = "day_first"        # 01/02/2012 -> 1 February
    MONTH_FIRST = "month_first"    # 01/02/2012 -> 2 January, enables CST/EST


class Span(NamedTuple):
    """Location of a matched substring within the source text."""
    start: int
    length: int

    @property
    def end(self) -> int:
        return self.start + self.length

    def slice(self, text: str) -> str:
        return text[self.start:self.end]


@dataclass(frozen=True)
class DefaultDateConfig:
    """Fallback date used when only a time is found or a year is missing."""
    default_date: date = field(default_factory=date.today)
    use_current_date: bool = True

    def resolve(self) -> date:
        """Return the date that should be used as the default right now."""
        if self.use_current_date:
            return date.today()
        return self.default_date

    @classmethod
    def fixed(cls, default_date: date) -> 'DefaultDateConfig':
        """Build a configuration that always resolves to ``default_date``."""
        return cls(default_date=default_date, use_current_date=False)


@dataclass(frozen=True)
class ParsedResult:
    """Everything one parse attempt found, with positions in the source text.

    ``local_datetime`` is always populated. The side that was not found
    contributes zero values: midnight when no time was found, and either the
    default date or 0001-01-01 when no date was found. ``utc_datetime`` is
    only meaningful when ``utc_offset_found`` is true; otherwise it holds
    :data:`DATETIME_UNDEFINED` and ``utc_offset`` holds
    :data:`UTC_OFFSET_NOT_FOUND`.
    """
    local_datetime: datetime
    date_span: Optional[Span] = None
    time_span: Optional[Span] = None
    utc_offset: timedelta = UTC_OFFSET_NOT_FOUND
    utc_offset_found: bool = False
    utc_datetime: datetime = DATETIME_UNDEFINED

    def __post_init__(self):
        if self.date_span is None and self.time_span is None:
            raise ValueError("ParsedResult requires a date span or a time span")

    @property
    def date_found(self) -> bool:
        return self.date_span is not None

    @property
    def time_found(self) -> bool:
        return self.time_span is not None

    @property
    def aware_datetime(self) -> Optional[datetime]:
        """``local_datetime`` carrying the found offset as tzinfo, if any."""
        if not self.utc_offset_found:
            return None
        return self.local_datetime.replace(
            tzinfo=tzoffset(None, int(self.utc_offset.total_seconds()))
        )

    def date_text(self, source: str) -> Optional[str]:
        """Return the substring of ``source`` the date was read from."""
        return self.date_span.slice(source) if self.date_span else None

    def time_text(self, source: str) -> Optional[str]:
        """Return the substring of ``source`` the time was read from."""
        return self.time_span.slice(source) if self.time_span else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'local_datetime': self.local_datetime.isoformat(),
            'date_found': self.date_found,
            'date_span': list(self.date_span) if self.date_span else None,
            'time_found': self.time_found,
            'time_span': list(self.time_span) if self.time_span else None,
            'utc_offset_found': self.utc_offset_found,
            'utc_offset_seconds': int(self.utc_offset.total_seconds()) if self.utc_offset_found else None,
            'utc_datetime': self.utc_datetime.isoformat() if self.utc_offset_found else None,
        }
